from pydantic import BaseModel
from typing import Optional


class PieceSchema(BaseModel):
    id: int
    length: float
    status: str


class SessionSchema(BaseModel):
    original_length: float
    remaining: float
    applied_cuts: list[float] = []
    started: bool = False
    terminated: bool = False
    min_residue: float


class DecisionSchema(BaseModel):
    kind: str
    piece_ids: list[int] = []
    lengths: list[float] = []
    residue: float
    reason: Optional[str] = None
    tie: bool = False


class PlanResultSchema(BaseModel):
    decisions: list[DecisionSchema]
    session: SessionSchema


class SavedLineSchema(BaseModel):
    original: float
    cuts: list[float]
    residue: float


class TotalsSchema(BaseModel):
    lines: int
    total_stock: float
    total_cut: float
    total_residue: float


class SavedLinesSchema(BaseModel):
    lines: list[SavedLineSchema]
    totals: TotalsSchema
