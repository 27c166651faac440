from pydantic import BaseModel, Field
from typing import Optional


class AddPiecesRequest(BaseModel):
    length: float = Field(gt=0, allow_inf_nan=False, description="Piece length in meters")
    quantity: int = Field(default=1, ge=1, le=999)


class StartSessionRequest(BaseModel):
    stock_length: float = Field(gt=0, allow_inf_nan=False, description="Raw bar length in meters")
    piece_id: int


class AutoPlanRequest(BaseModel):
    max_steps: Optional[int] = Field(default=None, ge=1)
