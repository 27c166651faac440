"""/api/pieces — the pool of lengths waiting to be cut."""
from __future__ import annotations

import logging

from fastapi import APIRouter

from ..models.cutting import PieceSchema
from ..models.requests import AddPiecesRequest
from ..services import workbench

router = APIRouter(prefix="/api")
logger = logging.getLogger(__name__)


@router.get("/pieces", response_model=list[PieceSchema])
def list_pieces(include_excluded: bool = False) -> list[dict]:
    return [p.to_dict() for p in workbench.current().list_pieces(include_excluded)]


@router.post("/pieces", response_model=list[PieceSchema], status_code=201)
def add_pieces(req: AddPiecesRequest) -> list[dict]:
    added = workbench.current().add_pieces(req.length, req.quantity)
    return [p.to_dict() for p in added]


@router.delete("/pieces/{piece_id}", response_model=PieceSchema)
def remove_piece(piece_id: int) -> dict:
    """Only pieces still in play can be removed."""
    return workbench.current().remove_piece(piece_id).to_dict()
