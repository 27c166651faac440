"""
Piece Inventory — the pool of candidate lengths waiting to be cut.

A single id → Piece mapping is the source of truth. Anything sorted or
filtered (the table listing, the planner's candidate list) is derived from it
on demand.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator

from .errors import IllegalState, InvalidArgument, NotFound

logger = logging.getLogger(__name__)


class PieceStatus(str, Enum):
    IN_PLAY = "in_play"
    USED = "used"
    EXCLUDED = "excluded"


@dataclass
class Piece:
    id: int
    length: float          # meters
    status: PieceStatus = PieceStatus.IN_PLAY

    @property
    def in_play(self) -> bool:
        return self.status is PieceStatus.IN_PLAY

    def to_dict(self) -> dict:
        return {"id": self.id, "length": self.length, "status": self.status.value}


class _Candidates:
    """Restartable view: every iteration re-reads the inventory."""

    def __init__(self, pieces: dict[int, Piece], limit: float):
        self._pieces = pieces
        self._limit = limit

    def __iter__(self) -> Iterator[Piece]:
        return (p for p in self._pieces.values()
                if p.in_play and p.length <= self._limit)


class PieceInventory:
    def __init__(self) -> None:
        self._pieces: dict[int, Piece] = {}
        self._next_id = 1

    def __len__(self) -> int:
        return len(self._pieces)

    # ------------------------------------------------------------------ #
    # Mutation                                                             #
    # ------------------------------------------------------------------ #

    def add(self, length: float, quantity: int = 1) -> list[Piece]:
        if not math.isfinite(length) or length <= 0:
            raise InvalidArgument(f"Piece length must be a positive number, got {length}")
        if quantity <= 0:
            raise InvalidArgument(f"Quantity must be positive, got {quantity}")

        added: list[Piece] = []
        for _ in range(quantity):
            piece = Piece(id=self._next_id, length=float(length))
            self._pieces[piece.id] = piece
            self._next_id += 1
            added.append(piece)
        logger.info(f"Added {quantity}× {length} m (ids {added[0].id}–{added[-1].id})")
        return added

    def remove(self, piece_id: int) -> Piece:
        """Exclude an InPlay piece; cut pieces cannot be taken back."""
        piece = self.get(piece_id)
        if not piece.in_play:
            raise IllegalState(
                f"Piece {piece_id} is {piece.status.value}; only in-play pieces can be removed")
        piece.status = PieceStatus.EXCLUDED
        logger.info(f"Removed piece {piece_id} ({piece.length} m)")
        return piece

    def mark_used(self, piece_id: int) -> Piece:
        piece = self.get(piece_id)
        if not piece.in_play:
            raise IllegalState(f"Piece {piece_id} is {piece.status.value}, not in play")
        piece.status = PieceStatus.USED
        return piece

    def clear(self) -> None:
        self._pieces.clear()
        self._next_id = 1

    # ------------------------------------------------------------------ #
    # Queries                                                              #
    # ------------------------------------------------------------------ #

    def get(self, piece_id: int) -> Piece:
        try:
            return self._pieces[piece_id]
        except KeyError:
            raise NotFound(f"No piece with id {piece_id}") from None

    def candidates_at_most(self, limit: float) -> Iterable[Piece]:
        """In-play pieces no longer than `limit`, in no particular order."""
        return _Candidates(self._pieces, limit)

    def any_fits(self, limit: float) -> bool:
        return any(True for _ in self.candidates_at_most(limit))

    def pieces(self, include_excluded: bool = False) -> list[Piece]:
        """Longest first, the way the cutting table lists them."""
        items = [p for p in self._pieces.values()
                 if include_excluded or p.status is not PieceStatus.EXCLUDED]
        return sorted(items, key=lambda p: (-p.length, p.id))
