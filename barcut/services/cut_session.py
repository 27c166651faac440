"""
Cut Session — the one bar currently on the saw.

Invariant: remaining == original_length - sum(applied_cuts), rounded to six
decimals after every cut so float drift never accumulates.
"""
from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass

from .errors import IllegalState, InvalidArgument, Overrun, Oversize
from .inventory import Piece, PieceInventory

logger = logging.getLogger(__name__)

STRICT_CUTS = os.environ.get("BARCUT_STRICT_CUTS", "1").lower() not in ("0", "false", "no")
ROUND_DIGITS = 6
OVERRUN_TOLERANCE = 1e-6  # one unit of the rounding precision


@dataclass(frozen=True)
class SessionSummary:
    original_length: float
    remaining: float
    applied_cuts: tuple[float, ...]

    @property
    def started(self) -> bool:
        return len(self.applied_cuts) > 0

    def to_dict(self) -> dict:
        return {
            "original_length": self.original_length,
            "remaining": self.remaining,
            "applied_cuts": list(self.applied_cuts),
            "started": self.started,
        }


class CutSession:
    def __init__(self, inventory: PieceInventory, strict: bool = STRICT_CUTS):
        self.inventory = inventory
        self.strict = strict
        self.original_length = 0.0
        self.remaining = 0.0
        self._cuts: list[float] = []

    @property
    def applied_cuts(self) -> tuple[float, ...]:
        return tuple(self._cuts)

    @property
    def started(self) -> bool:
        return bool(self._cuts)

    def start(self, stock_length: float, first_piece_id: int) -> float:
        """Open a bar and cut the chosen first piece from it."""
        if not math.isfinite(stock_length) or stock_length <= 0:
            raise InvalidArgument(f"Stock length must be a positive number, got {stock_length}")
        if self.started:
            raise IllegalState("A bar is already being cut; save it before starting another")
        piece = self.inventory.get(first_piece_id)
        if not piece.in_play:
            raise IllegalState(f"Piece {first_piece_id} is {piece.status.value}, not in play")
        if piece.length > stock_length:
            raise Oversize(
                f"Piece {first_piece_id} ({piece.length} m) is longer than the "
                f"stock bar ({stock_length} m)")

        self.original_length = float(stock_length)
        self.remaining = float(stock_length)
        logger.info(f"Started bar of {stock_length} m with piece {piece.id} ({piece.length} m)")
        self._cut(piece)
        return self.remaining

    def apply_cut(self, piece_id: int) -> float:
        piece = self.inventory.get(piece_id)
        if not piece.in_play:
            raise IllegalState(f"Piece {piece_id} is {piece.status.value}, not in play")
        if piece.length - self.remaining > OVERRUN_TOLERANCE:
            if self.strict:
                raise Overrun(
                    f"Piece {piece_id} ({piece.length} m) exceeds the remaining "
                    f"{self.remaining} m")
            logger.warning(
                f"Piece {piece_id} ({piece.length} m) overruns remaining "
                f"{self.remaining} m; clamping at 0")
        self._cut(piece)
        return self.remaining

    def _cut(self, piece: Piece) -> None:
        self.inventory.mark_used(piece.id)
        self._cuts.append(piece.length)
        # remaining == original_length - sum(cuts), rounded once per cut
        self.remaining = round(
            max(0.0, self.original_length - math.fsum(self._cuts)), ROUND_DIGITS)
        logger.debug(f"Cut {piece.length} m (piece {piece.id}), {self.remaining} m left")

    def is_terminated(self, min_residue: float) -> bool:
        if self.remaining <= 0 or self.remaining < min_residue:
            return True
        return not self.inventory.any_fits(self.remaining)

    def summary(self) -> SessionSummary:
        return SessionSummary(
            original_length=self.original_length,
            remaining=self.remaining,
            applied_cuts=self.applied_cuts,
        )

    def clear(self) -> None:
        self.original_length = 0.0
        self.remaining = 0.0
        self._cuts.clear()
