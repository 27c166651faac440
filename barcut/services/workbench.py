"""
Workbench — one inventory, one bar on the saw and the saved lines.

This is what the HTTP layer talks to. A process holds a single workbench
(`current()`); calls are serialized with a lock because sync FastAPI routes
run on a thread pool.
"""
from __future__ import annotations

import logging
import threading
from typing import Optional

from . import planner
from .cut_session import CutSession, SessionSummary
from .errors import IllegalState, InvalidArgument
from .inventory import Piece, PieceInventory
from .line_recorder import LineRecorder, SavedLine

logger = logging.getLogger(__name__)


class Workbench:
    def __init__(self, min_residue: float = planner.MIN_RESIDUE, strict: Optional[bool] = None):
        if min_residue < 0:
            raise InvalidArgument(f"Scrap threshold cannot be negative, got {min_residue}")
        self.min_residue = min_residue
        self.inventory = PieceInventory()
        self.session = (CutSession(self.inventory) if strict is None
                        else CutSession(self.inventory, strict=strict))
        self.recorder = LineRecorder()
        self._lock = threading.Lock()

    # ------------------------------------------------------------------ #
    # Inventory                                                            #
    # ------------------------------------------------------------------ #

    def add_pieces(self, length: float, quantity: int = 1) -> list[Piece]:
        with self._lock:
            return self.inventory.add(length, quantity)

    def remove_piece(self, piece_id: int) -> Piece:
        with self._lock:
            return self.inventory.remove(piece_id)

    def list_pieces(self, include_excluded: bool = False) -> list[Piece]:
        with self._lock:
            return self.inventory.pieces(include_excluded)

    # ------------------------------------------------------------------ #
    # Cutting                                                              #
    # ------------------------------------------------------------------ #

    def start(self, stock_length: float, first_piece_id: int) -> SessionSummary:
        with self._lock:
            self.session.start(stock_length, first_piece_id)
            if self.session.remaining < self.min_residue:
                logger.info(f"Scrap {self.session.remaining} m is below "
                            f"{self.min_residue} m; bar is finished")
            return self.session.summary()

    def step(self) -> planner.PlanDecision:
        with self._lock:
            self._require_started()
            return planner.plan_step(self.session, self.min_residue)

    def auto_plan(self, max_steps: Optional[int] = None) -> list[planner.PlanDecision]:
        if max_steps is not None and max_steps <= 0:
            raise InvalidArgument(f"max_steps must be positive, got {max_steps}")
        with self._lock:
            self._require_started()
            return planner.auto_plan(self.session, self.min_residue, max_steps)

    def summary(self) -> dict:
        with self._lock:
            result = self.session.summary().to_dict()
            result["terminated"] = (self.session.started
                                    and self.session.is_terminated(self.min_residue))
            result["min_residue"] = self.min_residue
            return result

    def _require_started(self) -> None:
        if not self.session.started:
            raise IllegalState("No bar is being cut; start one with a stock length and a first piece")

    # ------------------------------------------------------------------ #
    # Saved lines                                                          #
    # ------------------------------------------------------------------ #

    def save_line(self) -> SavedLine:
        with self._lock:
            return self.recorder.save(self.session)

    def saved_lines(self) -> tuple[SavedLine, ...]:
        with self._lock:
            return self.recorder.lines

    def totals(self) -> dict:
        with self._lock:
            return self.recorder.totals()

    def reset(self) -> None:
        """Drop every piece, saved line and the bar in progress."""
        with self._lock:
            self.inventory.clear()
            self.recorder.clear()
            self.session.clear()
        logger.info("Workbench reset")


_current = Workbench()


def current() -> Workbench:
    return _current
