"""
Line Recorder — archives a finished bar as an immutable saved line.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass

from .cut_session import ROUND_DIGITS, CutSession
from .errors import IllegalState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SavedLine:
    original: float
    cuts: tuple[float, ...]
    residue: float

    @classmethod
    def from_cuts(cls, original: float, cuts) -> "SavedLine":
        cuts = tuple(cuts)
        return cls(original=original, cuts=cuts, residue=max(0.0, original - sum(cuts)))

    def to_dict(self) -> dict:
        return {"original": self.original, "cuts": list(self.cuts), "residue": self.residue}


class LineRecorder:
    def __init__(self) -> None:
        self._lines: list[SavedLine] = []

    @property
    def lines(self) -> tuple[SavedLine, ...]:
        return tuple(self._lines)

    def save(self, session: CutSession) -> SavedLine:
        if session.original_length <= 0 or not session.started:
            raise IllegalState("No cuts to save; start a bar first")

        line = SavedLine.from_cuts(session.original_length, session.applied_cuts)
        self._lines.append(line)
        session.clear()
        logger.info(f"Saved line #{len(self._lines)}: {line.original} m, "
                    f"{len(line.cuts)} cut(s), residue {line.residue:.{ROUND_DIGITS}f} m")
        return line

    def totals(self) -> dict:
        stock = sum(line.original for line in self._lines)
        residue = sum(line.residue for line in self._lines)
        return {
            "lines": len(self._lines),
            "total_stock": round(stock, ROUND_DIGITS),
            "total_cut": round(sum(sum(line.cuts) for line in self._lines), ROUND_DIGITS),
            "total_residue": round(residue, ROUND_DIGITS),
        }

    def clear(self) -> None:
        self._lines.clear()
