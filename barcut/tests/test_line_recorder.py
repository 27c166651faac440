"""Unit tests for line_recorder.py — archiving finished bars."""
import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

import dataclasses

import pytest

from barcut.services.cut_session import CutSession
from barcut.services.errors import IllegalState
from barcut.services.inventory import PieceInventory
from barcut.services.line_recorder import LineRecorder, SavedLine


def _cut_bar(stock: float, *lengths: float) -> CutSession:
    inv = PieceInventory()
    for length in lengths:
        inv.add(length, 1)
    session = CutSession(inv)
    session.start(stock, 1)
    for piece_id in range(2, len(lengths) + 1):
        session.apply_cut(piece_id)
    return session


class TestSave:
    def test_empty_session_rejected(self):
        recorder = LineRecorder()
        with pytest.raises(IllegalState):
            recorder.save(CutSession(PieceInventory()))
        assert recorder.lines == ()

    def test_saves_and_resets_session(self):
        recorder = LineRecorder()
        session = _cut_bar(6.0, 2.5, 1.5, 1.2)
        line = recorder.save(session)
        assert line.original == 6.0
        assert line.cuts == (2.5, 1.5, 1.2)
        assert line.residue == pytest.approx(0.8)
        assert recorder.lines == (line,)
        assert session.original_length == 0.0
        assert session.remaining == 0.0
        assert session.applied_cuts == ()

    def test_saved_cuts_not_aliased(self):
        recorder = LineRecorder()
        session = _cut_bar(6.0, 2.0, 1.0)
        line = recorder.save(session)
        session.inventory.add(3.0, 1)
        session.start(6.0, 3)
        assert line.cuts == (2.0, 1.0)

    def test_residue_formula(self):
        session = _cut_bar(3.0, 0.7, 0.7, 0.7)
        line = LineRecorder().save(session)
        assert line.residue == max(0.0, 3.0 - sum((0.7, 0.7, 0.7)))

    def test_saved_line_is_immutable(self):
        line = SavedLine.from_cuts(6.0, [1.0])
        with pytest.raises(dataclasses.FrozenInstanceError):
            line.residue = 0.0

    def test_residue_never_negative(self):
        assert SavedLine.from_cuts(1.0, [0.6, 0.6]).residue == 0.0


class TestTotals:
    def test_totals(self):
        recorder = LineRecorder()
        recorder.save(_cut_bar(6.0, 2.5, 3.0))
        recorder.save(_cut_bar(4.0, 3.5))
        assert recorder.totals() == {
            "lines": 2,
            "total_stock": 10.0,
            "total_cut": 9.0,
            "total_residue": 1.0,
        }

    def test_clear(self):
        recorder = LineRecorder()
        recorder.save(_cut_bar(6.0, 2.5))
        recorder.clear()
        assert recorder.lines == ()
        assert recorder.totals()["lines"] == 0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
