"""
Greedy Planner — decides what to cut next from the bar on the saw.

Each step compares the best single piece against the best pair of pieces that
still fit in the remaining length and takes whichever leaves less scrap. On an
exact tie the single cut wins. Nothing is ever undone, so the plan is locally
greedy rather than globally optimal.

The decision itself (`choose_next_cut`) is a pure function of the remaining
length and the candidate pieces; `plan_step` is the only place it gets applied.
"""
from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

from .cut_session import ROUND_DIGITS, CutSession
from .inventory import Piece

logger = logging.getLogger(__name__)

MIN_RESIDUE = float(os.environ.get("BARCUT_MIN_RESIDUE", "0.40"))  # meters

# Absolute tolerance for "this pair fills the bar exactly". Being absolute, it
# gets too strict for very large lengths; acceptable at bar scale (meters).
PAIR_EPSILON = 1e-9


class DecisionKind(str, Enum):
    SINGLE = "single"
    PAIR = "pair"
    STOP = "stop"


class StopReason(str, Enum):
    NO_REMAINING_LENGTH = "no_remaining_length"
    BELOW_THRESHOLD = "below_threshold"
    NO_PIECE_FITS = "no_piece_fits"


@dataclass(frozen=True)
class PlanDecision:
    kind: DecisionKind
    residue: float                       # length left on the bar after this step
    piece_ids: tuple[int, ...] = ()
    lengths: tuple[float, ...] = ()
    reason: Optional[StopReason] = None
    tie: bool = False                    # single chosen over an equally good pair

    @property
    def stopped(self) -> bool:
        return self.kind is DecisionKind.STOP

    def describe(self) -> str:
        if self.stopped:
            return f"stop ({self.reason.value}), {self.residue:.2f} m left"
        pieces = " + ".join(f"{length:.2f} m" for length in self.lengths)
        note = " [tie, single preferred]" if self.tie else ""
        return f"take {self.kind.value}: {pieces} (residue {self.residue:.2f} m){note}"

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "piece_ids": list(self.piece_ids),
            "lengths": list(self.lengths),
            "residue": self.residue,
            "reason": self.reason.value if self.reason else None,
            "tie": self.tie,
        }


def _stop(remaining: float, reason: StopReason) -> PlanDecision:
    return PlanDecision(kind=DecisionKind.STOP, residue=remaining, reason=reason)


def _cut(kind: DecisionKind, pieces: list[Piece], remaining: float,
         tie: bool = False) -> PlanDecision:
    used = sum(p.length for p in pieces)
    return PlanDecision(
        kind=kind,
        residue=round(max(0.0, remaining - used), ROUND_DIGITS),
        piece_ids=tuple(p.id for p in pieces),
        lengths=tuple(p.length for p in pieces),
        tie=tie,
    )


def best_pair(ascending: list[Piece], remaining: float) -> Optional[tuple[Piece, Piece]]:
    """
    Two-pointer scan over pieces sorted by length for the pair whose sum is the
    largest not exceeding `remaining`. An exact fill ends the scan early.
    """
    best: Optional[tuple[Piece, Piece]] = None
    best_sum = -math.inf
    i, j = 0, len(ascending) - 1
    while i < j:
        total = ascending[i].length + ascending[j].length
        if abs(total - remaining) < PAIR_EPSILON:
            return ascending[i], ascending[j]
        if total < remaining:
            if total > best_sum:
                best_sum = total
                best = (ascending[i], ascending[j])
            i += 1
        else:
            j -= 1
    return best


def choose_next_cut(
    remaining: float,
    candidates: Iterable[Piece],
    min_residue: float = MIN_RESIDUE,
) -> PlanDecision:
    """Decide the next cut without touching any state."""
    if remaining <= 0:
        return _stop(remaining, StopReason.NO_REMAINING_LENGTH)
    if remaining < min_residue:
        return _stop(remaining, StopReason.BELOW_THRESHOLD)

    ascending = sorted(
        (p for p in candidates if p.in_play and p.length <= remaining),
        key=lambda p: (p.length, p.id),
    )
    if not ascending:
        return _stop(remaining, StopReason.NO_PIECE_FITS)

    single = ascending[-1]
    single_residue = remaining - single.length

    pair = best_pair(ascending, remaining)
    if pair is None:
        return _cut(DecisionKind.SINGLE, [single], remaining)

    pair_residue = remaining - (pair[0].length + pair[1].length)
    if pair_residue < single_residue:
        return _cut(DecisionKind.PAIR, list(pair), remaining)
    # Equal residues: single wins.
    return _cut(DecisionKind.SINGLE, [single], remaining, tie=pair_residue == single_residue)


def plan_step(session: CutSession, min_residue: float = MIN_RESIDUE) -> PlanDecision:
    """Run one planning iteration and apply its cut(s) to the session."""
    candidates = session.inventory.candidates_at_most(session.remaining)
    decision = choose_next_cut(session.remaining, candidates, min_residue)

    if decision.stopped:
        logger.info(f"Planner stopped: {decision.reason.value} "
                    f"(remaining={session.remaining} m, threshold={min_residue} m)")
        return decision

    for piece_id in decision.piece_ids:
        session.apply_cut(piece_id)
    logger.info(
        f"Planner decision: kind={decision.kind.value} pieces={list(decision.piece_ids)} "
        f"lengths={list(decision.lengths)} residue={decision.residue}"
        + (" tie=single" if decision.tie else ""))
    return decision


def auto_plan(
    session: CutSession,
    min_residue: float = MIN_RESIDUE,
    max_steps: Optional[int] = None,
) -> list[PlanDecision]:
    """
    Keep cutting until the planner stops. The returned decisions are in
    application order and end with the stop decision, unless `max_steps`
    cut the run short first; in that case the cuts made so far stay applied
    and calling again resumes from there.
    """
    decisions: list[PlanDecision] = []
    steps = 0
    while max_steps is None or steps < max_steps:
        decision = plan_step(session, min_residue)
        decisions.append(decision)
        if decision.stopped:
            break
        steps += 1
    return decisions
