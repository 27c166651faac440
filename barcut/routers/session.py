"""/api/session — the bar currently being cut."""
from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import APIRouter

from ..models.cutting import PlanResultSchema, SavedLineSchema, SessionSchema
from ..models.requests import AutoPlanRequest, StartSessionRequest
from ..services import workbench

router = APIRouter(prefix="/api")
logger = logging.getLogger(__name__)


@router.get("/session", response_model=SessionSchema)
def get_session() -> dict[str, Any]:
    return workbench.current().summary()


@router.post("/session/start", response_model=SessionSchema)
def start_session(req: StartSessionRequest) -> dict[str, Any]:
    bench = workbench.current()
    bench.start(req.stock_length, req.piece_id)
    return bench.summary()


@router.post("/session/step", response_model=PlanResultSchema)
def plan_step() -> dict[str, Any]:
    bench = workbench.current()
    decision = bench.step()
    return {"decisions": [decision.to_dict()], "session": bench.summary()}


@router.post("/session/auto", response_model=PlanResultSchema)
def auto_plan(req: Optional[AutoPlanRequest] = None) -> dict[str, Any]:
    """
    Cut until the planner stops (or `max_steps` cuts were made).

    Returns every decision in order; the last one carries the stop reason.
    """
    bench = workbench.current()
    decisions = bench.auto_plan(req.max_steps if req else None)
    logger.info("Auto plan: " + " | ".join(d.describe() for d in decisions))
    return {"decisions": [d.to_dict() for d in decisions], "session": bench.summary()}


@router.post("/session/save", response_model=SavedLineSchema)
def save_line() -> dict[str, Any]:
    return workbench.current().save_line().to_dict()
