"""
Error taxonomy for the cut-planning core.

Every failure is raised before any state is touched. "No more cuts" is not an
error: the planner reports it as a stop decision instead.
"""
from __future__ import annotations


class CutPlanError(Exception):
    """Base class; `status_code` is what the HTTP layer answers with."""
    kind = "cut_plan_error"
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidArgument(CutPlanError, ValueError):
    kind = "invalid_argument"
    status_code = 422


class NotFound(CutPlanError, LookupError):
    kind = "not_found"
    status_code = 404


class IllegalState(CutPlanError):
    kind = "illegal_state"
    status_code = 409


class Oversize(CutPlanError):
    """First piece is longer than the stock bar."""
    kind = "oversize"
    status_code = 422


class Overrun(CutPlanError):
    """A cut longer than what is left on the bar."""
    kind = "overrun"
    status_code = 409
