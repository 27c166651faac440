"""/api/lines and /api/reset — saved lines and whole-workbench restart."""
from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter

from ..models.cutting import SavedLinesSchema
from ..services import workbench

router = APIRouter(prefix="/api")
logger = logging.getLogger(__name__)


@router.get("/lines", response_model=SavedLinesSchema)
def saved_lines() -> dict[str, Any]:
    bench = workbench.current()
    return {
        "lines": [line.to_dict() for line in bench.saved_lines()],
        "totals": bench.totals(),
    }


@router.post("/reset", status_code=204)
def reset() -> None:
    """Irreversible; the client is expected to have asked the user first."""
    workbench.current().reset()
