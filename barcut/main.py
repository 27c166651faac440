"""Barcut — FastAPI application entry point."""
from __future__ import annotations

import logging
import os

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .routers import export, lines, pieces, session
from .services import workbench
from .services.errors import CutPlanError

logging.basicConfig(
    level=os.environ.get("BARCUT_LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s — %(message)s",
)
logger = logging.getLogger(__name__)

CORS_ORIGINS = [
    o.strip() for o in os.environ.get(
        "BARCUT_CORS_ORIGINS",
        "http://localhost:5173,http://localhost:3000,http://127.0.0.1:5173",
    ).split(",") if o.strip()
]

app = FastAPI(
    title="Barcut",
    description="Greedy cut planner for fixed-length bars",
    version="1.0.0",
)

# CORS — allow the local frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes
app.include_router(pieces.router)
app.include_router(session.router)
app.include_router(lines.router)
app.include_router(export.router)


@app.exception_handler(CutPlanError)
async def cut_plan_error_handler(request: Request, exc: CutPlanError) -> JSONResponse:
    logger.warning(f"{request.method} {request.url.path} rejected: {exc.kind}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "error": exc.kind},
    )


@app.get("/health")
async def health() -> dict:
    return {
        "status": "ok",
        "min_residue": workbench.current().min_residue,
    }


@app.get("/")
async def root() -> dict:
    return {"message": "Barcut API", "docs": "/docs"}
