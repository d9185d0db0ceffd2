"""
Service info and health routes.

- GET / - Service description and endpoint list
- GET /health - Liveness check with uptime
"""

import time
from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, Request

from tasklist import __version__

router = APIRouter()

ENDPOINTS = [
    "GET /api/tasks - List all tasks",
    "POST /api/tasks - Create a task",
    "PUT /api/tasks/{id} - Update a task",
    "DELETE /api/tasks/{id} - Delete a task",
]


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get("/")
async def root(request: Request) -> dict[str, Any]:
    """Root endpoint - service info."""
    return {
        "message": "Tasklist API",
        "version": __version__,
        "endpoints": ENDPOINTS,
        "documentation": {"swagger": "/docs", "openapi": "/openapi.json"},
        "storage": str(request.app.state.repository.store.path),
        "status": "active",
        "timestamp": _now(),
    }


@router.get("/health")
async def health(request: Request) -> dict[str, Any]:
    """Health check endpoint."""
    uptime = time.monotonic() - request.app.state.started_at
    return {
        "status": "healthy",
        "uptime_seconds": round(uptime, 3),
        "timestamp": _now(),
    }
