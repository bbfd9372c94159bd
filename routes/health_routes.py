"""
Health check endpoint.

GET /health — checks MongoDB connectivity and mail relay configuration.
Rules:
- MongoDB failure → "unhealthy" (503); codes cannot be stored or checked.
- Mail provider without credentials → "degraded" (200); verification of
  already-issued codes still works.
"""

from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from schemas.dto.responses.common import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request) -> JSONResponse:
    checks: dict[str, str] = {}
    overall = "healthy"

    try:
        await request.app.state.db.client.admin.command("ping")
        checks["mongodb"] = "ok"
    except Exception:
        checks["mongodb"] = "error"
        overall = "unhealthy"

    provider = getattr(request.app.state, "email_provider", None)
    if provider is not None and getattr(provider, "enabled", False):
        checks["email"] = "ok"
    else:
        checks["email"] = "not_configured"
        if overall == "healthy":
            overall = "degraded"

    body = HealthResponse(status=overall, checks=checks)
    status_code = 503 if overall == "unhealthy" else 200
    return JSONResponse(status_code=status_code, content=body.model_dump())
