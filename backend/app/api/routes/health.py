"""Operational endpoints.

- /health always answers ok while the process is up
- /healthz reports whether the completion provider is configured
- /metrics exposes completion latency and error counters for Prometheus
"""

from typing import Any

from fastapi import APIRouter, Response
from fastapi.responses import JSONResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from backend.app.config import Settings, get_settings

router = APIRouter(tags=["ops"])


def check_llm(settings: Settings) -> tuple[bool, str]:
    """Check that a provider credential is present.

    Returns:
        (is_ok, status_message)
    """
    api_key = settings.openai_api_key
    if api_key is None or not api_key.get_secret_value():
        return (False, "not_configured")
    return (True, "configured")


@router.get("/health")
async def health() -> dict[str, str]:
    """Liveness probe; 200 while the application is running."""
    return {"status": "ok"}


@router.get("/healthz", response_model=None)
async def healthz() -> dict[str, Any] | JSONResponse:
    """Readiness probe.

    Returns:
        200 with component status if the provider is configured
        503 otherwise
    """
    settings = get_settings()
    llm_ok, llm_status = check_llm(settings)

    body = {
        "status": "ok" if llm_ok else "degraded",
        "components": {"llm": llm_status, "model": settings.openai_model},
    }

    if not llm_ok:
        return JSONResponse(content=body, status_code=503)
    return body


@router.get("/metrics")
async def metrics() -> Response:
    """Prometheus scrape endpoint (completion_latency_ms, completion_errors_total)."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
