"""Endpoints de health check e readiness."""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, Literal

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

logger = logging.getLogger(__name__)

router = APIRouter()

READINESS_TIMEOUT_SECONDS = 10.0


class HealthResponse(BaseModel):
    """Resposta do health check."""

    status: str
    service: str
    timestamp: str
    version: str = "1.0.0"


@dataclass(frozen=True, slots=True)
class DependencyCheck:
    """Resultado de checagem de dependência."""

    status: Literal["ok", "failed"]
    latency_ms: float | None = None
    error: str | None = None

    def as_dict(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "latency_ms": self.latency_ms,
            "error": self.error,
        }


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Liveness probe — verifica se o serviço está rodando."""
    return HealthResponse(
        status="healthy",
        service="chatwoot-bridge",
        timestamp=datetime.now(UTC).isoformat(),
    )


@router.get("/ready")
async def readiness_check(request: Request) -> JSONResponse:
    """Readiness probe — verifica conexão e autenticação com o Chatwoot."""
    chatwoot_check = await _check_chatwoot(getattr(request.app.state, "inbox_relay", None))
    ready = chatwoot_check.status == "ok"

    payload = {
        "status": "ready" if ready else "not_ready",
        "checks": {"chatwoot": chatwoot_check.as_dict()},
        "timestamp": datetime.now(UTC).isoformat(),
    }
    return JSONResponse(content=payload, status_code=200 if ready else 503)


async def _check_chatwoot(inbox_relay: Any | None) -> DependencyCheck:
    if inbox_relay is None:
        return DependencyCheck(status="failed", error="not_configured")
    started_at = time.perf_counter()
    try:
        connected = await asyncio.wait_for(
            inbox_relay.test_connection(), timeout=READINESS_TIMEOUT_SECONDS
        )
    except TimeoutError:
        return DependencyCheck(status="failed", error="timeout")
    if not connected:
        return DependencyCheck(status="failed", error="connection_failed")
    latency_ms = (time.perf_counter() - started_at) * 1000
    return DependencyCheck(status="ok", latency_ms=round(latency_ms, 2))
