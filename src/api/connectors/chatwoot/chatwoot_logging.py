"""Helpers de logging para a API do Chatwoot (sem PII)."""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def log_api_error(
    method: str,
    operation: str,
    status_code: int | None,
    error: str,
) -> None:
    """Loga erro do Chatwoot sem expor token nem telefone."""
    logger.warning(
        "chatwoot_api_error",
        extra={
            "method": method,
            "operation": operation,
            "status_code": status_code,
            "error": error,
        },
    )


def log_success(
    method: str,
    operation: str,
    status_code: int,
) -> None:
    logger.debug(
        "chatwoot_api_success",
        extra={
            "method": method,
            "operation": operation,
            "status_code": status_code,
        },
    )
