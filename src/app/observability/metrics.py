"""Registro de métricas via structured logging.

As métricas são registradas como logs estruturados e podem ser agregadas
posteriormente (BigQuery, CloudWatch Insights, etc.).

Métricas suportadas:
- Latência: tempo de cada chamada ao Chatwoot por operação
- Resolução: origem da conversa resolvida (cache, search, created)
- Relay: resultado de cada mensagem relayada
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def record_latency(
    component: str,
    operation: str,
    latency_ms: float,
    status_code: int | None = None,
) -> None:
    """Registra latência de operação.

    Args:
        component: Nome do componente (ex: "chatwoot_client")
        operation: Nome da operação (ex: "search_contacts")
        latency_ms: Latência em milissegundos
        status_code: Status HTTP da resposta, quando houver
    """
    logger.info(
        "metric_latency",
        extra={
            "metric_type": "latency",
            "component": component,
            "operation": operation,
            "latency_ms": round(latency_ms, 2),
            "status_code": status_code,
        },
    )


def record_resolution(source: str, direction: str) -> None:
    """Registra de onde veio a conversa resolvida."""
    logger.info(
        "metric_resolution",
        extra={
            "metric_type": "counter",
            "component": "conversation_resolver",
            "source": source,
            "direction": direction,
        },
    )


def record_relay(direction: str, success: bool, error_code: str | None = None) -> None:
    """Registra o resultado de uma mensagem relayada."""
    logger.info(
        "metric_relay",
        extra={
            "metric_type": "counter",
            "component": "inbox_relay",
            "direction": direction,
            "success": success,
            "error_code": error_code,
        },
    )
