"""Bootstrap da aplicação — inicialização e wiring.

Este módulo é o composition root: configura logging, valida settings e
conecta implementações concretas aos protocolos.

Uso:
    from app.bootstrap import initialize_app, get_inbox_relay

    initialize_app()
    relay = get_inbox_relay()
    await relay.start()
    delivered = await relay.process_incoming_message("5512345678", "Hola")
"""

from __future__ import annotations

import logging
from functools import lru_cache

from app.bootstrap.inbox_factory import create_inbox_relay
from app.observability import get_correlation_id
from config.logging import configure_logging
from config.settings import get_base_settings, get_chatwoot_settings

# Nome do serviço para logs e métricas
SERVICE_NAME = "chatwoot_bridge"

logger = logging.getLogger(__name__)


def initialize_app() -> None:
    """Inicializa logging estruturado com correlation_id.

    Deve ser chamada uma vez no início do serviço.
    """
    base = get_base_settings()
    configure_logging(
        level=base.log_level,
        service_name=SERVICE_NAME,
        correlation_id_getter=get_correlation_id,
        json_output=base.log_json,
        static_fields={"environment": base.environment},
    )


def initialize_test_app() -> None:
    """Inicializa logging para testes (DEBUG, texto simples)."""
    configure_logging(
        level="DEBUG",
        service_name=f"{SERVICE_NAME}_test",
        correlation_id_getter=get_correlation_id,
        json_output=False,
    )


def validate_runtime_settings() -> list[str]:
    """Valida settings obrigatórias no startup.

    Nunca interrompe o boot: erros de configuração são logados e o serviço
    segue em modo degradado (as chamadas ao Chatwoot falham na hora do uso).

    Returns:
        Lista de erros encontrados (vazia = OK).
    """
    base = get_base_settings()
    errors: list[str] = []
    errors.extend(f"base: {error}" for error in base.validate())
    errors.extend(f"chatwoot: {error}" for error in get_chatwoot_settings().validate())

    if not errors:
        logger.info(
            "settings_validated",
            extra={"component": "bootstrap", "result": "ok", "environment": base.environment},
        )
        return errors

    logger.error(
        "settings_validation_failed",
        extra={
            "component": "bootstrap",
            "result": "failed",
            "environment": base.environment,
            "error_count": len(errors),
            "errors": errors,
        },
    )
    return errors


@lru_cache(maxsize=1)
def get_inbox_relay():
    """Obtém o relay do Chatwoot (singleton).

    Returns:
        InboxRelayUseCase configurado conforme env
    """
    return create_inbox_relay()


__all__ = [
    "SERVICE_NAME",
    "create_inbox_relay",
    "get_inbox_relay",
    "initialize_app",
    "initialize_test_app",
    "validate_runtime_settings",
]
