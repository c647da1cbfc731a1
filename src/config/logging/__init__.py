"""Configuração de logging estruturado.

Uso:
    from config.logging import configure_logging, get_logger

    # Na inicialização (bootstrap)
    configure_logging(level="INFO", service_name="chatwoot_bridge")

    # Em qualquer módulo
    logger = get_logger(__name__)
    logger.info("conversation_resolved", extra={"phone_hash": "ab12cd34ef56"})

Campos obrigatórios em todo log: correlation_id, service, level, logger,
message, asctime. Nunca registrar telefone ou conteúdo de mensagens.
"""

from config.logging.config import configure_logging, get_logger, log_fallback
from config.logging.filters import CorrelationIdFilter
from config.logging.formatters import (
    FIELD_RENAME_MAP,
    PLAIN_FORMAT,
    REQUIRED_LOG_FIELDS,
    create_json_formatter,
    create_plain_formatter,
)

__all__ = [
    "FIELD_RENAME_MAP",
    "PLAIN_FORMAT",
    "REQUIRED_LOG_FIELDS",
    "CorrelationIdFilter",
    "configure_logging",
    "create_json_formatter",
    "create_plain_formatter",
    "get_logger",
    "log_fallback",
]
