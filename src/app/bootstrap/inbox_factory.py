"""Factory de wiring do relay para o Chatwoot (bootstrap)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from api.connectors.chatwoot import create_chatwoot_client
from app.infra.stores import MemoryConversationCache
from app.services import ConversationResolver
from app.use_cases.inbox import InboxRelayUseCase

if TYPE_CHECKING:
    from app.protocols import (
        ConversationCacheProtocol,
        InboxServiceProtocol,
        PhoneNormalizerProtocol,
    )
    from config.settings import ChatwootSettings

logger = logging.getLogger(__name__)


def parse_inbox_id(raw: str) -> int:
    """Converte o inbox configurado em int; 0 quando ausente/inválido."""
    value = raw.strip()
    if value.isdigit():
        return int(value)
    if not value:
        return 0
    logger.error("chatwoot_inbox_id_invalid", extra={"component": "bootstrap"})
    return 0


def create_conversation_resolver(
    settings: ChatwootSettings,
    inbox_service: InboxServiceProtocol,
    cache: ConversationCacheProtocol | None = None,
    normalizer: PhoneNormalizerProtocol | None = None,
) -> ConversationResolver:
    """Cria resolver com cache próprio (limpeza conforme settings)."""
    return ConversationResolver(
        inbox_service=inbox_service,
        cache=cache
        if cache is not None
        else MemoryConversationCache(settings.cache_sweep_interval_seconds),
        inbox_id=parse_inbox_id(settings.inbox_id),
        normalizer=normalizer,
    )


def create_inbox_relay(
    settings: ChatwootSettings | None = None,
    inbox_service: InboxServiceProtocol | None = None,
    cache: ConversationCacheProtocol | None = None,
    normalizer: PhoneNormalizerProtocol | None = None,
) -> InboxRelayUseCase:
    """Cria o use case de relay com dependências injetadas.

    Sem argumentos, usa settings do ambiente e o cliente Chatwoot real.
    """
    from config.settings import get_chatwoot_settings

    chatwoot = settings or get_chatwoot_settings()
    service = inbox_service or create_chatwoot_client(chatwoot)
    resolver = create_conversation_resolver(chatwoot, service, cache, normalizer)
    return InboxRelayUseCase(resolver=resolver, inbox_service=service)
