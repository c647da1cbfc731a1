"""Resolução telefone → conversa aberta no inbox remoto.

Fluxo inbound (resolve_for_incoming):
    cache → busca de conversas abertas → busca de contato
          → criação de contato (422 = já existe, busca de novo)
          → criação de conversa

Fluxo outbound (resolve_for_outgoing): apenas cache → busca de conversas.
Respostas do bot nunca criam contato nem conversa.

Chamadas concorrentes de resolve_for_incoming para o mesmo identificador
compartilham uma única resolução em andamento, para não criar duas
conversas remotas para o mesmo telefone.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from app.domain.phone import MexicanMobileNormalizer, hash_phone
from app.observability import record_resolution
from app.protocols.models import ContactResolution, ConversationResolution
from config.logging import log_fallback
from utils.errors import (
    ConversationResolutionError,
    InboxConflictError,
    InboxServiceError,
)

if TYPE_CHECKING:
    from app.protocols.conversation_cache import ConversationCacheProtocol
    from app.protocols.inbox_service import InboxServiceProtocol
    from app.protocols.normalizer import PhoneNormalizerProtocol

logger = logging.getLogger(__name__)


class ConversationResolver:
    """Resolve e reconcilia contato/conversa a partir de um telefone."""

    def __init__(
        self,
        inbox_service: InboxServiceProtocol,
        cache: ConversationCacheProtocol,
        inbox_id: int,
        normalizer: PhoneNormalizerProtocol | None = None,
    ) -> None:
        self._inbox = inbox_service
        self._cache = cache
        self._inbox_id = inbox_id
        self._normalizer = normalizer or MexicanMobileNormalizer()
        self._in_flight: dict[str, asyncio.Task[ConversationResolution]] = {}

    @property
    def cache(self) -> ConversationCacheProtocol:
        return self._cache

    async def start(self) -> None:
        """Inicia a limpeza periódica do cache."""
        await self._cache.start()

    async def stop(self) -> None:
        """Encerra a limpeza periódica do cache."""
        await self._cache.stop()

    def normalize(self, raw_phone: str) -> str:
        return self._normalizer.normalize(raw_phone)

    async def resolve_for_incoming(
        self,
        raw_phone: str,
        user_name: str | None = None,
    ) -> ConversationResolution:
        """Garante uma conversa aberta para o telefone, criando o que faltar.

        Raises:
            ConversationResolutionError: Falha dura em criação de contato
                ou conversa (causa remota encadeada em __cause__).
        """
        identifier = self.normalize(raw_phone)

        cached = self._from_cache(identifier, "incoming")
        if cached is not None:
            return cached

        task = self._in_flight.get(identifier)
        if task is None:
            task = asyncio.create_task(
                self._resolve_uncached(identifier, raw_phone, user_name)
            )
            self._in_flight[identifier] = task
            task.add_done_callback(
                lambda done, key=identifier: self._release_in_flight(key, done)
            )
        else:
            logger.debug(
                "conversation_resolution_joined",
                extra={"phone_hash": hash_phone(identifier)},
            )
        return await asyncio.shield(task)

    async def resolve_for_outgoing(self, raw_phone: str) -> ConversationResolution | None:
        """Resolve conversa existente sem criar estado remoto.

        Returns:
            Resolução, ou None se não houver conversa aberta.
        """
        identifier = self.normalize(raw_phone)

        cached = self._from_cache(identifier, "outgoing")
        if cached is not None:
            return cached

        pending = self._in_flight.get(identifier)
        if pending is not None:
            return await asyncio.shield(pending)

        resolution = await self._search_conversation(identifier)
        if resolution is not None:
            record_resolution(resolution.source, "outgoing")
        return resolution

    def _from_cache(self, identifier: str, direction: str) -> ConversationResolution | None:
        conversation_id = self._cache.get(identifier)
        if conversation_id is None:
            return None
        logger.debug(
            "conversation_cache_hit",
            extra={
                "phone_hash": hash_phone(identifier),
                "conversation_id": conversation_id,
            },
        )
        record_resolution("cache", direction)
        return ConversationResolution(
            identifier=identifier,
            conversation_id=conversation_id,
            source="cache",
        )

    def _release_in_flight(
        self,
        identifier: str,
        task: asyncio.Task[ConversationResolution],
    ) -> None:
        if self._in_flight.get(identifier) is task:
            del self._in_flight[identifier]
        # Marca a exceção como consumida mesmo sem nenhum chamador aguardando
        if not task.cancelled() and task.exception() is not None:
            logger.debug(
                "conversation_resolution_failed",
                extra={
                    "phone_hash": hash_phone(identifier),
                    "error_type": type(task.exception()).__name__,
                },
            )

    async def _resolve_uncached(
        self,
        identifier: str,
        raw_phone: str,
        user_name: str | None,
    ) -> ConversationResolution:
        resolution = await self._search_conversation(identifier)
        if resolution is None:
            contact = await self._find_contact(identifier)
            if contact is None:
                contact = await self._create_contact(identifier, user_name or raw_phone)
            resolution = await self._create_conversation(identifier, contact)
        record_resolution(resolution.source, "incoming")
        return resolution

    async def _search_conversation(self, identifier: str) -> ConversationResolution | None:
        """Procura conversa aberta do inbox cujo contato tem o mesmo telefone."""
        try:
            conversations = await self._inbox.list_open_conversations(self._inbox_id)
        except InboxServiceError as exc:
            log_fallback(logger, "search_conversation", reason=_reason(exc))
            return None

        for conversation in conversations:
            if not conversation.is_open or not conversation.contact_phone:
                continue
            if self.normalize(conversation.contact_phone) != identifier:
                continue
            self._cache.put(identifier, conversation.conversation_id)
            logger.info(
                "conversation_found",
                extra={
                    "phone_hash": hash_phone(identifier),
                    "conversation_id": conversation.conversation_id,
                },
            )
            return ConversationResolution(
                identifier=identifier,
                conversation_id=conversation.conversation_id,
                source="search",
                contact_id=conversation.contact_id,
            )

        logger.info(
            "conversation_not_found",
            extra={
                "phone_hash": hash_phone(identifier),
                "candidates": len(conversations),
            },
        )
        return None

    async def _find_contact(self, identifier: str) -> ContactResolution | None:
        try:
            contacts = await self._inbox.search_contacts(identifier)
        except InboxServiceError as exc:
            log_fallback(logger, "search_contact", reason=_reason(exc))
            return None

        if not contacts:
            logger.info("contact_not_found", extra={"phone_hash": hash_phone(identifier)})
            return None

        contact = contacts[0]
        logger.info(
            "contact_found",
            extra={"phone_hash": hash_phone(identifier), "contact_id": contact.contact_id},
        )
        return ContactResolution(
            contact=contact,
            contact_inbox=contact.binding_for(self._inbox_id),
        )

    async def _create_contact(self, identifier: str, name: str) -> ContactResolution:
        try:
            created = await self._inbox.create_contact(self._inbox_id, name, identifier)
        except InboxConflictError:
            logger.info(
                "contact_already_exists",
                extra={"phone_hash": hash_phone(identifier)},
            )
            existing = await self._find_contact(identifier)
            if existing is None:
                raise ConversationResolutionError(
                    "contact_conflict_unresolved", identifier
                ) from None
            return existing
        except InboxServiceError as exc:
            logger.error(
                "contact_create_failed",
                extra={
                    "phone_hash": hash_phone(identifier),
                    "status_code": exc.status_code,
                },
            )
            raise ConversationResolutionError("create_contact", identifier) from exc

        logger.info(
            "contact_created",
            extra={
                "phone_hash": hash_phone(identifier),
                "contact_id": created.contact.contact_id,
                "has_contact_inbox": created.contact_inbox is not None,
            },
        )
        return created

    async def _create_conversation(
        self,
        identifier: str,
        contact: ContactResolution,
    ) -> ConversationResolution:
        binding = contact.contact_inbox
        source_id = binding.source_id if binding is not None else identifier
        contact_id = contact.contact.contact_id

        try:
            conversation = await self._inbox.create_conversation(
                self._inbox_id, contact_id, source_id
            )
        except InboxServiceError as exc:
            logger.error(
                "conversation_create_failed",
                extra={
                    "phone_hash": hash_phone(identifier),
                    "contact_id": contact_id,
                    "status_code": exc.status_code,
                },
            )
            raise ConversationResolutionError("create_conversation", identifier) from exc

        self._cache.put(identifier, conversation.conversation_id)
        logger.info(
            "conversation_created",
            extra={
                "phone_hash": hash_phone(identifier),
                "contact_id": contact_id,
                "conversation_id": conversation.conversation_id,
            },
        )
        return ConversationResolution(
            identifier=identifier,
            conversation_id=conversation.conversation_id,
            source="created",
            contact_id=contact_id,
        )


def _reason(exc: InboxServiceError) -> str:
    if exc.status_code is not None:
        return f"http_{exc.status_code}"
    return str(exc)
