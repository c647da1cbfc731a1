"""Use case de relay de mensagens (usuário e bot) para o Chatwoot.

Pontos de entrada para a camada de bot/mensageria:
- process_incoming_message: mensagem do usuário → conversa (cria se preciso)
- process_bot_response: resposta do bot → conversa existente
- test_connection: verifica alcance/autenticação do Chatwoot

Os métodos process_* nunca levantam exceção: retornam bool. As variantes
relay_* devolvem RelayResult com a causa da falha.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.domain.phone import hash_phone
from app.observability import correlation_scope, record_relay
from app.protocols.models import RelayResult
from utils.errors import ConversationResolutionError, InboxServiceError

if TYPE_CHECKING:
    from app.protocols.inbox_service import InboxServiceProtocol
    from app.protocols.models import ConversationResolution, MessageDirection
    from app.services.conversation_resolver import ConversationResolver

logger = logging.getLogger(__name__)


class InboxRelayUseCase:
    """Orquestra resolução de conversa e envio de mensagens ao inbox."""

    def __init__(
        self,
        resolver: ConversationResolver,
        inbox_service: InboxServiceProtocol,
    ) -> None:
        self._resolver = resolver
        self._inbox = inbox_service

    async def start(self) -> None:
        await self._resolver.start()

    async def stop(self) -> None:
        await self._resolver.stop()

    async def process_incoming_message(
        self,
        phone_number: str,
        message: str,
        user_name: str | None = None,
    ) -> bool:
        """Relaya mensagem do usuário. True se entregue."""
        result = await self.relay_incoming(phone_number, message, user_name)
        return result.success

    async def process_message(
        self,
        phone_number: str,
        message: str,
        user_name: str | None = None,
    ) -> bool:
        """Alias de compatibilidade para process_incoming_message."""
        return await self.process_incoming_message(phone_number, message, user_name)

    async def process_bot_response(self, phone_number: str, bot_response: str) -> bool:
        """Relaya resposta do bot. True se entregue."""
        result = await self.relay_bot_response(phone_number, bot_response)
        return result.success

    async def relay_incoming(
        self,
        phone_number: str,
        message: str,
        user_name: str | None = None,
    ) -> RelayResult:
        """Resolve (ou cria) a conversa e posta a mensagem como incoming."""
        with correlation_scope():
            logger.info(
                "incoming_message_received",
                extra={"message_length": len(message)},
            )
            try:
                resolution = await self._resolver.resolve_for_incoming(
                    phone_number, user_name
                )
            except ConversationResolutionError as exc:
                return self._failure(
                    "incoming",
                    exc.stage,
                    str(exc),
                    status_code=exc.status_code,
                )
            except Exception as exc:
                logger.exception("incoming_resolution_unexpected_error")
                return self._failure("incoming", "unexpected_error", type(exc).__name__)

            return await self._deliver(resolution, message, "incoming")

    async def relay_bot_response(self, phone_number: str, bot_response: str) -> RelayResult:
        """Posta a resposta do bot na conversa existente, sem criar nada."""
        with correlation_scope():
            logger.info(
                "bot_response_received",
                extra={"message_length": len(bot_response)},
            )
            try:
                resolution = await self._resolver.resolve_for_outgoing(phone_number)
            except ConversationResolutionError as exc:
                return self._failure(
                    "outgoing",
                    exc.stage,
                    str(exc),
                    status_code=exc.status_code,
                )
            except Exception as exc:
                logger.exception("outgoing_resolution_unexpected_error")
                return self._failure("outgoing", "unexpected_error", type(exc).__name__)

            if resolution is None:
                logger.warning(
                    "bot_response_dropped",
                    extra={
                        "phone_hash": hash_phone(self._resolver.normalize(phone_number)),
                        "reason": "conversation_not_found",
                    },
                )
                return self._failure(
                    "outgoing",
                    "conversation_not_found",
                    "Nenhuma conversa aberta para o telefone",
                )

            return await self._deliver(resolution, bot_response, "outgoing")

    async def test_connection(self) -> bool:
        """Verifica conexão e autenticação com o Chatwoot."""
        with correlation_scope():
            try:
                profile = await self._inbox.get_profile()
            except InboxServiceError as exc:
                logger.error(
                    "chatwoot_connection_failed",
                    extra={"status_code": exc.status_code, "error": str(exc)},
                )
                return False
            except Exception as exc:
                logger.exception(
                    "chatwoot_connection_unexpected_error",
                    extra={"error_type": type(exc).__name__},
                )
                return False

            logger.info(
                "chatwoot_connection_ok",
                extra={"user_id": profile.user_id, "accounts": len(profile.account_ids)},
            )
            return True

    async def _deliver(
        self,
        resolution: ConversationResolution,
        content: str,
        direction: MessageDirection,
    ) -> RelayResult:
        try:
            posted = await self._inbox.post_message(
                resolution.conversation_id, content, direction
            )
        except InboxServiceError as exc:
            logger.error(
                "message_post_failed",
                extra={
                    "conversation_id": resolution.conversation_id,
                    "direction": direction,
                    "status_code": exc.status_code,
                },
            )
            return self._failure(
                direction,
                "post_message",
                str(exc),
                status_code=exc.status_code,
                conversation_id=resolution.conversation_id,
            )
        except Exception as exc:
            logger.exception(
                "message_post_unexpected_error",
                extra={
                    "conversation_id": resolution.conversation_id,
                    "direction": direction,
                },
            )
            return self._failure(
                direction,
                "unexpected_error",
                type(exc).__name__,
                conversation_id=resolution.conversation_id,
            )

        logger.info(
            "message_relayed",
            extra={
                "conversation_id": resolution.conversation_id,
                "direction": direction,
                "source": resolution.source,
            },
        )
        record_relay(direction, True)
        return RelayResult(
            success=True,
            direction=direction,
            conversation_id=resolution.conversation_id,
            source=resolution.source,
            message_id=posted.message_id,
        )

    @staticmethod
    def _failure(
        direction: MessageDirection,
        error_code: str,
        error_message: str,
        *,
        status_code: int | None = None,
        conversation_id: int | None = None,
    ) -> RelayResult:
        record_relay(direction, False, error_code)
        return RelayResult(
            success=False,
            direction=direction,
            conversation_id=conversation_id,
            error_code=error_code,
            error_message=error_message,
            status_code=status_code,
        )
