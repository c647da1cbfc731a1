"""Cliente do Chatwoot que implementa InboxServiceProtocol.

Único ponto de IO com o Chatwoot:
- Autenticação via header `api_access_token` em todas as chamadas
- Retry/backoff para 429, 5xx e falhas de conexão (HttpClient)
- 422 na criação de contato → InboxConflictError
- Payloads validados com pydantic e convertidos para modelos de domínio
- Logging estruturado sem token, telefone ou conteúdo de mensagem
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any, TypeVar

from pydantic import BaseModel, ValidationError

from api.connectors.chatwoot.chatwoot_logging import log_api_error, log_success
from api.connectors.chatwoot.errors import build_api_error
from api.connectors.chatwoot.http_base import HttpClient, HttpClientConfig, HttpError
from api.connectors.chatwoot.models import (
    ChatwootContactCreateResponse,
    ChatwootContactSearchResponse,
    ChatwootConversation,
    ChatwootConversationListResponse,
    ChatwootMessage,
    ChatwootProfile,
)
from app.observability import record_latency
from app.protocols.models import RemoteMessage
from utils.errors import InboxServiceError

if TYPE_CHECKING:
    import httpx

    from app.protocols.models import (
        AccountProfile,
        ContactResolution,
        MessageDirection,
        RemoteContact,
        RemoteConversation,
    )
    from config.settings import ChatwootSettings

logger: logging.Logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class ChatwootInboxClient:
    """Adapter do Chatwoot (API de aplicação, /api/v1)."""

    def __init__(
        self,
        settings: ChatwootSettings,
        http_client: HttpClient | None = None,
    ) -> None:
        self._base_url = settings.api_base_url
        self._access_token = settings.access_token
        self._account_id = settings.account_id
        self._http = http_client or HttpClient(
            HttpClientConfig(
                timeout_seconds=settings.request_timeout_seconds,
                max_retries=settings.max_retries,
            )
        )

    @property
    def account_id(self) -> str:
        return self._account_id

    async def create_contact(
        self,
        inbox_id: int,
        name: str,
        phone_number: str,
    ) -> ContactResolution:
        """Cria contato já vinculado ao inbox.

        Raises:
            InboxConflictError: Contato com mesmo telefone/identifier já existe.
            InboxServiceError: Demais falhas.
        """
        body = await self._call(
            "POST",
            "create_contact",
            f"{self._account_path()}/contacts",
            json={
                "inbox_id": inbox_id,
                "name": name,
                "phone_number": phone_number,
                "identifier": phone_number,
            },
        )
        return self._parse(ChatwootContactCreateResponse, body, "create_contact").to_domain()

    async def search_contacts(self, query: str) -> list[RemoteContact]:
        body = await self._call(
            "GET",
            "search_contacts",
            f"{self._account_path()}/contacts/search",
            params={"q": query},
        )
        parsed = self._parse(ChatwootContactSearchResponse, body, "search_contacts")
        return [contact.to_domain() for contact in parsed.payload]

    async def create_conversation(
        self,
        inbox_id: int,
        contact_id: int,
        source_id: str,
    ) -> RemoteConversation:
        body = await self._call(
            "POST",
            "create_conversation",
            f"{self._account_path()}/conversations",
            json={
                "source_id": source_id,
                "inbox_id": inbox_id,
                "contact_id": contact_id,
            },
        )
        return self._parse(ChatwootConversation, body, "create_conversation").to_domain()

    async def list_open_conversations(self, inbox_id: int) -> list[RemoteConversation]:
        body = await self._call(
            "GET",
            "list_open_conversations",
            f"{self._account_path()}/conversations",
            params={"status": "open", "inbox_id": inbox_id},
        )
        parsed = self._parse(
            ChatwootConversationListResponse, body, "list_open_conversations"
        )
        return [conversation.to_domain() for conversation in parsed.data.payload]

    async def post_message(
        self,
        conversation_id: int,
        content: str,
        direction: MessageDirection,
    ) -> RemoteMessage:
        body = await self._call(
            "POST",
            "post_message",
            f"{self._account_path()}/conversations/{conversation_id}/messages",
            json={"content": content, "message_type": direction, "private": False},
        )
        message = self._parse(ChatwootMessage, body, "post_message")
        return RemoteMessage(
            message_id=message.id,
            conversation_id=message.conversation_id or conversation_id,
            content=message.content if message.content is not None else content,
            direction=direction,
        )

    async def get_profile(self) -> AccountProfile:
        """Obtém o perfil do token e ajusta o account_id se necessário.

        O primeiro account do perfil é adotado quando o account_id
        configurado está vazio ou não pertence ao token.
        """
        body = await self._call("GET", "get_profile", "/api/v1/profile")
        profile = self._parse(ChatwootProfile, body, "get_profile").to_domain()

        account_ids = [str(account_id) for account_id in profile.account_ids]
        if account_ids and self._account_id not in account_ids:
            logger.info(
                "chatwoot_account_id_adopted",
                extra={
                    "configured": self._account_id or None,
                    "adopted": account_ids[0],
                },
            )
            self._account_id = account_ids[0]
        return profile

    def _account_path(self) -> str:
        if not self._account_id:
            raise InboxServiceError("chatwoot_account_id_missing")
        return f"/api/v1/accounts/{self._account_id}"

    def _headers(self) -> dict[str, str]:
        return {
            "api_access_token": self._access_token,
            "Content-Type": "application/json",
        }

    async def _call(
        self,
        method: str,
        operation: str,
        path: str,
        *,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """Executa a chamada e devolve o corpo JSON de uma resposta 2xx."""
        if not self._base_url or not self._access_token:
            raise InboxServiceError("chatwoot_not_configured")

        url = f"{self._base_url}{path}"
        started = time.perf_counter()
        try:
            response = await self._http.request(
                method, url, json=json, params=params, headers=self._headers()
            )
        except HttpError as exc:
            log_api_error(method, operation, exc.status_code, str(exc))
            raise InboxServiceError(str(exc), status_code=exc.status_code) from exc

        record_latency(
            "chatwoot_client",
            operation,
            (time.perf_counter() - started) * 1000,
            status_code=response.status_code,
        )
        body = _response_body(response)

        if not response.is_success:
            error = build_api_error(response.status_code, body)
            log_api_error(method, operation, response.status_code, str(error))
            raise error

        log_success(method, operation, response.status_code)
        return body

    @staticmethod
    def _parse(model: type[ModelT], body: Any, operation: str) -> ModelT:
        try:
            return model.model_validate(body)
        except ValidationError as exc:
            logger.error(
                "chatwoot_unexpected_payload",
                extra={"operation": operation, "error_count": exc.error_count()},
            )
            raise InboxServiceError(f"chatwoot_unexpected_payload:{operation}") from exc


def _response_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text


def create_chatwoot_client(
    settings: ChatwootSettings | None = None,
) -> ChatwootInboxClient:
    """Factory para criar o cliente Chatwoot com config padrão.

    Args:
        settings: ChatwootSettings opcional. Se None, carrega do ambiente.
    """
    # Import local para evitar dependência circular
    from config.settings import get_chatwoot_settings

    return ChatwootInboxClient(settings or get_chatwoot_settings())
