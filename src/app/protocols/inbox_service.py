"""Protocolo do serviço de inbox remoto consumido pelo core.

Evita dependência direta da camada api: o resolver conhece apenas este
contrato. Falhas remotas surgem como InboxServiceError; duplicidade na
criação de contato como InboxConflictError.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from .models import (
        AccountProfile,
        ContactResolution,
        MessageDirection,
        RemoteContact,
        RemoteConversation,
        RemoteMessage,
    )


class InboxServiceProtocol(Protocol):
    """Contrato mínimo do serviço de inbox (Chatwoot)."""

    async def create_contact(
        self,
        inbox_id: int,
        name: str,
        phone_number: str,
    ) -> ContactResolution: ...

    async def search_contacts(self, query: str) -> list[RemoteContact]: ...

    async def create_conversation(
        self,
        inbox_id: int,
        contact_id: int,
        source_id: str,
    ) -> RemoteConversation: ...

    async def list_open_conversations(self, inbox_id: int) -> list[RemoteConversation]: ...

    async def post_message(
        self,
        conversation_id: int,
        content: str,
        direction: MessageDirection,
    ) -> RemoteMessage: ...

    async def get_profile(self) -> AccountProfile: ...
