"""Modelos de domínio trocados entre o core e o serviço de inbox remoto.

Representações imutáveis e independentes de transporte: o adapter do
Chatwoot converte os payloads JSON nestes tipos.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

MessageDirection = Literal["incoming", "outgoing"]
ResolutionSource = Literal["cache", "search", "created"]

OPEN_STATUS = "open"


@dataclass(frozen=True, slots=True)
class ContactInboxBinding:
    """Vínculo contato ↔ inbox ("contact_inbox") identificado por source_id."""

    source_id: str
    inbox_id: int | None = None


@dataclass(frozen=True, slots=True)
class RemoteContact:
    """Contato no serviço remoto."""

    contact_id: int
    name: str = ""
    phone_number: str | None = None
    identifier: str | None = None
    contact_inboxes: tuple[ContactInboxBinding, ...] = ()

    def binding_for(self, inbox_id: int) -> ContactInboxBinding | None:
        """Retorna o vínculo do contato com o inbox informado, se existir."""
        for binding in self.contact_inboxes:
            if binding.inbox_id == inbox_id:
                return binding
        return None


@dataclass(frozen=True, slots=True)
class ContactResolution:
    """Contato encontrado/criado e o vínculo com o inbox configurado."""

    contact: RemoteContact
    contact_inbox: ContactInboxBinding | None = None


@dataclass(frozen=True, slots=True)
class RemoteConversation:
    """Conversa no serviço remoto."""

    conversation_id: int
    status: str = OPEN_STATUS
    contact_id: int | None = None
    contact_phone: str | None = None

    @property
    def is_open(self) -> bool:
        return self.status == OPEN_STATUS


@dataclass(frozen=True, slots=True)
class RemoteMessage:
    """Mensagem criada em uma conversa remota."""

    message_id: int
    conversation_id: int
    content: str
    direction: MessageDirection


@dataclass(frozen=True, slots=True)
class AccountProfile:
    """Perfil do usuário dono do access token."""

    user_id: int
    name: str = ""
    account_ids: tuple[int, ...] = ()


@dataclass(frozen=True, slots=True)
class ConversationResolution:
    """Resultado da resolução telefone → conversa aberta."""

    identifier: str
    conversation_id: int
    source: ResolutionSource
    contact_id: int | None = None


@dataclass(frozen=True, slots=True)
class RelayResult:
    """Resultado estruturado de uma mensagem relayada ao inbox.

    A API pública expõe apenas `success`; os demais campos ficam disponíveis
    para quem precisa inspecionar a causa sem ler logs.
    """

    success: bool
    direction: MessageDirection
    conversation_id: int | None = None
    source: ResolutionSource | None = None
    message_id: int | None = None
    error_code: str | None = None
    error_message: str | None = None
    status_code: int | None = None
