"""Modelos pydantic dos payloads da API do Chatwoot.

Somente os campos consumidos pelo bridge; campos extras são ignorados.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from app.protocols.models import (
    AccountProfile,
    ContactInboxBinding,
    ContactResolution,
    RemoteContact,
    RemoteConversation,
)


class _ChatwootModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class ChatwootInboxRef(_ChatwootModel):
    id: int
    name: str = ""
    channel_type: str = ""


class ChatwootContactInbox(_ChatwootModel):
    source_id: str
    inbox: ChatwootInboxRef | None = None

    def to_domain(self) -> ContactInboxBinding:
        return ContactInboxBinding(
            source_id=self.source_id,
            inbox_id=self.inbox.id if self.inbox else None,
        )


class ChatwootContact(_ChatwootModel):
    id: int
    name: str | None = None
    phone_number: str | None = None
    identifier: str | None = None
    contact_inboxes: list[ChatwootContactInbox] = Field(default_factory=list)

    def to_domain(self) -> RemoteContact:
        return RemoteContact(
            contact_id=self.id,
            name=self.name or "",
            phone_number=self.phone_number,
            identifier=self.identifier,
            contact_inboxes=tuple(ci.to_domain() for ci in self.contact_inboxes),
        )


class ChatwootContactCreatePayload(_ChatwootModel):
    contact: ChatwootContact
    contact_inbox: ChatwootContactInbox | None = None


class ChatwootContactCreateResponse(_ChatwootModel):
    payload: ChatwootContactCreatePayload

    def to_domain(self) -> ContactResolution:
        contact = self.payload.contact.to_domain()
        binding = self.payload.contact_inbox
        return ContactResolution(
            contact=contact,
            contact_inbox=binding.to_domain() if binding else None,
        )


class ChatwootContactSearchResponse(_ChatwootModel):
    payload: list[ChatwootContact] = Field(default_factory=list)


class ChatwootSender(_ChatwootModel):
    id: int | None = None
    phone_number: str | None = None


class ChatwootConversationMeta(_ChatwootModel):
    sender: ChatwootSender | None = None


class ChatwootConversation(_ChatwootModel):
    id: int
    status: str = "open"
    contact_id: int | None = None
    meta: ChatwootConversationMeta | None = None
    contact: ChatwootSender | None = None

    def to_domain(self) -> RemoteConversation:
        sender = self.meta.sender if self.meta else None
        phone = (sender.phone_number if sender else None) or (
            self.contact.phone_number if self.contact else None
        )
        contact_id = self.contact_id
        if contact_id is None and sender is not None:
            contact_id = sender.id
        return RemoteConversation(
            conversation_id=self.id,
            status=self.status,
            contact_id=contact_id,
            contact_phone=phone,
        )


class ChatwootConversationPage(_ChatwootModel):
    payload: list[ChatwootConversation] = Field(default_factory=list)


class ChatwootConversationListResponse(_ChatwootModel):
    data: ChatwootConversationPage = Field(default_factory=ChatwootConversationPage)


class ChatwootMessage(_ChatwootModel):
    id: int
    content: str | None = None
    conversation_id: int | None = None
    # A API devolve 0/1 ou "incoming"/"outgoing" conforme a versão
    message_type: int | str | None = None


class ChatwootAccount(_ChatwootModel):
    id: int
    name: str = ""


class ChatwootProfile(_ChatwootModel):
    id: int
    name: str = ""
    accounts: list[ChatwootAccount] = Field(default_factory=list)

    def to_domain(self) -> AccountProfile:
        return AccountProfile(
            user_id=self.id,
            name=self.name,
            account_ids=tuple(account.id for account in self.accounts),
        )
