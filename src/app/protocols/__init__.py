"""Protocolos e contratos do core da aplicação."""

from .conversation_cache import ConversationCacheProtocol
from .inbox_service import InboxServiceProtocol
from .models import (
    OPEN_STATUS,
    AccountProfile,
    ContactInboxBinding,
    ContactResolution,
    ConversationResolution,
    MessageDirection,
    RelayResult,
    RemoteContact,
    RemoteConversation,
    RemoteMessage,
    ResolutionSource,
)
from .normalizer import PhoneNormalizerProtocol

__all__ = [
    "OPEN_STATUS",
    "AccountProfile",
    "ContactInboxBinding",
    "ContactResolution",
    "ConversationCacheProtocol",
    "ConversationResolution",
    "InboxServiceProtocol",
    "MessageDirection",
    "PhoneNormalizerProtocol",
    "RelayResult",
    "RemoteContact",
    "RemoteConversation",
    "RemoteMessage",
    "ResolutionSource",
]
