"""Exceções utilitárias compartilhadas."""

from .exceptions import (
    ConversationResolutionError,
    InboxConflictError,
    InboxServiceError,
    InfrastructureError,
)

__all__ = [
    "ConversationResolutionError",
    "InboxConflictError",
    "InboxServiceError",
    "InfrastructureError",
]
