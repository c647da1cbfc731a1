"""Use cases de relay de mensagens para o inbox remoto."""

from .relay_message import InboxRelayUseCase

__all__ = [
    "InboxRelayUseCase",
]
