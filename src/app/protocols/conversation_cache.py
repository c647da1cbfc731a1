"""Protocolo do cache de conversas ativas."""

from __future__ import annotations

from typing import Protocol


class ConversationCacheProtocol(Protocol):
    """Mapeamento identificador → id de conversa, limpo periodicamente."""

    def get(self, identifier: str) -> int | None: ...

    def put(self, identifier: str, conversation_id: int) -> None: ...

    def clear(self) -> int: ...

    async def start(self) -> None: ...

    async def stop(self) -> None: ...
