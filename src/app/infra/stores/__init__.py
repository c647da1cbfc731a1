"""Stores — implementações concretas de estado em memória.

Módulos disponíveis:
    - conversation_cache: cache de conversas ativas com limpeza periódica
"""

from __future__ import annotations

from app.infra.stores.conversation_cache import MemoryConversationCache

__all__ = [
    "MemoryConversationCache",
]
