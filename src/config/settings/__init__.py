"""Agregador de settings do chatwoot-bridge.

Re-exporta todas as settings e funções de cada módulo.
Organização por domínio para isolamento de mudanças.
"""

from __future__ import annotations

# Base settings
from config.settings.base import (
    BaseSettings,
    Environment,
    get_base_settings,
)

# Inbox remoto
from config.settings.chatwoot import (
    DEFAULT_CACHE_SWEEP_SECONDS,
    ChatwootSettings,
    get_chatwoot_settings,
)

__all__ = [
    # Constants
    "DEFAULT_CACHE_SWEEP_SECONDS",
    # Base
    "BaseSettings",
    # Chatwoot
    "ChatwootSettings",
    "Environment",
    "get_base_settings",
    "get_chatwoot_settings",
]
