"""Gerenciamento de correlation_id para rastreamento de operações.

Cada mensagem relayada ao Chatwoot roda sob um correlation_id próprio,
injetado em todos os logs pelo CorrelationIdFilter. Usa ContextVar para ser
async-safe (cada task herda uma cópia do contexto).

Uso:
    from app.observability import correlation_scope, get_correlation_id

    with correlation_scope():
        ...  # todos os logs aqui compartilham o mesmo correlation_id
"""

from __future__ import annotations

import uuid
from contextlib import contextmanager
from contextvars import ContextVar, Token
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


def get_correlation_id() -> str:
    """Retorna o correlation_id do contexto atual (ou string vazia)."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str | None = None) -> Token[str]:
    """Define o correlation_id no contexto atual.

    Args:
        correlation_id: ID a definir. Se None, gera um novo UUID.

    Returns:
        Token para reset posterior via reset_correlation_id().
    """
    value = correlation_id or generate_correlation_id()
    return _correlation_id.set(value)


def reset_correlation_id(token: Token[str]) -> None:
    """Restaura o correlation_id ao valor anterior."""
    _correlation_id.reset(token)


def generate_correlation_id() -> str:
    """Gera um novo correlation_id (UUID v4)."""
    return str(uuid.uuid4())


@contextmanager
def correlation_scope(correlation_id: str | None = None) -> Iterator[str]:
    """Executa o bloco sob um correlation_id, restaurando o anterior ao sair.

    Reaproveita o correlation_id já ativo quando nenhum é informado, para que
    chamadas aninhadas continuem no mesmo rastro.
    """
    value = correlation_id or get_correlation_id() or generate_correlation_id()
    token = _correlation_id.set(value)
    try:
        yield value
    finally:
        _correlation_id.reset(token)
