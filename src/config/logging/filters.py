"""Filters de logging para injeção de contexto.

Campos injetados:
- correlation_id: ID de rastreamento da operação (mensagem relayada)
- service: Nome do serviço
- campos estáticos do processo (ex: environment), definidos no bootstrap
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping


class CorrelationIdFilter(logging.Filter):
    """Injeta correlation_id, service e campos estáticos em cada record.

    Args:
        service_name: Nome do serviço para identificação nos logs.
        correlation_id_getter: Função que retorna o correlation_id atual.
            Se não fornecida, usa string vazia.
        static_fields: Campos fixos do processo. Nunca sobrescrevem valores
            passados via `extra`.
    """

    def __init__(
        self,
        service_name: str,
        correlation_id_getter: Callable[[], str] | None = None,
        static_fields: Mapping[str, object] | None = None,
    ) -> None:
        super().__init__()
        self._service_name = service_name
        self._get_correlation_id = correlation_id_getter or (lambda: "")
        self._static_fields = dict(static_fields or {})

    def filter(self, record: logging.LogRecord) -> bool:
        """Enriquece o record; nunca descarta."""
        existing = getattr(record, "correlation_id", None)
        record.correlation_id = existing if existing else self._get_correlation_id()
        record.service = self._service_name
        for key, value in self._static_fields.items():
            if not hasattr(record, key):
                setattr(record, key, value)
        return True
