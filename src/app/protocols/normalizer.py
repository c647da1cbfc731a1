"""Protocolo de normalização de telefone."""

from __future__ import annotations

from typing import Protocol


class PhoneNormalizerProtocol(Protocol):
    """Estratégia que canonicaliza um telefone bruto em um identificador.

    Implementações devem ser puras, determinísticas e idempotentes:
    normalize(normalize(x)) == normalize(x).
    """

    def normalize(self, raw: str) -> str: ...
