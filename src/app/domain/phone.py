"""Normalização de telefone para identificador canônico (formato E.164).

O identificador normalizado é a chave usada em todo o fluxo: cache de
conversas, busca de contato e comparação com o telefone das conversas
abertas. Por isso a saída precisa ser determinística para a mesma entrada.

A estratégia padrão é uma heurística da numeração móvel mexicana (prefixo
521), não um parser completo de planos de numeração.
"""

from __future__ import annotations

import hashlib
import re

_STRIP_PATTERN = re.compile(r"[\s\-()]")

MEXICO_COUNTRY_PREFIX = "52"
MEXICO_MOBILE_PREFIX = "521"
LOCAL_NUMBER_LENGTH = 10
NATIONAL_NUMBER_LENGTH = 12


class MexicanMobileNormalizer:
    """Normalizador padrão (México, celulares).

    Regras em ordem, a primeira que casar vence:
    1. Remove espaços, "-", "(" e ")".
    2. Já começa com "+": retorna como está.
    3. Começa com "521": prefixa "+".
    4. Começa com "52": prefixa "+".
    5. Tem 10 caracteres: número local, retorna "+521" + número.
    6. Tem 12 caracteres e começa com "52": prefixa "+".
    7. Caso contrário: prefixa "+".
    """

    def normalize(self, raw: str) -> str:
        cleaned = _STRIP_PATTERN.sub("", raw)

        if cleaned.startswith("+"):
            return cleaned

        if cleaned.startswith(MEXICO_MOBILE_PREFIX):
            return f"+{cleaned}"

        if cleaned.startswith(MEXICO_COUNTRY_PREFIX):
            return f"+{cleaned}"

        if len(cleaned) == LOCAL_NUMBER_LENGTH:
            return f"+{MEXICO_MOBILE_PREFIX}{cleaned}"

        # Coberto pela regra 4; mantido para preservar a ordem das regras
        if len(cleaned) == NATIONAL_NUMBER_LENGTH and cleaned.startswith(
            MEXICO_COUNTRY_PREFIX
        ):
            return f"+{cleaned}"

        return f"+{cleaned}"


_default_normalizer = MexicanMobileNormalizer()


def normalize_phone(raw: str) -> str:
    """Normaliza telefone com a estratégia padrão."""
    return _default_normalizer.normalize(raw)


def hash_phone(identifier: str) -> str:
    """Hash curto do telefone para logs (nunca logar o número)."""
    return hashlib.sha256(identifier.encode("utf-8")).hexdigest()[:12]
