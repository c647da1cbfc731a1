"""Settings específicas do Chatwoot.

Configurações do serviço de inbox remoto (Chatwoot) usado como
central de atendimento humano.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

# Intervalo padrão de limpeza do cache de conversas
DEFAULT_CACHE_SWEEP_SECONDS: float = 30 * 60


@dataclass(frozen=True)
class ChatwootSettings:
    """Configurações do Chatwoot.

    Attributes:
        base_url: URL base da instância (ex: https://app.chatwoot.com)
        access_token: Token de acesso enviado no header api_access_token
        inbox_id: ID do inbox onde contatos e conversas são criados
        account_id: ID da conta; descoberto via /profile se vazio
        request_timeout_seconds: Timeout para requisições HTTP
        max_retries: Máximo de tentativas em erros transitórios
        cache_sweep_interval_seconds: Intervalo de limpeza do cache de conversas
    """

    # Credenciais
    base_url: str = ""
    access_token: str = ""
    inbox_id: str = ""
    account_id: str = ""

    # Timeouts e retries
    request_timeout_seconds: float = 30.0
    max_retries: int = 3

    # Cache de conversas
    cache_sweep_interval_seconds: float = DEFAULT_CACHE_SWEEP_SECONDS

    @property
    def api_base_url(self) -> str:
        """URL base sem barra final."""
        return self.base_url.rstrip("/")

    def validate(self) -> list[str]:
        """Valida configurações mínimas do Chatwoot.

        Returns:
            Lista de erros de validação (vazia = tudo OK).
        """
        errors: list[str] = []

        if not self.base_url:
            errors.append("CHATWOOT_URL não configurado")

        if not self.access_token:
            errors.append("CHATWOOT_API_ACCESS_TOKEN não configurado")

        if not self.inbox_id:
            errors.append("CHATWOOT_INBOX_IDENTIFIER não configurado")
        elif not self.inbox_id.isdigit():
            errors.append("CHATWOOT_INBOX_IDENTIFIER deve ser numérico")

        if not self.account_id:
            errors.append("CHATWOOT_ACCOUNT_ID não configurado")

        if self.request_timeout_seconds <= 0:
            errors.append("CHATWOOT_REQUEST_TIMEOUT_SECONDS deve ser > 0")

        if self.max_retries < 0:
            errors.append("CHATWOOT_MAX_RETRIES deve ser >= 0")

        if self.cache_sweep_interval_seconds <= 0:
            errors.append("CHATWOOT_CACHE_SWEEP_SECONDS deve ser > 0")

        return errors


def _load_from_env() -> ChatwootSettings:
    """Carrega ChatwootSettings a partir de variáveis de ambiente."""
    return ChatwootSettings(
        base_url=os.getenv("CHATWOOT_URL", ""),
        access_token=os.getenv("CHATWOOT_API_ACCESS_TOKEN", ""),
        inbox_id=os.getenv("CHATWOOT_INBOX_IDENTIFIER", "").strip(),
        account_id=os.getenv("CHATWOOT_ACCOUNT_ID", "").strip(),
        request_timeout_seconds=float(
            os.getenv("CHATWOOT_REQUEST_TIMEOUT_SECONDS", "30")
        ),
        max_retries=int(os.getenv("CHATWOOT_MAX_RETRIES", "3")),
        cache_sweep_interval_seconds=float(
            os.getenv("CHATWOOT_CACHE_SWEEP_SECONDS", str(DEFAULT_CACHE_SWEEP_SECONDS))
        ),
    )


@lru_cache(maxsize=1)
def get_chatwoot_settings() -> ChatwootSettings:
    """Retorna instância cacheada de ChatwootSettings.

    A cache garante singleton para múltiplas injeções.
    """
    return _load_from_env()
