"""Conector Chatwoot - adapter de borda para a API do inbox de atendimento.

Este módulo é o único ponto de IO com o Chatwoot.
Responsabilidades:
- HTTP client com retry/backoff
- Modelos pydantic dos payloads
- Classificação de erros (422 = duplicidade)
"""

from .client import ChatwootInboxClient, create_chatwoot_client
from .errors import build_api_error, extract_error_message
from .http_base import HttpClient, HttpClientConfig, HttpError

__all__ = [
    "ChatwootInboxClient",
    "HttpClient",
    "HttpClientConfig",
    "HttpError",
    "build_api_error",
    "create_chatwoot_client",
    "extract_error_message",
]
