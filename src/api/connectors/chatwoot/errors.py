"""Erros e helpers de parsing para a API do Chatwoot."""

from __future__ import annotations

from typing import Any

from utils.errors import InboxConflictError, InboxServiceError

CONFLICT_STATUS_CODE = 422


def extract_error_message(body: Any) -> str:
    """Extrai a mensagem de erro do corpo retornado pelo Chatwoot.

    O Chatwoot responde em formatos diferentes conforme o endpoint:
    {"message": "..."}, {"error": "..."} ou {"errors": [...]}.
    """
    if isinstance(body, dict):
        for key in ("message", "error", "description"):
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
        errors = body.get("errors")
        if isinstance(errors, list) and errors:
            return "; ".join(str(item) for item in errors)
    if isinstance(body, str) and body:
        return body[:200]
    return "Erro desconhecido"


def build_api_error(status_code: int, body: Any) -> InboxServiceError:
    """Classifica a resposta de erro do Chatwoot.

    422 (Unprocessable Entity) na criação de contato significa duplicidade
    (telefone/identifier já cadastrado): vira InboxConflictError.
    """
    message = f"chatwoot_http_{status_code}: {extract_error_message(body)}"
    if status_code == CONFLICT_STATUS_CODE:
        return InboxConflictError(message, status_code=status_code, body=body)
    return InboxServiceError(message, status_code=status_code, body=body)
