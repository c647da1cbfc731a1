"""Exceções de domínio para falhas de infraestrutura e de resolução."""

from __future__ import annotations

from typing import Any


class InfrastructureError(RuntimeError):
    """Base para falhas de infraestrutura."""


class InboxServiceError(InfrastructureError):
    """Falha ao chamar o serviço de inbox remoto (Chatwoot).

    Carrega o status HTTP e o corpo estruturado do erro, quando existirem.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        body: Any = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class InboxConflictError(InboxServiceError):
    """Serviço remoto rejeitou a criação por duplicidade (HTTP 422)."""


class ConversationResolutionError(RuntimeError):
    """Falha dura ao resolver a conversa de um identificador.

    Attributes:
        stage: Etapa em que a resolução falhou (ex: create_contact).
        identifier: Telefone normalizado sendo resolvido.
    """

    def __init__(self, stage: str, identifier: str) -> None:
        super().__init__(f"conversation_resolution_failed:{stage}")
        self.stage = stage
        self.identifier = identifier

    @property
    def status_code(self) -> int | None:
        """Status HTTP da causa remota, se houver."""
        cause = self.__cause__
        if isinstance(cause, InboxServiceError):
            return cause.status_code
        return None
