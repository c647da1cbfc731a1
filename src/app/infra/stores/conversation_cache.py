"""Cache em memória de conversas ativas por telefone normalizado.

Sem TTL por entrada: uma task de fundo limpa o mapa inteiro a cada
`sweep_interval_seconds`. Entre duas limpezas uma conversa encerrada no
Chatwoot pode continuar em cache (janela de staleness aceita).

O ciclo de vida da task acompanha o dono do cache via start()/stop().
"""

from __future__ import annotations

import asyncio
import contextlib
import logging

from config.settings import DEFAULT_CACHE_SWEEP_SECONDS

logger = logging.getLogger(__name__)


class MemoryConversationCache:
    """Mapa identificador → id de conversa com limpeza periódica."""

    def __init__(self, sweep_interval_seconds: float = DEFAULT_CACHE_SWEEP_SECONDS) -> None:
        if sweep_interval_seconds <= 0:
            raise ValueError("sweep_interval_seconds deve ser > 0")
        self._entries: dict[str, int] = {}
        self._sweep_interval = sweep_interval_seconds
        self._sweep_task: asyncio.Task[None] | None = None

    @property
    def sweep_interval_seconds(self) -> float:
        return self._sweep_interval

    @property
    def is_running(self) -> bool:
        """True enquanto a task de limpeza estiver ativa."""
        return self._sweep_task is not None and not self._sweep_task.done()

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, identifier: str) -> int | None:
        return self._entries.get(identifier)

    def put(self, identifier: str, conversation_id: int) -> None:
        self._entries[identifier] = conversation_id

    def clear(self) -> int:
        """Limpa todas as entradas e retorna quantas foram removidas."""
        count = len(self._entries)
        self._entries.clear()
        logger.info(
            "conversation_cache_cleared",
            extra={
                "component": "conversation_cache",
                "action": "clear",
                "result": "ok",
                "items_cleared": count,
            },
        )
        return count

    async def start(self) -> None:
        """Inicia a task de limpeza (idempotente)."""
        if self.is_running:
            return
        self._sweep_task = asyncio.create_task(
            self._sweep_loop(), name="conversation-cache-sweep"
        )
        logger.debug(
            "conversation_cache_sweep_started",
            extra={
                "component": "conversation_cache",
                "interval_seconds": self._sweep_interval,
            },
        )

    async def stop(self) -> None:
        """Cancela a task de limpeza (idempotente)."""
        task = self._sweep_task
        self._sweep_task = None
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
        logger.debug(
            "conversation_cache_sweep_stopped",
            extra={"component": "conversation_cache"},
        )

    async def _sweep_loop(self) -> None:
        while True:
            await asyncio.sleep(self._sweep_interval)
            self.clear()
