"""Entrypoint do chatwoot-bridge.

Expõe a aplicação ASGI (FastAPI) com health/readiness e controla o ciclo de
vida do relay: a limpeza periódica do cache de conversas roda enquanto a
aplicação estiver de pé.

Uso (produção):
    uvicorn app.app:app --host 0.0.0.0 --port 8080

Uso (desenvolvimento):
    uvicorn app.app:app --reload --host 0.0.0.0 --port 8080
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI

from api.routes import create_api_router
from app.bootstrap import get_inbox_relay, initialize_app, validate_runtime_settings
from config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

# Inicializar logging ANTES de qualquer import que use logger
initialize_app()

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Gerencia ciclo de vida da aplicação.

    Startup:
    - Valida configurações (erros só são logados)
    - Inicia o relay (task de limpeza do cache)

    Shutdown:
    - Encerra o relay
    """
    logger.info("app_starting", extra={"service": "chatwoot-bridge"})
    validate_runtime_settings()

    relay = get_inbox_relay()
    await relay.start()
    app.state.inbox_relay = relay

    yield

    logger.info("app_shutting_down", extra={"service": "chatwoot-bridge"})
    await relay.stop()


def create_app() -> FastAPI:
    """Cria e configura a aplicação FastAPI."""
    fastapi_app = FastAPI(
        title="chatwoot-bridge",
        description="Relay de mensagens do bot para o inbox do Chatwoot",
        version="1.0.0",
        lifespan=lifespan,
    )

    fastapi_app.include_router(create_api_router())

    logger.info("app_configured", extra={"service": "chatwoot-bridge"})

    return fastapi_app


# Aplicação ASGI exposta para uvicorn
app = create_app()


def main() -> None:
    """Entrypoint para execução direta (desenvolvimento)."""
    import uvicorn

    logger.info("Starting chatwoot-bridge in development mode")
    uvicorn.run(
        "app.app:app",
        host="0.0.0.0",
        port=8080,
        reload=True,
    )


if __name__ == "__main__":
    main()
