"""API — camada de borda.

Responsabilidades:
- Cliente do serviço de inbox remoto (Chatwoot)
- Endpoints HTTP de health/readiness

Subpastas:
- connectors/: adapters HTTP para serviços externos
- routes/: endpoints HTTP

NÃO PODE conter: regras de resolução de conversa nem orquestração de use cases.
"""
