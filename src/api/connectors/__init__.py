"""Connectors — adapters de borda para APIs externas.

Estrutura:
- chatwoot/: API do Chatwoot (inbox de atendimento humano)

Cada serviço externo tem seu próprio connector, garantindo SRP e isolamento
de falhas.
"""

__all__: list[str] = []
