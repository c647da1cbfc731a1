"""App — coração do sistema: orquestração, casos de uso e infraestrutura.

Subpastas:
- bootstrap/: composition root (factories, inicialização, wiring)
- use_cases/: casos de uso (relay de mensagens para o inbox)
- services/: serviços de aplicação (resolução de conversa)
- domain/: regras puras (normalização de telefone)
- infra/: implementações concretas de estado (cache de conversas)
- protocols/: contratos/interfaces
- observability/: correlation_id e métricas

Padrão: app executa; api adapta; config configura; utils apoia.
"""
