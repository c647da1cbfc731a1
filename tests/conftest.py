"""Configuração do pytest para o chatwoot-bridge."""

import sys
from pathlib import Path

# Adiciona src/ (imports absolutos) e a raiz do projeto (tests.fakes) ao PYTHONPATH
root_path = Path(__file__).parent.parent
for path in (root_path / "src", root_path):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))
