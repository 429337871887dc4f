"""Script de execução.

Por que existe:
- Permite executar a CLI com `python -m main` a partir de `src/`.
- Mantém um entrypoint simples além do script `conlicitacao`.
"""

from __future__ import annotations

import sys

# Terminais Windows (cp1252) quebram com acentos nos logs/tabelas.
if sys.platform == "win32":
    sys.stdout.reconfigure(encoding="utf-8")
    sys.stderr.reconfigure(encoding="utf-8")

from cli.main import run


def main() -> None:
    run()


if __name__ == "__main__":
    main()
