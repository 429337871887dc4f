"""Entry point de desenvolvimento (sem instalação).

Permite executar a CLI com:
- `python -m main ...`

Motivo:
- O código vive em `src/` (layout tipo "src"); sem `pip install -e .` o Python
  não encontra `cli`, `core`, etc.
"""

from __future__ import annotations

import sys
from pathlib import Path


def main() -> None:
    project_root = Path(__file__).resolve().parent
    src = project_root / "src"
    if str(src) not in sys.path:
        sys.path.insert(0, str(src))

    from cli.main import run  # noqa: PLC0415

    run()


if __name__ == "__main__":
    main()
