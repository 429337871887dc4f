"""Configuração de logging (stdlib `logging` + Rich).

Os módulos usam `logging.getLogger(__name__)`; só a borda (CLI) chama
`setup_logging`. A saída vai para stderr para não misturar com `--json`.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

_HANDLER_NAME = "conlicitacao-rich"


def setup_logging(level: str = "INFO") -> None:
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    if any(h.get_name() == _HANDLER_NAME for h in root.handlers):
        return

    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
        markup=False,
    )
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    root.addHandler(handler)
