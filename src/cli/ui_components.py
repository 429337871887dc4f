"""Componentes de UI para CLI (Rich).

Por que separar componentes:
- Evita misturar lógica de comandos com detalhes visuais.
- Itens malformados da API viram uma linha de aviso em vez de derrubar a tabela.
"""

from __future__ import annotations

from typing import Any, Iterable

from pydantic import ValidationError
from rich.markup import escape
from rich.table import Table

from core.domain.models import BoletimResumo, Filtro


def build_filtros_table(items: Iterable[Any]) -> Table:
    """Tabela Rich com os filtros do cliente."""

    table = Table(title="Filtros ConLicitação")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Descrição", style="white")
    table.add_column("Último boletim", style="green")
    table.add_column("Fechamento", style="magenta")

    for item in items:
        try:
            filtro = Filtro.model_validate(item)
        except ValidationError:
            table.add_row("?", f"[red]item inválido:[/red] {escape(repr(item))}", "", "")
            continue
        ultimo = filtro.ultimo_boletim
        table.add_row(
            str(filtro.id),
            escape(filtro.descricao),
            str(ultimo.id) if ultimo else "-",
            (ultimo.datahora_fechamento or "-") if ultimo else "-",
        )
    return table


def build_boletins_table(items: Iterable[Any], *, filtro_id: int) -> Table:
    table = Table(title=f"Boletins do filtro {filtro_id}")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Campos", style="dim")

    for item in items:
        try:
            boletim = BoletimResumo.model_validate(item)
        except ValidationError:
            table.add_row("?", f"[red]item inválido:[/red] {escape(repr(item))}")
            continue
        extras = boletim.model_extra or {}
        table.add_row(str(boletim.id), escape(", ".join(f"{k}={v}" for k, v in extras.items())))
    return table
