"""CLI da ConLicitação (Typer + Rich).

Comandos de leitura sobre a API: filtros do cliente, boletins de um filtro e
detalhe de boletim. Toda falha chega como `ApiResponse` (sem exceções); a CLI
apenas imprime o erro e sai com código 1.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any, Awaitable, Callable, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.syntax import Syntax

from adapters.conlicitacao import ConLicitacaoClient
from adapters.json_exporter import dump_result, export_result_json
from cli import doctor
from cli.ui_components import build_boletins_table, build_filtros_table
from core.config import AppSettings
from core.domain.models import ApiResponse
from core.log import setup_logging

app = typer.Typer(no_args_is_help=True, help="Cliente da API ConLicitação (filtros e boletins).")
app.add_typer(doctor.app, name="doctor")

_console = Console()

JsonOption = typer.Option(False, "--json", help="Imprime o envelope completo em JSON.")
OutputOption = typer.Option(None, "--output", "-o", help="Salva o envelope em um arquivo JSON.")


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Ativa logs DEBUG."),
) -> None:
    # Configuração lida uma única vez; os subcomandos recebem via `ctx.obj`.
    settings = AppSettings()
    ctx.obj = settings
    setup_logging("DEBUG" if verbose else settings.log_level)


def _call(
    settings: AppSettings,
    operation: Callable[[ConLicitacaoClient], Awaitable[ApiResponse[Any]]],
) -> ApiResponse[Any]:
    async def _runner() -> ApiResponse[Any]:
        async with ConLicitacaoClient(settings) as client:
            return await operation(client)

    return asyncio.run(_runner())


def _finish(
    result: ApiResponse[Any],
    *,
    as_json: bool,
    output: Path | None,
    render: Callable[[Any], None],
) -> None:
    if output is not None:
        path = export_result_json(result=result, output_path=output)
        _console.print(f"[green]Resultado salvo em:[/green] {path}")

    if as_json:
        typer.echo(dump_result(result))
    elif result.success:
        render(result.data)
    else:
        _console.print(f"[red]Erro (HTTP {result.status}):[/red] {escape(result.error or '')}")

    if not result.success:
        raise typer.Exit(code=1)


@app.command()
def filtros(ctx: typer.Context, as_json: bool = JsonOption, output: Optional[Path] = OutputOption) -> None:
    """Lista os filtros salvos do cliente."""

    result = _call(ctx.obj, lambda client: client.get_filtros_cliente())
    _finish(
        result,
        as_json=as_json,
        output=output,
        render=lambda data: _console.print(build_filtros_table(data.filtros)),
    )


@app.command()
def boletins(
    ctx: typer.Context,
    filtro_id: int = typer.Argument(..., help="ID do filtro."),
    page: int = typer.Option(1, "--page", min=1, help="Página."),
    per_page: int = typer.Option(10, "--per-page", min=1, help="Boletins por página."),
    as_json: bool = JsonOption,
    output: Optional[Path] = OutputOption,
) -> None:
    """Lista boletins de um filtro (mais recentes primeiro)."""

    result = _call(ctx.obj, lambda client: client.get_boletins(filtro_id, page=page, per_page=per_page))
    _finish(
        result,
        as_json=as_json,
        output=output,
        render=lambda data: _console.print(build_boletins_table(data.boletins, filtro_id=filtro_id)),
    )


@app.command()
def boletim(
    ctx: typer.Context,
    boletim_id: int = typer.Argument(..., help="ID do boletim."),
    as_json: bool = JsonOption,
    output: Optional[Path] = OutputOption,
) -> None:
    """Mostra o detalhe de um boletim."""

    def _render(data: Any) -> None:
        text = json.dumps(data.model_dump(mode="json"), ensure_ascii=False, indent=2)
        _console.print(Syntax(text, "json"))

    result = _call(ctx.obj, lambda client: client.get_detalhes_boletim(boletim_id))
    _finish(result, as_json=as_json, output=output, render=_render)


def run() -> None:
    app()
