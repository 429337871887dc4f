"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from adapters.conlicitacao import ConLicitacaoClient
from core.config import AppSettings, write_user_env_vars
from core.domain.models import ApiResponse

app = typer.Typer(no_args_is_help=True, help="Diagnóstico de configuração e acesso à API.")

_console = Console()


async def _check_api(settings: AppSettings) -> ApiResponse:
    async with ConLicitacaoClient(settings) as client:
        return await client.get_filtros_cliente()


@app.command()
def run(ctx: typer.Context) -> None:
    """Verifica token, URL base e acesso real a `/filtros` (token + IP liberado)."""

    settings: AppSettings = ctx.obj

    table = Table(title="ConLicitação Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    if settings.auth_token:
        table.add_row("Token", "OK", "CONLICITACAO_AUTH_TOKEN definido")
    else:
        table.add_row("Token", "FAIL", "CONLICITACAO_AUTH_TOKEN ausente -> rode `doctor setup-token`")
    table.add_row("Base URL", "OK", settings.base_url)
    table.add_row("Timeout", "OK", f"{settings.http_timeout_seconds:g}s")

    result = asyncio.run(_check_api(settings))
    if result.success:
        table.add_row("API /filtros", "OK", f"HTTP {result.status}")
    else:
        table.add_row("API /filtros", "FAIL", f"HTTP {result.status}: {escape(result.error or '')}")

    _console.print(table)

    if not result.success:
        raise typer.Exit(code=1)


@app.command(name="setup-token")
def setup_token() -> None:
    """Grava o token no .env global do usuário (sem editar arquivos à mão)."""

    token = typer.prompt("Token ConLicitação", hide_input=True, confirmation_prompt=False).strip()
    if not token:
        raise typer.BadParameter("token is required")

    env_path = write_user_env_vars({"CONLICITACAO_AUTH_TOKEN": token})
    _console.print(f"[green]Token salvo em:[/green] {env_path}")
