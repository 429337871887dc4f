from __future__ import annotations

import json

import httpx
import pytest
from typer.testing import CliRunner

from adapters.conlicitacao import ConLicitacaoClient
from cli import doctor
from cli import main as cli_main
from core.config import AppSettings, write_user_env_vars

runner = CliRunner()


def _handler(request: httpx.Request) -> httpx.Response:
    path = request.url.path
    if path.endswith("/filtros"):
        return httpx.Response(
            200,
            json={"filtros": [{"id": 1, "descricao": "Limpeza", "ultimo_boletim": {"id": 77}}]},
        )
    if path.endswith("/boletins"):
        return httpx.Response(200, json={"boletins": [{"id": 77}]})
    if path.endswith("/boletim/77"):
        return httpx.Response(200, json={"boletim": {"id": 77}})
    return httpx.Response(404, json={"error": "not found"})


@pytest.fixture(autouse=True)
def fake_api(monkeypatch):
    monkeypatch.setenv("CONLICITACAO_AUTH_TOKEN", "tok")

    def factory(settings):
        return ConLicitacaoClient(settings, transport=httpx.MockTransport(_handler))

    monkeypatch.setattr(cli_main, "ConLicitacaoClient", factory)
    monkeypatch.setattr(doctor, "ConLicitacaoClient", factory)


def test_filtros_table():
    result = runner.invoke(cli_main.app, ["filtros"])

    assert result.exit_code == 0
    assert "Limpeza" in result.output
    assert "77" in result.output


def test_boletins_output_file(tmp_path):
    out = tmp_path / "boletins.json"

    result = runner.invoke(cli_main.app, ["boletins", "5", "--page", "2", "--output", str(out)])

    assert result.exit_code == 0
    payload = json.loads(out.read_text(encoding="utf-8"))
    assert payload == {"success": True, "status": 200, "data": {"boletins": [{"id": 77}]}}


def test_boletim_not_found_exits_with_error():
    result = runner.invoke(cli_main.app, ["boletim", "99"])

    assert result.exit_code == 1
    assert "404" in result.output


def test_boletim_detail():
    result = runner.invoke(cli_main.app, ["boletim", "77"])

    assert result.exit_code == 0
    assert "boletim" in result.output


def test_doctor_run_reports_api_ok():
    result = runner.invoke(cli_main.app, ["doctor", "run"])

    assert result.exit_code == 0
    assert "API /filtros" in result.output


def test_setup_token_writes_user_env(tmp_path, monkeypatch):
    env_path = tmp_path / ".env"
    monkeypatch.setattr(
        doctor,
        "write_user_env_vars",
        lambda values: write_user_env_vars(values, env_path=env_path),
    )

    result = runner.invoke(cli_main.app, ["doctor", "setup-token"], input="segredo\n")

    assert result.exit_code == 0
    assert "CONLICITACAO_AUTH_TOKEN=segredo" in env_path.read_text(encoding="utf-8")


@pytest.mark.parametrize("args", [["filtros"], ["boletins", "5"], ["doctor", "run"]])
def test_settings_are_read_once_per_invocation(monkeypatch, args):
    built: list[AppSettings] = []

    def counting_settings():
        settings = AppSettings(_env_file=None)
        built.append(settings)
        return settings

    seen: list[AppSettings] = []

    def factory(settings):
        seen.append(settings)
        return ConLicitacaoClient(settings, transport=httpx.MockTransport(_handler))

    monkeypatch.setattr(cli_main, "AppSettings", counting_settings)
    monkeypatch.setattr(cli_main, "ConLicitacaoClient", factory)
    monkeypatch.setattr(doctor, "ConLicitacaoClient", factory)

    result = runner.invoke(cli_main.app, args)

    assert result.exit_code == 0
    assert len(built) == 1
    assert len(seen) == 1
    assert seen[0] is built[0]
