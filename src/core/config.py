"""Configuração do Core.

Por que aqui:
- Centraliza variáveis de ambiente (pydantic-settings) sem contaminar a CLI.
- O token é lido uma única vez e entregue ao cliente já construído.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BASE_URL = "https://consultaonline.conlicitacao.com.br/api"


def get_user_config_dir() -> Path:
    """Diretório onde `doctor setup-token` guarda o `.env` do usuário.

    Lido por `AppSettings` depois do `.env` do projeto, então o token vale
    para qualquer diretório de onde a CLI for chamada.
    """

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "conlicitacao"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "conlicitacao"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "conlicitacao"
    return Path.home() / ".config" / "conlicitacao"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str], env_path: Path | None = None) -> Path:
    """Mescla `values` no `.env` do usuário; chaves existentes são sobrescritas."""

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# ConLicitação client config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuração central da aplicação.

    Por que pydantic-settings:
    - Tipagem + validação na borda (env vars) sem lógica espalhada.
    - `CONLICITACAO_AUTH_TOKEN` é a única configuração obrigatória em produção;
      sua ausência não impede a inicialização.
    """

    model_config = SettingsConfigDict(
        env_prefix="CONLICITACAO_",
        extra="ignore",
        case_sensitive=False,
        # Ordem: projeto primeiro (dev), depois config global do usuário.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    auth_token: str | None = Field(
        default=None,
        description="Token enviado no cabeçalho `x-auth-token`.",
    )
    base_url: str = Field(
        default=DEFAULT_BASE_URL,
        min_length=8,
        description="URL base da API ConLicitação.",
    )
    http_timeout_seconds: float = Field(
        default=25.0,
        gt=0,
        description="Timeout por requisição (segundos).",
    )
    log_level: str = Field(
        default="INFO",
        min_length=1,
        description="Nível do log de diagnóstico (DEBUG, INFO, WARNING...).",
    )
