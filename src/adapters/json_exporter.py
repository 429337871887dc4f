"""Exportação JSON do envelope de resultado.

Por que JSON:
- Interoperabilidade com planilhas/pipelines que consomem os boletins.
- Permite guardar a resposta bruta da API junto com o status da chamada.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from core.domain.models import ApiResponse


def dump_result(result: ApiResponse[Any]) -> str:
    payload = {k: v for k, v in result.model_dump(mode="json").items() if v is not None}
    return json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True)


def export_result_json(*, result: ApiResponse[Any], output_path: Path) -> Path:
    """Exporta `ApiResponse` para JSON UTF-8 com formato estável."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(dump_result(result) + "\n", encoding="utf-8")
    return output_path
