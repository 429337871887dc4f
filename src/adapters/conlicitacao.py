"""Cliente assíncrono da API ConLicitação (filtros e boletins).

Responsabilidade:
- Emitir um GET por operação usando o cliente httpx compartilhado.
- Checar a forma mínima do corpo (`filtros`/`boletins` como lista, chave
  `boletim` presente).
- Devolver sempre um `ApiResponse`; nenhuma exceção escapa das operações.

Chamadas podem rodar em paralelo (`asyncio.gather`): o cliente não guarda
estado mutável além da configuração do transporte.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from adapters.errors import DEFAULT_ERROR_STATUS, decode_body, handle_api_error
from adapters.http_client import build_api_client
from core.config import AppSettings
from core.domain.models import (
    ApiResponse,
    BoletinsResponse,
    DetalhesBoletimResponse,
    FiltrosClienteResponse,
)

logger = logging.getLogger(__name__)


def _log_unexpected_body(summary: str, body: Any) -> None:
    logger.error("%s: %r", summary, body)
    logger.error("Resposta completa original: %s", json.dumps(body, ensure_ascii=False, indent=2, default=str))


class ConLicitacaoClient:
    """Cliente da API ConLicitação.

    Construído uma vez no início do processo; as configurações (base URL,
    token, timeout) ficam fixas no `httpx.AsyncClient` interno.
    """

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._client = build_api_client(self._settings, transport=transport)

    async def __aenter__(self) -> "ConLicitacaoClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _get_body(self, path: str, params: dict[str, Any] | None = None) -> tuple[int, Any]:
        # Corpo não-JSON (HTML de manutenção, 204 vazio) segue como texto/None
        # e cai na checagem de estrutura da operação.
        response = await self._client.get(path, params=params)
        response.raise_for_status()
        return response.status_code, decode_body(response)

    async def get_filtros_cliente(self) -> ApiResponse[FiltrosClienteResponse]:
        """Busca os filtros disponíveis para o cliente (`GET /filtros`)."""

        try:
            logger.info("Chamando get_filtros_cliente...")
            status, body = await self._get_body("/filtros")

            if not isinstance(body, dict) or not isinstance(body.get("filtros"), list):
                _log_unexpected_body(
                    "Estrutura inesperada na resposta de /filtros (esperado filtros como lista)",
                    body,
                )
                return ApiResponse[FiltrosClienteResponse](
                    success=False,
                    error="Resposta da API de filtros inválida (estrutura inesperada).",
                    status=DEFAULT_ERROR_STATUS,
                )

            logger.info("Sucesso ao buscar filtros.")
            return ApiResponse[FiltrosClienteResponse](
                success=True,
                data=FiltrosClienteResponse.model_validate(body),
                status=status,
            )
        except Exception as exc:
            return handle_api_error(
                exc, "Erro ao buscar filtros do cliente", ApiResponse[FiltrosClienteResponse]
            )

    async def get_boletins(
        self,
        filtro_id: int,
        page: int = 1,
        per_page: int = 10,
    ) -> ApiResponse[BoletinsResponse]:
        """Lista boletins de um filtro, mais recentes primeiro.

        `GET /filtro/{filtro_id}/boletins?page=..&per_page=..&order=desc`
        """

        try:
            logger.info("Chamando get_boletins para filtro %s...", filtro_id)
            status, body = await self._get_body(
                f"/filtro/{filtro_id}/boletins",
                params={"page": page, "per_page": per_page, "order": "desc"},
            )

            if not isinstance(body, dict) or not isinstance(body.get("boletins"), list):
                _log_unexpected_body(
                    f"Estrutura inesperada na resposta de /filtro/{filtro_id}/boletins",
                    body,
                )
                return ApiResponse[BoletinsResponse](
                    success=False,
                    error=f"Resposta da API de boletins (filtro {filtro_id}) inválida.",
                    status=DEFAULT_ERROR_STATUS,
                )

            logger.info("Sucesso ao buscar boletins para filtro %s.", filtro_id)
            return ApiResponse[BoletinsResponse](
                success=True,
                data=BoletinsResponse.model_validate(body),
                status=status,
            )
        except Exception as exc:
            return handle_api_error(
                exc, f"Erro ao buscar boletins do filtro {filtro_id}", ApiResponse[BoletinsResponse]
            )

    async def get_detalhes_boletim(self, boletim_id: int) -> ApiResponse[DetalhesBoletimResponse]:
        """Detalha um boletim específico (`GET /boletim/{boletim_id}`)."""

        try:
            logger.info("Chamando get_detalhes_boletim para boletim %s...", boletim_id)
            status, body = await self._get_body(f"/boletim/{boletim_id}")

            if not isinstance(body, dict) or "boletim" not in body:
                _log_unexpected_body(
                    f"Estrutura inesperada na resposta de /boletim/{boletim_id}",
                    body,
                )
                return ApiResponse[DetalhesBoletimResponse](
                    success=False,
                    error=f"Resposta da API de detalhes do boletim {boletim_id} inválida.",
                    status=DEFAULT_ERROR_STATUS,
                )

            logger.info("Sucesso ao buscar detalhes do boletim %s.", boletim_id)
            return ApiResponse[DetalhesBoletimResponse](
                success=True,
                data=DetalhesBoletimResponse.model_validate(body),
                status=status,
            )
        except Exception as exc:
            return handle_api_error(
                exc,
                f"Erro ao buscar detalhes do boletim {boletim_id}",
                ApiResponse[DetalhesBoletimResponse],
            )
