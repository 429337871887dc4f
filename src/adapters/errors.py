"""Classificação e normalização de erros da API ConLicitação.

Fluxo:
- `classify_error` converte qualquer valor capturado em exatamente uma das
  variantes abaixo (resposta HTTP, transporte sem resposta, genérico,
  desconhecido).
- `handle_api_error` resolve status/mensagem, registra o diagnóstico e devolve
  um `ApiResponse` de falha. Nunca levanta exceção.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Union

import httpx

from core.domain.models import ApiResponse

logger = logging.getLogger(__name__)

DEFAULT_ERROR_STATUS = 500

AUTH_ERROR_MESSAGE = (
    "Erro de autenticação ou autorização com a API ConLicitação. "
    "Verifique o token e o IP cadastrado."
)
NOT_ACCEPTABLE_MESSAGE = (
    "Erro 406 (Not Acceptable) da API ConLicitação. "
    "Verifique os cabeçalhos Accept ou possíveis problemas de IP/Token."
)


def not_found_message(url: str | None) -> str:
    return (
        f"Recurso não encontrado na API ConLicitação ({url}). "
        "Verifique o ID do filtro/boletim."
    )


@dataclass(frozen=True)
class HttpResponseError:
    """A troca HTTP terminou com status fora de 2xx."""

    status: int
    body: Any
    message: str
    url: str | None


@dataclass(frozen=True)
class TransportError:
    """Nenhuma resposta HTTP foi obtida (rede, DNS, timeout...)."""

    message: str
    url: str | None


@dataclass(frozen=True)
class GenericError:
    message: str


@dataclass(frozen=True)
class UnknownError:
    value: object


ClassifiedError = Union[HttpResponseError, TransportError, GenericError, UnknownError]


def _request_url(exc: httpx.HTTPError) -> str | None:
    # `HTTPError.request` levanta RuntimeError quando a exceção não tem request.
    try:
        return str(exc.request.url)
    except RuntimeError:
        return None


def decode_body(response: httpx.Response) -> Any:
    """Corpo JSON decodificado; texto cru (ou None, se vazio) quando não é JSON."""

    try:
        return response.json()
    except ValueError:
        text = response.text
        return text or None


def classify_error(error: object) -> ClassifiedError:
    """Mapeia um valor capturado para a variante correspondente."""

    if isinstance(error, httpx.HTTPStatusError):
        response = error.response
        return HttpResponseError(
            status=response.status_code or DEFAULT_ERROR_STATUS,
            body=decode_body(response),
            message=str(error),
            url=_request_url(error),
        )
    if isinstance(error, httpx.HTTPError):
        return TransportError(message=str(error), url=_request_url(error))
    if isinstance(error, Exception):
        return GenericError(message=str(error))
    return UnknownError(value=error)


def _message_from_body(body: Any) -> str | None:
    if not isinstance(body, dict):
        return None
    response_error = body.get("error") or body.get("message")
    return response_error if isinstance(response_error, str) else None


def _format_body(body: Any) -> str:
    if isinstance(body, str):
        return body
    return json.dumps(body, ensure_ascii=False, indent=2, default=str)


def handle_api_error(
    error: object,
    default_message: str,
    envelope: type[ApiResponse[Any]] = ApiResponse,
) -> ApiResponse[Any]:
    """Converte um erro capturado em envelope de falha e registra o diagnóstico.

    `envelope` é a classe parametrizada devolvida (ex.: `ApiResponse[BoletinsResponse]`),
    para que a falha tenha o mesmo tipo do sucesso da operação.
    """

    classified = classify_error(error)
    status = DEFAULT_ERROR_STATUS

    if isinstance(classified, HttpResponseError):
        status = classified.status
        body_message = _message_from_body(classified.body)
        message = body_message if body_message is not None else (classified.message or default_message)

        logger.error("%s (Status: %s)", default_message, status)
        if classified.body is not None:
            logger.error("Resposta da API: %s", _format_body(classified.body))
        else:
            logger.error("Rastreamento do erro HTTP: %s %s", classified.url, classified.message)

        if status in (401, 403):
            message = AUTH_ERROR_MESSAGE
        elif status == 404:
            message = not_found_message(classified.url)
        elif status == 406:
            message = NOT_ACCEPTABLE_MESSAGE

    elif isinstance(classified, TransportError):
        message = classified.message or default_message
        logger.error("%s (Status: %s)", default_message, status)
        logger.error("Rastreamento do erro HTTP: %s %s", classified.url, classified.message)

    elif isinstance(classified, GenericError):
        message = classified.message
        logger.error("%s (Status: %s, erro não-HTTP): %s", default_message, status, classified.message)

    else:
        message = default_message
        logger.error("%s (Status: %s, erro desconhecido): %r", default_message, status, classified.value)

    return envelope(success=False, error=message, status=status)
