from __future__ import annotations

import logging

import httpx
import pytest

from adapters.errors import (
    AUTH_ERROR_MESSAGE,
    GenericError,
    HttpResponseError,
    TransportError,
    UnknownError,
    classify_error,
    handle_api_error,
)

URL = "https://consultaonline.conlicitacao.com.br/api/filtros"


def _status_error(status: int, **response_kwargs) -> httpx.HTTPStatusError:
    request = httpx.Request("GET", URL)
    response = httpx.Response(status, request=request, **response_kwargs)
    return httpx.HTTPStatusError(f"HTTP {status}", request=request, response=response)


def test_classify_status_error_keeps_status_body_and_url():
    classified = classify_error(_status_error(418, json={"error": "teapot"}))

    assert classified == HttpResponseError(
        status=418,
        body={"error": "teapot"},
        message="HTTP 418",
        url=URL,
    )


def test_classify_status_error_with_text_body():
    classified = classify_error(_status_error(502, text="Bad Gateway"))

    assert isinstance(classified, HttpResponseError)
    assert classified.body == "Bad Gateway"


def test_classify_status_error_with_empty_body():
    classified = classify_error(_status_error(502))

    assert isinstance(classified, HttpResponseError)
    assert classified.body is None


def test_classify_transport_error():
    exc = httpx.ConnectTimeout("timed out", request=httpx.Request("GET", URL))

    assert classify_error(exc) == TransportError(message="timed out", url=URL)


def test_classify_transport_error_without_request():
    assert classify_error(httpx.TransportError("falhou")) == TransportError(message="falhou", url=None)


def test_classify_generic_and_unknown():
    assert classify_error(ValueError("ruim")) == GenericError(message="ruim")
    assert classify_error("string solta") == UnknownError(value="string solta")


def test_handle_generic_error_uses_its_message():
    result = handle_api_error(RuntimeError("quebrou"), "Erro padrão")

    assert result.model_dump() == {"success": False, "data": None, "error": "quebrou", "status": 500}


@pytest.mark.parametrize("value", [None, 42, {"a": 1}])
def test_handle_unknown_value_uses_default_message(value):
    result = handle_api_error(value, "Erro padrão")

    assert result.success is False
    assert result.error == "Erro padrão"
    assert result.status == 500


def test_handle_text_body_falls_back_to_transport_message():
    result = handle_api_error(_status_error(503, text="Service Unavailable"), "Erro padrão")

    assert result.status == 503
    assert result.error == "HTTP 503"


def test_auth_message_overrides_body_message():
    result = handle_api_error(_status_error(403, json={"message": "IP não autorizado"}), "Erro padrão")

    assert result.status == 403
    assert result.error == AUTH_ERROR_MESSAGE


def test_logs_status_and_pretty_body(caplog):
    with caplog.at_level(logging.ERROR):
        handle_api_error(_status_error(500, json={"error": "x"}), "Erro ao buscar filtros do cliente")

    messages = [r.getMessage() for r in caplog.records]
    assert messages[0] == "Erro ao buscar filtros do cliente (Status: 500)"
    assert '"error": "x"' in messages[1]


def test_logs_url_when_no_body(caplog):
    exc = httpx.ConnectError("recusada", request=httpx.Request("GET", URL))

    with caplog.at_level(logging.ERROR):
        handle_api_error(exc, "Erro padrão")

    assert URL in caplog.text
    assert "recusada" in caplog.text
