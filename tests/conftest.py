from __future__ import annotations

import asyncio
import json
from typing import Any, Callable

import httpx
import pytest

from adapters.conlicitacao import ConLicitacaoClient
from core.config import AppSettings

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(auth_token="token-de-teste", _env_file=None)


@pytest.fixture
def call(settings: AppSettings):
    """Executa uma operação do cliente contra um handler fake e devolve o envelope."""

    def _call(handler: Handler, operation: Callable[[ConLicitacaoClient], Any]) -> Any:
        async def _runner() -> Any:
            transport = httpx.MockTransport(handler)
            async with ConLicitacaoClient(settings, transport=transport) as client:
                return await operation(client)

        return asyncio.run(_runner())

    return _call


def json_handler(status: int, payload: Any, seen: list[httpx.Request] | None = None) -> Handler:
    def _handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        # `json=None` would send an empty body; encode explicitly so `null` is sent.
        return httpx.Response(
            status,
            content=json.dumps(payload).encode("utf-8"),
            headers={"Content-Type": "application/json"},
        )

    return _handler
