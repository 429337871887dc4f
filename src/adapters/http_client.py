"""Wrapper de httpx.

Por que um wrapper:
- Padroniza base URL, timeout e cabeçalhos (`x-auth-token`, `Accept`).
- Facilita teste: um `httpx.MockTransport` pode substituir a rede.
"""

from __future__ import annotations

import logging

import httpx

from core.config import AppSettings

logger = logging.getLogger(__name__)

AUTH_HEADER = "x-auth-token"


def build_api_client(
    settings: AppSettings | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
    extra_headers: dict[str, str] | None = None,
) -> httpx.AsyncClient:
    """Cria o `httpx.AsyncClient` ligado à API ConLicitação.

    Token ausente não é erro aqui: emitimos um aviso e seguimos com token
    vazio, então as requisições falham depois com 401/403.
    """

    settings = settings or AppSettings()
    token = settings.auth_token or ""
    if not token:
        logger.warning(
            "Token de autenticação da ConLicitação (CONLICITACAO_AUTH_TOKEN) não definido."
        )

    headers: dict[str, str] = {
        AUTH_HEADER: token,
        "Accept": "application/json",
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        base_url=settings.base_url,
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        transport=transport,
    )
