"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts, headers y políticas de proxy para el transporte.
- Facilita testeo: se puede inyectar un `httpx.MockTransport`.

El cliente httpx es el colaborador de transporte: pool de conexiones, TLS y
proxies (`HTTP(S)_PROXY` del entorno) son responsabilidad suya.
"""

from __future__ import annotations

import httpx

from store2.core.config import ClientConfig


def build_async_client(
    config: ClientConfig | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` con defaults seguros.

    Por qué un builder:
    - Centraliza timeouts/headers para que todas las operaciones se comporten igual.
    - Sin reintentos: el cliente solo transporta.
    """

    config = config or ClientConfig()
    headers: dict[str, str] = {
        "User-Agent": config.user_agent,
        "Accept": "application/json",
    }
    return httpx.AsyncClient(
        timeout=httpx.Timeout(config.timeout_seconds),
        limits=httpx.Limits(max_connections=100, max_keepalive_connections=20),
        follow_redirects=False,
        headers=headers,
        transport=transport,
        trust_env=True,
    )
