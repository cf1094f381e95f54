"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts, headers y verificación TLS para todas las APIs.
- Facilita testeo: los tests inyectan un `httpx.MockTransport`.
"""

from __future__ import annotations

import httpx

from core.config import AppSettings


def default_headers(settings: AppSettings) -> dict[str, str]:
    return {
        "User-Agent": settings.user_agent,
        "Accept": "application/json",
    }


def build_async_client(
    settings: AppSettings | None = None,
    *,
    verify: bool | None = None,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` con defaults seguros.

    Por qué un builder:
    - Centraliza timeouts/headers para que todos los servicios se comporten igual.
    - `verify=None` usa `settings.verify_tls`; el perfil del cloud puede desactivarlo.
    """

    settings = settings or AppSettings()
    headers = default_headers(settings)
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        verify=settings.verify_tls if verify is None else verify,
        transport=transport,
    )
