"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts, headers y redirects para todas las fuentes.
- Facilita testeo: se puede inyectar un `httpx.MockTransport`.
"""

from __future__ import annotations

from typing import Any

import httpx

from core.config import AppSettings
from core.domain.errors import ParseFailureError, TransportFailureError
from core.domain.models import VersionQuery


def build_async_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` con defaults seguros.

    Por qué un builder:
    - Centraliza timeouts/headers para que la API directa y el relay se comporten igual.
    - `transport` permite sustituir la red en tests.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json",
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        transport=transport,
    )


async def get_json(
    client: httpx.AsyncClient,
    url: str,
    *,
    query: VersionQuery,
    params: dict[str, str] | None = None,
) -> Any:
    """GET + decode JSON, traduciendo errores de httpx a errores del dominio.

    - Red/timeout/no-2xx => `TransportFailureError`.
    - Cuerpo que no es JSON => `ParseFailureError`.
    """

    try:
        response = await client.get(url, params=params)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise TransportFailureError(
            f"HTTP {exc.response.status_code} from {exc.request.url}",
            namespace=query.namespace,
            artifact=query.artifact,
            status_code=exc.response.status_code,
        ) from exc
    except httpx.HTTPError as exc:
        raise TransportFailureError(
            f"Request to {url} failed: {exc!r}",
            namespace=query.namespace,
            artifact=query.artifact,
        ) from exc

    try:
        return response.json()
    except ValueError as exc:
        raise ParseFailureError(
            f"Response from {response.url} is not valid JSON",
            namespace=query.namespace,
            artifact=query.artifact,
        ) from exc
