"""Fuente de versiones: API directa de JitPack.

URL:
- `https://jitpack.io/api/builds/<namespace>/<artifact>/latest`

Implementación:
- Un único GET esperando JSON.
- Se extrae `version` del objeto raíz; el resto de campos se ignora.
"""

from __future__ import annotations

import logging
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from adapters.http_client import build_async_client, get_json
from core.config import AppSettings
from core.domain.errors import ParseFailureError
from core.domain.models import VersionQuery, VersionResponse
from core.interfaces.version_source import VersionSource

logger = logging.getLogger(__name__)


def build_jitpack_url(query: VersionQuery, base_url: str = "https://jitpack.io") -> str:
    namespace = quote(query.namespace, safe="")
    artifact = quote(query.artifact, safe="")
    return f"{base_url.rstrip('/')}/api/builds/{namespace}/{artifact}/latest"


def extract_version(payload: object, query: VersionQuery) -> str:
    """Valida el payload y devuelve `version`, o lanza `ParseFailureError`."""

    if not isinstance(payload, dict):
        raise ParseFailureError(
            f"Expected a JSON object, got {type(payload).__name__}",
            namespace=query.namespace,
            artifact=query.artifact,
        )
    try:
        parsed = VersionResponse.model_validate(payload)
    except ValidationError as exc:
        raise ParseFailureError(
            f"Invalid 'version' field: {exc.errors()[0]['msg']}",
            namespace=query.namespace,
            artifact=query.artifact,
        ) from exc

    if parsed.version is None:
        raise ParseFailureError(
            "Response has no 'version' field",
            namespace=query.namespace,
            artifact=query.artifact,
        )
    return parsed.version


class JitPackSource(VersionSource):
    """Resuelve la última versión contra la API pública de JitPack."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._transport = transport

    def build_url(self, query: VersionQuery) -> str:
        return build_jitpack_url(query, self._settings.jitpack_base_url)

    async def fetch_latest(self, query: VersionQuery) -> str:
        url = self.build_url(query)
        logger.debug("GET %s", url)

        async with build_async_client(self._settings, transport=self._transport) as client:
            payload = await get_json(client, url, query=query)

        return extract_version(payload, query)
