"""Fuente de versiones: relay JSON de YQL (legacy).

Por qué existe:
- La primera versión del cliente corría en navegadores y no podía leer
  jitpack.io cross-origin; YQL re-servía el JSON del destino.
- El servicio público de YQL está retirado: esta fuente es opt-in
  (`--relay` / `JITPACK_LATEST_USE_RELAY=1`) y se mantiene como comportamiento
  documentado.

Sobre esperado:
- `{"query": {"results": {"json": {"version": "..."}}}}`
"""

from __future__ import annotations

import logging

import httpx
from pydantic import ValidationError

from adapters.http_client import build_async_client, get_json
from adapters.version_sources.jitpack import build_jitpack_url, extract_version
from core.config import AppSettings
from core.domain.errors import ParseFailureError
from core.domain.models import RelayEnvelope, VersionQuery
from core.interfaces.version_source import VersionSource

logger = logging.getLogger(__name__)


def build_relay_params(target_url: str) -> dict[str, str]:
    return {
        "q": f'SELECT * FROM json WHERE url="{target_url}"',
        "format": "json",
        "jsonCompat": "new",
    }


class YqlRelaySource(VersionSource):
    """Resuelve la última versión pasando por el relay YQL."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._transport = transport

    def target_url(self, query: VersionQuery) -> str:
        return build_jitpack_url(query, self._settings.jitpack_base_url)

    def build_url(self, query: VersionQuery) -> str:
        params = build_relay_params(self.target_url(query))
        return str(httpx.URL(self._settings.relay_base_url, params=params))

    async def fetch_latest(self, query: VersionQuery) -> str:
        params = build_relay_params(self.target_url(query))
        logger.debug("GET %s (relay for %s)", self._settings.relay_base_url, params["q"])

        async with build_async_client(self._settings, transport=self._transport) as client:
            payload = await get_json(
                client, self._settings.relay_base_url, query=query, params=params
            )

        try:
            envelope = RelayEnvelope.model_validate(payload)
        except ValidationError as exc:
            raise ParseFailureError(
                "Relay envelope lacks query.results.json",
                namespace=query.namespace,
                artifact=query.artifact,
            ) from exc

        return extract_version(envelope.query.results.payload.model_dump(), query)
