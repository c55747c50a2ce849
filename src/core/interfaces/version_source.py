"""Contratos de fuentes de versiones.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- Permite que la API directa y el relay legacy sean intercambiables
  y testeables sin acoplar el Core a implementaciones concretas.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import VersionQuery


@runtime_checkable
class VersionSource(Protocol):
    """Contrato mínimo para una fuente de versiones.

    Reglas de diseño:
    - `fetch_latest` es asíncrono porque hace I/O (HTTP).
    - Un único request por llamada; sin reintentos.
    - Lanza `ParseFailureError` / `TransportFailureError`, nunca errores de httpx.
    """

    def build_url(self, query: VersionQuery) -> str:
        """URL exacta que se consultará para `query`."""

        ...

    async def fetch_latest(self, query: VersionQuery) -> str:
        """Resuelve el último `version` publicado para `query`."""

        ...
