"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación estricta en el borde: `version` debe ser un `str` real,
  no algo que "parezca" un string.
- Los payloads remotos traen muchos campos que no nos interesan; `extra="ignore"`
  los descarta sin ruido.

Nota:
- Estos modelos describen *qué* es la información, no *cómo* se obtiene.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, StrictStr
from pydantic.config import ConfigDict


class VersionQuery(BaseModel):
    """Una petición de resolución (namespace + artifact).

    Se usa para exactamente un request saliente; no se reutiliza.
    """

    model_config = ConfigDict(frozen=True)

    namespace: StrictStr = Field(
        ...,
        description="Agrupación del artefacto en el índice (p.ej. 'com.github.user').",
    )
    artifact: StrictStr = Field(
        ...,
        description="Artefacto dentro del namespace.",
    )


class VersionResponse(BaseModel):
    """Payload de `GET /api/builds/{namespace}/{artifact}/latest`.

    Solo nos interesa `version`; el resto (status, time, etc.) se ignora.
    """

    model_config = ConfigDict(extra="ignore")

    version: StrictStr | None = Field(
        default=None,
        description="Último tag publicado para el artefacto.",
    )


class RelayResults(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    payload: VersionResponse = Field(
        ...,
        alias="json",
        description="Cuerpo JSON del URL destino, re-servido por el relay.",
    )


class RelayQuery(BaseModel):
    model_config = ConfigDict(extra="ignore")

    results: RelayResults = Field(
        ...,
        description="El relay devuelve `null` cuando no pudo obtener el destino.",
    )


class RelayEnvelope(BaseModel):
    """Sobre del relay YQL: `{query: {results: {json: {...}}}}`."""

    model_config = ConfigDict(extra="ignore")

    query: RelayQuery
