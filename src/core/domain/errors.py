"""Errores tipados del lookup de versiones.

Por qué una jerarquía propia:
- Los adaptadores envuelven errores de httpx/pydantic para que el Core
  no dependa de librerías de I/O.
- La CLI y la forma con callback pueden tratar todo como `VersionLookupError`.
"""

from __future__ import annotations

from typing import Any


class VersionLookupError(Exception):
    """Base de todos los fallos de resolución."""

    def __init__(self, message: str, *, namespace: Any = None, artifact: Any = None) -> None:
        super().__init__(message)
        self.namespace = namespace
        self.artifact = artifact


class InvalidInputError(VersionLookupError):
    """Entradas inválidas; se detecta antes de cualquier actividad de red."""


class ParseFailureError(VersionLookupError):
    """La respuesta no contiene un `version` string en la ruta esperada."""


class TransportFailureError(VersionLookupError):
    """Fallo de red, timeout o respuesta HTTP no exitosa."""

    def __init__(
        self,
        message: str,
        *,
        namespace: Any = None,
        artifact: Any = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message, namespace=namespace, artifact=artifact)
        self.status_code = status_code
