"""Fixtures compartidos.

Nada aquí toca la red: cada test inyecta un `httpx.MockTransport`.
"""

from __future__ import annotations

from typing import Callable

import httpx
import pytest

from core.config import AppSettings


@pytest.fixture
def settings() -> AppSettings:
    """Settings deterministas (sin leer `.env` del proyecto ni del usuario)."""

    return AppSettings(_env_file=None)


class RecordingTransport(httpx.MockTransport):
    """MockTransport que guarda cada request recibido."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.requests: list[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)


@pytest.fixture
def json_transport() -> Callable[..., RecordingTransport]:
    """Factory: transporte que siempre responde `status_code` con `payload`."""

    def _make(payload: object, status_code: int = 200) -> RecordingTransport:
        return RecordingTransport(lambda request: httpx.Response(status_code, json=payload))

    return _make


@pytest.fixture
def recording_transport() -> Callable[[Callable[[httpx.Request], httpx.Response]], RecordingTransport]:
    """Factory: transporte con un handler arbitrario (errores, cuerpos no JSON)."""

    return RecordingTransport
