"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que adaptadores (HTTP/relay) lean config de forma consistente.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "jitpack-latest"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "jitpack-latest"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "jitpack-latest"
    return Path.home() / ".config" / "jitpack-latest"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="JITPACK_LATEST_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    user_agent: str = Field(
        default="jitpack-latest/0.1",
        min_length=1,
        description="User-Agent enviado al índice de builds.",
    )

    jitpack_base_url: str = Field(
        default="https://jitpack.io",
        min_length=8,
        description="Base URL del índice de builds (API de JitPack).",
    )
    relay_base_url: str = Field(
        default="https://query.yahooapis.com/v1/public/yql",
        min_length=8,
        description="Endpoint del relay JSON (YQL, legacy).",
    )
    use_relay: bool = Field(
        default=False,
        description="Resolver a través del relay YQL en lugar de la API directa.",
    )

    log_level: str = Field(
        default="WARNING",
        min_length=1,
        description="Nivel de logging para la CLI (DEBUG, INFO, WARNING...).",
    )
