"""Fuentes de versiones (transportes concretos).

Cada módulo implementa `core.interfaces.version_source.VersionSource`.
"""

from adapters.version_sources.jitpack import JitPackSource
from adapters.version_sources.yql_relay import YqlRelaySource

__all__ = [
	"JitPackSource",
	"YqlRelaySource",
]
