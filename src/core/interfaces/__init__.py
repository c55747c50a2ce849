"""Contratos de fuentes de versiones.

`VersionSource` lo implementan la API directa y el relay legacy; el servicio
solo conoce el Protocol.
"""
