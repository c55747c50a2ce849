"""Dominio del lookup de versiones.

- `models`: query, respuesta de JitPack y sobre del relay (Pydantic v2).
- `errors`: errores tipados (entrada inválida, parseo, transporte).
"""
