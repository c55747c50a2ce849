"""Logging de la CLI.

Los módulos solo hacen `logging.getLogger(__name__)`; el handler (rich) se
instala una vez, en el entrypoint.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(level: str | int = "WARNING", *, console: Console | None = None) -> None:
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=False,
        show_path=False,
        markup=False,
    )
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[handler],
        force=True,
    )
    # httpx loguea cada request en INFO.
    logging.getLogger("httpx").setLevel(max(level, logging.WARNING))
