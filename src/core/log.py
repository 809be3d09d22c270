"""Logging setup.

Los módulos usan `logging.getLogger(__name__)`; la salida se enruta a stderr
mediante `RichHandler` para no mezclarse con los reportes en stdout.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


_HANDLER_NAME = "worktime-rich"


def configure_logging(level: str | int = "WARNING") -> None:
    """Configura el logger raíz una sola vez (idempotente)."""

    root = logging.getLogger()
    root.setLevel(level)
    if any(h.get_name() == _HANDLER_NAME for h in root.handlers):
        return

    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    root.addHandler(handler)
