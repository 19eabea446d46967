"""Logowanie CLI przez rich.logging.RichHandler."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

_VERBOSITY = {1: logging.INFO, 2: logging.DEBUG}


def setup_logging(level: str, verbose: int = 0, console: Console | None = None) -> None:
    """
    Instaluje RichHandler na loggerze głównym.

    -v podnosi poziom do INFO, -vv (i więcej) do DEBUG; bez -v obowiązuje
    poziom z konfiguracji (PWSEM_LOG_LEVEL).
    """
    if verbose:
        resolved = _VERBOSITY.get(min(verbose, 2), logging.DEBUG)
    else:
        resolved = logging.getLevelName(level)
        if not isinstance(resolved, int):
            resolved = logging.WARNING
    logging.basicConfig(
        level=resolved,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console or Console(stderr=True), show_path=False)],
        force=True,
    )
