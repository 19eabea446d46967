"""Konfiguracja CLI — zmienne środowiskowe (opcjonalnie z pliku .env)."""

from __future__ import annotations

import os
import pathlib
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv(pathlib.Path.cwd() / ".env")

_COMPLEMENT_CHOICES = ("enumerative", "symbolic")


@dataclass(frozen=True, slots=True)
class Settings:
    log_level:     str
    console_width: int
    complement:    str


def get_settings() -> Settings:
    complement = os.getenv("PWSEM_COMPLEMENT", "enumerative").lower()
    if complement not in _COMPLEMENT_CHOICES:
        complement = "enumerative"
    return Settings(
        log_level     = os.getenv("PWSEM_LOG_LEVEL", "WARNING").upper(),
        console_width = int(os.getenv("PWSEM_CONSOLE_WIDTH", "160")),
        complement    = complement,
    )
