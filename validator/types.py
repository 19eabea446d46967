"""
validator/types.py — kody błędów i struktury raportu walidacji modelu.

ValidationError — pojedynczy błąd z kodem, ścieżką JSON Pointer,
    komunikatem i mechaniczną instrukcją naprawy.
ValidationReport — wynik walidacji: is_valid, errors, warnings.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Stałe kody błędów walidatora (stage A–E)."""

    # A: JSON Schema dokumentu modelu
    SCHEMA_VIOLATION       = "E_SCHEMA_VIOLATION"

    # B/C: struktura grafów (maszyny składowe i sterująca)
    MISSING_PSEUDOSTATE    = "E_MISSING_PSEUDOSTATE"
    MULTIPLE_PSEUDOSTATES  = "E_MULTIPLE_PSEUDOSTATES"
    DUPLICATE_STATE        = "E_DUPLICATE_STATE"
    UNKNOWN_STATE          = "E_UNKNOWN_STATE"

    # D: strażniki i ograniczenia
    UNKNOWN_MACHINE        = "E_UNKNOWN_MACHINE"

    # E: akcje
    UNKNOWN_EVENT          = "E_UNKNOWN_EVENT"


@dataclass(slots=True)
class ValidationError:
    """
    Pojedynczy błąd walidacji.

    - code:         stały identyfikator klasy błędu (ErrorCode)
    - path:         wskaźnik miejsca błędu, np. "/machines/m1/transitions/0"
    - message:      czytelny opis błędu
    - expected_fix: krótka mechaniczna instrukcja naprawy
    - details:      opcjonalny słownik z dodatkowymi danymi
    """

    code: ErrorCode
    path: str
    message: str
    expected_fix: str
    details: dict[str, Any] | None = None


@dataclass(slots=True)
class ValidationReport:
    """
    Wynik walidacji modelu.

    - is_valid: True gdy brak błędów (warnings nie wpływają)
    - errors:   lista błędów (ValidationError)
    - warnings: lista komunikatów ostrzegawczych (str)
    """

    is_valid: bool
    errors: list[ValidationError] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
