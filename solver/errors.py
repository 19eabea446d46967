"""
solver/errors.py — wyjątki rdzenia semantyki.

Wszystkie dziedziczą po ValueError (błędne dane wejściowe, nie awaria
środowiska). Żaden nie jest ponawiany: przerywa operację, która go wywołała.

Błędy wykryte przez walidator modelu niosą pełny raport (atrybut report),
żeby wywołujący mógł pokazać wszystkie problemy, nie tylko pierwszy.
"""

from __future__ import annotations

from validator.types import ErrorCode, ValidationReport


class SemanticsError(ValueError):
    """Baza błędów rdzenia."""

    report: ValidationReport | None = None


class AssemblyMismatch(SemanticsError):
    """Operacja na regionach/konfiguracjach różnych assembly (błąd programisty)."""

    def __init__(self, left: str, right: str) -> None:
        super().__init__(f"Niezgodne assembly: '{left}' vs '{right}'")
        self.left  = left
        self.right = right


class UnknownEvent(SemanticsError):
    """Akcja wskazuje zdarzenie bez żadnego przejścia w maszynie."""

    def __init__(self, machine_id: str, event: str, report: ValidationReport | None = None) -> None:
        super().__init__(f"Maszyna '{machine_id}' nie ma przejść dla zdarzenia '{event}'")
        self.machine_id = machine_id
        self.event      = event
        self.report     = report


class UnknownMachine(SemanticsError):
    """Odwołanie do maszyny spoza assembly."""

    def __init__(
        self,
        machine_id:  str,
        assembly_id: str = "",
        report:      ValidationReport | None = None,
    ) -> None:
        where = f" w assembly '{assembly_id}'" if assembly_id else ""
        super().__init__(f"Nieznana maszyna '{machine_id}'{where}")
        self.machine_id = machine_id
        self.report     = report


class ModelError(SemanticsError):
    """Niepoprawny model (wykryty przed rozpoczęciem iteracji)."""

    def __init__(self, message: str, report: ValidationReport | None = None) -> None:
        super().__init__(message)
        self.report = report


class MissingPseudostate(ModelError):
    """Maszyna bez pseudostanu (brak punktu wejścia)."""


class UnknownState(ModelError):
    """Przejście wskazuje stan nieobecny w grafie."""


def raise_for_report(report: ValidationReport) -> None:
    """
    Podnosi wyjątek odpowiadający pierwszemu błędowi raportu.

    Nic nie robi, gdy raport nie zawiera błędów.
    """
    if not report.errors:
        return
    first   = report.errors[0]
    details = first.details or {}
    match first.code:
        case ErrorCode.MISSING_PSEUDOSTATE:
            raise MissingPseudostate(first.message, report)
        case ErrorCode.UNKNOWN_STATE:
            raise UnknownState(first.message, report)
        case ErrorCode.UNKNOWN_MACHINE:
            raise UnknownMachine(details.get("machine", "?"), details.get("assembly", ""), report)
        case ErrorCode.UNKNOWN_EVENT:
            raise UnknownEvent(details.get("machine", "?"), details.get("event", "?"), report)
        case _:
            raise ModelError(first.message, report)
