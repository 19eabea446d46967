"""Wczytywanie modelu i wspólne wyświetlanie raportów dla komend CLI."""

from __future__ import annotations

import json
import pathlib

from rich import box
from rich.console import Console
from rich.table import Table

from algebra.parser import ParseError
from data_model.control import ControlMachine
from solver.errors import SemanticsError
from solver.loader import load_model_json
from validator.types import ValidationReport


def load_or_exit(path_str: str, console: Console) -> ControlMachine:
    """Wczytuje model z pliku JSON; przy błędzie wypisuje komunikat i kończy (kod 1)."""
    path = pathlib.Path(path_str)
    if not path.exists():
        console.print(f"[red]Brak pliku modelu:[/red] {path}")
        raise SystemExit(1)

    try:
        return load_model_json(path)
    except json.JSONDecodeError as exc:
        console.print(f"[red]Błąd parsowania JSON:[/red] {exc}")
        raise SystemExit(1)
    except ParseError as exc:
        console.print(f"[red]Błąd parsowania wyrażenia:[/red] {exc}")
        raise SystemExit(1)
    except SemanticsError as exc:
        console.print(f"[red]Błąd modelu:[/red] {exc}")
        if exc.report is not None:
            print_report(exc.report, console)
        raise SystemExit(1)


def print_report(report: ValidationReport, console: Console) -> None:
    """Tabela błędów i lista ostrzeżeń raportu walidacji."""
    if report.errors:
        table = Table(box=box.SIMPLE, show_header=True, header_style="bold")
        table.add_column("Kod",      style="yellow", no_wrap=True)
        table.add_column("Ścieżka", style="cyan",   no_wrap=True)
        table.add_column("Komunikat")
        table.add_column("Poprawka", style="dim")

        for e in report.errors:
            table.add_row(e.code, e.path, e.message, e.expected_fix)

        console.print(table)

    if report.warnings:
        console.print("[yellow]Ostrzeżenia:[/yellow]")
        for w in report.warnings:
            console.print(f"  [yellow]·[/yellow] {w}")
