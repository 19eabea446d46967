"""Komenda: pwsem validate — waliduje dokument modelu (schemat + struktura grafów)."""

from __future__ import annotations

import argparse
import dataclasses
import json
import pathlib
import sys

from rich.console import Console

from pwsem._config import get_settings
from pwsem._model import print_report

console = Console(width=get_settings().console_width)


def run(args: argparse.Namespace) -> None:
    from algebra.parser import ParseError
    from solver.loader import load_model
    from validator import ModelValidator

    # --- Wczytaj dokument -------------------------------------------------
    model_path = pathlib.Path(args.model)
    if not model_path.exists():
        console.print(f"[red]Brak pliku modelu:[/red] {model_path}")
        raise SystemExit(1)

    try:
        doc = json.loads(model_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        console.print(f"[red]Błąd parsowania JSON:[/red] {exc}")
        raise SystemExit(1)

    # --- Walidacja --------------------------------------------------------
    validator = ModelValidator()
    report    = validator.validate_document(doc)
    if report.is_valid:
        try:
            report = validator.validate(load_model(doc))
        except ParseError as exc:
            console.print(f"[red]Błąd parsowania wyrażenia:[/red] {exc}")
            raise SystemExit(1)

    # --- Wynik na konsoli -------------------------------------------------
    if report.is_valid:
        console.print(f"[green]OK[/green]  Model [bold]{model_path.name}[/bold] jest poprawny.")
    else:
        console.print(
            f"[red]BŁĄD[/red]  Model [bold]{model_path.name}[/bold]: "
            f"{len(report.errors)} błąd(ów)."
        )
    print_report(report, console)

    # --- Wyjście JSON (opcjonalnie) ---------------------------------------
    if args.json_output:
        out = {
            "is_valid": report.is_valid,
            "errors": [dataclasses.asdict(e) for e in report.errors],
            "warnings": report.warnings,
        }
        print(json.dumps(out, ensure_ascii=False, indent=2))

    if not report.is_valid:
        sys.exit(1)


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "validate",
        help="Waliduje dokument modelu (schemat JSON + struktura grafów).",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Etapy walidacji:
  A  schemat JSON dokumentu
  B  maszyny składowe (pseudostan, unikalne stany, przejścia)
  C  maszyna sterująca
  D  strażniki i ograniczenia (maszyny assembly)
  E  akcje (maszyna istnieje, zdarzenie ma przejścia)

Przykłady:
  pwsem validate models/traffic.json
  pwsem validate models/traffic.json --json-output
        """,
    )
    p.add_argument("model", metavar="MODEL", help="Plik JSON z modelem.")
    p.add_argument(
        "--json-output",
        action="store_true",
        dest="json_output",
        help="Wypisz raport także jako JSON na stdout.",
    )
    p.set_defaults(func=run)
