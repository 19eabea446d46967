"""Komenda: pwsem solve — oblicza regiony stanów maszyny sterującej (punkt stały)."""

from __future__ import annotations

import argparse

from rich import box
from rich.console import Console
from rich.table import Table

from pwsem._config import get_settings
from pwsem._model import load_or_exit, print_report

console = Console(width=get_settings().console_width)


# ---------------------------------------------------------------------------
# Wyświetlanie wyników
# ---------------------------------------------------------------------------

def _show_states(result, simplify: bool) -> None:
    from solver import sorted_zones

    assembly = result.machine.assembly
    table = Table(box=box.SIMPLE_HEAD, header_style="bold white", show_header=True)
    table.add_column("STAN",           style="bold cyan", no_wrap=True)
    table.add_column("REGION",         no_wrap=False)
    table.add_column("STREFY WYJŚCIA", style="yellow", no_wrap=False)
    table.add_column("NARUSZENIA",     style="red", no_wrap=False)

    for state in result.machine.states:
        region = result.regions[state]
        if simplify:
            region = region.simplify(assembly)
        zones     = sorted_zones(result.exit_zones.get(state, set()))
        violation = result.violations.get(state)
        table.add_row(
            state.name,
            region.to_display_string(),
            " ".join(str(z) for z in zones) or "[dim]-[/dim]",
            violation.to_display_string() if violation is not None else "[dim]-[/dim]",
        )
    console.print(table)


def _show_transitions(result, simplify: bool) -> None:
    assembly = result.machine.assembly
    console.print("\n[bold]Semantyka przejść:[/bold]")
    table = Table(box=box.SIMPLE_HEAD, header_style="bold white", show_header=True)
    table.add_column("PRZEJŚCIE", style="bold cyan", no_wrap=True)
    table.add_column("RODZAJ",    no_wrap=True)
    table.add_column("STRAŻNIK",  no_wrap=False)
    table.add_column("AKCJE",     no_wrap=False)
    table.add_column("REGION",    no_wrap=False)

    for t, region in result.transition_regions.items():
        if simplify:
            region = region.simplify(assembly)
        if not t.enabled:
            kind = "[dim]wyłączone[/dim]"
        elif t.is_triggerable:
            kind = f"zdarzenie [green]{t.trigger}[/green]"
        elif t.source.pseudo:
            kind = "początkowe"
        else:
            kind = "reaktywne"
        table.add_row(
            f"{t.source.name} → {t.target.name}",
            kind,
            str(t.guard),
            ", ".join(str(a) for a in t.actions) or "[dim]-[/dim]",
            region.to_display_string(),
        )
    console.print(table)


def _show_universe(assembly) -> None:
    from solver import generate_universe

    universe = generate_universe(assembly)
    console.print(f"\n[bold]Uniwersum[/bold] ({len(universe)} konfiguracji):")
    for conf in sorted(universe):
        console.print(f"  {conf.to_display_string()}")


# ---------------------------------------------------------------------------
# Główna logika
# ---------------------------------------------------------------------------

def run(args: argparse.Namespace) -> None:
    from solver import SemanticsError, SemanticsSolver

    machine  = load_or_exit(args.model, console)
    assembly = machine.assembly
    console.print(
        f"Model: maszyna sterująca [bold]{machine.name}[/bold]  "
        f"assembly=[cyan]{assembly.assembly_id}[/cyan]  "
        f"{len(assembly.machines)} maszyn składowych, "
        f"{len(machine.states)} stanów, {len(machine.transitions)} przejść"
    )

    try:
        result = SemanticsSolver(machine).solve()
    except SemanticsError as e:
        console.print(f"[red]Błąd modelu:[/red] {e}")
        if e.report is not None:
            print_report(e.report, console)
        raise SystemExit(1)

    console.print(
        f"Punkt stały osiągnięty: [green]{result.iterations}[/green] iteracji, "
        f"{len(result.updates)} aktualizacji regionów\n"
    )
    _show_states(result, args.simplify)

    if args.transitions:
        _show_transitions(result, args.simplify)

    if args.show_universe:
        _show_universe(assembly)

    if result.violations:
        console.print(
            f"\n[red]Naruszenia ograniczeń:[/red] "
            f"{', '.join(s.name for s in result.violations)}"
        )


# ---------------------------------------------------------------------------
# Rejestracja parsera
# ---------------------------------------------------------------------------

def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "solve",
        help="Oblicza regiony stanów maszyny sterującej (punkt stały).",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Wczytuje model (assembly + maszyna sterująca) z pliku JSON, waliduje go
i uruchamia solver punktu stałego. Dla każdego stanu wypisuje region
konfiguracji, strefy wyjścia i naruszenia zadeklarowanych ograniczeń.

Przykłady:
  pwsem solve models/traffic.json
  pwsem solve models/traffic.json --simplify --transitions
  pwsem -vv solve models/traffic.json --show-universe
        """,
    )
    p.add_argument("model", metavar="MODEL", help="Plik JSON z modelem.")
    p.add_argument(
        "--simplify",
        action="store_true",
        help="Upraszczaj wyświetlane regiony (pochłanianie atomów m.S).",
    )
    p.add_argument(
        "--transitions",
        action="store_true",
        help="Wyświetl także semantykę przejść (wkład każdego przejścia).",
    )
    p.add_argument(
        "--show-universe",
        action="store_true",
        dest="show_universe",
        help="Wyświetl uniwersum konfiguracji assembly.",
    )
    p.set_defaults(func=run)
