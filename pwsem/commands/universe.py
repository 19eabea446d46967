"""Komenda: pwsem universe — uniwersum konfiguracji i region początkowy assembly."""

from __future__ import annotations

import argparse

from rich import box
from rich.console import Console
from rich.table import Table

from pwsem._config import get_settings
from pwsem._model import load_or_exit

console = Console(width=get_settings().console_width)


def run(args: argparse.Namespace) -> None:
    from solver import Region, generate_universe

    machine  = load_or_exit(args.model, console)
    assembly = machine.assembly

    universe = sorted(generate_universe(assembly))
    console.print(
        f"Assembly [bold]{assembly.assembly_id}[/bold]: "
        f"{len(assembly.machines)} maszyn, {len(universe)} konfiguracji"
    )

    table = Table(box=box.SIMPLE_HEAD, header_style="bold white", show_header=True)
    table.add_column("#", justify="right", style="dim", no_wrap=True)
    table.add_column("KONFIGURACJA", style="cyan", no_wrap=True)
    if args.truth_table:
        table.add_column("WEKTOR", no_wrap=True)

    for i, conf in enumerate(universe, 1):
        row = [str(i), conf.to_display_string()]
        if args.truth_table:
            row.append(conf.to_truth_vector(assembly))
        table.add_row(*row)
    console.print(table)

    console.print(f"Region początkowy: [green]{Region.initial(assembly).to_display_string()}[/green]")


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "universe",
        help="Wypisuje uniwersum konfiguracji i region początkowy assembly.",
    )
    p.add_argument("model", metavar="MODEL", help="Plik JSON z modelem (źródło assembly).")
    p.add_argument(
        "--truth-table",
        action="store_true",
        dest="truth_table",
        help="Dodaj kolumnę z wektorem jedynkowym każdej konfiguracji.",
    )
    p.set_defaults(func=run)
