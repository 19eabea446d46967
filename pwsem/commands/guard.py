"""Komenda: pwsem guard — analiza wyrażenia strażnika nad assembly modelu."""

from __future__ import annotations

import argparse

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from pwsem._config import get_settings
from pwsem._model import load_or_exit

console = Console(width=get_settings().console_width)


def _mark(ok: bool) -> str:
    return "[green]✓ zgodne[/green]" if ok else "[red]✗ NIEZGODNE[/red]"


def _show_parse_error(expr: str, exc) -> None:
    console.print(f"[red]Błąd parsowania:[/red] {escape(exc.message)}")
    console.print(f"  {escape(expr)}")
    console.print(f"  {' ' * exc.position}[red]^[/red]")


def run(args: argparse.Namespace) -> None:
    from algebra import ParseError, parse, to_cnf, to_dnf, to_nnf
    from solver import ComplementStrategy, Region, extract_region

    machine  = load_or_exit(args.model, console)
    assembly = machine.assembly

    try:
        prop = parse(args.expr, assembly)
    except ParseError as exc:
        _show_parse_error(args.expr, exc)
        raise SystemExit(1)

    strategy = ComplementStrategy(args.complement or get_settings().complement)

    region    = Region.from_proposition(prop, assembly)
    extracted = extract_region(prop, assembly)
    comp_enum = region.complement_enumerative(assembly)
    comp_sym  = region.complement_symbolic(assembly)
    chosen    = comp_sym if strategy == ComplementStrategy.SYMBOLIC else comp_enum

    same_extracted = (
        region.implies_universal(extracted, assembly)
        and extracted.implies_universal(region, assembly)
    )

    table = Table(box=box.SIMPLE_HEAD, header_style="bold white", show_header=False)
    table.add_column("", style="bold cyan", no_wrap=True)
    table.add_column("", no_wrap=False)
    table.add_row("wyrażenie", escape(str(prop)))
    table.add_row("NNF",       escape(str(to_nnf(prop))))
    table.add_row("CNF",       escape(str(to_cnf(prop))))
    table.add_row("DNF",       escape(str(to_dnf(prop))))
    table.add_row("region",    escape(region.to_display_string()))
    table.add_row("region (DNF)", f"{escape(extracted.to_display_string())}  {_mark(same_extracted)}")
    table.add_row(f"dopełnienie ({strategy})", escape(chosen.to_display_string()))
    table.add_row("strategie dopełnienia", _mark(comp_enum == comp_sym))
    console.print(table)


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "guard",
        help="Parsuje wyrażenie strażnika i pokazuje jego postacie normalne i region.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Gramatyka (priorytet: OR najniższy, AND, NOT najwyższy):
  expression ::= term ( "OR" term )*
  term       ::= factor ( "AND" factor )*
  factor     ::= "NOT" factor | "TRUE" | "FALSE" | "(" expression ")" | machine.state

Przykłady:
  pwsem guard models/traffic.json "m1.R AND m2.Off"
  pwsem guard models/traffic.json "NOT (m1.G OR m1.Y)" --complement symbolic
        """,
    )
    p.add_argument("model", metavar="MODEL", help="Plik JSON z modelem (źródło assembly).")
    p.add_argument("expr", metavar="EXPR", help="Wyrażenie strażnika.")
    p.add_argument(
        "--complement",
        choices=["enumerative", "symbolic"],
        default=None,
        help="Strategia dopełnienia (domyślnie: PWSEM_COMPLEMENT lub enumerative).",
    )
    p.set_defaults(func=run)

