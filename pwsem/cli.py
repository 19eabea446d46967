"""
pwsem — narzędzie CLI do obliczania semantyki stanów maszyny sterującej.

Użycie:
  pwsem [-v] <komenda> [opcje]

Komendy:
  solve      Oblicza regiony stanów (punkt stały), strefy wyjścia i naruszenia ograniczeń.
  validate   Waliduje dokument modelu (schemat JSON + struktura grafów).
  guard      Parsuje wyrażenie strażnika i pokazuje jego postacie normalne i region.
  universe   Wypisuje uniwersum konfiguracji i region początkowy assembly.
"""

from __future__ import annotations

import argparse
import sys

# Windows: terminal może używać cp1252; wymuszamy UTF-8, żeby polskie znaki
# i symbole (⊥, ∧) były wypisywane poprawnie.
if hasattr(sys.stdout, "reconfigure"):
    sys.stdout.reconfigure(encoding="utf-8", errors="replace")
if hasattr(sys.stderr, "reconfigure"):
    sys.stderr.reconfigure(encoding="utf-8", errors="replace")

from pwsem import __version__
from pwsem._config import get_settings
from pwsem._logging import setup_logging
from pwsem.commands import guard as cmd_guard
from pwsem.commands import solve as cmd_solve
from pwsem.commands import universe as cmd_universe
from pwsem.commands import validate as cmd_validate


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pwsem",
        description="pwsem — semantyka stanów maszyny sterującej nad assembly.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version", action="version", version=f"pwsem {__version__}"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Więcej logów (-v: INFO, -vv: DEBUG).",
    )

    subparsers = parser.add_subparsers(
        title="komendy",
        metavar="<komenda>",
        dest="command",
    )
    subparsers.required = True

    cmd_solve.add_parser(subparsers)
    cmd_validate.add_parser(subparsers)
    cmd_guard.add_parser(subparsers)
    cmd_universe.add_parser(subparsers)

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(get_settings().log_level, args.verbose)
    args.func(args)


if __name__ == "__main__":
    main()
