"""
solver/exit_zones.py — wykrywanie stref wyjścia regionu.

Strefa wyjścia to autonomiczne przejście maszyny składowej, które może
odpalić wewnątrz regionu (region ∩ {m.S} ≠ ⊥) i wyprowadzić poza niego
(region ∩ {m.T} = ⊥). Przejścia reaktywne maszyny sterującej pochłaniają
strefę, gdy ich strażnik to TRUE albo atom równy celowi strefy.
"""

from __future__ import annotations

from dataclasses import dataclass

from algebra.propositions import Atom
from data_model.assembly import Assembly
from data_model.machines import Transition

from .region import Region


@dataclass(frozen=True, slots=True)
class ExitZone:
    machine_id: str
    transition: Transition
    source:     Atom
    target:     Atom

    def __str__(self) -> str:
        return f"{self.machine_id}: ({self.source.state_name}->{self.target.state_name})"


def find_exit_zones(region: Region, assembly: Assembly) -> set[ExitZone]:
    """
    Wszystkie strefy wyjścia regionu.

    Przejścia z pseudostanów są pomijane (atomy pseudostanów nie występują
    w regionach).
    """
    zones: set[ExitZone] = set()
    aid = region.assembly_id
    for mid, machine in assembly.machines.items():
        for t in machine.autonomous_transitions():
            src = Atom(mid, t.source)
            tgt = Atom(mid, t.target)
            live    = not region.intersection(Region.of_atom(aid, src)).is_empty()
            covered = not region.intersection(Region.of_atom(aid, tgt)).is_empty()
            if live and not covered:
                zones.add(ExitZone(mid, t, src, tgt))
    return zones


def sorted_zones(zones: set[ExitZone]) -> list[ExitZone]:
    """Kolejność deterministyczna (do wyświetlania i testów)."""
    return sorted(zones, key=lambda z: (z.machine_id, z.source, z.target))
