"""
solver/constraints.py — niezmienniki stanów maszyny sterującej.

Stan może deklarować ograniczenia (zdanie o stanach assembly). Konfiguracje
obliczonego regionu leżące poza regionem ograniczeń są naruszeniami.
"""

from __future__ import annotations

from collections.abc import Mapping

from data_model.assembly import Assembly
from data_model.control import ControlMachine, ControlState

from .region import Region


def constraint_region(state: ControlState, assembly: Assembly) -> Region:
    """Region ograniczeń stanu; ⊤ gdy stan ich nie deklaruje."""
    if state.constraints is None:
        return Region.top(assembly)
    return Region.from_proposition(state.constraints, assembly)


def check_constraints(
    machine: ControlMachine,
    regions: Mapping[ControlState, Region],
) -> dict[ControlState, Region]:
    """
    Dla każdego stanu logicznego z ograniczeniami: region \\ ograniczenia.

    Zwraca tylko niepuste naruszenia; pseudostan nie jest sprawdzany.
    """
    assembly   = machine.assembly
    violations: dict[ControlState, Region] = {}
    for state in machine.logical_states():
        if state.constraints is None:
            continue
        region = regions.get(state)
        if region is None or region.is_empty():
            continue
        outside = region.difference(constraint_region(state, assembly), assembly)
        if not outside.is_empty():
            violations[state] = outside
    return violations
