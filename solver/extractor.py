"""
solver/extractor.py — symboliczna konwersja zdania na region (przez DNF).

Algorytm:
  1. zdanie → DNF,
  2. spłaszczenie alternatywy do listy termów,
  3. każdy term (koniunkcja literałów) → zbiór częściowych konfiguracji:
       - atom m.S zawęża przypisanie maszyny m (sprzeczność odrzuca gałąź),
       - NOT m.S rozwija się w alternatywę pozostałych stanów maszyny m,
       - TRUE nic nie zmienia, FALSE odrzuca term,
  4. wynik to minimalizowana suma konfiguracji wszystkich termów.

W odróżnieniu od Region.from_proposition nie enumeruje uniwersum, więc
wynik może zawierać konfiguracje częściowe; oba regiony opisują jednak
ten sam zbiór konfiguracji pełnych.
"""

from __future__ import annotations

from algebra.propositions import (
    Atom,
    FalseProp,
    Not,
    Proposition,
    TrueProp,
    conjuncts,
    disjuncts,
    to_dnf,
)
from data_model.assembly import Assembly

from .configuration import Configuration
from .region import Region


def _known_state(assembly: Assembly, atom: Atom) -> bool:
    machine = assembly.machines.get(atom.machine_id)
    return machine is not None and atom.state_name in machine.state_names()


def _narrow(branches: list[dict[str, str]], machine_id: str, states: list[str]) -> list[dict[str, str]]:
    """Każdą gałąź zawęża do jednego ze stanów `states` maszyny machine_id."""
    result: list[dict[str, str]] = []
    for branch in branches:
        current = branch.get(machine_id)
        for state in states:
            if current is None:
                result.append({**branch, machine_id: state})
            elif current == state:
                result.append(branch)
    return result


def _term_branches(term: Proposition, assembly: Assembly) -> list[dict[str, str]]:
    branches: list[dict[str, str]] = [{}]
    for literal in conjuncts(term):
        match literal:
            case TrueProp():
                continue
            case FalseProp():
                return []
            case Atom():
                if not _known_state(assembly, literal):
                    return []
                branches = _narrow(branches, literal.machine_id, [literal.state_name])
            case Not(Atom() as atom):
                if not _known_state(assembly, atom):
                    continue
                others = [
                    s for s in assembly.machines[atom.machine_id].state_names()
                    if s != atom.state_name
                ]
                branches = _narrow(branches, atom.machine_id, others)
            case _:
                raise TypeError(f"Literał spoza DNF: {literal!r}")
        if not branches:
            return []
    return branches


def extract_region(prop: Proposition, assembly: Assembly) -> Region:
    """Region opisany zdaniem, wyznaczony symbolicznie z DNF."""
    configurations: set[Configuration] = set()
    for term in disjuncts(to_dnf(prop)):
        for branch in _term_branches(term, assembly):
            configurations.add(Configuration.from_mapping(assembly.assembly_id, branch))
    return Region(assembly.assembly_id, frozenset(configurations))
