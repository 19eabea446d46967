"""
solver/region.py — region (semantyka): zminimalizowany zbiór konfiguracji.

Region reprezentuje sumę kostek (konfiguracji) nad atomami m.S jednego
assembly. Zbiór jest antyłańcuchem względem implikacji: żadna konfiguracja
nie implikuje innej, różnej od siebie; zostają tylko najbardziej ogólne.

  ⊥ (bottom) — region pusty
  ⊤ (top)    — pełne wyenumerowane uniwersum

Operacje kratowe zwracają nowe regiony; Region jest niemutowalny.
Operacje na regionach różnych assembly rzucają AssemblyMismatch.

Dopełnienie ma dwie strategie, które muszą dawać ten sam wynik:
  - enumeracyjna (domyślna): konfiguracje uniwersum nieimplikujące regionu,
  - symboliczna: negacja to_proposition() wartościowana na uniwersum.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from enum import StrEnum

from algebra.propositions import Atom, Not, Proposition, disjunction, evaluate
from data_model.assembly import Assembly

from .configuration import Configuration
from .errors import AssemblyMismatch
from .universe import generate_universe, initial_configurations


class ComplementStrategy(StrEnum):
    ENUMERATIVE = "enumerative"
    SYMBOLIC    = "symbolic"


def minimize(configurations: Iterable[Configuration]) -> frozenset[Configuration]:
    """
    Usuwa każdą konfigurację implikującą inną, różną od siebie.

    Implikacja jest przechodnia i antysymetryczna (z dokładnością do równości),
    więc jedno przejście wystarcza, a wynik jest idempotentny.
    """
    items = set(configurations)
    return frozenset(
        c for c in items
        if not any(c != d and c.implies(d) for d in items)
    )


@dataclass(frozen=True, slots=True)
class Region:
    """
    Zbiór konfiguracji otagowany assembly_id.

    Konstruktor minimalizuje podany zbiór, więc Region(aid, confs) zawsze
    spełnia niezmiennik antyłańcucha. `==` porównuje strukturalnie,
    equals() przez wzajemną implikację (na zminimalizowanych regionach
    oba porównania się pokrywają).
    """
    assembly_id:    str
    configurations: frozenset[Configuration] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        for c in self.configurations:
            if c.assembly_id != self.assembly_id:
                raise AssemblyMismatch(self.assembly_id, c.assembly_id)
        object.__setattr__(self, "configurations", minimize(self.configurations))

    # ------------------------------------------------------------------
    # Konstruktory
    # ------------------------------------------------------------------

    @classmethod
    def bottom(cls, assembly_id: str) -> Region:
        return cls(assembly_id)

    @classmethod
    def top(cls, assembly: Assembly) -> Region:
        return cls(assembly.assembly_id, frozenset(generate_universe(assembly)))

    @classmethod
    def initial(cls, assembly: Assembly) -> Region:
        """Iloczyn stanów początkowych maszyn assembly."""
        return cls(assembly.assembly_id, frozenset(initial_configurations(assembly)))

    @classmethod
    def of_atom(cls, assembly_id: str, atom: Atom) -> Region:
        """Region jednej konfiguracji z jednym atomem: {(m.S)}."""
        return cls(assembly_id, frozenset({Configuration(assembly_id, [atom])}))

    @classmethod
    def from_proposition(cls, prop: Proposition, assembly: Assembly) -> Region:
        """Konfiguracje uniwersum, na których zdanie jest prawdziwe."""
        return cls(
            assembly.assembly_id,
            frozenset(u for u in generate_universe(assembly) if evaluate(prop, u)),
        )

    # ------------------------------------------------------------------
    # Kolekcja
    # ------------------------------------------------------------------

    def __iter__(self) -> Iterator[Configuration]:
        return iter(sorted(self.configurations))

    def __len__(self) -> int:
        return len(self.configurations)

    def __contains__(self, conf: object) -> bool:
        return conf in self.configurations

    def __str__(self) -> str:
        return self.to_display_string()

    def is_empty(self) -> bool:
        return not self.configurations

    def add_configuration(self, conf: Configuration) -> Region:
        """
        Dodaje konfigurację: nowa bardziej szczegółowa od istniejącej jest pomijana,
        istniejące bardziej szczegółowe od nowej są usuwane.
        """
        self._check_conf(conf)
        return Region(self.assembly_id, self.configurations | {conf})

    # ------------------------------------------------------------------
    # Krata
    # ------------------------------------------------------------------

    def _check(self, other: Region) -> None:
        if self.assembly_id != other.assembly_id:
            raise AssemblyMismatch(self.assembly_id, other.assembly_id)

    def _check_conf(self, conf: Configuration) -> None:
        if self.assembly_id != conf.assembly_id:
            raise AssemblyMismatch(self.assembly_id, conf.assembly_id)

    def _check_assembly(self, assembly: Assembly) -> None:
        if self.assembly_id != assembly.assembly_id:
            raise AssemblyMismatch(self.assembly_id, assembly.assembly_id)

    def minimize(self) -> Region:
        return Region(self.assembly_id, minimize(self.configurations))

    def union(self, other: Region) -> Region:
        self._check(other)
        return Region(self.assembly_id, self.configurations | other.configurations)

    def intersection(self, other: Region) -> Region:
        """Przecięcia parami (iloczyn kartezjański), puste przecięcia odrzucone."""
        self._check(other)
        result: set[Configuration] = set()
        for c1 in self.configurations:
            for c2 in other.configurations:
                c = c1.intersect(c2)
                if c is not None:
                    result.add(c)
        return Region(self.assembly_id, frozenset(result))

    def complement(
        self,
        assembly: Assembly,
        strategy: ComplementStrategy = ComplementStrategy.ENUMERATIVE,
    ) -> Region:
        if strategy == ComplementStrategy.SYMBOLIC:
            return self.complement_symbolic(assembly)
        return self.complement_enumerative(assembly)

    def complement_enumerative(self, assembly: Assembly) -> Region:
        """Konfiguracje uniwersum, które nie implikują żadnej konfiguracji regionu."""
        self._check_assembly(assembly)
        return Region(
            self.assembly_id,
            frozenset(u for u in generate_universe(assembly) if not u.implies_region(self)),
        )

    def complement_symbolic(self, assembly: Assembly) -> Region:
        """NOT(to_proposition()) wartościowane na uniwersum."""
        self._check_assembly(assembly)
        return Region.from_proposition(Not(self.to_proposition()), assembly)

    def difference(self, other: Region, assembly: Assembly) -> Region:
        """self ∩ ¬other."""
        self._check(other)
        return self.intersection(other.complement(assembly))

    def implies(self, other: Region) -> bool:
        """Każda konfiguracja self implikuje jakąś konfigurację other."""
        self._check(other)
        return all(c.implies_region(other) for c in self.configurations)

    def equals(self, other: Region) -> bool:
        return self.implies(other) and other.implies(self)

    def implies_universal(self, other: Region, assembly: Assembly) -> bool:
        """
        Implikacja rozstrzygana na uniwersum: każda pełna konfiguracja
        pokryta przez self jest pokryta przez other.
        """
        self._check(other)
        self._check_assembly(assembly)
        return all(
            u.implies_region(other)
            for u in generate_universe(assembly)
            if u.implies_region(self)
        )

    def simplify(self, assembly: Assembly) -> Region:
        """
        Dla każdego atomu m.S: gdy region pokrywa wszystkie konfiguracje
        uniwersum z m.S, konfiguracja (m.S) zastępuje je w regionie.
        Zbiór opisywanych konfiguracji pełnych się nie zmienia.
        """
        self._check_assembly(assembly)
        universe = generate_universe(assembly)
        result   = set(self.configurations)
        for atom in assembly.guards():
            covered = [u for u in universe if u.get(atom.machine_id) == atom.state_name]
            if covered and all(u.implies_region(self) for u in covered):
                result.add(Configuration(self.assembly_id, [atom]))
        return Region(self.assembly_id, frozenset(result))

    # ------------------------------------------------------------------
    # Konwersje
    # ------------------------------------------------------------------

    def to_proposition(self) -> Proposition:
        """Alternatywa koniunkcji atomów kolejnych konfiguracji; ⊥ to FALSE."""
        return disjunction(c.to_proposition() for c in self)

    def to_display_string(self) -> str:
        """Np. "(m1.G,m2.On) (m1.R,m2.On)"; region pusty to "⊥"."""
        if not self.configurations:
            return "⊥"
        return " ".join(c.to_display_string() for c in self)
