"""
solver/configuration.py — konfiguracja: częściowe przypisanie maszyna -> stan.

Konfiguracja to "kostka" w przestrzeni atomów m.S: co najwyżej jeden atom
na maszynę. Porządek wyświetlania jest leksykograficzny po machine_id i nie
wpływa na równość ani implikację.

Konfiguracja jest Mapping[str, str], więc można ją przekazać wprost
do algebra.evaluate(prop, conf).
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from typing import TYPE_CHECKING

from algebra.propositions import Atom, Proposition, conjunction

from .errors import AssemblyMismatch

if TYPE_CHECKING:
    from data_model.assembly import Assembly
    from .region import Region


class Configuration(Mapping[str, str]):
    """
    Niemutowalne częściowe przypisanie machine_id -> state_name, otagowane assembly_id.

    Raises (konstruktor):
        ValueError gdy dwa atomy przypisują różne stany tej samej maszynie.
    """

    __slots__ = ("assembly_id", "_states", "_hash")

    def __init__(self, assembly_id: str, atoms: Iterable[Atom] = ()) -> None:
        states: dict[str, str] = {}
        for atom in atoms:
            current = states.get(atom.machine_id)
            if current is not None and current != atom.state_name:
                raise ValueError(
                    f"Sprzeczne przypisanie maszyny '{atom.machine_id}': "
                    f"{current} vs {atom.state_name}"
                )
            states[atom.machine_id] = atom.state_name
        self.assembly_id = assembly_id
        self._states     = dict(sorted(states.items()))
        self._hash       = hash((assembly_id, tuple(self._states.items())))

    @classmethod
    def from_mapping(cls, assembly_id: str, assignment: Mapping[str, str]) -> Configuration:
        return cls(assembly_id, (Atom(m, s) for m, s in assignment.items()))

    # ------------------------------------------------------------------
    # Mapping
    # ------------------------------------------------------------------

    def __getitem__(self, machine_id: str) -> str:
        return self._states[machine_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._states)

    def __len__(self) -> int:
        return len(self._states)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Configuration):
            return NotImplemented
        return self.assembly_id == other.assembly_id and self._states == other._states

    def __hash__(self) -> int:
        return self._hash

    def __lt__(self, other: Configuration) -> bool:
        return self.atoms < other.atoms

    def __repr__(self) -> str:
        return f"Configuration({self.assembly_id!r}, {self.to_display_string()})"

    def __str__(self) -> str:
        return self.to_display_string()

    # ------------------------------------------------------------------
    # Dostęp
    # ------------------------------------------------------------------

    @property
    def atoms(self) -> tuple[Atom, ...]:
        """Atomy w kolejności machine_id."""
        return tuple(Atom(m, s) for m, s in self._states.items())

    def contains(self, machine_id: str) -> bool:
        return machine_id in self._states

    def get_state_name(self, machine_id: str) -> str | None:
        return self._states.get(machine_id)

    # ------------------------------------------------------------------
    # Krata
    # ------------------------------------------------------------------

    def _check(self, other: Configuration) -> None:
        if self.assembly_id != other.assembly_id:
            raise AssemblyMismatch(self.assembly_id, other.assembly_id)

    def implies(self, other: Configuration) -> bool:
        """
        self implikuje other, gdy każda maszyna ograniczona w other
        ma w self ten sam stan (self jest co najmniej tak szczegółowa).
        """
        self._check(other)
        return all(self._states.get(m) == s for m, s in other._states.items())

    def implies_region(self, region: Region) -> bool:
        """self implikuje co najmniej jedną konfigurację regionu."""
        return any(self.implies(c) for c in region.configurations)

    def intersect(self, other: Configuration) -> Configuration | None:
        """
        Przecięcie kostek: suma przypisań, None przy sprzeczności na wspólnej maszynie.
        """
        self._check(other)
        merged = dict(self._states)
        for m, s in other._states.items():
            current = merged.get(m)
            if current is None:
                merged[m] = s
            elif current != s:
                return None
        return Configuration.from_mapping(self.assembly_id, merged)

    def replace_constraint(self, machine_id: str, new_state: str) -> Configuration:
        """Nowa konfiguracja ze stanem new_state dla machine_id (dodanym, gdy go nie było)."""
        merged = dict(self._states)
        merged[machine_id] = new_state
        return Configuration.from_mapping(self.assembly_id, merged)

    # ------------------------------------------------------------------
    # Konwersje
    # ------------------------------------------------------------------

    def to_proposition(self) -> Proposition:
        """Koniunkcja atomów; pusta konfiguracja to TRUE."""
        return conjunction(self.atoms)

    def to_display_string(self) -> str:
        """Np. "(m1.S1,m2.S3)"."""
        return "(" + ",".join(str(a) for a in self.atoms) + ")"

    def to_truth_vector(self, assembly: Assembly) -> str:
        """
        Wektor jedynkowy na maszynę, w kolejności stanów maszyny:
        "m1: {1, 0, 0} m2: {0, 1}". Maszyna nieograniczona ma same jedynki.
        """
        parts: list[str] = []
        for mid, machine in assembly.machines.items():
            current = self._states.get(mid)
            bits = [
                "1" if current is None or name == current else "0"
                for name in machine.state_names()
            ]
            parts.append(f"{mid}: {{{', '.join(bits)}}}")
        return " ".join(parts)
