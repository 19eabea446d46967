"""
Assembly — nazwana kolekcja maszyn składowych oraz akcje (machine.event).

Assembly dostarcza rdzeniowi:
  - uniwersum: iloczyn kartezjański stanów logicznych wszystkich maszyn,
  - przypisania początkowe: iloczyn stanów początkowych każdej maszyny.

Kombinacje generowane są indeksowo (itertools.product po listach nazw),
bez klonowania grafów maszyn.
"""

from __future__ import annotations

import itertools
import re
from collections.abc import Iterator
from dataclasses import dataclass, field

from algebra.parser import ParseError
from algebra.propositions import Atom

from .machines import Machine

# Wzorzec akcji: machine.event, np. "m2.start"
_ACTION_RE = re.compile(r"^\s*([A-Za-z0-9_]+)\s*\.\s*([A-Za-z0-9_]+)\s*$")


# ---------------------------------------------------------------------------
# Action
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Action:
    """Efekt deklaratywny: w maszynie machine_id odpal przejścia zdarzenia event."""
    machine_id: str
    event:      str

    def __str__(self) -> str:
        return f"{self.machine_id}.{self.event}"

    @classmethod
    def parse(cls, text: str, assembly: Assembly | None = None) -> Action:
        """
        Parsuje akcję "machine.event".

        Raises:
            ParseError przy błędnym formacie lub nieznanej maszynie.
        """
        m = _ACTION_RE.match(text)
        if not m:
            raise ParseError(f"Nieprawidłowy format akcji: '{text}'", 0)
        machine_id, event = m.group(1), m.group(2)
        if assembly is not None and machine_id not in assembly.machines:
            raise ParseError(
                f"Maszyna '{machine_id}' nie istnieje w assembly '{assembly.assembly_id}'",
                m.start(1),
            )
        return cls(machine_id, event)


# ---------------------------------------------------------------------------
# Assembly
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class Assembly:
    """
    Nazwana mapa machine_id -> Machine (kolejność wstawienia zachowana).

    assembly_id taguje wszystkie konfiguracje i regiony zbudowane nad tym assembly.
    """
    assembly_id: str
    machines:    dict[str, Machine] = field(default_factory=dict)

    def add_machine(self, machine_id: str, machine: Machine) -> None:
        self.machines[machine_id] = machine

    def machine(self, machine_id: str) -> Machine | None:
        return self.machines.get(machine_id)

    def __contains__(self, machine_id: object) -> bool:
        return machine_id in self.machines

    # ------------------------------------------------------------------
    # Enumeracja przypisań
    # ------------------------------------------------------------------

    def iter_assignments(self) -> Iterator[dict[str, str]]:
        """
        Wszystkie pełne przypisania machine_id -> stan logiczny.

        Maszyny bez stanów logicznych są pomijane.
        """
        return self._product({mid: m.state_names() for mid, m in self.machines.items()})

    def iter_initial_assignments(self) -> Iterator[dict[str, str]]:
        """
        Przypisania początkowe (iloczyn stanów początkowych maszyn).

        Maszyny bez stanów początkowych są pomijane; gdy żadna ich nie ma,
        zwracane jest jedno puste przypisanie (TRUE).
        """
        return self._product({mid: m.initial_states() for mid, m in self.machines.items()})

    @staticmethod
    def _product(choices: dict[str, list[str]]) -> Iterator[dict[str, str]]:
        ids     = [mid for mid, states in choices.items() if states]
        options = [choices[mid] for mid in ids]
        for combo in itertools.product(*options):
            yield dict(zip(ids, combo))

    # ------------------------------------------------------------------
    # Katalogi strażników i akcji
    # ------------------------------------------------------------------

    def guards(self) -> list[Atom]:
        """Każdy atom machine.state (bez pseudostanów)."""
        return [
            Atom(mid, name)
            for mid, m in self.machines.items()
            for name in m.state_names()
        ]

    def actions(self) -> list[Action]:
        """Każda akcja machine.event, np. [t1.e, t1.f, t2.e, t2.f]."""
        return [
            Action(mid, event)
            for mid, m in self.machines.items()
            for event in m.events()
        ]
