"""
Maszyna sterująca (wyróżniona): stany z ograniczeniami, przejścia ze strażnikami i akcjami.

Dla każdego stanu maszyny sterującej solver oblicza region konfiguracji
assembly, w których stan może być aktywny. Stany i przejścia porównywane
są po tożsamości (eq=False), mogą więc być kluczami słowników wynikowych
nawet przy powtórzonych nazwach.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from algebra.propositions import TRUE, Proposition

from .assembly import Action, Assembly
from .machines import PSEUDOSTATE


@dataclass(eq=False, slots=True)
class ControlState:
    """
    Stan maszyny sterującej.

    - pseudo:       True dla pseudostanu wejściowego
    - constraints:  zadeklarowany niezmiennik stanu (None = brak ograniczeń)
    """
    name:        str
    pseudo:      bool = False
    constraints: Proposition | None = None

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"ControlState({self.name!r})"


@dataclass(eq=False, slots=True)
class ControlTransition:
    """
    Przejście maszyny sterującej.

    - guard:      zdanie o stanach assembly (domyślnie TRUE)
    - actions:    sekwencja akcji machine.event wykonywana po strażniku
    - autonomous: True dla przejścia reaktywnego (pochłania strefy wyjścia)
    - trigger:    nazwa zdarzenia (przejście wyzwalane)
    - enabled:    przejścia wyłączone są całkowicie pomijane przez solver
    """
    source:     ControlState
    target:     ControlState
    guard:      Proposition = TRUE
    actions:    tuple[Action, ...] = ()
    autonomous: bool = False
    trigger:    str | None = None
    enabled:    bool = True

    @property
    def is_triggerable(self) -> bool:
        return not self.autonomous and bool(self.trigger)

    def __str__(self) -> str:
        label = f" [{self.trigger}]" if self.trigger else ""
        acts  = f" / {', '.join(str(a) for a in self.actions)}" if self.actions else ""
        return f"{self.source.name}->{self.target.name}{label} {{{self.guard}}}{acts}"

    def __repr__(self) -> str:
        return f"ControlTransition({self.source.name!r} -> {self.target.name!r})"


@dataclass(slots=True)
class ControlMachine:
    """Maszyna sterująca osadzona w assembly."""
    name:        str
    assembly:    Assembly
    states:      list[ControlState]      = field(default_factory=list)
    transitions: list[ControlTransition] = field(default_factory=list)

    # ------------------------------------------------------------------
    # Budowanie
    # ------------------------------------------------------------------

    def add_state(self, name: str, constraints: Proposition | None = None) -> ControlState:
        state = ControlState(name, constraints=constraints)
        self.states.append(state)
        return state

    def add_pseudostate(self) -> ControlState:
        state = ControlState(PSEUDOSTATE, pseudo=True)
        self.states.append(state)
        return state

    def add_transition(
        self,
        source:     ControlState,
        target:     ControlState,
        guard:      Proposition = TRUE,
        actions:    tuple[Action, ...] | list[Action] = (),
        event:      str | None = None,
        autonomous: bool | None = None,
        enabled:    bool = True,
    ) -> ControlTransition:
        """
        Dodaje przejście. Bez event przejście jest autonomiczne (reaktywne),
        chyba że jawnie podano autonomous=False.
        """
        if autonomous is None:
            autonomous = event is None
        transition = ControlTransition(
            source=source,
            target=target,
            guard=guard,
            actions=tuple(actions),
            autonomous=autonomous,
            trigger=event,
            enabled=enabled,
        )
        self.transitions.append(transition)
        return transition

    # ------------------------------------------------------------------
    # Odczyt
    # ------------------------------------------------------------------

    @property
    def pseudostate(self) -> ControlState | None:
        for s in self.states:
            if s.pseudo:
                return s
        return None

    def state(self, name: str) -> ControlState | None:
        for s in self.states:
            if s.name == name:
                return s
        return None

    def logical_states(self) -> list[ControlState]:
        return [s for s in self.states if not s.pseudo]

    def outgoing(self, state: ControlState) -> list[ControlTransition]:
        return [t for t in self.transitions if t.source is state]
