"""
Maszyny składowe assembly: stany i przejścia.

Maszyna to skierowany graf nazwanych stanów z jednym pseudostanem
(jedynym punktem wejścia). Pseudostan nie jest stanem "logicznym":
nie występuje w uniwersum konfiguracji ani w strażnikach.

Przejście jest autonomiczne (reaktywne, bez zdarzenia) albo wyzwalane
nazwanym zdarzeniem. Przejścia wskazują stany po nazwie, a rdzeń
pracuje na migawkach grafu, bez odwołań zwrotnych do obiektów edytora.
"""

from __future__ import annotations

from dataclasses import dataclass, field

PSEUDOSTATE = "PseudoState"


# ---------------------------------------------------------------------------
# State / Transition
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class State:
    """Stan maszyny składowej; pseudo=True dla pseudostanu wejściowego."""
    name:   str
    pseudo: bool = False


@dataclass(frozen=True, slots=True)
class Transition:
    """
    Przejście maszyny składowej.

    - source, target: nazwy stanów
    - autonomous:     True dla przejścia reaktywnego (bez zdarzenia)
    - trigger:        nazwa zdarzenia wyzwalającego (None dla autonomicznych)
    """
    source:     str
    target:     str
    autonomous: bool = True
    trigger:    str | None = None

    @property
    def is_triggerable(self) -> bool:
        """Nieautonomiczne i z niepustą nazwą zdarzenia."""
        return not self.autonomous and bool(self.trigger)

    def __str__(self) -> str:
        label = f" [{self.trigger}]" if self.trigger else ""
        return f"{self.source}->{self.target}{label}"


# ---------------------------------------------------------------------------
# Machine
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class Machine:
    """
    Maszyna składowa: nazwa, stany (w kolejności dodania) i przejścia.

    Użycie::

        m1 = Machine("m1")
        m1.add_states("R", "G", "Y")
        m1.set_initial("R")
        m1.add_transition("R", "G")
        m2.add_transition("Off", "On", event="start")
    """
    name:        str
    states:      list[State]      = field(default_factory=list)
    transitions: list[Transition] = field(default_factory=list)

    # ------------------------------------------------------------------
    # Budowanie
    # ------------------------------------------------------------------

    def add_state(self, name: str, pseudo: bool = False) -> State:
        state = State(name, pseudo)
        self.states.append(state)
        return state

    def add_states(self, *names: str) -> None:
        for name in names:
            self.add_state(name)

    def add_pseudostate(self) -> State:
        return self.add_state(PSEUDOSTATE, pseudo=True)

    def add_transition(self, source: str, target: str, event: str | None = None) -> Transition:
        """Dodaje przejście; z podanym event wyzwalane, bez niego autonomiczne."""
        transition = Transition(source, target, autonomous=event is None, trigger=event)
        self.transitions.append(transition)
        return transition

    def set_initial(self, name: str) -> Transition:
        """Oznacza stan jako początkowy (autonomiczne przejście z pseudostanu)."""
        pseudo = self.pseudostate
        if pseudo is None:
            pseudo = self.add_pseudostate()
        return self.add_transition(pseudo.name, name)

    # ------------------------------------------------------------------
    # Odczyt
    # ------------------------------------------------------------------

    @property
    def pseudostate(self) -> State | None:
        for s in self.states:
            if s.pseudo:
                return s
        return None

    def logical_states(self) -> list[State]:
        """Stany bez pseudostanu."""
        return [s for s in self.states if not s.pseudo]

    def state_names(self) -> list[str]:
        """Nazwy stanów logicznych w kolejności dodania."""
        return [s.name for s in self.states if not s.pseudo]

    def has_state(self, name: str) -> bool:
        return any(s.name == name for s in self.states)

    def initial_states(self) -> list[str]:
        """Cele autonomicznych przejść wychodzących z pseudostanu."""
        pseudo = self.pseudostate
        if pseudo is None:
            return []
        return [
            t.target for t in self.transitions
            if t.source == pseudo.name and t.autonomous
        ]

    def events(self) -> list[str]:
        """Nazwy zdarzeń wyzwalających przejścia (bez duplikatów, w kolejności)."""
        seen: dict[str, None] = {}
        for t in self.transitions:
            if t.is_triggerable:
                seen.setdefault(t.trigger, None)
        return list(seen)

    def transitions_for_event(self, event: str) -> list[Transition]:
        return [t for t in self.transitions if t.trigger == event]

    def autonomous_transitions(self) -> list[Transition]:
        """Przejścia autonomiczne między stanami logicznymi."""
        pseudo = self.pseudostate
        pseudo_name = pseudo.name if pseudo is not None else None
        return [t for t in self.transitions if t.autonomous and t.source != pseudo_name]
