"""
data_model — migawki grafów maszyn przekazywane do rdzenia semantyki.

Użycie:
  from data_model import Machine, Assembly, ControlMachine, Action, ...

Moduły:
  machines — State, Transition, Machine, PSEUDOSTATE
  assembly — Assembly, Action
  control  — ControlState, ControlTransition, ControlMachine

Rdzeń tylko czyta te struktury; wyniki (regiony, strefy wyjścia) zwraca
w nowych słownikach, nie modyfikując stanów ani przejść.
"""

from .machines import (
    PSEUDOSTATE,
    State,
    Transition,
    Machine,
)
from .assembly import (
    Action,
    Assembly,
)
from .control import (
    ControlState,
    ControlTransition,
    ControlMachine,
)

__all__ = [
    # machines
    "PSEUDOSTATE",
    "State",
    "Transition",
    "Machine",
    # assembly
    "Action",
    "Assembly",
    # control
    "ControlState",
    "ControlTransition",
    "ControlMachine",
]
