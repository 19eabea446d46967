"""
solver — rdzeń semantyki: krata konfiguracji, transformatory, solver punktu stałego.

Publiczne API:
  SemanticsSolver(machine)                       klasa solvera
  compute_all_state_semantics(machine)           → dict[ControlState, Region]
  find_exit_zones(region, assembly)              → set[ExitZone]
  apply_event / apply_transition / apply_actions transformatory regionów
  extract_region(prop, assembly)                 → Region (przez DNF)
  check_constraints(machine, regions)            → naruszenia niezmienników
  load_model(doc), load_model_json(path)         → ControlMachine
  Configuration, Region, ComplementStrategy      typy kraty
"""

from .configuration import Configuration
from .constraints   import check_constraints, constraint_region
from .engine        import SemanticsSolver, SolveResult, compute_all_state_semantics
from .errors        import (
    AssemblyMismatch,
    MissingPseudostate,
    ModelError,
    SemanticsError,
    UnknownEvent,
    UnknownMachine,
    UnknownState,
)
from .exit_zones    import ExitZone, find_exit_zones, sorted_zones
from .extractor     import extract_region
from .loader        import load_model, load_model_json
from .region        import ComplementStrategy, Region, minimize
from .transformers  import apply_actions, apply_event, apply_transition, codomain
from .universe      import generate_universe, initial_configurations

__all__ = [
    "Configuration",
    "check_constraints",
    "constraint_region",
    "SemanticsSolver",
    "SolveResult",
    "compute_all_state_semantics",
    "AssemblyMismatch",
    "MissingPseudostate",
    "ModelError",
    "SemanticsError",
    "UnknownEvent",
    "UnknownMachine",
    "UnknownState",
    "ExitZone",
    "find_exit_zones",
    "sorted_zones",
    "extract_region",
    "load_model",
    "load_model_json",
    "ComplementStrategy",
    "Region",
    "minimize",
    "apply_actions",
    "apply_event",
    "apply_transition",
    "codomain",
    "generate_universe",
    "initial_configurations",
]
