"""
solver/engine.py — solver punktu stałego semantyki stanów maszyny sterującej.

Dla każdego stanu maszyny sterującej oblicza minimalny region konfiguracji
assembly, w którym stan może być aktywny:

  1. wszystkie regiony = ⊥; region pseudostanu = region początkowy assembly,
  2. zdejmij stan s z kolejki; base = region(s); strefy wyjścia(s) = f(base),
  3. dla każdego włączonego przejścia t wychodzącego z s:
       - t wyzwalane lub s to pseudostan:
             wkład = akcje(base ∧ strażnik(t))
       - t reaktywne:
             wkład = akcje(⋁ apply_transition(base, z) dla stref z pasujących
                     do strażnika: TRUE albo atom równy celowi strefy)
       region(cel) ∪= wkład; przy zmianie cel wraca do kolejki,
  4. aż do opróżnienia kolejki (regiony tylko rosną w skończonej kracie),
  5. strefy wyjścia stanów logicznych liczone ponownie z regionów końcowych.

Model jest walidowany przed iteracją; błędy konfiguracji są fatalne.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field

from algebra.propositions import TRUE
from data_model.control import ControlMachine, ControlState, ControlTransition
from validator.model_validator import ModelValidator

from .constraints import check_constraints
from .errors import MissingPseudostate, raise_for_report
from .exit_zones import ExitZone, find_exit_zones, sorted_zones
from .region import Region
from .transformers import apply_actions, apply_transition

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class SolveResult:
    """
    Wynik solvera.

    - regions:            stan -> region końcowy (także pseudostan)
    - exit_zones:         stan logiczny -> strefy wyjścia regionu końcowego
    - transition_regions: przejście -> wkład liczony z regionu końcowego źródła
    - violations:         stan -> część regionu poza jego ograniczeniami
    - iterations:         liczba zdjęć z kolejki
    - updates:            kolejne aktualizacje (stan, nowy region)
    """
    machine:            ControlMachine
    regions:            dict[ControlState, Region]                = field(default_factory=dict)
    exit_zones:         dict[ControlState, set[ExitZone]]         = field(default_factory=dict)
    transition_regions: dict[ControlTransition, Region]           = field(default_factory=dict)
    violations:         dict[ControlState, Region]                = field(default_factory=dict)
    iterations:         int                                       = 0
    updates:            list[tuple[ControlState, Region]]         = field(default_factory=list)

    def region_of(self, name: str) -> Region:
        """Region stanu o podanej nazwie (KeyError gdy brak)."""
        for state, region in self.regions.items():
            if state.name == name:
                return region
        raise KeyError(name)


class SemanticsSolver:
    """
    Solver semantyki stanów maszyny sterującej.

    Użycie::

        solver = SemanticsSolver(machine)
        result = solver.solve()
        print(result.region_of("Running").to_display_string())
    """

    def __init__(self, machine: ControlMachine, validator: ModelValidator | None = None) -> None:
        report = (validator or ModelValidator()).validate(machine)
        for warning in report.warnings:
            logger.warning(warning)
        raise_for_report(report)

        pseudo = machine.pseudostate
        if pseudo is None:
            raise MissingPseudostate(f"Maszyna '{machine.name}' nie ma pseudostanu.", report)

        self._machine  = machine
        self._assembly = machine.assembly
        self._pseudo   = pseudo
        self._guards: dict[ControlTransition, Region] = {
            t: Region.from_proposition(t.guard, self._assembly)
            for t in machine.transitions
            if t.enabled
        }

    # ------------------------------------------------------------------

    def solve(self) -> SolveResult:
        """Iteruje do punktu stałego i zwraca SolveResult."""
        machine = self._machine
        aid     = self._assembly.assembly_id
        result  = SolveResult(machine=machine)

        regions = {s: Region.bottom(aid) for s in machine.states}
        regions[self._pseudo] = Region.initial(self._assembly)
        zones: dict[ControlState, set[ExitZone]] = {s: set() for s in machine.states}

        logger.info(
            "Solve '%s' (assembly '%s'): %d stanów, %d przejść",
            machine.name, aid, len(machine.states), len(machine.transitions),
        )

        worklist: deque[ControlState] = deque([self._pseudo])
        while worklist:
            state = worklist.popleft()
            result.iterations += 1
            base = regions[state]
            zones[state] = find_exit_zones(base, self._assembly)
            logger.debug("Pop %s: %s (strefy: %d)", state.name, base, len(zones[state]))

            for t in machine.outgoing(state):
                if not t.enabled:
                    continue
                contribution = self._contribution(t, base, zones[state])
                target  = t.target
                updated = regions[target].union(contribution)
                if updated != regions[target]:
                    logger.debug("Update %s: %s -> %s", target.name, regions[target], updated)
                    regions[target] = updated
                    result.updates.append((target, updated))
                    if target not in worklist:
                        worklist.append(target)

        for state in machine.logical_states():
            result.exit_zones[state] = find_exit_zones(regions[state], self._assembly)

        for t in machine.transitions:
            if t.enabled:
                source_zones = result.exit_zones.get(t.source, set())
                result.transition_regions[t] = self._contribution(t, regions[t.source], source_zones)
            else:
                result.transition_regions[t] = Region.bottom(aid)

        result.regions    = regions
        result.violations = check_constraints(machine, regions)

        logger.info(
            "Solve '%s' zakończony: %d iteracji, %d aktualizacji",
            machine.name, result.iterations, len(result.updates),
        )
        return result

    # ------------------------------------------------------------------

    def _contribution(
        self,
        t:     ControlTransition,
        base:  Region,
        zones: set[ExitZone],
    ) -> Region:
        """Wkład przejścia t do regionu celu, przy regionie źródła base."""
        if t.is_triggerable or t.source.pseudo:
            guarded = base.intersection(self._guards[t])
            return apply_actions(guarded, t.actions, self._assembly)

        absorbed = Region.bottom(base.assembly_id)
        for zone in sorted_zones(zones):
            if t.guard == TRUE or zone.target == t.guard:
                absorbed = absorbed.union(
                    apply_transition(base, zone.machine_id, zone.transition, self._assembly)
                )
        return apply_actions(absorbed, t.actions, self._assembly)


def compute_all_state_semantics(machine: ControlMachine) -> dict[ControlState, Region]:
    """Region każdego stanu maszyny sterującej (punkt stały)."""
    return SemanticsSolver(machine).solve().regions
