"""
solver/transformers.py — efekt odpalenia przejścia/zdarzenia maszyny składowej na regionie.

Dla przejścia S -> T maszyny m:
  domain   = region ∩ {m.S}
  codomain = domain z m.S zastąpionym przez m.T
  wynik    = (region \\ domain) ∪ codomain

Zdarzenie może wyzwalać kilka przejść (niedeterminizm): dziedziny
i przeciwdziedziny wszystkich pasujących przejść są sumowane, a wynik to
(region \\ ⋃domains) ∪ ⋃codomains.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from algebra.propositions import Atom
from data_model.assembly import Action, Assembly
from data_model.machines import Machine, Transition

from .errors import UnknownEvent, UnknownMachine
from .region import Region

logger = logging.getLogger(__name__)


def _machine(assembly: Assembly, machine_id: str) -> Machine:
    machine = assembly.machines.get(machine_id)
    if machine is None:
        raise UnknownMachine(machine_id, assembly.assembly_id)
    return machine


def codomain(domain: Region, machine_id: str, source: str, target: str) -> Region:
    """Konfiguracje dziedziny z m.source, przepisane na m.target."""
    return Region(
        domain.assembly_id,
        frozenset(
            c.replace_constraint(machine_id, target)
            for c in domain.configurations
            if c.get_state_name(machine_id) == source
        ),
    )


def _domain(region: Region, machine_id: str, source: str) -> Region:
    return region.intersection(Region.of_atom(region.assembly_id, Atom(machine_id, source)))


def _apply(
    region:      Region,
    machine_id:  str,
    transitions: Iterable[Transition],
    assembly:    Assembly,
) -> Region:
    domains   = Region.bottom(region.assembly_id)
    codomains = Region.bottom(region.assembly_id)
    for t in transitions:
        domain = _domain(region, machine_id, t.source)
        if domain.is_empty():
            continue
        domains   = domains.union(domain)
        codomains = codomains.union(codomain(domain, machine_id, t.source, t.target))
    if domains.is_empty():
        return region
    return region.difference(domains, assembly).union(codomains)


def apply_event(region: Region, machine_id: str, event: str, assembly: Assembly) -> Region:
    """
    Odpala w maszynie machine_id wszystkie przejścia wyzwalane zdarzeniem event.

    Raises:
        UnknownMachine gdy maszyny nie ma w assembly.
        UnknownEvent   gdy żadne przejście maszyny nie jest wyzwalane tym zdarzeniem.
    """
    transitions = _machine(assembly, machine_id).transitions_for_event(event)
    if not transitions:
        raise UnknownEvent(machine_id, event)
    result = _apply(region, machine_id, transitions, assembly)
    logger.debug("apply_event %s.%s: %s -> %s", machine_id, event, region, result)
    return result


def apply_transition(
    region:     Region,
    machine_id: str,
    transition: Transition,
    assembly:   Assembly,
) -> Region:
    """Jedno przejście maszyny machine_id (ścieżka reaktywna solvera)."""
    _machine(assembly, machine_id)
    return _apply(region, machine_id, [transition], assembly)


def apply_actions(region: Region, actions: Iterable[Action], assembly: Assembly) -> Region:
    """Przepuszcza region kolejno przez apply_event każdej akcji."""
    for action in actions:
        region = apply_event(region, action.machine_id, action.event, assembly)
    return region
