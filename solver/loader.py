"""
solver/loader.py — budowanie modelu (assembly + maszyna sterująca) z dokumentu JSON.

Publiczne API:
  load_model(doc)        -> ControlMachine
  load_model_json(path)  -> ControlMachine

Oczekiwany format::

    {
      "assembly": "traffic",
      "machines": {
        "m1": {"states": ["R", "G", "Y"], "initial": ["R"],
               "transitions": [{"source": "R", "target": "G"}]},
        "m2": {"states": ["Off", "On"], "initial": ["Off"],
               "transitions": [{"source": "Off", "target": "On", "event": "start"}]}
      },
      "control": {
        "name": "ctl",
        "states": [{"name": "Running", "constraints": "m2.On"}],
        "transitions": [
          {"source": "PseudoState", "target": "Running",
           "guard": "m1.R AND m2.Off", "actions": ["m2.start"]}
        ]
      }
    }

Pseudostany są niejawne (PseudoState). Strażniki i akcje są parsowane
składniowo; odwołania do maszyn sprawdza walidator przed rozwiązaniem,
żeby raport zawierał wszystkie problemy naraz.
"""

from __future__ import annotations

import json
import pathlib
from typing import Any

from algebra.parser import parse, parse_constraints
from algebra.propositions import TRUE
from data_model.assembly import Action, Assembly
from data_model.control import ControlMachine, ControlState
from data_model.machines import PSEUDOSTATE, Machine
from validator.model_validator import ModelValidator

from .errors import ModelError


def _build_machine(name: str, raw: dict[str, Any]) -> Machine:
    machine = Machine(name)
    machine.add_pseudostate()
    machine.add_states(*raw["states"])
    for initial in raw.get("initial", []):
        machine.set_initial(initial)
    for t in raw.get("transitions", []):
        machine.add_transition(t["source"], t["target"], event=t.get("event"))
    return machine


def _control_state(machine: ControlMachine, name: str) -> ControlState:
    """Stan po nazwie; nieznana nazwa tworzy stan spoza grafu (wykryje go walidator)."""
    state = machine.state(name)
    if state is None:
        return ControlState(name, pseudo=name == PSEUDOSTATE)
    return state


def load_model(doc: dict[str, Any]) -> ControlMachine:
    """
    Buduje ControlMachine z dokumentu modelu.

    Raises:
        ModelError gdy dokument narusza MODEL_SCHEMA (raport w .report).
        ParseError przy błędnej składni strażnika, akcji lub ograniczenia.
    """
    report = ModelValidator().validate_document(doc)
    if not report.is_valid:
        first = report.errors[0]
        raise ModelError(f"Niepoprawny dokument modelu: {first.path}: {first.message}", report)

    assembly = Assembly(doc["assembly"])
    for mid, raw in doc["machines"].items():
        assembly.add_machine(mid, _build_machine(mid, raw))

    control = doc["control"]
    machine = ControlMachine(control["name"], assembly)
    machine.add_pseudostate()
    for raw in control["states"]:
        constraints = parse_constraints(raw.get("constraints", ""))
        machine.add_state(raw["name"], constraints=constraints)

    for raw in control["transitions"]:
        guard_text = raw.get("guard")
        machine.add_transition(
            source=_control_state(machine, raw["source"]),
            target=_control_state(machine, raw["target"]),
            guard=parse(guard_text) if guard_text is not None else TRUE,
            actions=[Action.parse(a) for a in raw.get("actions", [])],
            event=raw.get("event"),
            enabled=raw.get("enabled", True),
        )
    return machine


def load_model_json(path: pathlib.Path | str) -> ControlMachine:
    """Wczytuje dokument modelu z pliku JSON i buduje ControlMachine."""
    raw = json.loads(pathlib.Path(path).read_text(encoding="utf-8"))
    return load_model(raw)
