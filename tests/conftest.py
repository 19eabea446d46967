"""
Pytest fixtures: assembly świateł (m1: R→G→Y→R autonomicznie, m2: Off→On na start)
i maszyny sterujące zbudowane na nim.
"""

import pathlib

import pytest

from algebra import TRUE, And, Atom
from data_model import Action, Assembly, ControlMachine, Machine
from solver import Configuration, Region

ROOT = pathlib.Path(__file__).resolve().parent.parent


# ============================================================================
# Assembly
# ============================================================================

@pytest.fixture
def traffic_assembly() -> Assembly:
    """m1 ∈ {R, G, Y} z cyklem autonomicznym, m2 ∈ {Off, On} z start/stop."""
    m1 = Machine("m1")
    m1.add_pseudostate()
    m1.add_states("R", "G", "Y")
    m1.set_initial("R")
    m1.add_transition("R", "G")
    m1.add_transition("G", "Y")
    m1.add_transition("Y", "R")

    m2 = Machine("m2")
    m2.add_pseudostate()
    m2.add_states("Off", "On")
    m2.set_initial("Off")
    m2.add_transition("Off", "On", event="start")
    m2.add_transition("On", "Off", event="stop")

    assembly = Assembly("traffic")
    assembly.add_machine("m1", m1)
    assembly.add_machine("m2", m2)
    return assembly


@pytest.fixture
def conf():
    """Fabryka konfiguracji: conf(m1="R", m2="On")."""
    def _make(assembly_id: str = "traffic", **states: str) -> Configuration:
        return Configuration.from_mapping(assembly_id, states)
    return _make


@pytest.fixture
def region(conf):
    """Fabryka regionów: region({"m1": "R"}, {"m2": "On"})."""
    def _make(*assignments: dict[str, str], assembly_id: str = "traffic") -> Region:
        return Region(
            assembly_id,
            frozenset(Configuration.from_mapping(assembly_id, a) for a in assignments),
        )
    return _make


# ============================================================================
# Maszyny sterujące
# ============================================================================

@pytest.fixture
def scenario_machine(traffic_assembly) -> ControlMachine:
    """Pseudostan → Running ze strażnikiem m1.R AND m2.Off i akcją m2.start."""
    machine = ControlMachine("ctl", traffic_assembly)
    pseudo  = machine.add_pseudostate()
    running = machine.add_state("Running")
    machine.add_transition(
        pseudo, running,
        guard=And(Atom("m1", "R"), Atom("m2", "Off")),
        actions=[Action("m2", "start")],
    )
    return machine


@pytest.fixture
def reactive_machine(traffic_assembly) -> ControlMachine:
    """
    Running pochłania reaktywnie wszystkie ruchy m1; halt (przy m1.R) zatrzymuje m2
    i przechodzi do Stopped; resume uruchamia m2 ponownie.
    """
    machine = ControlMachine("ctl", traffic_assembly)
    pseudo  = machine.add_pseudostate()
    running = machine.add_state("Running", constraints=Atom("m2", "On"))
    stopped = machine.add_state("Stopped", constraints=Atom("m2", "Off"))
    machine.add_transition(
        pseudo, running,
        guard=And(Atom("m1", "R"), Atom("m2", "Off")),
        actions=[Action("m2", "start")],
    )
    machine.add_transition(running, running, guard=TRUE)
    machine.add_transition(
        running, stopped,
        guard=Atom("m1", "R"),
        actions=[Action("m2", "stop")],
        event="halt",
    )
    machine.add_transition(stopped, running, actions=[Action("m2", "start")], event="resume")
    return machine


@pytest.fixture
def traffic_model_path() -> pathlib.Path:
    return ROOT / "models" / "traffic.json"
