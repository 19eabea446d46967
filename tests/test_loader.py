"""
Testy budowania modelu z dokumentu JSON.
"""

import json

import pytest

from algebra import TRUE, And, Atom, ParseError
from data_model import PSEUDOSTATE, Action
from solver import ModelError, SemanticsSolver, UnknownMachine, load_model, load_model_json
from validator import ErrorCode


@pytest.fixture
def doc(traffic_model_path) -> dict:
    return json.loads(traffic_model_path.read_text(encoding="utf-8"))


class TestLoadModel:

    def test_assembly(self, traffic_model_path):
        machine  = load_model_json(traffic_model_path)
        assembly = machine.assembly
        assert assembly.assembly_id == "traffic"
        assert list(assembly.machines) == ["m1", "m2"]
        assert assembly.machines["m1"].state_names() == ["R", "G", "Y"]
        assert assembly.machines["m1"].initial_states() == ["R"]
        assert assembly.machines["m2"].events() == ["start", "stop"]

    def test_control_states(self, traffic_model_path):
        machine = load_model_json(traffic_model_path)
        assert [s.name for s in machine.states] == [PSEUDOSTATE, "Running", "Stopped"]
        assert machine.state("Running").constraints == Atom("m2", "On")
        assert machine.state("Stopped").constraints == Atom("m2", "Off")

    def test_control_transitions(self, traffic_model_path):
        machine = load_model_json(traffic_model_path)
        entry, loop, halt, resume, disabled = machine.transitions
        assert entry.source is machine.pseudostate
        assert entry.guard == And(Atom("m1", "R"), Atom("m2", "Off"))
        assert entry.actions == (Action("m2", "start"),)
        assert loop.autonomous and loop.guard == TRUE
        assert halt.is_triggerable and halt.trigger == "halt"
        assert resume.guard == TRUE
        assert not disabled.enabled

    def test_solves(self, traffic_model_path, region):
        result = SemanticsSolver(load_model_json(traffic_model_path)).solve()
        assert result.region_of("Stopped") == region({"m1": "R", "m2": "Off"})
        assert len(result.region_of("Running")) == 3
        assert result.violations == {}

    def test_schema_error_carries_report(self, doc):
        doc["control"]["states"][0]["color"] = "red"
        with pytest.raises(ModelError) as exc:
            load_model(doc)
        assert exc.value.report.errors[0].code == ErrorCode.SCHEMA_VIOLATION

    def test_guard_syntax_error(self, doc):
        doc["control"]["transitions"][0]["guard"] = "m1.R AND"
        with pytest.raises(ParseError):
            load_model(doc)

    def test_unknown_machine_is_left_to_validator(self, doc):
        doc["control"]["transitions"][2]["guard"] = "m9.R"
        machine = load_model(doc)
        assert machine.transitions[2].guard == Atom("m9", "R")
        with pytest.raises(UnknownMachine):
            SemanticsSolver(machine)

    def test_unknown_control_state(self, doc):
        doc["control"]["transitions"][3]["target"] = "Ghost"
        machine = load_model(doc)
        ghost   = machine.transitions[3].target
        assert ghost.name == "Ghost"
        assert ghost not in machine.states
