"""
Testy walidatora modelu: etap A (JSON Schema) i etapy B–E (struktura, strażniki, akcje).
"""

import copy
import json

import pytest

from algebra import And, Atom, Or
from data_model import Action, ControlMachine, ControlState, Machine
from validator import MODEL_SCHEMA, ErrorCode, ModelValidator


@pytest.fixture
def doc(traffic_model_path) -> dict:
    return json.loads(traffic_model_path.read_text(encoding="utf-8"))


def _codes(report) -> list[ErrorCode]:
    return [e.code for e in report.errors]


class TestSchemaStage:

    def test_sample_model_is_valid(self, doc):
        report = ModelValidator().validate_document(doc)
        assert report.is_valid
        assert report.errors == []

    def test_missing_control(self, doc):
        del doc["control"]
        report = ModelValidator().validate_document(doc)
        assert _codes(report) == [ErrorCode.SCHEMA_VIOLATION]
        assert report.errors[0].path == "/"

    def test_unknown_property_is_rejected(self, doc):
        doc["control"]["transitions"][0]["priority"] = 1
        report = ModelValidator().validate_document(doc)
        assert not report.is_valid
        assert report.errors[0].path == "/control/transitions/0"

    def test_bad_identifier(self, doc):
        doc["machines"]["m1"]["states"].append("Bad name")
        report = ModelValidator().validate_document(doc)
        assert _codes(report) == [ErrorCode.SCHEMA_VIOLATION]
        assert report.errors[0].path == "/machines/m1/states/3"

    def test_enabled_must_be_boolean(self, doc):
        doc["control"]["transitions"][4]["enabled"] = "no"
        assert not ModelValidator().validate_document(doc).is_valid

    def test_custom_schema(self, doc):
        strict = copy.deepcopy(MODEL_SCHEMA)
        strict["properties"]["machines"]["maxProperties"] = 1
        assert not ModelValidator(strict).validate_document(doc).is_valid


class TestStructureStages:

    def test_valid_machine(self, reactive_machine):
        report = ModelValidator().validate(reactive_machine)
        assert report.is_valid
        assert report.warnings == []

    def test_component_without_pseudostate(self, reactive_machine):
        bare = Machine("m3")
        bare.add_states("A")
        reactive_machine.assembly.add_machine("m3", bare)
        report = ModelValidator().validate(reactive_machine)
        assert _codes(report) == [ErrorCode.MISSING_PSEUDOSTATE]
        assert report.errors[0].path == "/machines/m3"

    def test_multiple_pseudostates(self, reactive_machine):
        reactive_machine.add_pseudostate()
        report = ModelValidator().validate(reactive_machine)
        assert _codes(report)[0] == ErrorCode.MULTIPLE_PSEUDOSTATES
        assert report.errors[0].details["count"] == 2
        # oba pseudostany noszą tę samą nazwę
        assert ErrorCode.DUPLICATE_STATE in _codes(report)

    def test_duplicate_state(self, reactive_machine):
        reactive_machine.add_state("Running")
        report = ModelValidator().validate(reactive_machine)
        assert _codes(report) == [ErrorCode.DUPLICATE_STATE]
        assert report.errors[0].details == {"machine": "ctl", "state": "Running"}

    def test_component_transition_to_unknown_state(self, reactive_machine):
        reactive_machine.assembly.machines["m1"].add_transition("Y", "Blue")
        report = ModelValidator().validate(reactive_machine)
        assert _codes(report) == [ErrorCode.UNKNOWN_STATE]
        assert report.errors[0].details == {"machine": "m1", "state": "Blue"}

    def test_control_transition_outside_graph(self, reactive_machine):
        running = reactive_machine.state("Running")
        reactive_machine.add_transition(running, ControlState("Ghost"), event="go")
        report = ModelValidator().validate(reactive_machine)
        assert _codes(report) == [ErrorCode.UNKNOWN_STATE]
        assert report.errors[0].path == "/control/transitions/4"

    def test_component_without_initial_states_warns(self, reactive_machine):
        quiet = Machine("m3")
        quiet.add_pseudostate()
        quiet.add_states("A")
        reactive_machine.assembly.add_machine("m3", quiet)
        report = ModelValidator().validate(reactive_machine)
        assert report.is_valid
        assert any("m3" in w for w in report.warnings)


class TestGuardAndActionStages:

    def test_guard_on_unknown_machine(self, reactive_machine):
        running = reactive_machine.state("Running")
        reactive_machine.add_transition(running, running, guard=Atom("m9", "X"), event="go")
        report = ModelValidator().validate(reactive_machine)
        assert _codes(report) == [ErrorCode.UNKNOWN_MACHINE]
        assert report.errors[0].details == {"machine": "m9", "assembly": "traffic"}
        assert report.errors[0].path == "/control/transitions/4/guard"

    def test_constraint_on_unknown_machine(self, reactive_machine):
        reactive_machine.add_state("Odd", constraints=Atom("m7", "On"))
        report = ModelValidator().validate(reactive_machine)
        assert _codes(report) == [ErrorCode.UNKNOWN_MACHINE]
        assert report.errors[0].path.endswith("/constraints")

    def test_all_unknown_machines_reported(self, reactive_machine):
        running = reactive_machine.state("Running")
        reactive_machine.add_transition(
            running, running, guard=And(Atom("m8", "X"), Atom("m9", "X")), event="go",
        )
        report = ModelValidator().validate(reactive_machine)
        assert [e.details["machine"] for e in report.errors] == ["m8", "m9"]

    def test_unknown_state_in_atom_warns(self, reactive_machine):
        running = reactive_machine.state("Running")
        reactive_machine.add_transition(running, running, guard=Atom("m1", "Blue"), event="go")
        report = ModelValidator().validate(reactive_machine)
        assert report.is_valid
        assert any("m1.Blue" in w for w in report.warnings)

    def test_compound_reactive_guard_warns(self, reactive_machine):
        running = reactive_machine.state("Running")
        reactive_machine.add_transition(running, running, guard=Or(Atom("m1", "R"), Atom("m1", "G")))
        report = ModelValidator().validate(reactive_machine)
        assert report.is_valid
        assert len(report.warnings) == 1

    def test_action_on_unknown_machine(self, reactive_machine):
        running = reactive_machine.state("Running")
        reactive_machine.add_transition(running, running, actions=[Action("m9", "start")], event="go")
        report = ModelValidator().validate(reactive_machine)
        assert _codes(report) == [ErrorCode.UNKNOWN_MACHINE]
        assert report.errors[0].path == "/control/transitions/4/actions/0"

    def test_action_with_unknown_event(self, reactive_machine):
        running = reactive_machine.state("Running")
        reactive_machine.add_transition(running, running, actions=[Action("m2", "explode")], event="go")
        report = ModelValidator().validate(reactive_machine)
        assert _codes(report) == [ErrorCode.UNKNOWN_EVENT]
        assert report.errors[0].details == {"machine": "m2", "event": "explode"}
        assert "start" in report.errors[0].expected_fix


class TestErrorLimit:

    def test_stops_after_max_errors(self, traffic_assembly):
        from validator import MAX_ERRORS

        for i in range(MAX_ERRORS + 5):
            bare = Machine(f"x{i}")
            bare.add_states("A")
            traffic_assembly.add_machine(f"x{i}", bare)
        machine = ControlMachine("ctl", traffic_assembly)
        report  = ModelValidator().validate(machine)
        # etap B zbiera wszystko, etap C już się nie wykonuje
        assert len(report.errors) == MAX_ERRORS + 5
        assert all(e.path.startswith("/machines/") for e in report.errors)
