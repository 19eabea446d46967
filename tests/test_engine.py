"""
Testy solvera punktu stałego semantyki stanów.
"""

import pytest

from algebra import TRUE, Atom
from data_model import Action, ControlMachine, ControlState
from solver import (
    MissingPseudostate,
    Region,
    SemanticsSolver,
    UnknownEvent,
    UnknownMachine,
    UnknownState,
    compute_all_state_semantics,
    sorted_zones,
)


class TestScenario:
    """Pseudostan → Running przez m1.R AND m2.Off, akcja m2.start."""

    def test_running_region(self, scenario_machine, region):
        result = SemanticsSolver(scenario_machine).solve()
        assert result.region_of("Running") == region({"m1": "R", "m2": "On"})

    def test_no_stale_configurations(self, scenario_machine):
        running = SemanticsSolver(scenario_machine).solve().region_of("Running")
        assert not any(c.get_state_name("m2") == "Off" for c in running)

    def test_pseudostate_holds_initial_region(self, scenario_machine, traffic_assembly):
        result = SemanticsSolver(scenario_machine).solve()
        assert result.regions[scenario_machine.pseudostate] == Region.initial(traffic_assembly)

    def test_exit_zones_of_logical_states_only(self, scenario_machine):
        result = SemanticsSolver(scenario_machine).solve()
        assert set(result.exit_zones) == set(scenario_machine.logical_states())
        (running,) = scenario_machine.logical_states()
        assert [str(z) for z in sorted_zones(result.exit_zones[running])] == ["m1: (R->G)"]

    def test_region_of_unknown_name(self, scenario_machine):
        with pytest.raises(KeyError):
            SemanticsSolver(scenario_machine).solve().region_of("Nowhere")


class TestReactive:
    """Running pochłania ruchy m1; halt/resume przełączają m2."""

    def test_running_absorbs_all_m1_moves(self, reactive_machine, region):
        result = SemanticsSolver(reactive_machine).solve()
        assert result.region_of("Running") == region(
            {"m1": "R", "m2": "On"},
            {"m1": "G", "m2": "On"},
            {"m1": "Y", "m2": "On"},
        )

    def test_stopped_region_and_zone(self, reactive_machine, region):
        result  = SemanticsSolver(reactive_machine).solve()
        stopped = reactive_machine.state("Stopped")
        assert result.regions[stopped] == region({"m1": "R", "m2": "Off"})
        assert [str(z) for z in sorted_zones(result.exit_zones[stopped])] == ["m1: (R->G)"]

    def test_running_is_closed(self, reactive_machine):
        result = SemanticsSolver(reactive_machine).solve()
        assert result.exit_zones[reactive_machine.state("Running")] == set()

    def test_no_violations(self, reactive_machine):
        assert SemanticsSolver(reactive_machine).solve().violations == {}

    def test_transition_regions(self, reactive_machine, region):
        result = SemanticsSolver(reactive_machine).solve()
        entry, loop, halt, resume = reactive_machine.transitions
        assert result.transition_regions[entry] == region({"m1": "R", "m2": "On"})
        assert result.transition_regions[loop].is_empty()
        assert result.transition_regions[halt] == region({"m1": "R", "m2": "Off"})
        assert result.transition_regions[resume] == region({"m1": "R", "m2": "On"})

    def test_simplified_running(self, reactive_machine, region, traffic_assembly):
        running = SemanticsSolver(reactive_machine).solve().region_of("Running")
        assert running.simplify(traffic_assembly) == region({"m2": "On"})

    def test_monotonic_updates(self, reactive_machine):
        result = SemanticsSolver(reactive_machine).solve()
        previous: dict[ControlState, Region] = {}
        for state, updated in result.updates:
            if state in previous:
                assert previous[state].implies(updated)
                assert previous[state] != updated
            previous[state] = updated
        for state, final in previous.items():
            assert result.regions[state] == final

    def test_solve_is_repeatable(self, reactive_machine):
        solver = SemanticsSolver(reactive_machine)
        first, second = solver.solve(), solver.solve()
        assert {s.name: r for s, r in first.regions.items()} == {s.name: r for s, r in second.regions.items()}

    def test_compute_all_state_semantics(self, reactive_machine):
        regions = compute_all_state_semantics(reactive_machine)
        assert set(regions) == set(reactive_machine.states)


class TestGuardsAndSwitches:

    def test_disabled_transition_is_ignored(self, scenario_machine, region):
        running = scenario_machine.state("Running")
        idle    = scenario_machine.add_state("Idle")
        t = scenario_machine.add_transition(running, idle, guard=TRUE, event="pause", enabled=False)
        result = SemanticsSolver(scenario_machine).solve()
        assert result.regions[idle].is_empty()
        assert result.transition_regions[t].is_empty()

    def test_false_guard_blocks_target(self, traffic_assembly):
        machine = ControlMachine("ctl", traffic_assembly)
        pseudo  = machine.add_pseudostate()
        never   = machine.add_state("Never")
        machine.add_transition(pseudo, never, guard=Atom("m1", "G"))
        assert SemanticsSolver(machine).solve().region_of("Never").is_empty()

    def test_reactive_atom_guard_absorbs_matching_zone_only(self, traffic_assembly, region):
        machine = ControlMachine("ctl", traffic_assembly)
        pseudo  = machine.add_pseudostate()
        red     = machine.add_state("Red")
        green   = machine.add_state("Green")
        machine.add_transition(pseudo, red, guard=Atom("m1", "R"))
        machine.add_transition(red, green, guard=Atom("m1", "G"))
        machine.add_transition(red, red, guard=Atom("m1", "Y"))

        result = SemanticsSolver(machine).solve()
        assert result.region_of("Red") == region({"m1": "R", "m2": "Off"})
        assert result.region_of("Green") == region({"m1": "G", "m2": "Off"})


class TestFailures:

    def test_missing_pseudostate(self, traffic_assembly):
        machine = ControlMachine("ctl", traffic_assembly)
        machine.add_state("Running")
        with pytest.raises(MissingPseudostate):
            SemanticsSolver(machine)

    def test_transition_outside_graph(self, scenario_machine):
        running = scenario_machine.state("Running")
        scenario_machine.add_transition(running, ControlState("Ghost"), event="go")
        with pytest.raises(UnknownState) as exc:
            SemanticsSolver(scenario_machine)
        assert exc.value.report is not None

    def test_guard_on_unknown_machine(self, scenario_machine):
        running = scenario_machine.state("Running")
        scenario_machine.add_transition(running, running, guard=Atom("m9", "X"), event="go")
        with pytest.raises(UnknownMachine) as exc:
            SemanticsSolver(scenario_machine)
        assert exc.value.machine_id == "m9"

    def test_action_with_unknown_event(self, scenario_machine):
        running = scenario_machine.state("Running")
        scenario_machine.add_transition(
            running, running, actions=[Action("m2", "explode")], event="go",
        )
        with pytest.raises(UnknownEvent) as exc:
            SemanticsSolver(scenario_machine)
        assert exc.value.event == "explode"
        assert not exc.value.report.is_valid
