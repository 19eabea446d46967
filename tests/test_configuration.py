"""
Testy konfiguracji (częściowych przypisań).
"""

import pytest

from algebra import TRUE, And, Atom, evaluate
from solver import AssemblyMismatch, Configuration


class TestConstruction:

    def test_one_atom_per_machine(self):
        with pytest.raises(ValueError):
            Configuration("traffic", [Atom("m1", "R"), Atom("m1", "G")])

    def test_duplicate_atom_is_collapsed(self):
        c = Configuration("traffic", [Atom("m1", "R"), Atom("m1", "R")])
        assert len(c) == 1

    def test_display_is_sorted_by_machine(self, conf):
        c = Configuration("traffic", [Atom("m2", "On"), Atom("m1", "R")])
        assert c.to_display_string() == "(m1.R,m2.On)"
        assert c == conf(m1="R", m2="On")

    def test_equality_includes_assembly(self, conf):
        assert conf(m1="R") != conf("other", m1="R")
        assert hash(conf(m1="R")) == hash(conf(m1="R"))

    def test_is_mapping(self, conf):
        c = conf(m1="R", m2="On")
        assert dict(c) == {"m1": "R", "m2": "On"}
        assert evaluate(And(Atom("m1", "R"), Atom("m2", "On")), c)


class TestLattice:

    def test_implies_more_specific(self, conf):
        assert conf(m1="R", m2="On").implies(conf(m1="R"))
        assert not conf(m1="R").implies(conf(m1="R", m2="On"))

    def test_everything_implies_empty(self, conf):
        assert conf(m1="G").implies(conf())

    def test_conflict_does_not_imply(self, conf):
        assert not conf(m1="R", m2="On").implies(conf(m1="G"))

    def test_intersect_merges(self, conf):
        assert conf(m1="R").intersect(conf(m2="On")) == conf(m1="R", m2="On")

    def test_intersect_conflict_is_none(self, conf):
        assert conf(m1="R").intersect(conf(m1="G", m2="On")) is None

    def test_mismatched_assembly(self, conf):
        with pytest.raises(AssemblyMismatch):
            conf(m1="R").implies(conf("other", m1="R"))
        with pytest.raises(AssemblyMismatch):
            conf(m1="R").intersect(conf("other", m2="On"))


class TestAccess:

    def test_replace_constraint(self, conf):
        c = conf(m1="R", m2="Off")
        assert c.replace_constraint("m2", "On") == conf(m1="R", m2="On")
        assert c == conf(m1="R", m2="Off")

    def test_replace_adds_missing_machine(self, conf):
        assert conf(m1="R").replace_constraint("m2", "On") == conf(m1="R", m2="On")

    def test_contains_and_get(self, conf):
        c = conf(m1="R")
        assert c.contains("m1") and not c.contains("m2")
        assert c.get_state_name("m1") == "R"
        assert c.get_state_name("m2") is None

    def test_to_proposition(self, conf):
        assert conf().to_proposition() == TRUE
        assert conf(m1="R", m2="On").to_proposition() == And(Atom("m1", "R"), Atom("m2", "On"))

    def test_truth_vector(self, conf, traffic_assembly):
        assert conf(m1="G", m2="On").to_truth_vector(traffic_assembly) == "m1: {0, 1, 0} m2: {0, 1}"
        assert conf(m2="Off").to_truth_vector(traffic_assembly) == "m1: {1, 1, 1} m2: {1, 0}"
