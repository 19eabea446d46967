"""
Testy symbolicznej ekstrakcji regionu (DNF) względem enumeracji uniwersum.
"""

import pytest

from algebra import FALSE, TRUE, And, Atom, Not, Or
from solver import Region, extract_region

R   = Atom("m1", "R")
G   = Atom("m1", "G")
OFF = Atom("m2", "Off")
ON  = Atom("m2", "On")


class TestExtractRegion:

    @pytest.mark.parametrize("prop", [
        R,
        And(R, OFF),
        Or(R, Not(OFF)),
        Not(And(R, Or(OFF, Not(G)))),
        And(R, G),
        Or(TRUE, R),
        FALSE,
    ])
    def test_agrees_with_enumeration(self, prop, traffic_assembly):
        symbolic   = extract_region(prop, traffic_assembly)
        enumerated = Region.from_proposition(prop, traffic_assembly)
        assert symbolic.implies_universal(enumerated, traffic_assembly)
        assert enumerated.implies_universal(symbolic, traffic_assembly)

    def test_keeps_partial_configurations(self, traffic_assembly, region):
        assert extract_region(R, traffic_assembly) == region({"m1": "R"})

    def test_negation_expands_to_other_states(self, traffic_assembly, region):
        assert extract_region(Not(R), traffic_assembly) == region({"m1": "G"}, {"m1": "Y"})

    def test_contradiction_is_bottom(self, traffic_assembly):
        assert extract_region(And(R, Not(R)), traffic_assembly).is_empty()

    def test_true_is_single_empty_configuration(self, traffic_assembly, region):
        assert extract_region(TRUE, traffic_assembly) == region({})

    def test_unknown_atom_drops_term(self, traffic_assembly, region):
        prop = Or(Atom("m1", "Blue"), And(Atom("m9", "X"), ON), OFF)
        assert extract_region(prop, traffic_assembly) == region({"m2": "Off"})

    def test_negated_unknown_is_skipped(self, traffic_assembly, region):
        assert extract_region(And(Not(Atom("m9", "X")), ON), traffic_assembly) == region({"m2": "On"})
