"""
algebra — algebra zdań o stanach maszyn i parser strażników.

Publiczne API:
  Proposition, TrueProp, FalseProp, Atom, And, Or, Not, TRUE, FALSE
  evaluate, to_nnf, to_cnf, to_dnf, transform, atoms, machines
  conjunction, disjunction, conjuncts, disjuncts
  implies_over, equivalent, to_display_string
  parse(text, assembly)              → Proposition
  parse_constraints(text, assembly)  → Proposition | None
  ParseError
"""

from .propositions import (
    Proposition,
    TrueProp,
    FalseProp,
    Atom,
    And,
    Or,
    Not,
    TRUE,
    FALSE,
    evaluate,
    to_nnf,
    to_cnf,
    to_dnf,
    distribute_or_over_and,
    distribute_and_over_or,
    transform,
    atoms,
    machines,
    conjunction,
    disjunction,
    conjuncts,
    disjuncts,
    implies_over,
    equivalent,
    to_display_string,
)
from .parser import ParseError, parse, parse_constraints, tokenize

__all__ = [
    # propositions
    "Proposition",
    "TrueProp",
    "FalseProp",
    "Atom",
    "And",
    "Or",
    "Not",
    "TRUE",
    "FALSE",
    "evaluate",
    "to_nnf",
    "to_cnf",
    "to_dnf",
    "distribute_or_over_and",
    "distribute_and_over_or",
    "transform",
    "atoms",
    "machines",
    "conjunction",
    "disjunction",
    "conjuncts",
    "disjuncts",
    "implies_over",
    "equivalent",
    "to_display_string",
    # parser
    "ParseError",
    "parse",
    "parse_constraints",
    "tokenize",
]
