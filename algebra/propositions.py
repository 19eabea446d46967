"""
algebra/propositions.py — algebra zdań o stanach maszyn składowych.

Zdanie (Proposition) to zamknięta unia tagowana:
  TrueProp | FalseProp | Atom | And | Or | Not

Węzły są niemutowalne (frozen dataclass), drzewo jest skończone i acykliczne.
Wszystkie operacje są funkcjami modułowymi z dopasowaniem wzorców (`match`),
więc nowy rodzaj węzła trzeba obsłużyć w każdej z nich.

Publiczne API:
  evaluate(prop, assignment)           -> bool
  to_nnf(prop), to_cnf(prop), to_dnf(prop)
  transform(prop, machine_id, from_state, to_state)
  atoms(prop), machines(prop)
  conjunction(props), disjunction(props)
  conjuncts(prop), disjuncts(prop)
  implies_over(p, q, universe), equivalent(p, q, universe)
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from functools import reduce
from typing import TypeAlias


# ---------------------------------------------------------------------------
# Węzły drzewa
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class TrueProp:
    """Stała logiczna TRUE."""

    def __str__(self) -> str:
        return "TRUE"


@dataclass(frozen=True, slots=True)
class FalseProp:
    """Stała logiczna FALSE."""

    def __str__(self) -> str:
        return "FALSE"


@dataclass(frozen=True, slots=True, order=True)
class Atom:
    """
    Atom "maszyna jest w stanie": (machine_id, state_name).

    Porządek (order=True) jest leksykograficzny po machine_id, potem state_name;
    używany wyłącznie do kanonicznego wyświetlania.
    """
    machine_id: str
    state_name: str

    def __str__(self) -> str:
        return f"{self.machine_id}.{self.state_name}"


@dataclass(frozen=True, slots=True)
class And:
    """Koniunkcja dwóch zdań."""
    left:  Proposition
    right: Proposition

    def __str__(self) -> str:
        return f"({self.left} AND {self.right})"


@dataclass(frozen=True, slots=True)
class Or:
    """Alternatywa dwóch zdań."""
    left:  Proposition
    right: Proposition

    def __str__(self) -> str:
        return f"({self.left} OR {self.right})"


@dataclass(frozen=True, slots=True)
class Not:
    """Negacja zdania."""
    operand: Proposition

    def __str__(self) -> str:
        return f"(NOT {self.operand})"


Proposition: TypeAlias = TrueProp | FalseProp | Atom | And | Or | Not

TRUE  = TrueProp()
FALSE = FalseProp()


def to_display_string(prop: Proposition) -> str:
    """Postać tekstowa akceptowana przez parser (w pełni nawiasowana)."""
    return str(prop)


# ---------------------------------------------------------------------------
# Ewaluacja
# ---------------------------------------------------------------------------

def evaluate(prop: Proposition, assignment: Mapping[str, str]) -> bool:
    """
    Wartościuje zdanie względem przypisania machine_id -> state_name.

    Atom maszyny nieobecnej w przypisaniu jest fałszywy.
    """
    match prop:
        case TrueProp():
            return True
        case FalseProp():
            return False
        case Atom(machine_id, state_name):
            return assignment.get(machine_id) == state_name
        case And(left, right):
            return evaluate(left, assignment) and evaluate(right, assignment)
        case Or(left, right):
            return evaluate(left, assignment) or evaluate(right, assignment)
        case Not(operand):
            return not evaluate(operand, assignment)
    raise TypeError(f"Nieznany węzeł zdania: {prop!r}")


def implies_over(p: Proposition, q: Proposition, universe: Iterable[Mapping[str, str]]) -> bool:
    """p implikuje q na każdej konfiguracji uniwersum."""
    return all(evaluate(q, c) for c in universe if evaluate(p, c))


def equivalent(p: Proposition, q: Proposition, universe: Iterable[Mapping[str, str]]) -> bool:
    """p i q mają tę samą wartość na każdej konfiguracji uniwersum."""
    return all(evaluate(p, c) == evaluate(q, c) for c in universe)


# ---------------------------------------------------------------------------
# Postacie normalne
# ---------------------------------------------------------------------------

def to_nnf(prop: Proposition) -> Proposition:
    """
    Negacyjna postać normalna: negacje wyłącznie bezpośrednio przed atomami.

    Reguły:
      ¬¬A        = A
      ¬(A ∧ B)   = ¬A ∨ ¬B
      ¬(A ∨ B)   = ¬A ∧ ¬B
      ¬TRUE      = FALSE,  ¬FALSE = TRUE
    """
    match prop:
        case Not(TrueProp()):
            return FALSE
        case Not(FalseProp()):
            return TRUE
        case Not(Atom()):
            return prop
        case Not(Not(inner)):
            return to_nnf(inner)
        case Not(And(left, right)):
            return Or(to_nnf(Not(left)), to_nnf(Not(right)))
        case Not(Or(left, right)):
            return And(to_nnf(Not(left)), to_nnf(Not(right)))
        case And(left, right):
            return And(to_nnf(left), to_nnf(right))
        case Or(left, right):
            return Or(to_nnf(left), to_nnf(right))
        case _:
            return prop


def distribute_or_over_and(expr: Proposition) -> Proposition:
    """
    Rozdziela OR względem AND (krok CNF): A ∨ (B ∧ C) = (A ∨ B) ∧ (A ∨ C).

    Poddrzewa są normalizowane rekurencyjnie od dołu, więc jedno przejście
    od korzenia wystarcza.
    """
    match expr:
        case Or(left, right):
            left  = distribute_or_over_and(left)
            right = distribute_or_over_and(right)
            if isinstance(left, And):
                return And(
                    distribute_or_over_and(Or(left.left, right)),
                    distribute_or_over_and(Or(left.right, right)),
                )
            if isinstance(right, And):
                return And(
                    distribute_or_over_and(Or(left, right.left)),
                    distribute_or_over_and(Or(left, right.right)),
                )
            return Or(left, right)
        case And(left, right):
            return And(distribute_or_over_and(left), distribute_or_over_and(right))
        case _:
            return expr


def distribute_and_over_or(expr: Proposition) -> Proposition:
    """Rozdziela AND względem OR (krok DNF): A ∧ (B ∨ C) = (A ∧ B) ∨ (A ∧ C)."""
    match expr:
        case And(left, right):
            left  = distribute_and_over_or(left)
            right = distribute_and_over_or(right)
            if isinstance(left, Or):
                return Or(
                    distribute_and_over_or(And(left.left, right)),
                    distribute_and_over_or(And(left.right, right)),
                )
            if isinstance(right, Or):
                return Or(
                    distribute_and_over_or(And(left, right.left)),
                    distribute_and_over_or(And(left, right.right)),
                )
            return And(left, right)
        case Or(left, right):
            return Or(distribute_and_over_or(left), distribute_and_over_or(right))
        case _:
            return expr


def to_cnf(prop: Proposition) -> Proposition:
    """Koniunkcyjna postać normalna."""
    return distribute_or_over_and(to_nnf(prop))


def to_dnf(prop: Proposition) -> Proposition:
    """Dysjunkcyjna postać normalna."""
    return distribute_and_over_or(to_nnf(prop))


# ---------------------------------------------------------------------------
# Przekształcenia strukturalne
# ---------------------------------------------------------------------------

def transform(prop: Proposition, machine_id: str, from_state: str, to_state: str) -> Proposition:
    """Zastępuje każdy atom (machine_id, from_state) atomem (machine_id, to_state)."""
    match prop:
        case Atom(m, s) if m == machine_id and s == from_state:
            return Atom(machine_id, to_state)
        case And(left, right):
            return And(
                transform(left, machine_id, from_state, to_state),
                transform(right, machine_id, from_state, to_state),
            )
        case Or(left, right):
            return Or(
                transform(left, machine_id, from_state, to_state),
                transform(right, machine_id, from_state, to_state),
            )
        case Not(operand):
            return Not(transform(operand, machine_id, from_state, to_state))
        case _:
            return prop


def atoms(prop: Proposition) -> frozenset[Atom]:
    """Wszystkie atomy występujące w zdaniu."""
    match prop:
        case Atom():
            return frozenset({prop})
        case And(left, right) | Or(left, right):
            return atoms(left) | atoms(right)
        case Not(operand):
            return atoms(operand)
        case _:
            return frozenset()


def machines(prop: Proposition) -> frozenset[str]:
    """Identyfikatory maszyn, do których odwołuje się zdanie."""
    return frozenset(a.machine_id for a in atoms(prop))


# ---------------------------------------------------------------------------
# Budowanie i spłaszczanie
# ---------------------------------------------------------------------------

def conjunction(props: Iterable[Proposition]) -> Proposition:
    """Koniunkcja ciągu zdań; pusta koniunkcja to TRUE."""
    items = list(props)
    if not items:
        return TRUE
    return reduce(And, items)


def disjunction(props: Iterable[Proposition]) -> Proposition:
    """Alternatywa ciągu zdań; pusta alternatywa to FALSE."""
    items = list(props)
    if not items:
        return FALSE
    return reduce(Or, items)


def conjuncts(prop: Proposition) -> list[Proposition]:
    """Spłaszcza zagnieżdżone AND do listy składników."""
    if isinstance(prop, And):
        return conjuncts(prop.left) + conjuncts(prop.right)
    return [prop]


def disjuncts(prop: Proposition) -> list[Proposition]:
    """Spłaszcza zagnieżdżone OR do listy składników."""
    if isinstance(prop, Or):
        return disjuncts(prop.left) + disjuncts(prop.right)
    return [prop]
