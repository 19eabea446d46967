"""
algebra/parser.py — parser wyrażeń strażników (recursive descent).

Gramatyka (priorytet: OR najniższy, AND, NOT najwyższy):

    expression ::= term ( "OR" term )*
    term       ::= factor ( "AND" factor )*
    factor     ::= "NOT" factor | primary
    primary    ::= "TRUE" | "FALSE" | "(" expression ")" | atom
    atom       ::= IDENT "." IDENT

Słowa kluczowe pisane wielkimi literami; IDENT = [A-Za-z0-9_]+.
Parser nie odtwarza się po błędzie: pierwszy błąd przerywa parsowanie
wyjątkiem ParseError z pozycją (0-based offset w tekście).

Publiczne API:
  parse(text, assembly=None)              -> Proposition
  parse_constraints(text, assembly=None)  -> Proposition | None
  ParseError
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .propositions import FALSE, TRUE, And, Atom, Not, Or, Proposition, conjunction, disjunction

if TYPE_CHECKING:
    from data_model.assembly import Assembly


KEYWORDS: frozenset[str] = frozenset({"AND", "OR", "NOT", "TRUE", "FALSE"})

_TOKEN_RE = re.compile(
    r"(?P<ws>\s+)"
    r"|(?P<ident>[A-Za-z0-9_]+)"
    r"|(?P<punct>[().,:])"
)


class ParseError(ValueError):
    """Błąd parsowania z komunikatem i pozycją w tekście wejściowym."""

    def __init__(self, message: str, position: int) -> None:
        super().__init__(f"{message} (pozycja {position})")
        self.message  = message
        self.position = position


# ---------------------------------------------------------------------------
# Tokenizer
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Token:
    kind: str   # "IDENT", słowo kluczowe, znak interpunkcyjny lub "EOF"
    text: str
    pos:  int


def tokenize(text: str, offset: int = 0) -> list[Token]:
    """Dzieli tekst na tokeny; zawsze kończy się tokenem EOF."""
    tokens: list[Token] = []
    pos = 0
    while pos < len(text):
        m = _TOKEN_RE.match(text, pos)
        if m is None:
            raise ParseError(f"Nieoczekiwany znak '{text[pos]}'", offset + pos)
        if m.lastgroup == "ident":
            word = m.group()
            kind = word if word in KEYWORDS else "IDENT"
            tokens.append(Token(kind, word, offset + pos))
        elif m.lastgroup == "punct":
            tokens.append(Token(m.group(), m.group(), offset + pos))
        pos = m.end()
    tokens.append(Token("EOF", "", offset + len(text)))
    return tokens


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------

class GuardParser:
    """
    Parser pojedynczego wyrażenia strażnika.

    Gdy podano assembly, każdy atom musi wskazywać maszynę z assembly,
    w przeciwnym razie ParseError z nazwą identyfikatora i jego pozycją.
    """

    def __init__(self, text: str, assembly: Assembly | None = None, offset: int = 0) -> None:
        self._tokens   = tokenize(text, offset)
        self._index    = 0
        self._assembly = assembly

    # ------------------------------------------------------------------

    def parse(self) -> Proposition:
        if self._peek().kind == "EOF":
            raise ParseError("Puste wyrażenie", self._peek().pos)
        prop = self._expression()
        tok  = self._peek()
        if tok.kind != "EOF":
            raise ParseError(f"Nieoczekiwany token '{tok.text}'", tok.pos)
        return prop

    def parse_configuration(self) -> Proposition:
        """
        Lista atomów oddzielonych przecinkami, opcjonalnie w nawiasach:
        "(m1.R, m2.On)" lub "m1:R, m2:On". Wynik to koniunkcja atomów.
        """
        wrapped = self._accept("(")
        items   = [self._atom(separators=(".", ":"))]
        while self._accept(","):
            items.append(self._atom(separators=(".", ":")))
        if wrapped:
            self._expect(")")
        tok = self._peek()
        if tok.kind != "EOF":
            raise ParseError(f"Nieoczekiwany token '{tok.text}'", tok.pos)
        return conjunction(items)

    # ------------------------------------------------------------------

    def _expression(self) -> Proposition:
        left = self._term()
        while self._accept("OR"):
            left = Or(left, self._term())
        return left

    def _term(self) -> Proposition:
        left = self._factor()
        while self._accept("AND"):
            left = And(left, self._factor())
        return left

    def _factor(self) -> Proposition:
        if self._accept("NOT"):
            return Not(self._factor())
        return self._primary()

    def _primary(self) -> Proposition:
        if self._accept("TRUE"):
            return TRUE
        if self._accept("FALSE"):
            return FALSE
        if self._accept("("):
            prop = self._expression()
            self._expect(")")
            return prop
        return self._atom(separators=(".",))

    def _atom(self, separators: tuple[str, ...]) -> Atom:
        machine_tok = self._identifier()
        machine_id  = machine_tok.text
        if self._assembly is not None and machine_id not in self._assembly.machines:
            raise ParseError(
                f"Maszyna '{machine_id}' nie istnieje w assembly "
                f"'{self._assembly.assembly_id}'",
                machine_tok.pos,
            )
        tok = self._peek()
        if tok.kind not in separators:
            raise ParseError(f"Oczekiwano '{separators[0]}' po '{machine_id}'", tok.pos)
        self._index += 1
        state_tok = self._identifier()
        return Atom(machine_id, state_tok.text)

    def _identifier(self) -> Token:
        tok = self._peek()
        if tok.kind != "IDENT":
            found = f"'{tok.text}'" if tok.text else "koniec wyrażenia"
            raise ParseError(f"Oczekiwano identyfikatora, znaleziono {found}", tok.pos)
        self._index += 1
        return tok

    # ------------------------------------------------------------------

    def _peek(self) -> Token:
        return self._tokens[self._index]

    def _accept(self, kind: str) -> bool:
        if self._peek().kind == kind:
            self._index += 1
            return True
        return False

    def _expect(self, kind: str) -> None:
        tok = self._peek()
        if tok.kind != kind:
            found = f"'{tok.text}'" if tok.text else "koniec wyrażenia"
            raise ParseError(f"Oczekiwano '{kind}', znaleziono {found}", tok.pos)
        self._index += 1


# ---------------------------------------------------------------------------
# Funkcje publiczne
# ---------------------------------------------------------------------------

def parse(text: str, assembly: Assembly | None = None) -> Proposition:
    """
    Parsuje wyrażenie strażnika.

    Przykłady::

        "m1.R AND m2.Off"           → And(Atom(m1,R), Atom(m2,Off))
        "NOT (m1.G OR m1.Y)"        → Not(Or(...))
        "TRUE"                      → TRUE

    Raises:
        ParseError przy błędnej składni lub nieznanej maszynie.
    """
    return GuardParser(text, assembly).parse()


def parse_constraints(text: str, assembly: Assembly | None = None) -> Proposition | None:
    """
    Parsuje ograniczenia stanu (po jednej konfiguracji w linii, linie łączone OR).

    Linia bez słów kluczowych to lista atomów "(m1.R, m2.On)" / "m1:R, m2:On";
    linia ze słowami kluczowymi jest zwykłym wyrażeniem strażnika.
    Pusty tekst oznacza brak ograniczeń (None).
    """
    lines: list[Proposition] = []
    offset = 0
    for line in text.splitlines(keepends=True):
        stripped = line.strip()
        if stripped:
            start  = offset + line.index(stripped)
            kinds  = {t.kind for t in tokenize(stripped, start)}
            parser = GuardParser(stripped, assembly, offset=start)
            if kinds & KEYWORDS:
                lines.append(parser.parse())
            else:
                lines.append(parser.parse_configuration())
        offset += len(line)
    if not lines:
        return None
    return disjunction(lines)
