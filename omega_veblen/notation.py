"""
Ordinal notation: printing and parsing.

    render(term)  ->  "ω^2·3 + ω + 5", "ε_0", "φ_4(ω)", "ψ_0(ψ_2(0))"
    parse(text)   ->  Term

The parser reads everything the printer writes, plus ASCII spellings:
``w``/``omega`` for ω, ``eps``/``epsilon``, ``zeta``, ``eta``, ``phi``,
``psi``, ``*`` for ·, braces around indices (``ε_{ω+1}``) and the
two-argument form ``φ(β, α)``. Grammar, loosest binding first:

    expr    := product ('+' product)*
    product := power (('*' | '·') power)*
    power   := primary ('^' power)?
    primary := NUMBER | ω | '(' expr ')' | head
    head    := (ε|ζ|η) '_' index
             | (φ|ψ) '_' index '(' expr ')'
             | (φ|ψ) '(' expr ',' expr ')'
    index   := '{' expr '}' | primary

Sums and powers come back as raw nodes; products are multiplied out on the
spot, so ``ω·3`` parses straight to Multiple(ω, 3). Normalize the result
before comparing.
"""

from __future__ import annotations
import re
from typing import List, NamedTuple

from .errors import NotationError
from .terms import (
    Term, Zero, Nat, Omega, Sum, Power, Multiple, Epsilon, Zeta, Eta, Veblen,
    Buchholz, OMEGA, as_term,
)


_PREFIX = {Epsilon: "ε", Zeta: "ζ", Eta: "η", Veblen: "φ", Buchholz: "ψ"}


def _operand(term: Term) -> str:
    if isinstance(term, (Zero, Nat, Omega)):
        return render(term)
    return f"({render(term)})"


def _group(term: Term, count: int) -> str:
    text = render(term)
    if isinstance(term, (Sum, Multiple)):
        text = f"({text})"
    return f"{text}·{count}"


def _run(term: Term, count: int) -> str:
    return render(term) if count == 1 else _group(term, count)


def render(term: Term) -> str:
    """Render a term (canonical or raw) in ordinal notation."""
    if isinstance(term, Zero):
        return "0"
    if isinstance(term, Nat):
        return str(term.n)
    if isinstance(term, Omega):
        return "ω"
    if isinstance(term, Sum):
        if not term.terms:
            return "0"
        pieces = []
        previous, count = None, 0
        for part in term.terms:
            if part == previous and not isinstance(part, Nat):
                count += 1
                continue
            if previous is not None:
                pieces.append(_run(previous, count))
            previous, count = part, 1
        pieces.append(_run(previous, count))
        return " + ".join(pieces)
    if isinstance(term, Power):
        return f"{_operand(term.base)}^{_operand(term.exponent)}"
    if isinstance(term, Multiple):
        return _group(term.term, term.count)
    if isinstance(term, (Epsilon, Zeta, Eta)):
        return f"{_PREFIX[type(term)]}_{_operand(term.index)}"
    if isinstance(term, Veblen):
        return f"φ_{_operand(term.phi_index)}({render(term.alpha)})"
    if isinstance(term, Buchholz):
        return f"ψ_{_operand(term.function_index)}({render(term.alpha)})"
    raise TypeError(f"cannot render {term!r}")


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

_TOKEN_RE = re.compile(r"""
    \s*(?:
        (?P<number>\d+)
      | (?P<omega>ω|omega|w)
      | (?P<head>ε|epsilon|eps|ζ|zeta|η|eta|φ|phi|ψ|psi)
      | (?P<symbol>[\^+*·_(){},])
    )
""", re.VERBOSE)

_HEADS = {
    "ε": Epsilon, "epsilon": Epsilon, "eps": Epsilon,
    "ζ": Zeta, "zeta": Zeta,
    "η": Eta, "eta": Eta,
    "φ": Veblen, "phi": Veblen,
    "ψ": Buchholz, "psi": Buchholz,
}


class _Token(NamedTuple):
    kind: str
    value: str
    position: int


def _tokenize(text: str) -> List[_Token]:
    tokens = []
    position = 0
    while position < len(text):
        if text[position:].isspace():
            break
        match = _TOKEN_RE.match(text, position)
        if match is None:
            start = len(text[position:]) - len(text[position:].lstrip())
            raise NotationError(
                f"unexpected character {text[position + start]!r}",
                position + start,
            )
        kind = match.lastgroup
        tokens.append(_Token(kind, match.group(kind), match.start(kind)))
        position = match.end()
    return tokens


class _Parser:
    def __init__(self, text: str):
        self.text = text
        self.tokens = _tokenize(text)
        self.index = 0

    def peek(self, *symbols: str) -> bool:
        if self.index >= len(self.tokens):
            return False
        token = self.tokens[self.index]
        return token.kind == "symbol" and token.value in symbols

    def take(self) -> _Token:
        if self.index >= len(self.tokens):
            raise NotationError("unexpected end of input", len(self.text))
        token = self.tokens[self.index]
        self.index += 1
        return token

    def expect(self, symbol: str) -> None:
        token = self.take()
        if token.kind != "symbol" or token.value != symbol:
            raise NotationError(
                f"expected {symbol!r}, found {token.value!r}", token.position
            )

    def parse(self) -> Term:
        if not self.tokens:
            raise NotationError("empty ordinal notation", 0)
        term = self.expr()
        if self.index < len(self.tokens):
            token = self.tokens[self.index]
            raise NotationError(f"unexpected {token.value!r}", token.position)
        return term

    def expr(self) -> Term:
        parts = [self.product()]
        while self.peek("+"):
            self.take()
            parts.append(self.product())
        return parts[0] if len(parts) == 1 else Sum(parts)

    def product(self) -> Term:
        from .arithmetic import multiply

        term = self.power()
        while self.peek("*", "·"):
            self.take()
            term = multiply(term, self.power())
        return term

    def power(self) -> Term:
        base = self.primary()
        if self.peek("^"):
            self.take()
            return Power(base, self.power())
        return base

    def primary(self) -> Term:
        token = self.take()
        if token.kind == "number":
            return as_term(int(token.value))
        if token.kind == "omega":
            return OMEGA
        if token.kind == "head":
            return self.head(_HEADS[token.value])
        if token.value == "(":
            term = self.expr()
            self.expect(")")
            return term
        raise NotationError(f"unexpected {token.value!r}", token.position)

    def head(self, node: type) -> Term:
        if node in (Veblen, Buchholz) and self.peek("("):
            self.take()
            index = self.expr()
            self.expect(",")
            argument = self.expr()
            self.expect(")")
            return node(index, argument)

        self.expect("_")
        index = self.subscript()
        if node in (Epsilon, Zeta, Eta):
            return node(index)
        self.expect("(")
        argument = self.expr()
        self.expect(")")
        return node(index, argument)

    def subscript(self) -> Term:
        if self.peek("{"):
            self.take()
            term = self.expr()
            self.expect("}")
            return term
        return self.primary()


def parse(text: str) -> Term:
    """Parse ordinal notation into a (raw) term."""
    if not isinstance(text, str):
        raise NotationError(f"expected notation text, got {type(text).__name__}")
    return _Parser(text).parse()
