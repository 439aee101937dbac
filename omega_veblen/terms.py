"""
Ordinal Term Algebra

An ordinal expression is an immutable tree of frozen dataclasses:

- Zero, Nat(n): the finite ordinals
- Omega: ω, the first infinite ordinal
- Sum(terms): α₁ + α₂ + ... (left to right)
- Power(base, exponent): α^β
- Multiple(term, count): α·n for a finite count n
- Epsilon(i), Zeta(i), Eta(i): ε_i, ζ_i, η_i
- Veblen(phi_index, alpha): φ_β(α), with φ₀(α) = ω^α, φ₁ = ε, φ₂ = ζ, φ₃ = η
- Buchholz(function_index, alpha): ψ_ν(α), the collapsing layer

Any tree built from these is a *raw* term. The normalizer rewrites a raw term
into its canonical form, which is unique per ordinal:

    ω^{α₁}·c₁ + ω^{α₂}·c₂ + ... + ω^{α_k}·c_k + n     with α₁ > α₂ > ... > α_k

where each ω^α is written as Omega or Power(Omega, α). When α is an
epsilon number (ω^α = α), the summand is the Epsilon/Zeta/Eta/Veblen/Buchholz
node itself. A run of equal summands is one Multiple carrying the count
(ω·3 is Multiple(Omega, 3), never ω + ω + ω), and the trailing finite part
is a single Nat. Term size therefore grows with the number of distinct
exponents, not with the coefficients.

Child positions accept plain non-negative ints, so ``Power(Omega(), 2)`` and
``Veblen(0, Omega())`` are valid. Everything else is rejected with
MalformedIndex at construction time.
"""

from __future__ import annotations
import numbers
from dataclasses import dataclass, fields
from typing import List, Sequence, Tuple, Union

from .errors import MalformedIndex


TermLike = Union["Term", int]


def as_term(value: TermLike, role: str = "argument") -> Term:
    """Coerce a Term or non-negative integer into a Term."""
    if isinstance(value, Term):
        return value
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise MalformedIndex(
            f"{role} must be an ordinal term or a non-negative int, got {value!r}"
        )
    if value < 0:
        raise MalformedIndex(f"{role} must be non-negative, got {value}")
    return Zero() if value == 0 else Nat(int(value))


class Term:
    """
    Base class for ordinal expression nodes.

    Subclasses are frozen dataclasses, so equality and hashing are structural.
    The arithmetic and ordering hooks below normalize their operands first;
    structural equality (``==``) does not, and only agrees with ordinal
    equality on canonical terms.
    """

    def _coerce(self, *names: str) -> None:
        for name in names:
            object.__setattr__(self, name, as_term(getattr(self, name), name))

    def normalized(self) -> Term:
        from .normalizer import normalize
        return normalize(self)

    def is_finite(self) -> bool:
        """Check if the ordinal is finite (< ω)."""
        return isinstance(self.normalized(), (Zero, Nat))

    def is_transfinite(self) -> bool:
        """Check if the ordinal is transfinite (≥ ω)."""
        return not self.is_finite()

    def is_limit(self) -> bool:
        """Check if the ordinal is a limit ordinal (nonzero, no predecessor)."""
        canonical = self.normalized()
        if isinstance(canonical, Zero):
            return False
        return not isinstance(summands(canonical)[-1], Nat)

    def successor(self) -> Term:
        """Compute α + 1."""
        from .arithmetic import successor
        return successor(self)

    def __add__(self, other: TermLike) -> Term:
        """Ordinal addition (non-commutative for transfinite!)."""
        from .arithmetic import add
        return add(self, other)

    def __radd__(self, other: TermLike) -> Term:
        from .arithmetic import add
        return add(other, self)

    def __mul__(self, other: TermLike) -> Term:
        from .arithmetic import multiply
        return multiply(self, other)

    def __rmul__(self, other: TermLike) -> Term:
        from .arithmetic import multiply
        return multiply(other, self)

    def __pow__(self, other: TermLike) -> Term:
        from .arithmetic import power
        return power(self, other)

    def __rpow__(self, other: TermLike) -> Term:
        from .arithmetic import power
        return power(other, self)

    def _order(self, other):
        from .comparison import compare
        if not isinstance(other, (Term, numbers.Integral)):
            return None
        return compare(self.normalized(), as_term(other).normalized())

    def __lt__(self, other: TermLike) -> bool:
        order = self._order(other)
        return NotImplemented if order is None else order < 0

    def __le__(self, other: TermLike) -> bool:
        order = self._order(other)
        return NotImplemented if order is None else order <= 0

    def __gt__(self, other: TermLike) -> bool:
        order = self._order(other)
        return NotImplemented if order is None else order > 0

    def __ge__(self, other: TermLike) -> bool:
        order = self._order(other)
        return NotImplemented if order is None else order >= 0

    def __str__(self) -> str:
        from .notation import render
        return render(self)


@dataclass(frozen=True)
class Zero(Term):
    """The ordinal 0."""


@dataclass(frozen=True)
class Nat(Term):
    """A finite ordinal n ≥ 1. Nat(0) is accepted raw and normalizes to Zero."""
    n: int

    def __post_init__(self):
        if isinstance(self.n, bool) or not isinstance(self.n, numbers.Integral):
            raise MalformedIndex(f"Nat expects an int, got {self.n!r}")
        if self.n < 0:
            raise MalformedIndex(f"Nat must be non-negative, got {self.n}")
        object.__setattr__(self, "n", int(self.n))


@dataclass(frozen=True)
class Omega(Term):
    """ω = first infinite ordinal."""


@dataclass(frozen=True)
class Sum(Term):
    """Left-to-right ordinal sum."""
    terms: Tuple[Term, ...]

    def __post_init__(self):
        try:
            items = tuple(self.terms)
        except TypeError:
            raise MalformedIndex(
                f"Sum expects a sequence of terms, got {self.terms!r}"
            ) from None
        object.__setattr__(
            self, "terms", tuple(as_term(t, "summand") for t in items)
        )


@dataclass(frozen=True)
class Power(Term):
    """base^exponent."""
    base: Term
    exponent: Term

    def __post_init__(self):
        self._coerce("base", "exponent")


@dataclass(frozen=True)
class Multiple(Term):
    """
    term·count, right multiplication by a finite count.

    Canonically ``term`` is an infinite principal and ``count`` ≥ 2, which
    stores ω·n in constant space however large n is.
    """
    term: Term
    count: int

    def __post_init__(self):
        self._coerce("term")
        if isinstance(self.count, bool) or not isinstance(self.count, numbers.Integral):
            raise MalformedIndex(f"Multiple expects an int count, got {self.count!r}")
        if self.count < 0:
            raise MalformedIndex(f"count must be non-negative, got {self.count}")
        object.__setattr__(self, "count", int(self.count))


@dataclass(frozen=True)
class Epsilon(Term):
    """ε_index: fixed points of α ↦ ω^α."""
    index: Term

    def __post_init__(self):
        self._coerce("index")


@dataclass(frozen=True)
class Zeta(Term):
    """ζ_index: fixed points of α ↦ ε_α."""
    index: Term

    def __post_init__(self):
        self._coerce("index")


@dataclass(frozen=True)
class Eta(Term):
    """η_index: fixed points of α ↦ ζ_α."""
    index: Term

    def __post_init__(self):
        self._coerce("index")


@dataclass(frozen=True)
class Veblen(Term):
    """φ_phi_index(alpha). The φ-index must stay below Ω₁."""
    phi_index: Term
    alpha: Term

    def __post_init__(self):
        from .bounds import check_veblen
        self._coerce("phi_index", "alpha")
        check_veblen(self)


@dataclass(frozen=True)
class Buchholz(Term):
    """ψ_function_index(alpha), for function indices 0, 1, 2."""
    function_index: Term
    alpha: Term

    def __post_init__(self):
        from .bounds import check_buchholz
        self._coerce("function_index", "alpha")
        check_buchholz(self)


ZERO = Zero()
ONE = Nat(1)
OMEGA = Omega()

CRITICAL_TYPES = (Epsilon, Zeta, Eta, Veblen, Buchholz)


def is_critical(term: Term) -> bool:
    """True for hierarchy nodes, whose canonical values are epsilon numbers."""
    return isinstance(term, CRITICAL_TYPES)


def is_principal(term: Term) -> bool:
    """True for canonical infinite additive principals ω^α (α > 0)."""
    return isinstance(term, (Omega, Power)) or is_critical(term)


def children(term: Term) -> Tuple[Term, ...]:
    """Immediate subterms, in field order."""
    if isinstance(term, Sum):
        return term.terms
    return tuple(getattr(term, f.name) for f in fields(term)
                 if isinstance(getattr(term, f.name), Term))


def term_size(term: Term) -> int:
    """Structural size (node count)."""
    return 1 + sum(term_size(child) for child in children(term))


def summands(term: Term) -> Tuple[Term, ...]:
    """Additive components of a canonical term (empty for zero)."""
    if isinstance(term, Zero):
        return ()
    if isinstance(term, Sum):
        return term.terms
    return (term,)


def from_summands(parts: Sequence[Term]) -> Term:
    """Inverse of ``summands`` for an already-ordered list of summands."""
    if not parts:
        return ZERO
    if len(parts) == 1:
        return parts[0]
    return Sum(tuple(parts))


def run_of(part: Term) -> Tuple[Term, int]:
    """Split a canonical summand into (principal, count)."""
    if isinstance(part, Multiple):
        return part.term, part.count
    return part, 1


def make_run(principal: Term, count: int) -> Term:
    """Inverse of ``run_of`` for an infinite principal."""
    return principal if count == 1 else Multiple(principal, count)


def exponent_of(term: Term) -> Term:
    """
    The α with term = ω^α·c, for a single canonical summand.

    Finite summands count as ω⁰·n and report exponent 0.
    """
    if isinstance(term, Multiple):
        return exponent_of(term.term)
    if isinstance(term, Nat):
        return ZERO
    if isinstance(term, Omega):
        return ONE
    if isinstance(term, Power):
        return term.exponent
    if is_critical(term):
        return term
    raise ValueError(f"{term!r} is not a single canonical summand")


def leading_exponent(term: Term) -> Term:
    """Exponent of the leading summand (the Cantor degree)."""
    parts = summands(term)
    if not parts:
        raise ValueError("zero has no leading exponent")
    return exponent_of(parts[0])


def split_finite(term: Term) -> Tuple[Term, int]:
    """Split a canonical term into (infinite part, trailing finite part)."""
    parts = summands(term)
    if parts and isinstance(parts[-1], Nat):
        return from_summands(parts[:-1]), parts[-1].n
    return term, 0


def cantor_normal_form(term: Term) -> List[Tuple[Term, int]]:
    """
    Coefficient view of a canonical term: [(α₁, n₁), (α₂, n₂), ...]
    for ω^α₁·n₁ + ω^α₂·n₂ + ..., with strictly decreasing exponents.
    """
    groups: List[Tuple[Term, int]] = []
    for part in summands(term):
        if isinstance(part, Nat):
            groups.append((ZERO, part.n))
        else:
            principal, count = run_of(part)
            groups.append((exponent_of(principal), count))
    return groups
