"""
Ordinal comparison on canonical terms.

Canonical forms are unique, so two canonical terms are equal as ordinals
exactly when they are structurally equal. Everything else is decided by
structural recursion:

- Sums compare lexicographically by summand, then by length
- Multiples compare by principal, then by count (ω·3 > ω·2 + 5)
- Finite summands compare numerically and sit below every infinite one
- Principal summands compare through their Veblen coordinates
  ω^α = φ₀(α), ε_α = φ₁(α), ζ_α = φ₂(α), η_α = φ₃(α), φ_β(α):

      φ_β(α) < φ_γ(δ)  iff  β = γ and α < δ
                         or  β < γ and α < φ_γ(δ)
                         or  β > γ and φ_β(α) < δ

  So a higher kind dominates a lower one (ε_5 < ζ_0) unless the lower kind's
  argument already reaches past it (ε_{ζ_0 + 1} > ζ_0).
- Buchholz terms ψ_ν(α) are positional notations, each taken to be strongly
  critical: φ_β(α) < ψ_ν(α') iff both β and α are below it. Among themselves
  they compare by (ν, α). So ψ₀(0) sits above every φ_β(α) with ψ-free β
  and α, unlike Buchholz's own ψ₀(0) = 1.

The comparator never normalizes. Feeding it raw terms gives no guarantees.
"""

from __future__ import annotations
from enum import IntEnum
from functools import cmp_to_key, lru_cache
from typing import Iterable, List, Tuple

from .terms import (
    Term, Zero, Nat, Omega, Power, Multiple, Epsilon, Zeta, Eta, Veblen,
    Buchholz, ZERO, ONE, summands, run_of,
)


class Ordering(IntEnum):
    """Result of comparing two ordinals."""
    LESS = -1
    EQUAL = 0
    GREATER = 1

    def reverse(self) -> Ordering:
        return Ordering(-self.value)


def _sign(value: int) -> Ordering:
    if value < 0:
        return Ordering.LESS
    if value > 0:
        return Ordering.GREATER
    return Ordering.EQUAL


_LEVELS = {Epsilon: ONE, Zeta: Nat(2), Eta: Nat(3)}


def veblen_coordinates(term: Term) -> Tuple[Term, Term]:
    """(β, α) with term = φ_β(α), for canonical principals other than Buchholz."""
    if isinstance(term, Omega):
        return ZERO, ONE
    if isinstance(term, Power):
        return ZERO, term.exponent
    if isinstance(term, Veblen):
        return term.phi_index, term.alpha
    if type(term) in _LEVELS:
        return _LEVELS[type(term)], term.index
    raise ValueError(f"{term!r} has no Veblen coordinates")


def veblen_level(term: Term):
    """The φ-index of a principal term, or None for finite and Buchholz terms."""
    if isinstance(term, (Omega, Power, Epsilon, Zeta, Eta, Veblen)):
        return veblen_coordinates(term)[0]
    return None


@lru_cache(maxsize=1 << 16)
def compare(a: Term, b: Term) -> Ordering:
    """Compare two canonical terms."""
    if a == b:
        return Ordering.EQUAL
    left, right = summands(a), summands(b)
    for x, y in zip(left, right):
        order = _compare_summands(x, y)
        if order != Ordering.EQUAL:
            return order
    return _sign(len(left) - len(right))


def _compare_summands(x: Term, y: Term) -> Ordering:
    if x == y:
        return Ordering.EQUAL
    if isinstance(x, Nat):
        return _sign(x.n - y.n) if isinstance(y, Nat) else Ordering.LESS
    if isinstance(y, Nat):
        return Ordering.GREATER
    if isinstance(x, Multiple) or isinstance(y, Multiple):
        (p, c), (q, d) = run_of(x), run_of(y)
        return _compare_summands(p, q) or _sign(c - d)

    if isinstance(x, Buchholz) and isinstance(y, Buchholz):
        return (compare(x.function_index, y.function_index)
                or compare(x.alpha, y.alpha))
    if isinstance(x, Buchholz):
        return _compare_with_collapse(y, x).reverse()
    if isinstance(y, Buchholz):
        return _compare_with_collapse(x, y)

    (beta, alpha), (gamma, delta) = veblen_coordinates(x), veblen_coordinates(y)
    level = compare(beta, gamma)
    if level == Ordering.EQUAL:
        return compare(alpha, delta)
    if level == Ordering.LESS:
        return compare(alpha, y)
    return compare(x, delta)


def _compare_with_collapse(x: Term, psi: Buchholz) -> Ordering:
    """Compare φ_β(α) against a strongly critical ψ term."""
    beta, alpha = veblen_coordinates(x)
    level, argument = compare(beta, psi), compare(alpha, psi)
    if level == Ordering.LESS and argument == Ordering.LESS:
        return Ordering.LESS
    # φ_β(ψ) = ψ for β < ψ, and φ_ψ(0) = ψ
    if level == Ordering.LESS and argument == Ordering.EQUAL:
        return Ordering.EQUAL
    if level == Ordering.EQUAL and isinstance(alpha, Zero):
        return Ordering.EQUAL
    return Ordering.GREATER


def is_fixed_point(level: Term, term: Term) -> bool:
    """True if φ_level(term) = term, for canonical term and level."""
    if isinstance(term, Buchholz):
        return compare(level, term) == Ordering.LESS
    own = veblen_level(term)
    return own is not None and compare(level, own) == Ordering.LESS


def sort_terms(terms: Iterable[Term], reverse: bool = False) -> List[Term]:
    """Sort canonical terms in ordinal order."""
    return sorted(terms, key=cmp_to_key(compare), reverse=reverse)
