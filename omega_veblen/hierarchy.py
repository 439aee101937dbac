"""
Hierarchy functions beyond Cantor normal form.

The Veblen hierarchy extends ω-exponentiation:
- φ₀(α) = ω^α
- φ₁(α) = ε_α (epsilon numbers: fixed points of ω^x = x)
- φ₂(α) = ζ_α (zeta numbers: fixed points of ε_x = x)
- φ₃(α) = η_α (eta numbers)
- φ_β(α) for larger β, up to (but not including) Ω₁ as index

Above it sits the collapsing layer ψ_ν(α), ν ∈ {0, 1, 2}:
- ψ₁(0) = Ω₁, ψ₂(0) = Ω₂ (uncountable stages)
- ψ₀(Ω₂) = Bachmann-Howard ordinal

ψ terms are positional notations. Each one is treated as strongly critical
and ordered by (ν, α), so φ_β(ψ) = ψ for every β below it. That is not
Buchholz's value assignment: a rendered ψ₀(0) sits above every φ term
built from ψ-free parts, where Buchholz has ψ₀(0) = 1. Only Ω₁, Ω₂ and
ψ₀(Ω₂) carry their usual meaning.

Every builder accepts Terms or ints and returns a canonical term, so e.g.
``veblen(1, 0) == epsilon(0)`` and ``epsilon(zeta(0)) == zeta(0)``.
"""

from __future__ import annotations
from enum import IntEnum

from .terms import (
    Term, TermLike, Omega, Power, Epsilon, Zeta, Eta, Veblen,
    Buchholz, ZERO, ONE, OMEGA, as_term, summands, run_of,
)
from .normalizer import normalize


class HierarchyKind(IntEnum):
    """Which hierarchy the leading summand of a canonical term belongs to."""
    FINITE = 0      # 0, 1, 2, ...
    POWER = 1       # ω^α
    EPSILON = 2     # ε_α
    ZETA = 3        # ζ_α
    ETA = 4         # η_α
    VEBLEN = 5      # φ_β(α), β ≥ 4
    BUCHHOLZ = 6    # ψ_ν(α)


_KINDS = {
    Omega: HierarchyKind.POWER,
    Power: HierarchyKind.POWER,
    Epsilon: HierarchyKind.EPSILON,
    Zeta: HierarchyKind.ZETA,
    Eta: HierarchyKind.ETA,
    Veblen: HierarchyKind.VEBLEN,
    Buchholz: HierarchyKind.BUCHHOLZ,
}


def kind_of(term: TermLike) -> HierarchyKind:
    """Classify a term by the kind of its leading summand."""
    parts = summands(normalize(as_term(term, "term")))
    if not parts:
        return HierarchyKind.FINITE
    return _KINDS.get(type(run_of(parts[0])[0]), HierarchyKind.FINITE)


def epsilon(index: TermLike) -> Term:
    """ε_index = index-th fixed point of α ↦ ω^α."""
    return normalize(Epsilon(index))


def zeta(index: TermLike) -> Term:
    """ζ_index = index-th fixed point of α ↦ ε_α."""
    return normalize(Zeta(index))


def eta(index: TermLike) -> Term:
    """η_index = index-th fixed point of α ↦ ζ_α."""
    return normalize(Eta(index))


def veblen(phi_index: TermLike, alpha: TermLike) -> Term:
    """φ_phi_index(alpha)."""
    return normalize(Veblen(phi_index, alpha))


def buchholz(function_index: TermLike, alpha: TermLike) -> Term:
    """ψ_function_index(alpha)."""
    return normalize(Buchholz(function_index, alpha))


def omega_tower(height: int) -> Term:
    """ω^ω^...^ω (tower of the given height; height 0 is 1)."""
    result: Term = ONE
    for _ in range(height):
        result = normalize(Power(OMEGA, result))
    return result


OMEGA_1 = buchholz(1, 0)
OMEGA_2 = buchholz(2, 0)
BACHMANN_HOWARD = buchholz(0, OMEGA_2)


# Common ordinals for reference
ORDINAL_CONSTANTS = {
    "zero": ZERO,
    "one": ONE,
    "omega": OMEGA,
    "omega_squared": normalize(Power(OMEGA, 2)),
    "omega_omega": omega_tower(2),
    "epsilon_0": epsilon(0),
    "zeta_0": zeta(0),
    "eta_0": eta(0),
    "phi_4_0": veblen(4, 0),
    "phi_omega_0": veblen(OMEGA, 0),
    "omega_1": OMEGA_1,
    "omega_2": OMEGA_2,
    "bachmann_howard": BACHMANN_HOWARD,
}
