"""
Ordinal arithmetic: addition, multiplication, exponentiation.

Every operation builds its result from canonical operands and returns a
canonical term. Operands may be raw terms or non-negative ints.
"""

from __future__ import annotations

from .terms import Term, TermLike, Sum, Power, ONE, as_term
from .normalizer import get_normalizer


class OrdinalArithmetic:
    """Operations on ordinals."""

    @staticmethod
    def add(a: TermLike, b: TermLike) -> Term:
        """
        Ordinal addition α + β.

        Note: Ordinal addition is NOT commutative for transfinite ordinals!
        1 + ω = ω, but ω + 1 ≠ ω
        """
        return get_normalizer().normalize(Sum((as_term(a), as_term(b))))

    @staticmethod
    def multiply(a: TermLike, b: TermLike) -> Term:
        """
        Ordinal multiplication α · β.

        ω · 2 = ω + ω
        2 · ω = ω
        α · (β + γ) = α·β + α·γ
        """
        normalizer = get_normalizer()
        return normalizer.multiply(
            normalizer.normalize(as_term(a)), normalizer.normalize(as_term(b))
        )

    @staticmethod
    def power(base: TermLike, exponent: TermLike) -> Term:
        """
        Ordinal exponentiation α^β.

        2^ω = ω
        (ω + 1)^2 = ω² + ω + 1
        ε₀^2 = ω^(ε₀·2)
        """
        return get_normalizer().normalize(Power(as_term(base), as_term(exponent)))

    @staticmethod
    def successor(a: TermLike) -> Term:
        """Compute α + 1."""
        return OrdinalArithmetic.add(a, ONE)


add = OrdinalArithmetic.add
multiply = OrdinalArithmetic.multiply
power = OrdinalArithmetic.power
successor = OrdinalArithmetic.successor
