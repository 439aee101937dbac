"""
Random raw term generation for property testing and profiling.

Terms are drawn from a seeded random.Random, so a seed always reproduces
the same batch. Depth bounds the nesting; finite values stay small because
α^n for a sum α has n + 1 distinct exponents in Cantor normal form.

Hierarchy arguments are kept inside the representable range:
- φ-indices and ψ arguments never contain ψ terms (so they stay below Ω₁)
- ψ function indices are 0 or 1, plus the occasional Ω₂ = ψ₂(0)
"""

from __future__ import annotations
import random
from typing import List, Optional

from .terms import (
    Term, Zero, Nat, Omega, Sum, Power, Multiple, Epsilon, Zeta, Eta, Veblen,
    Buchholz, ZERO, OMEGA,
)


class TermGenerator:
    """
    Generates raw ordinal terms of bounded depth.

    Node kinds are weighted towards sums and powers, which exercise most of
    the normalizer; hierarchy nodes appear often enough to mix kinds inside
    sums and exponents.
    """

    KINDS = ("sum", "power", "multiple", "epsilon", "zeta", "eta", "veblen",
             "buchholz")
    WEIGHTS = (0.26, 0.22, 0.08, 0.12, 0.08, 0.05, 0.11, 0.08)

    def __init__(
        self,
        seed: int = 42,
        max_depth: int = 3,
        max_nat: int = 3,
        max_width: int = 3,
        leaf_probability: float = 0.3,
    ):
        self.rng = random.Random(seed)
        self.max_depth = max_depth
        self.max_nat = max_nat
        self.max_width = max_width
        self.leaf_probability = leaf_probability

    def generate(self, depth: Optional[int] = None, collapse: bool = True) -> Term:
        """Draw one raw term. ``collapse=False`` keeps ψ out of the subtree."""
        depth = self.max_depth if depth is None else depth
        if depth <= 0 or self.rng.random() < self.leaf_probability:
            return self._leaf()

        weights = list(self.WEIGHTS)
        if not collapse:
            weights[self.KINDS.index("buchholz")] = 0.0
        kind = self.rng.choices(self.KINDS, weights=weights)[0]

        if kind == "sum":
            width = self.rng.randint(2, self.max_width)
            return Sum(tuple(self.generate(depth - 1, collapse) for _ in range(width)))
        if kind == "power":
            return self._power(depth, collapse)
        if kind == "multiple":
            return Multiple(self.generate(depth - 1, collapse),
                            self.rng.randint(2, self.max_nat))
        if kind == "epsilon":
            return Epsilon(self.generate(depth - 1, collapse))
        if kind == "zeta":
            return Zeta(self.generate(depth - 1, collapse))
        if kind == "eta":
            return Eta(self.generate(depth - 1, collapse))
        if kind == "veblen":
            return Veblen(self.generate(depth - 1, collapse=False),
                          self.generate(depth - 1, collapse))
        return self._buchholz(depth)

    def batch(self, n: int) -> List[Term]:
        """Draw n terms."""
        return [self.generate() for _ in range(n)]

    def _leaf(self) -> Term:
        roll = self.rng.random()
        if roll < 0.15:
            return Zero()
        if roll < 0.6:
            return Nat(self.rng.randint(1, self.max_nat))
        return Omega()

    def _power(self, depth: int, collapse: bool) -> Term:
        if self.rng.random() < 0.3:
            # finite bases only get small exponents: n^(ω+k) = ω·n^k
            base = Nat(self.rng.randint(2, self.max_nat))
            exponent = self.rng.choice([Nat(2), OMEGA, Sum((OMEGA, Nat(1))),
                                        Power(OMEGA, Nat(2))])
            return Power(base, exponent)
        # shallow exponents keep α^n from growing past a few hundred summands
        return Power(self._infinite(depth - 1, collapse),
                     self.generate(min(depth - 1, 1), collapse))

    def _infinite(self, depth: int, collapse: bool) -> Term:
        roll = self.rng.random()
        if depth <= 0 or roll < 0.3:
            return OMEGA
        if roll < 0.6:
            return Sum((OMEGA, self.generate(depth, collapse)))
        return Epsilon(self.generate(depth - 1, collapse))

    def _buchholz(self, depth: int) -> Term:
        if self.rng.random() < 0.1:
            return Buchholz(2, ZERO)
        nu = self.rng.randint(0, 1)
        return Buchholz(nu, self.generate(depth - 1, collapse=False))
