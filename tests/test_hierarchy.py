"""
Tests for the Veblen hierarchy and the collapsing layer.
"""

import pytest

from omega_veblen.errors import ErrorKind, MalformedIndex, UnsupportedCollapse, checked
from omega_veblen.terms import (
    Nat, Power, Multiple, Epsilon, Zeta, Eta, Veblen, Buchholz, ZERO, ONE, OMEGA,
)
from omega_veblen.comparison import Ordering, compare
from omega_veblen.arithmetic import add, power
from omega_veblen.normalizer import validate_canonical
from omega_veblen.hierarchy import (
    HierarchyKind, kind_of, epsilon, zeta, eta, veblen, buchholz, omega_tower,
    OMEGA_1, OMEGA_2, BACHMANN_HOWARD, ORDINAL_CONSTANTS,
)


class TestVeblenBuilders:
    """Tests for ε, ζ, η and φ."""

    def test_dedicated_levels(self):
        """Test φ₁ = ε, φ₂ = ζ, φ₃ = η."""
        assert veblen(1, 0) == Epsilon(ZERO)
        assert veblen(Nat(1), ZERO) == epsilon(0)
        assert veblen(2, 5) == zeta(5)
        assert veblen(3, OMEGA) == eta(OMEGA)

    def test_level_zero_is_omega_power(self):
        """Test φ₀(ω) = ω^ω."""
        assert veblen(0, OMEGA) == power(OMEGA, OMEGA)
        assert veblen(0, 0) == ONE

    def test_general_level(self):
        """Test that φ₄ and beyond keep the Veblen node."""
        assert veblen(4, 0) == Veblen(Nat(4), ZERO)
        assert veblen(OMEGA, 1) == Veblen(OMEGA, ONE)

    def test_fixed_points_collapse(self):
        """Test ε_{ζ₀} = ζ₀, ζ_{η₁} = η₁, η_{φ₄(0)} = φ₄(0)."""
        assert epsilon(zeta(0)) == zeta(0)
        assert zeta(eta(1)) == eta(1)
        assert eta(veblen(4, 0)) == veblen(4, 0)
        assert epsilon(BACHMANN_HOWARD) == BACHMANN_HOWARD

    def test_results_are_canonical(self):
        """Test builder outputs satisfy every canonical invariant."""
        for term in (epsilon(add(OMEGA, 1)), zeta(epsilon(0)),
                     veblen(add(OMEGA, 2), zeta(0)), buchholz(1, epsilon(0))):
            validate_canonical(term)

    @pytest.mark.parametrize("bad", [-1, "1", 1.5, None])
    def test_malformed(self, bad):
        """Test that invalid indices are rejected."""
        with pytest.raises(MalformedIndex):
            epsilon(bad)
        with pytest.raises(MalformedIndex):
            veblen(bad, 0)
        with pytest.raises(MalformedIndex):
            buchholz(0, bad)


class TestCollapse:
    """Tests for ψ₀, ψ₁, ψ₂ and the representable range."""

    def test_stages(self):
        """Test Ω₁ = ψ₁(0), Ω₂ = ψ₂(0), BHO = ψ₀(Ω₂)."""
        assert OMEGA_1 == Buchholz(ONE, ZERO)
        assert OMEGA_2 == Buchholz(Nat(2), ZERO)
        assert BACHMANN_HOWARD == Buchholz(ZERO, OMEGA_2)
        assert buchholz(0, OMEGA_2) == BACHMANN_HOWARD

    def test_arguments_normalized(self):
        """Test ψ₀(1 + ω) = ψ₀(ω)."""
        assert buchholz(0, add(1, OMEGA)) == Buchholz(ZERO, OMEGA)

    def test_function_index_out_of_range(self):
        """Test that only ψ₀, ψ₁, ψ₂ exist."""
        with pytest.raises(UnsupportedCollapse):
            buchholz(3, 0)
        with pytest.raises(UnsupportedCollapse):
            buchholz(OMEGA, 0)

    def test_omega_2_only_at_zero(self):
        """Test that ψ₂ is only defined at 0."""
        with pytest.raises(UnsupportedCollapse):
            buchholz(2, 1)

    def test_bachmann_howard_ceiling(self):
        """Test that ψ₀ cannot reach past Ω₂."""
        with pytest.raises(UnsupportedCollapse):
            buchholz(0, add(OMEGA_2, 1))
        assert buchholz(1, add(OMEGA_2, 1)) == Buchholz(ONE, add(OMEGA_2, 1))

    def test_phi_index_below_omega_1(self):
        """Test that φ-indices must be countable."""
        with pytest.raises(UnsupportedCollapse):
            veblen(OMEGA_1, 0)
        with pytest.raises(UnsupportedCollapse):
            Veblen(OMEGA_2, 0)
        assert veblen(BACHMANN_HOWARD, 0) == BACHMANN_HOWARD
        assert veblen(buchholz(0, 0), 0) == buchholz(0, 0)

    def test_collapse_is_positional(self):
        """Test that ψ₀(0) is read positionally, above ψ-free φ terms."""
        psi = buchholz(0, 0)
        assert compare(psi, ONE) == Ordering.GREATER
        assert compare(psi, veblen(veblen(OMEGA, 0), 0)) == Ordering.GREATER
        assert compare(psi, veblen(omega_tower(4), epsilon(0))) == Ordering.GREATER
        assert epsilon(psi) == psi

    def test_checked(self):
        """Test tagged results for the range checks."""
        assert checked(buchholz, 5, 0).kind == ErrorKind.UNSUPPORTED_COLLAPSE
        assert checked(veblen, "x", 0).kind == ErrorKind.MALFORMED_INDEX
        assert checked(buchholz, 0, OMEGA_2).unwrap() == BACHMANN_HOWARD


class TestClassification:
    """Tests for kind_of."""

    @pytest.mark.parametrize("term, kind", [
        (0, HierarchyKind.FINITE),
        (5, HierarchyKind.FINITE),
        (OMEGA, HierarchyKind.POWER),
        (Power(OMEGA, 2), HierarchyKind.POWER),
        (Epsilon(0), HierarchyKind.EPSILON),
        (Zeta(0), HierarchyKind.ZETA),
        (Eta(0), HierarchyKind.ETA),
        (Veblen(4, 0), HierarchyKind.VEBLEN),
        (Buchholz(0, 0), HierarchyKind.BUCHHOLZ),
        (Multiple(Epsilon(0), 3), HierarchyKind.EPSILON),
        (Multiple(Buchholz(1, 0), 2), HierarchyKind.BUCHHOLZ),
    ])
    def test_kind_of(self, term, kind):
        """Test classification by leading summand."""
        assert kind_of(term) == kind

    def test_kind_of_sum(self):
        """Test that the leading summand decides."""
        assert kind_of(add(epsilon(0), 1)) == HierarchyKind.EPSILON
        assert kind_of(Veblen(1, OMEGA)) == HierarchyKind.EPSILON
        assert kind_of(Epsilon(Zeta(0))) == HierarchyKind.ZETA

    def test_kind_order(self):
        """Test the kind order matches the hierarchy."""
        kinds = list(HierarchyKind)
        assert kinds == sorted(kinds)
        assert HierarchyKind.FINITE < HierarchyKind.BUCHHOLZ


class TestConstants:
    """Tests for omega towers and the constant table."""

    def test_omega_tower(self):
        """Test ω^ω^ω."""
        assert omega_tower(0) == ONE
        assert omega_tower(1) == OMEGA
        assert omega_tower(3) == Power(OMEGA, Power(OMEGA, OMEGA))

    def test_towers_below_epsilon_0(self):
        """Test that every finite tower stays below ε₀."""
        for height in range(6):
            assert compare(omega_tower(height), epsilon(0)) == Ordering.LESS

    def test_constants_canonical_and_ordered(self):
        """Test the reference table."""
        for term in ORDINAL_CONSTANTS.values():
            validate_canonical(term)
        names = ["zero", "one", "omega", "omega_squared", "omega_omega",
                 "epsilon_0", "zeta_0", "eta_0", "phi_4_0", "phi_omega_0",
                 "bachmann_howard", "omega_1", "omega_2"]
        values = [ORDINAL_CONSTANTS[name] for name in names]
        for lower, upper in zip(values, values[1:]):
            assert compare(lower, upper) == Ordering.LESS
