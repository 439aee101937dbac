"""
Property tests over generated terms.

Canonical-form and order properties run under Hypothesis over a recursive
term strategy; the seeded TermGenerator is covered here too, since the
profiling helpers draw their batches from it.
"""

import math

import numpy as np
import pytest
from hypothesis import HealthCheck, assume, given, settings
from hypothesis import strategies as st

from omega_veblen.terms import (
    Nat, Sum, Power, Multiple, Epsilon, Zeta, Eta, Veblen, Buchholz,
    ZERO, ONE, OMEGA, as_term, term_size,
)
from omega_veblen.comparison import Ordering, compare, sort_terms
from omega_veblen.normalizer import normalize, validate_canonical
from omega_veblen.arithmetic import add, multiply
from omega_veblen.hierarchy import OMEGA_2
from omega_veblen.sampling import TermGenerator
from omega_veblen.analysis import NormalizationProfile, profile_normalization


# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------

leaves = st.one_of(st.integers(min_value=0, max_value=5).map(as_term), st.just(OMEGA))

# counts may be huge: a Multiple never feeds the exponent of a finite base
counts = st.integers(min_value=0, max_value=10 ** 18)

finite_base_exponents = st.sampled_from([
    Nat(2), OMEGA, Sum((OMEGA, 1)), Sum((OMEGA, 64)), Power(OMEGA, 2),
    Multiple(OMEGA, 10 ** 12),
])


def _extend(children, indices):
    return st.one_of(
        st.lists(children, min_size=2, max_size=3).map(Sum),
        st.builds(Multiple, children, counts),
        st.builds(Power, children, st.integers(min_value=0, max_value=3)),
        st.builds(Power, st.just(OMEGA), children),
        st.builds(Power, st.integers(min_value=2, max_value=3), finite_base_exponents),
        st.builds(Epsilon, children),
        st.builds(Zeta, children),
        st.builds(Eta, children),
        st.builds(Veblen, indices, children),
    )


# ψ-free terms stay below ψ₀(0), so they are valid φ-indices and ψ arguments
psi_free = st.recursive(leaves, lambda children: _extend(children, children),
                        max_leaves=6)

collapses = st.one_of(
    st.builds(Buchholz, st.integers(min_value=0, max_value=1), psi_free),
    st.just(OMEGA_2),
)

raw = st.recursive(leaves | collapses, lambda children: _extend(children, psi_free),
                   max_leaves=6)

canonical = raw.map(normalize)

property_settings = settings(
    max_examples=150, deadline=None, suppress_health_check=[HealthCheck.too_slow]
)


@pytest.fixture(scope="module")
def raw_terms():
    return TermGenerator(seed=7).batch(150)


class TestGenerator:
    """Tests for the seeded term generator."""

    def test_reproducible(self):
        """Test that a seed reproduces its batch."""
        assert TermGenerator(seed=13).batch(20) == TermGenerator(seed=13).batch(20)

    def test_depth_zero_gives_leaves(self):
        """Test depth-0 generation."""
        generator = TermGenerator(seed=1, max_depth=0)
        for term in generator.batch(20):
            assert term_size(term) == 1

    def test_mixes_kinds(self, raw_terms):
        """Test that batches cover the hierarchy node types."""
        names = {type(term).__name__ for term in raw_terms}
        assert {"Sum", "Power"} <= names
        assert len(names) >= 5


class TestNormalForm:
    """Tests for canonical-form properties."""

    @given(raw)
    @property_settings
    def test_idempotent(self, term):
        """Test normalize is idempotent and produces canonical terms."""
        result = normalize(term)
        assert normalize(result) == result
        validate_canonical(result)

    @given(st.integers(min_value=2, max_value=10 ** 40), psi_free.map(normalize))
    @property_settings
    def test_counts_stay_constant_size(self, n, term):
        """Test that α·n only grows by one node over α's leading run."""
        assume(term not in (ZERO, ONE) and not isinstance(term, Nat))
        result = multiply(term, n)
        validate_canonical(result)
        assert term_size(result) <= term_size(term) + 1


class TestOrder:
    """Tests for order properties on canonical terms."""

    @given(canonical, canonical)
    @property_settings
    def test_equal_iff_structural(self, a, b):
        """Test EQUAL exactly on structurally equal terms, and antisymmetry."""
        order = compare(a, b)
        assert (order == Ordering.EQUAL) == (a == b)
        assert compare(b, a) == order.reverse()

    @given(canonical, canonical, canonical)
    @property_settings
    def test_transitive(self, a, b, c):
        """Test that any three sorted terms form a consistent chain."""
        x, y, z = sort_terms([a, b, c])
        assert compare(x, y) != Ordering.GREATER
        assert compare(y, z) != Ordering.GREATER
        assert compare(x, z) != Ordering.GREATER

    @given(canonical, canonical)
    @property_settings
    def test_addition_is_monotone(self, a, b):
        """Test α ≤ α + β, β ≤ α + β and α < α + 1."""
        total = add(a, b)
        assert compare(total, a) != Ordering.LESS
        assert compare(total, b) != Ordering.LESS
        assert compare(a, add(a, ONE)) == Ordering.LESS

    @given(canonical, canonical)
    @property_settings
    def test_multiplication_is_monotone(self, a, b):
        """Test α ≤ α·β for β ≥ 1."""
        assume(b != ZERO)
        assert compare(multiply(a, b), a) != Ordering.LESS

    @given(st.integers(min_value=1, max_value=10 ** 30),
           st.integers(min_value=1, max_value=10 ** 30),
           st.integers(min_value=0, max_value=10 ** 30))
    @property_settings
    def test_counts_order_numerically(self, m, n, tail):
        """Test ω·m + k < ω·n whenever m < n, however large k is."""
        left = add(multiply(OMEGA, m), tail)
        right = multiply(OMEGA, n)
        if m < n:
            assert compare(left, right) == Ordering.LESS
        elif m > n:
            assert compare(left, right) == Ordering.GREATER


class TestProfile:
    """Tests for normalization profiling."""

    def test_linear_family(self):
        """Test that ω + ω + ... + ω normalizes in linear steps."""
        family = [Sum((OMEGA,) * k) for k in range(2, 40, 3)]
        profile = profile_normalization(family)
        assert profile.n_terms == len(family)
        assert 0.5 < profile.growth_exponent() < 2.0
        assert profile.worst_ratio(degree=1) <= 3.0

    def test_random_terms_polynomial(self, raw_terms):
        """Test a cubic step bound on random terms."""
        profile = profile_normalization(raw_terms)
        assert np.all(profile.steps <= 200 * profile.sizes.astype(float) ** 3)
        assert math.isfinite(profile.growth_exponent())
        summary = profile.summary()
        assert summary["n_terms"] == len(raw_terms)
        assert summary["max_steps"] >= summary["mean_steps"]

    def test_degenerate_profile(self):
        """Test the growth exponent with a single size."""
        profile = NormalizationProfile(sizes=np.array([3, 3]), steps=np.array([5, 6]))
        assert profile.growth_exponent() == 0.0
