"""
OmegaVeblen: Symbolic Ordinal Arithmetic up to the Bachmann-Howard Ordinal

Exact ordinals for proof-theoretic tooling:
1. Cantor normal form: ω, ω + 1, ω·2, ω², ω^ω, ...
2. Veblen hierarchy: ε_α = φ₁(α), ζ_α = φ₂(α), η_α = φ₃(α), φ_β(α)
3. Buchholz collapsing functions ψ₀, ψ₁, ψ₂ up to ψ₀(Ω₂)

This package provides:
- Term variants (Zero, Nat, Omega, Sum, Power, Multiple, Epsilon, Zeta, Eta,
  Veblen, Buchholz): immutable raw ordinal expressions
- normalize: unique canonical form for any term
- compare: total order on canonical terms
- add / multiply / power: ordinal arithmetic
- epsilon / zeta / eta / veblen / buchholz: hierarchy builders
- render / parse: ordinal notation
- TermGenerator and profiling helpers for property testing

Example usage:
    from omega_veblen import OMEGA, add, power, epsilon, compare, render

    omega_squared = power(OMEGA, 2)
    print(render(add(OMEGA, omega_squared)))   # ω^2
    print(render(add(omega_squared, OMEGA)))   # ω^2 + ω
    print(compare(epsilon(0), power(OMEGA, OMEGA)).name)  # GREATER
"""

__version__ = "0.1.0"
__author__ = "OmegaVeblen Team"

from .errors import (
    ErrorKind,
    OrdinalError,
    MalformedIndex,
    UnsupportedCollapse,
    NotationError,
    InvariantViolation,
    Checked,
    checked,
)

from .terms import (
    Term,
    Zero,
    Nat,
    Omega,
    Sum,
    Power,
    Multiple,
    Epsilon,
    Zeta,
    Eta,
    Veblen,
    Buchholz,
    ZERO,
    ONE,
    OMEGA,
    as_term,
    summands,
    cantor_normal_form,
    term_size,
)

from .comparison import (
    Ordering,
    compare,
    sort_terms,
)

from .normalizer import (
    Normalizer,
    NormalizerConfig,
    normalize,
    validate_canonical,
    configure,
    get_normalizer,
)

from .arithmetic import (
    OrdinalArithmetic,
    add,
    multiply,
    power,
    successor,
)

from .hierarchy import (
    HierarchyKind,
    kind_of,
    epsilon,
    zeta,
    eta,
    veblen,
    buchholz,
    omega_tower,
    OMEGA_1,
    OMEGA_2,
    BACHMANN_HOWARD,
    ORDINAL_CONSTANTS,
)

from .notation import render, parse

from .sampling import TermGenerator

from .analysis import (
    NormalizationProfile,
    profile_normalization,
    rank_agreement,
)

__all__ = [
    # Errors
    "ErrorKind",
    "OrdinalError",
    "MalformedIndex",
    "UnsupportedCollapse",
    "NotationError",
    "InvariantViolation",
    "Checked",
    "checked",
    # Terms
    "Term",
    "Zero",
    "Nat",
    "Omega",
    "Sum",
    "Power",
    "Multiple",
    "Epsilon",
    "Zeta",
    "Eta",
    "Veblen",
    "Buchholz",
    "ZERO",
    "ONE",
    "OMEGA",
    "as_term",
    "summands",
    "cantor_normal_form",
    "term_size",
    # Comparison
    "Ordering",
    "compare",
    "sort_terms",
    # Normalization
    "Normalizer",
    "NormalizerConfig",
    "normalize",
    "validate_canonical",
    "configure",
    "get_normalizer",
    # Arithmetic
    "OrdinalArithmetic",
    "add",
    "multiply",
    "power",
    "successor",
    # Hierarchy
    "HierarchyKind",
    "kind_of",
    "epsilon",
    "zeta",
    "eta",
    "veblen",
    "buchholz",
    "omega_tower",
    "OMEGA_1",
    "OMEGA_2",
    "BACHMANN_HOWARD",
    "ORDINAL_CONSTANTS",
    # Notation
    "render",
    "parse",
    # Testing and profiling
    "TermGenerator",
    "NormalizationProfile",
    "profile_normalization",
    "rank_agreement",
]
