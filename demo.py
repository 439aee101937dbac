#!/usr/bin/env python3
"""
OmegaVeblen Demo

Walks through the layers of the notation system:
1. Cantor normal form and non-commutative arithmetic
2. The Veblen hierarchy (ε, ζ, η, φ) and its fixed points
3. The collapsing layer up to the Bachmann-Howard ordinal
4. Parsing and rendering notation
5. Construction errors as exceptions and as values
6. Normalization cost on random terms
"""

import logging

from omega_veblen import (
    OMEGA, ZERO, Sum, Power, Buchholz,
    add, multiply, power, compare, normalize, sort_terms,
    epsilon, zeta, eta, veblen, buchholz, kind_of, omega_tower,
    OMEGA_1, OMEGA_2, BACHMANN_HOWARD, ORDINAL_CONSTANTS,
    render, parse, checked, UnsupportedCollapse, NotationError,
    TermGenerator, profile_normalization, term_size,
)

logging.basicConfig(level=logging.INFO, format="  [%(name)s] %(message)s")


def section(title: str) -> None:
    print("\n" + "═" * 80)
    print(f"  {title}")
    print("═" * 80)


# ═══════════════════════════════════════════════════════════════════════════════
# SECTION 1: CANTOR NORMAL FORM
# ═══════════════════════════════════════════════════════════════════════════════

section("SECTION 1: CANTOR NORMAL FORM")

print("""
Every ordinal below ε₀ has a unique Cantor normal form
  ω^α₁ + ω^α₂ + ... + ω^α_k + n      with α₁ ≥ α₂ ≥ ... ≥ α_k
Smaller summands on the left are absorbed by larger ones on the right.
""")

omega_squared = power(OMEGA, 2)
examples = [
    ("ω^2", omega_squared),
    ("ω + ω^2", add(OMEGA, omega_squared)),
    ("ω^2 + ω", add(omega_squared, OMEGA)),
    ("1 + ω", add(1, OMEGA)),
    ("ω + 1", add(OMEGA, 1)),
    ("ω · 2", multiply(OMEGA, 2)),
    ("2 · ω", multiply(2, OMEGA)),
    ("(ω + 1)^2", power(add(OMEGA, 1), 2)),
    ("2^ω", power(2, OMEGA)),
    ("ω^ω^ω", omega_tower(3)),
]

print("  Expression            Normal form")
print("  " + "-" * 50)
for name, value in examples:
    print(f"  {name:20}  {render(value)}")

# ═══════════════════════════════════════════════════════════════════════════════
# SECTION 2: VEBLEN HIERARCHY
# ═══════════════════════════════════════════════════════════════════════════════

section("SECTION 2: VEBLEN HIERARCHY")

print("""
φ₀(α) = ω^α, and each φ_β enumerates the common fixed points of the
lower levels: ε_α = φ₁(α), ζ_α = φ₂(α), η_α = φ₃(α).
""")

hierarchy = [
    ("ε_1", epsilon(1)),
    ("ζ_2", zeta(2)),
    ("η_3", eta(3)),
    ("φ_0(ω)", veblen(0, OMEGA)),
    ("φ_1(0)", veblen(1, 0)),
    ("φ_4(0)", veblen(4, 0)),
    ("ε_{ζ_0}", epsilon(zeta(0))),
    ("ω^{ε_0}", power(OMEGA, epsilon(0))),
]
for name, value in hierarchy:
    print(f"  {name:12} = {render(value):18} (kind: {kind_of(value).name})")

print("\n  Ordering across kinds:")
print("  " + "-" * 50)
comparisons = [
    (omega_tower(5), epsilon(0), "ω^ω^ω^ω^ω < ε_0"),
    (epsilon(5), zeta(0), "ε_5 < ζ_0"),
    (zeta(0), epsilon(add(zeta(0), 1)), "ζ_0 < ε_{ζ_0 + 1}"),
    (eta(epsilon(0)), veblen(4, 0), "η_{ε_0} < φ_4(0)"),
]
for lower, upper, desc in comparisons:
    result = "✓" if compare(lower, upper) < 0 else "✗"
    print(f"  {result} {desc}")

# ═══════════════════════════════════════════════════════════════════════════════
# SECTION 3: COLLAPSING FUNCTIONS
# ═══════════════════════════════════════════════════════════════════════════════

section("SECTION 3: COLLAPSING FUNCTIONS (Buchholz ψ)")

print("""
ψ₁(0) = Ω₁ and ψ₂(0) = Ω₂ are the uncountable stages; ψ₀ collapses them
back into countable ordinals. The notation reaches up to ψ₀(Ω₂), the
Bachmann-Howard ordinal.
""")

collapse = [
    ("ψ_0(0)", buchholz(0, 0)),
    ("ψ_1(ω)", buchholz(1, OMEGA)),
    ("Ω_1", OMEGA_1),
    ("Ω_2", OMEGA_2),
    ("BHO", BACHMANN_HOWARD),
]
for name, value in collapse:
    print(f"  {name:8} = {render(value)}")

print("\n  Reference constants in increasing order:")
print("  " + "-" * 50)
for value in sort_terms(ORDINAL_CONSTANTS.values()):
    name = next(k for k, v in ORDINAL_CONSTANTS.items() if v == value)
    print(f"  {name:18} {render(value)}")

# ═══════════════════════════════════════════════════════════════════════════════
# SECTION 4: NOTATION
# ═══════════════════════════════════════════════════════════════════════════════

section("SECTION 4: PARSING AND RENDERING")

for text in ["1 + w", "w^2*3 + w + 7", "epsilon_{w+1}", "phi(2, 0)",
             "ε_(ζ_0)", "psi_0(psi_2(0))"]:
    print(f"  {text:20} → {render(normalize(parse(text)))}")

# ═══════════════════════════════════════════════════════════════════════════════
# SECTION 5: ERRORS
# ═══════════════════════════════════════════════════════════════════════════════

section("SECTION 5: CONSTRUCTION ERRORS")

for label, build, args in [
    ("ψ_3(0)", Buchholz, (3, 0)),
    ("ψ_0(Ω_2 + 1)", buchholz, (0, add(OMEGA_2, 1))),
    ("φ_{Ω_1}(0)", veblen, (OMEGA_1, 0)),
    ("ω^(-1)", Power, (OMEGA, -1)),
    ("ε_ω", epsilon, (OMEGA,)),
]:
    result = checked(build, *args)
    status = render(result.term) if result.ok else f"{result.kind.name}: {result.error}"
    print(f"  {label:14} {status}")

try:
    parse("ω + $")
except NotationError as exc:
    print(f"  parse error: {exc}")

try:
    buchholz(2, 1)
except UnsupportedCollapse as exc:
    print(f"  range error: {exc}")

# ═══════════════════════════════════════════════════════════════════════════════
# SECTION 6: NORMALIZATION COST
# ═══════════════════════════════════════════════════════════════════════════════

section("SECTION 6: NORMALIZATION COST")

terms = TermGenerator(seed=0).batch(200)
profile = profile_normalization(terms)
for key, value in profile.summary().items():
    print(f"  {key:16} {value}")

print(f"\n  Sample: {render(terms[1])}")
print(f"       → {render(normalize(terms[1]))}")
print(f"  ω + ω + ω normalizes to {render(normalize(Sum((OMEGA, OMEGA, OMEGA))))}"
      f", 0^0 = {render(normalize(Power(ZERO, ZERO)))}")

huge = normalize(Power(2, Sum((OMEGA, 64))))
print(f"  2^(ω+64) = {render(huge)} in {term_size(huge)} nodes")
