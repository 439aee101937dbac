"""
Representable range of the hierarchy nodes.

The collapsing layer borrows the shape of Buchholz's ψ_ν with ν ∈ {0, 1, 2}:
Ω₁ = ψ₁(0) and Ω₂ = ψ₂(0) are the uncountable stages, and the
Bachmann-Howard ordinal is ψ₀(Ω₂). Below those landmarks ψ terms are
positional, strongly critical notations ordered by (ν, α), not Buchholz's
values, so ψ₀(0) names an ordinal above every ψ-free φ term rather than 1.

The checks below run whenever a Veblen or Buchholz node is constructed:

- the ψ function index must normalize to 0, 1 or 2
- ψ₂ only appears as ψ₂(0) = Ω₂
- ψ₀(α) needs α ≤ Ω₂, so ψ₀(Ω₂) is the ceiling
- a φ-index must be countable, i.e. below Ω₁
"""

from __future__ import annotations
import logging
from functools import lru_cache

from .errors import UnsupportedCollapse
from .terms import Term, Zero, Nat, Buchholz, Veblen

logger = logging.getLogger(__name__)

MAX_FUNCTION_INDEX = 2


@lru_cache(maxsize=None)
def omega_stage(nu: int) -> Buchholz:
    """Ω_ν = ψ_ν(0), for ν = 1, 2."""
    return Buchholz(nu, 0)


def _reject(message: str) -> None:
    logger.debug("rejected hierarchy node: %s", message)
    raise UnsupportedCollapse(message)


def check_buchholz(node: Buchholz) -> None:
    from .normalizer import normalize
    from .comparison import compare, Ordering

    nu = normalize(node.function_index)
    if isinstance(nu, Zero):
        level = 0
    elif isinstance(nu, Nat) and nu.n <= MAX_FUNCTION_INDEX:
        level = nu.n
    else:
        _reject(
            f"ψ function index must be 0..{MAX_FUNCTION_INDEX}, "
            f"got {nu!s}"
        )
        return

    if level == 1:
        return
    alpha = normalize(node.alpha)
    if level == 2 and not isinstance(alpha, Zero):
        _reject(f"ψ₂ is only defined at 0 (Ω₂), got ψ₂({alpha!s})")
    if level == 0 and compare(alpha, omega_stage(2)) == Ordering.GREATER:
        _reject(
            f"ψ₀({alpha!s}) lies beyond the Bachmann-Howard ordinal ψ₀(Ω₂)"
        )


def check_veblen(node: Veblen) -> None:
    from .normalizer import normalize
    from .comparison import compare, Ordering

    if isinstance(node.phi_index, (Zero, Nat)):
        return
    index: Term = normalize(node.phi_index)
    if compare(index, omega_stage(1)) != Ordering.LESS:
        _reject(f"φ-index {index!s} is not below Ω₁")
