"""
Normalizer: rewriting raw ordinal terms into canonical form.

Children are normalized before their parent (innermost-out), then one of the
canonical operations below combines them:

1. Sums fold left to right through ``add``: zeros vanish, nested sums
   flatten, the trailing finite parts merge, and every left summand strictly
   below the leading summand on the right is absorbed (1 + ω = ω,
   ω² + ω³ = ω³). Equal principals meeting at the seam merge their counts
   (ω + ω = ω·2), and ω + 1 survives.
2. Multiples go through ``multiply`` with a finite right operand.
3. Powers go through ``power``: α⁰ = 1, α¹ = α, 0^α = 0, finite powers are
   computed exactly, and every infinite power ends up as ω^x.
4. Epsilon/Zeta/Eta/Veblen nodes go through ``veblen``: φ₀(α) = ω^α,
   φ₁/φ₂/φ₃ become ε/ζ/η, and φ_β(α) = α whenever α is already a fixed
   point of φ_β (ε_{ζ₀} = ζ₀, ω^{ε₀} = ε₀).
5. Buchholz nodes keep their shape with normalized arguments.

Each canonical operation strictly shrinks the work left (depth of the raw
tree, or the length of the summand lists being merged), so normalization
always terminates, and ``normalize(normalize(t)) == normalize(t)``.
"""

from __future__ import annotations
import logging
import threading
from dataclasses import dataclass
from functools import reduce
from itertools import takewhile
from typing import Dict, Optional, Tuple

from .errors import InvariantViolation, MalformedIndex
from .terms import (
    Term, Zero, Nat, Omega, Sum, Power, Multiple, Epsilon, Zeta, Eta, Veblen,
    Buchholz, ZERO, ONE, OMEGA,
    is_critical, is_principal, summands, from_summands, exponent_of,
    leading_exponent, split_finite, run_of, make_run,
)
from .comparison import Ordering, compare, is_fixed_point, veblen_coordinates

logger = logging.getLogger(__name__)

_HEADS = {1: Epsilon, 2: Zeta, 3: Eta}
_LEVEL_OF = {Epsilon: 1, Zeta: 2, Eta: 3}


@dataclass
class NormalizerConfig:
    """Configuration for the normalizer."""
    cache_size: int = 8192          # memoized results; 0 disables the cache
    check_invariants: bool = False  # validate every result (debugging aid)


class Normalizer:
    """
    Rewrites raw terms into canonical form.

    The public ``add``, ``multiply``, ``power``, ``omega_power`` and ``veblen``
    methods are the canonical operations: they expect canonical operands and
    return canonical results without re-normalizing.

    Results are memoized by structural hash. Reads never lock; inserts take a
    lock and keep the first value stored, so two threads racing on the same
    term just compute it twice.
    """

    def __init__(self, config: Optional[NormalizerConfig] = None):
        self.config = config or NormalizerConfig()
        self._cache: Dict[Term, Term] = {}
        self._lock = threading.Lock()
        self._local = threading.local()

    # ------------------------------------------------------------------
    # Cache and step accounting
    # ------------------------------------------------------------------

    def _remember(self, term: Term, result: Term) -> None:
        if self.config.cache_size <= 0:
            return
        with self._lock:
            if len(self._cache) + 2 > self.config.cache_size:
                logger.debug("normalizer cache full (%d entries), resetting",
                             len(self._cache))
                self._cache.clear()
            self._cache.setdefault(term, result)
            self._cache.setdefault(result, result)

    def clear_cache(self) -> None:
        with self._lock:
            self._cache.clear()

    @property
    def cache_entries(self) -> int:
        return len(self._cache)

    def _tick(self) -> None:
        self._local.steps = getattr(self._local, "steps", 0) + 1

    def normalize_with_steps(self, term: Term) -> Tuple[Term, int]:
        """Normalize and report the number of rewrite steps this thread took."""
        self._local.steps = 0
        result = self.normalize(term)
        return result, self._local.steps

    # ------------------------------------------------------------------
    # Normalization
    # ------------------------------------------------------------------

    def normalize(self, term: Term) -> Term:
        """Reduce any well-formed term to its canonical form."""
        if not isinstance(term, Term):
            raise MalformedIndex(f"cannot normalize {term!r}: not an ordinal term")
        cached = self._cache.get(term)
        if cached is not None:
            return cached

        result = self._rewrite(term)
        if self.config.check_invariants:
            validate_canonical(result)
        self._remember(term, result)
        return result

    def _rewrite(self, term: Term) -> Term:
        self._tick()
        if isinstance(term, (Zero, Omega)):
            return term
        if isinstance(term, Nat):
            return ZERO if term.n == 0 else term
        if isinstance(term, Sum):
            return reduce(self.add, (self.normalize(t) for t in term.terms), ZERO)
        if isinstance(term, Multiple):
            return self.multiply(self.normalize(term.term),
                                 self.normalize(Nat(term.count)))
        if isinstance(term, Power):
            return self.power(self.normalize(term.base),
                              self.normalize(term.exponent))
        if isinstance(term, Veblen):
            return self.veblen(self.normalize(term.phi_index),
                               self.normalize(term.alpha))
        if isinstance(term, Buchholz):
            return Buchholz(self.normalize(term.function_index),
                            self.normalize(term.alpha))
        level = _LEVEL_OF.get(type(term))
        if level is not None:
            return self.veblen(Nat(level), self.normalize(term.index))
        raise MalformedIndex(f"unknown term variant {type(term).__name__}")

    # ------------------------------------------------------------------
    # Canonical operations
    # ------------------------------------------------------------------

    def add(self, a: Term, b: Term) -> Term:
        """α + β. Left summands below β's leading summand are absorbed."""
        self._tick()
        if isinstance(a, Zero):
            return b
        if isinstance(b, Zero):
            return a
        if isinstance(a, Nat) and isinstance(b, Nat):
            return Nat(a.n + b.n)

        left, right = list(summands(a)), summands(b)
        head = right[0]
        if isinstance(head, Nat):
            if isinstance(left[-1], Nat):
                left[-1] = Nat(left[-1].n + head.n)
            else:
                left.append(head)
            return from_summands(left)

        principal, count = run_of(head)
        kept = list(takewhile(
            lambda part: not isinstance(part, Nat)
            and compare(run_of(part)[0], principal) != Ordering.LESS,
            left,
        ))
        if kept and run_of(kept[-1])[0] == principal:
            # ω^x·c + ω^x·d = ω^x·(c + d)
            head = make_run(principal, run_of(kept.pop())[1] + count)
        return from_summands(kept + [head] + list(right[1:]))

    def multiply(self, a: Term, b: Term) -> Term:
        """α · β, distributing α over the summands of β."""
        self._tick()
        if isinstance(a, Zero) or isinstance(b, Zero):
            return ZERO
        if isinstance(a, Nat) and isinstance(b, Nat):
            return Nat(a.n * b.n)
        result = ZERO
        for part in summands(b):
            result = self.add(result, self._multiply_summand(a, part))
        return result

    def _multiply_summand(self, a: Term, part: Term) -> Term:
        if isinstance(part, Nat):
            if isinstance(a, Nat):
                return Nat(a.n * part.n)
            # (ω^x·c + r)·n = ω^x·(c·n) + r
            parts = summands(a)
            principal, count = run_of(parts[0])
            return from_summands([make_run(principal, count * part.n)] + list(parts[1:]))
        if isinstance(part, Multiple):
            # α·(ω^y·k) = (α·ω^y)·k
            return make_run(self._multiply_summand(a, part.term), part.count)
        if isinstance(a, Nat):
            return part
        # α · ω^y = ω^(deg α + y) for y > 0
        return self.omega_power(self.add(leading_exponent(a), exponent_of(part)))

    def power(self, base: Term, exponent: Term) -> Term:
        """α^β."""
        self._tick()
        if isinstance(exponent, Zero):
            return ONE
        if isinstance(base, Zero):
            return ZERO
        if base == ONE or exponent == ONE:
            return base
        if isinstance(base, Nat):
            if isinstance(exponent, Nat):
                return Nat(base.n ** exponent.n)
            return self._finite_base_power(base.n, exponent)
        if is_principal(base):
            # (ω^x)^β = ω^(x·β)
            return self.omega_power(self.multiply(exponent_of(base), exponent))

        # α^(β + m) = ω^(deg α · β) · α^m for limit β
        infinite, finite = split_finite(exponent)
        result = ONE
        if not isinstance(infinite, Zero):
            result = self.omega_power(
                self.multiply(leading_exponent(base), infinite)
            )
        if finite:
            result = self.multiply(result, self._power_by_squaring(base, finite))
        return result

    def _finite_base_power(self, n: int, exponent: Term) -> Term:
        # n^(ω^(1+x)·c) = ω^(ω^x·c) for n ≥ 2
        infinite, finite = split_finite(exponent)
        tower = ZERO
        for part in summands(infinite):
            principal, count = run_of(part)
            x = exponent_of(principal)
            if isinstance(x, Nat):
                x = ZERO if x.n == 1 else Nat(x.n - 1)
            tower = self.add(tower, self.multiply(self.omega_power(x), Nat(count)))
        result = self.omega_power(tower)
        if finite:
            result = self.multiply(result, Nat(n ** finite))
        return result

    def _power_by_squaring(self, base: Term, m: int) -> Term:
        result, square = ONE, base
        while m:
            if m & 1:
                result = self.multiply(result, square)
            m >>= 1
            if m:
                square = self.multiply(square, square)
        return result

    def omega_power(self, x: Term) -> Term:
        """ω^x."""
        if isinstance(x, Zero):
            return ONE
        if x == ONE:
            return OMEGA
        if is_critical(x):
            return x
        return Power(OMEGA, x)

    def veblen(self, level: Term, argument: Term) -> Term:
        """φ_level(argument)."""
        self._tick()
        if isinstance(level, Zero):
            return self.omega_power(argument)
        if is_fixed_point(level, argument):
            return argument
        if isinstance(level, Buchholz) and isinstance(argument, Zero):
            return level
        if isinstance(level, Nat) and level.n in _HEADS:
            return _HEADS[level.n](argument)
        return Veblen(level, argument)


def validate_canonical(term: Term) -> None:
    """Check every canonical-form invariant, raising InvariantViolation."""
    def fail(reason: str):
        raise InvariantViolation(f"{term!r} is not canonical: {reason}")

    if isinstance(term, (Zero, Omega)):
        return
    if isinstance(term, Nat):
        if term.n < 1:
            fail("Nat(0) instead of Zero")
        return
    if isinstance(term, Sum):
        parts = term.terms
        if len(parts) < 2:
            fail("sum with fewer than two summands")
        for i, part in enumerate(parts):
            if isinstance(part, (Sum, Zero)):
                fail("nested sum or zero summand")
            if isinstance(part, Nat) and i != len(parts) - 1:
                fail("finite summand before the end")
            validate_canonical(part)
        for left, right in zip(parts, parts[1:]):
            if isinstance(right, Nat):
                continue
            order = compare(run_of(left)[0], run_of(right)[0])
            if order == Ordering.LESS:
                fail("summands out of order")
            if order == Ordering.EQUAL:
                fail("equal summands not merged into a Multiple")
        return
    if isinstance(term, Multiple):
        if term.count < 2:
            fail("Multiple with a count below 2")
        if not is_principal(term.term):
            fail("Multiple of a non-principal term")
        validate_canonical(term.term)
        return
    if isinstance(term, Power):
        if term.base != OMEGA:
            fail("power base is not ω")
        if isinstance(term.exponent, Zero) or term.exponent == ONE:
            fail("trivial exponent")
        if is_critical(term.exponent):
            fail("ω raised to an epsilon number")
        validate_canonical(term.exponent)
        return
    if isinstance(term, Buchholz):
        if not isinstance(term.function_index, (Zero, Nat)):
            fail("ψ function index is not finite")
        validate_canonical(term.function_index)
        validate_canonical(term.alpha)
        return
    if not is_critical(term):
        fail(f"unknown term variant {type(term).__name__}")

    level, argument = veblen_coordinates(term)
    if isinstance(term, Veblen) and (
        isinstance(level, Zero) or (isinstance(level, Nat) and level.n in _HEADS)
    ):
        fail("φ-index has a dedicated form")
    validate_canonical(level)
    validate_canonical(argument)
    if is_fixed_point(level, argument):
        fail("argument is already a fixed point")
    if isinstance(level, Buchholz) and isinstance(argument, Zero):
        fail("φ_ψ(0) is ψ itself")


_default = Normalizer()


def get_normalizer() -> Normalizer:
    return _default


def configure(config: NormalizerConfig) -> Normalizer:
    """Replace the process-wide normalizer used by the module functions."""
    global _default
    _default = Normalizer(config)
    logger.debug("normalizer reconfigured: %s", config)
    return _default


def normalize(term: Term) -> Term:
    """Reduce any well-formed term to its canonical form."""
    return _default.normalize(term)
