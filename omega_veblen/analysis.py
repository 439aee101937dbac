"""
Normalization profiling and ordering agreement.

1. profile_normalization: rewrite steps against structural size, with a
   log-log fit of the growth exponent (steps ≈ c·size^k)
2. rank_agreement: Kendall's tau between the comparator's ranking of a set
   of terms and a reference ranking
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Sequence

import numpy as np
from scipy import stats as scipy_stats

from .terms import Term, term_size
from .comparison import Ordering, compare
from .normalizer import Normalizer, NormalizerConfig, normalize

logger = logging.getLogger(__name__)


@dataclass
class NormalizationProfile:
    """Per-term sizes and rewrite step counts from one profiling run."""
    sizes: np.ndarray
    steps: np.ndarray

    @property
    def n_terms(self) -> int:
        return len(self.sizes)

    def growth_exponent(self) -> float:
        """Slope k of log(steps) against log(size)."""
        mask = self.sizes > 1
        if np.unique(self.sizes[mask]).size < 2:
            return 0.0
        slope, _ = np.polyfit(np.log(self.sizes[mask]), np.log(self.steps[mask]), 1)
        return float(slope)

    def worst_ratio(self, degree: int = 2) -> float:
        """max(steps / size^degree) over the run."""
        return float((self.steps / self.sizes.astype(float) ** degree).max())

    def summary(self) -> Dict[str, float]:
        return {
            "n_terms": self.n_terms,
            "mean_size": float(self.sizes.mean()),
            "mean_steps": float(self.steps.mean()),
            "max_steps": int(self.steps.max()),
            "growth_exponent": self.growth_exponent(),
        }


def profile_normalization(
    terms: Iterable[Term],
    config: Optional[NormalizerConfig] = None,
) -> NormalizationProfile:
    """
    Normalize every term with a fresh normalizer and record its step count.

    The default configuration disables the cache, so every count reflects a
    full rewrite of the term.
    """
    normalizer = Normalizer(config or NormalizerConfig(cache_size=0))
    sizes, steps = [], []
    for term in terms:
        _, count = normalizer.normalize_with_steps(term)
        sizes.append(term_size(term))
        steps.append(count)

    profile = NormalizationProfile(
        sizes=np.array(sizes, dtype=np.int64),
        steps=np.array(steps, dtype=np.int64),
    )
    if profile.n_terms:
        logger.info("normalization profile: %s", profile.summary())
    return profile


def rank_agreement(
    terms: Sequence[Term],
    reference_ranks: Sequence[int],
) -> Dict[str, float]:
    """
    Kendall's tau between the comparator's ranking and a reference ranking.

    Each term is ranked by how many of the other terms lie strictly below it,
    so equal ordinals share a rank.
    """
    canonical = [normalize(term) for term in terms]
    ranks = np.array([
        sum(1 for other in canonical if compare(other, term) == Ordering.LESS)
        for term in canonical
    ])
    reference = np.asarray(reference_ranks)

    if len(np.unique(ranks)) > 1 and len(np.unique(reference)) > 1:
        tau, p_value = scipy_stats.kendalltau(ranks, reference)
    else:
        tau, p_value = 0.0, 1.0

    return {
        "kendall_tau": float(tau),
        "kendall_p_value": float(p_value),
        "exact_matches": int((ranks == reference).sum()),
        "n_terms": len(canonical),
    }
