"""Binomial, Poisson and hypergeometric distributions.

Validates against: ``scipy.stats.binom``, ``poisson``, ``hypergeom``.
"""

from __future__ import annotations

import math

from pyclinstats import _numeric
from pyclinstats.distributions._continuous import normal_quantile
from pyclinstats.special._gamma import log_gamma, regularized_lower_incomplete_gamma


def log_choose(n: float, k: float) -> float:
    """``ln C(n, k)``; ``-inf`` outside ``0 <= k <= n``."""
    if k < 0 or k > n:
        return -math.inf
    if k == 0 or k == n:
        return 0.0
    return log_gamma(n + 1.0) - log_gamma(k + 1.0) - log_gamma(n - k + 1.0)


# ---------------------------------------------------------------------------
# Binomial
# ---------------------------------------------------------------------------

def binomial_pmf(k: int, n: int, p: float) -> float:
    """``P(X = k)`` for ``X ~ Binomial(n, p)``."""
    if k < 0 or k > n:
        return 0.0
    # handles p in {0, 1} without log(0) * 0
    if p == 0.0:
        return 1.0 if k == 0 else 0.0
    if p == 1.0:
        return 1.0 if k == n else 0.0
    return math.exp(log_choose(n, k) + k * math.log(p) + (n - k) * math.log1p(-p))


def binomial_cdf(k: float, n: int, p: float) -> float:
    """``P(X <= k)`` by direct summation of the pmf over ``0..floor(k)``."""
    if k < 0:
        return 0.0
    if k >= n:
        return 1.0
    total = sum(binomial_pmf(i, n, p) for i in range(int(math.floor(k)) + 1))
    return min(1.0, total)


# ---------------------------------------------------------------------------
# Poisson
# ---------------------------------------------------------------------------

def poisson_pmf(k: int, lam: float) -> float:
    """``P(X = k)`` for ``X ~ Poisson(lam)``."""
    if k < 0:
        return 0.0
    if lam == 0.0:
        return 1.0 if k == 0 else 0.0
    return math.exp(k * math.log(lam) - lam - log_gamma(k + 1.0))


def poisson_cdf(k: float, lam: float) -> float:
    """``P(X <= k) = 1 - P(floor(k) + 1, lam)``."""
    if k < 0:
        return 0.0
    if lam == 0.0:
        return 1.0
    return 1.0 - regularized_lower_incomplete_gamma(math.floor(k) + 1.0, lam)


def poisson_quantile(p: float, lam: float) -> float:
    """Smallest ``k`` with ``poisson_cdf(k, lam) >= p``.

    Seeds with the normal approximation, then walks up or down to the
    bracket. Returns 0 for ``p <= 0`` and ``inf`` for ``p >= 1``.
    """
    if p <= 0.0:
        return 0.0
    if p >= 1.0:
        return math.inf
    k = max(0, math.floor(lam + normal_quantile(p) * math.sqrt(lam) - 0.5))
    while poisson_cdf(k, lam) < p:
        k += 1
    while k > 0 and poisson_cdf(k - 1, lam) >= p:
        k -= 1
    return float(k)


# ---------------------------------------------------------------------------
# Hypergeometric
# ---------------------------------------------------------------------------

def hypergeometric_pmf(k: int, N: int, K: int, n: int) -> float:
    """``P(X = k)`` for ``n`` draws from ``N`` items of which ``K`` are successes.

    Support is ``max(0, n + K - N) <= k <= min(n, K)``.
    """
    if k < max(0, n + K - N) or k > min(n, K):
        return 0.0
    return _numeric.exp(log_choose(K, k) + log_choose(N - K, n - k) - log_choose(N, n))
