"""2x2 table summaries and the fragility index.

References
----------
Walsh et al. (2014). The statistical significance of randomized
controlled trial results is frequently fragile: a case for a Fragility
Index. *J Clin Epidemiol*, 67, 622-628.

Validates against: R ``epiR::epi.2by2()``, ``fragility::frag.study()``
"""

from __future__ import annotations

import logging
import math

from pyclinstats import _numeric
from pyclinstats.distributions._continuous import z_critical
from pyclinstats.epi._common import FragilityResult, NNTEstimate, TwoByTwoResult
from pyclinstats.inference._common import CountTable, Estimate, Interval
from pyclinstats.inference._intervals import newcombe_ci
from pyclinstats.inference._tests import chi_squared_test_2x2, fisher_exact
from pyclinstats.special._common import FRAGILITY_MAX_ITER

logger = logging.getLogger(__name__)


def _inv(x: float) -> float:
    return _numeric.ratio(1.0, x)


def _log_ci(value: float, se: float, z: float) -> Interval:
    ln = _numeric.log(value)
    return Interval(_numeric.exp(ln - z * se), _numeric.exp(ln + z * se), se)


def _nnt(rd: float, rd_ci: Interval) -> NNTEstimate:
    if rd == 0:
        return NNTEstimate(math.inf, Interval(math.inf, math.inf), is_harm=False)
    nnt = 1.0 / abs(rd)
    ci = Interval(_inv(abs(rd_ci.upper)), _inv(abs(rd_ci.lower)))
    return NNTEstimate(nnt if rd > 0 else -nnt, ci, is_harm=rd < 0)


def two_by_two(a: int, b: int, c: int, d: int, z: float | None = None) -> TwoByTwoResult:
    """Risk ratio, odds ratio, risk difference and tests for a 2x2 table.

    ::

                    event   no event
        exposed       a        b
        unexposed     c        d

    Parameters
    ----------
    a, b, c, d : int
        Cell counts.
    z : float or None
        Critical value for the CIs (default: two-sided 95%).

    Returns
    -------
    TwoByTwoResult

    Notes
    -----
    Zero cells are not corrected: a zero in a denominator yields ``inf``
    or ``nan`` estimates rather than an error. The population attributable
    fraction uses the exposure prevalence ``(a + b) / n``.

    Examples
    --------
    >>> res = two_by_two(30, 70, 15, 85)
    >>> round(res.risk_ratio.value, 4), round(res.odds_ratio.value, 4)
    (2.0, 2.4286)
    """
    if min(a, b, c, d) < 0:
        raise ValueError(f"cell counts must be non-negative, got {(a, b, c, d)}")
    z = z_critical() if z is None else z
    n = a + b + c + d
    n1, n2 = a + b, c + d
    p1 = _numeric.ratio(a, n1)
    p2 = _numeric.ratio(c, n2)

    rr = _numeric.ratio(p1, p2)
    se_ln_rr = _numeric.sqrt(_inv(a) - _inv(n1) + _inv(c) - _inv(n2))
    odds = _numeric.ratio(a * d, b * c)
    se_ln_or = _numeric.sqrt(_inv(a) + _inv(b) + _inv(c) + _inv(d))

    rd = p1 - p2
    se_rd = _numeric.sqrt(_numeric.ratio(p1 * (1 - p1), n1) + _numeric.ratio(p2 * (1 - p2), n2))
    rd_ci = Interval(rd - z * se_rd, rd + z * se_rd, se_rd)

    p_exposed = _numeric.ratio(n1, n)
    excess = p_exposed * (rr - 1.0)

    return TwoByTwoResult(
        p1=p1,
        p2=p2,
        risk_ratio=Estimate(rr, _log_ci(rr, se_ln_rr, z), se_ln_rr),
        odds_ratio=Estimate(odds, _log_ci(odds, se_ln_or, z), se_ln_or),
        risk_difference=Estimate(rd, rd_ci, se_rd),
        rd_newcombe=newcombe_ci(p1, n1, p2, n2, z),
        nnt=_nnt(rd, rd_ci),
        chi2=chi_squared_test_2x2(a, b, c, d),
        chi2_yates=chi_squared_test_2x2(a, b, c, d, yates=True),
        fisher=fisher_exact(a, b, c, d),
        af_exposed=_numeric.ratio(rr - 1.0, rr),
        paf=_numeric.ratio(excess, 1.0 + excess),
        table=CountTable(a, b, c, d),
    )


def fragility_index(a: int, b: int, c: int, d: int, alpha: float = 0.05) -> FragilityResult:
    """Minimum number of outcome changes that make a significant result non-significant.

    In the arm with the higher event proportion (the second arm on ties),
    one event at a time is moved to that arm's non-event cell, and Fisher's
    exact test is recomputed, until ``p >= alpha``, the event cell is
    exhausted, or the iteration cap is hit.

    Returns
    -------
    FragilityResult
        ``index`` is 0 and ``flipped`` is ``False`` when the observed result
        is already non-significant. ``flipped`` is ``True`` only when the
        moves brought ``p`` up to ``alpha``.
    """
    if min(a, b, c, d) < 0:
        raise ValueError(f"cell counts must be non-negative, got {(a, b, c, d)}")
    original_p = fisher_exact(a, b, c, d).p_value
    if original_p >= alpha:
        return FragilityResult(
            index=0, original_p=original_p, modified_p=original_p,
            modified_table=CountTable(a, b, c, d), flipped=False,
        )

    first_arm = _numeric.ratio(a, a + b) > _numeric.ratio(c, c + d)
    p = original_p
    index = 0
    while p < alpha and index < FRAGILITY_MAX_ITER:
        if first_arm:
            if a == 0:
                break
            a, b = a - 1, b + 1
        else:
            if c == 0:
                break
            c, d = c - 1, d + 1
        index += 1
        p = fisher_exact(a, b, c, d).p_value

    if p < alpha:
        logger.debug("fragility search stopped after %d moves with p = %.4g", index, p)
    return FragilityResult(
        index=index,
        original_p=original_p,
        modified_p=p,
        modified_table=CountTable(a, b, c, d),
        flipped=p >= alpha,
    )
