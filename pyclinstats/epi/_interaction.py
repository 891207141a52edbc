"""Interaction between two exposures on the additive and multiplicative scales.

References
----------
Rothman, Greenland & Lash (2008). *Modern Epidemiology*, 3rd ed., chapter 5.
"""

from __future__ import annotations

from pyclinstats import _numeric
from pyclinstats.epi._common import InteractionResult


def additive_interaction(rr11: float, rr10: float, rr01: float) -> InteractionResult:
    """RERI, attributable proportion and synergy index from three relative risks.

    ``rr11`` is the relative risk for joint exposure, ``rr10`` and ``rr01``
    for each exposure alone, all against the doubly unexposed.

    ``RERI = RR11 - RR10 - RR01 + 1``, ``AP = RERI / RR11``,
    ``S = (RR11 - 1) / ((RR10 - 1) + (RR01 - 1))``. The multiplicative
    interaction is ``RR11 / (RR10 * RR01)``.
    """
    reri = rr11 - rr10 - rr01 + 1.0
    expected = rr10 * rr01
    return InteractionResult(
        reri=reri,
        ap=_numeric.ratio(reri, rr11),
        s=_numeric.ratio(rr11 - 1.0, (rr10 - 1.0) + (rr01 - 1.0)),
        expected_multiplicative=expected,
        multiplicative_ratio=_numeric.ratio(rr11, expected),
    )
