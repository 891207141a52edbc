"""Sample size and power for time-to-event comparisons (log-rank test).

Required events by the Schoenfeld (1981) or Freedman (1982) formula,
reverse-direction power for a given number of events, and the minimum
detectable hazard ratio.

Validates against: R gsDesign::nEvents(), TrialSize
"""

from __future__ import annotations

import math

from pyclinstats.distributions._continuous import normal_cdf
from pyclinstats.power._common import (
    EventsResult,
    SurvivalMDE,
    _check_design_args,
    _z_alpha,
    _z_beta,
)


def _check_hr(hr: float) -> None:
    if hr <= 0.0:
        raise ValueError(f"hr must be > 0, got {hr}")
    if hr == 1.0:
        raise ValueError("hr must be != 1.0 (no effect)")


def sample_size_schoenfeld(
    hr: float,
    alpha: float = 0.05,
    power: float = 0.80,
    ratio: float = 1.0,
    p_event: float | None = None,
) -> EventsResult:
    """Schoenfeld formula for the number of events.

    ``d = (z_a + z_b)^2 (1 + r)^2 / (r ln(HR)^2)``

    Parameters
    ----------
    hr : float
        Hazard ratio under the alternative (> 0, != 1).
    alpha, power, ratio : float
        Design parameters (defaults 0.05, 0.80, 1).
    p_event : float or None
        Probability a subject has an event during follow-up. If given,
        ``total_n = ceil(events / p_event)``.

    Returns
    -------
    EventsResult

    Examples
    --------
    >>> sample_size_schoenfeld(hr=0.7).events
    247
    """
    _check_design_args(alpha=alpha, power=power, ratio=ratio)
    _check_hr(hr)
    if p_event is not None and not (0.0 < p_event <= 1.0):
        raise ValueError(f"p_event must be in (0, 1], got {p_event}")

    za = _z_alpha(alpha)
    zb = _z_beta(power)
    ln_hr = math.log(hr)

    events = math.ceil((za + zb) ** 2 / (ln_hr * ln_hr * ratio / (1.0 + ratio) ** 2))
    total_n = math.ceil(events / p_event) if p_event else None

    return EventsResult(
        events=events,
        total_n=total_n,
        hr=hr,
        ln_hr=ln_hr,
        alpha=alpha,
        power=power,
        method="Log-rank events (Schoenfeld)",
    )


def sample_size_freedman(
    hr: float,
    alpha: float = 0.05,
    power: float = 0.80,
    ratio: float = 1.0,
) -> EventsResult:
    """Freedman formula for the number of events.

    ``d = (z_a + z_b)^2 (1 + r HR)^2 / (r (1 - HR)^2)``

    Freedman (1982). Tables of the number of patients required in clinical
    trials using the logrank test. *Statistics in Medicine*, 1, 121-129.

    Examples
    --------
    >>> sample_size_freedman(hr=0.7).events
    253
    """
    _check_design_args(alpha=alpha, power=power, ratio=ratio)
    _check_hr(hr)

    za = _z_alpha(alpha)
    zb = _z_beta(power)
    events = math.ceil((za + zb) ** 2 * (1.0 + ratio * hr) ** 2 / (ratio * (1.0 - hr) ** 2))

    return EventsResult(
        events=events,
        total_n=None,
        hr=hr,
        ln_hr=math.log(hr),
        alpha=alpha,
        power=power,
        method="Log-rank events (Freedman)",
    )


def power_survival(
    hr: float,
    events: float,
    alpha: float = 0.05,
    ratio: float = 1.0,
) -> float:
    """Power of the log-rank test given the number of events.

    ``z_b = |ln HR| sqrt(d p (1 - p)) - z_a`` with ``p = r/(1 + r)``.
    """
    za = _z_alpha(alpha)
    p = ratio / (1.0 + ratio)
    zb = abs(math.log(hr)) * math.sqrt(events * p * (1.0 - p)) - za
    return normal_cdf(zb)


def mde_survival(
    events: float,
    alpha: float = 0.05,
    power: float = 0.80,
    ratio: float = 1.0,
) -> SurvivalMDE:
    """Minimum detectable hazard ratio for a given number of events."""
    _check_design_args(alpha=alpha, power=power, ratio=ratio)
    p = ratio / (1.0 + ratio)
    ln_hr = (_z_alpha(alpha) + _z_beta(power)) / math.sqrt(events * p * (1.0 - p))
    return SurvivalMDE(hr=math.exp(-ln_hr), hr_upper=math.exp(ln_hr), ln_hr=ln_hr)
