"""Number needed to treat for other baseline risks and follow-up times."""

from __future__ import annotations

import math
from collections.abc import Iterable

from pyclinstats.epi._common import NNTTimepoint, PEERResult


def _signed_nnt(arr: float) -> float:
    if arr == 0:
        return math.inf
    nnt = math.ceil(1.0 / abs(arr))
    return nnt if arr > 0 else -nnt


def peer_adjusted_nnt(rrr: float, baseline_risk: float) -> PEERResult:
    """NNT for a patient's expected event rate (PEER).

    ``ARR = PEER * RRR`` and ``NNT = ceil(1 / |ARR|)``. A negative relative
    risk reduction gives an NNH.

    Examples
    --------
    >>> peer_adjusted_nnt(0.25, 0.2).nnt
    20
    """
    if not (0.0 < baseline_risk < 1.0):
        raise ValueError(f"baseline_risk must be in (0, 1), got {baseline_risk}")
    arr = baseline_risk * rrr
    nnt = math.ceil(1.0 / abs(arr)) if arr != 0 else math.inf
    return PEERResult(arr=arr, nnt=nnt, label="NNT" if arr > 0 else "NNH")


def nnt_over_time(
    p_treatment: float,
    p_control: float,
    duration: float,
    timepoints: Iterable[float],
) -> list[NNTTimepoint]:
    """Extrapolate NNT to other follow-up times under constant hazards.

    Hazards are derived from the risks observed over ``duration``,
    ``lambda = -ln(1 - min(p, 0.9999)) / duration``, and risks at time
    ``t`` are ``1 - exp(-lambda t)``.

    Parameters
    ----------
    p_treatment, p_control : float
        Event risks observed in each arm over ``duration``.
    duration : float
        Follow-up time of the trial.
    timepoints : iterable of float
        Times (same unit as ``duration``) at which to report NNT.

    Returns
    -------
    list of NNTTimepoint
    """
    if not duration > 0:
        raise ValueError(f"duration must be > 0, got {duration}")
    for name, p in (("p_treatment", p_treatment), ("p_control", p_control)):
        if not (0.0 <= p <= 1.0):
            raise ValueError(f"{name} must be in [0, 1], got {p}")

    lam_c = -math.log(1.0 - min(p_control, 0.9999)) / duration
    lam_t = -math.log(1.0 - min(p_treatment, 0.9999)) / duration

    rows = []
    for t in timepoints:
        risk_c = 1.0 - math.exp(-lam_c * t)
        risk_t = 1.0 - math.exp(-lam_t * t)
        arr = risk_c - risk_t
        rows.append(NNTTimepoint(
            time=t, risk_control=risk_c, risk_treatment=risk_t, arr=arr, nnt=_signed_nnt(arr),
        ))
    return rows
