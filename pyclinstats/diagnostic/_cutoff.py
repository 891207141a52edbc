"""Classification of a continuous marker at a fixed cutoff."""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from pyclinstats.diagnostic._common import ClassificationCounts


def classify_at_cutoff(
    response: NDArray[np.integer],
    predictor: NDArray[np.floating],
    cutoff: float,
    direction: str = "<",
) -> ClassificationCounts:
    """Cross-classify a continuous predictor against a binary outcome.

    Parameters
    ----------
    response : array of int
        Binary outcome (0/1).
    predictor : array of float
        Continuous predictor.
    cutoff : float
        Classification threshold.
    direction : str
        ``'<'`` means predictor >= cutoff is classified positive
        (controls < cases, higher values = disease).
        ``'>'`` means predictor <= cutoff is classified positive
        (controls > cases, lower values = disease).

    Returns
    -------
    ClassificationCounts
        Counts ready for :func:`diagnostic_accuracy`.
    """
    response = np.asarray(response, dtype=np.intp)
    predictor = np.asarray(predictor, dtype=np.float64)

    if response.ndim != 1 or predictor.ndim != 1:
        raise ValueError("response and predictor must be 1-D")
    if len(response) != len(predictor):
        raise ValueError("response and predictor must have equal length")
    if direction not in ("<", ">"):
        raise ValueError(f"direction must be '<' or '>', got {direction!r}")

    if direction == "<":
        predicted_pos = predictor >= cutoff
    else:
        predicted_pos = predictor <= cutoff

    actual_pos = response == 1

    return ClassificationCounts(
        tp=int(np.sum(predicted_pos & actual_pos)),
        fp=int(np.sum(predicted_pos & ~actual_pos)),
        fn=int(np.sum(~predicted_pos & actual_pos)),
        tn=int(np.sum(~predicted_pos & ~actual_pos)),
        cutoff=float(cutoff),
        direction=direction,
    )
