"""Sample size for cluster randomized and stepped-wedge trials.

Both functions start from an individually randomized sample size and
inflate (or deflate) it for the clustered design.

References
----------
Hussey & Hughes (2007). Design and analysis of stepped wedge cluster
randomized trials. *Contemporary Clinical Trials*, 28, 182-191.

Validates against: R clusterPower, CRTSize::n4means()
"""

from __future__ import annotations

import math

from pyclinstats.power._common import ClusterDesign, SteppedWedgeDesign


def _check_icc(icc: float) -> None:
    if not (0.0 <= icc < 1.0):
        raise ValueError(f"icc must be in [0, 1), got {icc}")


def sample_size_cluster(
    n_individual: float,
    icc: float,
    cluster_size: int,
) -> ClusterDesign:
    """Inflate an individually randomized n by the design effect.

    ``DEFF = 1 + (m - 1) * ICC`` where ``m`` is the cluster size.

    Parameters
    ----------
    n_individual : float
        Sample size required under individual randomization.
    icc : float
        Intra-cluster correlation coefficient, in [0, 1).
    cluster_size : int
        Subjects per cluster (>= 1).

    Returns
    -------
    ClusterDesign

    Examples
    --------
    >>> sample_size_cluster(200, 0.05, 20).n_clusters
    20
    """
    _check_icc(icc)
    if cluster_size < 1:
        raise ValueError(f"cluster_size must be >= 1, got {cluster_size}")

    deff = 1.0 + (cluster_size - 1.0) * icc
    n_adjusted = math.ceil(n_individual * deff)
    n_clusters = math.ceil(n_adjusted / cluster_size)
    return ClusterDesign(
        deff=deff,
        n_adjusted=n_adjusted,
        n_clusters=n_clusters,
        total_n=n_clusters * cluster_size,
    )


def sample_size_stepped_wedge(
    n_parallel: float,
    steps: int,
    clusters_per_step: int,
    icc: float,
) -> SteppedWedgeDesign:
    """Stepped-wedge n from a parallel cluster RCT n.

    Correction factor (Hussey-Hughes style approximation)::

        CF = 3 (1 - ICC) / (2 k (k - 1/k) ICC + 3 (1 - ICC))

    with ``k`` the number of steps; the stepped-wedge total is
    ``ceil(n_parallel * CF)``.
    """
    _check_icc(icc)
    if steps < 1 or clusters_per_step < 1:
        raise ValueError("steps and clusters_per_step must be >= 1")

    k = steps
    total_clusters = k * clusters_per_step
    cf = 3.0 * (1.0 - icc) / (2.0 * k * (k - 1.0 / k) * icc + 3.0 * (1.0 - icc))
    n_sw = math.ceil(n_parallel * cf)

    return SteppedWedgeDesign(
        total_clusters=total_clusters,
        steps=k,
        clusters_per_step=clusters_per_step,
        correction_factor=cf,
        n_per_cluster=math.ceil(n_sw / total_clusters),
        total_n=n_sw,
    )
