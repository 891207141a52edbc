"""
PyClinStats: Statistical engine for clinical-research calculators.

A stateless numerical library: special functions, probability distributions,
confidence intervals, hypothesis tests, sample size/power, meta-analysis,
survival analysis, and diagnostic/epidemiologic measures. Every operation is
a pure function of its inputs and returns plain numbers or frozen result
records.

Usage:
    from pyclinstats import special, distributions, inference, power
    from pyclinstats import meta, survival, diagnostic, epi
"""

import logging

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

from pyclinstats._logging import configure_logging
from pyclinstats import special
from pyclinstats import distributions
from pyclinstats import inference
from pyclinstats import power
from pyclinstats import meta
from pyclinstats import survival
from pyclinstats import diagnostic
from pyclinstats import epi

__all__ = [
    "__version__",
    "configure_logging",
    "special",
    "distributions",
    "inference",
    "power",
    "meta",
    "survival",
    "diagnostic",
    "epi",
]
