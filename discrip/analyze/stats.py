from __future__ import annotations

import math
from collections.abc import Iterable


def mean(values: Iterable[float]) -> float:
    """Arithmetic mean; 0.0 for an empty input."""
    vals = list(values)
    if not vals:
        return 0.0
    return sum(vals) / len(vals)


def variance(values: Iterable[float]) -> float:
    """Population variance (divisor N). An empty input has variance 0.0."""
    vals = list(values)
    if not vals:
        return 0.0
    avg = mean(vals)
    return sum((v - avg) ** 2 for v in vals) / len(vals)


def std_dev(values: Iterable[float]) -> float:
    return math.sqrt(variance(values))


def coefficient_of_variation(values: Iterable[float]) -> float:
    """Standard deviation divided by the mean.

    Returns 0.0 for an empty input or a zero mean.
    """
    vals = list(values)
    avg = mean(vals)
    if avg == 0:
        return 0.0
    return std_dev(vals) / avg
