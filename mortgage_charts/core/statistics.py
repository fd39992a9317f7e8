"""Statistical transform behind the spread/delinquency scatterplot.

Pure functions over in-memory sequences: population z-scores and an
ordinary-least-squares fit with its Pearson correlation. Nothing here does
I/O or touches shared state, so every function is safe to call repeatedly
or from several threads.

Degenerate input (zero variance, too few points, non-finite values) raises
UndefinedStatistic instead of letting NaN or infinity reach the charts.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

import numpy as np

from mortgage_charts.core.errors import UndefinedStatistic


@dataclass(frozen=True)
class RegressionResult:
    """Ordinary-least-squares fit of y on x.

    Attributes:
        slope: Fitted slope
        intercept: Fitted intercept
        correlation: Pearson product-moment correlation, in [-1, 1]
    """

    slope: float
    intercept: float
    correlation: float

    def predict(self, x: float) -> float:
        """Evaluate the fitted line at x."""
        return self.slope * x + self.intercept

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "slope": self.slope,
            "intercept": self.intercept,
            "correlation": self.correlation,
        }


def _as_array(values: Iterable[float], name: str) -> np.ndarray:
    if not hasattr(values, "__len__"):
        values = list(values)
    arr = np.asarray(values, dtype=float)
    if arr.ndim != 1:
        raise UndefinedStatistic(f"{name} must be one-dimensional")
    if not np.all(np.isfinite(arr)):
        raise UndefinedStatistic(f"{name} contains non-finite values")
    return arr


def _is_constant(arr: np.ndarray) -> bool:
    # Compare against the first element; a mean-based check can leave
    # rounding residue for identical values.
    return bool(np.all(arr == arr[0]))


def _mean(arr: np.ndarray) -> float:
    mu = float(arr.sum() / arr.size)
    if not math.isfinite(mu):
        raise UndefinedStatistic("mean overflows the floating-point range")
    return mu


def _sum_of_squares(centered: np.ndarray) -> float:
    with np.errstate(over="ignore", under="ignore"):
        return float((centered**2).sum())


def mean(values: Iterable[float]) -> float:
    """Arithmetic mean of a non-empty sequence."""
    arr = _as_array(values, "values")
    if arr.size == 0:
        raise UndefinedStatistic("mean of an empty sequence is undefined")
    return _mean(arr)


def population_std(values: Iterable[float]) -> float:
    """Population standard deviation, sqrt(sum((v - mean)^2) / n)."""
    arr = _as_array(values, "values")
    if arr.size == 0:
        raise UndefinedStatistic("standard deviation of an empty sequence is undefined")
    return math.sqrt(_sum_of_squares(arr - _mean(arr)) / arr.size)


def zscore(values: Iterable[float]) -> np.ndarray:
    """Standardize values with the population standard deviation.

    Args:
        values: Non-empty sequence of finite numbers

    Returns:
        Array of (v - mean) / std, in input order

    Raises:
        UndefinedStatistic: If values is empty, all values are identical, or
            the spread underflows to zero or overflows to infinity

    Example:
        >>> zscore([1.0, 2.0, 3.0]).round(4).tolist()
        [-1.2247, 0.0, 1.2247]
    """
    arr = _as_array(values, "values")
    if arr.size == 0:
        raise UndefinedStatistic("z-score of an empty sequence is undefined")
    if _is_constant(arr):
        raise UndefinedStatistic(
            f"z-score is undefined: all {arr.size} values are identical (std = 0)"
        )

    std = population_std(arr)
    if std == 0 or not math.isfinite(std):
        raise UndefinedStatistic(
            f"z-score is undefined: standard deviation is {std} in floating point"
        )

    result = (arr - _mean(arr)) / std
    if not np.all(np.isfinite(result)):
        raise UndefinedStatistic("z-score produced non-finite values")
    return result


def linear_regression(xs: Iterable[float], ys: Iterable[float]) -> RegressionResult:
    """Fit y = slope * x + intercept by ordinary least squares.

    Args:
        xs: Predictor values
        ys: Response values, same length as xs

    Returns:
        RegressionResult with slope, intercept and Pearson correlation

    Raises:
        UndefinedStatistic: If the lengths differ, fewer than two points are
            given, all xs are identical (vertical line), all ys are
            identical (correlation undefined), or the sums leave the
            floating-point range
    """
    x = _as_array(xs, "xs")
    y = _as_array(ys, "ys")

    if x.size != y.size:
        raise UndefinedStatistic(
            f"xs and ys must have equal length (got {x.size} and {y.size})"
        )
    if x.size < 2:
        raise UndefinedStatistic(
            f"linear regression needs at least 2 points, got {x.size}"
        )
    if _is_constant(x):
        raise UndefinedStatistic("slope is undefined: all x values are identical")
    if _is_constant(y):
        raise UndefinedStatistic("correlation is undefined: all y values are identical")

    x_mean = _mean(x)
    y_mean = _mean(y)
    dx = x - x_mean
    dy = y - y_mean

    with np.errstate(over="ignore", under="ignore"):
        numerator = float((dx * dy).sum())
    denominator = _sum_of_squares(dx)
    ss_y = _sum_of_squares(dy)

    if denominator == 0 or not math.isfinite(denominator):
        raise UndefinedStatistic(
            f"slope is undefined: x sum of squares is {denominator} in floating point"
        )
    if ss_y == 0 or not math.isfinite(ss_y):
        raise UndefinedStatistic(
            f"correlation is undefined: y sum of squares is {ss_y} in floating point"
        )
    if not math.isfinite(numerator):
        raise UndefinedStatistic("cross product overflows the floating-point range")

    slope = numerator / denominator
    intercept = y_mean - slope * x_mean
    correlation = numerator / (math.sqrt(denominator) * math.sqrt(ss_y))

    if not all(math.isfinite(v) for v in (slope, intercept, correlation)):
        raise UndefinedStatistic("regression produced non-finite values")

    return RegressionResult(
        slope=slope,
        intercept=intercept,
        correlation=max(-1.0, min(1.0, correlation)),
    )
