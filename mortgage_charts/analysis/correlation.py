"""Significance and plain-language reading of a Pearson correlation."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

from scipy import stats


@dataclass(frozen=True)
class CorrelationSignificance:
    """Two-sided test of r = 0.

    Attributes:
        r: Pearson correlation coefficient
        n_points: Number of points used
        p_value: Two-sided p-value from the t-distribution with n - 2 dof
        interpretation: Human-readable interpretation
    """

    r: float
    n_points: int
    p_value: float
    interpretation: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "r": self.r,
            "n_points": self.n_points,
            "p_value": self.p_value,
            "interpretation": self.interpretation,
        }


def correlation_p_value(r: float, n_points: int) -> float:
    """Two-sided p-value for a Pearson r over n_points observations."""
    dof = n_points - 2
    if dof <= 0:
        return float("nan")
    if abs(r) >= 1.0:
        return 0.0
    t_stat = r * math.sqrt(dof / (1.0 - r * r))
    return float(2.0 * stats.t.sf(abs(t_stat), dof))


def describe_correlation(r: float, n_points: int) -> CorrelationSignificance:
    """Attach a p-value and an interpretation to a correlation coefficient."""
    p_value = correlation_p_value(r, n_points)
    return CorrelationSignificance(
        r=r,
        n_points=n_points,
        p_value=p_value,
        interpretation=_interpret_correlation(r, p_value),
    )


def _interpret_correlation(r: float, p_value: float) -> str:
    """Generate human-readable interpretation of correlation."""
    abs_r = abs(r)

    # Strength
    if abs_r < 0.1:
        strength = "negligible"
    elif abs_r < 0.3:
        strength = "weak"
    elif abs_r < 0.5:
        strength = "moderate"
    elif abs_r < 0.7:
        strength = "strong"
    else:
        strength = "very strong"

    if r > 0:
        label = f"{strength} positive"
    elif r < 0:
        label = f"{strength} negative"
    else:
        label = strength

    # Significance
    if math.isnan(p_value):
        significance = "significance not testable with so few points"
    elif p_value < 0.001:
        significance = "highly significant (p < 0.001)"
    elif p_value < 0.01:
        significance = "significant (p < 0.01)"
    elif p_value < 0.05:
        significance = "marginally significant (p < 0.05)"
    else:
        significance = "not statistically significant"

    return f"{label.capitalize()} correlation, {significance}."
