"""Chart-ready analysis views for mortgage-charts.

This module contains:
- Rate-trend view (three rate series keyed by date)
- Spread vs delinquency view (z-scores, regression, correlation)
- Correlation significance and interpretation
"""

from mortgage_charts.analysis.correlation import (
    CorrelationSignificance,
    describe_correlation,
)
from mortgage_charts.analysis.views import (
    DerivedObservation,
    LegendEntry,
    RateTrendView,
    SpreadDelinquencyView,
    build_rate_trend_view,
    build_spread_delinquency_view,
)

__all__ = [
    "CorrelationSignificance",
    "DerivedObservation",
    "LegendEntry",
    "RateTrendView",
    "SpreadDelinquencyView",
    "build_rate_trend_view",
    "build_spread_delinquency_view",
    "describe_correlation",
]
