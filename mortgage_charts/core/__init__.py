"""Core functionality for mortgage-charts.

This module contains:
- Column schema for the merged mortgage CSV
- Data source loading with metadata
- Completeness filtering
- Statistical transform (z-scores, regression, correlation)
"""

from mortgage_charts.core.errors import (
    InsufficientData,
    LoadFailure,
    MortgageChartsError,
    UndefinedStatistic,
)
from mortgage_charts.core.statistics import (
    RegressionResult,
    linear_regression,
    mean,
    population_std,
    zscore,
)
from mortgage_charts.core.validation import (
    FilterResult,
    filter_complete,
    require_minimum_rows,
)

__all__ = [
    "FilterResult",
    "InsufficientData",
    "LoadFailure",
    "MortgageChartsError",
    "RegressionResult",
    "UndefinedStatistic",
    "filter_complete",
    "linear_regression",
    "mean",
    "population_std",
    "require_minimum_rows",
    "zscore",
]


def __getattr__(name: str):
    """Lazy imports for the data source, which pulls in configuration."""
    if name in ("MortgageDataSource", "DataSourceMetadata", "get_data_source"):
        from mortgage_charts.core import datasource

        return getattr(datasource, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
