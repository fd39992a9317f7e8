"""mortgage-charts: rate-trend and spread/delinquency charts from mortgage data.

This package loads a merged mortgage-rate CSV, standardizes the mortgage
spread and the delinquency rate, fits a regression between them and renders
both views as interactive Plotly figures, from Python, the CLI or an API.
"""

__version__ = "0.1.0"


def __getattr__(name: str):
    """Lazy imports for main package exports."""
    if name == "MortgageDataSource":
        from mortgage_charts.core.datasource import MortgageDataSource

        return MortgageDataSource
    if name in ("build_rate_trend_view", "build_spread_delinquency_view"):
        from mortgage_charts.analysis import views

        return getattr(views, name)
    if name in ("linear_regression", "zscore"):
        from mortgage_charts.core import statistics

        return getattr(statistics, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "MortgageDataSource",
    "build_rate_trend_view",
    "build_spread_delinquency_view",
    "linear_regression",
    "zscore",
    "__version__",
]
