"""Visualization tools for mortgage-charts.

This module contains:
- Interest-rate trend lines
- Spread vs delinquency scatter with regression line
- Interactive Plotly visualizations
"""

from mortgage_charts.visualization.plots import (
    PlotResult,
    create_rate_trend_plot,
    create_spread_scatter_plot,
)

__all__ = [
    "PlotResult",
    "create_rate_trend_plot",
    "create_spread_scatter_plot",
]
