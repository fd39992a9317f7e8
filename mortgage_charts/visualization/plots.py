"""Visualization tools for mortgage-rate data.

This module turns the chart-ready views into figures:
- Interest rates over time (one line per rate series, with legend)
- Spread vs delinquency scatter with regression line and correlation

All plots are generated using Plotly for interactivity. Each function
returns a new figure; placing it on a page is up to the caller.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import plotly.graph_objects as go

from mortgage_charts.analysis.views import RateTrendView, SpreadDelinquencyView


@dataclass
class PlotResult:
    """Result from a plot generation function.

    Attributes:
        figure: Plotly figure object
        title: Plot title
        description: Description of what the plot shows
        data_summary: Summary of data used
    """

    figure: go.Figure
    title: str
    description: str
    data_summary: dict[str, Any]

    def to_html(self, include_plotlyjs: bool = True, full_html: bool = False) -> str:
        """Convert figure to HTML string.

        Args:
            include_plotlyjs: Include Plotly.js library in HTML
            full_html: Wrap the figure in a complete HTML document

        Returns:
            HTML string
        """
        return self.figure.to_html(
            include_plotlyjs="cdn" if include_plotlyjs else False,
            full_html=full_html,
        )

    def to_json(self) -> str:
        """Convert figure to JSON for frontend rendering."""
        return self.figure.to_json()

    def write_html(self, path: str) -> None:
        """Write a standalone HTML page for the figure."""
        self.figure.write_html(path, include_plotlyjs="cdn", full_html=True)


def create_rate_trend_plot(
    view: RateTrendView,
    title: str = "Mortgage Interest Rates",
    width: int = 1100,
    height: int = 450,
) -> PlotResult:
    """Create a multi-line chart of interest rates over time.

    Args:
        view: Output of build_rate_trend_view
        title: Plot title
        width: Figure width in pixels
        height: Figure height in pixels

    Returns:
        PlotResult with one line trace per legend entry
    """
    fig = go.Figure()

    for entry in view.legend:
        fig.add_trace(go.Scatter(
            x=list(view.dates),
            y=list(view.series[entry.key]),
            mode="lines",
            name=entry.label,
            line=dict(color=entry.color, width=2, shape="spline", smoothing=0.6),
            hovertemplate=f"{entry.label}: %{{y:.2f}}%<br>%{{x|%Y-%m-%d}}<extra></extra>",
        ))

    fig.update_layout(
        title=dict(text=title, x=0.5),
        xaxis=dict(
            title="Date",
            range=[view.date_extent[0], view.date_extent[1]],
            gridcolor="rgba(128, 128, 128, 0.2)",
        ),
        yaxis=dict(
            title="Rate (%)",
            range=list(view.y_domain),
            gridcolor="rgba(128, 128, 128, 0.2)",
        ),
        width=width,
        height=height,
        margin=dict(t=40, r=150, b=50, l=70),
        template="plotly_white",
        hovermode="x unified",
        legend=dict(
            yanchor="top",
            y=0.95,
            xanchor="left",
            x=1.02,
        ),
    )

    start, end = view.date_extent
    summary = {
        "n_observations": view.n,
        "dropped_rows": view.dropped,
        "date_range": [start.isoformat(), end.isoformat()],
        "series": [entry.label for entry in view.legend],
        "max_rate": view.y_domain[1],
    }

    return PlotResult(
        figure=fig,
        title=title,
        description="30-year fixed, 15-year fixed and 30-year conforming "
                    "mortgage rates over time.",
        data_summary=summary,
    )


def create_spread_scatter_plot(
    view: SpreadDelinquencyView,
    width: int = 800,
    height: int = 500,
) -> PlotResult:
    """Create the spread vs delinquency scatter plot.

    Args:
        view: Output of build_spread_delinquency_view
        width: Figure width in pixels
        height: Figure height in pixels

    Returns:
        PlotResult with points, dashed regression line and correlation title
    """
    fig = go.Figure()

    hover_text = [
        f"<b>{o.date.isoformat()}</b><br>Spread = {o.spread:.3f} (z = {o.spread_z:.2f})"
        f"<br>Delinquency = {o.delinquency:.3f} (z = {o.delin_z:.2f})"
        for o in view.observations
    ]

    fig.add_trace(go.Scatter(
        x=[o.spread_z for o in view.observations],
        y=[o.delin_z for o in view.observations],
        mode="markers",
        marker=dict(size=5, color="steelblue", opacity=0.6),
        text=hover_text,
        hoverinfo="text",
        name="Observations",
    ))

    (x0, y0), (x1, y1) = view.fit_line
    fig.add_trace(go.Scatter(
        x=[x0, x1],
        y=[y0, y1],
        mode="lines",
        line=dict(color="red", dash="dash", width=2),
        name=f"Fit (slope={view.regression.slope:.2f})",
    ))

    fig.update_layout(
        title=dict(text=view.title, x=0.5),
        xaxis_title="Spread Z-Score",
        yaxis_title="Delinquency Z-Score",
        width=width,
        height=height,
        margin=dict(t=50, r=40, b=60, l=60),
        template="plotly_white",
        hovermode="closest",
        showlegend=False,
    )
    fig.add_annotation(
        text=f"n = {view.n} days",
        xref="paper",
        yref="paper",
        x=1.0,
        y=1.02,
        xanchor="right",
        yanchor="bottom",
        showarrow=False,
        font=dict(size=12, color="#666"),
    )

    summary = {
        "n_points": view.n,
        "dropped_rows": view.dropped,
        "correlation": view.regression.correlation,
        "slope": view.regression.slope,
        "intercept": view.regression.intercept,
        "p_value": view.significance.p_value,
    }

    return PlotResult(
        figure=fig,
        title=view.title,
        description=f"{view.summary}. {view.significance.interpretation}",
        data_summary=summary,
    )
