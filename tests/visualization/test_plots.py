"""Tests for visualization plots module."""

from pathlib import Path

import pandas as pd
import pytest

from mortgage_charts.analysis.views import (
    RateTrendView,
    SpreadDelinquencyView,
    build_rate_trend_view,
    build_spread_delinquency_view,
)
from mortgage_charts.visualization.plots import (
    PlotResult,
    create_rate_trend_plot,
    create_spread_scatter_plot,
)


@pytest.fixture
def rate_view(raw_df: pd.DataFrame) -> RateTrendView:
    """Build the rate-trend view from the sample table."""
    return build_rate_trend_view(raw_df)


@pytest.fixture
def spread_view(raw_df: pd.DataFrame) -> SpreadDelinquencyView:
    """Build the spread view from the sample table."""
    return build_spread_delinquency_view(raw_df)


class TestPlotResult:
    """Tests for PlotResult dataclass."""

    def test_create_result(self, rate_view: RateTrendView) -> None:
        """Test that PlotResult has expected attributes."""
        result = create_rate_trend_plot(rate_view)
        assert isinstance(result, PlotResult)
        assert hasattr(result, "figure")
        assert hasattr(result, "title")
        assert hasattr(result, "description")
        assert hasattr(result, "data_summary")

    def test_to_html(self, rate_view: RateTrendView) -> None:
        """Test converting to an HTML fragment."""
        html = create_rate_trend_plot(rate_view).to_html()
        assert isinstance(html, str)
        assert "<html>" not in html
        assert len(html) > 0

    def test_to_full_html(self, rate_view: RateTrendView) -> None:
        """Test converting to a full HTML page."""
        html = create_rate_trend_plot(rate_view).to_html(full_html=True)
        assert "<html>" in html

    def test_to_json(self, spread_view: SpreadDelinquencyView) -> None:
        """Test converting to JSON."""
        json_str = create_spread_scatter_plot(spread_view).to_json()
        assert isinstance(json_str, str)
        assert "Spread Z-Score" in json_str

    def test_write_html(self, rate_view: RateTrendView, tmp_path: Path) -> None:
        """Test writing a standalone page."""
        path = tmp_path / "rates.html"
        create_rate_trend_plot(rate_view).write_html(str(path))
        assert path.exists()
        assert path.stat().st_size > 0


class TestRateTrendPlot:
    """Tests for the interest-rate line chart."""

    def test_one_trace_per_series(self, rate_view: RateTrendView) -> None:
        """Test three colored line traces in legend order."""
        fig = create_rate_trend_plot(rate_view).figure

        assert len(fig.data) == 3
        assert [t.name for t in fig.data] == [
            "30-Year Fixed",
            "15-Year Fixed",
            "30-Year Conforming",
        ]
        assert [t.line.color for t in fig.data] == ["#3b6ea1", "#e89a2f", "#1e6b2d"]
        assert all(t.mode == "lines" for t in fig.data)

    def test_traces_follow_view(self, rate_view: RateTrendView) -> None:
        """Test trace values match the view series."""
        fig = create_rate_trend_plot(rate_view).figure

        assert list(fig.data[0].y) == list(rate_view.series["y30"])
        assert len(fig.data[1].x) == rate_view.n

    def test_y_axis_from_zero(self, rate_view: RateTrendView) -> None:
        """Test the value axis starts at zero."""
        fig = create_rate_trend_plot(rate_view).figure

        assert tuple(fig.layout.yaxis.range) == rate_view.y_domain

    def test_custom_title(self, rate_view: RateTrendView) -> None:
        """Test custom title."""
        result = create_rate_trend_plot(rate_view, title="Rates")
        assert result.title == "Rates"
        assert result.figure.layout.title.text == "Rates"

    def test_data_summary(self, rate_view: RateTrendView) -> None:
        """Test data summary."""
        summary = create_rate_trend_plot(rate_view).data_summary

        assert summary["n_observations"] == rate_view.n
        assert summary["date_range"] == ["2020-01-01", "2020-02-09"]
        assert summary["max_rate"] == rate_view.y_domain[1]


class TestSpreadScatterPlot:
    """Tests for the spread vs delinquency scatter."""

    def test_points_and_fit_line(self, spread_view: SpreadDelinquencyView) -> None:
        """Test a marker trace and a dashed line trace."""
        fig = create_spread_scatter_plot(spread_view).figure

        points, fit = fig.data
        assert points.mode == "markers"
        assert len(points.x) == spread_view.n
        assert points.marker.color == "steelblue"
        assert fit.mode == "lines"
        assert fit.line.dash == "dash"
        assert fit.line.color == "red"

    def test_fit_line_endpoints(self, spread_view: SpreadDelinquencyView) -> None:
        """Test the line runs across the x extent."""
        fig = create_spread_scatter_plot(spread_view).figure

        (x0, y0), (x1, y1) = spread_view.fit_line
        assert list(fig.data[1].x) == [x0, x1]
        assert list(fig.data[1].y) == [y0, y1]

    def test_title_and_labels(self, spread_view: SpreadDelinquencyView) -> None:
        """Test title with r, axis titles and sample-size note."""
        result = create_spread_scatter_plot(spread_view)
        layout = result.figure.layout

        assert result.title == spread_view.title
        assert f"r = {spread_view.regression.correlation:.3f}" in layout.title.text
        assert layout.xaxis.title.text == "Spread Z-Score"
        assert layout.yaxis.title.text == "Delinquency Z-Score"
        assert layout.annotations[0].text == "n = 40 days"

    def test_description_includes_interpretation(
        self,
        spread_view: SpreadDelinquencyView,
    ) -> None:
        """Test the description carries summary and interpretation."""
        result = create_spread_scatter_plot(spread_view)

        assert spread_view.summary in result.description
        assert spread_view.significance.interpretation in result.description

    def test_data_summary(self, spread_view: SpreadDelinquencyView) -> None:
        """Test data summary."""
        summary = create_spread_scatter_plot(spread_view).data_summary

        assert summary["n_points"] == 40
        assert summary["correlation"] == spread_view.regression.correlation
        assert "p_value" in summary

    def test_each_call_returns_new_figure(
        self,
        spread_view: SpreadDelinquencyView,
    ) -> None:
        """Test that figures are not shared between calls."""
        first = create_spread_scatter_plot(spread_view).figure
        second = create_spread_scatter_plot(spread_view).figure

        assert first is not second
