"""Chart-ready views of the mortgage data set.

Each builder takes the raw table (strings, as loaded), filters it down to
complete rows, orders it by date and returns a plain output structure. The
structures hold everything a renderer needs; nothing is drawn here and no
shared drawing surface is touched.

- Rate trend: three parallel rate series keyed by date, plus a legend
- Spread vs delinquency: z-scored points, an OLS fit and its correlation
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any

import pandas as pd

from mortgage_charts.analysis.correlation import (
    CorrelationSignificance,
    describe_correlation,
)
from mortgage_charts.core.schema import DATE_COLUMN, MortgageSchema
from mortgage_charts.core.statistics import RegressionResult, linear_regression, zscore
from mortgage_charts.core.validation import (
    FilterResult,
    filter_complete,
    require_minimum_rows,
)

logger = logging.getLogger(__name__)

DEFAULT_MIN_ROWS = 10
RATE_TREND_DESCRIPTION = "30-year fixed, 15-year fixed, and 30-year conforming rates"
SPREAD_TITLE = "Spread vs Delinquency (Z-Scores)"


@dataclass(frozen=True)
class LegendEntry:
    """One color -> label mapping in a chart legend."""

    key: str
    label: str
    color: str

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary."""
        return {"key": self.key, "label": self.label, "color": self.color}


@dataclass(frozen=True)
class RateTrendView:
    """Three interest-rate series over time.

    Attributes:
        dates: Observation dates, ascending
        series: Dict mapping series key -> rates parallel to ``dates``
        legend: Legend entries in drawing order
        y_domain: Value-axis domain, from zero to the largest rate
        dropped: Rows removed for missing rates or dates
    """

    dates: tuple[date, ...]
    series: dict[str, tuple[float, ...]]
    legend: tuple[LegendEntry, ...]
    y_domain: tuple[float, float]
    dropped: int = 0

    @property
    def n(self) -> int:
        """Number of observations."""
        return len(self.dates)

    @property
    def date_extent(self) -> tuple[date, date]:
        """First and last observation date."""
        return self.dates[0], self.dates[-1]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        start, end = self.date_extent
        return {
            "n": self.n,
            "dropped": self.dropped,
            "dates": [d.isoformat() for d in self.dates],
            "series": {key: list(values) for key, values in self.series.items()},
            "legend": [entry.to_dict() for entry in self.legend],
            "y_domain": list(self.y_domain),
            "date_extent": [start.isoformat(), end.isoformat()],
        }


@dataclass(frozen=True)
class DerivedObservation:
    """A complete observation with its spread and z-scores."""

    date: date
    nonconforming: float
    conforming: float
    delinquency: float
    spread: float
    spread_z: float
    delin_z: float

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "date": self.date.isoformat(),
            "nonconforming": self.nonconforming,
            "conforming": self.conforming,
            "delinquency": self.delinquency,
            "spread": self.spread,
            "spread_z": self.spread_z,
            "delin_z": self.delin_z,
        }


@dataclass(frozen=True)
class SpreadDelinquencyView:
    """Standardized spread against standardized delinquency.

    Attributes:
        observations: Derived observations, ascending by date
        regression: OLS fit of delin_z on spread_z
        significance: p-value and interpretation of the correlation
        dropped: Rows removed for missing fields or dates
    """

    observations: tuple[DerivedObservation, ...]
    regression: RegressionResult
    significance: CorrelationSignificance
    dropped: int = 0

    @property
    def n(self) -> int:
        """Number of points."""
        return len(self.observations)

    @property
    def points(self) -> list[tuple[float, float]]:
        """(spread_z, delin_z) pairs in date order."""
        return [(o.spread_z, o.delin_z) for o in self.observations]

    @property
    def x_extent(self) -> tuple[float, float]:
        """Smallest and largest spread z-score."""
        xs = [o.spread_z for o in self.observations]
        return min(xs), max(xs)

    @property
    def y_extent(self) -> tuple[float, float]:
        """Smallest and largest delinquency z-score."""
        ys = [o.delin_z for o in self.observations]
        return min(ys), max(ys)

    @property
    def fit_line(self) -> tuple[tuple[float, float], tuple[float, float]]:
        """Endpoints of the regression line across the x extent."""
        x0, x1 = self.x_extent
        return (x0, self.regression.predict(x0)), (x1, self.regression.predict(x1))

    @property
    def title(self) -> str:
        """Chart title embedding r to three decimals."""
        return f"{SPREAD_TITLE}: r = {self.regression.correlation:.3f}"

    @property
    def summary(self) -> str:
        """One-line summary with r and the sample count."""
        return f"{self.title}, n = {self.n} days"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        (x0, y0), (x1, y1) = self.fit_line
        return {
            "n": self.n,
            "dropped": self.dropped,
            "summary": self.summary,
            "points": [list(p) for p in self.points],
            "dates": [o.date.isoformat() for o in self.observations],
            "regression": self.regression.to_dict(),
            "fit_line": [[x0, y0], [x1, y1]],
            "significance": self.significance.to_dict(),
        }


def complete_series(raw: pd.DataFrame, required_fields: tuple[str, ...]) -> FilterResult:
    """Filter to complete rows, parse dates and sort ascending by date.

    Each date is parsed on its own, so ISO and MM/DD/YYYY rows can mix.
    Rows whose date does not parse are dropped and counted with the rest.
    The returned frame has a ``date`` column of datetime64 values.
    """
    result = filter_complete(raw, required_fields)
    df = result.data

    if DATE_COLUMN in df.columns:
        dates = pd.to_datetime(df[DATE_COLUMN], errors="coerce", format="mixed")
    else:
        dates = pd.Series(pd.NaT, index=df.index, dtype="datetime64[ns]")

    valid = dates.notna()
    bad_dates = int((~valid).sum())
    if bad_dates:
        logger.info(f"Dropped {bad_dates} rows with unparseable {DATE_COLUMN}")

    df = df.loc[valid].copy()
    df["date"] = dates.loc[valid]
    df = df.sort_values("date", kind="mergesort").reset_index(drop=True)

    return FilterResult(
        data=df,
        dropped=result.dropped + bad_dates,
        required_fields=result.required_fields,
    )


def build_rate_trend_view(raw: pd.DataFrame) -> RateTrendView:
    """Build the multi-line interest-rate view.

    Args:
        raw: Table as loaded by MortgageDataSource

    Returns:
        RateTrendView with one series per rate column

    Raises:
        InsufficientData: If no row has all three rates
    """
    columns = MortgageSchema.rate_trend_columns()
    result = complete_series(raw, tuple(c.code for c in columns))
    require_minimum_rows(result, 1, RATE_TREND_DESCRIPTION)

    df = result.data
    series = {c.key: tuple(float(v) for v in df[c.code]) for c in columns}
    y_max = max(max(values) for values in series.values())

    return RateTrendView(
        dates=tuple(ts.date() for ts in df["date"]),
        series=series,
        legend=tuple(LegendEntry(key=c.key, label=c.label, color=c.color or "") for c in columns),
        y_domain=(0.0, float(y_max)),
        dropped=result.dropped,
    )


def build_spread_delinquency_view(
    raw: pd.DataFrame,
    min_rows: int = DEFAULT_MIN_ROWS,
) -> SpreadDelinquencyView:
    """Build the spread-vs-delinquency scatter view.

    Spread is the 30-year fixed (non-conforming) rate minus the FICO 740
    conforming rate. Spread and delinquency are z-scored with the population
    standard deviation, then delinquency z is regressed on spread z.

    Args:
        raw: Table as loaded by MortgageDataSource
        min_rows: Minimum number of complete rows

    Returns:
        SpreadDelinquencyView with points, fit and correlation

    Raises:
        InsufficientData: If fewer than ``min_rows`` rows are complete
        UndefinedStatistic: If spread or delinquency has zero variance
    """
    result = complete_series(raw, MortgageSchema.SPREAD_CODES)
    logger.info(f"Valid data points after dropping missing values: {result.count}")
    require_minimum_rows(result, min_rows, MortgageSchema.SPREAD_DESCRIPTION)

    df = result.data
    nonconforming = df[MortgageSchema.NONCONFORMING].to_numpy(dtype=float)
    conforming = df[MortgageSchema.CONFORMING].to_numpy(dtype=float)
    delinquency = df[MortgageSchema.DELINQUENCY].to_numpy(dtype=float)

    spread = nonconforming - conforming
    spread_z = zscore(spread)
    delin_z = zscore(delinquency)
    regression = linear_regression(spread_z, delin_z)

    observations = tuple(
        DerivedObservation(
            date=ts.date(),
            nonconforming=float(nonconforming[i]),
            conforming=float(conforming[i]),
            delinquency=float(delinquency[i]),
            spread=float(spread[i]),
            spread_z=float(spread_z[i]),
            delin_z=float(delin_z[i]),
        )
        for i, ts in enumerate(df["date"])
    )

    view = SpreadDelinquencyView(
        observations=observations,
        regression=regression,
        significance=describe_correlation(regression.correlation, len(observations)),
        dropped=result.dropped,
    )
    logger.info(view.summary)
    return view
