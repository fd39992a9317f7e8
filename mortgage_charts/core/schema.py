"""Column definitions for the merged mortgage-rate CSV.

The CSV carries one row per observation date. Each numeric column is
described once here so that filtering, derived fields, legends and axis
labels all agree on names, labels and colors.
"""

from dataclasses import dataclass
from typing import ClassVar


@dataclass(frozen=True)
class ColumnDefinition:
    """Definition of a single numeric CSV column."""

    code: str  # Column name as it appears in the CSV header
    key: str  # Short name used in derived frames and API payloads
    label: str
    unit: str = "%"
    color: str | None = None  # Line color for the rate-trend chart
    notes: str | None = None


DATE_COLUMN = "observation_date"


class MortgageSchema:
    """Column registry for the mortgage data set.

    Example:
        >>> MortgageSchema.get_column("30yr_fixed_rate").label
        '30-Year Fixed'
        >>> [c.key for c in MortgageSchema.rate_trend_columns()]
        ['y30', 'y15', 'conf']
    """

    COLUMNS: ClassVar[dict[str, ColumnDefinition]] = {
        "30yr_fixed_rate": ColumnDefinition(
            code="30yr_fixed_rate",
            key="y30",
            label="30-Year Fixed",
            color="#3b6ea1",
            notes="Also the non-conforming leg of the spread",
        ),
        "15yr_fixed_rate": ColumnDefinition(
            code="15yr_fixed_rate",
            key="y15",
            label="15-Year Fixed",
            color="#e89a2f",
        ),
        "30yr_conforming_fico740": ColumnDefinition(
            code="30yr_conforming_fico740",
            key="conf",
            label="30-Year Conforming",
            color="#1e6b2d",
            notes="FICO 740 credit tier",
        ),
        "delinquency_rate_interpolated": ColumnDefinition(
            code="delinquency_rate_interpolated",
            key="delinquency",
            label="Delinquency Rate",
            notes="Interpolated upstream to the observation dates",
        ),
    }

    RATE_TREND_CODES: ClassVar[tuple[str, ...]] = (
        "30yr_fixed_rate",
        "15yr_fixed_rate",
        "30yr_conforming_fico740",
    )

    NONCONFORMING = "30yr_fixed_rate"
    CONFORMING = "30yr_conforming_fico740"
    DELINQUENCY = "delinquency_rate_interpolated"

    # Order matters: it is the order used in the insufficient-data message
    SPREAD_CODES: ClassVar[tuple[str, ...]] = (
        CONFORMING,
        DELINQUENCY,
        NONCONFORMING,
    )
    SPREAD_DESCRIPTION = "conforming rate, delinquency, and fixed rate"

    @classmethod
    def get_column(cls, code: str) -> ColumnDefinition | None:
        """Get a column definition by CSV column name."""
        return cls.COLUMNS.get(code)

    @classmethod
    def rate_trend_columns(cls) -> list[ColumnDefinition]:
        """Columns drawn as lines on the rate-trend chart, in legend order."""
        return [cls.COLUMNS[code] for code in cls.RATE_TREND_CODES]

    @classmethod
    def required_columns(cls) -> list[str]:
        """All columns the charts read, date first."""
        return [DATE_COLUMN, *cls.COLUMNS]
