"""Error kinds raised by the mortgage-charts core.

The core raises; only the outer surfaces (API, CLI) turn these into
user-facing messages.
"""

from __future__ import annotations

LOAD_ERROR_MESSAGE = "Error loading data. Check the logs for details."


class MortgageChartsError(Exception):
    """Base class for all mortgage-charts errors."""


class LoadFailure(MortgageChartsError):
    """The data source could not be read or parsed."""

    user_message = LOAD_ERROR_MESSAGE


class InsufficientData(MortgageChartsError):
    """Fewer valid rows than an analysis needs.

    Attributes:
        count: Number of rows that survived filtering
        minimum: Number of rows the analysis requires
        description: Human-readable list of the required fields
    """

    def __init__(self, count: int, minimum: int, description: str = "") -> None:
        self.count = count
        self.minimum = minimum
        self.description = description
        super().__init__(self.user_message)

    @property
    def user_message(self) -> str:
        message = f"Insufficient data: only {self.count} rows have all required fields"
        if self.description:
            message += f" ({self.description})"
        return message + "."


class UndefinedStatistic(MortgageChartsError):
    """A statistic is undefined for the given input (e.g. zero variance)."""
