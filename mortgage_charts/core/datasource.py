"""Data source for the merged mortgage-rate CSV.

This module is the only place that touches the file system for input. It
reads the CSV once, keeps every cell as a string (an empty cell stays ``""``
so that "missing" is never confused with zero) and records metadata about
what was loaded.

Example:
    >>> from mortgage_charts.core.datasource import MortgageDataSource
    >>> source = MortgageDataSource("merged_mortgage_data.csv")
    >>> print(f"Loaded {source.total_rows} rows from {source.metadata.path}")
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any

import pandas as pd

from mortgage_charts.core.errors import LoadFailure
from mortgage_charts.core.schema import DATE_COLUMN, MortgageSchema

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DataSourceMetadata:
    """Metadata about the loaded CSV.

    Attributes:
        path: File the data was read from
        loaded_at: When the file was read (ISO format)
        total_rows: Number of data rows
        columns: Column names in file order
        coverage: Dict mapping column -> count of non-empty cells
    """

    path: str
    loaded_at: str
    total_rows: int
    columns: tuple[str, ...]
    coverage: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "path": self.path,
            "loaded_at": self.loaded_at,
            "total_rows": self.total_rows,
            "columns": list(self.columns),
            "coverage": self.coverage,
        }

    def missing_columns(self) -> list[str]:
        """Columns the charts read that the file does not have."""
        return [c for c in MortgageSchema.required_columns() if c not in self.columns]


class MortgageDataSource:
    """Loads the mortgage CSV into an in-memory table of strings.

    Attributes:
        metadata: DataSourceMetadata describing the load
        dataframe: Raw table, one row per CSV line, all cells strings
        total_rows: Number of data rows
    """

    def __init__(self, path: Path | str) -> None:
        """Read the CSV at ``path``.

        Raises:
            LoadFailure: If the file is missing, unreadable or malformed
        """
        self._path = Path(path)
        self._df: pd.DataFrame | None = None
        self._metadata: DataSourceMetadata | None = None

        self._load()

    def _load(self) -> None:
        logger.info(f"Loading mortgage data from {self._path}...")
        start_time = datetime.now()

        try:
            df = pd.read_csv(
                self._path,
                dtype=str,
                keep_default_na=False,
                skipinitialspace=True,
            )
        except (OSError, UnicodeDecodeError, pd.errors.ParserError, pd.errors.EmptyDataError) as e:
            logger.error(f"Failed to load mortgage data: {e}")
            raise LoadFailure(f"Failed to load {self._path}: {e}") from e

        if DATE_COLUMN not in df.columns:
            logger.error(f"{self._path} has no {DATE_COLUMN!r} column")
            raise LoadFailure(f"{self._path} has no {DATE_COLUMN!r} column")

        self._df = df
        self._metadata = DataSourceMetadata(
            path=str(self._path),
            loaded_at=datetime.now().isoformat(),
            total_rows=len(df),
            columns=tuple(df.columns.tolist()),
            coverage={col: int((df[col].str.strip() != "").sum()) for col in df.columns},
        )

        missing = self._metadata.missing_columns()
        if missing:
            logger.warning(f"Columns not present in {self._path}: {missing}")

        elapsed = (datetime.now() - start_time).total_seconds()
        logger.info(f"Loaded {len(df)} rows in {elapsed:.2f}s")

    @property
    def path(self) -> Path:
        """Path of the CSV file."""
        return self._path

    @property
    def metadata(self) -> DataSourceMetadata:
        """Get load metadata."""
        if self._metadata is None:
            raise RuntimeError("Data source not loaded")
        return self._metadata

    @property
    def total_rows(self) -> int:
        """Get number of data rows."""
        return self.metadata.total_rows

    @property
    def dataframe(self) -> pd.DataFrame:
        """Get a copy of the raw table."""
        if self._df is None:
            raise RuntimeError("Data source not loaded")
        return self._df.copy()

    def get_coverage(self, columns: list[str] | None = None) -> dict[str, float]:
        """Get coverage (non-empty fraction) for columns.

        Args:
            columns: Column names (None = all)

        Returns:
            Dict mapping column -> coverage fraction
        """
        coverage = self.metadata.coverage
        total = self.metadata.total_rows

        if columns is None:
            columns = list(coverage.keys())

        if total == 0:
            return {c: 0.0 for c in columns if c in coverage}
        return {c: coverage[c] / total for c in columns if c in coverage}


# Shared instance so the API and CLI read the file once per path
_source_instance: MortgageDataSource | None = None


def get_data_source(
    path: Path | str | None = None,
    force_new: bool = False,
) -> MortgageDataSource:
    """Get the shared data source.

    Args:
        path: CSV path (defaults to the configured ``data_path``)
        force_new: Force re-reading the file

    Returns:
        MortgageDataSource instance
    """
    global _source_instance

    if path is None:
        from mortgage_charts.config import get_settings

        path = get_settings().data_path

    path = Path(path)
    if _source_instance is None or force_new or _source_instance.path != path:
        _source_instance = MortgageDataSource(path)

    return _source_instance
