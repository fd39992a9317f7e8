"""Row completeness filtering for the mortgage data set.

A row is usable for an analysis only when every field that analysis needs
is present and parses as a finite number. Incomplete rows are dropped
outright: no interpolation and no imputation. The filter reports how many
rows it removed but never aborts on its own; callers decide whether the
survivors are enough via ``require_minimum_rows``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

import numpy as np
import pandas as pd

from mortgage_charts.core.errors import InsufficientData

logger = logging.getLogger(__name__)


@dataclass
class FilterResult:
    """Outcome of a completeness filter.

    Attributes:
        data: Surviving rows in input order, required fields as floats
        dropped: Number of rows removed
        required_fields: Fields every surviving row has
    """

    data: pd.DataFrame
    dropped: int
    required_fields: tuple[str, ...] = ()

    @property
    def count(self) -> int:
        """Number of surviving rows."""
        return len(self.data)

    @property
    def total(self) -> int:
        """Number of rows before filtering."""
        return self.count + self.dropped

    def to_records(self) -> list[dict[str, Any]]:
        """Surviving rows as a list of dictionaries."""
        return self.data.to_dict(orient="records")

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary (excluding row data)."""
        return {
            "kept": self.count,
            "dropped": self.dropped,
            "required_fields": list(self.required_fields),
        }


def _to_frame(rows: pd.DataFrame | Iterable[Mapping[str, Any]]) -> pd.DataFrame:
    if isinstance(rows, pd.DataFrame):
        return rows
    return pd.DataFrame.from_records(list(rows))


def filter_complete(
    rows: pd.DataFrame | Iterable[Mapping[str, Any]],
    required_fields: Iterable[str],
) -> FilterResult:
    """Keep rows whose required fields are all present finite numbers.

    Empty strings, unparseable text, NaN and infinities all count as
    missing. A required field absent from the table altogether fails every
    row.

    Args:
        rows: DataFrame or iterable of mappings (column name -> value)
        required_fields: Field names every kept row must carry

    Returns:
        FilterResult with the surviving rows and the dropped count

    Example:
        >>> result = filter_complete(
        ...     [{"a": 1, "b": 2}, {"a": "", "b": 2}, {"a": 3, "b": ""}],
        ...     {"a", "b"},
        ... )
        >>> result.to_records(), result.dropped
        ([{'a': 1.0, 'b': 2.0}], 2)
    """
    df = _to_frame(rows)
    fields = tuple(required_fields)

    if df.empty:
        return FilterResult(data=df.copy(), dropped=0, required_fields=fields)

    mask = pd.Series(True, index=df.index)
    parsed: dict[str, pd.Series] = {}

    for name in fields:
        if name not in df.columns:
            logger.warning(f"Required field {name!r} not found; every row fails")
            mask &= False
            continue
        values = pd.to_numeric(df[name], errors="coerce").astype(float)
        parsed[name] = values
        mask &= pd.Series(np.isfinite(values.to_numpy()), index=df.index)

    kept = df.loc[mask].copy()
    for name, values in parsed.items():
        kept[name] = values.loc[mask]

    dropped = int((~mask).sum())
    if dropped:
        logger.info(
            f"Dropped {dropped} of {len(df)} rows missing one of {sorted(fields)}"
        )

    return FilterResult(
        data=kept.reset_index(drop=True),
        dropped=dropped,
        required_fields=fields,
    )


def require_minimum_rows(
    result: FilterResult,
    minimum: int,
    description: str = "",
) -> FilterResult:
    """Raise InsufficientData if fewer than ``minimum`` rows survived.

    Args:
        result: Output of filter_complete
        minimum: Smallest acceptable number of rows
        description: Human-readable list of the required fields

    Returns:
        The same FilterResult, for chaining
    """
    if result.count < minimum:
        logger.warning(
            f"Insufficient data: {result.count} valid rows, {minimum} required"
        )
        raise InsufficientData(result.count, minimum, description)
    return result
