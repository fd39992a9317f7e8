"""Pytest configuration and fixtures for mortgage-charts tests."""

from collections.abc import Callable
from pathlib import Path

import numpy as np
import pandas as pd
import pytest

from mortgage_charts.core import datasource


def _fmt(values: np.ndarray) -> list[str]:
    return [f"{v:.3f}" for v in values]


@pytest.fixture
def make_raw() -> Callable[..., pd.DataFrame]:
    """Return a factory for raw (all-string) mortgage tables.

    Delinquency is built to rise with the spread so the correlation is
    clearly positive.
    """

    def _make(n: int = 40, seed: int = 42) -> pd.DataFrame:
        rng = np.random.default_rng(seed)
        dates = pd.date_range("2020-01-01", periods=n, freq="D")

        conforming = 3.0 + rng.normal(0, 0.2, n)
        spread = 0.5 + rng.normal(0, 0.15, n)
        fixed_30 = conforming + spread
        fixed_15 = fixed_30 - 0.7 + rng.normal(0, 0.05, n)
        delinquency = 2.0 + 1.5 * spread + rng.normal(0, 0.05, n)

        return pd.DataFrame({
            "observation_date": dates.strftime("%Y-%m-%d"),
            "30yr_fixed_rate": _fmt(fixed_30),
            "15yr_fixed_rate": _fmt(fixed_15),
            "30yr_conforming_fico740": _fmt(conforming),
            "delinquency_rate_interpolated": _fmt(delinquency),
        })

    return _make


@pytest.fixture
def raw_df(make_raw: Callable[..., pd.DataFrame]) -> pd.DataFrame:
    """Return a 40-row raw table with every field present."""
    return make_raw()


@pytest.fixture
def constant_spread_df() -> pd.DataFrame:
    """Return a raw table where every row has the same spread (0.5)."""
    n = 12
    conforming = [3.0 + 0.25 * i for i in range(n)]
    return pd.DataFrame({
        "observation_date": pd.date_range("2021-01-01", periods=n, freq="D").strftime("%Y-%m-%d"),
        "30yr_fixed_rate": [f"{c + 0.5:.2f}" for c in conforming],
        "15yr_fixed_rate": [f"{c - 0.25:.2f}" for c in conforming],
        "30yr_conforming_fico740": [f"{c:.2f}" for c in conforming],
        "delinquency_rate_interpolated": [f"{2.0 + 0.1 * i:.2f}" for i in range(n)],
    })


@pytest.fixture
def write_csv(tmp_path: Path) -> Callable[[pd.DataFrame, str], Path]:
    """Return a helper that writes a raw table to a CSV under tmp_path."""

    def _write(df: pd.DataFrame, name: str = "merged_mortgage_data.csv") -> Path:
        path = tmp_path / name
        df.to_csv(path, index=False)
        return path

    return _write


@pytest.fixture(autouse=True)
def reset_data_source(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clear the shared data source between tests."""
    monkeypatch.setattr(datasource, "_source_instance", None)
