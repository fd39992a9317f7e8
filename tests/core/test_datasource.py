"""Tests for the mortgage CSV data source."""

from collections.abc import Callable
from pathlib import Path

import pandas as pd
import pytest

from mortgage_charts.core.datasource import (
    DataSourceMetadata,
    MortgageDataSource,
    get_data_source,
)
from mortgage_charts.core.errors import LoadFailure


class TestDataSourceMetadata:
    """Tests for DataSourceMetadata dataclass."""

    def test_to_dict(self) -> None:
        """Test converting metadata to dictionary."""
        metadata = DataSourceMetadata(
            path="data.csv",
            loaded_at="2025-01-15T10:00:00",
            total_rows=3,
            columns=("observation_date", "30yr_fixed_rate"),
            coverage={"observation_date": 3, "30yr_fixed_rate": 2},
        )
        d = metadata.to_dict()
        assert d["total_rows"] == 3
        assert d["columns"] == ["observation_date", "30yr_fixed_rate"]
        assert d["coverage"]["30yr_fixed_rate"] == 2

    def test_missing_columns(self) -> None:
        """Test reporting chart columns absent from the file."""
        metadata = DataSourceMetadata(
            path="data.csv",
            loaded_at="2025-01-15T10:00:00",
            total_rows=0,
            columns=("observation_date", "30yr_fixed_rate"),
        )
        missing = metadata.missing_columns()
        assert "delinquency_rate_interpolated" in missing
        assert "30yr_fixed_rate" not in missing


class TestMortgageDataSource:
    """Tests for loading the CSV."""

    def test_load(
        self,
        raw_df: pd.DataFrame,
        write_csv: Callable[[pd.DataFrame], Path],
    ) -> None:
        """Test loading a complete file."""
        source = MortgageDataSource(write_csv(raw_df))

        assert source.total_rows == len(raw_df)
        assert source.metadata.columns == tuple(raw_df.columns)
        assert source.metadata.missing_columns() == []

    def test_cells_stay_strings(self, tmp_path: Path) -> None:
        """Test that empty cells stay empty strings, never NaN or zero."""
        path = tmp_path / "data.csv"
        path.write_text(
            "observation_date,30yr_fixed_rate,delinquency_rate_interpolated\n"
            "2020-01-01,6.5,\n"
            "2020-01-02,,1.2\n"
        )

        df = MortgageDataSource(path).dataframe

        assert df["30yr_fixed_rate"].tolist() == ["6.5", ""]
        assert df["delinquency_rate_interpolated"].tolist() == ["", "1.2"]

    def test_coverage(self, tmp_path: Path) -> None:
        """Test per-column non-empty counts and fractions."""
        path = tmp_path / "data.csv"
        path.write_text(
            "observation_date,30yr_fixed_rate\n"
            "2020-01-01,6.5\n"
            "2020-01-02,\n"
            "2020-01-03,6.6\n"
            "2020-01-04,\n"
        )

        source = MortgageDataSource(path)

        assert source.metadata.coverage == {"observation_date": 4, "30yr_fixed_rate": 2}
        assert source.get_coverage(["30yr_fixed_rate"]) == {"30yr_fixed_rate": 0.5}

    def test_dataframe_is_a_copy(
        self,
        raw_df: pd.DataFrame,
        write_csv: Callable[[pd.DataFrame], Path],
    ) -> None:
        """Test that callers cannot mutate the loaded table."""
        source = MortgageDataSource(write_csv(raw_df))

        df = source.dataframe
        df.loc[0, "30yr_fixed_rate"] = ""

        assert source.dataframe.loc[0, "30yr_fixed_rate"] != ""

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test that a missing file raises LoadFailure."""
        with pytest.raises(LoadFailure):
            MortgageDataSource(tmp_path / "nope.csv")

    def test_empty_file(self, tmp_path: Path) -> None:
        """Test that an empty file raises LoadFailure."""
        path = tmp_path / "empty.csv"
        path.write_text("")

        with pytest.raises(LoadFailure):
            MortgageDataSource(path)

    def test_no_date_column(self, tmp_path: Path) -> None:
        """Test that a file without observation_date is malformed."""
        path = tmp_path / "bad.csv"
        path.write_text("date,rate\n2020-01-01,6.5\n")

        with pytest.raises(LoadFailure, match="observation_date"):
            MortgageDataSource(path)

    def test_load_failure_user_message(self) -> None:
        """Test the generic message shown to users."""
        assert LoadFailure.user_message == "Error loading data. Check the logs for details."


class TestGetDataSource:
    """Tests for the shared data source."""

    def test_returns_same_instance(
        self,
        raw_df: pd.DataFrame,
        write_csv: Callable[[pd.DataFrame], Path],
    ) -> None:
        """Test that the file is read once per path."""
        path = write_csv(raw_df)

        assert get_data_source(path) is get_data_source(path)

    def test_force_new(
        self,
        raw_df: pd.DataFrame,
        write_csv: Callable[[pd.DataFrame], Path],
    ) -> None:
        """Test forcing a re-read."""
        path = write_csv(raw_df)
        first = get_data_source(path)

        assert get_data_source(path, force_new=True) is not first

    def test_new_path_reloads(
        self,
        make_raw: Callable[..., pd.DataFrame],
        write_csv: Callable[[pd.DataFrame, str], Path],
    ) -> None:
        """Test that switching paths loads the new file."""
        first = get_data_source(write_csv(make_raw(20), "a.csv"))
        second = get_data_source(write_csv(make_raw(30), "b.csv"))

        assert first.total_rows == 20
        assert second.total_rows == 30

    def test_default_path_from_settings(
        self,
        raw_df: pd.DataFrame,
        write_csv: Callable[[pd.DataFrame], Path],
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Test that the configured data_path is used by default."""
        from mortgage_charts.config import get_settings

        path = write_csv(raw_df)
        monkeypatch.setattr(get_settings(), "data_path", path)

        assert get_data_source().path == path
