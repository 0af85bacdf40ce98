"""
Tests for series loading and validation.
"""
import pytest
import numpy as np
import pandas as pd

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from co2_analysis.core import (
    DataConfig, PipelineError, InvalidCadence, LengthMismatch, MissingValue,
    NonMonotoneTimestamps, NonPositiveValue
)
from co2_analysis.data_io import (
    SeriesSchema, build_series_table, load_and_prepare_series, load_bundled_values,
    load_series_csv
)
from co2_analysis.quality import generate_quality_report, validate_series_table


class TestBundledSeries:
    """Tests for the packaged Mauna Loa series."""

    def test_length_matches_declaration(self, co2_table):
        assert len(co2_table) == 468

    def test_columns_and_edges(self, co2_table):
        assert list(co2_table.columns) == ['ds', 'y']
        assert co2_table['ds'].iloc[0] == pd.Timestamp('1959-01-01')
        assert co2_table['ds'].iloc[-1] == pd.Timestamp('1997-12-01')
        assert co2_table['y'].iloc[0] == pytest.approx(315.42)
        assert co2_table['y'].iloc[-1] == pytest.approx(364.34)

    def test_monthly_spacing_without_gaps(self, co2_table):
        ds = pd.DatetimeIndex(co2_table['ds'])
        months = ds.year * 12 + ds.month
        assert (np.diff(months) == 1).all()
        assert (ds.day == 1).all()

    def test_no_missing_values(self, co2_table):
        assert not co2_table['y'].isna().any()

    def test_metadata(self):
        _, metadata = load_and_prepare_series()
        assert metadata['source'] == 'bundled'
        assert metadata['n_rows'] == 468
        assert metadata['date_range'] == {'start': '1959-01-01', 'end': '1997-12-01'}


class TestBuildSeriesTable:
    """Tests for turning bare values into a SeriesTable."""

    @pytest.fixture
    def schema(self):
        return SeriesSchema(name='test', start_year=2000, start_month=11, length=4)

    def test_stamps_cross_year_boundary(self, schema):
        table = build_series_table([1.0, 2.0, 3.0, 4.0], schema)
        assert list(table['ds']) == list(pd.to_datetime(
            ['2000-11-01', '2000-12-01', '2001-01-01', '2001-02-01']
        ))

    def test_invalid_cadence(self):
        schema = SeriesSchema(cadence='quarterly', length=2)
        with pytest.raises(InvalidCadence):
            build_series_table([1.0, 2.0], schema)

    def test_length_mismatch(self, schema):
        with pytest.raises(LengthMismatch) as exc_info:
            build_series_table([1.0, 2.0, 3.0], schema)
        assert exc_info.value.context == {'declared': 4, 'actual': 3}

    def test_empty_values(self):
        with pytest.raises(LengthMismatch):
            build_series_table([], SeriesSchema(length=None))

    def test_missing_value_is_not_imputed(self, schema):
        with pytest.raises(MissingValue) as exc_info:
            build_series_table([1.0, None, 3.0, np.nan], schema)
        assert exc_info.value.context['positions'] == [1, 3]

    def test_non_positive_value(self, schema):
        with pytest.raises(NonPositiveValue):
            build_series_table([1.0, 0.0, 3.0, 4.0], schema)

    def test_length_taken_from_data(self):
        table = build_series_table([5.0, 6.0], SeriesSchema(length=None))
        assert len(table) == 2

    def test_errors_are_value_errors_naming_component(self, schema):
        with pytest.raises(ValueError) as exc_info:
            build_series_table([1.0], schema)
        assert isinstance(exc_info.value, PipelineError)
        assert str(exc_info.value).startswith('[Series Loader]')
        assert "'actual': 1" in str(exc_info.value)


class TestValidateSeriesTable:
    """Tests for the SeriesTable invariant checks."""

    def test_gap_detected(self):
        table = pd.DataFrame({
            'ds': pd.to_datetime(['2000-01-01', '2000-02-01', '2000-04-01']),
            'y': [1.0, 2.0, 3.0]
        })
        with pytest.raises(NonMonotoneTimestamps):
            validate_series_table(table)

    def test_decreasing_detected(self):
        table = pd.DataFrame({
            'ds': pd.to_datetime(['2000-02-01', '2000-01-01']),
            'y': [1.0, 2.0]
        })
        with pytest.raises(NonMonotoneTimestamps):
            validate_series_table(table)

    def test_off_anchor_detected(self):
        table = pd.DataFrame({
            'ds': pd.to_datetime(['2000-01-01', '2000-02-15']),
            'y': [1.0, 2.0]
        })
        with pytest.raises(NonMonotoneTimestamps):
            validate_series_table(table)

    def test_zero_value_detected(self, co2_table):
        table = co2_table.copy()
        table.loc[5, 'y'] = 0.0
        with pytest.raises(NonPositiveValue) as info:
            validate_series_table(table)
        assert info.value.context['positions'] == [5]

    def test_empty_table_detected(self, co2_table):
        with pytest.raises(LengthMismatch):
            validate_series_table(co2_table.iloc[:0])

    def test_quality_report(self, co2_table):
        report = generate_quality_report(co2_table)
        assert report['summary']['n_rows'] == 468
        assert report['temporal_gaps'] == 0
        assert report['outliers']['n_outliers'] == 0


class TestCsvInput:
    """Tests for user-supplied CSV files."""

    def test_roundtrip_through_config(self, tmp_path):
        path = tmp_path / 'series.csv'
        pd.DataFrame({'ppm': [400.1, 401.2, 402.3]}).to_csv(path, index=False)

        config = DataConfig(
            input_path=str(path), value_column='ppm',
            start_year=2015, start_month=6, expected_length=3
        )
        table, metadata = load_and_prepare_series(config)

        assert metadata['source'] == str(path)
        assert table['ds'].iloc[-1] == pd.Timestamp('2015-08-01')
        assert table['y'].tolist() == pytest.approx([400.1, 401.2, 402.3])

    def test_unparseable_cell_becomes_missing(self, tmp_path):
        path = tmp_path / 'series.csv'
        path.write_text("co2\n315.1\nNA\n316.0\n")

        values = load_series_csv(path)
        with pytest.raises(MissingValue):
            build_series_table(values, SeriesSchema(length=3))

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_series_csv(tmp_path / 'absent.csv')

    def test_missing_column(self, tmp_path):
        path = tmp_path / 'series.csv'
        path.write_text("value\n1.0\n")
        with pytest.raises(ValueError):
            load_series_csv(path, column='co2')

    def test_bundled_values(self):
        values = load_bundled_values()
        assert len(values) == 468
        assert values.name == 'co2'
