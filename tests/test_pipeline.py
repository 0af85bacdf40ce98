"""
Tests for the end-to-end pipeline and the command-line entry point.
"""
import json
import logging
import pytest

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from co2_analysis import cli
from co2_analysis.core import (
    Config, EmptySubset, LengthMismatch, NonPositiveValue, RegressionWindow
)
from co2_analysis.models import StateSpaceForecaster
from co2_analysis.pipeline import run_analysis, render_outputs, result_to_dict


class TestRunAnalysis:
    """Tests for the component sequence."""

    @pytest.fixture
    def result(self, stub_forecaster):
        return run_analysis(Config(), forecaster=stub_forecaster)

    def test_all_outputs_present(self, result):
        assert len(result.series) == 468
        assert len(result.future) == 480
        assert len(result.forecast) == 480
        assert set(result.regressions) == {'early', 'late'}
        assert result.month_year.shape == (12, 39)
        assert len(result.differences) == 468
        assert len(result.annual_means) == 39

    def test_summaries(self, result):
        assert result.series_summary.name == 'y'
        assert result.forecast_summary.name == 'yhat'
        assert result.forecast_summary.n == 480
        assert result.fit_metrics.n_samples == 468

    def test_result_to_dict_is_json_ready(self, result):
        record = result_to_dict(result)
        text = json.dumps(record, default=str)

        assert record['slope_ratio'] > 2
        assert len(record['horizon_forecast']) == 12
        assert record['horizon_forecast'][0]['ds'] == '1998-01-01T00:00:00'
        assert 'slope_ppm_per_day' in text

    def test_in_memory_table(self, co2_table, stub_forecaster):
        config = Config()
        config.horizon.periods = 0
        config.regression.windows = [
            RegressionWindow('first', '1959-01-01', '1960-12-01'),
            RegressionWindow('last', '1967-01-01', '1968-12-01')
        ]
        result = run_analysis(config, table=co2_table.iloc[:120], forecaster=stub_forecaster)

        assert result.metadata['source'] == 'in-memory'
        assert len(result.forecast) == 120

    def test_in_memory_table_rejects_zero(self, co2_table, stub_forecaster):
        table = co2_table.copy()
        table.loc[5, 'y'] = 0.0
        with pytest.raises(NonPositiveValue):
            run_analysis(Config(), table=table, forecaster=stub_forecaster)

    def test_in_memory_table_rejects_empty(self, co2_table, stub_forecaster):
        with pytest.raises(LengthMismatch):
            run_analysis(Config(), table=co2_table.iloc[:0], forecaster=stub_forecaster)

    def test_fail_fast_on_forecaster(self, failing_forecaster, caplog):
        caplog.set_level(logging.INFO, logger='co2_analysis')
        with pytest.raises(RuntimeError):
            run_analysis(Config(), forecaster=failing_forecaster)
        assert 'Failed: Forecast Driver' in caplog.text
        assert 'Period Regressor' not in caplog.text

    def test_fail_fast_on_empty_window(self, stub_forecaster):
        config = Config()
        config.regression.windows = [RegressionWindow('future', '2005-01-01', '2006-01-01')]
        with pytest.raises(EmptySubset):
            run_analysis(config, forecaster=stub_forecaster)

    def test_state_space_model(self, co2_table):
        config = Config()
        result = run_analysis(config, table=co2_table, forecaster=StateSpaceForecaster())

        forecast = result.forecast
        assert len(forecast) == 480
        assert not forecast['yhat_lower'].isna().any()
        assert not forecast['yhat_upper'].isna().any()
        assert (forecast['yhat_lower'] <= forecast['yhat']).all()
        assert (forecast['yhat'] <= forecast['yhat_upper']).all()


class TestRenderOutputs:
    """Tests for figure rendering."""

    def test_figures_written(self, stub_forecaster, tmp_path):
        config = Config()
        result = run_analysis(config, forecaster=stub_forecaster)
        paths = render_outputs(result, config, tmp_path)

        expected = {
            'forecast', 'forecast_components', 'regression_early', 'regression_late',
            'month_year', 'monthly_difference', 'forecast_interactive'
        }
        assert set(paths) == expected
        for path in paths.values():
            assert path.exists()
            assert path.stat().st_size > 0

    def test_interactive_disabled(self, stub_forecaster, tmp_path):
        config = Config()
        config.output.interactive = False
        result = run_analysis(config, forecaster=stub_forecaster)
        paths = render_outputs(result, config, tmp_path)

        assert 'forecast_interactive' not in paths
        assert not (tmp_path / 'forecast.html').exists()


class TestCli:
    """Tests for the command-line entry point."""

    @pytest.fixture(autouse=True)
    def reset_logging(self):
        yield
        logger = logging.getLogger('co2_analysis')
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()

    def test_overrides(self):
        args = cli.parse_args([
            '--horizon', '24', '--freq', 'weekly', '--model', 'unobserved_components',
            '--output-dir', 'elsewhere', '--no-interactive', '--run-id', 'r1'
        ])
        config = cli.build_config(args)

        assert config.horizon.periods == 24
        assert config.horizon.freq == 'weekly'
        assert config.forecast.model == 'unobserved_components'
        assert config.output.base_dir == 'elsewhere'
        assert config.output.interactive is False
        assert config.run_id == 'r1'

    def test_end_to_end(self, tmp_path, capsys):
        status = cli.main([
            '--model', 'unobserved_components', '--output-dir', str(tmp_path),
            '--run-id', 'test_run', '--no-interactive'
        ])
        assert status == 0

        run_dir = tmp_path / 'runs' / 'test_run'
        assert (run_dir / 'configs_snapshot' / 'config.yaml').exists()
        assert (run_dir / 'logs' / 'test_run.log').exists()
        assert (run_dir / 'figures' / 'forecast.png').exists()

        with open(run_dir / 'tables' / 'report.json') as f:
            report = json.load(f)
        assert report['series_summary']['n'] == 468
        assert report['regressions']['late']['n'] == 60

        out = capsys.readouterr().out
        assert 'CO2 CONCENTRATION ANALYSIS' in out
        assert 'ppm/day' in out

    def test_failure_exit_status(self, tmp_path, capsys):
        status = cli.main([
            '--model', 'unobserved_components', '--output-dir', str(tmp_path),
            '--run-id', 'bad_run', '--freq', 'daily'
        ])
        assert status == 1
        assert not (tmp_path / 'runs' / 'bad_run' / 'tables' / 'report.json').exists()
        assert capsys.readouterr().out == ''

    def test_single_error_line_on_failure(self, tmp_path, caplog):
        caplog.set_level(logging.DEBUG, logger='co2_analysis')
        status = cli.main([
            '--model', 'unobserved_components', '--output-dir', str(tmp_path),
            '--run-id', 'bad_run', '--freq', 'daily'
        ])
        assert status == 1

        errors = [r for r in caplog.records if r.levelno >= logging.ERROR]
        assert len(errors) == 1
        assert errors[0].getMessage().startswith('Failed: Forecast Driver')

    def test_render_failure_leaves_no_artifacts(self, tmp_path, capsys, monkeypatch):
        def partial_render(result, output_dir, **kwargs):
            Path(output_dir).mkdir(parents=True, exist_ok=True)
            (Path(output_dir) / 'forecast.png').write_bytes(b'partial')
            raise RuntimeError("renderer crashed")

        monkeypatch.setattr('co2_analysis.pipeline.create_all_plots', partial_render)
        status = cli.main([
            '--model', 'unobserved_components', '--output-dir', str(tmp_path),
            '--run-id', 'render_run'
        ])
        assert status == 1

        run_dir = tmp_path / 'runs' / 'render_run'
        assert list((run_dir / 'tables').iterdir()) == []
        assert list((run_dir / 'figures').iterdir()) == []
        assert not (run_dir / '.figures_staging').exists()
        assert (run_dir / 'configs_snapshot' / 'config.yaml').exists()
        assert capsys.readouterr().out == ''
