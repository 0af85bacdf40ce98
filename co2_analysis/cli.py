#!/usr/bin/env python
"""
CO2 Report
==========
Load the monthly Mauna Loa series, forecast it, fit the period regressions,
aggregate the seasonal cycle and write the report.

Usage:
    co2-report [--config CONFIG_PATH] [--horizon N] [--model NAME]
    python -m co2_analysis.cli [...]

Outputs:
    - outputs/runs/<run_id>/figures/*.png, forecast.html
    - outputs/runs/<run_id>/tables/report.json, quality_report.json
    - outputs/runs/<run_id>/configs_snapshot/config.yaml
    - outputs/runs/<run_id>/logs/<run_id>.log
"""
import argparse
import shutil
import sys
import traceback
from pathlib import Path

from .core import (
    Config, LogContext, create_run_directories, setup_logging, set_seed, save_json_numpy
)
from .features.calendar import FREQUENCIES
from .models.base import ModelRegistry
from .pipeline import run_analysis, render_outputs, result_to_dict
from .reporting.report import render_text_report


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description='CO2 concentration analysis report')
    parser.add_argument('--config', type=str, default=None,
                        help='Path to configuration file')
    parser.add_argument('--run-id', type=str, default=None,
                        help='Run ID to use')
    parser.add_argument('--horizon', type=int, default=None,
                        help='Number of future periods to forecast')
    parser.add_argument('--freq', type=str, default=None, choices=sorted(FREQUENCIES),
                        help='Horizon step frequency')
    parser.add_argument('--model', type=str, default=None, choices=ModelRegistry.list_models(),
                        help='Forecasting model')
    parser.add_argument('--output-dir', type=str, default=None,
                        help='Base output directory')
    parser.add_argument('--no-interactive', action='store_true',
                        help='Skip the interactive HTML figure')
    parser.add_argument('--log-level', type=str, default='INFO',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='Logging level')
    return parser.parse_args(argv)


def build_config(args) -> Config:
    """Load the configuration file (if any) and apply command-line overrides."""
    if args.config:
        config = Config.load(args.config)
    else:
        config = Config()

    if args.run_id:
        config.run_id = args.run_id
    if args.horizon is not None:
        config.horizon.periods = args.horizon
    if args.freq:
        config.horizon.freq = args.freq
    if args.model:
        config.forecast.model = args.model
    if args.output_dir:
        config.output.base_dir = args.output_dir
    if args.no_interactive:
        config.output.interactive = False
    return config


def main(argv=None) -> int:
    args = parse_args(argv)
    config = build_config(args)

    set_seed(config.seed)
    dirs = create_run_directories(config)

    logger = setup_logging(
        log_dir=dirs['logs'],
        run_id=config.run_id,
        level=args.log_level
    )

    logger.info("=" * 60)
    logger.info("CO2 Report")
    logger.info("=" * 60)
    logger.info(f"Run ID: {config.run_id}")
    logger.info(f"Input: {config.data.input_path or 'bundled'}")
    logger.info(f"Model: {config.forecast.model}, horizon: {config.horizon.periods} {config.horizon.freq}")

    config.save(dirs['configs_snapshot'] / 'config.yaml')

    # Figures are rendered aside and only moved in once the whole run succeeds
    staging = Path(dirs['root']) / '.figures_staging'
    shutil.rmtree(staging, ignore_errors=True)

    try:
        result = run_analysis(config)
        staged = render_outputs(result, config, staging)

        with LogContext(logger, "Report Writer"):
            figures = {}
            for name, path in staged.items():
                figures[name] = Path(dirs['figures']) / path.name
                shutil.move(str(path), str(figures[name]))

            report = result_to_dict(result)
            report['figures'] = {name: str(path) for name, path in figures.items()}
            save_json_numpy(result.quality, dirs['tables'] / 'quality_report.json')
            save_json_numpy(report, dirs['tables'] / 'report.json')
    except Exception as e:
        # The failing component has already been logged at ERROR
        logger.debug(f"Run failed: {e}")
        logger.debug(traceback.format_exc())
        return 1
    finally:
        shutil.rmtree(staging, ignore_errors=True)

    print(render_text_report(result))

    logger.info("=" * 60)
    logger.info("Report complete")
    logger.info(f"Outputs: {Path(dirs['root']).resolve()}")
    logger.info("=" * 60)
    return 0


if __name__ == '__main__':
    sys.exit(main())
