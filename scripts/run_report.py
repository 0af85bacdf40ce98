#!/usr/bin/env python
"""
Run CO2 Report
==============
Run the full analysis from a source checkout.

Usage:
    python scripts/run_report.py [--config CONFIG_PATH] [--run-id RUN_ID]

Examples:
    # Default run on the bundled series
    python scripts/run_report.py

    # Two-year forecast with the state-space model
    python scripts/run_report.py --horizon 24 --model unobserved_components

    # Use custom config
    python scripts/run_report.py --config configs/default.yaml
"""
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from co2_analysis.cli import main


if __name__ == '__main__':
    sys.exit(main())
