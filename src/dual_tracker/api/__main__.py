"""Allow running the API as: python -m dual_tracker.api [--config path]."""

import argparse

from dual_tracker.api.runner import main

parser = argparse.ArgumentParser(description="Dual investment tracker API")
parser.add_argument("--config", default=None, help="Path to config.yaml")
args = parser.parse_args()
main(config_path=args.config)
