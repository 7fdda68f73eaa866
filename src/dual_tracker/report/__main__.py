"""Allow running the report as: python -m dual_tracker.report FILE... [--config path]."""

from dual_tracker.report.cli import main

raise SystemExit(main())
