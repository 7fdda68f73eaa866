"""Dual investment tracker — analytics and cost-basis ledger engine."""

__version__ = "0.1.0"
