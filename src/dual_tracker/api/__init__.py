"""HTTP surface for the analytics engine."""
