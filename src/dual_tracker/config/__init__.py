"""Configuration system."""

from dual_tracker.config.loader import load_config
from dual_tracker.config.schema import AppConfig

__all__ = ["AppConfig", "load_config"]
