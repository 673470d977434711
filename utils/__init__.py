"""
Utility modules for the forecast engine.
"""

from .config import Config
from .log_config import configure_logging

__all__ = ["Config", "configure_logging"]
