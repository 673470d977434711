"""
Logging setup for the service and CLI entrypoints.

Library modules only create module-level loggers; handlers are installed
here, once, by whichever entrypoint is running.
"""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Replace root handlers with a single stream handler."""
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.handlers = [handler]
