"""
Logging utilities for the Check Invoice UI.

Provides a logger factory that creates configured Python loggers with the
same format across the customer page, the admin page and the service layer.
"""

import logging
import os
from pathlib import Path

# Default log level from environment or INFO
_LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def logger(name: str) -> logging.Logger:
    """
    Create and configure a logger for the given name.

    If name is a file path (e.g., __file__), the module stem is used so log
    lines read `workflow` instead of the absolute path.

    Args:
        name: Logger name or __file__ path.

    Returns:
        Configured logging.Logger instance.
    """
    if "/" in name or "\\" in name:
        name = Path(name).stem

    log = logging.getLogger(f"check_invoice_ui.{name}")

    # Only configure if not already configured
    if not log.handlers:
        log.setLevel(getattr(logging, _LOG_LEVEL, logging.INFO))
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        log.addHandler(handler)

    return log
