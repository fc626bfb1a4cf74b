"""Logging configuration."""

import logging
from typing import Optional

ROOT_LOGGER = "shipper_clean"


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a configured logger instance."""
    logger = logging.getLogger(name or ROOT_LOGGER)

    # Handlers live on the package logger only, children propagate to it
    root = logging.getLogger(ROOT_LOGGER)
    if not root.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        handler.setFormatter(formatter)
        root.addHandler(handler)
        root.setLevel(logging.WARNING)

    return logger


def set_verbosity(verbose: bool) -> None:
    """Switch the package logger between WARNING and DEBUG."""
    get_logger().setLevel(logging.DEBUG if verbose else logging.WARNING)
