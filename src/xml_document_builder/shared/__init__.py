"""Shared utilities for XML node trees.

This module provides the error hierarchy, configuration objects and logging
helpers used by every other layer.
"""

from .config import (
    ConfigError,
    ConfigValidationError,
    TreeConfig,
    configure,
    get_config,
    reset_config,
)
from .errors import (
    CyclicInsertionError,
    IndexOutOfRangeError,
    InvalidArgumentError,
    InvalidIndexTypeError,
    InvalidNodeError,
    XmlNodeError,
)
from .logging import (
    CorrelationLogger,
    get_logger,
)

__all__ = [
    "ConfigError",
    "ConfigValidationError",
    "TreeConfig",
    "configure",
    "get_config",
    "reset_config",
    "CyclicInsertionError",
    "IndexOutOfRangeError",
    "InvalidArgumentError",
    "InvalidIndexTypeError",
    "InvalidNodeError",
    "XmlNodeError",
    "CorrelationLogger",
    "get_logger",
]
