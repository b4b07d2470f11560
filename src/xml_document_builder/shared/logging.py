"""Structured logging for XML node trees.

Every component logs through a ``CorrelationLogger`` so records from node
mutations, tree audits and memory checks carry the component that emitted
them and the correlation ID of the document build they belong to. All
loggers live under the ``xml_document_builder`` package logger, whose level
is driven by ``TreeConfig.logging_level``.
"""

import logging
from typing import Any, Dict, Optional

PACKAGE_LOGGER_NAME = "xml_document_builder"


class CorrelationLogger:
    """Component logger that tags records with build session information."""

    def __init__(
        self,
        name: str,
        correlation_id: Optional[str] = None,
        component: Optional[str] = None
    ) -> None:
        """Initialize correlation logger.

        Args:
            name: Module name under the package logger (typically __name__)
            correlation_id: Document build the records belong to
            component: Component tag, defaults to the last segment of name
        """
        self.logger = logging.getLogger(name)
        self.correlation_id = correlation_id
        self.component = component or name.rsplit(".", 1)[-1]

    def is_enabled_for(self, level: int) -> bool:
        """Check whether a record at ``level`` would be emitted."""
        return self.logger.isEnabledFor(level)

    def log(self, level: int, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        """Log ``message`` with component and correlation ID merged into ``extra``."""
        if not self.logger.isEnabledFor(level):
            return

        tagged: Dict[str, Any] = {
            "component": self.component,
            "correlation_id": self.correlation_id,
        }
        if extra:
            tagged.update(extra)
        self.logger.log(level, message, extra=tagged)

    def debug(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        self.log(logging.DEBUG, message, extra)

    def info(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        self.log(logging.INFO, message, extra)

    def warning(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        self.log(logging.WARNING, message, extra)


def get_logger(
    name: str,
    correlation_id: Optional[str] = None,
    component: Optional[str] = None
) -> CorrelationLogger:
    """Get a component logger for a node tree module.

    Args:
        name: Module name (typically __name__)
        correlation_id: Document build the records belong to
        component: Component tag such as ``"xml_node"``

    Returns:
        CorrelationLogger instance
    """
    return CorrelationLogger(name, correlation_id, component)


def set_package_level(level: str) -> None:
    """Apply a level name such as ``"DEBUG"`` to the package logger."""
    logging.getLogger(PACKAGE_LOGGER_NAME).setLevel(level)
