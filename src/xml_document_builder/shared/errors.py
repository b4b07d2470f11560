"""Exception types raised by XML node tree operations.

Every argument check happens before a tree is touched, so catching any of
these errors guarantees the tree is unchanged.
"""

from typing import Any, Optional


class XmlNodeError(Exception):
    """Base exception for node tree errors."""


class InvalidArgumentError(XmlNodeError, ValueError):
    """Exception raised when a node operation receives an unusable argument."""

    def __init__(self, message: str, argument_name: Optional[str] = None,
                 value: Any = None):
        super().__init__(message)
        self.argument_name = argument_name
        self.value = value


class InvalidNodeError(InvalidArgumentError, TypeError):
    """Argument that should be an XmlNode is something else."""


class InvalidIndexTypeError(InvalidArgumentError, TypeError):
    """Index argument is missing or not an integer."""


class IndexOutOfRangeError(InvalidArgumentError, IndexError):
    """Index argument falls outside the inclusive bounds of the operation."""

    def __init__(self, message: str, argument_name: Optional[str] = None,
                 value: Any = None, lower: int = 0, upper: int = 0):
        super().__init__(message, argument_name, value)
        self.lower = lower
        self.upper = upper


class CyclicInsertionError(InvalidArgumentError):
    """Insertion would make a node its own ancestor."""
