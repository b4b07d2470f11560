"""XML Document Builder.

The structural core for building XML documents programmatically: an ordered
node tree whose parent/child links stay consistent under any sequence of
insertions and removals. Concrete node kinds subclass ``XmlNode`` and provide
their own rendering.
"""

__version__ = "0.1.0"
__author__ = "XML Document Builder Team"

from .nodes import TreeValidator, XmlNode
from .shared.config import TreeConfig, configure, get_config
from .shared.errors import (
    CyclicInsertionError,
    IndexOutOfRangeError,
    InvalidArgumentError,
    InvalidIndexTypeError,
    InvalidNodeError,
    XmlNodeError,
)

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Node tree
    "XmlNode",
    "TreeValidator",

    # Configuration
    "TreeConfig",
    "configure",
    "get_config",

    # Errors
    "XmlNodeError",
    "InvalidArgumentError",
    "InvalidNodeError",
    "InvalidIndexTypeError",
    "IndexOutOfRangeError",
    "CyclicInsertionError",
]
