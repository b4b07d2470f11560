"""Node tree for programmatically built XML documents.

Key Components:
    XmlNode: Base node type with ordered children and a weak parent link
    TreeValidator: Audits a subtree for broken parent/child invariants
"""

from .node import XmlNode
from .validation import (
    IssueSeverity,
    TreeValidator,
    ValidationIssue,
    ValidationIssueType,
    ValidationResult,
)

__all__ = [
    "XmlNode",
    "IssueSeverity",
    "TreeValidator",
    "ValidationIssue",
    "ValidationIssueType",
    "ValidationResult",
]
