"""Structural auditing for XML node trees.

The node API keeps trees consistent on its own. ``TreeValidator`` exists for
code that reaches past that API (deserializers, tree surgery in tests, node
kinds that manipulate internals) and wants to confirm a subtree still has
bidirectional parent links, no shared children and no cycles.
"""

import time
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, FrozenSet, List, Optional, Tuple

from xml_document_builder.nodes.node import XmlNode
from xml_document_builder.shared.config import get_config
from xml_document_builder.shared.errors import InvalidNodeError
from xml_document_builder.shared.logging import get_logger


class ValidationIssueType(Enum):
    """Types of structural issues that can be detected."""

    PARENT_LINK = "parent_link"
    DUPLICATE_CHILD = "duplicate_child"
    CYCLE = "cycle"
    DEPTH_LIMIT = "depth_limit"


class IssueSeverity(Enum):
    """Severity levels for validation issues."""

    WARNING = auto()    # Legal tree, but outside configured limits
    ERROR = auto()      # Broken invariant
    CRITICAL = auto()   # Tree cannot be walked safely


@dataclass
class ValidationIssue:
    """Single validation issue with location information."""

    issue_type: ValidationIssueType
    severity: IssueSeverity
    message: str
    node_path: str = "/"
    details: Optional[Dict[str, Any]] = None

    def __post_init__(self) -> None:
        """Validate issue data."""
        if not self.message:
            raise ValueError("Validation issue message cannot be empty")


@dataclass
class ValidationResult:
    """Findings of a single validation run."""

    success: bool = True
    issues: List[ValidationIssue] = field(default_factory=list)
    nodes_validated: int = 0
    processing_time_ms: float = 0.0

    @property
    def error_count(self) -> int:
        """Get number of error-level issues."""
        return len([
            issue for issue in self.issues
            if issue.severity in (IssueSeverity.ERROR, IssueSeverity.CRITICAL)
        ])

    @property
    def warning_count(self) -> int:
        """Get number of warning-level issues."""
        return len([
            issue for issue in self.issues
            if issue.severity == IssueSeverity.WARNING
        ])

    def get_issues_by_type(self, issue_type: ValidationIssueType) -> List[ValidationIssue]:
        """Get validation issues of specific type."""
        return [issue for issue in self.issues if issue.issue_type == issue_type]

    def add_issue(self, issue: ValidationIssue) -> None:
        self.issues.append(issue)
        if issue.severity is not IssueSeverity.WARNING:
            self.success = False


class TreeValidator:
    """Checks the parent/child invariants of a node subtree.

    Examples:
        >>> root = XmlNode()
        >>> _ = root.insert_child(XmlNode())
        >>> TreeValidator().validate(root).success
        True
    """

    def __init__(self,
                 max_depth: Optional[int] = None,
                 correlation_id: Optional[str] = None) -> None:
        """Initialize tree validator.

        Args:
            max_depth: Depth above which a warning is reported, defaults to
                the configured ``validation_max_depth``
            correlation_id: Optional correlation ID, defaults to the
                configured one
        """
        config = get_config()
        self.max_depth = max_depth if max_depth is not None else config.validation_max_depth
        self.correlation_id = correlation_id or config.correlation_id
        self.logger = get_logger(__name__, self.correlation_id, "tree_validator")

    def validate(self, root: XmlNode) -> ValidationResult:
        """Validate the subtree rooted at ``root``.

        Args:
            root: Node whose subtree is audited; it may itself be attached

        Returns:
            ValidationResult with every issue found

        Raises:
            InvalidNodeError: If root is not an XmlNode
        """
        if not isinstance(root, XmlNode):
            raise InvalidNodeError(
                f"root should be an instance of XmlNode, got {type(root).__name__}",
                argument_name="root",
                value=root,
            )

        start_time = time.time()
        self.logger.info(
            "Starting tree validation",
            extra={"root_type": type(root).__name__, "max_depth": self.max_depth},
        )

        result = ValidationResult()
        seen: Dict[int, str] = {}
        stack: List[Tuple[XmlNode, str, int, FrozenSet[int]]] = [
            (root, "/", 0, frozenset())
        ]

        while stack:
            node, path, depth, ancestors = stack.pop()
            node_id = id(node)

            if node_id in ancestors:
                result.add_issue(ValidationIssue(
                    issue_type=ValidationIssueType.CYCLE,
                    severity=IssueSeverity.CRITICAL,
                    message="Node is its own ancestor",
                    node_path=path,
                ))
                continue

            if node_id in seen:
                result.add_issue(ValidationIssue(
                    issue_type=ValidationIssueType.DUPLICATE_CHILD,
                    severity=IssueSeverity.ERROR,
                    message="Node appears more than once in the tree",
                    node_path=path,
                    details={"first_seen_at": seen[node_id]},
                ))
                continue

            seen[node_id] = path
            result.nodes_validated += 1

            if self.max_depth is not None and depth > self.max_depth:
                result.add_issue(ValidationIssue(
                    issue_type=ValidationIssueType.DEPTH_LIMIT,
                    severity=IssueSeverity.WARNING,
                    message=f"Node depth {depth} exceeds limit {self.max_depth}",
                    node_path=path,
                    details={"depth": depth},
                ))

            self._check_parent_links(node, path, result)

            child_ancestors = ancestors | {node_id}
            base = path.rstrip("/")
            for index in reversed(range(len(node._children))):
                stack.append(
                    (node._children[index], f"{base}/{index}", depth + 1, child_ancestors)
                )

        result.processing_time_ms = (time.time() - start_time) * 1000

        self.logger.info(
            "Tree validation completed",
            extra={
                "success": result.success,
                "error_count": result.error_count,
                "warning_count": result.warning_count,
                "nodes_validated": result.nodes_validated,
            },
        )
        return result

    def _check_parent_links(self, node: XmlNode, path: str, result: ValidationResult) -> None:
        """Verify every child of ``node`` points back at it."""
        base = path.rstrip("/")
        for index, child in enumerate(node._children):
            if child.parent is not node:
                result.add_issue(ValidationIssue(
                    issue_type=ValidationIssueType.PARENT_LINK,
                    severity=IssueSeverity.ERROR,
                    message="Child parent reference inconsistency",
                    node_path=f"{base}/{index}",
                    details={"parent_is_none": child.parent is None},
                ))
