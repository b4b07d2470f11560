"""Core node type for programmatically built XML documents.

``XmlNode`` owns an ordered list of children and keeps a weak reference to
its parent. Concrete node kinds (elements, text, comments and so on) subclass
it, inherit the tree maintenance unchanged and override ``to_string``.
"""

import logging
import weakref
from typing import Any, Iterator, List, Optional

from xml_document_builder.shared.config import get_config
from xml_document_builder.shared.errors import (
    CyclicInsertionError,
    IndexOutOfRangeError,
    InvalidIndexTypeError,
    InvalidNodeError,
)
from xml_document_builder.shared.logging import get_logger


def _log_mutation(message: str, node: "XmlNode", parent: "XmlNode", index: int) -> None:
    """Emit a debug record for an attach/detach when mutation logging is on."""
    config = get_config()
    if not config.enable_mutation_logging:
        return

    logger = get_logger(__name__, config.correlation_id, "xml_node")
    if not logger.is_enabled_for(logging.DEBUG):
        return

    logger.debug(
        message,
        extra={
            "node_type": type(node).__name__,
            "parent_type": type(parent).__name__,
            "index": index,
        },
    )


def _check_node(node: Any) -> None:
    if not isinstance(node, XmlNode):
        raise InvalidNodeError(
            f"node should be an instance of XmlNode, got {type(node).__name__}",
            argument_name="node",
            value=node,
        )


def _check_index(index: Any, upper: int) -> None:
    # bool is an int subclass but never a meaningful position
    if isinstance(index, bool) or not isinstance(index, int):
        raise InvalidIndexTypeError(
            f"index should be an integer, got {type(index).__name__}",
            argument_name="index",
            value=index,
        )
    if not 0 <= index <= upper:
        if upper < 0:
            message = f"index {index} is out of range, node has no children"
        else:
            message = f"index should be between 0 and {upper} inclusive, got {index}"
        raise IndexOutOfRangeError(
            message, argument_name="index", value=index, lower=0, upper=upper
        )


class XmlNode:
    """A node in an XML document tree.

    Children are held in document order and owned by this node. The parent
    link is non-owning: a node never keeps its parent alive.

    Examples:
        >>> root = XmlNode()
        >>> child = root.insert_child(XmlNode())
        >>> child.parent is root
        True
        >>> child.top() is root
        True
    """

    def __init__(self) -> None:
        self._parent: Optional["weakref.ReferenceType[XmlNode]"] = None
        self._children: List["XmlNode"] = []

    @property
    def parent(self) -> Optional["XmlNode"]:
        """Get the parent of this node, or None if it is detached."""
        if self._parent is None:
            return None
        return self._parent()

    def children(self) -> List["XmlNode"]:
        """Get a copy of this node's children in document order."""
        return list(self._children)

    def insert_child(self, node: "XmlNode", index: Optional[int] = None) -> Optional["XmlNode"]:
        """Insert ``node`` into this node's children.

        If ``node`` belongs to another parent it is removed from that parent
        first. If it is already a child of this node nothing changes and
        None is returned, whatever ``index`` was requested.

        Args:
            node: Node to insert
            index: Position to insert at, between 0 and the number of
                children inclusive; appends when omitted

        Returns:
            The inserted node, or None if it was already a child

        Raises:
            InvalidNodeError: If node is not an XmlNode
            InvalidIndexTypeError: If index is not an integer
            IndexOutOfRangeError: If index is outside the allowed bounds
            CyclicInsertionError: If node is this node or one of its ancestors
        """
        _check_node(node)
        if index is None:
            index = len(self._children)
        else:
            _check_index(index, len(self._children))

        if self._index_of(node) is not None:
            return None

        if node is self or any(ancestor is node for ancestor in self.iter_ancestors()):
            raise CyclicInsertionError(
                "node cannot be inserted beneath itself",
                argument_name="node",
                value=node,
            )

        old_parent = node.parent
        if old_parent is not None:
            old_parent.remove_child(node)

        node._parent = weakref.ref(self)
        self._children.insert(index, node)
        _log_mutation("Attached node", node, self, index)
        return node

    def remove(self) -> Optional["XmlNode"]:
        """Detach this node from its parent.

        Returns:
            The former parent, or None if this node had no parent
        """
        parent = self.parent
        if parent is None:
            # parent may have been garbage collected; drop the dead reference
            self._parent = None
            return None

        parent.remove_child(self)
        return parent

    def remove_child(self, node: "XmlNode") -> bool:
        """Remove ``node`` from this node's children.

        Returns:
            True if node was a child and has been removed, False otherwise

        Raises:
            InvalidNodeError: If node is not an XmlNode
        """
        _check_node(node)
        index = self._index_of(node)
        if index is None:
            return False

        self._detach_at(index)
        return True

    def remove_child_at_index(self, index: Optional[int] = None) -> "XmlNode":
        """Remove and return the child at ``index``.

        Raises:
            InvalidIndexTypeError: If index is missing or not an integer
            IndexOutOfRangeError: If there is no child at index
        """
        _check_index(index, len(self._children) - 1)
        return self._detach_at(index)

    def next(self) -> Optional["XmlNode"]:
        """Get the next sibling of this node, or None if there is none."""
        parent = self.parent
        if parent is None:
            return None

        index = parent._index_of(self)
        if index is None or index + 1 >= len(parent._children):
            return None
        return parent._children[index + 1]

    def prev(self) -> Optional["XmlNode"]:
        """Get the previous sibling of this node, or None if there is none."""
        parent = self.parent
        if parent is None:
            return None

        index = parent._index_of(self)
        if not index:
            return None
        return parent._children[index - 1]

    def top(self) -> "XmlNode":
        """Get the root of the tree containing this node."""
        node = self
        parent = node.parent
        while parent is not None:
            node = parent
            parent = node.parent
        return node

    def up(self) -> Optional["XmlNode"]:
        """Get the parent of this node, or None if it is detached."""
        return self.parent

    def index(self) -> Optional[int]:
        """Get this node's position among its siblings, or None if detached."""
        parent = self.parent
        if parent is None:
            return None
        return parent._index_of(self)

    def depth(self) -> int:
        """Get depth of this node in the tree (root = 0)."""
        return sum(1 for _ in self.iter_ancestors())

    def iter_ancestors(self) -> Iterator["XmlNode"]:
        """Iterate over ancestors from the parent up to the root."""
        parent = self.parent
        while parent is not None:
            yield parent
            parent = parent.parent

    def iter_descendants(self) -> Iterator["XmlNode"]:
        """Iterate over all descendants depth-first in document order."""
        stack = list(reversed(self._children))
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node._children))

    def to_string(self) -> str:
        """Render this node as XML text.

        Node kinds must override this; a bare node cannot be rendered.
        """
        raise NotImplementedError(
            f"{type(self).__name__} does not implement to_string()"
        )

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"<{type(self).__name__} children={len(self._children)}>"

    def _index_of(self, node: "XmlNode") -> Optional[int]:
        for index, child in enumerate(self._children):
            if child is node:
                return index
        return None

    def _detach_at(self, index: int) -> "XmlNode":
        node = self._children.pop(index)
        node._parent = None
        _log_mutation("Detached node", node, self, index)
        return node
