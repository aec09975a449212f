"""
Node implementation for the DOM.
This module implements the base Node shared by elements, text and comments.
"""

from enum import IntEnum
from typing import List, Optional, Iterator
import weakref

from . import mutator, traversal


class NodeType(IntEnum):
    """The closed set of node kinds, numbered as in the HTML DOM."""
    ELEMENT_NODE = 1
    TEXT_NODE = 3
    COMMENT_NODE = 8


def _no_ref():
    return None


class Node:
    """
    Base Node implementation for the DOM.

    A node holds its children in document order and a weak reference to its
    parent. Structural changes go through the mutator module so that parent,
    children and the owning tree's id index always agree.
    """

    def __init__(self, node_type: NodeType):
        """
        Initialize a new, detached Node.

        Args:
            node_type: The type of this node
        """
        self.node_type = node_type
        self.node_name: str = "#node"

        self._parent = _no_ref
        self._child_nodes: List['Node'] = []
        # Only set on the root element of a Tree
        self._owner_tree = _no_ref

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.node_name}>"

    @property
    def is_element(self) -> bool:
        return self.node_type == NodeType.ELEMENT_NODE

    @property
    def parent_node(self) -> Optional['Node']:
        """The parent node, or None for a detached node or a tree root."""
        return self._parent()

    @property
    def owner_tree(self) -> Optional['Tree']:
        """The Tree this node belongs to, or None when it is not attached to one."""
        top = self
        while True:
            parent = top._parent()
            if parent is None:
                return top._owner_tree()
            top = parent

    @property
    def child_nodes(self) -> List['Node']:
        """A snapshot of all child nodes, including text and comment nodes."""
        return traversal.child_nodes_of(self)

    @property
    def children(self) -> List['Element']:
        """A snapshot of the child elements."""
        return traversal.children_of(self)

    @property
    def child_element_count(self) -> int:
        return sum(1 for child in self._child_nodes if child.is_element)

    @property
    def first_child(self) -> Optional['Node']:
        return traversal.first_child_of(self)

    @property
    def last_child(self) -> Optional['Node']:
        return traversal.last_child_of(self)

    @property
    def next_sibling(self) -> Optional['Node']:
        return traversal.next_sibling_of(self)

    @property
    def previous_sibling(self) -> Optional['Node']:
        return traversal.previous_sibling_of(self)

    @property
    def first_element_child(self) -> Optional['Element']:
        return traversal.first_element_child_of(self)

    @property
    def last_element_child(self) -> Optional['Element']:
        return traversal.last_element_child_of(self)

    @property
    def next_element_sibling(self) -> Optional['Element']:
        return traversal.next_element_sibling_of(self)

    @property
    def previous_element_sibling(self) -> Optional['Element']:
        return traversal.previous_element_sibling_of(self)

    @property
    def node_value(self) -> Optional[str]:
        return None

    @property
    def text_content(self) -> str:
        """The concatenated data of all descendant text nodes."""
        return "".join(node.data for node in traversal.iter_descendants(self)
                       if node.node_type == NodeType.TEXT_NODE)

    @text_content.setter
    def text_content(self, text: str) -> None:
        mutator.set_text_content(self, text)

    def has_child_nodes(self) -> bool:
        """Check if this node has any child nodes."""
        return len(self._child_nodes) > 0

    def contains(self, other: Optional['Node']) -> bool:
        """Check if ``other`` is this node or one of its descendants."""
        return traversal.contains(self, other)

    def iter_descendants(self) -> Iterator['Node']:
        """Iterate over all descendants in document order (excluding this node)."""
        return traversal.iter_descendants(self)

    def append_child(self, child: 'Node') -> 'Node':
        """Append ``child`` as the last child of this node."""
        return mutator.append_child(self, child)

    def insert_before(self, new_child: 'Node', reference_child: Optional['Node'] = None) -> 'Node':
        """Insert ``new_child`` before ``reference_child`` (append when None)."""
        return mutator.insert_before(self, new_child, reference_child)

    def remove_child(self, child: 'Node') -> 'Node':
        """Remove ``child`` from this node."""
        return mutator.remove_child(self, child)

    def replace_child(self, new_child: 'Node', old_child: 'Node') -> 'Node':
        """Replace ``old_child`` by ``new_child`` and return ``old_child``."""
        return mutator.replace_child(self, new_child, old_child)

    def replace_children(self, *new_children: 'Node') -> None:
        """Replace all children of this node by ``new_children``."""
        mutator.replace_children(self, new_children)

    def remove(self) -> None:
        """Remove this node from its parent, if it has one."""
        parent = self.parent_node
        if parent is not None:
            mutator.remove_child(parent, self)

    def clone_node(self, deep: bool = False) -> 'Node':
        """
        Clone this node. The clone is always detached.

        Args:
            deep: Whether to clone child nodes as well
        """
        raise NotImplementedError

    def is_equal_node(self, other: Optional['Node']) -> bool:
        """
        Check if this node is structurally equal to another node.

        Args:
            other: The node to compare with

        Returns:
            True if both nodes have the same kind, name, value and equal children
        """
        if not isinstance(other, Node) or self.node_type != other.node_type:
            return False

        if self.node_name != other.node_name or self.node_value != other.node_value:
            return False

        if len(self._child_nodes) != len(other._child_nodes):
            return False

        return all(mine.is_equal_node(theirs)
                   for mine, theirs in zip(self._child_nodes, other._child_nodes))

    def _set_parent(self, parent: Optional['Node']) -> None:
        self._parent = _no_ref if parent is None else weakref.ref(parent)
