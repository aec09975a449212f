"""
Stateless traversal functions over DOM nodes.

None of these functions raise: absence is reported as None or an empty list.
Sequences returned are snapshots, so mutating the tree afterwards does not
change a list already handed out.
"""

from typing import Iterator, List, Optional


def parent_of(node: 'Node') -> Optional['Node']:
    return node.parent_node


def child_nodes_of(node: 'Node') -> List['Node']:
    """All children of ``node`` in order, including text and comment nodes."""
    return list(node._child_nodes)


def children_of(node: 'Node') -> List['Element']:
    """The element children of ``node`` in order."""
    return [child for child in node._child_nodes if child.is_element]


def first_child_of(node: 'Node') -> Optional['Node']:
    return node._child_nodes[0] if node._child_nodes else None


def last_child_of(node: 'Node') -> Optional['Node']:
    return node._child_nodes[-1] if node._child_nodes else None


def first_element_child_of(node: 'Node') -> Optional['Element']:
    for child in node._child_nodes:
        if child.is_element:
            return child
    return None


def last_element_child_of(node: 'Node') -> Optional['Element']:
    for child in reversed(node._child_nodes):
        if child.is_element:
            return child
    return None


def _siblings_and_index(node: 'Node'):
    parent = node.parent_node
    if parent is None:
        return None, -1
    siblings = parent._child_nodes
    for index, sibling in enumerate(siblings):
        if sibling is node:
            return siblings, index
    return None, -1


def next_sibling_of(node: 'Node') -> Optional['Node']:
    siblings, index = _siblings_and_index(node)
    if siblings is None or index + 1 >= len(siblings):
        return None
    return siblings[index + 1]


def previous_sibling_of(node: 'Node') -> Optional['Node']:
    siblings, index = _siblings_and_index(node)
    if siblings is None or index == 0:
        return None
    return siblings[index - 1]


def next_element_sibling_of(node: 'Node') -> Optional['Element']:
    """The nearest following sibling that is an element."""
    siblings, index = _siblings_and_index(node)
    if siblings is None:
        return None
    for sibling in siblings[index + 1:]:
        if sibling.is_element:
            return sibling
    return None


def previous_element_sibling_of(node: 'Node') -> Optional['Element']:
    """The nearest preceding sibling that is an element."""
    siblings, index = _siblings_and_index(node)
    if siblings is None:
        return None
    for sibling in reversed(siblings[:index]):
        if sibling.is_element:
            return sibling
    return None


def ancestors_of(node: 'Node') -> Iterator['Node']:
    """Yield the parent of ``node``, then its parent, up to the root."""
    parent = node.parent_node
    while parent is not None:
        yield parent
        parent = parent.parent_node


def iter_descendants(node: 'Node') -> Iterator['Node']:
    """Yield all descendants of ``node`` depth-first in pre-order."""
    stack = list(reversed(node._child_nodes))
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current._child_nodes))


def iter_elements(node: 'Node', include_self: bool = True) -> Iterator['Element']:
    """Yield ``node`` (optionally) and its element descendants in document order."""
    if include_self and node.is_element:
        yield node
    for descendant in iter_descendants(node):
        if descendant.is_element:
            yield descendant


def contains(ancestor: 'Node', node: Optional['Node']) -> bool:
    """True if ``node`` is ``ancestor`` itself or one of its descendants."""
    current = node
    while current is not None:
        if current is ancestor:
            return True
        current = current.parent_node
    return False
