"""
Structural edit operations on DOM nodes.

Every operation validates first and changes state second, so a call that
raises leaves parent links, child lists and the owning tree's id index
exactly as they were. After any call returns, every node in
``p.child_nodes`` has ``p`` as its ``parent_node``.
"""

import logging
from typing import Dict, Iterable, List, Optional, Sequence

from . import traversal
from .errors import DuplicateIdError, HierarchyRequestError, InvalidKindError, NotAChildError

logger = logging.getLogger(__name__)


def _require_element(node: 'Node', operation: str) -> None:
    if not node.is_element:
        raise InvalidKindError(node, operation)


def _identified(nodes: Iterable['Node']) -> Iterable['Element']:
    """Yield every element with a non-empty id in the given subtrees."""
    for node in nodes:
        for element in traversal.iter_elements(node):
            if element.id:
                yield element


def _check_insertable(parent: 'Node', child: 'Node', operation: str) -> None:
    _require_element(parent, operation)
    if child.parent_node is None and child._owner_tree() is not None:
        raise HierarchyRequestError(f"{operation}: {child!r} is the root of a tree")
    if traversal.contains(child, parent):
        raise HierarchyRequestError(f"{operation}: cannot insert {child!r} into itself or its descendant")


def _check_ids(tree: Optional['Tree'], incoming: Sequence['Node'],
               leaving: Sequence['Node'] = ()) -> None:
    """Raise DuplicateIdError if attaching ``incoming`` to ``tree`` would clash.

    Elements in ``leaving`` (and ``incoming`` itself, when it is being moved
    inside the same tree) do not count as clashes.
    """
    if tree is None:
        return

    exempt = {id(element) for element in _identified(leaving)}
    seen: Dict[str, 'Element'] = {}
    for element in _identified(incoming):
        element_id = element.id
        if element_id in seen:
            raise DuplicateIdError(element_id)
        seen[element_id] = element
        exempt.add(id(element))

    for element_id in seen:
        existing = tree.lookup(element_id)
        if existing is not None and id(existing) not in exempt:
            raise DuplicateIdError(element_id)


def _detach(node: 'Node') -> None:
    parent = node.parent_node
    if parent is None:
        return
    tree = parent.owner_tree
    parent._child_nodes.remove(node)
    node._set_parent(None)
    if tree is not None:
        tree._unindex_subtree(node)


def _attach(parent: 'Node', child: 'Node', index: Optional[int] = None) -> None:
    if index is None:
        parent._child_nodes.append(child)
    else:
        parent._child_nodes.insert(index, child)
    child._set_parent(parent)
    tree = parent.owner_tree
    if tree is not None:
        tree._index_subtree(child)


def append_child(parent: 'Node', child: 'Node') -> 'Node':
    """
    Append ``child`` as the last child of ``parent``.

    A child that already has a parent is moved.

    Returns:
        The appended node

    Raises:
        InvalidKindError: If ``parent`` is not an element
        DuplicateIdError: If an id in ``child``'s subtree is already used in the tree
        HierarchyRequestError: If ``child`` is ``parent`` or one of its ancestors
    """
    _check_insertable(parent, child, "append_child")
    _check_ids(parent.owner_tree, [child])

    _detach(child)
    _attach(parent, child)
    logger.debug(f"Appended {child!r} to {parent!r}")
    return child


def insert_before(parent: 'Node', child: 'Node', reference: Optional['Node'] = None) -> 'Node':
    """
    Insert ``child`` into ``parent`` right before ``reference``.

    With ``reference`` None this is append_child.

    Raises:
        NotAChildError: If ``reference`` is not a child of ``parent``
    """
    if reference is None:
        return append_child(parent, child)

    _check_insertable(parent, child, "insert_before")
    if reference.parent_node is not parent:
        raise NotAChildError(parent, reference)
    if reference is child:
        return child
    _check_ids(parent.owner_tree, [child])

    _detach(child)
    _attach(parent, child, parent._child_nodes.index(reference))
    logger.debug(f"Inserted {child!r} before {reference!r} in {parent!r}")
    return child


def remove_child(parent: 'Node', child: 'Node') -> 'Node':
    """
    Remove ``child`` from ``parent`` and drop its subtree from the id index.

    Returns:
        The removed node

    Raises:
        NotAChildError: If ``child`` is not currently a child of ``parent``
    """
    if child.parent_node is not parent:
        raise NotAChildError(parent, child)

    _detach(child)
    logger.debug(f"Removed {child!r} from {parent!r}")
    return child


def replace_child(parent: 'Node', new_child: 'Node', old_child: 'Node') -> 'Node':
    """
    Replace ``old_child`` by ``new_child`` at the same position.

    Returns:
        The replaced (now detached) node
    """
    if old_child.parent_node is not parent:
        raise NotAChildError(parent, old_child)
    if new_child is old_child:
        return old_child
    _check_insertable(parent, new_child, "replace_child")
    _check_ids(parent.owner_tree, [new_child], leaving=[old_child])

    _detach(new_child)
    index = parent._child_nodes.index(old_child)
    _detach(old_child)
    _attach(parent, new_child, index)
    logger.debug(f"Replaced {old_child!r} by {new_child!r} in {parent!r}")
    return old_child


def replace_children(node: 'Node', new_children: Iterable['Node']) -> None:
    """
    Replace all children of ``node`` by ``new_children``, in the given order.

    Raises:
        InvalidKindError: If ``node`` is not an element
        DuplicateIdError: If an incoming id clashes with an element that stays in the tree
        HierarchyRequestError: If a node is given twice or is an ancestor of ``node``
    """
    _require_element(node, "replace_children")
    incoming: List['Node'] = list(new_children)

    seen = set()
    for child in incoming:
        if id(child) in seen:
            raise HierarchyRequestError(f"replace_children: {child!r} is given more than once")
        seen.add(id(child))
        _check_insertable(node, child, "replace_children")
    _check_ids(node.owner_tree, incoming, leaving=node._child_nodes)

    for child in list(node._child_nodes):
        _detach(child)
    for child in incoming:
        _detach(child)
        _attach(node, child)
    logger.debug(f"Replaced children of {node!r} with {len(incoming)} node(s)")


def set_attribute(node: 'Node', name: str, value: str) -> None:
    """
    Set an attribute on an element.

    Setting ``id`` renames the element in the tree's index; setting ``class``
    replaces the class token set.

    Raises:
        InvalidKindError: If ``node`` is not an element
        DuplicateIdError: If the new id is used by another element of the tree
    """
    _require_element(node, "set_attribute")
    name = name.lower()
    value = str(value)

    if name == "id":
        tree = node.owner_tree
        if tree is not None and value:
            existing = tree.lookup(value)
            if existing is not None and existing is not node:
                raise DuplicateIdError(value)
            tree._unregister_id(node)
            node._attributes["id"] = value
            tree._register_id(node)
            return
        if tree is not None:
            tree._unregister_id(node)
    elif name == "class":
        node._class_tokens = dict.fromkeys(value.split())

    node._attributes[name] = value


def remove_attribute(node: 'Node', name: str) -> None:
    """Remove an attribute from an element; a missing attribute is ignored."""
    _require_element(node, "remove_attribute")
    name = name.lower()
    if name not in node._attributes:
        return

    if name == "id":
        tree = node.owner_tree
        if tree is not None:
            tree._unregister_id(node)
    elif name == "class":
        node._class_tokens = {}

    del node._attributes[name]


def _check_token(token: str) -> None:
    if not token or any(ch.isspace() for ch in token):
        raise ValueError(f"Invalid class token {token!r}")


def _sync_class_attribute(node: 'Element') -> None:
    node._attributes["class"] = " ".join(node._class_tokens)


def has_class(node: 'Node', token: str) -> bool:
    return node.is_element and token in node._class_tokens


def add_class(node: 'Node', token: str) -> None:
    """Add a class token; adding a present token changes nothing."""
    _require_element(node, "add_class")
    _check_token(token)
    if token not in node._class_tokens:
        node._class_tokens[token] = None
        _sync_class_attribute(node)


def remove_class(node: 'Node', token: str) -> None:
    """Remove a class token; removing an absent token changes nothing."""
    _require_element(node, "remove_class")
    _check_token(token)
    if token in node._class_tokens:
        del node._class_tokens[token]
        _sync_class_attribute(node)


def toggle_class(node: 'Node', token: str, force: Optional[bool] = None) -> bool:
    """
    Flip membership of a class token.

    Args:
        node: The element
        token: The class token
        force: When given, add (True) or remove (False) instead of flipping

    Returns:
        Whether the token is present after the call
    """
    _require_element(node, "toggle_class")
    _check_token(token)
    present = token in node._class_tokens
    wanted = (not present) if force is None else bool(force)
    if wanted and not present:
        add_class(node, token)
    elif present and not wanted:
        remove_class(node, token)
    return wanted


def set_text_content(node: 'Node', text: Optional[str]) -> None:
    """
    Replace the text of a node.

    For an element all children are replaced by a single text node (or by
    nothing when ``text`` is empty); text and comment nodes get new data.
    ``None`` counts as the empty string on both paths: an element ends up
    with no children and character data with ``""``.
    """
    if not node.is_element:
        node.data = text
        return

    from .text import Text
    replace_children(node, [Text(text)] if text else [])


def set_inner_html(node: 'Node', markup: str) -> None:
    """Replace the children of an element by the nodes parsed from ``markup``."""
    _require_element(node, "set_inner_html")

    from .builder import parse_fragment
    tree = node.owner_tree
    config = tree.config if tree is not None else None
    replace_children(node, parse_fragment(markup, config=config))
