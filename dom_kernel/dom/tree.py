"""
Tree implementation for the DOM.
A Tree owns a root element, keeps the id index of its elements and answers
queries over them. There is no global document: every Tree is a value that
callers pass around explicitly.
"""

import logging
import weakref
from typing import Dict, Iterator, List, Optional

from ..utils.config import Config
from . import traversal
from .comment import Comment
from .element import Element
from .errors import DuplicateIdError, HierarchyRequestError, InvalidKindError
from .events import EventBus
from .node import Node, NodeType
from .selector_engine import Predicate, SelectorEngine, has_class, has_tag, simple_id
from .text import Text

logger = logging.getLogger(__name__)


class Tree:
    """
    A document tree rooted at a single element.

    The tree keeps a mapping from id to element that every mutator call
    updates, so lookup() is a dictionary access.
    """

    def __init__(self, root: Optional[Element] = None, config: Optional[Config] = None):
        """
        Initialize a Tree.

        Args:
            root: A detached element to own; a new ``<html>`` element when None
            config: Configuration shared with the tree's event bus and selector engine

        Raises:
            InvalidKindError: If ``root`` is not an element
            HierarchyRequestError: If ``root`` has a parent or already roots a tree
            DuplicateIdError: If two elements under ``root`` share an id
        """
        self.config = config or Config()

        if root is None:
            root = Element("html")
        if not isinstance(root, Node) or not root.is_element:
            raise InvalidKindError(root, "Tree root")
        if root.parent_node is not None:
            raise HierarchyRequestError(f"{root!r} has a parent and cannot be a tree root")
        if root._owner_tree() is not None:
            raise HierarchyRequestError(f"{root!r} is already the root of another tree")

        self._elements_by_id: Dict[str, Element] = {}
        for element in traversal.iter_elements(root):
            if element.id:
                if element.id in self._elements_by_id:
                    raise DuplicateIdError(element.id)
                self._elements_by_id[element.id] = element

        self._root = root
        root._owner_tree = weakref.ref(self)

        self.selector_engine = SelectorEngine(cache_size=self.config.get("selectors.cache_size", 128))
        self.events = EventBus(self.config)

        logger.debug(f"Tree initialized with root {root!r} and {len(self._elements_by_id)} id(s)")

    @classmethod
    def create_document(cls, config: Optional[Config] = None) -> 'Tree':
        """Create a tree with the basic html/head/body structure."""
        tree = cls(Element("html"), config=config)
        tree.root.append_child(Element("head"))
        tree.root.append_child(Element("body"))
        return tree

    def __repr__(self) -> str:
        return f"<Tree root={self._root!r}>"

    def __iter__(self) -> Iterator[Node]:
        return self.iter_nodes()

    def __contains__(self, node: Node) -> bool:
        return isinstance(node, Node) and node.owner_tree is self

    @property
    def root(self) -> Element:
        return self._root

    @property
    def head(self) -> Optional[Element]:
        return next((child for child in self._root.children if child.tag_name == "head"), None)

    @property
    def body(self) -> Optional[Element]:
        return next((child for child in self._root.children if child.tag_name == "body"), None)

    def create_element(self, tag_name: str, attributes: Optional[Dict[str, str]] = None) -> Element:
        """Create a new detached element; attach it with a mutator call."""
        return Element(tag_name, attributes)

    def create_text_node(self, data: str) -> Text:
        return Text(data)

    def create_comment(self, data: str) -> Comment:
        return Comment(data)

    def lookup(self, element_id: str) -> Optional[Element]:
        """
        Get an element by its ID.

        Returns:
            The element with the specified ID, or None if not found
        """
        return self._elements_by_id.get(element_id)

    get_element_by_id = lookup

    def iter_nodes(self) -> Iterator[Node]:
        """Iterate over every node of the tree in document order, root first."""
        yield self._root
        yield from traversal.iter_descendants(self._root)

    def query_all(self, predicate: Predicate) -> List[Element]:
        """
        Find all elements for which ``predicate`` is true.

        Elements are visited depth-first in pre-order starting at the root;
        text and comment nodes are never passed to the predicate.

        Returns:
            A new list of matching elements in document order
        """
        return [element for element in traversal.iter_elements(self._root) if predicate(element)]

    def query(self, predicate: Predicate) -> Optional[Element]:
        """The first element in document order for which ``predicate`` is true."""
        return next((element for element in traversal.iter_elements(self._root) if predicate(element)), None)

    def get_elements_by_tag_name(self, tag_name: str) -> List[Element]:
        if tag_name == "*":
            return self.query_all(lambda element: True)
        return self.query_all(has_tag(tag_name))

    def get_elements_by_class_name(self, class_names: str) -> List[Element]:
        """Get all elements carrying every one of the whitespace-separated class names."""
        tokens = class_names.split()
        if not tokens:
            return []
        predicates = [has_class(token) for token in tokens]
        return self.query_all(lambda element: all(p(element) for p in predicates))

    def query_selector_all(self, selector: str) -> List[Element]:
        """
        Find all elements matching the specified selector, root included.

        Args:
            selector: CSS selector string

        Returns:
            List of matching elements; empty for an invalid selector
        """
        element_id = simple_id(selector)
        if element_id is not None:
            element = self.lookup(element_id)
            return [element] if element is not None else []
        return self.selector_engine.select(selector, self._root)

    def query_selector(self, selector: str) -> Optional[Element]:
        result = self.query_selector_all(selector)
        return result[0] if result else None

    def _register_id(self, element: Element) -> None:
        if element.id:
            self._elements_by_id[element.id] = element

    def _unregister_id(self, element: Element) -> None:
        if element.id and self._elements_by_id.get(element.id) is element:
            del self._elements_by_id[element.id]

    def _index_subtree(self, node: Node) -> None:
        for element in traversal.iter_elements(node):
            self._register_id(element)

    def _unindex_subtree(self, node: Node) -> None:
        for element in traversal.iter_elements(node):
            self._unregister_id(element)

    def debug_structure(self, max_depth: int = 10) -> str:
        """
        Generate a debug representation of the tree.

        Returns:
            An indented listing of the nodes, one per line
        """
        counts = {kind: 0 for kind in NodeType}
        for node in self.iter_nodes():
            counts[node.node_type] += 1

        result = [
            f"Element count: {counts[NodeType.ELEMENT_NODE]}",
            f"Text node count: {counts[NodeType.TEXT_NODE]}",
            f"Comment count: {counts[NodeType.COMMENT_NODE]}",
            "",
        ]

        def describe(node: Node, level: int) -> None:
            if level > max_depth:
                return
            indent = "  " * level
            if node.is_element:
                result.append(f"{indent}{node.tag_name}{_summary(node)}")
                for child in node._child_nodes:
                    describe(child, level + 1)
            elif node.node_type == NodeType.TEXT_NODE:
                if node.data.strip():
                    result.append(f"{indent}#text {node.data.strip()!r}")
            else:
                result.append(f"{indent}#comment {node.data.strip()!r}")

        describe(self._root, 0)
        return "\n".join(result)


def _summary(element: Element) -> str:
    parts = []
    if element.id:
        parts.append(f"#{element.id}")
    parts.extend(f".{token}" for token in element._class_tokens)
    return "".join(parts)
