"""
CSS Selector Engine implementation.
This module matches DOM elements against CSS selectors parsed by cssselect,
and provides the predicate builders used with Tree.query_all.
"""

import functools
import logging
import re
from typing import Any, Callable, List, Optional, Tuple

import cssselect
from cssselect import parser as css

from . import traversal
from .node import Node, NodeType

logger = logging.getLogger(__name__)

Predicate = Callable[['Element'], bool]

_SIMPLE_ID = re.compile(r'^#([a-zA-Z0-9_-]+)$')


class SelectorEngine:
    """
    CSS Selector Engine for DOM queries.

    Supports type, universal, id, class and attribute selectors, the four
    combinators, :not() and the structural pseudo-classes first-child,
    last-child, only-child, empty and root. Anything else matches nothing.
    """

    def __init__(self, cache_size: int = 128):
        """
        Initialize the selector engine.

        Args:
            cache_size: How many parsed selectors to keep
        """
        self._parse = functools.lru_cache(maxsize=cache_size)(self._parse_uncached)
        logger.debug(f"SelectorEngine initialized (cache_size: {cache_size})")

    def _parse_uncached(self, selector: str) -> Tuple[css.Selector, ...]:
        try:
            return tuple(cssselect.parse(selector))
        except cssselect.SelectorError as e:
            logger.warning(f"Invalid selector {selector!r}: {e}")
            return ()

    def matches(self, element: Node, selector: str) -> bool:
        """
        Check if an element matches a CSS selector.

        Args:
            element: The element to check
            selector: The CSS selector, possibly a comma-separated group

        Returns:
            True if the element matches the selector, False otherwise
        """
        if not element.is_element:
            return False
        return any(self._matches_selector(element, parsed) for parsed in self._parse(selector))

    def select(self, selector: str, root_node: Node, include_root: bool = True) -> List['Element']:
        """
        Find all elements matching a CSS selector, in document order.

        Args:
            selector: The CSS selector string
            root_node: The node to search from
            include_root: Whether ``root_node`` itself may be part of the result

        Returns:
            List of matching elements
        """
        parsed = self._parse(selector)
        if not parsed:
            return []
        return [element for element in traversal.iter_elements(root_node, include_self=include_root)
                if any(self._matches_selector(element, sel) for sel in parsed)]

    def predicate(self, selector: str) -> Predicate:
        """Build a predicate for Tree.query_all from a CSS selector."""
        return functools.partial(self.matches, selector=selector)

    def _matches_selector(self, element: 'Element', selector: css.Selector) -> bool:
        if selector.pseudo_element is not None:
            logger.debug(f"Pseudo-element {selector.pseudo_element!r} never matches a node")
            return False
        return self._matches_tree(element, selector.parsed_tree)

    def _matches_tree(self, element: 'Element', tree: Any) -> bool:
        """
        Match an element against a node of a cssselect parse tree.

        Args:
            element: The element to check
            tree: The parse tree node

        Returns:
            True if the element matches, False otherwise
        """
        if isinstance(tree, css.Element):
            tag = tree.element
            return tag is None or tag == '*' or element.tag_name == tag.lower()

        if isinstance(tree, css.Hash):
            return element.id == tree.id and self._matches_tree(element, tree.selector)

        if isinstance(tree, css.Class):
            return (tree.class_name in element._class_tokens
                    and self._matches_tree(element, tree.selector))

        if isinstance(tree, css.Attrib):
            return (self._matches_attribute(element, tree)
                    and self._matches_tree(element, tree.selector))

        if isinstance(tree, css.Pseudo):
            return (self._matches_pseudo(element, tree.ident.lower())
                    and self._matches_tree(element, tree.selector))

        if isinstance(tree, css.Negation):
            return (not self._matches_tree(element, tree.subselector)
                    and self._matches_tree(element, tree.selector))

        if isinstance(tree, css.CombinedSelector):
            return (self._matches_tree(element, tree.subselector)
                    and self._matches_combinator(element, tree.combinator, tree.selector))

        logger.debug(f"Unsupported selector construct: {type(tree).__name__}")
        return False

    def _matches_combinator(self, element: 'Element', combinator: str, left: Any) -> bool:
        if combinator == ' ':  # Descendant
            return any(ancestor.is_element and self._matches_tree(ancestor, left)
                       for ancestor in traversal.ancestors_of(element))

        if combinator == '>':  # Child
            parent = element.parent_node
            return parent is not None and parent.is_element and self._matches_tree(parent, left)

        if combinator == '+':  # Adjacent sibling
            previous = element.previous_element_sibling
            return previous is not None and self._matches_tree(previous, left)

        if combinator == '~':  # General sibling
            sibling = element.previous_element_sibling
            while sibling is not None:
                if self._matches_tree(sibling, left):
                    return True
                sibling = sibling.previous_element_sibling
            return False

        logger.debug(f"Unknown combinator: {combinator!r}")
        return False

    def _matches_attribute(self, element: 'Element', tree: css.Attrib) -> bool:
        actual = element.get_attribute(tree.attrib)
        operator = tree.operator
        # cssselect >= 1.0 wraps the value in a Token
        expected = getattr(tree.value, 'value', tree.value)

        if operator == '!=':
            return actual is None or actual != expected
        if actual is None:
            return False
        if operator == 'exists':
            return True
        if operator == '=':
            return actual == expected
        if operator == '~=':
            return expected in actual.split()
        if operator == '|=':
            return actual == expected or actual.startswith(f"{expected}-")
        if operator == '^=':
            return bool(expected) and actual.startswith(expected)
        if operator == '$=':
            return bool(expected) and actual.endswith(expected)
        if operator == '*=':
            return bool(expected) and expected in actual

        logger.debug(f"Unsupported attribute operator: {operator!r}")
        return False

    def _matches_pseudo(self, element: 'Element', name: str) -> bool:
        parent = element.parent_node

        if name == 'first-child':
            return parent is not None and parent.first_element_child is element
        if name == 'last-child':
            return parent is not None and parent.last_element_child is element
        if name == 'only-child':
            return (parent is not None
                    and parent.first_element_child is element
                    and parent.last_element_child is element)
        if name == 'empty':
            return all(child.node_type == NodeType.COMMENT_NODE
                       for child in element._child_nodes)
        if name == 'root':
            return parent is None

        logger.debug(f"Unsupported pseudo-class: {name}")
        return False


def simple_id(selector: str) -> Optional[str]:
    """Return the id when ``selector`` is a bare ``#id`` selector."""
    match = _SIMPLE_ID.match(selector.strip())
    return match.group(1) if match else None


@functools.lru_cache(maxsize=1)
def default_engine() -> SelectorEngine:
    """The engine used by elements that do not belong to a tree."""
    return SelectorEngine()


def has_class(token: str) -> Predicate:
    """Predicate: the element carries class token ``token``."""
    return lambda element: token in element._class_tokens


def has_tag(tag_name: str) -> Predicate:
    """Predicate: the element's tag is ``tag_name`` (case-insensitive)."""
    tag_name = tag_name.lower()
    return lambda element: element.tag_name == tag_name


def has_attribute(name: str, value: Optional[str] = None) -> Predicate:
    """Predicate: the element has attribute ``name`` (with ``value`` when given)."""
    if value is None:
        return lambda element: element.has_attribute(name)
    return lambda element: element.get_attribute(name) == value


def matches_selector(selector: str, engine: Optional[SelectorEngine] = None) -> Predicate:
    """Predicate: the element matches the CSS ``selector``."""
    return (engine or default_engine()).predicate(selector)
