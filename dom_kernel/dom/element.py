"""
Element implementation for the DOM.
This module implements elements, their attributes and class tokens, and
their HTML serialization.
"""

import html
from typing import Dict, Iterator, List, Optional

from . import mutator, traversal
from .node import Node, NodeType

VOID_ELEMENTS = frozenset({
    'area', 'base', 'br', 'col', 'embed', 'hr', 'img', 'input',
    'link', 'meta', 'param', 'source', 'track', 'wbr'
})

# Children of these elements are serialized without escaping
RAW_TEXT_ELEMENTS = frozenset({'script', 'style'})


class ClassList:
    """
    Live view of an element's class tokens.

    Changes made through the view go through the mutator, so the ``class``
    attribute stays in step with the token set.
    """

    def __init__(self, element: 'Element'):
        self._element = element

    def __contains__(self, token: str) -> bool:
        return token in self._element._class_tokens

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._element._class_tokens))

    def __len__(self) -> int:
        return len(self._element._class_tokens)

    def __repr__(self) -> str:
        return f"ClassList({list(self._element._class_tokens)!r})"

    @property
    def value(self) -> str:
        return " ".join(self._element._class_tokens)

    def contains(self, token: str) -> bool:
        return token in self

    def add(self, *tokens: str) -> None:
        for token in tokens:
            mutator.add_class(self._element, token)

    def remove(self, *tokens: str) -> None:
        for token in tokens:
            mutator.remove_class(self._element, token)

    def toggle(self, token: str, force: Optional[bool] = None) -> bool:
        return mutator.toggle_class(self._element, token, force)


class Element(Node):
    """
    Element node implementation for the DOM.

    Elements are the only nodes that carry attributes and class tokens and
    that may hold children.
    """

    def __init__(self, tag_name: str, attributes: Optional[Dict[str, str]] = None):
        """
        Initialize a new, detached Element.

        Args:
            tag_name: Name of the element tag (e.g., "div", "span")
            attributes: Optional initial attributes
        """
        super().__init__(NodeType.ELEMENT_NODE)

        self.tag_name = tag_name.lower()
        self.node_name = self.tag_name.upper()

        self._attributes: Dict[str, str] = {}
        # Ordered set of class tokens, mirrored in the class attribute
        self._class_tokens: Dict[str, None] = {}

        for name, value in (attributes or {}).items():
            mutator.set_attribute(self, name, value)

    def __repr__(self) -> str:
        parts = [self.tag_name]
        if self.id:
            parts.append(f"id={self.id!r}")
        if self._class_tokens:
            parts.append(f"class={' '.join(self._class_tokens)!r}")
        return f"<Element {' '.join(parts)}>"

    @property
    def is_void_element(self) -> bool:
        return self.tag_name in VOID_ELEMENTS

    @property
    def id(self) -> Optional[str]:
        """The element's id, or None when it has no (or an empty) id attribute."""
        return self._attributes.get('id') or None

    @id.setter
    def id(self, value: Optional[str]) -> None:
        if value:
            mutator.set_attribute(self, 'id', value)
        else:
            mutator.remove_attribute(self, 'id')

    @property
    def class_name(self) -> str:
        """Get or set the class attribute of the element."""
        return self._attributes.get('class', "")

    @class_name.setter
    def class_name(self, value: str) -> None:
        mutator.set_attribute(self, 'class', value)

    @property
    def class_list(self) -> ClassList:
        return ClassList(self)

    @property
    def attributes(self) -> Dict[str, str]:
        """A snapshot of the element's attributes."""
        return dict(self._attributes)

    def has_attribute(self, name: str) -> bool:
        return name.lower() in self._attributes

    def has_attributes(self) -> bool:
        return bool(self._attributes)

    def get_attribute(self, name: str) -> Optional[str]:
        """
        Get the value of an attribute.

        Args:
            name: The attribute name

        Returns:
            The attribute value, or None if the attribute doesn't exist
        """
        return self._attributes.get(name.lower())

    def set_attribute(self, name: str, value: str) -> None:
        mutator.set_attribute(self, name, value)

    def remove_attribute(self, name: str) -> None:
        mutator.remove_attribute(self, name)

    def toggle_attribute(self, name: str, force: Optional[bool] = None) -> bool:
        """
        Toggle a boolean attribute (present with an empty value, or absent).

        Returns:
            Whether the attribute is present after the call
        """
        present = self.has_attribute(name)
        wanted = (not present) if force is None else bool(force)
        if wanted and not present:
            mutator.set_attribute(self, name, "")
        elif present and not wanted:
            mutator.remove_attribute(self, name)
        return wanted

    def _selector_engine(self) -> 'SelectorEngine':
        tree = self.owner_tree
        if tree is not None:
            return tree.selector_engine
        from .selector_engine import default_engine
        return default_engine()

    def matches(self, selector: str) -> bool:
        """Check if the element matches a CSS selector."""
        return self._selector_engine().matches(self, selector)

    def closest(self, selector: str) -> Optional['Element']:
        """
        Find the closest ancestor element (or self) that matches a selector.

        Returns:
            The matching element or None if no match is found
        """
        engine = self._selector_engine()
        current: Optional[Node] = self
        while current is not None and current.is_element:
            if engine.matches(current, selector):
                return current
            current = current.parent_node
        return None

    def query_selector(self, selector: str) -> Optional['Element']:
        """Find the first descendant element that matches a selector."""
        result = self.query_selector_all(selector)
        return result[0] if result else None

    def query_selector_all(self, selector: str) -> List['Element']:
        """Find all descendant elements that match a selector, in document order."""
        return self._selector_engine().select(selector, self, include_root=False)

    def get_elements_by_tag_name(self, tag_name: str) -> List['Element']:
        """
        Get all descendant elements with the given tag name.

        Args:
            tag_name: The tag name to match (case-insensitive), or "*" for all

        Returns:
            List of matching elements
        """
        tag_name = tag_name.lower()
        return [element for element in traversal.iter_elements(self, include_self=False)
                if tag_name == "*" or element.tag_name == tag_name]

    def get_elements_by_class_name(self, class_names: str) -> List['Element']:
        """
        Get all descendant elements carrying every one of the given class names.

        Args:
            class_names: One or more whitespace-separated class tokens

        Returns:
            List of matching elements
        """
        tokens = class_names.split()
        if not tokens:
            return []
        return [element for element in traversal.iter_elements(self, include_self=False)
                if all(token in element._class_tokens for token in tokens)]

    @property
    def inner_html(self) -> str:
        """Get or set the HTML content of the element."""
        raw = self.tag_name in RAW_TEXT_ELEMENTS
        return "".join(_serialize(child, raw) for child in self._child_nodes)

    @inner_html.setter
    def inner_html(self, markup: str) -> None:
        mutator.set_inner_html(self, markup)

    @property
    def outer_html(self) -> str:
        """Get the HTML of the element, including the element itself."""
        return _serialize(self, False)

    def clone_node(self, deep: bool = False) -> 'Element':
        """
        Clone this element. The clone is detached and keeps the id attribute,
        so it cannot be attached to the same tree until its id is changed.

        Args:
            deep: Whether to clone child nodes as well
        """
        clone = type(self)(self.tag_name, self._attributes)

        if deep:
            for child in self._child_nodes:
                mutator.append_child(clone, child.clone_node(deep=True))

        return clone

    def is_equal_node(self, other: Optional[Node]) -> bool:
        if not super().is_equal_node(other):
            return False
        return self._attributes == other._attributes


def _format_attributes(element: Element) -> str:
    """
    Format element attributes as an HTML attribute string.

    Args:
        element: Element to format attributes for

    Returns:
        Formatted attribute string
    """
    result = []
    for name, value in element._attributes.items():
        # Boolean attributes can be specified with just the attribute name
        if value == "":
            result.append(f" {name}")
        else:
            result.append(f' {name}="{html.escape(value, quote=True)}"')
    return "".join(result)


def _serialize(node: Node, raw: bool) -> str:
    if node.node_type == NodeType.TEXT_NODE:
        return node.data if raw else html.escape(node.data, quote=False)
    if node.node_type == NodeType.COMMENT_NODE:
        return f"<!--{node.data}-->"

    start = f"<{node.tag_name}{_format_attributes(node)}>"
    if node.is_void_element:
        return start
    return f"{start}{node.inner_html}</{node.tag_name}>"
