"""
Text node implementation for the DOM.
This module implements character data nodes and the Text node.
"""

from typing import Optional

from .node import Node, NodeType


class CharacterData(Node):
    """
    Shared behaviour of Text and Comment nodes.

    Character data nodes carry a string payload and never have children.
    """

    def __init__(self, node_type: NodeType, data: Optional[str] = None):
        super().__init__(node_type)
        self._data = data or ""

    @property
    def data(self) -> str:
        return self._data

    @data.setter
    def data(self, value: Optional[str]) -> None:
        self._data = value or ""

    @property
    def length(self) -> int:
        return len(self._data)

    @property
    def node_value(self) -> str:
        return self._data

    @property
    def text_content(self) -> str:
        return self._data

    @text_content.setter
    def text_content(self, value: Optional[str]) -> None:
        self.data = value

    def _check_offset(self, offset: int) -> None:
        if offset < 0 or offset > self.length:
            raise ValueError(f"Offset {offset} is out of range for data of length {self.length}")

    def substring_data(self, offset: int, count: int) -> str:
        """
        Extract a substring from the data.

        Raises:
            ValueError: If the offset is invalid
        """
        self._check_offset(offset)
        return self._data[offset:offset + count]

    def append_data(self, data: str) -> None:
        self._data += data

    def insert_data(self, offset: int, data: str) -> None:
        self.replace_data(offset, 0, data)

    def delete_data(self, offset: int, count: int) -> None:
        self.replace_data(offset, count, "")

    def replace_data(self, offset: int, count: int, data: str) -> None:
        """
        Replace ``count`` characters starting at ``offset`` by ``data``.

        Raises:
            ValueError: If the offset is invalid
        """
        self._check_offset(offset)
        end = min(offset + count, self.length)
        self._data = self._data[:offset] + data + self._data[end:]

    def __repr__(self) -> str:
        preview = self._data if len(self._data) <= 20 else self._data[:17] + "..."
        return f"<{type(self).__name__} {preview!r}>"


class Text(CharacterData):
    """
    Text node implementation for the DOM.

    This class represents a text node in the DOM tree.
    """

    def __init__(self, data: Optional[str] = None):
        """
        Initialize a text node.

        Args:
            data: The text content
        """
        super().__init__(NodeType.TEXT_NODE, data)
        self.node_name = "#text"

    @property
    def whole_text(self) -> str:
        """
        Get the text of this node and all adjacent text node siblings.

        Returns:
            The concatenated text content
        """
        first = self
        while first.previous_sibling is not None and first.previous_sibling.node_type == NodeType.TEXT_NODE:
            first = first.previous_sibling

        result = []
        current = first
        while current is not None and current.node_type == NodeType.TEXT_NODE:
            result.append(current.data)
            current = current.next_sibling

        return "".join(result)

    def split_text(self, offset: int) -> 'Text':
        """
        Split this text node into two nodes at the specified offset.

        The new node is inserted right after this one when this node has a parent.

        Args:
            offset: The character offset at which to split

        Returns:
            The new text node containing the text after the split point

        Raises:
            ValueError: If the offset is invalid
        """
        self._check_offset(offset)

        new_node = Text(self._data[offset:])
        self._data = self._data[:offset]

        parent = self.parent_node
        if parent is not None:
            parent.insert_before(new_node, self.next_sibling)

        return new_node

    def clone_node(self, deep: bool = False) -> 'Text':
        return Text(self._data)
