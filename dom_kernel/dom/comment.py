"""
Comment node implementation for the DOM.
"""

from typing import Optional

from .node import NodeType
from .text import CharacterData


class Comment(CharacterData):
    """
    Comment node implementation for the DOM.

    Comments take part in child_nodes and sibling order but are skipped by
    element traversal, queries and text_content.
    """

    def __init__(self, data: Optional[str] = None):
        super().__init__(NodeType.COMMENT_NODE, data)
        self.node_name = "#comment"

    def clone_node(self, deep: bool = False) -> 'Comment':
        return Comment(self._data)
