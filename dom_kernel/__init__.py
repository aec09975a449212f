"""
DOM Kernel - a small node tree with traversal, queries, mutation and events.
"""

from dom_kernel.dom import (
    Comment, Cursor, Element, EventBus, Node, NodeType, Text, Tree, parse_document, parse_fragment
)

# Package information
__version__ = "0.1.0"
__description__ = "A node tree with traversal, query, mutation and event dispatch"

__all__ = [
    'Comment', 'Cursor', 'Element', 'EventBus', 'Node', 'NodeType', 'Text', 'Tree',
    'parse_document', 'parse_fragment',
]
