"""
DOM implementation for the DOM kernel.
This package provides the node tree, its traversal and mutation functions,
selector queries, event dispatch and the sibling cursor.
"""

from .node import Node, NodeType
from .element import Element, ClassList
from .text import CharacterData, Text
from .comment import Comment
from .tree import Tree
from .cursor import Cursor, CursorState
from .events import Event, EventBus
from .selector_engine import SelectorEngine, has_attribute, has_class, has_tag, matches_selector
from .builder import parse_document, parse_fragment
from .errors import (
    DOMError, DispatchError, DuplicateIdError, HierarchyRequestError, InvalidKindError, NotAChildError
)
from . import mutator, traversal

__all__ = [
    'Node', 'NodeType', 'Element', 'ClassList', 'CharacterData', 'Text', 'Comment', 'Tree',
    'Cursor', 'CursorState', 'Event', 'EventBus',
    'SelectorEngine', 'has_attribute', 'has_class', 'has_tag', 'matches_selector',
    'parse_document', 'parse_fragment',
    'DOMError', 'DispatchError', 'DuplicateIdError', 'HierarchyRequestError', 'InvalidKindError',
    'NotAChildError',
    'mutator', 'traversal',
]
