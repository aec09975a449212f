"""
Build DOM nodes from HTML markup.

Parsing is delegated to html5lib (with its minidom tree builder); this
module only converts the parsed result into detached kernel nodes.
"""

import logging
from typing import List, Optional, Set

import html5lib

from ..utils.config import Config
from .comment import Comment
from .element import Element
from .node import Node
from .text import Text
from .tree import Tree

logger = logging.getLogger(__name__)

# minidom node types
_ELEMENT_NODE = 1
_TEXT_NODE = 3
_CDATA_SECTION_NODE = 4
_COMMENT_NODE = 8


def _parser() -> html5lib.HTMLParser:
    return html5lib.HTMLParser(tree=html5lib.treebuilders.getTreeBuilder("dom"))


def _keep_whitespace(keep_whitespace: Optional[bool], config: Optional[Config]) -> bool:
    if keep_whitespace is not None:
        return keep_whitespace
    return (config or Config()).get("parser.keep_whitespace", True)


def parse_fragment(markup: str, keep_whitespace: Optional[bool] = None,
                   config: Optional[Config] = None) -> List[Node]:
    """
    Parse an HTML fragment into a list of detached nodes.

    Args:
        markup: The HTML fragment
        keep_whitespace: Keep whitespace-only text nodes; defaults to the
            ``parser.keep_whitespace`` config value
        config: Configuration to read defaults from

    Returns:
        The top-level nodes of the fragment, in order
    """
    keep = _keep_whitespace(keep_whitespace, config)
    fragment = _parser().parseFragment(markup or "")

    seen_ids: Set[str] = set()
    nodes = []
    for child in fragment.childNodes:
        converted = _convert(child, keep, seen_ids)
        if converted is not None:
            nodes.append(converted)

    logger.debug(f"Parsed fragment into {len(nodes)} top-level node(s)")
    return nodes


def parse_document(markup: str, keep_whitespace: Optional[bool] = None,
                   config: Optional[Config] = None) -> Tree:
    """
    Parse an HTML document into a Tree rooted at its ``<html>`` element.

    The doctype and anything outside the root element are dropped. When an
    id occurs more than once, only the first element keeps it.

    Args:
        markup: The HTML document
        keep_whitespace: Keep whitespace-only text nodes
        config: Configuration for the new tree

    Returns:
        The new Tree
    """
    if isinstance(markup, bytes):
        markup = markup.decode('utf-8', errors='replace')

    keep = _keep_whitespace(keep_whitespace, config)
    document = _parser().parse(markup or "")

    root = _convert(document.documentElement, keep, set())
    tree = Tree(root, config=config)
    logger.debug(f"Parsed document into {tree!r}")
    return tree


def _convert(node, keep_whitespace: bool, seen_ids: Set[str]) -> Optional[Node]:
    """
    Recursively convert a parsed minidom node to a kernel node.

    Args:
        node: The parsed node from html5lib
        keep_whitespace: Whether whitespace-only text becomes a Text node
        seen_ids: Ids already used in this parse

    Returns:
        The converted node, or None for nodes that are dropped
    """
    node_type = node.nodeType

    if node_type in (_TEXT_NODE, _CDATA_SECTION_NODE):
        data = node.data
        if not data or (not keep_whitespace and not data.strip()):
            return None
        return Text(data)

    if node_type == _COMMENT_NODE:
        return Comment(node.data)

    if node_type != _ELEMENT_NODE:
        return None

    element = Element(node.tagName)
    for name, value in node.attributes.items():
        if name == 'id' and value:
            if value in seen_ids:
                logger.warning(f"Dropping duplicate id {value!r} on <{element.tag_name}>")
                continue
            seen_ids.add(value)
        element.set_attribute(name, value)

    for child in node.childNodes:
        converted = _convert(child, keep_whitespace, seen_ids)
        if converted is not None:
            element.append_child(converted)

    return element
