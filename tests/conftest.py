"""
Shared fixtures for the DOM kernel tests.
"""

import logging

import pytest

from dom_kernel.dom import Comment, Element, Text, Tree, traversal


@pytest.fixture(autouse=True)
def reset_dom_kernel_logger():
    """Drop handlers installed by setup_logging so tests do not leak them."""
    yield
    logger = logging.getLogger("dom_kernel")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def list_tree():
    """root(div) -> list(ul#L) -> [li#i1, li#i2, li#i3]"""
    root = Element("div")
    tree = Tree(root)
    item_list = Element("ul", {"id": "L"})
    root.append_child(item_list)
    items = []
    for n in (1, 2, 3):
        item = Element("li", {"id": f"i{n}"})
        item.append_child(Text(f"Item {n}"))
        item_list.append_child(item)
        items.append(item)
    return tree, item_list, items


@pytest.fixture
def mixed_list():
    """An <ol> whose element children are separated by text and comment nodes."""
    ol = Element("ol")
    nodes = [
        Text("\n  "),
        Element("li", {"class": "a"}),
        Comment(" separator "),
        Text("\n  "),
        Element("li", {"class": "b"}),
        Text("\n  "),
        Element("li", {"class": "c"}),
        Text("\n"),
    ]
    for node in nodes:
        ol.append_child(node)
    return ol, nodes


def _check_consistency(tree):
    expected_ids = {}
    for node in tree.iter_nodes():
        for child in node._child_nodes:
            assert child.parent_node is node
        if node.is_element and node.id:
            assert node.id not in expected_ids, f"duplicate id {node.id!r}"
            expected_ids[node.id] = node
        parent = node.parent_node
        if parent is not None:
            assert any(c is node for c in parent._child_nodes)
    assert tree._elements_by_id == expected_ids
    assert list(traversal.iter_elements(tree.root))[0] is tree.root


@pytest.fixture
def assert_consistent():
    """Check parent/child links and the id index of a tree."""
    return _check_consistency
