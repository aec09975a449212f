"""
Test the Tree: construction, id index, queries and debug output.
"""

import pytest

from dom_kernel.dom import (
    Comment, DuplicateIdError, Element, HierarchyRequestError, InvalidKindError, Text, Tree,
    has_attribute, has_class, has_tag,
)
from dom_kernel.utils.config import Config


class TestConstruction:
    def test_default_root(self):
        tree = Tree()
        assert tree.root.tag_name == "html"
        assert tree.root.owner_tree is tree
        assert tree.root.parent_node is None

    def test_root_must_be_element(self):
        with pytest.raises(InvalidKindError):
            Tree(Text("x"))

    def test_root_must_be_detached(self):
        parent = Element("div")
        child = Element("p")
        parent.append_child(child)
        with pytest.raises(HierarchyRequestError):
            Tree(child)

    def test_root_cannot_own_two_trees(self):
        root = Element("div")
        first = Tree(root)
        with pytest.raises(HierarchyRequestError):
            Tree(root)
        assert root.owner_tree is first

    def test_existing_ids_are_indexed(self):
        root = Element("div")
        root.append_child(Element("p", {"id": "a"}))
        tree = Tree(root)
        assert tree.lookup("a").tag_name == "p"

    def test_duplicate_ids_in_root(self):
        root = Element("div")
        root.append_child(Element("p", {"id": "a"}))
        root.append_child(Element("span", {"id": "a"}))
        with pytest.raises(DuplicateIdError):
            Tree(root)

    def test_create_document(self):
        tree = Tree.create_document()
        assert tree.head.tag_name == "head"
        assert tree.body.tag_name == "body"
        assert tree.root.outer_html == "<html><head></head><body></body></html>"

    def test_head_and_body_missing(self, list_tree):
        tree, item_list, items = list_tree
        assert tree.head is None
        assert tree.body is None

    def test_config_is_shared(self):
        config = Config()
        config.set("selectors.cache_size", 4)
        tree = Tree(config=config)
        assert tree.config is config
        assert tree.events.config is config

    def test_factories_create_detached_nodes(self):
        tree = Tree()
        element = tree.create_element("p", {"class": "x"})
        assert element.owner_tree is None
        assert tree.create_text_node("t").data == "t"
        assert isinstance(tree.create_comment("c"), Comment)


class TestLookup:
    def test_lookup(self, list_tree):
        tree, item_list, items = list_tree
        assert tree.lookup("L") is item_list
        assert tree.get_element_by_id("i2") is items[1]
        assert tree.lookup("missing") is None

    def test_lookup_after_removal(self, list_tree):
        tree, item_list, items = list_tree
        item_list.remove_child(items[1])
        assert tree.lookup("i2") is None
        assert items[1].id == "i2"

    def test_contains(self, list_tree):
        tree, item_list, items = list_tree
        assert items[0] in tree
        assert Element("p") not in tree
        item_list.remove_child(items[0])
        assert items[0] not in tree


class TestQueries:
    def test_query_all_order(self, list_tree):
        tree, item_list, items = list_tree
        every = tree.query_all(lambda element: True)
        assert every == [tree.root, item_list] + items

    def test_remove_then_query(self, list_tree, assert_consistent):
        tree, item_list, items = list_tree
        i1, i2, i3 = items
        item_list.remove_child(i2)
        assert tree.query_all(lambda element: True) == [tree.root, item_list, i1, i3]
        assert tree.lookup("L") is item_list
        assert i2.parent_node is None
        assert_consistent(tree)

    def test_query_all_skips_text_and_comments(self, mixed_list):
        ol, nodes = mixed_list
        tree = Tree(ol)
        seen = []
        tree.query_all(lambda element: seen.append(element) or False)
        assert all(node.is_element for node in seen)
        assert len(seen) == 4

    def test_query_all_returns_new_list(self, list_tree):
        tree, item_list, items = list_tree
        first = tree.query_all(has_tag("li"))
        first.clear()
        assert len(tree.query_all(has_tag("li"))) == 3

    def test_query_first(self, list_tree):
        tree, item_list, items = list_tree
        assert tree.query(has_tag("li")) is items[0]
        assert tree.query(has_tag("table")) is None

    def test_predicate_builders(self, list_tree):
        tree, item_list, items = list_tree
        items[1].class_list.add("selected")
        items[2].set_attribute("data-role", "tail")
        assert tree.query_all(has_class("selected")) == [items[1]]
        assert tree.query_all(has_attribute("data-role")) == [items[2]]
        assert tree.query_all(has_attribute("data-role", "head")) == []

    def test_get_elements_by_tag_name(self, list_tree):
        tree, item_list, items = list_tree
        assert tree.get_elements_by_tag_name("LI") == items
        assert len(tree.get_elements_by_tag_name("*")) == 5

    def test_get_elements_by_class_name(self, list_tree):
        tree, item_list, items = list_tree
        items[0].class_name = "a b"
        items[2].class_name = "a"
        assert tree.get_elements_by_class_name("a") == [items[0], items[2]]
        assert tree.get_elements_by_class_name("b a") == [items[0]]
        assert tree.get_elements_by_class_name("  ") == []

    def test_query_selector_id_fast_path(self, list_tree):
        tree, item_list, items = list_tree
        assert tree.query_selector_all("#i3") == [items[2]]
        assert tree.query_selector("#nope") is None
        assert tree.query_selector("ul > li") is items[0]

    def test_iteration_covers_every_node(self, mixed_list):
        ol, nodes = mixed_list
        tree = Tree(ol)
        assert list(tree) == [ol] + nodes


class TestDebugStructure:
    def test_debug_structure(self, list_tree):
        tree, item_list, items = list_tree
        items[0].class_list.add("on")
        item_list.append_child(Comment(" end "))
        output = tree.debug_structure()
        lines = output.splitlines()
        assert lines[0] == "Element count: 5"
        assert lines[1] == "Text node count: 3"
        assert lines[2] == "Comment count: 1"
        assert "  ul#L" in lines
        assert "    li#i1.on" in lines
        assert "      #text 'Item 1'" in lines
        assert "    #comment 'end'" in lines

    def test_max_depth(self, list_tree):
        tree, item_list, items = list_tree
        output = tree.debug_structure(max_depth=1)
        assert "ul#L" in output
        assert "li#i1" not in output
