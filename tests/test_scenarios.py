"""
End-to-end interactions: buttons wired through the event bus that edit a
parsed page.
"""

import pytest

from dom_kernel.dom import Cursor, mutator, parse_document

PAGE = """<!DOCTYPE html>
<html>
<head><title>Demo</title></head>
<body>
  <h1 id="heading">Hello</h1>
  <div id="container">
    <button id="button">Click</button>
  </div>

  <ul id="removable">
    <li>Milk <button class="remove-btn">x</button></li>
    <li>Bread <button class="remove-btn">x</button></li>
  </ul>

  <ul id="itemLists">
    <li>One</li>
    <!-- filler -->
    <li>Two</li>
    <li>Three</li>
  </ul>
  <button id="toggleButton">Toggle</button>
  <button id="hideButton">Hide</button>
  <button id="showButton">Show</button>

  <ul id="itemListss"><li>First</li><li>Middle</li><li>Last</li></ul>
  <button id="highlightButton">Highlight</button>

  <ul id="MyItemList">
    <li class="hidden">A</li>
    <li class="hidden">B</li>
    <li class="hidden">C</li>
  </ul>
  <button id="prevButton">Prev</button>
  <button id="nextButton">Next</button>

  <div id="content"><p>Old</p></div>
  <button id="updateButton">Update</button>
</body>
</html>
"""


@pytest.fixture
def page():
    return parse_document(PAGE)


def click(tree, element_id):
    return tree.events.dispatch(tree.lookup(element_id), "click")


def visible(items):
    return [item.text_content for item in items if "hidden" not in item.class_list]


def test_button_click_changes_heading(page):
    heading = page.lookup("heading")
    page.events.add_listener(page.lookup("button"), "click",
                             lambda node, event: setattr(heading, "text_content", "Clicked"))
    assert click(page, "button") == 1
    assert heading.outer_html == '<h1 id="heading">Clicked</h1>'


def test_mouseover_on_container(page):
    container = page.lookup("container")
    page.events.add_listener(container, "mouseover",
                             lambda node, event: mutator.add_class(node, "hovered"))
    page.events.dispatch(container, "mouseover")
    assert container.class_name == "hovered"


def test_remove_buttons_remove_their_item(page):
    removable = page.lookup("removable")
    removed = []

    def remove_item(node, event):
        item = node.parent_node
        removed.append(item.parent_node.remove_child(item))

    for button in page.query_selector_all(".remove-btn"):
        page.events.add_listener(button, "click", remove_item)

    milk_button = page.query_selector(".remove-btn")
    page.events.dispatch(milk_button, "click")
    assert [li.text_content.split()[0] for li in removable.children] == ["Bread"]
    assert removed[0].parent_node is None
    assert milk_button.parent_node is removed[0]


def test_toggle_hide_and_show(page):
    item_list = page.lookup("itemLists")

    def for_each_element(action):
        def handler(node, event):
            for child in item_list.child_nodes:
                if child.is_element:
                    action(child)
        return handler

    page.events.add_listener(page.lookup("toggleButton"), "click",
                             for_each_element(lambda li: mutator.toggle_class(li, "highlight")))
    page.events.add_listener(page.lookup("hideButton"), "click",
                             for_each_element(lambda li: mutator.add_class(li, "hidden")))
    page.events.add_listener(page.lookup("showButton"), "click",
                             for_each_element(lambda li: mutator.remove_class(li, "hidden")))

    click(page, "toggleButton")
    assert len(page.query_selector_all("#itemLists > .highlight")) == 3
    click(page, "toggleButton")
    assert page.query_selector_all("#itemLists > .highlight") == []

    click(page, "hideButton")
    assert visible(item_list.children) == []
    click(page, "hideButton")
    assert all(li.class_name == "hidden" for li in item_list.children)
    click(page, "showButton")
    assert visible(item_list.children) == ["One", "Two", "Three"]
    # The comment between the items is left alone
    assert any(child.node_name == "#comment" for child in item_list.child_nodes)


def test_highlight_first_and_last(page):
    item_list = page.lookup("itemListss")

    def highlight(node, event):
        item_list.first_element_child.class_list.add("highlight")
        item_list.last_element_child.class_list.add("highlight")

    page.events.add_listener(page.lookup("highlightButton"), "click", highlight)
    click(page, "highlightButton")
    assert [li.text_content for li in item_list.get_elements_by_class_name("highlight")] == ["First", "Last"]


def test_carousel_with_cursor(page):
    item_list = page.lookup("MyItemList")
    cursor = Cursor(item_list)
    mutator.remove_class(cursor.current(), "hidden")

    def step(move):
        def handler(node, event):
            mutator.add_class(cursor.current(), "hidden")
            mutator.remove_class(move(), "hidden")
        return handler

    page.events.add_listener(page.lookup("nextButton"), "click", step(cursor.advance))
    page.events.add_listener(page.lookup("prevButton"), "click", step(cursor.retreat))

    items = item_list.children
    assert visible(items) == ["A"]
    click(page, "nextButton")
    assert visible(items) == ["B"]
    click(page, "nextButton")
    click(page, "nextButton")
    assert visible(items) == ["A"]
    click(page, "prevButton")
    assert visible(items) == ["C"]


def test_carousel_with_sibling_links(page):
    item_list = page.lookup("MyItemList")
    state = {"current": item_list.first_element_child}
    mutator.remove_class(state["current"], "hidden")

    def next_item(node, event):
        mutator.add_class(state["current"], "hidden")
        state["current"] = state["current"].next_element_sibling or item_list.first_element_child
        mutator.remove_class(state["current"], "hidden")

    page.events.add_listener(page.lookup("nextButton"), "click", next_item)
    for _ in range(3):
        click(page, "nextButton")
    assert visible(item_list.children) == ["A"]


def test_update_inner_html(page):
    content = page.lookup("content")
    page.events.add_listener(
        page.lookup("updateButton"), "click",
        lambda node, event: setattr(content, "inner_html", '<h2 id="fresh">New Content</h2><p>Updated.</p>'))
    click(page, "updateButton")
    assert content.inner_html == '<h2 id="fresh">New Content</h2><p>Updated.</p>'
    assert page.lookup("fresh").parent_node is content
    assert page.query_selector("#content > p").text_content == "Updated."


def test_set_attribute(page):
    heading = page.lookup("heading")
    heading.set_attribute("title", "Greeting")
    heading.set_attribute("id", "mainHeading")
    assert page.lookup("mainHeading") is heading
    assert page.lookup("heading") is None
    assert heading.outer_html == '<h1 id="mainHeading" title="Greeting">Hello</h1>'
