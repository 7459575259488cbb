"""Tests for the component tree renderer and HTML serializer."""
import pytest

from brandsite.modules.config.schemas import ComponentNode
from brandsite.modules.render import (
    Element,
    Passthrough,
    Primitive,
    RawMarkup,
    TextLeaf,
    UnknownComponent,
    render,
    render_content_layout,
    to_html,
    unknown_types,
)
from brandsite.modules.render.renderer import MAX_DEPTH


def test_card_with_text_child():
    tree = {"type": "Card", "children": [{"type": "text", "content": "hi"}]}

    node = render(tree)

    assert isinstance(node, Element)
    assert node.kind == Primitive.CARD
    assert node.children == (TextLeaf(text="hi"),)


def test_unknown_type_renders_placeholder():
    node = render({"type": "Bogus"})
    assert node == UnknownComponent(type_name="Bogus")


@pytest.mark.parametrize("text_type", ["text", "string"])
def test_text_leaf_without_content_is_empty(text_type):
    assert render({"type": text_type}) == TextLeaf(text="")


def test_rendering_is_idempotent():
    tree = {
        "type": "PageContainer",
        "children": [
            {"type": "Header", "props": {"title": "Hello"}},
            {"type": "StatCard", "props": {"title": "Users", "value": 3}},
            {"type": "Nope", "children": [{"type": "text", "content": "x"}]},
        ],
    }
    assert render(tree) == render(tree)


def test_render_does_not_mutate_input():
    props = {"title": "Users"}
    tree = {"type": "StatCard", "props": props}

    render(tree)

    assert props == {"title": "Users"}


def test_children_keep_their_order():
    tree = {
        "type": "GridLayout",
        "children": [
            {"type": "text", "content": "a"},
            {"type": "text", "content": "b"},
            {"type": "text", "content": "a"},
        ],
    }

    node = render(tree)

    assert [child.text for child in node.children] == ["a", "b", "a"]


def test_deeply_nested_unknown_types():
    tree = {"type": "Bogus"}
    for _ in range(50):
        tree = {"type": "Card", "children": [tree, {"type": "AlsoBogus"}]}

    node = render(tree)

    assert unknown_types(node).count("Bogus") == 1
    assert unknown_types(node).count("AlsoBogus") == 50


def test_nesting_past_limit_becomes_placeholder():
    tree = {"type": "text", "content": "leaf"}
    for _ in range(MAX_DEPTH + 5):
        tree = {"type": "Card", "children": [tree]}

    node = render(tree)

    placeholders = [n for n in _flatten(node) if isinstance(n, UnknownComponent)]
    assert placeholders and placeholders[0].reason == "nested too deeply"


@pytest.mark.parametrize("garbage", [None, 42, "Card", ["Card"], {"type": None}, {"type": ["x"]}])
def test_malformed_nodes_render_placeholders(garbage):
    assert isinstance(render(garbage), UnknownComponent)


def test_stat_card_title_remapped_to_label():
    node = render({"type": "StatCard", "props": {"title": "Users", "value": 3}})
    assert node.props == {"label": "Users", "value": 3}


def test_stat_card_existing_label_kept():
    node = render({"type": "StatCard", "props": {"title": "T", "label": "L"}})
    assert node.props == {"title": "T", "label": "L"}


def test_card_markup_content_passes_through():
    node = render({"type": "Card", "content": "<b>bold</b>", "children": [{"type": "text"}]})
    assert node.children == (RawMarkup(markup="<b>bold</b>"),)


def test_plain_string_content_on_container_is_dropped():
    node = render({"type": "Card", "content": "plain"})
    assert node.children == ()


def test_rich_content_appended_after_children():
    node = render({
        "type": "Alert",
        "children": [{"type": "text", "content": "first"}],
        "content": {"kind": "rich"},
    })

    assert node.children == (TextLeaf(text="first"), Passthrough(value={"kind": "rich"}))


def test_component_node_model_renders_like_mapping():
    tree = {"type": "Card", "children": [{"type": "text", "content": "hi"}]}
    assert render(ComponentNode.model_validate(tree)) == render(tree)


def test_render_content_layout_none():
    assert render_content_layout(None) is None


class TestHtml:
    def test_text_is_escaped(self):
        html = to_html(render({"type": "Card", "children": [{"type": "text", "content": "<i>"}]}))
        assert "&lt;i&gt;" in html

    def test_markup_is_raw(self):
        html = to_html(render({"type": "Card", "content": "<b>bold</b>"}))
        assert html.startswith("<section")
        assert "<b>bold</b>" in html

    def test_unknown_placeholder(self):
        html = to_html(render({"type": "Bogus"}))
        assert html == (
            '<div class="c-unknown" style="color: red">Unknown component: Bogus</div>'
        )

    def test_text_props_and_data_attributes(self):
        html = to_html(render({
            "type": "StatCard",
            "props": {"title": "Users", "value": 3, "trendUp": True},
        }))

        assert 'class="c-stat-card"' in html
        assert 'data-trend-up="true"' in html
        assert '<span class="c-label">Users</span>' in html
        assert '<span class="c-value">3</span>' in html

    def test_input_is_void(self):
        html = to_html(render({"type": "Input", "props": {"placeholder": "Name"}}))
        assert html.startswith("<input")
        assert "</input>" not in html


def _flatten(node):
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        if isinstance(current, Element):
            stack.extend(current.children)
