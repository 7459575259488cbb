"""HTML serialization of rendered component trees (used for previews)."""
import json
import re
from html import escape
from typing import Any

from .registry import Primitive
from .renderer import (
    Element,
    Passthrough,
    RawMarkup,
    TextLeaf,
    UINode,
    UnknownComponent,
)

_TAGS: dict[Primitive, str] = {
    Primitive.PAGE_CONTAINER: "main",
    Primitive.HEADER: "header",
    Primitive.GRID_LAYOUT: "div",
    Primitive.CARD: "section",
    Primitive.SIDEBAR: "aside",
    Primitive.BUTTON: "button",
    Primitive.INPUT: "input",
    Primitive.STAT_CARD: "div",
    Primitive.BADGE: "span",
    Primitive.ALERT: "div",
    Primitive.TOGGLE: "label",
}

_VOID_TAGS = frozenset({"input"})

# Props rendered as text inside the element, in this order
_TEXT_PROPS: dict[Primitive, tuple[str, ...]] = {
    Primitive.HEADER: ("title", "subtitle"),
    Primitive.CARD: ("title",),
    Primitive.STAT_CARD: ("label", "value"),
    Primitive.BUTTON: ("label",),
    Primitive.BADGE: ("label",),
    Primitive.ALERT: ("title", "message"),
    Primitive.TOGGLE: ("label",),
}

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def _attr_name(prop: str) -> str:
    return "data-" + _CAMEL_BOUNDARY.sub("-", prop).lower()


def _attributes(element: Element, text_props: tuple[str, ...]) -> str:
    attrs = [
        ("class", f"c-{_CAMEL_BOUNDARY.sub('-', element.kind.value).lower()}"),
        ("data-component", element.kind.value),
    ]
    for name, value in sorted(element.props.items()):
        if name in text_props or value is None:
            continue
        if isinstance(value, bool):
            value = "true" if value else "false"
        elif not isinstance(value, (str, int, float)):
            continue
        attrs.append((_attr_name(name), str(value)))
    return "".join(f' {k}="{escape(v, quote=True)}"' for k, v in attrs)


def _passthrough_text(value: Any) -> str:
    if isinstance(value, (dict, list)):
        return json.dumps(value, sort_keys=True)
    return str(value)


def to_html(node: UINode) -> str:
    """Serialize a rendered tree. Text is escaped; raw markup is emitted as-is."""
    if isinstance(node, TextLeaf):
        return escape(node.text)
    if isinstance(node, RawMarkup):
        return node.markup
    if isinstance(node, Passthrough):
        return escape(_passthrough_text(node.value))
    if isinstance(node, UnknownComponent):
        return (
            '<div class="c-unknown" style="color: red">'
            f"Unknown component: {escape(node.type_name)}</div>"
        )

    tag = _TAGS[node.kind]
    text_props = _TEXT_PROPS.get(node.kind, ())
    open_tag = f"<{tag}{_attributes(node, text_props)}>"
    if tag in _VOID_TAGS:
        return open_tag

    inner = [
        f'<span class="c-{prop}">{escape(str(node.props[prop]))}</span>'
        for prop in text_props
        if node.props.get(prop) is not None
    ]
    inner.extend(to_html(child) for child in node.children)
    return f"{open_tag}{''.join(inner)}</{tag}>"
