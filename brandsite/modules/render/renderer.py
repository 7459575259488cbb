"""Component tree renderer.

``render`` turns a page's component tree (JSON nodes with ``type``,
``props``, ``children`` and ``content``) into a tree of UI nodes. It is a
pure function and total: malformed nodes and unknown types become visible
``UnknownComponent`` placeholders instead of errors, and the rest of the
tree still renders.
"""
import copy
from dataclasses import dataclass, field
from typing import Any, Iterator, Mapping, Union

from brandsite.modules.config.schemas import ComponentNode
from .registry import (
    MARKUP_DELIMITER,
    MARKUP_PASSTHROUGH,
    PROP_REMAPS,
    TEXT_TYPES,
    Primitive,
)

# Nodes nested deeper than this render as placeholders
MAX_DEPTH = 200


@dataclass(frozen=True)
class TextLeaf:
    """Literal text."""
    text: str


@dataclass(frozen=True)
class RawMarkup:
    """Markup emitted verbatim by primitives that allow it."""
    markup: str


@dataclass(frozen=True)
class Passthrough:
    """Non-string content handed to the primitive as its last child."""
    value: Any


@dataclass(frozen=True)
class UnknownComponent:
    """Visible placeholder for a node that cannot be rendered."""
    type_name: str
    reason: str = "unknown type"


@dataclass(frozen=True)
class Element:
    """An instantiated primitive."""
    kind: Primitive
    props: dict[str, Any] = field(default_factory=dict)
    children: tuple["UINode", ...] = ()


UINode = Union[TextLeaf, RawMarkup, Passthrough, UnknownComponent, Element]


def _node_fields(node: Any) -> tuple[Any, Any, Any, Any] | None:
    """Pull (type, props, children, content) out of a model or a mapping."""
    if isinstance(node, ComponentNode):
        return node.type, node.props, node.children, node.content
    if isinstance(node, Mapping):
        return node.get("type"), node.get("props"), node.get("children"), node.get("content")
    return None


def remap_props(kind: Primitive, props: Mapping[str, Any]) -> dict[str, Any]:
    """Apply the prop remaps registered for ``kind``."""
    mapped = dict(props)
    for remap in PROP_REMAPS.get(kind, ()):
        if mapped.get(remap.source) and not mapped.get(remap.target):
            mapped[remap.target] = mapped.pop(remap.source)
    return mapped


def _render(node: Any, depth: int) -> UINode:
    fields = _node_fields(node)
    if fields is None:
        return UnknownComponent(type_name=type(node).__name__, reason="not a component node")
    type_name, props, children, content = fields

    if isinstance(type_name, str) and type_name in TEXT_TYPES:
        return TextLeaf(text=str(content) if content else "")

    kind = Primitive.lookup(type_name)
    if kind is None:
        return UnknownComponent(type_name=str(type_name))
    if depth > MAX_DEPTH:
        return UnknownComponent(type_name=str(type_name), reason="nested too deeply")

    mapped = remap_props(kind, copy.deepcopy(props) if isinstance(props, Mapping) else {})

    if (
        kind in MARKUP_PASSTHROUGH
        and isinstance(content, str)
        and MARKUP_DELIMITER in content
    ):
        return Element(kind=kind, props=mapped, children=(RawMarkup(markup=content),))

    rendered = [
        _render(child, depth + 1)
        for child in (children if isinstance(children, list) else [])
    ]
    if content and not isinstance(content, str):
        rendered.append(Passthrough(value=copy.deepcopy(content)))

    return Element(kind=kind, props=mapped, children=tuple(rendered))


def render(node: ComponentNode | Mapping[str, Any] | Any) -> UINode:
    """
    Render one component tree.

    Args:
        node: A ``ComponentNode`` or the equivalent JSON mapping

    Returns:
        The root UI node; never raises for any input
    """
    return _render(node, 0)


def render_content_layout(layout: Any) -> UINode | None:
    """Render a page's content layout, None when the page has none."""
    if layout is None:
        return None
    return render(layout)


def walk(node: UINode) -> Iterator[UINode]:
    """Depth-first iteration over a rendered tree."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        if isinstance(current, Element):
            stack.extend(reversed(current.children))


def unknown_types(node: UINode) -> list[str]:
    """Type names of every placeholder in a rendered tree, in document order."""
    return [n.type_name for n in walk(node) if isinstance(n, UnknownComponent)]
