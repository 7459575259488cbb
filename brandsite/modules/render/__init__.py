"""Render module: component trees to UI trees and HTML."""
from .registry import Primitive, PROP_REMAPS
from .renderer import (
    Element,
    Passthrough,
    RawMarkup,
    TextLeaf,
    UINode,
    UnknownComponent,
    render,
    render_content_layout,
    unknown_types,
)
from .html import to_html

__all__ = [
    "Primitive",
    "PROP_REMAPS",
    "Element",
    "Passthrough",
    "RawMarkup",
    "TextLeaf",
    "UINode",
    "UnknownComponent",
    "render",
    "render_content_layout",
    "unknown_types",
    "to_html",
]
