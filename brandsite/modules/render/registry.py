"""Closed set of UI primitives a component tree may reference."""
from dataclasses import dataclass
from enum import Enum


class Primitive(str, Enum):
    """Every component type the renderer knows how to instantiate."""
    PAGE_CONTAINER = "PageContainer"
    HEADER = "Header"
    GRID_LAYOUT = "GridLayout"
    CARD = "Card"
    SIDEBAR = "Sidebar"
    BUTTON = "Button"
    INPUT = "Input"
    STAT_CARD = "StatCard"
    BADGE = "Badge"
    ALERT = "Alert"
    TOGGLE = "Toggle"

    @classmethod
    def lookup(cls, type_name: object) -> "Primitive | None":
        """Resolve a node's ``type`` string, None when it is not a known primitive."""
        if not isinstance(type_name, str):
            return None
        try:
            return cls(type_name)
        except ValueError:
            return None


# Node types emitted as literal text
TEXT_TYPES = frozenset({"text", "string"})


@dataclass(frozen=True)
class PropRemap:
    """Rename ``source`` to ``target`` when the node does not already set ``target``."""
    source: str
    target: str


# Per-primitive prop renames. Add new remaps here, not in the renderer.
PROP_REMAPS: dict[Primitive, tuple[PropRemap, ...]] = {
    Primitive.STAT_CARD: (PropRemap(source="title", target="label"),),
}

# Primitives whose string content is emitted as raw markup when it
# contains MARKUP_DELIMITER
MARKUP_PASSTHROUGH = frozenset({Primitive.CARD})
MARKUP_DELIMITER = "<"
