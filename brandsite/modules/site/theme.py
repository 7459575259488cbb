"""Applying a resolved configuration to a presentation target."""
from dataclasses import dataclass, field
from typing import Protocol

from brandsite.modules.config.schemas import MergedConfig, Theme

DARK_MODE_CLASS = "dark-mode"


class ThemeTarget(Protocol):
    """Anything that can hold named style variables and toggle classes."""

    def set_property(self, name: str, value: str) -> None: ...

    def add_class(self, name: str) -> None: ...

    def remove_class(self, name: str) -> None: ...


@dataclass
class DocumentRoot:
    """In-memory document root: style variables plus body classes."""
    style: dict[str, str] = field(default_factory=dict)
    classes: set[str] = field(default_factory=set)

    def set_property(self, name: str, value: str) -> None:
        self.style[name] = value

    def add_class(self, name: str) -> None:
        self.classes.add(name)

    def remove_class(self, name: str) -> None:
        self.classes.discard(name)

    @property
    def dark_mode(self) -> bool:
        return DARK_MODE_CLASS in self.classes

    def to_css(self) -> str:
        """The style variables as a ``:root`` block."""
        body = "".join(f"  {name}: {value};\n" for name, value in self.style.items())
        return f":root {{\n{body}}}\n"


def theme_variables(config: MergedConfig) -> dict[str, str]:
    """Named style variables for a resolved configuration."""
    brand = config.brand
    return {
        "--brand-color": brand.brand_color,
        "--project-color": brand.project_color,
        "--accent-color": brand.accent_color,
        "--light-color": brand.light_color,
        "--dark-color": brand.dark_color,
        "--shared-border-color": brand.shared_border_color,
        "--font-sans": brand.font_sans,
        "--font-serif": brand.font_serif,
        "--space-unit": f"{brand.space_unit}px",
        "--radius-master": f"{brand.radius_master}px",
    }


def apply_theme(config: MergedConfig, target: ThemeTarget) -> None:
    """
    Write the palette, fonts and spacing to ``target`` and set dark mode.

    Only ``light`` and ``dark`` change the dark-mode class; ``auto`` leaves
    it alone so the ambient system preference applies.
    """
    for name, value in theme_variables(config).items():
        target.set_property(name, value)

    if config.brand.default_theme == Theme.DARK:
        target.add_class(DARK_MODE_CLASS)
    elif config.brand.default_theme == Theme.LIGHT:
        target.remove_class(DARK_MODE_CLASS)
