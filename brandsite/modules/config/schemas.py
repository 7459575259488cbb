"""Config record schemas and merged configuration views.

Record models use the stored attribute names as aliases (``BrandColor``,
``ProjectKey`` ...) so stored items validate directly; unknown attributes
are kept. Merged views are frozen: a merged configuration is derived for
one navigation and never mutated.
"""
from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from brandsite.core.config import settings


class RecordModel(BaseModel):
    """Base for stored records: alias-keyed, extra attributes preserved."""

    def to_item(self) -> dict[str, Any]:
        """Dump back to the stored attribute names, dropping unset optionals."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")

    class Config:
        populate_by_name = True
        extra = "allow"


class Theme(str, Enum):
    """Default theme of the brand."""
    LIGHT = "light"
    DARK = "dark"
    AUTO = "auto"


class ProjectStatus(str, Enum):
    """Project lifecycle status."""
    ACTIVE = "Active"
    MAINTENANCE = "Maintenance"
    COMING_SOON = "Coming Soon"
    ARCHIVED = "Archived"


class Link(RecordModel):
    """Footer / support / social link."""
    name: str
    url: str
    icon: str | None = None
    type: str | None = None


class MetaTags(RecordModel):
    """SEO meta tags."""
    title: str | None = None
    description: str | None = None
    keywords: list[str] | None = None
    og_image: str | None = Field(default=None, alias="ogImage")
    og_title: str | None = Field(default=None, alias="ogTitle")
    og_description: str | None = Field(default=None, alias="ogDescription")


class ShellConfig(RecordModel):
    """Which parts of the page shell are visible."""
    show_logo: bool | None = Field(default=None, alias="showLogo")
    show_navbar: bool | None = Field(default=None, alias="showNavbar")
    show_footer: bool | None = Field(default=None, alias="showFooter")
    show_theme_toggle: bool | None = Field(default=None, alias="showThemeToggle")
    show_notifications: bool | None = Field(default=None, alias="showNotifications")
    show_settings: bool | None = Field(default=None, alias="showSettings")
    show_account: bool | None = Field(default=None, alias="showAccount")


class ComponentNode(BaseModel):
    """One node of a page's component tree."""
    type: str
    props: dict[str, Any] | None = None
    children: list[ComponentNode] | None = None
    content: Any = None


# =============================================================================
# Stored records
# =============================================================================

class BrandConfig(RecordModel):
    """Singleton brand record holding the global defaults."""
    project_key: str = Field(default=settings.BRAND_KEY, alias="ProjectKey")
    page_key: str = Field(default=settings.CONFIG_SUB_KEY, alias="PageKey")

    parent: str = Field(default="SirSluginston Co", alias="Parent")
    logo_url: str = Field(default="/logo.jpg", alias="LogoURL")
    version: str = Field(default="1.0.0", alias="Version")
    links: list[Link] | None = Field(default=None, alias="Links")

    brand_color: str = Field(default="#D2691E", alias="BrandColor")
    project_color: str = Field(default="#4B3A78", alias="ProjectColor")
    accent_color: str = Field(default="#FFD700", alias="AccentColor")
    light_color: str = Field(default="#FFFFF0", alias="LightColor")
    dark_color: str = Field(default="#2F2F2F", alias="DarkColor")
    shared_border_color: str | None = Field(default=None, alias="SharedBorderColor")

    font_sans: str = Field(default="Roboto, sans-serif", alias="FontSans")
    font_serif: str = Field(default="Lora, serif", alias="FontSerif")
    space_unit: int | None = Field(default=None, alias="SpaceUnit")
    radius_master: int | None = Field(default=None, alias="RadiusMaster")
    default_theme: Theme | None = Field(default=None, alias="DefaultTheme")

    allowed_roles: list[str] | None = Field(default=None, alias="AllowedRoles")
    denied_roles: list[str] | None = Field(default=None, alias="DeniedRoles")
    meta_tags: MetaTags | None = Field(default=None, alias="MetaTags")


class ProjectConfig(RecordModel):
    """One project's configuration; palette fields override the brand's."""
    project_key: str = Field(alias="ProjectKey")
    page_key: str = Field(default=settings.CONFIG_SUB_KEY, alias="PageKey")

    project_id: str = Field(default="1", alias="ProjectID")
    project_title: str = Field(default="", alias="ProjectTitle")
    project_slug: str | None = Field(default=None, alias="ProjectSlug")
    project_tagline: str | None = Field(default=None, alias="ProjectTagline")
    project_description: str | None = Field(default=None, alias="ProjectDescription")
    project_logo_url: str | None = Field(default=None, alias="ProjectLogoURL")
    # Unrecognized stored statuses pass through as plain strings
    project_status: ProjectStatus | str = Field(
        default=ProjectStatus.ACTIVE, alias="ProjectStatus", union_mode="left_to_right"
    )
    year_created: int | None = Field(default=None, alias="YearCreated")
    last_updated: str | None = Field(default=None, alias="LastUpdated")
    version: str = Field(default="1.0.0", alias="Version")
    links: list[Link] | None = Field(default=None, alias="Links")

    brand_color: str | None = Field(default=None, alias="BrandColor")
    project_color: str | None = Field(default=None, alias="ProjectColor")
    accent_color: str | None = Field(default=None, alias="AccentColor")
    light_color: str | None = Field(default=None, alias="LightColor")
    dark_color: str | None = Field(default=None, alias="DarkColor")
    shared_border_color: str | None = Field(default=None, alias="SharedBorderColor")

    project_order: int | None = Field(default=None, alias="ProjectOrder")
    project_tags: list[str] | None = Field(default=None, alias="ProjectTags")

    allowed_roles: list[str] | None = Field(default=None, alias="AllowedRoles")
    denied_roles: list[str] | None = Field(default=None, alias="DeniedRoles")
    meta_tags: MetaTags | None = Field(default=None, alias="MetaTags")


class PageConfig(RecordModel):
    """One routed page within a project."""
    project_key: str = Field(alias="ProjectKey")
    page_key: str = Field(alias="PageKey")

    page_title: str = Field(default="", alias="PageTitle")
    page_tagline: str | None = Field(default=None, alias="PageTagline")
    route: str = Field(default="/", alias="Route")
    version: str = Field(default="1.0.0", alias="Version")

    allowed_roles: list[str] | None = Field(default=None, alias="AllowedRoles")
    denied_roles: list[str] | None = Field(default=None, alias="DeniedRoles")

    has_shell: bool | None = Field(default=None, alias="HasShell")
    shell_config: ShellConfig | None = Field(default=None, alias="ShellConfig")

    in_navbar: bool | None = Field(default=None, alias="InNavbar")
    navbar_label: str | None = Field(default=None, alias="NavbarLabel")
    navbar_order: int | None = Field(default=None, alias="NavbarOrder")
    navbar_roles: list[str] | None = Field(default=None, alias="NavbarRoles")

    # Kept raw: the renderer turns malformed nodes into placeholders
    content_layout: Any = Field(default=None, alias="ContentLayout")
    meta_tags: MetaTags | None = Field(default=None, alias="MetaTags")
    last_updated: str | None = Field(default=None, alias="LastUpdated")


# =============================================================================
# Merged configuration views
# =============================================================================

class FrozenView(BaseModel):
    class Config:
        frozen = True


class BrandView(FrozenView):
    """Brand defaults with project overrides applied."""
    parent: str
    logo_url: str
    brand_color: str
    project_color: str
    accent_color: str
    light_color: str
    dark_color: str
    shared_border_color: str
    font_sans: str
    font_serif: str
    space_unit: int
    radius_master: int
    default_theme: Theme | None = None
    links: list[Link] | None = None
    allowed_roles: list[str] | None = None
    denied_roles: list[str] | None = None
    meta_tags: MetaTags | None = None


class ProjectView(FrozenView):
    """Project identity for the current navigation."""
    project_key: str
    project_id: str
    project_title: str
    project_slug: str | None = None
    project_tagline: str | None = None
    project_description: str | None = None
    project_logo_url: str | None = None
    project_status: ProjectStatus | str = Field(union_mode="left_to_right")
    year_created: int | None = None
    project_order: int | None = None
    project_tags: list[str] | None = None


class PageView(FrozenView):
    """Page settings for the current navigation."""
    page_key: str
    page_title: str
    page_tagline: str | None = None
    route: str
    allowed_roles: list[str] | None = None
    denied_roles: list[str] | None = None
    has_shell: bool = True
    shell_config: ShellConfig | None = None
    in_navbar: bool | None = None
    navbar_label: str | None = None
    navbar_order: int | None = None
    navbar_roles: list[str] | None = None
    content_layout: Any = None
    meta_tags: MetaTags | None = None


class MergedConfig(FrozenView):
    """Resolved Brand → Project → Page configuration."""
    brand: BrandView
    project: ProjectView
    page: PageView
