"""Site module: the API client and per-navigation logic of the website."""
from .admin import AdminWorkflow, DraftValidationError, PageDraft, ProjectDraft
from .client import ApiError, SiteApiClient
from .loader import SiteLoader, SiteRecords, SiteView
from .navigation import (
    NavItem,
    build_nav_items,
    can_view,
    can_view_page,
    filter_projects,
    logo_url,
    select_page,
    sort_projects,
)
from .resolver import resolve
from .theme import DocumentRoot, apply_theme, theme_variables

__all__ = [
    "AdminWorkflow",
    "DraftValidationError",
    "PageDraft",
    "ProjectDraft",
    "ApiError",
    "SiteApiClient",
    "SiteLoader",
    "SiteRecords",
    "SiteView",
    "NavItem",
    "build_nav_items",
    "can_view",
    "can_view_page",
    "filter_projects",
    "logo_url",
    "select_page",
    "sort_projects",
    "resolve",
    "DocumentRoot",
    "apply_theme",
    "theme_variables",
]
