"""Navigation helpers: page selection, navbar, access checks, project listing."""
from functools import cmp_to_key

from pydantic import BaseModel

from brandsite.core.auth import IdentityContext
from brandsite.modules.config.defaults import DEFAULT_LOGO_URL
from brandsite.modules.config.schemas import (
    MergedConfig,
    PageConfig,
    PageView,
    ProjectConfig,
    ProjectStatus,
)

# Sort position of pages without a NavbarOrder
UNORDERED_NAVBAR_POSITION = 999


class NavItem(BaseModel):
    """One navbar entry."""
    label: str
    route: str


def select_page(pages: list[PageConfig], path: str) -> PageConfig | None:
    """The page routed at ``path``, else the first page, else None."""
    for page in pages:
        if page.route == path:
            return page
    return pages[0] if pages else None


def can_view(
    allowed_roles: list[str] | None,
    denied_roles: list[str] | None,
    identity: IdentityContext | None,
) -> bool:
    """Role gate: a denied role always wins; an empty allow list means public."""
    if identity is not None and identity.has_any_role(denied_roles):
        return False
    if not allowed_roles:
        return True
    return identity is not None and identity.has_any_role(allowed_roles)


def can_view_page(page: PageView, identity: IdentityContext | None) -> bool:
    """Whether ``identity`` may open the resolved page."""
    return can_view(page.allowed_roles, page.denied_roles, identity)


def build_nav_items(
    pages: list[PageConfig], identity: IdentityContext | None
) -> list[NavItem]:
    """
    Navbar entries for the caller.

    Pages with ``InNavbar`` false are skipped; pages with ``NavbarRoles``
    are shown only to callers holding one of those roles.
    """
    visible = []
    for page in pages:
        if page.in_navbar is False:
            continue
        if page.navbar_roles:
            if identity is None or not identity.has_any_role(page.navbar_roles):
                continue
        visible.append(page)

    visible.sort(
        key=lambda p: p.navbar_order if p.navbar_order is not None else UNORDERED_NAVBAR_POSITION
    )
    return [
        NavItem(label=page.navbar_label or page.page_title, route=page.route)
        for page in visible
    ]


def _numeric_id(project: ProjectConfig) -> float:
    try:
        return float(project.project_id)
    except (TypeError, ValueError):
        return 0.0


def _compare_projects(a: ProjectConfig, b: ProjectConfig) -> int:
    if a.project_order is not None and b.project_order is not None:
        return a.project_order - b.project_order
    diff = _numeric_id(a) - _numeric_id(b)
    return (diff > 0) - (diff < 0)


def sort_projects(projects: list[ProjectConfig]) -> list[ProjectConfig]:
    """Order by ProjectOrder when both sides have one, else by numeric ProjectID."""
    return sorted(projects, key=cmp_to_key(_compare_projects))


def filter_projects(
    projects: list[ProjectConfig], status: ProjectStatus | None = None
) -> list[ProjectConfig]:
    """Projects with the given lifecycle status; all of them when status is None."""
    if status is None:
        return list(projects)
    return [p for p in projects if p.project_status == status]


def logo_url(config: MergedConfig) -> str:
    """Logo (and favicon) for the current navigation."""
    return config.project.project_logo_url or config.brand.logo_url or DEFAULT_LOGO_URL
