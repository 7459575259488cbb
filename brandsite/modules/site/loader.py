"""Per-navigation loading: fetch, resolve, render."""
import asyncio
from dataclasses import dataclass, field

from brandsite.core.auth import IdentityContext
from brandsite.core.config import settings
from brandsite.core.logging import get_logger
from brandsite.modules.config.schemas import BrandConfig, MergedConfig, PageConfig, ProjectConfig
from brandsite.modules.render import UINode, render_content_layout, to_html, unknown_types
from .client import SiteApiClient
from .navigation import NavItem, build_nav_items, can_view_page, logo_url, select_page
from .resolver import resolve

logger = get_logger(__name__)


@dataclass(frozen=True)
class SiteRecords:
    """Raw records fetched for one project."""
    brand: BrandConfig
    project: ProjectConfig | None
    pages: list[PageConfig]


@dataclass
class SiteView:
    """Everything needed to present one navigation."""
    config: MergedConfig
    pages: list[PageConfig] = field(default_factory=list)
    nav_items: list[NavItem] = field(default_factory=list)
    layout: UINode | None = None
    html: str = ""
    logo_url: str = ""
    can_view: bool = True


class SiteLoader:
    """
    Loads and resolves the site configuration for a navigation.

    Brand, project and pages are fetched concurrently and joined before
    resolution. Fetched records are cached per project key until
    ``invalidate`` is called; admin writes call it so the next load
    re-fetches instead of reusing a stale configuration.
    """

    def __init__(self, client: SiteApiClient, project_key: str | None = None):
        self.client = client
        self.project_key = project_key or settings.SITE_PROJECT_KEY
        self._cache: dict[str, SiteRecords] = {}

    def invalidate(self, project_key: str | None = None) -> None:
        """Drop cached records for one project, or all of them."""
        if project_key is None:
            self._cache.clear()
        else:
            self._cache.pop(project_key, None)

    async def fetch(self, project_key: str | None = None, refresh: bool = False) -> SiteRecords:
        """Fetch brand, project and pages in parallel (or return the cached set)."""
        key = project_key or self.project_key
        if not refresh and key in self._cache:
            return self._cache[key]

        brand, project, pages = await asyncio.gather(
            self.client.fetch_brand_config(),
            self.client.fetch_project_config(key),
            self.client.fetch_project_pages(key),
        )
        records = SiteRecords(brand=brand, project=project, pages=pages)
        self._cache[key] = records
        return records

    async def load(
        self,
        path: str = "/",
        identity: IdentityContext | None = None,
        project_key: str | None = None,
        refresh: bool = False,
    ) -> SiteView:
        """Resolve the configuration for ``path`` and render its page layout."""
        records = await self.fetch(project_key, refresh=refresh)
        page = select_page(records.pages, path)
        config = resolve(records.brand, records.project, page)

        allowed = can_view_page(config.page, identity)
        layout = render_content_layout(config.page.content_layout) if allowed else None
        if layout is not None:
            missing = unknown_types(layout)
            if missing:
                logger.warning(
                    "Unknown component types in page layout",
                    page_key=config.page.page_key,
                    types=missing,
                )

        return SiteView(
            config=config,
            pages=records.pages,
            nav_items=build_nav_items(records.pages, identity),
            layout=layout,
            html=to_html(layout) if layout is not None else "",
            logo_url=logo_url(config),
            can_view=allowed,
        )
