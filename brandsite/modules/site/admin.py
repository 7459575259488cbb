"""Admin editing workflow: validated project and page writes."""
import time
from datetime import datetime, timezone

from pydantic import BaseModel, Field

from brandsite.core.logging import get_logger
from brandsite.modules.config.defaults import BRAND_KEY, CONFIG_SUB_KEY
from brandsite.modules.config.schemas import (
    ComponentNode,
    PageConfig,
    ProjectConfig,
    ProjectStatus,
)
from .client import SiteApiClient
from .loader import SiteLoader

logger = get_logger(__name__)

DEFAULT_PROJECT_COLOR = "#4B3A78"
DEFAULT_PAGE_TITLE = "New Page"
DEFAULT_PAGE_ROUTE = "/new-page"


class DraftValidationError(ValueError):
    """A draft failed validation; nothing was written."""

    def __init__(self, problems: list[str]):
        super().__init__("; ".join(problems))
        self.problems = problems


class PageDraft(BaseModel):
    """A page being edited in the admin console."""
    page_key: str = Field(default_factory=lambda: f"Page-{int(time.time() * 1000)}")
    page_title: str = DEFAULT_PAGE_TITLE
    route: str = DEFAULT_PAGE_ROUTE
    version: str = "1.0.0"
    has_shell: bool = True
    in_navbar: bool = False
    navbar_label: str | None = None
    navbar_order: int | None = None
    navbar_roles: list[str] | None = None
    allowed_roles: list[str] | None = None
    denied_roles: list[str] | None = None
    content_layout: ComponentNode | None = None

    def to_page(self, project_key: str) -> PageConfig:
        return PageConfig(
            project_key=project_key,
            **self.model_dump(exclude_none=True),
        )


class ProjectDraft(BaseModel):
    """A project being created in the admin console."""
    project_key: str = ""
    project_title: str = ""
    project_color: str = DEFAULT_PROJECT_COLOR
    project_id: str = ""
    project_slug: str = ""
    project_tagline: str | None = None
    project_description: str | None = None
    project_logo_url: str | None = None
    project_status: ProjectStatus = ProjectStatus.COMING_SOON
    year_created: int | None = None
    version: str = "1.0.0"
    project_order: int | None = 0
    project_tags: list[str] = []
    pages: list[PageDraft] = []

    def validate_draft(self) -> None:
        """Raise ``DraftValidationError`` unless key, title and color are set."""
        problems = []
        if not self.project_key.strip():
            problems.append("Project Key is required")
        elif self.project_key == BRAND_KEY:
            problems.append(f"Project Key '{BRAND_KEY}' is reserved for the brand")
        if not self.project_title.strip():
            problems.append("Title is required")
        if not self.project_color.strip():
            problems.append("Color is required")
        if problems:
            raise DraftValidationError(problems)

    def to_project(self) -> ProjectConfig:
        """The project record, with the creation form's defaults applied."""
        return ProjectConfig(
            project_key=self.project_key,
            page_key=CONFIG_SUB_KEY,
            project_id=self.project_id or "1",
            project_title=self.project_title,
            project_slug=self.project_slug or self.project_key.lower(),
            project_tagline=self.project_tagline or None,
            project_description=self.project_description or None,
            project_logo_url=self.project_logo_url or None,
            project_status=self.project_status,
            project_color=self.project_color,
            year_created=self.year_created or datetime.now(timezone.utc).year,
            version=self.version or "1.0.0",
            project_order=self.project_order,
            project_tags=list(self.project_tags),
        )


class AdminWorkflow:
    """
    Validated admin writes through the site API.

    Drafts are validated before any request is sent. After every
    successful write the loader cache is dropped, so the next navigation
    resolves fresh records.
    """

    def __init__(self, client: SiteApiClient, loader: SiteLoader | None = None):
        self.client = client
        self.loader = loader

    def _invalidate(self, project_key: str | None = None) -> None:
        if self.loader is not None:
            self.loader.invalidate(project_key)

    async def create_project(self, draft: ProjectDraft) -> ProjectConfig:
        """
        Create a project and then its pages.

        Raises:
            DraftValidationError: the draft is incomplete; nothing is written
            ApiError: a write failed; pages already written are kept
        """
        draft.validate_draft()
        project = draft.to_project()

        try:
            await self.client.save_project_config(project)
            for page in draft.pages:
                await self.client.save_page_config(page.to_page(project.project_key))
        finally:
            self._invalidate(project.project_key)

        logger.info(
            "Project created",
            project_key=project.project_key,
            pages=len(draft.pages),
        )
        return project

    async def update_project(self, project: ProjectConfig, **changes) -> ProjectConfig:
        """Apply ``changes`` to an existing project record and save it."""
        updated = project.model_copy(update=changes)
        updated.page_key = CONFIG_SUB_KEY
        if not updated.project_title:
            raise DraftValidationError(["Title is required"])

        await self.client.save_project_config(updated)
        self._invalidate(updated.project_key)
        return updated

    async def save_page(self, project_key: str, page: PageDraft | PageConfig) -> PageConfig:
        """Save one page under ``project_key``."""
        if not project_key:
            raise DraftValidationError(["Please set Project Key first"])
        if isinstance(page, PageDraft):
            record = page.to_page(project_key)
        else:
            record = page.model_copy(update={"project_key": project_key})
        if record.page_key == CONFIG_SUB_KEY:
            raise DraftValidationError([f"PageKey '{CONFIG_SUB_KEY}' is reserved"])

        await self.client.save_page_config(record)
        self._invalidate(project_key)
        return record

    async def delete_project(self, project_key: str) -> None:
        """Delete a project and its pages; re-run after a failure to finish the cascade."""
        try:
            await self.client.delete_project(project_key)
        finally:
            self._invalidate(project_key)
        logger.info("Project deleted", project_key=project_key)
