"""Config service: reads and admin writes over the config table."""
from datetime import datetime, timezone
from typing import Any

from brandsite.core.logging import get_logger
from .defaults import BRAND_KEY, CONFIG_SUB_KEY
from .models import ConfigItem
from .store import ConfigStore, ENTITY_KEY_ATTR, SUB_KEY_ATTR

logger = get_logger(__name__)

# Attributes that must be lists when present on a project record
_LIST_ATTRIBUTES = ("ProjectTags", "Links")


class InvalidRecordError(ValueError):
    """Raised when a record submitted for writing has unusable keys."""
    pass


def utc_timestamp() -> str:
    """ISO 8601 UTC timestamp with a ``Z`` suffix."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _normalize_project(item: dict[str, Any]) -> dict[str, Any]:
    project = dict(item)
    for attr in _LIST_ATTRIBUTES:
        if attr in project and not isinstance(project[attr], list):
            project[attr] = []
    return project


class ConfigService:
    """
    Operations behind the config and admin routes.

    Every write stamps ``LastUpdated`` server-side, overriding whatever the
    caller sent.
    """

    def __init__(self, store: ConfigStore):
        self.store = store

    # ── Reads ──────────────────────────────────────────────────────────

    async def get_brand(self) -> dict[str, Any] | None:
        """Brand record, or None when it has not been created."""
        return await self.store.get_item(BRAND_KEY, CONFIG_SUB_KEY)

    async def list_projects(self) -> list[dict[str, Any]]:
        """All project records; the brand record is never listed."""
        items = await self.store.scan(
            ConfigItem.sub_key == CONFIG_SUB_KEY,
            ConfigItem.entity_key != BRAND_KEY,
        )
        return [_normalize_project(item) for item in items]

    async def get_project(self, project_key: str) -> dict[str, Any] | None:
        """One project record, or None."""
        return await self.store.get_item(project_key, CONFIG_SUB_KEY)

    async def list_pages(self, project_key: str) -> list[dict[str, Any]]:
        """A project's pages, excluding its Config record."""
        items = await self.store.query(project_key)
        return [item for item in items if item.get(SUB_KEY_ATTR) != CONFIG_SUB_KEY]

    # ── Writes ─────────────────────────────────────────────────────────

    async def save_project(self, body: dict[str, Any]) -> dict[str, Any]:
        """Upsert a project record under the reserved ``Config`` sub key."""
        project_key = body.get(ENTITY_KEY_ATTR)
        if not project_key:
            raise InvalidRecordError("Project key is required")
        if project_key == BRAND_KEY:
            raise InvalidRecordError("Project key is reserved")

        item = {
            **body,
            ENTITY_KEY_ATTR: project_key,
            SUB_KEY_ATTR: CONFIG_SUB_KEY,
            "LastUpdated": utc_timestamp(),
        }
        saved = await self.store.put_item(item)
        logger.info("Project config saved", project_key=project_key)
        return saved

    async def save_page(self, body: dict[str, Any]) -> dict[str, Any]:
        """Upsert a page record. The ``Config`` sub key is reserved."""
        project_key = body.get(ENTITY_KEY_ATTR)
        page_key = body.get(SUB_KEY_ATTR)
        if not project_key or not page_key:
            raise InvalidRecordError("Project key and page key are required")
        if page_key == CONFIG_SUB_KEY:
            raise InvalidRecordError(f"Page key '{CONFIG_SUB_KEY}' is reserved")
        if project_key == BRAND_KEY:
            raise InvalidRecordError("Project key is reserved")

        item = {**body, "LastUpdated": utc_timestamp()}
        saved = await self.store.put_item(item)
        logger.info("Page config saved", project_key=project_key, page_key=page_key)
        return saved

    async def delete_project(self, project_key: str) -> int:
        """
        Delete a project and every record under its key, one by one.

        Not atomic: each delete commits on its own, so a failure part-way
        leaves the remaining records in place and the call must be re-run.

        Returns:
            Number of records deleted
        """
        if project_key == BRAND_KEY:
            raise InvalidRecordError("Project key is reserved")

        items = await self.store.query(project_key)
        deleted = 0
        for item in items:
            if await self.store.delete_item(item[ENTITY_KEY_ATTR], item[SUB_KEY_ATTR]):
                deleted += 1

        logger.info("Project deleted", project_key=project_key, records=deleted)
        return deleted
