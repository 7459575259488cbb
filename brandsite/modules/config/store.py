"""Key-value store clients for the config and user tables.

``ConfigStore`` exposes the primitive operations the rest of the service is
built on: get-item, put-item (full replace), delete-item,
query-by-partition and scan-with-filter. Records are plain dicts carrying
their key attributes (``ProjectKey``/``PageKey``) alongside every other
attribute, exactly as they are returned to API callers.
"""
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from brandsite.core.config import settings
from brandsite.core.logging import get_logger
from .models import ConfigItem, UserRecord

logger = get_logger(__name__)

ENTITY_KEY_ATTR = "ProjectKey"
SUB_KEY_ATTR = "PageKey"


class StoreUnavailableError(Exception):
    """Raised when the backing table cannot serve a request."""
    pass


class IndexUnavailableError(StoreUnavailableError):
    """Raised when the display-name index is missing or cannot be queried."""
    pass


class _BaseStore:
    def __init__(self, db: AsyncSession):
        self.db = db

    @asynccontextmanager
    async def _guard(self, operation: str, error_cls: type = StoreUnavailableError) -> AsyncIterator[None]:
        """Translate database failures into store errors, leaving the session usable."""
        try:
            yield
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Store operation failed: {operation}", error=str(e))
            raise error_cls(f"{operation} failed: {e}") from e


class ConfigStore(_BaseStore):
    """Client for the config table keyed by (ProjectKey, PageKey)."""

    @staticmethod
    def _to_item(row: ConfigItem) -> dict[str, Any]:
        item = dict(row.attributes or {})
        item[ENTITY_KEY_ATTR] = row.entity_key
        item[SUB_KEY_ATTR] = row.sub_key
        return item

    async def get_item(self, entity_key: str, sub_key: str) -> dict[str, Any] | None:
        """Point lookup. Returns None when no record exists."""
        async with self._guard("get_item"):
            row = await self.db.get(ConfigItem, (entity_key, sub_key))
        return self._to_item(row) if row else None

    async def put_item(self, item: dict[str, Any]) -> dict[str, Any]:
        """Create or fully replace the record identified by the item's key attributes."""
        entity_key = item.get(ENTITY_KEY_ATTR)
        sub_key = item.get(SUB_KEY_ATTR)
        if not entity_key or not sub_key:
            raise ValueError(f"Item requires both {ENTITY_KEY_ATTR} and {SUB_KEY_ATTR}")

        attributes = {
            k: v for k, v in item.items() if k not in (ENTITY_KEY_ATTR, SUB_KEY_ATTR)
        }
        async with self._guard("put_item"):
            await self.db.merge(
                ConfigItem(entity_key=entity_key, sub_key=sub_key, attributes=attributes)
            )
            await self.db.commit()
        return {**attributes, ENTITY_KEY_ATTR: entity_key, SUB_KEY_ATTR: sub_key}

    async def delete_item(self, entity_key: str, sub_key: str) -> bool:
        """Delete one record. Returns False when there was nothing to delete."""
        async with self._guard("delete_item"):
            row = await self.db.get(ConfigItem, (entity_key, sub_key))
            if row is None:
                return False
            await self.db.delete(row)
            await self.db.commit()
        return True

    async def query(self, entity_key: str) -> list[dict[str, Any]]:
        """All records under one partition key, ordered by sort key."""
        async with self._guard("query"):
            result = await self.db.execute(
                select(ConfigItem)
                .where(ConfigItem.entity_key == entity_key)
                .order_by(ConfigItem.sub_key)
            )
            rows = result.scalars().all()
        return [self._to_item(r) for r in rows]

    async def scan(self, *conditions) -> list[dict[str, Any]]:
        """
        Full-table scan filtered by column conditions.

        Args:
            conditions: SQLAlchemy expressions over ``ConfigItem`` columns,
                e.g. ``ConfigItem.sub_key == "Config"``

        Returns:
            Matching records
        """
        query = select(ConfigItem)
        for condition in conditions:
            query = query.where(condition)
        async with self._guard("scan"):
            result = await self.db.execute(query.order_by(ConfigItem.entity_key))
            rows = result.scalars().all()
        return [self._to_item(r) for r in rows]


class UserStore(_BaseStore):
    """Client for the user table keyed by the identity subject."""

    @staticmethod
    def _to_item(row: UserRecord) -> dict[str, Any]:
        item = dict(row.attributes or {})
        item[settings.USER_ID_KEY] = row.user_id
        return item

    async def get(self, user_id: str) -> dict[str, Any] | None:
        """Point lookup by user id."""
        async with self._guard("get_user"):
            row = await self.db.get(UserRecord, user_id)
        return self._to_item(row) if row else None

    async def put(self, record: dict[str, Any]) -> dict[str, Any]:
        """Create or fully replace a user record."""
        user_id = record.get(settings.USER_ID_KEY)
        if not user_id:
            raise ValueError(f"User record requires {settings.USER_ID_KEY}")

        attributes = {
            k: v for k, v in record.items() if k != settings.USER_ID_KEY
        }
        async with self._guard("put_user"):
            await self.db.merge(
                UserRecord(
                    user_id=user_id,
                    display_name=record.get("DisplayName") or None,
                    attributes=attributes,
                )
            )
            await self.db.commit()
        return dict(record)

    async def find_by_display_name(self, display_name: str) -> list[dict[str, Any]]:
        """
        Query the display-name index.

        Raises:
            IndexUnavailableError: the index is not provisioned or the lookup failed
        """
        if not settings.DISPLAY_NAME_INDEX_ENABLED:
            raise IndexUnavailableError("Display name index is not provisioned")

        async with self._guard("display_name_lookup", IndexUnavailableError):
            result = await self.db.execute(
                select(UserRecord).where(UserRecord.display_name == display_name)
            )
            rows = result.scalars().all()
        return [self._to_item(r) for r in rows]
