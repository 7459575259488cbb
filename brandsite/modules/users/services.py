"""User settings service."""
from typing import Any

from brandsite.core.auth import IdentityContext
from brandsite.core.config import settings
from brandsite.core.logging import get_logger
from brandsite.modules.config.services import utc_timestamp
from brandsite.modules.config.store import IndexUnavailableError, UserStore
from .schemas import IMMUTABLE_FIELDS, UserCreate, UserSettings

logger = get_logger(__name__)


class UserNotFoundError(Exception):
    """Raised when the caller has no user record yet."""
    pass


class DisplayNameTakenError(Exception):
    """Raised when another user already holds the requested display name."""
    pass


class UserService:
    """Create, read and update the caller's own user record."""

    def __init__(self, store: UserStore):
        self.store = store

    async def get_settings(self, identity: IdentityContext) -> dict[str, Any] | None:
        """The caller's record, or None."""
        return await self.store.get(identity.subject)

    async def ensure_display_name_available(self, display_name: str) -> None:
        """
        Check the display-name index.

        When the index cannot be queried the check is skipped with a
        warning and the write goes ahead.
        """
        try:
            matches = await self.store.find_by_display_name(display_name)
        except IndexUnavailableError as e:
            logger.warning(
                "Display name index unavailable, skipping uniqueness check",
                error=str(e),
            )
            return
        if matches:
            raise DisplayNameTakenError("Display name already taken")

    async def create(
        self, identity: IdentityContext, body: UserCreate
    ) -> tuple[dict[str, Any], bool]:
        """
        Create the caller's record.

        Idempotent: if a record already exists it is returned unchanged and
        nothing is written.

        Returns:
            (record, created)
        """
        existing = await self.store.get(identity.subject)
        if existing is not None:
            return existing, False

        if body.display_name:
            await self.ensure_display_name_available(body.display_name)

        now = utc_timestamp()
        provided = body.model_dump(exclude_none=True)
        provided["email"] = body.email or identity.email or ""
        record = UserSettings(
            user_id=identity.subject,
            created_at=now,
            updated_at=now,
            **provided,
        ).to_item()

        await self.store.put(record)
        logger.info("User record created", user_id=identity.subject)
        return record, True

    async def update(self, identity: IdentityContext, body: dict[str, Any]) -> dict[str, Any]:
        """
        Read-modify-write the caller's record.

        The key, ``RealName``, ``Email`` and ``CreatedAt`` are re-asserted
        from the stored record whatever the body says.
        """
        existing = await self.store.get(identity.subject)
        if existing is None:
            raise UserNotFoundError("User settings not found")

        new_name = body.get("DisplayName")
        if new_name and new_name != existing.get("DisplayName"):
            await self.ensure_display_name_available(new_name)

        updated = {**existing, **body}
        updated[settings.USER_ID_KEY] = identity.subject
        for field in IMMUTABLE_FIELDS + ("CreatedAt",):
            if field in existing:
                updated[field] = existing[field]
            else:
                updated.pop(field, None)
        updated["UpdatedAt"] = utc_timestamp()

        await self.store.put(updated)
        logger.info("User settings updated", user_id=identity.subject)
        return updated
