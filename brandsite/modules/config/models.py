"""Config and user table models.

Both tables mirror a key-value store: the key columns are real columns and
every other attribute of a record lives in the ``attributes`` JSON column.
"""
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, JSON, String

from brandsite.core.config import settings
from brandsite.core.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ConfigItem(Base):
    """Brand, Project and Page records keyed by (ProjectKey, PageKey)."""
    __tablename__ = settings.CONFIG_TABLE

    entity_key = Column("ProjectKey", String(255), primary_key=True)
    sub_key = Column("PageKey", String(255), primary_key=True)
    attributes = Column(JSON, nullable=False, default=dict)
    written_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)


class UserRecord(Base):
    """User settings keyed by the identity provider's subject id."""
    __tablename__ = settings.USERS_TABLE

    user_id = Column(settings.USER_ID_KEY, String(255), primary_key=True)
    # Secondary lookup column for display-name uniqueness checks
    display_name = Column("DisplayName", String(255), nullable=True, index=True)
    attributes = Column(JSON, nullable=False, default=dict)
    written_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)
