"""Core module for the Brand Site service."""
from .config import settings
from .database import Base, get_db, engine
from .auth import IdentityContext, get_identity, require_user, require_admin

__all__ = [
    "settings",
    "Base",
    "get_db",
    "engine",
    "IdentityContext",
    "get_identity",
    "require_user",
    "require_admin",
]
