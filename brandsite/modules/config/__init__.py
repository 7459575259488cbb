"""Config module: brand, project and page records."""
from .routes import router
from .models import ConfigItem, UserRecord

__all__ = ["router", "ConfigItem", "UserRecord"]
