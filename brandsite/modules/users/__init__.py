"""Users module: per-caller settings records."""
from .routes import router

__all__ = ["router"]
