"""Brand Site: brand / project / page configuration service and site library."""

__version__ = "1.0.0"
