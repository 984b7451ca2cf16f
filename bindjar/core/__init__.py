"""Process-wide configuration and logging setup."""

from bindjar.core.config import Settings, get_settings
from bindjar.core.logging import configure_structlog

__all__ = ["Settings", "get_settings", "configure_structlog"]
