"""Application Configuration.

Uses pydantic-settings for type-safe configuration from environment variables.

Usage:
    from tradehub.config import get_settings, setup_logging
    settings = get_settings()
    setup_logging()  # Call once at startup
    logger = logging.getLogger(__name__)
"""

from .settings import Settings, get_settings
from .logging import (
    bind_message_context,
    clear_message_context,
    setup_logging,
)

__all__ = [
    "Settings",
    "get_settings",
    "setup_logging",
    "bind_message_context",
    "clear_message_context",
]
