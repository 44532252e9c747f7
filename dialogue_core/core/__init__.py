# Dialogue Core ambient stack
# Configuration and logging shared by the conversation engine

from dialogue_core.core.config import (
    ConversationSettings,
    get_settings,
)
from dialogue_core.core.logging import (
    LogFormat,
    LogLevel,
    get_logger,
    setup_logging,
)

__all__ = [
    # Config
    "ConversationSettings",
    "get_settings",
    # Logging
    "LogFormat",
    "LogLevel",
    "get_logger",
    "setup_logging",
]
