"""
Conversation Engine - Base Classes and Types

This module defines the foundational types for the conversation engine.
"""

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import (
    TYPE_CHECKING,
    Any,
    Dict,
    Optional,
)

if TYPE_CHECKING:
    from .contracts import ConversationCanceller
    from .engine import Conversation


class ConversationState(str, Enum):
    """Lifecycle states of a conversation."""

    UNSTARTED = "unstarted"
    STARTED = "started"
    ABANDONED = "abandoned"


@dataclass
class ConversationAbandonedEvent:
    """
    Details about why a conversation was abandoned.

    A canceller of None means the prompt graph simply ran out of prompts.
    """

    conversation: "Conversation"
    canceller: Optional["ConversationCanceller"] = None
    timestamp: float = field(default_factory=time.time)

    @property
    def graceful_exit(self) -> bool:
        """True if the conversation ended by reaching the end of the prompt graph."""
        return self.canceller is None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "graceful_exit": self.graceful_exit,
            "canceller": type(self.canceller).__name__ if self.canceller else None,
            "timestamp": self.timestamp,
        }


# =============================================================================
# Exceptions
# =============================================================================


class ConversationError(Exception):
    """Base exception for conversation engine errors."""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or "CONVERSATION_ERROR"
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "code": self.code,
            "details": self.details,
        }


class PromptChainLimitExceeded(ConversationError):
    """Too many non-interactive prompts were traversed in a single output step."""

    def __init__(self, limit: int):
        super().__init__(
            f"Traversed {limit} prompts without reaching one that requires input",
            code="PROMPT_CHAIN_LIMIT",
            details={"limit": limit},
        )
        self.limit = limit


__all__ = [
    "ConversationState",
    "ConversationAbandonedEvent",
    "ConversationError",
    "PromptChainLimitExceeded",
]
