"""
Conversation Context

Binds the host and the subject of a conversation to its session data.
"""

from typing import TYPE_CHECKING, Any, Dict, Optional

if TYPE_CHECKING:
    from .contracts import Conversable


class ConversationContext:
    """
    Context for a single conversation.

    The host and subject are fixed at construction. Session data is
    free-form state read and written by prompts and cancellers; the
    engine itself never touches it.
    """

    def __init__(
        self,
        host: Any,
        for_whom: "Conversable",
        session_data: Optional[Dict[Any, Any]] = None,
    ):
        self._host = host
        self._for_whom = for_whom
        self._session_data: Dict[Any, Any] = session_data if session_data is not None else {}

    @property
    def host(self) -> Any:
        """The application that owns this conversation."""
        return self._host

    @property
    def for_whom(self) -> "Conversable":
        """The subject this conversation is mediating for."""
        return self._for_whom

    @property
    def session_data(self) -> Dict[Any, Any]:
        """The live session data mapping."""
        return self._session_data

    def get(self, key: Any, default: Any = None) -> Any:
        """Get a session data value."""
        return self._session_data.get(key, default)

    def set(self, key: Any, value: Any) -> None:
        """Set a session data value."""
        self._session_data[key] = value

    def all(self) -> Dict[Any, Any]:
        """Get a shallow copy of all session data."""
        return dict(self._session_data)


__all__ = [
    "ConversationContext",
]
