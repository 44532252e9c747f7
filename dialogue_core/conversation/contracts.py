"""
Capability Contracts

Abstract collaborators the conversation engine is built against: the
subject being talked to, prompt graph nodes, cancellers, prefixes and
abandonment listeners.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .base import ConversationAbandonedEvent
    from .context import ConversationContext
    from .engine import Conversation


class Conversable(ABC):
    """An entity a conversation can be held with."""

    @abstractmethod
    def begin_conversation(self, conversation: "Conversation") -> None:
        """Called when a conversation with this subject begins."""
        pass

    @abstractmethod
    def abandon_conversation(self, conversation: "Conversation") -> None:
        """Called when a conversation with this subject ends."""
        pass

    @abstractmethod
    def send_text(self, text: str) -> None:
        """Deliver a line of text to the subject."""
        pass


class InteractiveConversable(Conversable):
    """
    Marker for interactive, player-like subjects.

    Factories configured to exclude non-players only build full
    conversations for subjects of this type.
    """


class Prompt(ABC):
    """A node in the prompt graph."""

    @abstractmethod
    def display_text(self, context: "ConversationContext") -> str:
        """Text shown to the subject when this prompt is reached."""
        pass

    @abstractmethod
    def requires_input(self, context: "ConversationContext") -> bool:
        """Whether the conversation must wait for input before advancing."""
        pass

    @abstractmethod
    def advance(
        self,
        context: "ConversationContext",
        user_input: Optional[str],
    ) -> Optional["Prompt"]:
        """
        Produce the next prompt.

        Args:
            context: The conversation context
            user_input: Subject input, or None when auto-advancing

        Returns:
            The next prompt, or END_OF_CONVERSATION (None) at the end of the graph
        """
        pass


class ConversationCanceller(ABC):
    """Policy that can end a conversation based on input or external state."""

    def __init__(self):
        self._conversation: Optional["Conversation"] = None

    @property
    def conversation(self) -> Optional["Conversation"]:
        """The conversation this canceller is attached to, if any."""
        return self._conversation

    def attach_to(self, conversation: "Conversation") -> None:
        """Bind this canceller to a conversation. Called once by the engine."""
        self._conversation = conversation

    @abstractmethod
    def should_cancel(self, context: "ConversationContext", user_input: str) -> bool:
        """Return True to abandon the conversation on this input."""
        pass

    @abstractmethod
    def copy(self) -> "ConversationCanceller":
        """Return an independent, unattached canceller with the same configuration."""
        pass


class ConversationPrefix(ABC):
    """Formatter prepended to every line sent to the subject."""

    @abstractmethod
    def render(self, context: "ConversationContext") -> str:
        pass


class ConversationAbandonedListener(ABC):
    """Observer notified when a conversation is abandoned."""

    @abstractmethod
    def on_abandoned(self, event: "ConversationAbandonedEvent") -> None:
        pass


__all__ = [
    "Conversable",
    "InteractiveConversable",
    "Prompt",
    "ConversationCanceller",
    "ConversationPrefix",
    "ConversationAbandonedListener",
]
