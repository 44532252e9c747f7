"""
Conversation Factory

Fluent template for building identically configured conversations.
"""

from typing import (
    Any,
    Dict,
    List,
    Optional,
)

import structlog

from dialogue_core.core.config import ConversationSettings, get_settings

from .cancellers import (
    ExactMatchConversationCanceller,
    InactivityConversationCanceller,
)
from .contracts import (
    Conversable,
    ConversationAbandonedListener,
    ConversationCanceller,
    ConversationPrefix,
    InteractiveConversable,
    Prompt,
)
from .engine import Conversation
from .prefix import NullConversationPrefix
from .prompts import END_OF_CONVERSATION, StaticMessagePrompt


logger = structlog.get_logger(__name__)


class ConversationFactory:
    """
    Builds conversations from a shared set of defaults.

    Each built conversation gets its own copy of the session data and of
    every canceller. Abandoned listeners are shared: the same listener
    instance observes every conversation this factory builds.

    Usage:
        factory = (ConversationFactory(app)
            .with_first_prompt(WelcomePrompt())
            .with_escape_sequence("quit")
            .with_timeout(60)
            .add_conversation_abandoned_listener(listener))

        conversation = factory.build_conversation(player)
        conversation.begin()
    """

    def __init__(
        self,
        host: Any,
        settings: Optional[ConversationSettings] = None,
    ):
        self.host = host
        self.settings = settings or get_settings()

        self.is_modal = self.settings.modal
        self.local_echo_enabled = self.settings.local_echo
        self.prefix: ConversationPrefix = NullConversationPrefix()
        self.first_prompt: Optional[Prompt] = END_OF_CONVERSATION
        self.initial_session_data: Dict[Any, Any] = {}
        self.player_only_message: Optional[str] = None
        self.cancellers: List[ConversationCanceller] = []
        self.abandoned_listeners: List[ConversationAbandonedListener] = []

        if self.settings.default_timeout_seconds:
            self.with_timeout(self.settings.default_timeout_seconds)

    def with_modality(self, modal: bool) -> "ConversationFactory":
        """Set the modality of built conversations. The default is True."""
        self.is_modal = modal
        return self

    def with_local_echo(self, local_echo_enabled: bool) -> "ConversationFactory":
        """Echo submitted input back to the subject. The default is True."""
        self.local_echo_enabled = local_echo_enabled
        return self

    def with_prefix(self, prefix: ConversationPrefix) -> "ConversationFactory":
        """Set the prefix prepended to all output."""
        self.prefix = prefix
        return self

    def with_timeout(self, timeout_seconds: float) -> "ConversationFactory":
        """Abandon built conversations after this many seconds without input."""
        return self.with_conversation_canceller(
            InactivityConversationCanceller(self.host, timeout_seconds)
        )

    def with_first_prompt(self, first_prompt: Optional[Prompt]) -> "ConversationFactory":
        """Set the first prompt. The default ends the conversation immediately."""
        self.first_prompt = first_prompt
        return self

    def with_initial_session_data(
        self,
        initial_session_data: Dict[Any, Any],
    ) -> "ConversationFactory":
        """Set the entries each built conversation's session data starts with."""
        self.initial_session_data = initial_session_data
        return self

    def with_escape_sequence(self, escape_sequence: str) -> "ConversationFactory":
        """Abandon built conversations when the subject enters exactly this text."""
        return self.with_conversation_canceller(
            ExactMatchConversationCanceller(escape_sequence)
        )

    def with_conversation_canceller(
        self,
        canceller: ConversationCanceller,
    ) -> "ConversationFactory":
        """Add a canceller template; each conversation receives its own copy."""
        self.cancellers.append(canceller)
        return self

    def that_excludes_non_players_with_message(
        self,
        player_only_message: str,
    ) -> "ConversationFactory":
        """
        Only build real conversations for interactive subjects; any other
        subject just receives this message.
        """
        self.player_only_message = player_only_message
        return self

    def add_conversation_abandoned_listener(
        self,
        listener: ConversationAbandonedListener,
    ) -> "ConversationFactory":
        """Add a listener shared by every built conversation."""
        self.abandoned_listeners.append(listener)
        return self

    def build_conversation(self, for_whom: Conversable) -> Conversation:
        """Construct a conversation for a subject from this factory's defaults."""
        if self.player_only_message is not None and not isinstance(for_whom, InteractiveConversable):
            logger.debug(
                "conversation_rejected_non_player",
                subject=type(for_whom).__name__,
            )
            return Conversation(
                self.host,
                for_whom,
                StaticMessagePrompt(self.player_only_message),
            )

        conversation = Conversation(
            self.host,
            for_whom,
            self.first_prompt,
            dict(self.initial_session_data),
            max_prompt_chain=self.settings.max_prompt_chain,
        )
        conversation.modal = self.is_modal
        conversation.local_echo_enabled = self.local_echo_enabled
        conversation.prefix = self.prefix

        for canceller in self.cancellers:
            conversation.add_conversation_canceller(canceller.copy())

        for listener in self.abandoned_listeners:
            conversation.add_conversation_abandoned_listener(listener)

        logger.debug(
            "conversation_built",
            conversation_id=conversation.conversation_id,
            subject=type(for_whom).__name__,
            cancellers=len(self.cancellers),
            listeners=len(self.abandoned_listeners),
        )
        return conversation


__all__ = [
    "ConversationFactory",
]
