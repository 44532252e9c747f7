"""
Conversation Engine

The Conversation state machine: walks a prompt graph one node at a time
on behalf of a subject, routes the subject's input through cancellers and
prompts, and notifies listeners when the conversation ends.
"""

import threading
import uuid
from typing import (
    Any,
    Dict,
    List,
    Optional,
)

import structlog

from .base import (
    ConversationAbandonedEvent,
    ConversationState,
    PromptChainLimitExceeded,
)
from .cancellers import ManuallyAbandonedConversationCanceller
from .context import ConversationContext
from .contracts import (
    Conversable,
    ConversationAbandonedListener,
    ConversationCanceller,
    ConversationPrefix,
    Prompt,
)
from .prefix import NullConversationPrefix


logger = structlog.get_logger(__name__)

DEFAULT_MAX_PROMPT_CHAIN = 1000


class Conversation:
    """
    A conversation with a single subject.

    States:
        UNSTARTED: no current prompt, never abandoned
        STARTED: a current prompt is present
        ABANDONED: no current prompt, abandoned

    The input path (begin/accept_input) is driven by one caller at a time.
    abandon() and listener changes are serialized by a lock because an
    inactivity canceller may abandon from its own timer thread.
    """

    def __init__(
        self,
        host: Any,
        for_whom: Conversable,
        first_prompt: Optional[Prompt],
        initial_session_data: Optional[Dict[Any, Any]] = None,
        max_prompt_chain: int = DEFAULT_MAX_PROMPT_CHAIN,
    ):
        self.conversation_id = str(uuid.uuid4())
        self._first_prompt = first_prompt
        self._current_prompt: Optional[Prompt] = None
        self._abandoned = False
        self._context = ConversationContext(
            host,
            for_whom,
            initial_session_data if initial_session_data is not None else {},
        )

        # Behavior
        self.modal = True
        self.local_echo_enabled = True
        self.prefix: ConversationPrefix = NullConversationPrefix()
        self.max_prompt_chain = max_prompt_chain

        # Collaborators
        self._cancellers: List[ConversationCanceller] = []
        self._abandoned_listeners: List[ConversationAbandonedListener] = []

        self._lock = threading.RLock()
        self._logger = logger.bind(conversation_id=self.conversation_id)

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def state(self) -> ConversationState:
        """Get current state."""
        if self._current_prompt is not None:
            return ConversationState.STARTED
        if self._abandoned:
            return ConversationState.ABANDONED
        return ConversationState.UNSTARTED

    @property
    def for_whom(self) -> Conversable:
        """The subject this conversation is mediating for."""
        return self._context.for_whom

    @property
    def context(self) -> ConversationContext:
        return self._context

    @property
    def first_prompt(self) -> Optional[Prompt]:
        return self._first_prompt

    @property
    def current_prompt(self) -> Optional[Prompt]:
        return self._current_prompt

    @property
    def is_modal(self) -> bool:
        """
        If a conversation is modal, all other messages directed to the
        subject are suppressed by the host for its duration.
        """
        return self.modal

    @property
    def cancellers(self) -> List[ConversationCanceller]:
        return list(self._cancellers)

    @property
    def abandoned_listeners(self) -> List[ConversationAbandonedListener]:
        with self._lock:
            return list(self._abandoned_listeners)

    # -------------------------------------------------------------------------
    # Configuration
    # -------------------------------------------------------------------------

    def add_conversation_canceller(self, canceller: ConversationCanceller) -> None:
        """Attach a canceller to this conversation."""
        canceller.attach_to(self)
        self._cancellers.append(canceller)

    def add_conversation_abandoned_listener(
        self,
        listener: ConversationAbandonedListener,
    ) -> None:
        with self._lock:
            self._abandoned_listeners.append(listener)

    def remove_conversation_abandoned_listener(
        self,
        listener: ConversationAbandonedListener,
    ) -> None:
        with self._lock:
            if listener in self._abandoned_listeners:
                self._abandoned_listeners.remove(listener)

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def begin(self) -> None:
        """
        Start the conversation and display the first prompt.

        Does nothing while the conversation is already started. Errors
        raised by the subject or the prompts propagate to the caller.
        """
        if self._current_prompt is not None:
            return

        with self._lock:
            self._abandoned = False
            self._current_prompt = self._first_prompt
        self._context.for_whom.begin_conversation(self)
        self._logger.debug("conversation_started")
        self.output_next_prompt()

    def accept_input(self, user_input: str) -> None:
        """
        Pass subject input to the current prompt and display what follows.

        Input is dropped if the conversation is not started. Any error
        raised while handling the input is logged and swallowed; the
        conversation keeps whatever state it had reached.
        """
        try:
            prompt = self._current_prompt
            if prompt is None:
                return

            if self.local_echo_enabled:
                self._send(user_input)

            for canceller in list(self._cancellers):
                if canceller.should_cancel(self._context, user_input):
                    self.abandon(ConversationAbandonedEvent(self, canceller))
                    return

            next_prompt = prompt.advance(self._context, user_input)
            if not self._move_to(next_prompt):
                return
            self.output_next_prompt()
        except Exception:
            self._logger.exception("conversation_input_failed")

    def abandon(self, details: Optional[ConversationAbandonedEvent] = None) -> None:
        """
        End the conversation and notify listeners.

        Safe to call more than once; only the first call has an effect.

        Args:
            details: Why the conversation ended. Defaults to a manual abandonment.
        """
        if details is None:
            details = ConversationAbandonedEvent(self, ManuallyAbandonedConversationCanceller())

        with self._lock:
            if self._abandoned:
                return

            self._abandoned = True
            self._current_prompt = None
            self._context.for_whom.abandon_conversation(self)

            self._logger.info("conversation_abandoned", **details.to_dict())

            for listener in list(self._abandoned_listeners):
                listener.on_abandoned(details)

    def output_next_prompt(self) -> None:
        """
        Display the current prompt, following non-interactive prompts until
        one requires input. Abandons the conversation at the end of the graph.

        Raises:
            PromptChainLimitExceeded: more than max_prompt_chain prompts were
                followed without reaching one that requires input
        """
        hops = 0
        while True:
            prompt = self._current_prompt
            if prompt is None:
                self.abandon(ConversationAbandonedEvent(self))
                return

            self._send(prompt.display_text(self._context))
            if prompt.requires_input(self._context):
                return

            if hops >= self.max_prompt_chain:
                self._logger.error(
                    "prompt_chain_limit_exceeded",
                    limit=self.max_prompt_chain,
                    prompt=type(prompt).__name__,
                )
                raise PromptChainLimitExceeded(self.max_prompt_chain)
            hops += 1

            if not self._move_to(prompt.advance(self._context, None)):
                return

    def _move_to(self, next_prompt: Optional[Prompt]) -> bool:
        # An abandon from another thread may land while a prompt advances
        with self._lock:
            if self._abandoned:
                return False
            self._current_prompt = next_prompt
            return True

    def _send(self, text: str) -> None:
        self._context.for_whom.send_text(self.prefix.render(self._context) + text)


__all__ = [
    "DEFAULT_MAX_PROMPT_CHAIN",
    "Conversation",
]
