"""
Conversation Cancellers

Policies that end a conversation early: on an escape sequence, after a
period of inactivity, or on an explicit abandon() call.
"""

import threading
from typing import TYPE_CHECKING, Any, Callable, Optional

import structlog

from .base import ConversationAbandonedEvent, ConversationState
from .context import ConversationContext
from .contracts import ConversationCanceller

if TYPE_CHECKING:
    from .engine import Conversation


logger = structlog.get_logger(__name__)

TimerFactory = Callable[[float, Callable[[], None]], Any]


def daemon_timer(interval: float, function: Callable[[], None]) -> threading.Timer:
    """Create a daemon threading.Timer so pending timeouts never block exit."""
    timer = threading.Timer(interval, function)
    timer.daemon = True
    return timer


class ExactMatchConversationCanceller(ConversationCanceller):
    """Cancels the conversation when the input equals an escape sequence."""

    def __init__(self, escape_sequence: str):
        super().__init__()
        self.escape_sequence = escape_sequence

    def should_cancel(self, context: ConversationContext, user_input: str) -> bool:
        return user_input == self.escape_sequence

    def copy(self) -> "ExactMatchConversationCanceller":
        return ExactMatchConversationCanceller(self.escape_sequence)


class InactivityConversationCanceller(ConversationCanceller):
    """
    Abandons the conversation after a period without input.

    The timer starts when the canceller is attached and restarts on every
    input. It fires on the timer's own thread, so abandonment arrives from
    outside the normal input path.

    While the conversation is unstarted the timer keeps re-arming and holds
    a reference to it. Hosts that discard a conversation without beginning
    it should call stop(); a stopped canceller never re-arms until it is
    attached again.
    """

    def __init__(
        self,
        host: Any,
        timeout_seconds: float,
        timer_factory: TimerFactory = daemon_timer,
    ):
        super().__init__()
        self.host = host
        self.timeout_seconds = timeout_seconds
        self._timer_factory = timer_factory
        self._timer: Optional[Any] = None
        self._stopped = False
        self._lock = threading.Lock()

    def attach_to(self, conversation: "Conversation") -> None:
        super().attach_to(conversation)
        with self._lock:
            self._stopped = False
        self._start_timer()

    def should_cancel(self, context: ConversationContext, user_input: str) -> bool:
        # Any input counts as activity
        self._start_timer()
        return False

    def copy(self) -> "InactivityConversationCanceller":
        return InactivityConversationCanceller(
            self.host,
            self.timeout_seconds,
            timer_factory=self._timer_factory,
        )

    def cancelling(self, conversation: "Conversation") -> None:
        """Hook called just before the conversation is abandoned for inactivity."""
        pass

    def stop(self) -> None:
        """Cancel any pending timeout and stop re-arming."""
        with self._lock:
            self._stopped = True
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

    def _start_timer(self) -> None:
        with self._lock:
            if self._stopped:
                return
            if self._timer is not None:
                self._timer.cancel()
            self._timer = self._timer_factory(self.timeout_seconds, self._on_timeout)
            self._timer.start()

    def _on_timeout(self) -> None:
        conversation = self._conversation
        if conversation is None:
            return

        state = conversation.state
        if state == ConversationState.UNSTARTED:
            self._start_timer()
        elif state == ConversationState.STARTED:
            logger.info(
                "inactivity_timeout",
                timeout_seconds=self.timeout_seconds,
            )
            try:
                self.cancelling(conversation)
                conversation.abandon(ConversationAbandonedEvent(conversation, self))
            except Exception:
                logger.exception("inactivity_cancel_failed")


class ManuallyAbandonedConversationCanceller(ConversationCanceller):
    """Cause recorded when a conversation is abandoned by an explicit call."""

    def attach_to(self, conversation: "Conversation") -> None:
        raise NotImplementedError("Manual abandonment is not attached to conversations")

    def should_cancel(self, context: ConversationContext, user_input: str) -> bool:
        return False

    def copy(self) -> "ManuallyAbandonedConversationCanceller":
        raise NotImplementedError("Manual abandonment cannot be copied")


__all__ = [
    "daemon_timer",
    "ExactMatchConversationCanceller",
    "InactivityConversationCanceller",
    "ManuallyAbandonedConversationCanceller",
]
