"""Shared pytest fixtures for testing."""

from typing import Any, Callable, Dict, List, Optional

import pytest

from dialogue_core.conversation import (
    Conversable,
    Conversation,
    ConversationAbandonedEvent,
    ConversationAbandonedListener,
    ConversationContext,
    InteractiveConversable,
    Prompt,
)
from dialogue_core.core.config import ConversationSettings


# =============================================================================
# Subjects
# =============================================================================


class RecordingSubject(Conversable):
    """Non-interactive subject that records everything sent to it."""

    def __init__(self):
        self.sent: List[str] = []
        self.begun: List[Conversation] = []
        self.abandoned: List[Conversation] = []

    def begin_conversation(self, conversation: Conversation) -> None:
        self.begun.append(conversation)

    def abandon_conversation(self, conversation: Conversation) -> None:
        self.abandoned.append(conversation)

    def send_text(self, text: str) -> None:
        self.sent.append(text)


class RecordingPlayer(RecordingSubject, InteractiveConversable):
    """Interactive subject that records everything sent to it."""


# =============================================================================
# Listeners
# =============================================================================


class RecordingListener(ConversationAbandonedListener):
    """Listener that records every abandonment event."""

    def __init__(self, log: Optional[List[Any]] = None, name: str = ""):
        self.events: List[ConversationAbandonedEvent] = []
        self._log = log
        self._name = name

    def on_abandoned(self, event: ConversationAbandonedEvent) -> None:
        self.events.append(event)
        if self._log is not None:
            self._log.append(self._name)


# =============================================================================
# Prompts
# =============================================================================


class ScriptedPrompt(Prompt):
    """
    Prompt with fixed text whose successor is looked up by input.

    The "*" route matches any input, including None when auto-advancing.
    """

    def __init__(
        self,
        text: str,
        blocks: bool = True,
        routes: Optional[Dict[Any, Optional[Prompt]]] = None,
    ):
        self.text = text
        self.blocks = blocks
        self.routes: Dict[Any, Optional[Prompt]] = routes or {}
        self.advance_calls: List[Optional[str]] = []

    def display_text(self, context: ConversationContext) -> str:
        return self.text

    def requires_input(self, context: ConversationContext) -> bool:
        return self.blocks

    def advance(
        self,
        context: ConversationContext,
        user_input: Optional[str],
    ) -> Optional[Prompt]:
        self.advance_calls.append(user_input)
        if user_input in self.routes:
            return self.routes[user_input]
        return self.routes.get("*", self)


class FailingPrompt(ScriptedPrompt):
    """Prompt whose advance always raises."""

    def advance(
        self,
        context: ConversationContext,
        user_input: Optional[str],
    ) -> Optional[Prompt]:
        self.advance_calls.append(user_input)
        raise ValueError("prompt exploded")


class FakeTimer:
    """Stand-in for threading.Timer that only fires when told to."""

    def __init__(self, interval: float, function: Callable[[], None]):
        self.interval = interval
        self.function = function
        self.started = False
        self.cancelled = False

    def start(self) -> None:
        self.started = True

    def cancel(self) -> None:
        self.cancelled = True

    def fire(self) -> None:
        self.function()


class FakeTimerFactory:
    """Collects every FakeTimer created."""

    def __init__(self):
        self.timers: List[FakeTimer] = []

    def __call__(self, interval: float, function: Callable[[], None]) -> FakeTimer:
        timer = FakeTimer(interval, function)
        self.timers.append(timer)
        return timer

    @property
    def latest(self) -> FakeTimer:
        return self.timers[-1]


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def subject() -> RecordingSubject:
    return RecordingSubject()


@pytest.fixture
def player() -> RecordingPlayer:
    return RecordingPlayer()


@pytest.fixture
def listener() -> RecordingListener:
    return RecordingListener()


@pytest.fixture
def timer_factory() -> FakeTimerFactory:
    return FakeTimerFactory()


@pytest.fixture
def settings() -> ConversationSettings:
    """Settings isolated from the environment and any .env file."""
    return ConversationSettings(_env_file=None)


@pytest.fixture
def host() -> object:
    return object()
