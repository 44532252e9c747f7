"""Unit tests for conversation cancellers and prefixes."""

import threading

import pytest

from dialogue_core.conversation import (
    Conversation,
    ConversationContext,
    ConversationState,
    ExactMatchConversationCanceller,
    InactivityConversationCanceller,
    ManuallyAbandonedConversationCanceller,
    NullConversationPrefix,
    StaticConversationPrefix,
)
from dialogue_core.conversation.cancellers import daemon_timer

from conftest import ScriptedPrompt


class TestExactMatchCanceller:
    """Tests for ExactMatchConversationCanceller."""

    def test_matches_exactly(self, host, subject):
        """Test only the exact escape sequence cancels."""
        canceller = ExactMatchConversationCanceller("quit")
        context = ConversationContext(host, subject)

        assert canceller.should_cancel(context, "quit") is True
        assert canceller.should_cancel(context, "QUIT") is False
        assert canceller.should_cancel(context, " quit") is False
        assert canceller.should_cancel(context, "quit now") is False

    def test_copy_is_unattached(self, host, subject):
        """Test copies keep configuration but not the conversation."""
        canceller = ExactMatchConversationCanceller("quit")
        canceller.attach_to(Conversation(host, subject, None))

        copy = canceller.copy()

        assert copy is not canceller
        assert copy.escape_sequence == "quit"
        assert copy.conversation is None


class TestInactivityCanceller:
    """Tests for InactivityConversationCanceller."""

    def make(self, host, subject, timer_factory, prompt=None):
        conversation = Conversation(host, subject, prompt or ScriptedPrompt("Name?"))
        canceller = InactivityConversationCanceller(host, 60, timer_factory=timer_factory)
        conversation.add_conversation_canceller(canceller)
        return conversation, canceller

    def test_timer_started_on_attach(self, host, subject, timer_factory):
        """Test attaching starts the inactivity timer."""
        self.make(host, subject, timer_factory)

        assert len(timer_factory.timers) == 1
        assert timer_factory.latest.started
        assert timer_factory.latest.interval == 60

    def test_input_restarts_timer(self, host, subject, timer_factory):
        """Test input resets the timer and never cancels by itself."""
        conversation, _ = self.make(host, subject, timer_factory)
        conversation.begin()
        first_timer = timer_factory.latest

        conversation.accept_input("Alice")

        assert first_timer.cancelled
        assert timer_factory.latest is not first_timer
        assert timer_factory.latest.started
        assert conversation.state == ConversationState.STARTED

    def test_timeout_abandons_started_conversation(self, host, subject, timer_factory, listener):
        """Test the timer firing abandons with the canceller as cause."""
        conversation, canceller = self.make(host, subject, timer_factory)
        conversation.add_conversation_abandoned_listener(listener)
        conversation.begin()

        timer_factory.latest.fire()

        assert conversation.state == ConversationState.ABANDONED
        assert listener.events[0].canceller is canceller

    def test_timeout_before_begin_restarts(self, host, subject, timer_factory, listener):
        """Test an unstarted conversation just gets a fresh timer."""
        conversation, _ = self.make(host, subject, timer_factory)
        conversation.add_conversation_abandoned_listener(listener)

        timer_factory.latest.fire()

        assert len(timer_factory.timers) == 2
        assert conversation.state == ConversationState.UNSTARTED
        assert listener.events == []

    def test_timeout_after_abandon_does_nothing(self, host, subject, timer_factory, listener):
        """Test a late timer does not notify twice."""
        conversation, _ = self.make(host, subject, timer_factory)
        conversation.add_conversation_abandoned_listener(listener)
        conversation.begin()
        conversation.abandon()

        timer_factory.latest.fire()

        assert len(listener.events) == 1
        assert len(timer_factory.timers) == 1

    def test_cancelling_hook_called(self, host, subject, timer_factory):
        """Test subclasses are told before abandonment."""
        seen = []

        class Noisy(InactivityConversationCanceller):
            def cancelling(self, conversation):
                seen.append(conversation.state)

        conversation = Conversation(host, subject, ScriptedPrompt("Name?"))
        conversation.add_conversation_canceller(Noisy(host, 5, timer_factory=timer_factory))
        conversation.begin()

        timer_factory.latest.fire()

        assert seen == [ConversationState.STARTED]
        assert conversation.state == ConversationState.ABANDONED

    def test_timer_errors_are_contained(self, host, subject, timer_factory):
        """Test a failing abandonment on the timer thread does not raise."""

        class Broken(InactivityConversationCanceller):
            def cancelling(self, conversation):
                raise RuntimeError("hook exploded")

        conversation = Conversation(host, subject, ScriptedPrompt("Name?"))
        conversation.add_conversation_canceller(Broken(host, 5, timer_factory=timer_factory))
        conversation.begin()

        timer_factory.latest.fire()

        assert conversation.state == ConversationState.STARTED

    def test_copy_keeps_timeout_and_factory(self, host, timer_factory):
        """Test copies are unattached and have no timer yet."""
        canceller = InactivityConversationCanceller(host, 42, timer_factory=timer_factory)

        copy = canceller.copy()

        assert copy.timeout_seconds == 42
        assert copy.host is host
        assert copy.conversation is None
        assert timer_factory.timers == []

    def test_stop_cancels_timer(self, host, subject, timer_factory):
        """Test stop cancels the pending timer."""
        _, canceller = self.make(host, subject, timer_factory)

        canceller.stop()

        assert timer_factory.latest.cancelled

    def test_stopped_canceller_does_not_rearm(self, host, subject, timer_factory):
        """Test a timer already firing on an unstarted conversation stays stopped."""
        conversation, canceller = self.make(host, subject, timer_factory)
        pending = timer_factory.latest

        canceller.stop()
        pending.fire()
        canceller.should_cancel(conversation.context, "Alice")

        assert timer_factory.timers == [pending]
        assert conversation.state == ConversationState.UNSTARTED

    def test_reattach_after_stop_restarts_timer(self, host, subject, timer_factory):
        _, canceller = self.make(host, subject, timer_factory)
        canceller.stop()

        canceller.attach_to(Conversation(host, subject, ScriptedPrompt("Again?")))

        assert len(timer_factory.timers) == 2
        assert timer_factory.latest.started

    def test_default_timer_is_daemon(self):
        """Test the default timer never blocks interpreter exit."""
        timer = daemon_timer(10, lambda: None)

        assert isinstance(timer, threading.Timer)
        assert timer.daemon is True


class TestManualCanceller:
    """Tests for ManuallyAbandonedConversationCanceller."""

    def test_never_cancels(self, host, subject):
        canceller = ManuallyAbandonedConversationCanceller()

        assert canceller.should_cancel(ConversationContext(host, subject), "anything") is False

    def test_cannot_attach_or_copy(self, host, subject):
        canceller = ManuallyAbandonedConversationCanceller()

        with pytest.raises(NotImplementedError):
            canceller.attach_to(Conversation(host, subject, None))
        with pytest.raises(NotImplementedError):
            canceller.copy()


class TestPrefixes:
    """Tests for conversation prefixes."""

    def test_null_prefix(self, host, subject):
        assert NullConversationPrefix().render(ConversationContext(host, subject)) == ""

    def test_static_prefix(self, host, subject):
        context = ConversationContext(host, subject)

        assert StaticConversationPrefix("Shop").render(context) == "Shop > "
        assert StaticConversationPrefix("[Bot]", separator=" ").render(context) == "[Bot] "
