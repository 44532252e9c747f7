"""
Standard Prompts

Reusable prompt graph nodes. The engine only depends on the Prompt
contract; these cover the common shapes of a dialog: plain messages,
free text questions and questions with validated answers.
"""

import math
import re
from abc import abstractmethod
from typing import (
    List,
    Optional,
    Pattern,
    Union,
)

from .context import ConversationContext
from .contracts import Prompt


# Returned from Prompt.advance to end the conversation.
END_OF_CONVERSATION: Optional[Prompt] = None


class MessagePrompt(Prompt):
    """
    Prompt that shows a message and moves on without waiting for input.
    """

    def requires_input(self, context: ConversationContext) -> bool:
        return False

    def advance(
        self,
        context: ConversationContext,
        user_input: Optional[str],
    ) -> Optional[Prompt]:
        return self.next_prompt(context)

    @abstractmethod
    def next_prompt(self, context: ConversationContext) -> Optional[Prompt]:
        """The prompt that follows this message."""
        pass


class StringPrompt(Prompt):
    """Prompt that waits for any free text answer."""

    def requires_input(self, context: ConversationContext) -> bool:
        return True


class ValidatingPrompt(Prompt):
    """
    Prompt that waits for input and repeats itself until the input is valid.

    Subclasses implement is_input_valid and accept_validated_input, and
    may override failed_validation_text to explain a rejection.
    """

    def requires_input(self, context: ConversationContext) -> bool:
        return True

    def advance(
        self,
        context: ConversationContext,
        user_input: Optional[str],
    ) -> Optional[Prompt]:
        if user_input is not None and user_input.strip() and self.is_input_valid(context, user_input):
            return self.accept_validated_input(context, user_input)

        message = self.failed_validation_text(context, user_input)
        if message:
            context.for_whom.send_text(message)
        return self

    @abstractmethod
    def is_input_valid(self, context: ConversationContext, user_input: str) -> bool:
        pass

    @abstractmethod
    def accept_validated_input(
        self,
        context: ConversationContext,
        user_input: str,
    ) -> Optional[Prompt]:
        pass

    def failed_validation_text(
        self,
        context: ConversationContext,
        user_input: Optional[str],
    ) -> Optional[str]:
        """Text sent when input is rejected; None sends nothing."""
        return None


class FixedSetPrompt(ValidatingPrompt):
    """Accepts only one of a fixed set of answers."""

    def __init__(self, *fixed_set: str):
        self.fixed_set: List[str] = list(fixed_set)

    def is_input_valid(self, context: ConversationContext, user_input: str) -> bool:
        return user_input in self.fixed_set

    def format_fixed_set(self) -> str:
        """Render the options as "[a, b, c]" for use in display text."""
        return f"[{', '.join(self.fixed_set)}]"


class BooleanPrompt(ValidatingPrompt):
    """Accepts yes/no style answers and passes a bool on."""

    TRUE_VALUES = ("true", "yes", "on", "y")
    FALSE_VALUES = ("false", "no", "off", "n")

    def is_input_valid(self, context: ConversationContext, user_input: str) -> bool:
        value = user_input.strip().lower()
        return value in self.TRUE_VALUES or value in self.FALSE_VALUES

    def accept_validated_input(
        self,
        context: ConversationContext,
        user_input: str,
    ) -> Optional[Prompt]:
        return self.accept_boolean_input(context, user_input.strip().lower() in self.TRUE_VALUES)

    @abstractmethod
    def accept_boolean_input(
        self,
        context: ConversationContext,
        value: bool,
    ) -> Optional[Prompt]:
        pass


class NumericPrompt(ValidatingPrompt):
    """Accepts integer or decimal answers."""

    def is_input_valid(self, context: ConversationContext, user_input: str) -> bool:
        number = self._parse(user_input)
        return number is not None and self.is_number_valid(context, number)

    def is_number_valid(
        self,
        context: ConversationContext,
        number: Union[int, float],
    ) -> bool:
        """Range hook; accepts every number by default."""
        return True

    def accept_validated_input(
        self,
        context: ConversationContext,
        user_input: str,
    ) -> Optional[Prompt]:
        return self.accept_number_input(context, self._parse(user_input))

    @abstractmethod
    def accept_number_input(
        self,
        context: ConversationContext,
        number: Union[int, float],
    ) -> Optional[Prompt]:
        pass

    def failed_validation_text(
        self,
        context: ConversationContext,
        user_input: Optional[str],
    ) -> Optional[str]:
        if user_input is None or self._parse(user_input) is None:
            return self.input_not_numeric_text(context, user_input)
        return None

    def input_not_numeric_text(
        self,
        context: ConversationContext,
        user_input: Optional[str],
    ) -> Optional[str]:
        return None

    @staticmethod
    def _parse(user_input: str) -> Optional[Union[int, float]]:
        text = user_input.strip()
        # Python literal forms like "1_000" are not user-facing numbers
        if "_" in text:
            return None
        try:
            return int(text)
        except ValueError:
            pass
        try:
            number = float(text)
        except ValueError:
            return None
        return number if math.isfinite(number) else None


class RegexPrompt(ValidatingPrompt):
    """Accepts input that fully matches a regular expression."""

    def __init__(self, pattern: Union[str, Pattern[str]]):
        self.pattern: Pattern[str] = re.compile(pattern) if isinstance(pattern, str) else pattern

    def is_input_valid(self, context: ConversationContext, user_input: str) -> bool:
        return self.pattern.fullmatch(user_input) is not None


class StaticMessagePrompt(MessagePrompt):
    """Message prompt with fixed text and a fixed successor."""

    def __init__(self, text: str, next: Optional[Prompt] = END_OF_CONVERSATION):
        self.text = text
        self.next = next

    def display_text(self, context: ConversationContext) -> str:
        return self.text

    def next_prompt(self, context: ConversationContext) -> Optional[Prompt]:
        return self.next


__all__ = [
    "END_OF_CONVERSATION",
    "MessagePrompt",
    "StringPrompt",
    "ValidatingPrompt",
    "FixedSetPrompt",
    "BooleanPrompt",
    "NumericPrompt",
    "RegexPrompt",
    "StaticMessagePrompt",
]
