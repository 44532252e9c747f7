"""
Conversation prefixes.
"""

from .context import ConversationContext
from .contracts import ConversationPrefix


class NullConversationPrefix(ConversationPrefix):
    """Prefix that adds nothing."""

    def render(self, context: ConversationContext) -> str:
        return ""


class StaticConversationPrefix(ConversationPrefix):
    """Prefix of fixed text followed by a separator, e.g. "Shop > "."""

    def __init__(self, text: str, separator: str = " > "):
        self.text = text
        self.separator = separator

    def render(self, context: ConversationContext) -> str:
        return f"{self.text}{self.separator}"


__all__ = [
    "NullConversationPrefix",
    "StaticConversationPrefix",
]
