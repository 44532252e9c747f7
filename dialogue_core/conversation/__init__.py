"""
Dialogue Core Conversation Engine

Turn-based conversation management that provides:
- A state machine walking a graph of prompts on behalf of a subject
- Input routing through cancellers before prompts see it
- Automatic advancement through prompts that need no input
- Abandonment notification to shared listeners
- A fluent factory for building identically configured conversations
"""

from .base import (
    ConversationAbandonedEvent,
    ConversationError,
    ConversationState,
    PromptChainLimitExceeded,
)
from .context import ConversationContext
from .contracts import (
    Conversable,
    ConversationAbandonedListener,
    ConversationCanceller,
    ConversationPrefix,
    InteractiveConversable,
    Prompt,
)
from .prompts import (
    END_OF_CONVERSATION,
    BooleanPrompt,
    FixedSetPrompt,
    MessagePrompt,
    NumericPrompt,
    RegexPrompt,
    StaticMessagePrompt,
    StringPrompt,
    ValidatingPrompt,
)
from .cancellers import (
    ExactMatchConversationCanceller,
    InactivityConversationCanceller,
    ManuallyAbandonedConversationCanceller,
)
from .prefix import (
    NullConversationPrefix,
    StaticConversationPrefix,
)
from .engine import (
    DEFAULT_MAX_PROMPT_CHAIN,
    Conversation,
)
from .factory import ConversationFactory

__all__ = [
    # Base
    "ConversationState",
    "ConversationAbandonedEvent",
    "ConversationError",
    "PromptChainLimitExceeded",
    # Context
    "ConversationContext",
    # Contracts
    "Conversable",
    "InteractiveConversable",
    "Prompt",
    "ConversationCanceller",
    "ConversationPrefix",
    "ConversationAbandonedListener",
    # Prompts
    "END_OF_CONVERSATION",
    "MessagePrompt",
    "StringPrompt",
    "ValidatingPrompt",
    "FixedSetPrompt",
    "BooleanPrompt",
    "NumericPrompt",
    "RegexPrompt",
    "StaticMessagePrompt",
    # Cancellers
    "ExactMatchConversationCanceller",
    "InactivityConversationCanceller",
    "ManuallyAbandonedConversationCanceller",
    # Prefixes
    "NullConversationPrefix",
    "StaticConversationPrefix",
    # Engine
    "DEFAULT_MAX_PROMPT_CHAIN",
    "Conversation",
    "ConversationFactory",
]
