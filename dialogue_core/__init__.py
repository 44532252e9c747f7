"""
Dialogue Core
=============

Turn-based conversation engine for driving a subject through a graph
of prompts.

This package provides:
- The Conversation state machine (prompt traversal, input routing, abandonment)
- A fluent ConversationFactory for building configured conversations
- Capability contracts for prompts, cancellers, prefixes and listeners
- Standard prompt, canceller and prefix implementations
"""

__version__ = "1.0.0"
