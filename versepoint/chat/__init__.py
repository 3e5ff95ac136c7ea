"""Conversation handling with a single-flight answering guard."""

from versepoint.chat.conversation import ConversationManager

__all__ = ["ConversationManager"]
