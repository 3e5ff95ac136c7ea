"""Pydantic models shared across the client.

Provides type safety and validation for backend payloads and the
command/event interface.

Models:
    - Document, Question, Answer: session contents
    - User, AuthResponse, ChatReply: backend payloads
    - SessionSnapshot: read-only session view
    - OperationResult and subclasses: operation outcomes
    - ModelDescriptor: catalog entry for a backend model
"""

from versepoint.models.catalog import (
    AI_MODELS,
    DEFAULT_MODEL_ID,
    ModelDescriptor,
    get_model,
    get_model_by_name,
)
from versepoint.models.schemas import (
    Answer,
    AskResult,
    AuthResponse,
    ChatReply,
    Document,
    DocumentStatus,
    DocumentType,
    LoadResult,
    LocalFile,
    Message,
    OperationResult,
    Question,
    SessionSnapshot,
    SubmitResult,
    User,
)

__all__ = [
    "AI_MODELS",
    "DEFAULT_MODEL_ID",
    "Answer",
    "AskResult",
    "AuthResponse",
    "ChatReply",
    "Document",
    "DocumentStatus",
    "DocumentType",
    "LoadResult",
    "LocalFile",
    "Message",
    "ModelDescriptor",
    "OperationResult",
    "Question",
    "SessionSnapshot",
    "SubmitResult",
    "User",
    "get_model",
    "get_model_by_name",
]
