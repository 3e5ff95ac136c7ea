import mimetypes
from datetime import UTC, datetime
from enum import Enum
from pathlib import Path
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator

from versepoint.errors import FailureReason

_SIZE_UNITS = ("Bytes", "KB", "MB", "GB")


def format_file_size(size: int) -> str:
    """Render a byte count as human-readable text (e.g. ``"1.5 KB"``)."""
    if size <= 0:
        return "0 Bytes"
    value = float(size)
    unit = 0
    while value >= 1024 and unit < len(_SIZE_UNITS) - 1:
        value /= 1024
        unit += 1
    return f"{round(value, 1):g} {_SIZE_UNITS[unit]}"


def _utcnow() -> str:
    return datetime.now(UTC).isoformat()


class DocumentType(str, Enum):
    PDF = "PDF"
    MD = "MD"
    HTML = "HTML"


class DocumentStatus(str, Enum):
    UPLOADING = "uploading"
    PROCESSING = "processing"
    READY = "ready"
    FAILED = "failed"


class User(BaseModel):
    """Authenticated user as returned by the auth endpoints."""

    model_config = ConfigDict(frozen=True)

    id: str | int
    name: str
    email: str = ""
    username: str | None = None


class Document(BaseModel):
    """A document known to the backend.

    Attributes:
        id: Backend-assigned identifier.
        filename: Original file name.
        type: Document format.
        size: Byte count, or backend-formatted size text.
        upload_date: Upload timestamp (``uploadDate`` on the wire).
        status: Processing status.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str | int
    filename: str
    type: DocumentType
    size: int | str | None = None
    upload_date: str | None = Field(None, alias="uploadDate")
    status: DocumentStatus = DocumentStatus.PROCESSING

    @field_validator("type", mode="before")
    @classmethod
    def normalize_type(cls, v: object) -> object:
        """Accept ``pdf``, ``.md`` and similar spellings."""
        if isinstance(v, str):
            return v.strip().lstrip(".").upper()
        return v

    @field_validator("status", mode="before")
    @classmethod
    def normalize_status(cls, v: object) -> object:
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @property
    def display_size(self) -> str:
        if isinstance(self.size, int):
            return format_file_size(self.size)
        return self.size or "Unknown size"


class Question(BaseModel):
    """A user question in the transcript."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, protected_namespaces=())

    type: Literal["question"] = "question"
    content: str
    timestamp: str = Field(default_factory=_utcnow)
    model_id: str = Field(..., alias="model")


class Answer(BaseModel):
    """A backend answer in the transcript.

    Attributes:
        content: Answer text.
        source: Source citation text, if the backend supplied one.
        confidence: Backend confidence between 0 and 1.
        timestamp: ISO-8601 creation time.
        model_id: Catalog id of the model that answered.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, protected_namespaces=())

    type: Literal["answer"] = "answer"
    content: str
    source: str | None = None
    confidence: float | None = Field(None, ge=0.0, le=1.0)
    timestamp: str = Field(default_factory=_utcnow)
    model_id: str = Field(..., alias="model")

    @field_validator("source", mode="before")
    @classmethod
    def join_sources(cls, v: object) -> object:
        """Collapse a list of sources into one citation line."""
        if isinstance(v, list):
            return ", ".join(str(item) for item in v) or None
        return v


Message = Annotated[Question | Answer, Field(discriminator="type")]

message_list_adapter = TypeAdapter(list[Message])
document_list_adapter = TypeAdapter(list[Document])


class LocalFile(BaseModel):
    """A file picked by the user, not yet uploaded."""

    name: str
    content: bytes = Field(repr=False)
    content_type: str | None = None

    @classmethod
    def from_path(cls, path: str | Path) -> "LocalFile":
        path = Path(path)
        content_type, _ = mimetypes.guess_type(path.name)
        return cls(name=path.name, content=path.read_bytes(), content_type=content_type)

    @property
    def extension(self) -> str:
        """Lower-cased extension without the dot; empty when there is none."""
        if "." not in self.name:
            return ""
        return self.name.rsplit(".", 1)[1].lower()

    @property
    def size(self) -> int:
        return len(self.content)


class AuthResponse(BaseModel):
    """Payload of ``/auth/login`` and ``/auth/register``."""

    token: str = Field(..., min_length=1)
    user: User


class ChatReply(BaseModel):
    """Payload of ``POST /chat``."""

    answer: str
    sources: str | list[str] | None = None
    confidence: float | None = Field(None, ge=0.0, le=1.0)


class SessionSnapshot(BaseModel):
    """Read-only view of the session for presentation.

    Never carries the auth token itself.
    """

    model_config = ConfigDict(frozen=True)

    is_authenticated: bool
    is_ready: bool
    current_user: User | None
    documents: tuple[Document, ...]
    chat_history: tuple[Question | Answer, ...]
    active_model_id: str
    is_answering: bool
    epoch: int


class OperationResult(BaseModel):
    """Outcome of a client operation.

    Attributes:
        success: Whether the operation completed.
        reason: Failure reason when it did not.
        error: Human-readable error message.
    """

    success: bool
    reason: FailureReason | None = None
    error: str | None = None


class AskResult(OperationResult):
    answer: Answer | None = None


class LoadResult(OperationResult):
    document_count: int = 0
    message_count: int = 0


class SubmitResult(OperationResult):
    """Outcome of a batch upload.

    Attributes:
        rejected: Filenames filtered out by the extension allow-list.
        uploaded: Documents returned by the backend, in submission order.
        failed: Filename to error message for uploads that failed.
    """

    rejected: list[str] = Field(default_factory=list)
    uploaded: list[Document] = Field(default_factory=list)
    failed: dict[str, str] = Field(default_factory=dict)
