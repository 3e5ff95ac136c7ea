"""Outcome events sent from the orchestration layer to the presenter.

Events:
    - Notice: user-facing success/info/warning/error message
    - UploadStarted / UploadProgress / UploadSucceeded / UploadFailed: per-file upload lifecycle
    - ThinkingStarted / ThinkingStopped: chat "thinking" indicator
    - SessionChanged: session state changed, views should re-render
"""

from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from versepoint.errors import FailureReason
from versepoint.models.schemas import Document, SessionSnapshot


class NoticeLevel(str, Enum):
    """Severity of a user-facing notice."""

    SUCCESS = "success"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class _Event(BaseModel):
    model_config = ConfigDict(frozen=True)


class Notice(_Event):
    """A message for the user.

    Attributes:
        level: Notice severity.
        message: Display text.
        reason: Failure reason, set for warnings and errors raised by an operation.
    """

    kind: Literal["notice"] = "notice"
    level: NoticeLevel
    message: str
    reason: FailureReason | None = None


class UploadStarted(_Event):
    kind: Literal["upload_started"] = "upload_started"
    filename: str
    size: int = Field(ge=0)


class UploadProgress(_Event):
    """Advisory upload progress.

    Attributes:
        filename: File being uploaded.
        percent: Coarse percentage, or None while progress is indeterminate.
    """

    kind: Literal["upload_progress"] = "upload_progress"
    filename: str
    percent: int | None = Field(None, ge=0, le=100)


class UploadSucceeded(_Event):
    kind: Literal["upload_succeeded"] = "upload_succeeded"
    filename: str
    document: Document


class UploadFailed(_Event):
    kind: Literal["upload_failed"] = "upload_failed"
    filename: str
    message: str
    reason: FailureReason | None = None


class ThinkingStarted(_Event):
    model_config = ConfigDict(frozen=True, protected_namespaces=())

    kind: Literal["thinking_started"] = "thinking_started"
    model_id: str


class ThinkingStopped(_Event):
    kind: Literal["thinking_stopped"] = "thinking_stopped"


class SessionChanged(_Event):
    kind: Literal["session_changed"] = "session_changed"
    snapshot: SessionSnapshot


OutcomeEvent = Annotated[
    Notice
    | UploadStarted
    | UploadProgress
    | UploadSucceeded
    | UploadFailed
    | ThinkingStarted
    | ThinkingStopped
    | SessionChanged,
    Field(discriminator="kind"),
]
