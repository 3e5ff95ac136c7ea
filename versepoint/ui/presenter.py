"""Presenter contract for outcome events.

Session, document and conversation components report every outcome through
``Presenter.emit``. Rendering is up to the implementation.
"""

import logging
from typing import Protocol

from versepoint.errors import FailureReason, VersePointError
from versepoint.models.events import (
    Notice,
    NoticeLevel,
    OutcomeEvent,
    UploadFailed,
    UploadSucceeded,
)

logger = logging.getLogger(__name__)


class Presenter(Protocol):
    """Sink for outcome events."""

    def emit(self, event: OutcomeEvent) -> None: ...


class LoggingPresenter:
    """Writes notices to the log and everything else at debug level."""

    _LEVELS = {
        NoticeLevel.SUCCESS: logging.INFO,
        NoticeLevel.INFO: logging.INFO,
        NoticeLevel.WARNING: logging.WARNING,
        NoticeLevel.ERROR: logging.ERROR,
    }

    def emit(self, event: OutcomeEvent) -> None:
        if isinstance(event, Notice):
            logger.log(self._LEVELS[event.level], event.message)
        elif isinstance(event, UploadSucceeded):
            logger.info(f"{event.filename} uploaded and processed successfully")
        elif isinstance(event, UploadFailed):
            logger.error(f"Upload of {event.filename} failed: {event.message}")
        else:
            logger.debug(f"{event.kind}: {event.model_dump(exclude={'kind'})}")


def notify(
    presenter: Presenter,
    level: NoticeLevel,
    message: str,
    reason: FailureReason | None = None,
) -> None:
    presenter.emit(Notice(level=level, message=message, reason=reason))


def report_error(presenter: Presenter, error: VersePointError, prefix: str = "") -> None:
    """Emit an error notice for a client error.

    Args:
        presenter: Destination.
        error: The error to report; its reason is attached to the notice.
        prefix: Text placed before the error message, e.g. ``"Login failed: "``.
    """
    notify(presenter, NoticeLevel.ERROR, f"{prefix}{error.message}", error.reason)
