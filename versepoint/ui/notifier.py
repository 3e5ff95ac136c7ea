"""NiceGUI presenter that shows notices as toast notifications."""

import logging

from nicegui import ui

from versepoint.models.events import (
    Notice,
    NoticeLevel,
    OutcomeEvent,
    ThinkingStarted,
    ThinkingStopped,
    UploadFailed,
    UploadSucceeded,
)

logger = logging.getLogger(__name__)

# NiceGUI notification types per notice level
_NOTIFY_TYPES = {
    NoticeLevel.SUCCESS: "positive",
    NoticeLevel.INFO: "info",
    NoticeLevel.WARNING: "warning",
    NoticeLevel.ERROR: "negative",
}


class NiceGUIPresenter:
    """Shows notices and upload outcomes with ``ui.notify``.

    Must be used from inside a NiceGUI page context.
    """

    def __init__(self, timeout_ms: int = 4000) -> None:
        self._timeout_ms = timeout_ms
        self._thinking: ui.notification | None = None

    def emit(self, event: OutcomeEvent) -> None:
        if isinstance(event, Notice):
            ui.notify(
                event.message,
                type=_NOTIFY_TYPES[event.level],
                timeout=self._timeout_ms,
            )
        elif isinstance(event, UploadSucceeded):
            ui.notify(
                f"{event.filename} uploaded and processed successfully!",
                type="positive",
                timeout=self._timeout_ms,
            )
        elif isinstance(event, UploadFailed):
            ui.notify(
                f"Upload failed: {event.filename}: {event.message}",
                type="negative",
                timeout=self._timeout_ms,
            )
        elif isinstance(event, ThinkingStarted):
            self._dismiss_thinking()
            # Stays open until the answer or failure arrives
            self._thinking = ui.notification(
                "AI is thinking...", type="ongoing", spinner=True, timeout=None
            )
        elif isinstance(event, ThinkingStopped):
            self._dismiss_thinking()
        else:
            logger.debug(f"Ignoring {event.kind} event")

    def _dismiss_thinking(self) -> None:
        if self._thinking is not None:
            self._thinking.dismiss()
            self._thinking = None
