"""Presentation adapters.

Thin sinks for outcome events. The orchestration layer only depends on the
``Presenter`` protocol; rendering technology stays outside the core.
"""

from versepoint.ui.presenter import LoggingPresenter, Presenter, notify, report_error

__all__ = ["LoggingPresenter", "Presenter", "notify", "report_error"]
