"""Session state and authentication.

``SessionState`` is the single source of truth for identity, documents,
transcript, active model and the answering guard. ``AuthService``
(in ``versepoint.session.auth``) drives login and registration.
"""

from versepoint.session.state import SessionState

__all__ = ["SessionState"]
