"""Session state: the client's single source of truth.

Holds auth identity, document collection, chat transcript, active model and
the single-flight answering guard. Every mutation goes through a named
operation here, and these always hold:

- documents and transcript are only non-empty while a token is present;
- logout clears token, user, documents and transcript in one step;
- the active model always resolves to a catalog entry;
- results are merged only into the session epoch they were requested under.

All operations are synchronous, so on a single event loop no reader can
observe a half-applied change.
"""

import logging
from collections.abc import Sequence

from pydantic import SecretStr

from versepoint.errors import (
    AuthenticationError,
    ConcurrencyError,
    FailureReason,
    InputValidationError,
    StaleSessionError,
)
from versepoint.models.catalog import DEFAULT_MODEL_ID, ModelDescriptor, get_model
from versepoint.models.events import NoticeLevel, SessionChanged
from versepoint.models.schemas import (
    Answer,
    Document,
    OperationResult,
    Question,
    SessionSnapshot,
    User,
)
from versepoint.preferences.store import PreferenceStore
from versepoint.ui.presenter import Presenter, notify, report_error

logger = logging.getLogger(__name__)


class SessionState:
    """Mutable session owned by one client instance."""

    def __init__(
        self,
        preferences: PreferenceStore,
        presenter: Presenter,
        default_model: str = DEFAULT_MODEL_ID,
    ) -> None:
        """Initialize a logged-out session.

        Args:
            preferences: Store that receives the selected model name.
            presenter: Sink for session notices and change events.
            default_model: Catalog id of the initial active model.

        Raises:
            InputValidationError: If ``default_model`` is not in the catalog.
        """
        if get_model(default_model) is None:
            raise InputValidationError(
                f"Unknown model: {default_model}", FailureReason.INVALID_MODEL
            )
        self._preferences = preferences
        self._presenter = presenter
        self._auth_token: SecretStr | None = None
        self._current_user: User | None = None
        self._documents: tuple[Document, ...] = ()
        self._chat_history: tuple[Question | Answer, ...] = ()
        self._active_model_id = default_model
        self._is_answering = False
        self._is_ready = False
        self._epoch = 0

    def __repr__(self) -> str:
        user = self._current_user.name if self._current_user else None
        return (
            f"SessionState(user={user!r}, authenticated={self.is_authenticated}, "
            f"documents={len(self._documents)}, messages={len(self._chat_history)}, "
            f"model={self._active_model_id!r}, answering={self._is_answering}, "
            f"epoch={self._epoch})"
        )

    # Read access

    @property
    def is_authenticated(self) -> bool:
        return self._auth_token is not None

    @property
    def current_user(self) -> User | None:
        return self._current_user

    @property
    def documents(self) -> tuple[Document, ...]:
        return self._documents

    @property
    def chat_history(self) -> tuple[Question | Answer, ...]:
        return self._chat_history

    @property
    def active_model_id(self) -> str:
        return self._active_model_id

    @property
    def active_model(self) -> ModelDescriptor:
        model = get_model(self._active_model_id)
        if model is None:
            raise InputValidationError(
                f"Unknown model: {self._active_model_id}", FailureReason.INVALID_MODEL
            )
        return model

    @property
    def is_answering(self) -> bool:
        return self._is_answering

    @property
    def is_ready(self) -> bool:
        return self._is_ready

    @property
    def epoch(self) -> int:
        return self._epoch

    def token_value(self) -> str | None:
        """Raw bearer token for the HTTP layer. Never log this."""
        if self._auth_token is None:
            return None
        return self._auth_token.get_secret_value()

    def require_token(self) -> None:
        """Raise AuthenticationError when nobody is logged in."""
        if self._auth_token is None:
            raise AuthenticationError("Please log in first")

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            is_authenticated=self.is_authenticated,
            is_ready=self._is_ready,
            current_user=self._current_user,
            documents=self._documents,
            chat_history=self._chat_history,
            active_model_id=self._active_model_id,
            is_answering=self._is_answering,
            epoch=self._epoch,
        )

    def _publish(self) -> None:
        self._presenter.emit(SessionChanged(snapshot=self.snapshot()))

    def check_epoch(self, epoch: int, what: str) -> None:
        """Raise ``StaleSessionError`` if ``epoch`` is no longer current."""
        if epoch != self._epoch:
            raise StaleSessionError(
                f"Discarded {what}: the session changed while the request was in flight"
            )

    # Authentication

    def login(self, token: str, user: User) -> None:
        """Start a new session for ``user``.

        Replaces any previous identity and contents at once. The session is
        not ready until ``replace_contents`` runs for the new epoch.

        Raises:
            AuthenticationError: If the token is empty.
        """
        if not token:
            raise AuthenticationError("Server returned an empty token")
        self._auth_token = SecretStr(token)
        self._current_user = user
        self._documents = ()
        self._chat_history = ()
        self._is_ready = False
        self._epoch += 1
        logger.info(f"Session {self._epoch} started for user {user.id}")
        self._publish()

    def register_session(self, token: str, user: User) -> None:
        """Start a session for a freshly registered account."""
        logger.info(f"Registered new account {user.id}")
        self.login(token, user)

    def logout(self) -> bool:
        """Clear identity and contents.

        Idempotent: calling it while logged out changes nothing.

        Returns:
            True if a session was cleared.
        """
        if self._auth_token is None and self._current_user is None:
            return False
        self._auth_token = None
        self._current_user = None
        self._documents = ()
        self._chat_history = ()
        self._is_ready = False
        self._epoch += 1
        logger.info(f"Session cleared, now at epoch {self._epoch}")
        self._publish()
        return True

    # Model selection

    def set_active_model(self, model_id: str) -> OperationResult:
        """Switch the model used for new questions.

        Unknown ids leave the active model unchanged. A known id is also
        written into the ``defaultModel`` preference by display name.
        """
        model = get_model(model_id)
        if model is None:
            error = InputValidationError(f"Unknown model: {model_id}", FailureReason.INVALID_MODEL)
            report_error(self._presenter, error)
            return OperationResult(success=False, reason=error.reason, error=error.message)

        self._active_model_id = model.id
        self._preferences.set("defaultModel", model.name)
        notify(self._presenter, NoticeLevel.SUCCESS, f"Switched to {model.name}")
        self._publish()
        return OperationResult(success=True)

    # Content merges, used by the document and conversation managers

    def replace_contents(
        self,
        documents: Sequence[Document],
        chat_history: Sequence[Question | Answer],
        epoch: int,
    ) -> None:
        """Replace documents and transcript wholesale and mark the session ready.

        Raises:
            StaleSessionError: If the session changed since ``epoch``.
            AuthenticationError: If nobody is logged in.
        """
        self.check_epoch(epoch, "session reload")
        self.require_token()
        self._documents = tuple(documents)
        self._chat_history = tuple(chat_history)
        self._is_ready = True
        self._publish()

    def prepend_document(self, document: Document, epoch: int) -> None:
        self.check_epoch(epoch, f"upload of {document.filename}")
        self.require_token()
        self._documents = (document, *self._documents)
        self._publish()

    def append_message(self, message: Question | Answer, epoch: int) -> None:
        self.check_epoch(epoch, f"{message.type}")
        self.require_token()
        self._chat_history = (*self._chat_history, message)
        self._publish()

    # Single-flight guard

    def begin_answering(self) -> None:
        """Take the answering guard.

        Raises:
            ConcurrencyError: If a question is already outstanding.
        """
        if self._is_answering:
            raise ConcurrencyError("Please wait for the current answer")
        self._is_answering = True

    def end_answering(self) -> None:
        self._is_answering = False
        self._publish()
