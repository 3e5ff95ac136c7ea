"""Login, registration and logout against the backend."""

import logging

from pydantic import SecretStr, ValidationError

from versepoint.api.gateway import ApiGateway
from versepoint.documents.manager import DocumentManager
from versepoint.errors import (
    ApiError,
    FailureReason,
    InputValidationError,
    VersePointError,
)
from versepoint.models.events import NoticeLevel
from versepoint.models.schemas import AuthResponse, LoadResult, OperationResult
from versepoint.session.state import SessionState
from versepoint.ui.presenter import Presenter, notify, report_error

logger = logging.getLogger(__name__)

LOGIN_PATH = "/auth/login"
REGISTER_PATH = "/auth/register"
MIN_PASSWORD_LENGTH = 6


class AuthService:
    """Authenticates the user and runs the mandatory post-login reload."""

    def __init__(
        self,
        session: SessionState,
        gateway: ApiGateway,
        documents: DocumentManager,
        presenter: Presenter,
    ) -> None:
        self._session = session
        self._gateway = gateway
        self._documents = documents
        self._presenter = presenter

    async def _authenticate(self, path: str, body: dict[str, str]) -> AuthResponse:
        payload = await self._gateway.request(path, method="POST", body=body)
        try:
            return AuthResponse.model_validate(payload)
        except ValidationError as e:
            raise ApiError(200, "Server returned an invalid login response") from e

    async def login(self, username: str, password: str | SecretStr) -> LoadResult:
        """Log in and load the user's documents and chat history.

        Returns:
            The result of the post-login reload, or the login failure.
        """
        if isinstance(password, SecretStr):
            password = password.get_secret_value()
        try:
            if not username.strip() or not password:
                raise InputValidationError(
                    "Please enter a username and password",
                    FailureReason.INVALID_CREDENTIALS,
                )
            auth = await self._authenticate(
                LOGIN_PATH, {"username": username.strip(), "password": password}
            )
            self._session.login(auth.token, auth.user)
        except VersePointError as e:
            logger.warning(f"Login failed for {username!r}: {e}")
            report_error(self._presenter, e, "Login failed: ")
            return LoadResult(success=False, reason=e.reason, error=e.message)

        notify(
            self._presenter,
            NoticeLevel.SUCCESS,
            f"Login successful! Welcome, {auth.user.name}.",
        )
        return await self._documents.load_all()

    async def register(
        self,
        name: str,
        email: str,
        username: str,
        password: str | SecretStr,
    ) -> LoadResult:
        """Create an account, start its session and load its (empty) data."""
        if isinstance(password, SecretStr):
            password = password.get_secret_value()
        try:
            if not (name.strip() and email.strip() and username.strip()):
                raise InputValidationError(
                    "Name, email and username are required",
                    FailureReason.INVALID_CREDENTIALS,
                )
            if len(password) < MIN_PASSWORD_LENGTH:
                raise InputValidationError(
                    f"Password must be at least {MIN_PASSWORD_LENGTH} characters long",
                    FailureReason.INVALID_CREDENTIALS,
                )
            auth = await self._authenticate(
                REGISTER_PATH,
                {
                    "name": name.strip(),
                    "email": email.strip(),
                    "username": username.strip(),
                    "password": password,
                },
            )
            self._session.register_session(auth.token, auth.user)
        except VersePointError as e:
            logger.warning(f"Signup failed for {username!r}: {e}")
            report_error(self._presenter, e, "Signup failed: ")
            return LoadResult(success=False, reason=e.reason, error=e.message)

        notify(
            self._presenter,
            NoticeLevel.SUCCESS,
            f"Account created successfully! Welcome, {auth.user.name}.",
        )
        return await self._documents.load_all()

    def logout(self) -> OperationResult:
        if self._session.logout():
            notify(self._presenter, NoticeLevel.SUCCESS, "Logged out successfully")
        return OperationResult(success=True)

