"""Client application factory and command dispatch.

Wires the preference store, gateway, session state and managers together and
routes typed UI commands to the component that owns them.
"""

import logging
from collections.abc import Awaitable, Callable
from typing import Any

import httpx

from versepoint.api.gateway import ApiGateway
from versepoint.chat.conversation import ConversationManager
from versepoint.config import ClientConfig, configure_logging, get_client_config
from versepoint.documents.manager import DocumentManager
from versepoint.errors import FailureReason
from versepoint.models.catalog import get_model_by_name
from versepoint.models.commands import (
    AskQuestion,
    Command,
    LoadAll,
    Login,
    Logout,
    Register,
    SetModel,
    SetPreference,
    SubmitFiles,
    TogglePreference,
    ToggleTheme,
)
from versepoint.models.events import NoticeLevel
from versepoint.models.schemas import OperationResult, SessionSnapshot
from versepoint.preferences.store import JsonFileStore, KeyValueStore, PreferenceStore
from versepoint.session.auth import AuthService
from versepoint.session.state import SessionState
from versepoint.ui.presenter import LoggingPresenter, Presenter, notify

logger = logging.getLogger(__name__)

Handler = Callable[[Any], Awaitable[OperationResult]]


class VersePointApp:
    """Orchestration layer consumed by the UI.

    Use ``create_app`` to build one. Close it with ``aclose`` or ``async with``.
    """

    def __init__(
        self,
        config: ClientConfig,
        presenter: Presenter,
        preferences: PreferenceStore,
        session: SessionState,
        gateway: ApiGateway,
    ) -> None:
        self.config = config
        self.presenter = presenter
        self.preferences = preferences
        self.session = session
        self.gateway = gateway
        self.documents = DocumentManager(session, gateway, presenter)
        self.conversation = ConversationManager(session, gateway, presenter)
        self.auth = AuthService(session, gateway, self.documents, presenter)
        self._handlers: dict[type, Handler] = {
            Login: self._login,
            Register: self._register,
            Logout: self._logout,
            LoadAll: self._load_all,
            SubmitFiles: self._submit_files,
            AskQuestion: self._ask_question,
            SetModel: self._set_model,
            SetPreference: self._set_preference,
            TogglePreference: self._toggle_preference,
            ToggleTheme: self._toggle_theme,
        }

    async def dispatch(self, command: Command) -> OperationResult:
        """Run one UI command.

        Args:
            command: Typed command from the UI.

        Returns:
            The owning component's result model.
        """
        handler = self._handlers[type(command)]
        logger.debug(f"Dispatching {command.kind}")
        return await handler(command)

    def snapshot(self) -> SessionSnapshot:
        return self.session.snapshot()

    async def _login(self, command: Login) -> OperationResult:
        return await self.auth.login(command.username, command.password)

    async def _register(self, command: Register) -> OperationResult:
        return await self.auth.register(
            command.name, command.email, command.username, command.password
        )

    async def _logout(self, command: Logout) -> OperationResult:
        return self.auth.logout()

    async def _load_all(self, command: LoadAll) -> OperationResult:
        return await self.documents.load_all()

    async def _submit_files(self, command: SubmitFiles) -> OperationResult:
        return await self.documents.submit(command.files)

    async def _ask_question(self, command: AskQuestion) -> OperationResult:
        return await self.conversation.ask(command.question)

    async def _set_model(self, command: SetModel) -> OperationResult:
        return self.session.set_active_model(command.model_id)

    def _report_preference(self, key: str, result: OperationResult) -> OperationResult:
        if result.success:
            option = self.preferences.options(key)
            label = option.label if option else key
            notify(self.presenter, NoticeLevel.SUCCESS, f"{label} updated!")
        else:
            notify(
                self.presenter,
                NoticeLevel.ERROR,
                result.error or "Invalid preference",
                FailureReason.INVALID_PREFERENCE,
            )
        return result

    async def _set_preference(self, command: SetPreference) -> OperationResult:
        result = self.preferences.set(command.key, command.value)
        return self._report_preference(command.key, result)

    async def _toggle_preference(self, command: TogglePreference) -> OperationResult:
        result = self.preferences.toggle(command.key)
        return self._report_preference(command.key, result)

    async def _toggle_theme(self, command: ToggleTheme) -> OperationResult:
        result = self.preferences.toggle_theme()
        if result.success:
            notify(self.presenter, NoticeLevel.SUCCESS, "Theme updated successfully!")
        return result

    async def aclose(self) -> None:
        await self.gateway.aclose()

    async def __aenter__(self) -> "VersePointApp":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()


def _initial_model(preferences: PreferenceStore, config: ClientConfig) -> str:
    """Pick the preferred model by name, falling back to the configured default."""
    if not preferences.is_customized("defaultModel"):
        return config.default_model
    name = preferences.get("defaultModel")
    model = get_model_by_name(name) if isinstance(name, str) else None
    return model.id if model else config.default_model


def create_app(
    config: ClientConfig | None = None,
    presenter: Presenter | None = None,
    storage: KeyValueStore | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> VersePointApp:
    """Create and wire a client application.

    Args:
        config: Client configuration. Loads from environment if not provided.
        presenter: Outcome sink. Defaults to logging.
        storage: Preference storage. Defaults to a JSON file at
            ``config.preferences_path``.
        http_client: Optional preconfigured httpx client.

    Returns:
        Ready-to-use VersePointApp with preferences loaded and root logging
        configured at ``config.log_level`` unless the host already did.
    """
    config = config or get_client_config()
    configure_logging(config.log_level)
    presenter = presenter or LoggingPresenter()
    preferences = PreferenceStore(storage or JsonFileStore(config.preferences_path))
    preferences.load()

    session = SessionState(preferences, presenter, _initial_model(preferences, config))
    gateway = ApiGateway(config, session.token_value, client=http_client)

    logger.info(f"Verse Point client ready (backend {config.api_base_url})")
    return VersePointApp(config, presenter, preferences, session, gateway)
