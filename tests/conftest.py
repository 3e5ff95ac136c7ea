"""Pytest fixtures and shared test configuration.

Provides reusable fixtures for unit and integration tests.

Fixtures:
    - backend: In-memory FastAPI backend with a demo account
    - http_client: HTTPX client wired to the backend through ASGITransport
    - config: Client configuration pointing at the fake backend
    - presenter: Presenter that records every emitted event
    - app: Fully wired client application
    - logged_in_app: Client application logged in as the demo user
"""

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient

from tests.fake_backend import FakeBackend
from versepoint.app import VersePointApp, create_app
from versepoint.config import ClientConfig
from versepoint.models.commands import Login
from versepoint.models.events import Notice, NoticeLevel, OutcomeEvent
from versepoint.preferences.store import MemoryStore


class RecordingPresenter:
    """Presenter that keeps every event for assertions."""

    def __init__(self) -> None:
        self.events: list[OutcomeEvent] = []

    def emit(self, event: OutcomeEvent) -> None:
        self.events.append(event)

    def of_type(self, event_type: type) -> list:
        return [e for e in self.events if isinstance(e, event_type)]

    def notices(self, level: NoticeLevel | None = None) -> list[Notice]:
        return [n for n in self.of_type(Notice) if level is None or n.level == level]

    def clear(self) -> None:
        self.events.clear()


@pytest.fixture
def backend() -> FakeBackend:
    """Return a fresh in-memory backend."""
    return FakeBackend()


@pytest.fixture
async def http_client(backend: FakeBackend) -> AsyncGenerator[AsyncClient, None]:
    """Create async HTTP client routed to the fake backend.

    Yields:
        AsyncClient using ASGI transport.
    """
    transport = ASGITransport(app=backend.app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def config(tmp_path: Path) -> ClientConfig:
    """Return client configuration for the fake backend."""
    return ClientConfig(
        api_base_url="http://test/api",
        request_timeout=5.0,
        default_model="chatgpt5",
        preferences_path=tmp_path / "preferences.json",
        log_level="DEBUG",
    )


@pytest.fixture
def presenter() -> RecordingPresenter:
    return RecordingPresenter()


@pytest.fixture
def storage() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def app(
    config: ClientConfig,
    presenter: RecordingPresenter,
    storage: MemoryStore,
    http_client: AsyncClient,
) -> VersePointApp:
    """Create a client application talking to the fake backend."""
    return create_app(config, presenter, storage, http_client)


@pytest.fixture
async def logged_in_app(app: VersePointApp, presenter: RecordingPresenter) -> VersePointApp:
    """Return an application logged in as the demo user with data loaded."""
    result = await app.dispatch(Login(username="demo", password="demo123"))
    assert result.success, result.error
    presenter.clear()
    return app
