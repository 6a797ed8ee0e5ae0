"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import sys
from collections.abc import AsyncIterator, Callable
from pathlib import Path
from unittest.mock import AsyncMock

import httpx
import pytest
import pytest_asyncio

# Add tests directory to path so helpers can be imported
tests_dir = Path(__file__).parent
if str(tests_dir) not in sys.path:
    sys.path.insert(0, str(tests_dir))

from themepush.models import Project, Theme
from themepush.storage import InMemoryDeliveryLog, InMemoryProjectStore, InMemoryThemeStore
from themepush.webhooks import RetryPolicy, ThemeDispatcher, WebhookSender

Handler = Callable[[httpx.Request], httpx.Response]


class RecordingTransport(httpx.MockTransport):
    """MockTransport that remembers every request it served."""

    def __init__(self, handler: Handler) -> None:
        self.requests: list[httpx.Request] = []

        def record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(record)

    def calls_to(self, url: str) -> list[httpx.Request]:
        return [request for request in self.requests if str(request.url) == url]


SenderFactory = Callable[..., tuple[WebhookSender, RecordingTransport]]


@pytest_asyncio.fixture
async def make_sender() -> AsyncIterator[SenderFactory]:
    """Factory building senders whose HTTP traffic is served by ``handler``.

    Extra keyword arguments go to ``WebhookSender``. Every client the
    factory opens is closed at teardown.
    """
    clients: list[httpx.AsyncClient] = []

    def factory(handler: Handler, **kwargs: object) -> tuple[WebhookSender, RecordingTransport]:
        transport = RecordingTransport(handler)
        client = httpx.AsyncClient(transport=transport)
        clients.append(client)
        return WebhookSender(client=client, **kwargs), transport  # type: ignore[arg-type]

    try:
        yield factory
    finally:
        for client in clients:
            await client.aclose()


@pytest.fixture
def sample_theme() -> Theme:
    """Create a sample theme."""
    return Theme(
        id="thm_ocean",
        name="Ocean",
        colors={"primary": "#0ea5e9", "background": "#f8fafc"},
        radius={"sm": 4, "md": 8, "lg": 12.5},
        effects={"shadows": True, "animations": False},
    )


@pytest.fixture
def signed_project() -> Project:
    """Create an active project with an API key."""
    return Project(
        id="prj_signed",
        name="Marketing site",
        webhook_url="https://signed.example.com/hooks/theme",
        api_key="sk_test_secret",
    )


@pytest.fixture
def unsigned_project() -> Project:
    """Create an active project without an API key."""
    return Project(
        id="prj_unsigned",
        name="Docs site",
        webhook_url="https://unsigned.example.com/hooks/theme",
    )


@pytest.fixture
def inactive_project() -> Project:
    """Create an inactive project."""
    return Project(
        id="prj_paused",
        name="Paused site",
        webhook_url="https://paused.example.com/hooks/theme",
        api_key="sk_paused",
        is_active=False,
    )


@pytest.fixture
def project_store(
    signed_project: Project, unsigned_project: Project, inactive_project: Project
) -> InMemoryProjectStore:
    return InMemoryProjectStore([signed_project, unsigned_project, inactive_project])


@pytest.fixture
def theme_store(sample_theme: Theme) -> InMemoryThemeStore:
    return InMemoryThemeStore([sample_theme])


@pytest.fixture
def delivery_log() -> InMemoryDeliveryLog:
    return InMemoryDeliveryLog()


@pytest.fixture
def mock_sleep() -> AsyncMock:
    """Backoff sleep that returns immediately and records its delays."""
    return AsyncMock(return_value=None)


@pytest.fixture
def make_dispatcher(
    project_store: InMemoryProjectStore,
    theme_store: InMemoryThemeStore,
    delivery_log: InMemoryDeliveryLog,
    mock_sleep: AsyncMock,
    make_sender: SenderFactory,
) -> Callable[[Handler], tuple[ThemeDispatcher, RecordingTransport]]:
    """Factory building a dispatcher over the sample stores and a fake network."""

    def factory(handler: Handler) -> tuple[ThemeDispatcher, RecordingTransport]:
        sender, transport = make_sender(handler)
        dispatcher = ThemeDispatcher(
            project_store,
            theme_store,
            delivery_log,
            sender=sender,
            retry_policy=RetryPolicy(max_attempts=3, sleep=mock_sleep),
        )
        return dispatcher, transport

    return factory
