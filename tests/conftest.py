"""Pytest fixtures and shared test configuration.

Provides reusable fixtures for unit and integration tests.

Fixtures:
    - config: ClientConfig pointing at a fake backend host
    - backend_stub: Programmable stand-in for the AgriGPT backend
    - backend: BackendClient wired to the stub through httpx.MockTransport
    - identity / anonymous: Signed-in and signed-out identities
    - notifier: Records user notices
    - speech: Controllable speech recognizer
    - previews: PreviewStore that counts releases
    - sample_image: Small PNG ImageFile
"""

import json
from collections.abc import AsyncGenerator

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from agrigpt.api.app import create_app
from agrigpt.backend.client import BackendClient
from agrigpt.chat.attachments import PreviewStore
from agrigpt.config import ClientConfig
from agrigpt.models.schemas import ImageFile

BACKEND_URL = "http://backend.test/api/agrigpt"
BACKEND_PREFIX = "/api/agrigpt"

PNG_BYTES = (
    b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\x00\x00\x00\x01\x00\x00\x00\x01"
    b"\x08\x06\x00\x00\x00\x1f\x15\xc4\x89"
)


class BackendStub:
    """Fake AgriGPT backend that records every request.

    Responses are configured per path (without the base prefix) as
    ``(status_code, json_body)`` pairs. Pairs pushed onto ``queued[path]``
    answer the next calls to that path, in order, before ``routes`` applies.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.routes: dict[str, tuple[int, object]] = {
            "/chats": (200, {"chatId": "chat-1"}),
            "/ask-consultant": (200, {"answer": "Spray copper fungicide."}),
            "/query-government-schemes": (200, {"answer": "PM-KISAN pays 6000 per year."}),
            "/ask-with-image": (200, {"response": "Looks like citrus canker."}),
        }
        self.queued: dict[str, list[tuple[int, object]]] = {}

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.removeprefix(BACKEND_PREFIX)
        if self.queued.get(path):
            status, body = self.queued[path].pop(0)
        else:
            status, body = self.routes.get(path, (404, {"detail": "Not Found"}))
        return httpx.Response(status, json=body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def paths(self) -> list[str]:
        return [r.url.path.removeprefix(BACKEND_PREFIX) for r in self.requests]

    def json_body(self, index: int) -> dict:
        return json.loads(self.requests[index].content)


class FakeIdentity:
    def __init__(self, email: str | None) -> None:
        self.email = email


class RecordingNotifier:
    def __init__(self) -> None:
        self.notices: list[tuple[str, str]] = []

    def notify(self, message: str, kind: str = "negative") -> None:
        self.notices.append((message, kind))


class FakeSpeech:
    """Speech recognizer whose support and results the test controls."""

    def __init__(self, supported: bool = True) -> None:
        self.supported = supported
        self.started: list[str] = []
        self.stop_calls = 0
        self.on_result = None
        self.on_end = None

    async def is_supported(self) -> bool:
        return self.supported

    def start(self, locale, on_result, on_end) -> None:
        self.started.append(locale)
        self.on_result = on_result
        self.on_end = on_end

    def stop(self) -> None:
        self.stop_calls += 1


class CountingPreviewStore(PreviewStore):
    """PreviewStore that remembers which handles were released."""

    def __init__(self) -> None:
        super().__init__()
        self.created: list[str] = []
        self.released: list[str] = []

    def create(self, file: ImageFile) -> str:
        url = super().create(file)
        self.created.append(url)
        return url

    def release(self, url: str) -> None:
        super().release(url)
        self.released.append(url)


@pytest.fixture
def config() -> ClientConfig:
    """Return configuration pointing at the fake backend."""
    return ClientConfig(backend_url=BACKEND_URL, request_timeout=5.0, default_language="en")


@pytest.fixture
def backend_stub() -> BackendStub:
    return BackendStub()


@pytest.fixture
def backend(config: ClientConfig, backend_stub: BackendStub) -> BackendClient:
    """Return a BackendClient that talks to the stub."""
    return BackendClient(config, transport=backend_stub.transport)


@pytest.fixture
def identity() -> FakeIdentity:
    return FakeIdentity("farmer@example.com")


@pytest.fixture
def anonymous() -> FakeIdentity:
    return FakeIdentity(None)


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def speech() -> FakeSpeech:
    return FakeSpeech()


@pytest.fixture
def previews() -> CountingPreviewStore:
    return CountingPreviewStore()


@pytest.fixture
def sample_image() -> ImageFile:
    """Return a tiny PNG image."""
    return ImageFile(name="leaf.png", content=PNG_BYTES, content_type="image/png")


@pytest.fixture
async def async_client() -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for the FastAPI host app.

    Yields:
        Configured AsyncClient for making test requests.
    """
    transport = ASGITransport(app=create_app())
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
