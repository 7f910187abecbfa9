from collections.abc import Awaitable, Callable, Generator
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from app.api.app import create_app
from app.api.dependencies import ProcessorRegistry
from app.config.settings import Settings
from app.pipeline.processor import DocumentProcessor

ClientFactory = Callable[..., TestClient]


@pytest.fixture
def make_client(example_settings: Settings) -> Generator[ClientFactory, None, None]:
    """Start the HTTP app with a registry built from the given settings or processors.

    Clients are entered as context managers so the lifespan runs and the
    registry is closed on teardown.
    """
    opened: list[TestClient] = []

    def _make(
        settings: Settings | None = None,
        *,
        builders: dict[str, Callable[[Settings], Awaitable[DocumentProcessor]]] | None = None,
        processors: dict[str, DocumentProcessor] | None = None,
    ) -> TestClient:
        app_settings = settings or example_settings
        registry = ProcessorRegistry(app_settings, builders=builders, processors=processors)
        client = TestClient(create_app(app_settings, registry=registry))
        client.__enter__()
        opened.append(client)
        return client

    yield _make

    for client in opened:
        client.__exit__(None, None, None)


@pytest.fixture
def failing_generation_client() -> AsyncMock:
    client = AsyncMock()
    client.generate.side_effect = RuntimeError("upstream model unavailable")
    return client
