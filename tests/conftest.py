from __future__ import annotations

from typing import Any, List, Optional

import pytest
from fastapi.testclient import TestClient

from config import Settings
from core.dialogue_state import DialogueStateStore
from core.dispatcher import ActionDispatcher
from services.completion_gateway import RemoteCompletionGateway
from services.task_store import InMemoryTaskStore


class DummyResponse:
    def __init__(self, payload: Any, status_code: int = 200) -> None:
        self.payload = payload
        self.status_code = status_code

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            import requests

            raise requests.HTTPError(f"{self.status_code} error")

    def json(self) -> Any:
        if isinstance(self.payload, Exception):
            raise self.payload
        return self.payload


class DummySession:
    """Stands in for requests.Session and records every POST."""

    def __init__(self, response: Optional[DummyResponse] = None, error: Optional[Exception] = None) -> None:
        self.response = response
        self.error = error
        self.calls: List[dict] = []

    def post(self, url: str, **kwargs: Any) -> DummyResponse:
        self.calls.append({"url": url, **kwargs})
        if self.error is not None:
            raise self.error
        assert self.response is not None
        return self.response


class CountingChatModel:
    """Chat model stand-in that must never be reached."""

    def __init__(self) -> None:
        self.calls = 0

    def invoke(self, *_args: Any, **_kwargs: Any) -> str:
        self.calls += 1
        raise AssertionError("chat model should not be called")


@pytest.fixture
def store() -> InMemoryTaskStore:
    return InMemoryTaskStore()


@pytest.fixture
def slots() -> DialogueStateStore:
    return DialogueStateStore()


@pytest.fixture
def disabled_gateway() -> RemoteCompletionGateway:
    return RemoteCompletionGateway(api_key=None)


@pytest.fixture
def dispatcher(store: InMemoryTaskStore, disabled_gateway: RemoteCompletionGateway, slots: DialogueStateStore) -> ActionDispatcher:
    return ActionDispatcher(store=store, gateway=disabled_gateway, state=slots)


@pytest.fixture
def app(store: InMemoryTaskStore, disabled_gateway: RemoteCompletionGateway, slots: DialogueStateStore):
    from main import create_app

    return create_app(settings=Settings(), store=store, gateway=disabled_gateway, state=slots)


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)
