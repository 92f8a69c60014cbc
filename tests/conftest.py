from typing import Any, Callable

import pytest
from fastapi.testclient import TestClient

from tasks_plugin.config import (
    CompletionResponse,
    IdentityScheme,
    ListAddressing,
    Settings,
)
from tasks_plugin.main import create_app
from tasks_plugin.models.task import TaskList
from tasks_plugin.services.task_list_store import TaskListStore


@pytest.fixture
def make_client() -> Callable[..., TestClient]:
    """Build a TestClient around a fresh app and empty store."""

    def _make(**overrides: Any) -> TestClient:
        return TestClient(create_app(Settings(**overrides)))

    return _make


@pytest.fixture
def session_client(make_client) -> TestClient:
    """Session-keyed lists, generated task IDs."""
    return make_client(
        identity_scheme=IdentityScheme.GENERATED,
        list_addressing=ListAddressing.SESSION,
    )


@pytest.fixture
def explicit_client(make_client) -> TestClient:
    """Explicitly created lists, label-keyed tasks."""
    return make_client(
        identity_scheme=IdentityScheme.LABEL,
        list_addressing=ListAddressing.EXPLICIT,
    )


@pytest.fixture
def boolean_client(make_client) -> TestClient:
    return make_client(
        identity_scheme=IdentityScheme.LABEL,
        list_addressing=ListAddressing.SESSION,
        completion_response=CompletionResponse.BOOLEAN,
    )


@pytest.fixture
def call() -> Callable[..., Any]:
    """POST a tool request with the given session and args."""

    def _call(client: TestClient, tool: str, session_id: str = "abc", **args: Any):
        return client.post(f"/{tool}", json={"context": {"sessionId": session_id}, "args": args})

    return _call


@pytest.fixture
def task_list() -> TaskList:
    return TaskList(session_id="abc")


@pytest.fixture
def explicit_store() -> TaskListStore:
    return TaskListStore(ListAddressing.EXPLICIT)


@pytest.fixture
def session_store() -> TaskListStore:
    return TaskListStore(ListAddressing.SESSION)
