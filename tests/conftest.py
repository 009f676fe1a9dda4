"""Shared fixtures"""
import pytest
from unittest.mock import MagicMock

from chat_controller import ChatSession
from ui_context import ContextItem, ContextStore
from ui_results import ModelResult


@pytest.fixture
def make_item():
    """Build a ContextItem with sensible defaults"""
    def _make(name="a.txt", content="hello", path=None, size=None):
        return ContextItem(
            path=path or f"/docs/{name}",
            name=name,
            content=content,
            size=len(content.encode("utf-8")) if size is None else size,
        )
    return _make


@pytest.fixture
def store():
    return ContextStore()


@pytest.fixture
def client():
    """Model client double that answers every chat with "ok" """
    mock = MagicMock()
    mock.chat.return_value = ModelResult(ok=True, content="ok")
    mock.list_models.return_value = ModelResult(ok=True, models=("llama3.1", "mistral"))
    mock.check_connection.return_value = ModelResult(ok=True)
    return mock


@pytest.fixture
def session(store):
    return ChatSession(store, default_model="llama3.1")
