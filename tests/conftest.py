"""Shared test fixtures for DataSage."""

import pytest
from fastapi.testclient import TestClient
from langchain_core.language_models.fake_chat_models import FakeListChatModel

from datasage import llm
from datasage.main import app


@pytest.fixture
def fake_llm(monkeypatch):
    """Replace the chat model with one that replies with the given strings, in order."""

    def install(*responses: str) -> FakeListChatModel:
        model = FakeListChatModel(responses=list(responses))
        monkeypatch.setattr(llm, "get_llm", lambda: model)
        return model

    return install


@pytest.fixture
def no_llm(monkeypatch):
    """Fail the test if anything asks for the chat model."""

    def forbidden():
        pytest.fail("the chat model must not be called")

    monkeypatch.setattr(llm, "get_llm", forbidden)


@pytest.fixture
def client():
    return TestClient(app)
