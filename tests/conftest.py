"""Shared test fixtures."""

import pytest
from fastapi.testclient import TestClient

from agent.agent import AgentContext
from agent.core.catalog import DEFAULT_WORDS
from agent.core.memory import ProgressStore
from app.main import create_app


@pytest.fixture
def progress_path(tmp_path):
    return tmp_path / "progress.json"


@pytest.fixture
def store(progress_path):
    s = ProgressStore(progress_path)
    s.load()
    return s


@pytest.fixture
def context(store):
    return AgentContext(catalog=DEFAULT_WORDS, store=store)


@pytest.fixture
def client(context):
    return TestClient(create_app(context))
