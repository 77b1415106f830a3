import os

os.environ["GEMINI_API_KEY"] = "test-key"
os.environ["RATE_LIMIT_MAX"] = "0"

import pytest
from fastapi.testclient import TestClient

from studybuddy.clients.gemini import CompletionClient
from studybuddy.deps import get_completion_client
from studybuddy.main import app


class FakeUpstream:
    """Stands in for the model: replays queued answers or exceptions, records prompts."""

    def __init__(self):
        self.responses = []
        self.prompts = []

    @property
    def calls(self) -> int:
        return len(self.prompts)

    async def __call__(self, prompt: str) -> str:
        self.prompts.append(prompt)
        item = self.responses.pop(0) if self.responses else "A friendly answer."
        if isinstance(item, Exception):
            raise item
        return item


@pytest.fixture
def upstream():
    return FakeUpstream()


@pytest.fixture
def sleeps():
    return []


@pytest.fixture
def completion_client(upstream, sleeps):
    async def _sleep(seconds):
        sleeps.append(seconds)

    return CompletionClient(upstream, max_retries=3, base_delay=1.0, sleep=_sleep)


@pytest.fixture
def client(completion_client):
    app.dependency_overrides[get_completion_client] = lambda: completion_client

    with TestClient(app) as c:
        yield c

    app.dependency_overrides.clear()
