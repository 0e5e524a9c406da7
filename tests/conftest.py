# tests/conftest.py
from typing import Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from dyslexia_helper.app.main import create_app
from dyslexia_helper.core.settings import Settings
from dyslexia_helper.services.preferences import InMemoryPreferencesStore


class StubLLM:
    """Подменяет Completion API: запоминает messages, отдаёт reply или бросает error."""

    def __init__(self, reply: str = "stub reply", error: Optional[Exception] = None):
        self.reply = reply
        self.error = error
        self.calls: List[List[Dict[str, str]]] = []

    async def complete(self, messages: List[Dict[str, str]]) -> str:
        self.calls.append(messages)
        if self.error is not None:
            raise self.error
        return self.reply

    @property
    def system_prompt(self) -> str:
        return self.calls[-1][0]["content"]

    @property
    def user_prompt(self) -> str:
        return self.calls[-1][-1]["content"]


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, GROQ_API_KEY="test-key", APP_ENV="test")


@pytest.fixture
def llm() -> StubLLM:
    return StubLLM()


@pytest.fixture
def store() -> InMemoryPreferencesStore:
    return InMemoryPreferencesStore()


@pytest.fixture
def client(settings, llm, store):
    app = create_app(settings=settings, llm=llm, store=store)
    with TestClient(app) as c:
        yield c
