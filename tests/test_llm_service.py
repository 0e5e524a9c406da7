import asyncio
from types import SimpleNamespace

import httpx
import pytest
from openai import APIConnectionError, APITimeoutError, AuthenticationError, InternalServerError

from dyslexia_helper.core.settings import Settings
from dyslexia_helper.errors import UpstreamError
from dyslexia_helper.services.llm_service import GroqCompletionClient, is_transient

_REQUEST = httpx.Request("POST", "https://api.groq.com/openai/v1/chat/completions")
MESSAGES = [{"role": "system", "content": "sys"}, {"role": "user", "content": "hi"}]


def _completion(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


def _status_error(cls, status):
    return cls(f"HTTP {status}", response=httpx.Response(status, request=_REQUEST), body=None)


class FakeCompletions:
    def __init__(self, outcomes):
        self.outcomes = list(outcomes)
        self.payloads = []

    async def create(self, **payload):
        self.payloads.append(payload)
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def _client(outcomes, **overrides):
    completions = FakeCompletions(outcomes)
    fake = SimpleNamespace(chat=SimpleNamespace(completions=completions))
    settings = Settings(_env_file=None, GROQ_API_KEY="k", **overrides)
    return GroqCompletionClient(settings, client=fake), completions


def test_returns_content_and_sends_fixed_model():
    client, completions = _client([_completion("hello")], LLM_MODEL="llama-test")
    assert asyncio.run(client.complete(MESSAGES)) == "hello"
    assert completions.payloads[0]["model"] == "llama-test"
    assert completions.payloads[0]["messages"] == MESSAGES


def test_none_content_becomes_empty_string():
    client, _ = _client([_completion(None)])
    assert asyncio.run(client.complete(MESSAGES)) == ""


def test_single_retry_on_connection_error():
    client, completions = _client([APIConnectionError(request=_REQUEST), _completion("ok")])
    assert asyncio.run(client.complete(MESSAGES)) == "ok"
    assert len(completions.payloads) == 2


def test_persistent_transient_failure_is_upstream_error():
    client, completions = _client([APITimeoutError(request=_REQUEST), APITimeoutError(request=_REQUEST)])
    with pytest.raises(UpstreamError) as exc_info:
        asyncio.run(client.complete(MESSAGES))
    assert "timed out" in exc_info.value.message.lower()
    assert len(completions.payloads) == 2


def test_auth_error_is_not_retried():
    client, completions = _client([_status_error(AuthenticationError, 401)])
    with pytest.raises(UpstreamError):
        asyncio.run(client.complete(MESSAGES))
    assert len(completions.payloads) == 1


def test_retry_can_be_disabled():
    client, completions = _client([_status_error(InternalServerError, 503)], LLM_MAX_RETRY=0)
    with pytest.raises(UpstreamError):
        asyncio.run(client.complete(MESSAGES))
    assert len(completions.payloads) == 1


def test_malformed_response_is_upstream_error():
    client, _ = _client([SimpleNamespace(choices=[])])
    with pytest.raises(UpstreamError) as exc_info:
        asyncio.run(client.complete(MESSAGES))
    assert "Malformed completion response" in exc_info.value.message


def test_is_transient():
    assert is_transient(APIConnectionError(request=_REQUEST))
    assert is_transient(_status_error(InternalServerError, 500))
    assert not is_transient(_status_error(AuthenticationError, 401))
    assert not is_transient(ValueError("nope"))


def test_missing_api_key_is_upstream_error_not_startup_error():
    client = GroqCompletionClient(Settings(_env_file=None, GROQ_API_KEY=""))
    with pytest.raises(UpstreamError) as exc_info:
        asyncio.run(client.complete(MESSAGES))
    assert exc_info.value.message == "GROQ_API_KEY is not set"
