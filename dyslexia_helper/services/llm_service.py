"""
llm_service.py
==============
Обёртка над Chat Completion API Groq через OpenAI-совместимый
endpoint (`https://api.groq.com/openai/v1`).

✔ Один вызов chat.completions на операцию, ответ: сырой текст
✔ Ограничивает конкурентность через семафор
✔ Тайм-аут и один повтор на «временные» ошибки провайдера
✔ Любой окончательный сбой → UpstreamError

Переменные (`core/settings.py`):
• `GROQ_API_KEY`   – API-ключ
• `GROQ_BASE_URL`  – базовый URL
• `LLM_MODEL`      – модель (фиксирована на деплой)
• `LLM_TIMEOUT`    – тайм-аут HTTP-запроса, сек
• `LLM_MAX_RETRY`  – повторы на timeout/connection/429/5xx, default = 1
• `MAX_CONCURRENT` – лимит параллельных запросов, default = 10
"""

from __future__ import annotations

import asyncio
import logging
import random
from typing import Any, Dict, List, Optional, Protocol

from openai import (  # type: ignore
    APIConnectionError,
    APIStatusError,
    AsyncOpenAI,
    OpenAIError,
)

from dyslexia_helper.core.settings import Settings
from dyslexia_helper.errors import UpstreamError

__all__ = ["CompletionClient", "GroqCompletionClient", "is_transient"]

logger = logging.getLogger(__name__)


class CompletionClient(Protocol):
    """Всё, что нужно шлюзу от LLM: messages → текст ответа."""

    async def complete(self, messages: List[Dict[str, str]]) -> str:
        ...


def is_transient(err: Exception) -> bool:
    """Тайм-аут, обрыв соединения, 429 или 5xx: имеет смысл повторить."""
    # APITimeoutError: подкласс APIConnectionError
    if isinstance(err, APIConnectionError):
        return True
    if isinstance(err, APIStatusError):
        return err.status_code == 429 or err.status_code >= 500
    return False


class GroqCompletionClient:
    """
    Клиент Completion API. Собственные повторы SDK выключены (max_retries=0),
    политику повторов держим здесь.
    """

    def __init__(self, settings: Settings, client: Optional[Any] = None):
        self._model = settings.LLM_MODEL
        self._max_retry = settings.LLM_MAX_RETRY
        self._sem = asyncio.Semaphore(settings.MAX_CONCURRENT)
        self._settings = settings
        # SDK-клиент создаётся при первом вызове: без ключа сервис всё равно стартует
        self._client = client

    def _sdk(self):
        if self._client is None:
            if not self._settings.GROQ_API_KEY:
                raise UpstreamError("GROQ_API_KEY is not set")
            self._client = AsyncOpenAI(
                api_key=self._settings.GROQ_API_KEY,
                base_url=self._settings.GROQ_BASE_URL,
                timeout=self._settings.LLM_TIMEOUT,
                max_retries=0,
            )
        return self._client

    @property
    def model(self) -> str:
        return self._model

    async def _call(self, messages: List[Dict[str, str]]):
        """Один вызов чата под семафором."""
        client = self._sdk()
        async with self._sem:
            return await client.chat.completions.create(
                model=self._model,
                messages=messages,
                stream=False,
            )

    async def complete(self, messages: List[Dict[str, str]]) -> str:
        """
        Возвращает content первого choice (может быть пустой строкой).
        Бросает UpstreamError, если провайдер так и не ответил
        или ответ не похож на chat completion.
        """
        delay = 0.2
        for attempt in range(self._max_retry + 1):
            try:
                resp = await self._call(messages)
            except OpenAIError as err:
                if attempt < self._max_retry and is_transient(err):
                    logger.warning("LLM transient error (attempt %d): %s", attempt + 1, err)
                    await asyncio.sleep(delay + random.random() * 0.2)
                    delay = min(delay * 2, 2.0)
                    continue
                raise UpstreamError(str(err)) from err

            try:
                content = resp.choices[0].message.content
            except (AttributeError, IndexError, TypeError) as err:
                raise UpstreamError(f"Malformed completion response: {err}") from err
            return content or ""

        raise AssertionError("unreachable")
