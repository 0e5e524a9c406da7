"""
text_ops.py
Операции над текстом: один шаблон промпта + один вызов Completion API.
"""

import logging
from typing import List, Optional

from dyslexia_helper.errors import SuggestionParseError, UpstreamError
from dyslexia_helper.services import prompt_builder as pb
from dyslexia_helper.services.llm_service import CompletionClient
from dyslexia_helper.services.suggestions import (
    FALLBACK_SUGGESTIONS,
    extract_suggestions,
    pad_suggestions,
)

logger = logging.getLogger(__name__)


def _cause(exc: Exception) -> str:
    return exc.error if isinstance(exc, UpstreamError) else str(exc)


class TextOperationsService:
    """
    Сервис текстовых операций для людей с дислексией.
    Ошибки провайдера превращаются в UpstreamError("Failed to …: причина");
    suggested_responses: единственное место, где сбой гасится локально.
    """

    def __init__(self, llm: CompletionClient):
        self._llm = llm

    async def _run(self, messages, *, action: str, empty: str) -> str:
        try:
            content = await self._llm.complete(messages)
        except Exception as exc:
            cause = _cause(exc)
            logger.error("Error %s: %s", action, cause)
            raise UpstreamError(f"Failed to {action}: {cause}") from exc
        return content or empty

    async def summarize(self, text: str) -> str:
        return await self._run(
            pb.summarize_messages(text),
            action="summarize text",
            empty="Unable to generate summary.",
        )

    async def simplify(self, text: str) -> str:
        return await self._run(
            pb.simplify_messages(text),
            action="simplify text",
            empty="Unable to simplify text.",
        )

    async def correct_grammar(self, text: str) -> str:
        return await self._run(
            pb.grammar_messages(text),
            action="correct grammar",
            empty="Unable to correct grammar.",
        )

    async def translate(
        self,
        text: str,
        target_language: str,
        source_language: Optional[str] = "auto",
    ) -> str:
        return await self._run(
            pb.translate_messages(text, source_language, target_language),
            action="translate text",
            empty="Unable to translate text.",
        )

    async def chat(self, message: str) -> str:
        return await self._run(
            pb.chat_messages(message),
            action="get chat response",
            empty="I'm sorry, I couldn't generate a response.",
        )

    async def suggested_responses(self, context: str) -> List[str]:
        """Всегда ровно 4 строки: при любом сбое: FALLBACK_SUGGESTIONS."""
        try:
            content = await self._llm.complete(pb.suggestions_messages(context))
        except Exception as exc:
            logger.warning("Suggested responses: LLM failure, using defaults: %s", _cause(exc))
            return list(FALLBACK_SUGGESTIONS)

        try:
            items = extract_suggestions(content)
        except SuggestionParseError as exc:
            logger.warning("Suggested responses: %s; using defaults", exc)
            return list(FALLBACK_SUGGESTIONS)
        return pad_suggestions(items)
