"""
suggestions.py
--------------
Разбор свободного ответа модели в список коротких подсказок-ответов.
Без сети: text → до 4 строк.

Стратегии по порядку:
  1) JSON-объект со списком под suggestions / responses / options
  2) JSON-массив в квадратных скобках (первая «[» … последняя «]»)
  3) построчно: убираем нумерацию, маркеры и кавычки
"""

import json
import re
from typing import Iterable, List

from dyslexia_helper.errors import SuggestionParseError

SUGGESTION_COUNT = 4

FALLBACK_SUGGESTIONS: List[str] = [
    "Can you explain this simpler?",
    "What does this word mean?",
    "Help me write a response",
    "Summarize this conversation",
]

# ключи, под которыми модель кладёт список в JSON-объекте
LIST_KEYS = ("suggestions", "responses", "options")

# «1.», «2)», «-», «*», «•», скобки и кавычки в начале строки
_LEAD_RE = re.compile(r"^[\s\d.)\[\]\"'\-*•]+")
# хвостовые кавычки, запятые и «]» (строки из недо-JSON)
_TAIL_RE = re.compile(r"[\s\]\"',]+$")


def _from_items(items: Iterable) -> List[str]:
    out: List[str] = []
    for item in items:
        if isinstance(item, str) and item.strip():
            out.append(item.strip())
    return out


def parse_keyed_object(content: str) -> List[str]:
    start, end = content.find("{"), content.rfind("}")
    if start == -1 or end <= start:
        raise SuggestionParseError("no JSON object in response")
    try:
        parsed = json.loads(content[start:end + 1])
    except json.JSONDecodeError as exc:
        raise SuggestionParseError(f"object is not valid JSON: {exc}") from exc
    if not isinstance(parsed, dict):
        raise SuggestionParseError("braced value is not an object")
    for key in LIST_KEYS:
        if isinstance(parsed.get(key), list):
            return _from_items(parsed[key])
    raise SuggestionParseError(f"object has none of {LIST_KEYS}")


def parse_bracketed(content: str) -> List[str]:
    start, end = content.find("["), content.rfind("]")
    if start == -1 or end <= start:
        raise SuggestionParseError("no bracketed array in response")
    try:
        parsed = json.loads(content[start:end + 1])
    except json.JSONDecodeError as exc:
        raise SuggestionParseError(f"bracketed array is not valid JSON: {exc}") from exc
    if not isinstance(parsed, list):
        raise SuggestionParseError("bracketed value is not a list")
    return _from_items(parsed)


def parse_lines(content: str) -> List[str]:
    out: List[str] = []
    for line in content.splitlines():
        line = line.strip()
        if not line or "{" in line or "}" in line or line.startswith("```"):
            continue
        if line.endswith(":"):
            # вступление вида «Here are some suggestions:», не подсказка
            continue
        line = _TAIL_RE.sub("", _LEAD_RE.sub("", line))
        if line:
            out.append(line)
    return out


def extract_suggestions(content: str) -> List[str]:
    """
    Возвращает от 1 до 4 подсказок в порядке ответа модели.
    SuggestionParseError: если ни одна стратегия ничего не нашла.
    """
    for strategy in (parse_keyed_object, parse_bracketed, parse_lines):
        try:
            items = strategy(content or "")
        except SuggestionParseError:
            continue
        if items:
            return items[:SUGGESTION_COUNT]
    raise SuggestionParseError("no suggestions found in response")


def pad_suggestions(items: List[str]) -> List[str]:
    """Ровно 4: лишнее режем, недостающее добиваем из FALLBACK без повторов."""
    result = list(items[:SUGGESTION_COUNT])
    for fallback in FALLBACK_SUGGESTIONS:
        if len(result) >= SUGGESTION_COUNT:
            break
        if fallback not in result:
            result.append(fallback)
    return result
