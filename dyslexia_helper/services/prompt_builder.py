"""
prompt_builder.py
-----------------
Загрузка шаблонов из prompts/ и сборка пары system/user сообщений
для каждой текстовой операции.
"""
from pathlib import Path
from typing import Dict, List, Optional, Tuple

# Путь до папки prompts/*.txt
PROMPT_DIR = Path(__file__).resolve().parents[1] / "prompts"

Messages = List[Dict[str, str]]

# Варианты перевода: ключ → (system, user-template)
TRANSLATE_GENERIC = "generic"
TRANSLATE_HINGLISH_HINDI = "hinglish_hindi"
TRANSLATE_HINGLISH_ENGLISH = "hinglish_english"
TRANSLATE_SIMPLE_ENGLISH = "simple_english"


def _read(name: str) -> str:
    return (PROMPT_DIR / name).read_text(encoding="utf-8").strip()


def _pair(stem: str) -> Tuple[str, str]:
    return _read(f"{stem}.system.txt"), _read(f"{stem}_user.tpl.txt")


SUMMARIZE = _pair("summarize")
SIMPLIFY = _pair("simplify")
GRAMMAR = _pair("grammar")
SUGGESTIONS = _pair("suggestions")
CHAT_SYSTEM = _read("chat.system.txt")

TRANSLATE_PROMPTS: Dict[str, Tuple[str, str]] = {
    TRANSLATE_GENERIC: (_read("translate.system.txt"), _read("translate_user.tpl.txt")),
    TRANSLATE_HINGLISH_HINDI: _pair("hinglish_hindi"),
    TRANSLATE_HINGLISH_ENGLISH: _pair("hinglish_english"),
    TRANSLATE_SIMPLE_ENGLISH: _pair("simple_english"),
}


def _messages(system: str, user: str) -> Messages:
    return [
        {"role": "system", "content": system},
        {"role": "user", "content": user},
    ]


def summarize_messages(text: str) -> Messages:
    system, tpl = SUMMARIZE
    return _messages(system, tpl.format(TEXT=text))


def simplify_messages(text: str) -> Messages:
    system, tpl = SIMPLIFY
    return _messages(system, tpl.format(TEXT=text))


def grammar_messages(text: str) -> Messages:
    system, tpl = GRAMMAR
    return _messages(system, tpl.format(TEXT=text))


def chat_messages(message: str) -> Messages:
    # сообщение пользователя уходит без обёртки
    return _messages(CHAT_SYSTEM, message)


def suggestions_messages(context: str) -> Messages:
    system, tpl = SUGGESTIONS
    return _messages(system, tpl.format(CONTEXT=context))


def select_translation_variant(source_language: str, target_language: str) -> str:
    """
    Таблица выбора варианта перевода:
      • hi-t → hi      — Hinglish в деванагари
      • hi-t → en      — Hinglish в английский
      • * → simple     — упрощённый английский
      • иначе          — обычный перевод source → target
    """
    if source_language == "hi-t" and target_language == "hi":
        return TRANSLATE_HINGLISH_HINDI
    if source_language == "hi-t" and target_language == "en":
        return TRANSLATE_HINGLISH_ENGLISH
    if target_language == "simple":
        return TRANSLATE_SIMPLE_ENGLISH
    return TRANSLATE_GENERIC


def translate_messages(text: str, source_language: Optional[str], target_language: str) -> Messages:
    source = source_language or "auto"
    variant = select_translation_variant(source, target_language)
    system, tpl = TRANSLATE_PROMPTS[variant]
    if variant == TRANSLATE_GENERIC:
        user = tpl.format(
            SOURCE="the detected language" if source == "auto" else source,
            TARGET=target_language,
            TEXT=text,
        )
    else:
        user = tpl.format(TEXT=text)
    return _messages(system, user)
