# dyslexia_helper/app/routers.py
"""
HTTP-роуты Dyslexia Helper под префиксом /api.
Роутер только валидирует вход и формирует ответ. Промпты и вызов LLM живут
в TextOperationsService, настройки в PreferencesStore.
"""
import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, Request
from fastapi.responses import JSONResponse

from dyslexia_helper.errors import NotFoundError, UpstreamError, ValidationError
from dyslexia_helper.schemas import (
    ChatRequest,
    ChatResponse,
    ErrorResponse,
    GrammarResponse,
    IntegrationTestResponse,
    PreferencesRequest,
    SimplifyResponse,
    SuggestionsRequest,
    SuggestionsResponse,
    SummaryResponse,
    TextRequest,
    TranslateRequest,
    TranslateResponse,
    UserPreferences,
)
from dyslexia_helper.services.preferences import PreferencesStore
from dyslexia_helper.services.text_ops import TextOperationsService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Text Operations"])

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Нет обязательного поля"},
    500: {"model": ErrorResponse, "description": "Сбой Completion API"},
}

INTEGRATION_SAMPLE_TEXT = (
    "Hello, this is a test to check if GROQ is working properly. "
    "The quick brown fox jumps over the lazy dog."
)


def get_text_ops(request: Request) -> TextOperationsService:
    """
    FastAPI-dependency: сервис поверх LLM-клиента приложения.
    """
    return TextOperationsService(request.app.state.llm)


def get_store(request: Request) -> PreferencesStore:
    """
    FastAPI-dependency: хранилище настроек, созданное в create_app.
    """
    return request.app.state.store


def _require_str(value: Any, label: str) -> str:
    # пустая строка тоже считается отсутствием поля
    if not value or not isinstance(value, str):
        raise ValidationError(f"{label} is required and must be a string")
    return value


# ---------- ТЕКСТОВЫЕ ОПЕРАЦИИ ----------
@router.post(
    "/summarize",
    response_model=SummaryResponse,
    responses=ERROR_RESPONSES,
    summary="Краткое изложение, удобное для чтения при дислексии",
)
async def summarize(req: TextRequest = Body(...), svc: TextOperationsService = Depends(get_text_ops)):
    text = _require_str(req.text, "Text")
    try:
        return SummaryResponse(summary=await svc.summarize(text))
    except UpstreamError as e:
        raise UpstreamError("Error processing text summarization", e.message) from e


@router.post(
    "/simplify",
    response_model=SimplifyResponse,
    responses=ERROR_RESPONSES,
    summary="Переписать текст простыми словами",
)
async def simplify(req: TextRequest = Body(...), svc: TextOperationsService = Depends(get_text_ops)):
    text = _require_str(req.text, "Text")
    try:
        return SimplifyResponse(simplifiedText=await svc.simplify(text))
    except UpstreamError as e:
        raise UpstreamError("Error processing text simplification", e.message) from e


@router.post(
    "/correct-grammar",
    response_model=GrammarResponse,
    responses=ERROR_RESPONSES,
    summary="Исправить грамматику и орфографию",
)
async def correct_grammar(req: TextRequest = Body(...), svc: TextOperationsService = Depends(get_text_ops)):
    text = _require_str(req.text, "Text")
    try:
        return GrammarResponse(correctedText=await svc.correct_grammar(text))
    except UpstreamError as e:
        raise UpstreamError("Error processing grammar correction", e.message) from e


@router.post(
    "/translate",
    response_model=TranslateResponse,
    responses=ERROR_RESPONSES,
    summary="Перевод / транслитерация (Hinglish, простой английский)",
)
async def translate(req: TranslateRequest = Body(...), svc: TextOperationsService = Depends(get_text_ops)):
    text = _require_str(req.text, "Text")
    if not req.targetLanguage:
        raise ValidationError("Target language is required")
    try:
        translated = await svc.translate(
            text,
            target_language=str(req.targetLanguage),
            source_language=str(req.sourceLanguage) if req.sourceLanguage else "auto",
        )
        return TranslateResponse(translatedText=translated)
    except UpstreamError as e:
        raise UpstreamError("Error processing translation", e.message) from e


@router.post(
    "/chat",
    response_model=ChatResponse,
    responses=ERROR_RESPONSES,
    summary="Ответ ассистента простым языком",
)
async def chat(req: ChatRequest = Body(...), svc: TextOperationsService = Depends(get_text_ops)):
    message = _require_str(req.message, "Message")
    try:
        return ChatResponse(response=await svc.chat(message))
    except UpstreamError as e:
        raise UpstreamError("Error processing chat response", e.message) from e


@router.post(
    "/suggested-responses",
    response_model=SuggestionsResponse,
    responses={400: ERROR_RESPONSES[400]},
    summary="Ровно 4 коротких варианта ответа",
    response_description="При сбое LLM: фиксированный список по умолчанию",
)
async def suggested_responses(
    req: SuggestionsRequest = Body(...),
    svc: TextOperationsService = Depends(get_text_ops),
):
    context = _require_str(req.context, "Context")
    return SuggestionsResponse(suggestions=await svc.suggested_responses(context))


# ---------- НАСТРОЙКИ ----------
@router.post(
    "/preferences",
    responses={200: {"model": UserPreferences}, 400: ERROR_RESPONSES[400]},
    tags=["Preferences"],
    summary="Создать или дополнить настройки пользователя",
)
async def save_preferences(req: PreferencesRequest = Body(...), store: PreferencesStore = Depends(get_store)):
    # как в исходном сервисе: любое «ложное» значение и bool не являются userId
    if not req.userId or isinstance(req.userId, bool):
        raise ValidationError("User ID is required")
    record = store.save(req.userId, req.preference_fields())
    logger.info("Preferences saved: userId=%s id=%s", req.userId, record["id"])
    return JSONResponse(record)


@router.get(
    "/preferences/{user_id}",
    responses={200: {"model": UserPreferences}, 404: {"model": ErrorResponse}},
    tags=["Preferences"],
    summary="Настройки пользователя",
)
async def get_preferences(user_id: str, store: PreferencesStore = Depends(get_store)):
    if not user_id:
        raise ValidationError("User ID is required")
    record = store.get(user_id)
    if record is None:
        raise NotFoundError("User preferences not found")
    return JSONResponse(record)


# ---------- ДИАГНОСТИКА ----------
@router.get(
    "/test-groq",
    response_model=IntegrationTestResponse,
    responses={500: {"model": ErrorResponse}},
    tags=["Diagnostics"],
    summary="Проверить интеграцию с Groq одним summarize",
)
async def test_groq(svc: TextOperationsService = Depends(get_text_ops)):
    try:
        result = await svc.summarize(INTEGRATION_SAMPLE_TEXT)
    except UpstreamError as e:
        logger.error("GROQ integration test failed: %s", e.message)
        return JSONResponse(
            status_code=500,
            content={"success": False, "message": "GROQ integration test failed", "error": e.message},
        )
    return IntegrationTestResponse(success=True, message="GROQ integration is working", testResult=result)
