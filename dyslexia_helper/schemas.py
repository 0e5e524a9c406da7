"""
schemas.py
----------
Pydantic-DTO входа/выхода.
Обязательные поля объявлены как Any: тип и наличие проверяет роутер,
чтобы отдавать 400 {message}, а не стандартный 422 FastAPI.
"""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field

# ---------- ВХОД ----------
class TextRequest(BaseModel):
    text: Any = Field(None, description="Исходный текст")

    model_config = ConfigDict(
        json_schema_extra={"examples": [{"text": "The mitochondria is the powerhouse of the cell."}]}
    )


class TranslateRequest(BaseModel):
    text: Any = Field(None, description="Исходный текст")
    sourceLanguage: Any = Field(
        "auto", description="Код языка источника; 'hi-t': Hinglish (хинди латиницей)"
    )
    targetLanguage: Any = Field(None, description="Код языка перевода; 'simple': простой английский")

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {"text": "aap kaise ho", "sourceLanguage": "hi-t", "targetLanguage": "en"},
            ]
        }
    )


class ChatRequest(BaseModel):
    message: Any = Field(None, description="Сообщение пользователя")


class SuggestionsRequest(BaseModel):
    context: Any = Field(None, description="Последнее сообщение собеседника")


class PreferencesRequest(BaseModel):
    """
    userId + любые поля настроек. Схему полей не проверяем:
    всё, кроме userId, сливается в запись как есть.
    """

    userId: Any = Field(None, description="Идентификатор пользователя (строка или число)")

    model_config = ConfigDict(
        extra="allow",
        json_schema_extra={"examples": [{"userId": 7, "theme": "dark", "fontSize": 20}]},
    )

    def preference_fields(self) -> dict:
        return dict(self.model_extra or {})


# ---------- ВЫХОД ----------
class SummaryResponse(BaseModel):
    summary: str


class SimplifyResponse(BaseModel):
    simplifiedText: str


class GrammarResponse(BaseModel):
    correctedText: str


class TranslateResponse(BaseModel):
    translatedText: str


class ChatResponse(BaseModel):
    response: str


class SuggestionsResponse(BaseModel):
    suggestions: List[str] = Field(..., min_length=4, max_length=4)


class UserPreferences(BaseModel):
    """Полная запись настроек; неизвестные поля сохраняются и отдаются обратно."""

    id: int
    userId: Any
    theme: Any = "light"
    fontFamily: Any = "roboto"
    fontSize: Any = 16
    letterSpacing: Any = 1
    lineHeight: Any = 15
    customSettings: Optional[Any] = None

    model_config = ConfigDict(extra="allow")


class IntegrationTestResponse(BaseModel):
    success: bool
    message: str
    testResult: str


class ErrorResponse(BaseModel):
    message: str
    error: Optional[str] = None
