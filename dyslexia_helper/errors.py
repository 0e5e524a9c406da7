"""
errors.py
---------
Таксономия ошибок шлюза. Каждый класс знает свой HTTP-статус;
маппинг в JSON делают exception-хендлеры в app/main.py.
"""
from typing import Any, Dict, Optional


class GatewayError(Exception):
    """Базовая ошибка: message уходит клиенту как есть."""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_body(self) -> Dict[str, Any]:
        return {"message": self.message}


class ValidationError(GatewayError):
    """Нет обязательного поля или оно не строка → 400."""

    status_code = 400


class NotFoundError(GatewayError):
    """Настройки пользователя не найдены → 404."""

    status_code = 404


class UpstreamError(GatewayError):
    """
    Completion API упал (сеть, тайм-аут, битый ответ) → 500.
    message: описание операции для клиента, error: исходный текст причины.
    """

    status_code = 500

    def __init__(self, message: str, error: Optional[str] = None):
        super().__init__(message)
        self.error = error if error is not None else message

    def to_body(self) -> Dict[str, Any]:
        return {"message": self.message, "error": self.error}


class SuggestionParseError(ValueError):
    """Из ответа модели не удалось вытащить подсказки. Наружу не выходит."""
