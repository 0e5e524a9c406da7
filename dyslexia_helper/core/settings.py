"""
core/settings.py
Настройки Dyslexia Helper.
Читает GROQ_* переменные, параметры LLM-вызова, CORS и адрес uvicorn.
"""
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        case_sensitive=False,
    )

    # ---------- Groq (OpenAI-compatible) ----------
    GROQ_API_KEY: str = Field("", description="API key for Groq; пустой ключ → вызовы падают с 500")
    GROQ_BASE_URL: str = Field("https://api.groq.com/openai/v1", description="OpenAI-compatible base URL")
    LLM_MODEL: str = Field("llama-3.3-70b-versatile", description="Модель фиксирована на деплой")

    LLM_TIMEOUT: float = Field(60.0, description="Тайм-аут одного HTTP-запроса, сек")
    LLM_MAX_RETRY: int = Field(1, description="Повторы на timeout/connection/429/5xx")
    MAX_CONCURRENT: int = Field(10, description="Семафор на параллельные запросы")

    # ---------- HTTP ----------
    APP_ENV: str = "development"
    CORS_ORIGINS: List[str] = Field(default_factory=lambda: ["*"])
    HOST: str = "127.0.0.1"
    PORT: int = 5000

    LOG_LEVEL: str = "INFO"

    @property
    def is_dev(self) -> bool:
        return self.APP_ENV.lower() in {"dev", "development", "local"}


settings = Settings()
