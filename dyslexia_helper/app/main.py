"""
main.py

FastAPI-приложение Dyslexia Helper.
Запуск: uvicorn dyslexia_helper.app.main:app --reload --port 5000
   или: dyslexia-helper
"""
import logging
import time
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from dyslexia_helper.app.routers import router
from dyslexia_helper.core.log_config import configure_logging
from dyslexia_helper.core.settings import Settings, settings as default_settings
from dyslexia_helper.errors import GatewayError
from dyslexia_helper.services.llm_service import CompletionClient, GroqCompletionClient
from dyslexia_helper.services.preferences import InMemoryPreferencesStore, PreferencesStore

logger = logging.getLogger("dyslexia_helper")

ACCESS_LOG_LIMIT = 80


def _register_handlers(app: FastAPI) -> None:
    @app.exception_handler(GatewayError)
    async def gateway_error(request: Request, exc: GatewayError):
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.to_body())
        else:
            logger.warning("%s %s rejected: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content=exc.to_body())

    @app.exception_handler(RequestValidationError)
    async def bad_body(request: Request, exc: RequestValidationError):
        logger.warning("%s %s bad body: %s", request.method, request.url.path, exc.errors())
        return JSONResponse(
            status_code=400,
            content={"message": "Request body is required and must be a JSON object"},
        )

    @app.exception_handler(Exception)
    async def unhandled(request: Request, exc: Exception):
        logger.exception("%s %s crashed", request.method, request.url.path)
        return JSONResponse(
            status_code=500,
            content={"message": "Internal Server Error", "error": str(exc)},
        )


def _register_access_log(app: FastAPI) -> None:
    @app.middleware("http")
    async def access_log(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        path = request.url.path
        if not path.startswith("/api"):
            return response

        duration = int((time.perf_counter() - start) * 1000)
        line = f"{request.method} {path} {response.status_code} in {duration}ms"
        if response.headers.get("content-type", "").startswith("application/json"):
            # тело уже отдано итератором: собираем и отдаём заново
            body = b"".join([chunk async for chunk in response.body_iterator])
            line += f" :: {body.decode('utf-8', errors='replace')}"
            response = Response(
                content=body,
                status_code=response.status_code,
                headers=dict(response.headers),
                media_type=response.media_type,
            )
        if len(line) > ACCESS_LOG_LIMIT:
            line = line[: ACCESS_LOG_LIMIT - 1] + "…"
        logger.info(line)
        return response


def create_app(
    settings: Optional[Settings] = None,
    llm: Optional[CompletionClient] = None,
    store: Optional[PreferencesStore] = None,
) -> FastAPI:
    """
    Собирает приложение. Коллабораторы можно передать явно (тесты),
    иначе: Groq-клиент по настройкам и хранилище в памяти.
    """
    settings = settings or default_settings

    app = FastAPI(
        title="Dyslexia Helper API",
        version="1.0.0",
        description="Шлюз текстовых операций для людей с дислексией поверх Groq LLM + настройки отображения.",
        openapi_tags=[
            {"name": "Text Operations", "description": "Summarize / simplify / grammar / translate / chat"},
            {"name": "Preferences", "description": "Настройки отображения пользователя (в памяти)"},
            {"name": "Diagnostics", "description": "Проверка интеграции"},
        ],
    )

    app.state.settings = settings
    app.state.llm = llm or GroqCompletionClient(settings)
    app.state.store = store or InMemoryPreferencesStore()

    if settings.is_dev:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_methods=["*"],
            allow_headers=["*"],
        )
    else:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.CORS_ORIGINS,
            allow_methods=["GET", "POST", "OPTIONS"],
            allow_headers=["Content-Type"],
        )

    _register_access_log(app)
    _register_handlers(app)
    app.include_router(router)

    @app.get("/health", tags=["Diagnostics"])
    async def health():
        return {"status": "ok"}

    return app


configure_logging(default_settings.LOG_LEVEL)
app = create_app()


def main() -> None:
    uvicorn.run(
        "dyslexia_helper.app.main:app",
        host=default_settings.HOST,
        port=default_settings.PORT,
        log_level=default_settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
