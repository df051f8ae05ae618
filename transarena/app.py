"""FastAPI application for the TransArena service.

The ArenaService is built once in the lifespan (or injected by the caller,
e.g. tests) and stored on ``app.state``.  Errors from the service are
TransArenaError subclasses that carry their own HTTP status.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from transarena.config import ArenaConfig, load_config
from transarena.errors import TransArenaError
from transarena.schemas import (
    CheckReport,
    DetectionResult,
    DetectRequest,
    HealthResponse,
    LanguagesResponse,
    SimilarityReport,
    SimilarityRequest,
    TranslateResponse,
    TranslationRequest,
)
from transarena.service import ArenaService

logger = logging.getLogger(__name__)


def create_app(
    config: ArenaConfig | None = None,
    service: ArenaService | None = None,
) -> FastAPI:
    """Create the app.

    With ``service`` given, the app uses it as-is and leaves closing it to
    the caller.  Otherwise the service is built from ``config`` (or the
    config file) at startup and closed at shutdown.
    """
    if config is None and service is None:
        config = load_config()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = app.state.service is None
        if owned:
            logger.info("Starting TransArena service...")
            app.state.service = ArenaService.from_config(config)
        yield
        if owned:
            logger.info("Shutting down TransArena service...")
            await app.state.service.close()
            app.state.service = None

    app = FastAPI(
        title="TransArena",
        description="Translation, language detection and LLM translator comparison",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.service = service

    cors_origins = config.server.cors_origins if config is not None else ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(TransArenaError)
    async def handle_arena_error(request: Request, exc: TransArenaError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def handle_bad_body(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"error": "Invalid request body"})

    def get_service(request: Request) -> ArenaService:
        return request.app.state.service

    @app.get("/health", response_model=HealthResponse)
    async def health(request: Request) -> HealthResponse:
        return HealthResponse(status="healthy", models=get_service(request).models)

    @app.get("/languages", response_model=LanguagesResponse)
    async def languages(request: Request) -> LanguagesResponse:
        return get_service(request).list_languages()

    @app.post("/detect-language", response_model=DetectionResult)
    async def detect_language(request: Request, body: DetectRequest) -> DetectionResult:
        return await get_service(request).detect(body.text)

    @app.post("/translate", response_model=TranslateResponse)
    async def translate(request: Request, body: TranslationRequest) -> TranslateResponse:
        return await get_service(request).translate(body)

    @app.post("/similarity_index", response_model=SimilarityReport, response_model_exclude_none=True)
    async def similarity_index(request: Request, body: SimilarityRequest) -> SimilarityReport:
        return await get_service(request).similarity_index(body)

    @app.post("/translate_to_check", response_model=CheckReport)
    async def translate_to_check(request: Request, body: TranslationRequest) -> CheckReport:
        return await get_service(request).translate_to_check(body)

    return app
