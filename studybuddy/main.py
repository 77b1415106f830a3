import logging

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from studybuddy.clients.gemini import CompletionClient
from studybuddy.config import Settings, get_settings
from studybuddy.middleware import RateLimitMiddleware, SecurityHeadersMiddleware
from studybuddy.services.errors import ErrorKind, TaskError, invalid_input

logger = logging.getLogger(__name__)


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request body"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    return f"{location}: {first.get('msg')}" if location else first.get("msg", "Invalid request body")


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(title=settings.APP_TITLE, debug=settings.DEBUG)
    app.state.settings = settings
    app.state.completion_client = CompletionClient.from_settings(settings)

    from studybuddy.api import api_router

    app.include_router(api_router)

    @app.exception_handler(TaskError)
    async def task_error_handler(request: Request, exc: TaskError):
        classified = exc.classified
        headers = None
        if classified.kind is ErrorKind.RATE_LIMITED and classified.retry_after:
            headers = {"Retry-After": str(classified.retry_after)}
        return JSONResponse(classified.to_payload(), status_code=classified.status_code, headers=headers)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        classified = invalid_input(_validation_message(exc)).classified
        return JSONResponse(classified.to_payload(), status_code=classified.status_code)

    # Last added runs first: CORS wraps the security headers, which wrap the limiter
    app.add_middleware(
        RateLimitMiddleware,
        max_requests=settings.RATE_LIMIT_MAX,
        window_seconds=settings.RATE_LIMIT_WINDOW_SECONDS,
    )
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    logger.info("Using model %s (API key configured: %s)", settings.GEMINI_MODEL, settings.has_api_key)
    return app


app = create_app()


def run():
    settings = app.state.settings
    logger.info("Backend running on port %d, health check at /health", settings.PORT)
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())


if __name__ == "__main__":
    run()
