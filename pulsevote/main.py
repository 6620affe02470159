"""FastAPI application factory. No business logic; only wiring, middleware and error mapping.

Run with: uvicorn pulsevote.main:create_app --factory
"""

import logging
import time

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from pulsevote.api.v1 import router as v1_router
from pulsevote.core.config import Settings, get_settings
from pulsevote.core.database import build_engine, build_session_factory
from pulsevote.core.errors import PulseVoteError
from pulsevote.core.logging import configure_logging
from pulsevote.core.security import TokenService

logger = logging.getLogger(__name__)
request_logger = logging.getLogger("pulsevote.http")


def _validation_message(exc: RequestValidationError) -> str:
    """First schema error as a single readable message."""
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    msg = str(first.get("msg", "Invalid request"))
    if msg.startswith("Value error, "):
        return msg[len("Value error, "):]
    loc = [str(part) for part in first.get("loc", ()) if part != "body"]
    if loc:
        return f"{'.'.join(loc)}: {msg}"
    return msg


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(PulseVoteError)
    async def handle_app_error(request: Request, exc: PulseVoteError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error(
                "Internal error on %s %s: %s",
                request.method,
                request.url.path,
                exc.message,
                exc_info=exc.cause or exc,
            )
            return JSONResponse(status_code=exc.status_code, content={"detail": "Server Error"})
        headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.message},
            headers=headers,
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": _validation_message(exc)})

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"detail": "Server Error"})


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the app. Settings are loaded once here and shared through app.state."""
    if settings is None:
        load_dotenv()
        settings = get_settings()
    configure_logging(settings)

    app = FastAPI(
        title="PulseVote API",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    engine = build_engine(settings)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.token_service = TokenService(settings)

    allowed_origins = [settings.CLIENT_URL]
    if settings.APP_ENV == "dev":
        allowed_origins.append("*")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start) * 1000
        level = logging.WARNING if response.status_code >= 400 else logging.INFO
        request_logger.log(
            level,
            "%s %s status=%s duration=%.1fms ip=%s",
            request.method,
            request.url.path,
            response.status_code,
            duration_ms,
            request.client.host if request.client else "-",
        )
        return response

    _register_exception_handlers(app)
    app.include_router(v1_router, prefix=settings.API_PREFIX)

    @app.get("/")
    def root() -> dict[str, str]:
        """Root route; minimal payload for discovery."""
        return {"message": "PulseVote API"}

    logger.info("PulseVote API configured (env=%s)", settings.APP_ENV)
    return app
