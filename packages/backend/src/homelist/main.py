"""FastAPI application factory.

Learn: App factory pattern: create_app() returns a configured FastAPI
instance. Everything process-wide is built here exactly once and hung
on app.state:
- settings (validated: a missing production JWT secret fails here)
- db (engine + session factory, disposed in lifespan shutdown)
- hasher, tokens (the password hasher and token service)

There is no module-level app. Run with:
    uvicorn homelist.main:create_app --factory
or `homelist serve`.
"""

from contextlib import asynccontextmanager
from typing import Optional

import structlog
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from homelist import __version__
from homelist.api import api_router
from homelist.auth.jwt import TokenService
from homelist.auth.password import PasswordHasher
from homelist.config import Settings, get_settings
from homelist.db.engine import Database
from homelist.errors import HomelistError, InternalError

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle.

    Learn: Anything before `yield` runs at startup, after `yield` runs at shutdown.
    """
    settings: Settings = app.state.settings
    logger.info(
        "homelist.starting",
        version=__version__,
        environment=settings.environment,
        port=settings.port,
    )
    if settings.jwt_secret_is_default:
        logger.warning("homelist.dev_jwt_secret", environment=settings.environment)

    yield

    logger.info("homelist.shutdown")
    await app.state.db.dispose()


def _error_response(exc: HomelistError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=exc.headers,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Map domain errors to HTTP responses.

    Learn: Internal failures are logged with their traceback and reach
    the caller only as a generic 500 body.
    """

    @app.exception_handler(HomelistError)
    async def homelist_error_handler(request: Request, exc: HomelistError):
        return _error_response(exc)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=400,
            content={
                "detail": "Invalid request",
                "errors": jsonable_encoder(exc.errors(), exclude={"ctx", "input"}),
            },
        )

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError):
        logger.exception("homelist.database_error", error_type=type(exc).__name__)
        return _error_response(InternalError())

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("homelist.unhandled_error", error_type=type(exc).__name__)
        return _error_response(InternalError())


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build and return the FastAPI application."""
    settings = settings or get_settings()

    app = FastAPI(
        title="Homelist",
        description="Property-listing marketplace API",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.db = Database(settings.database_url, echo=settings.debug)
    app.state.hasher = PasswordHasher(rounds=settings.bcrypt_rounds)
    app.state.tokens = TokenService(settings.jwt_secret, algorithm=settings.jwt_algorithm)

    # ── Middleware stack ──────────────────────────────────────
    # Note: Starlette middleware executes in reverse order of registration.
    # Request flow: CORS → Security → RequestId → handler

    from homelist.middleware.request_id import RequestIdMiddleware
    from homelist.middleware.security import SecurityHeadersMiddleware

    app.add_middleware(RequestIdMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    app.include_router(api_router)

    return app
