"""FastAPI application entrypoint."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from authcore import AuthService, create_auth_service
from authcore.core.config import get_settings as get_core_settings
from authcore.core.logging_safety import safe_log_identifier
from authcore.schemas.health import utc_timestamp
from gateway.core.config import get_settings
from gateway.errors import ApiError
from gateway.routes import auth_router, health_router
from gateway.routes.auth import CREDENTIALS_REQUIRED_MESSAGE
from gateway.routes.dependencies import CORRELATION_HEADER, resolve_correlation_id
from gateway.schemas.envelope import ErrorEnvelope, InternalErrorEnvelope, RouteNotFoundEnvelope

logger = logging.getLogger(__name__)

_CREDENTIALS_VALIDATION_PATHS: set[tuple[str, str]] = {
    ("POST", "/auth/signin"),
    ("POST", "/auth/signup"),
}

# Unknown paths and known paths hit with the wrong method both read as "no such route".
_ROUTE_NOT_FOUND_STATUSES = frozenset({404, 405})


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
    if getattr(app.state, "auth_service", None) is None:
        core_settings = get_core_settings()
        app.state.auth_service = await create_auth_service(core_settings)
        logger.info("gateway.auth_service_ready provider=%s", core_settings.identity_provider)
    yield


def create_app(auth_service: AuthService | None = None) -> FastAPI:
    """Build the gateway.

    An injected ``auth_service`` is used as-is; otherwise one is built from
    configuration at startup and shared by every request.
    """
    settings = get_settings()
    app = FastAPI(title="authgate API", version="1.0.0", lifespan=_lifespan)
    app.state.auth_service = auth_service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        correlation_id = resolve_correlation_id(request)
        logger.info(
            "request.received correlation_id=%s method=%s path=%s",
            safe_log_identifier(correlation_id, prefix="cid"),
            request.method,
            request.url.path,
        )
        response = await call_next(request)
        response.headers[CORRELATION_HEADER] = correlation_id
        return response

    @app.exception_handler(ApiError)
    async def handle_api_error(_, exc: ApiError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=exc.payload.model_dump(mode="json"))

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        route = request.scope.get("route")
        route_path = getattr(route, "path", request.url.path)
        route_key = (request.method.upper(), route_path)
        if route_key in _CREDENTIALS_VALIDATION_PATHS:
            payload = ErrorEnvelope(error=CREDENTIALS_REQUIRED_MESSAGE)
        else:
            payload = ErrorEnvelope(error="Invalid request payload")
        logger.info("request.invalid method=%s path=%s errors=%s", request.method, request.url.path, len(exc.errors()))
        return JSONResponse(status_code=400, content=payload.model_dump(mode="json"))

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        if exc.status_code in _ROUTE_NOT_FOUND_STATUSES:
            payload = RouteNotFoundEnvelope(
                error="Route not found",
                path=request.url.path,
                timestamp=utc_timestamp(),
            )
            return JSONResponse(status_code=404, content=payload.model_dump(mode="json"))
        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorEnvelope(error=str(exc.detail)).model_dump(mode="json"),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            "request.failed method=%s path=%s status=500",
            request.method,
            request.url.path,
            exc_info=exc,
        )
        payload = InternalErrorEnvelope(error="Internal server error", timestamp=utc_timestamp())
        return JSONResponse(status_code=500, content=payload.model_dump(mode="json"))

    app.include_router(health_router)
    app.include_router(auth_router)

    return app


app = create_app()


def run() -> None:
    import uvicorn

    settings = get_settings()
    logging.basicConfig(level=settings.log_level.upper())
    logger.info("gateway.starting host=%s port=%s", settings.host, settings.port)
    uvicorn.run("gateway.main:app", host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
