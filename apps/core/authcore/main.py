"""Auth service process entrypoint.

The sign-in, sign-up and sign-out operations are consumed in-process through
``authcore.AuthService``; this application only reports liveness.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from authcore.core.config import get_settings
from authcore.schemas.health import HealthResponse

logger = logging.getLogger(__name__)

SERVICE_NAME = "core"


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(title="authgate core", version="1.0.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health() -> HealthResponse:
        return HealthResponse(service=SERVICE_NAME)

    return app


app = create_app()


def run() -> None:
    import uvicorn

    settings = get_settings()
    logging.basicConfig(level=settings.log_level.upper())
    logger.info("core.starting host=%s port=%s", settings.host, settings.port)
    uvicorn.run("authcore.main:app", host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
