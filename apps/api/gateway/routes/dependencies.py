"""Dependency wiring for routes."""

from __future__ import annotations

from uuid import uuid4

from fastapi import Request

from authcore import AuthService

CORRELATION_HEADER = "X-Correlation-Id"


def resolve_correlation_id(request: Request) -> str:
    existing = getattr(request.state, "correlation_id", None)
    if isinstance(existing, str) and existing:
        return existing

    correlation_id = request.headers.get(CORRELATION_HEADER)
    if not correlation_id:
        correlation_id = f"req-{uuid4()}"
    request.state.correlation_id = correlation_id
    return correlation_id


def get_request_correlation_id(request: Request) -> str:
    return resolve_correlation_id(request)


def get_auth_service(request: Request) -> AuthService:
    """Return the process-wide auth service built at startup."""
    return request.app.state.auth_service
