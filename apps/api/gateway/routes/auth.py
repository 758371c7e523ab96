"""Authentication routes."""

from __future__ import annotations

import logging
import re
from typing import Annotated

from fastapi import APIRouter, Body, Depends, Header, status
from fastapi.responses import JSONResponse

from authcore import AuthService, NormalizedError
from authcore.core.logging_safety import safe_email_label, safe_log_identifier
from authcore.services.auth import UNEXPECTED_ERROR_STATUS
from gateway.errors import ApiError
from gateway.routes.dependencies import get_auth_service, get_request_correlation_id
from gateway.schemas.auth import CredentialsRequest
from gateway.schemas.envelope import AuthData, ErrorEnvelope, SuccessEnvelope

router = APIRouter(prefix="/auth", tags=["Auth"])
logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6
CREDENTIALS_REQUIRED_MESSAGE = "Email and password are required"
PASSWORD_TOO_SHORT_MESSAGE = f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
TOKEN_REQUIRED_MESSAGE = "Authorization token is required"
SIGNED_OUT_MESSAGE = "Successfully signed out"

_BEARER_PREFIXES = re.compile(r"^(Bearer\s+)+", re.IGNORECASE)

_ERROR_RESPONSES = {
    400: {"model": ErrorEnvelope},
    401: {"model": ErrorEnvelope},
    500: {"model": ErrorEnvelope},
    504: {"model": ErrorEnvelope},
}


def extract_bearer_token(authorization: str | None) -> str:
    """Strip every leading ``Bearer`` prefix; an empty result means no token."""
    if not authorization:
        return ""
    return _BEARER_PREFIXES.sub("", authorization, count=1)


def _require_credentials(payload: CredentialsRequest | None) -> tuple[str, str]:
    if payload is None or not payload.email or not payload.password:
        raise ApiError(status_code=status.HTTP_400_BAD_REQUEST, message=CREDENTIALS_REQUIRED_MESSAGE)
    return payload.email, payload.password


def _rejection(error: NormalizedError, *, operation: str, generic_message: str, correlation_id: str) -> ApiError:
    # Provider client failures carry internal detail; only the generic message leaves the gateway.
    if error.origin == "exception":
        logger.error(
            "auth.%s_error correlation_id=%s detail=%s",
            operation,
            safe_log_identifier(correlation_id, prefix="cid"),
            error.message,
        )
        return ApiError(status_code=UNEXPECTED_ERROR_STATUS, message=generic_message)
    return ApiError(status_code=error.status, message=error.message)


@router.post("/signin", response_model=SuccessEnvelope, responses=_ERROR_RESPONSES)
async def sign_in(
    service: Annotated[AuthService, Depends(get_auth_service)],
    correlation_id: Annotated[str, Depends(get_request_correlation_id)],
    payload: Annotated[CredentialsRequest | None, Body()] = None,
) -> JSONResponse:
    email, password = _require_credentials(payload)

    try:
        outcome = await service.sign_in(email, password)
    except Exception as exc:
        logger.exception(
            "auth.signin_error correlation_id=%s email=%s",
            safe_log_identifier(correlation_id, prefix="cid"),
            safe_email_label(email),
        )
        raise ApiError(status_code=500, message="Failed to sign in") from exc

    if outcome.error is not None:
        raise _rejection(
            outcome.error,
            operation="signin",
            generic_message="Failed to sign in",
            correlation_id=correlation_id,
        )

    envelope = SuccessEnvelope(data=AuthData(session=outcome.data.session, user=outcome.data.user))
    return JSONResponse(status_code=status.HTTP_200_OK, content=envelope.to_content())


@router.post(
    "/signup",
    response_model=SuccessEnvelope,
    status_code=status.HTTP_201_CREATED,
    responses=_ERROR_RESPONSES,
)
async def sign_up(
    service: Annotated[AuthService, Depends(get_auth_service)],
    correlation_id: Annotated[str, Depends(get_request_correlation_id)],
    payload: Annotated[CredentialsRequest | None, Body()] = None,
) -> JSONResponse:
    email, password = _require_credentials(payload)
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ApiError(status_code=status.HTTP_400_BAD_REQUEST, message=PASSWORD_TOO_SHORT_MESSAGE)

    try:
        outcome = await service.sign_up(email, password)
    except Exception as exc:
        logger.exception(
            "auth.signup_error correlation_id=%s email=%s",
            safe_log_identifier(correlation_id, prefix="cid"),
            safe_email_label(email),
        )
        raise ApiError(status_code=500, message="Failed to sign up") from exc

    if outcome.error is not None:
        raise _rejection(
            outcome.error,
            operation="signup",
            generic_message="Failed to sign up",
            correlation_id=correlation_id,
        )

    envelope = SuccessEnvelope(data=AuthData(session=outcome.data.session, user=outcome.data.user))
    return JSONResponse(status_code=status.HTTP_201_CREATED, content=envelope.to_content())


@router.post("/signout", response_model=SuccessEnvelope, responses=_ERROR_RESPONSES)
async def sign_out(
    service: Annotated[AuthService, Depends(get_auth_service)],
    correlation_id: Annotated[str, Depends(get_request_correlation_id)],
    authorization: Annotated[str | None, Header()] = None,
) -> JSONResponse:
    token = extract_bearer_token(authorization)
    if not token:
        logger.warning(
            "auth.signout_rejected correlation_id=%s reason=missing_bearer",
            safe_log_identifier(correlation_id, prefix="cid"),
        )
        raise ApiError(status_code=status.HTTP_401_UNAUTHORIZED, message=TOKEN_REQUIRED_MESSAGE)

    try:
        outcome = await service.sign_out(token)
    except Exception as exc:
        logger.exception(
            "auth.signout_error correlation_id=%s",
            safe_log_identifier(correlation_id, prefix="cid"),
        )
        raise ApiError(status_code=500, message="Failed to sign out") from exc

    if outcome.error is not None:
        raise _rejection(
            outcome.error,
            operation="signout",
            generic_message="Failed to sign out",
            correlation_id=correlation_id,
        )

    envelope = SuccessEnvelope(message=SIGNED_OUT_MESSAGE)
    return JSONResponse(status_code=status.HTTP_200_OK, content=envelope.to_content())
