"""Authentication service layer."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from authcore.adapters.identity import (
    IdentityProvider,
    InMemoryIdentityProvider,
    ProviderError,
    ProviderResponse,
    SupabaseIdentityProvider,
)
from authcore.core.config import Settings
from authcore.core.logging_safety import safe_email_label
from authcore.schemas.auth import AuthOutcome, AuthResult, NormalizedError, SignOutOutcome

logger = logging.getLogger(__name__)

DEFAULT_REJECTION_STATUS = 400
UNEXPECTED_ERROR_STATUS = 500
TIMEOUT_ERROR_STATUS = 504
UNKNOWN_ERROR_MESSAGE = "Unknown error occurred"
TIMEOUT_ERROR_MESSAGE = "Identity provider request timed out"

_T = TypeVar("_T")


def normalize_provider_error(error: ProviderError) -> NormalizedError:
    return NormalizedError(message=error.message, status=error.status or DEFAULT_REJECTION_STATUS)


def normalize_exception(exc: BaseException) -> NormalizedError:
    return NormalizedError(
        message=str(exc) or UNKNOWN_ERROR_MESSAGE,
        status=UNEXPECTED_ERROR_STATUS,
        origin="exception",
    )


def timeout_error() -> NormalizedError:
    return NormalizedError(message=TIMEOUT_ERROR_MESSAGE, status=TIMEOUT_ERROR_STATUS, origin="timeout")


class AuthService:
    """Adapts an identity provider to the normalized ``(data, error)`` contract.

    Holds only the provider handle and the per-call wait bound. Provider
    rejections come back as ``NormalizedError`` values; nothing is raised and
    nothing is retried.
    """

    def __init__(self, provider: IdentityProvider, *, timeout_seconds: float | None = 10.0) -> None:
        self._provider = provider
        self._timeout_seconds = timeout_seconds

    @property
    def provider(self) -> IdentityProvider:
        return self._provider

    async def sign_in(self, email: str, password: str) -> AuthOutcome:
        return await self._authenticate("signin", self._provider.sign_in_with_password, email, password)

    async def sign_up(self, email: str, password: str) -> AuthOutcome:
        return await self._authenticate("signup", self._provider.sign_up, email, password)

    async def sign_out(self, token: str) -> SignOutOutcome:
        try:
            async with self._provider.session_scope():
                session = await self._bounded(self._provider.set_session(token, ""))
                if session.error is not None:
                    logger.info("auth.signout_rejected step=set_session status=%s", session.error.status)
                    return SignOutOutcome(error=normalize_provider_error(session.error))

                response = await self._bounded(self._provider.sign_out())
        except TimeoutError:
            logger.warning("auth.signout_timeout timeout_seconds=%s", self._timeout_seconds)
            return SignOutOutcome(error=timeout_error())
        except Exception as exc:
            logger.exception("auth.signout_failed reason=provider_exception")
            return SignOutOutcome(error=normalize_exception(exc))

        if response.error is not None:
            logger.info("auth.signout_rejected step=sign_out status=%s", response.error.status)
            return SignOutOutcome(error=normalize_provider_error(response.error))

        return SignOutOutcome()

    async def _authenticate(
        self,
        operation: str,
        call: Callable[[str, str], Awaitable[ProviderResponse]],
        email: str,
        password: str,
    ) -> AuthOutcome:
        email_label = safe_email_label(email)
        try:
            response = await self._bounded(call(email, password))
        except TimeoutError:
            logger.warning(
                "auth.%s_timeout email=%s timeout_seconds=%s",
                operation,
                email_label,
                self._timeout_seconds,
            )
            return AuthOutcome(error=timeout_error())
        except Exception as exc:
            logger.exception("auth.%s_failed email=%s reason=provider_exception", operation, email_label)
            return AuthOutcome(error=normalize_exception(exc))

        if response.error is not None:
            logger.info(
                "auth.%s_rejected email=%s status=%s",
                operation,
                email_label,
                response.error.status,
            )
            return AuthOutcome(error=normalize_provider_error(response.error))

        data = response.data or {}
        logger.info("auth.%s_succeeded email=%s", operation, email_label)
        return AuthOutcome(data=AuthResult(session=data.get("session"), user=data.get("user")))

    async def _bounded(self, awaitable: Awaitable[_T]) -> _T:
        if self._timeout_seconds is None:
            return await awaitable
        return await asyncio.wait_for(awaitable, timeout=self._timeout_seconds)


async def build_identity_provider(settings: Settings) -> IdentityProvider:
    """Resolve the provider adapter from configuration."""
    if settings.identity_provider == "supabase":
        return await SupabaseIdentityProvider.from_settings(settings)
    return InMemoryIdentityProvider()


async def create_auth_service(settings: Settings) -> AuthService:
    provider = await build_identity_provider(settings)
    return AuthService(provider, timeout_seconds=settings.provider_timeout_seconds)


__all__ = [
    "AuthService",
    "build_identity_provider",
    "create_auth_service",
    "normalize_exception",
    "normalize_provider_error",
    "timeout_error",
]
