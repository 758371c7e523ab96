"""Supabase Auth identity provider adapter."""

from __future__ import annotations

import logging
from typing import Any

from supabase import AsyncClient, AuthError, acreate_client

from authcore.adapters.identity.base import IdentityProvider, ProviderError, ProviderResponse
from authcore.core.config import Settings

logger = logging.getLogger(__name__)

_JWT_SEGMENTS = 3


def _dump(model: Any) -> Any:
    if model is None:
        return None
    if hasattr(model, "model_dump"):
        return model.model_dump(mode="json")
    return model


def _auth_response(response: Any) -> ProviderResponse:
    return ProviderResponse(
        data={
            "session": _dump(getattr(response, "session", None)),
            "user": _dump(getattr(response, "user", None)),
        }
    )


def _provider_error(exc: AuthError) -> ProviderError:
    status = getattr(exc, "status", None)
    return ProviderError(
        message=getattr(exc, "message", None) or str(exc),
        status=status if isinstance(status, int) else None,
    )


class SupabaseIdentityProvider(IdentityProvider):
    """Adapts the async Supabase client to the ``(data, error)`` provider contract.

    The Supabase SDK raises ``AuthError`` subclasses for rejected requests;
    those are returned as ``ProviderError`` values. Other exceptions propagate.
    """

    def __init__(self, client: AsyncClient) -> None:
        self._client = client

    @classmethod
    async def from_settings(cls, settings: Settings) -> SupabaseIdentityProvider:
        if not settings.supabase_url or not settings.supabase_key:
            raise ValueError("Supabase URL and key must be configured for the supabase identity provider")

        client = await acreate_client(settings.supabase_url, settings.supabase_key)
        logger.info("identity.provider_ready provider=supabase")
        return cls(client)

    async def sign_in_with_password(self, email: str, password: str) -> ProviderResponse:
        try:
            response = await self._client.auth.sign_in_with_password({"email": email, "password": password})
        except AuthError as exc:
            return ProviderResponse(error=_provider_error(exc))
        return _auth_response(response)

    async def sign_up(self, email: str, password: str) -> ProviderResponse:
        try:
            response = await self._client.auth.sign_up({"email": email, "password": password})
        except AuthError as exc:
            return ProviderResponse(error=_provider_error(exc))
        return _auth_response(response)

    async def set_session(self, access_token: str, refresh_token: str) -> ProviderResponse:
        # The SDK indexes into the JWT payload segment before any request is made.
        if len(access_token.split(".")) != _JWT_SEGMENTS:
            return ProviderResponse(error=ProviderError(message="Invalid JWT", status=400))
        try:
            response = await self._client.auth.set_session(access_token, refresh_token)
        except AuthError as exc:
            return ProviderResponse(error=_provider_error(exc))
        return _auth_response(response)

    async def sign_out(self) -> ProviderResponse:
        try:
            await self._client.auth.sign_out()
        except AuthError as exc:
            return ProviderResponse(error=_provider_error(exc))
        return ProviderResponse()


__all__ = ["SupabaseIdentityProvider"]
