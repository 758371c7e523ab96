"""Identity provider interfaces."""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any


@dataclass(slots=True, frozen=True)
class ProviderError:
    """Structured rejection returned by a provider; ``status`` may be omitted."""

    message: str
    status: int | None = None


@dataclass(slots=True, frozen=True)
class ProviderResponse:
    """A provider ``(data, error)`` pair. ``data`` carries ``session`` and ``user`` keys."""

    data: dict[str, Any] | None = None
    error: ProviderError | None = None


class IdentityProvider(ABC):
    """Provider-neutral capability interface consumed by the auth service.

    Rejections are returned as ``ProviderResponse.error``. Anything raised is
    treated by callers as an unexpected failure.

    ``set_session`` and ``sign_out`` act on the client's current session, so
    callers pair them inside ``session_scope()``.
    """

    @abstractmethod
    async def sign_in_with_password(self, email: str, password: str) -> ProviderResponse:
        """Authenticate an existing account and issue a session."""

    @abstractmethod
    async def sign_up(self, email: str, password: str) -> ProviderResponse:
        """Create an account; the session may be absent if confirmation is pending."""

    @abstractmethod
    async def set_session(self, access_token: str, refresh_token: str) -> ProviderResponse:
        """Make the given access token the client's current session."""

    @abstractmethod
    async def sign_out(self) -> ProviderResponse:
        """Revoke the current session."""

    @asynccontextmanager
    async def session_scope(self) -> AsyncIterator[None]:
        """Hold the provider's current session for one ``set_session``/``sign_out`` pair."""
        lock = self.__dict__.setdefault("_session_lock", asyncio.Lock())
        async with lock:
            yield


__all__ = ["IdentityProvider", "ProviderError", "ProviderResponse"]
