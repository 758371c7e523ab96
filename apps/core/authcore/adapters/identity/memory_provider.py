"""In-process identity provider for local development and tests."""

from __future__ import annotations

import hashlib
import secrets
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any
from uuid import uuid4

from authcore.adapters.identity.base import IdentityProvider, ProviderError, ProviderResponse

_SESSION_TTL_SECONDS = 3600


@dataclass(slots=True)
class _Account:
    id: str
    email: str
    password_digest: str
    created_at: datetime


def _digest(password: str) -> str:
    return hashlib.sha256(password.encode("utf-8")).hexdigest()


class InMemoryIdentityProvider(IdentityProvider):
    """Deterministic stand-in for a hosted identity provider.

    Accounts are confirmed on sign-up and receive a session immediately.
    Error messages and statuses follow Supabase Auth:

    - duplicate sign-up: ``User already registered`` (422)
    - bad credentials: ``Invalid login credentials`` (400)
    - unknown or revoked access token: ``Invalid JWT`` (401)
    - sign-out with no session: ``Auth session missing!`` (400)
    """

    def __init__(self) -> None:
        self._accounts: dict[str, _Account] = {}
        self._access_tokens: dict[str, str] = {}
        self._current_token: str | None = None

    async def sign_in_with_password(self, email: str, password: str) -> ProviderResponse:
        account = self._accounts.get(email.strip().lower())
        if account is None or not secrets.compare_digest(account.password_digest, _digest(password)):
            return ProviderResponse(error=ProviderError(message="Invalid login credentials", status=400))
        return ProviderResponse(data=self._issue_session(account))

    async def sign_up(self, email: str, password: str) -> ProviderResponse:
        key = email.strip().lower()
        if key in self._accounts:
            return ProviderResponse(error=ProviderError(message="User already registered", status=422))

        account = _Account(
            id=str(uuid4()),
            email=key,
            password_digest=_digest(password),
            created_at=datetime.now(UTC),
        )
        self._accounts[key] = account
        return ProviderResponse(data=self._issue_session(account))

    async def set_session(self, access_token: str, refresh_token: str) -> ProviderResponse:
        account_id = self._access_tokens.get(access_token)
        if account_id is None:
            return ProviderResponse(error=ProviderError(message="Invalid JWT", status=401))

        self._current_token = access_token
        account = next(item for item in self._accounts.values() if item.id == account_id)
        return ProviderResponse(
            data={
                "session": self._session_payload(account, access_token, refresh_token),
                "user": _user_payload(account),
            }
        )

    async def sign_out(self) -> ProviderResponse:
        if self._current_token is None:
            return ProviderResponse(error=ProviderError(message="Auth session missing!", status=400))

        self._access_tokens.pop(self._current_token, None)
        self._current_token = None
        return ProviderResponse()

    def _issue_session(self, account: _Account) -> dict[str, Any]:
        access_token = secrets.token_urlsafe(32)
        self._access_tokens[access_token] = account.id
        session = self._session_payload(account, access_token, secrets.token_urlsafe(16))
        return {"session": session, "user": _user_payload(account)}

    @staticmethod
    def _session_payload(account: _Account, access_token: str, refresh_token: str) -> dict[str, Any]:
        return {
            "access_token": access_token,
            "refresh_token": refresh_token,
            "token_type": "bearer",
            "expires_in": _SESSION_TTL_SECONDS,
            "expires_at": int(datetime.now(UTC).timestamp()) + _SESSION_TTL_SECONDS,
            "user": _user_payload(account),
        }


def _user_payload(account: _Account) -> dict[str, Any]:
    return {
        "id": account.id,
        "email": account.email,
        "aud": "authenticated",
        "role": "authenticated",
        "created_at": account.created_at.isoformat(),
    }


__all__ = ["InMemoryIdentityProvider"]
