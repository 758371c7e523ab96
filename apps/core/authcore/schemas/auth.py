"""Authentication result schemas."""

from typing import Any, Literal

from pydantic import BaseModel, Field, model_validator

ErrorOrigin = Literal["provider", "exception", "timeout"]


class NormalizedError(BaseModel):
    """The single error shape returned across the auth service boundary.

    ``origin`` records whether the provider rejected the call, the call raised,
    or the wait bound expired. It is not serialized.
    """

    message: str
    status: int
    origin: ErrorOrigin = Field(default="provider", exclude=True)


class AuthResult(BaseModel):
    """Provider session and user, passed through without interpretation."""

    session: Any = None
    user: Any = None


class AuthOutcome(BaseModel):
    """Result of a sign-in or sign-up: exactly one of ``data`` and ``error``."""

    data: AuthResult | None = None
    error: NormalizedError | None = None

    @model_validator(mode="after")
    def _exactly_one_side(self) -> "AuthOutcome":
        if (self.data is None) == (self.error is None):
            raise ValueError("AuthOutcome requires exactly one of data or error")
        return self


class SignOutOutcome(BaseModel):
    """Result of a sign-out; ``error`` is ``None`` on success."""

    error: NormalizedError | None = None
