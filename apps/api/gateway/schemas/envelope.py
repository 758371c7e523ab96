"""Response envelope schemas shared by every endpoint."""

from typing import Any, Literal

from pydantic import BaseModel


class ErrorEnvelope(BaseModel):
    status: Literal["error"] = "error"
    error: str


class RouteNotFoundEnvelope(ErrorEnvelope):
    path: str
    timestamp: str


class InternalErrorEnvelope(ErrorEnvelope):
    timestamp: str


class AuthData(BaseModel):
    """Provider session and user, forwarded untouched."""

    session: Any = None
    user: Any = None


class SuccessEnvelope(BaseModel):
    status: Literal["success"] = "success"
    data: AuthData | None = None
    message: str | None = None

    def to_content(self) -> dict[str, Any]:
        """Dump ``status`` plus the fields that were explicitly provided.

        Nested ``None`` values (a sign-up still awaiting confirmation has no
        session) are kept.
        """
        return self.model_dump(mode="json", include={"status", *self.model_fields_set})
