"""Authentication request schemas."""

from pydantic import BaseModel


class CredentialsRequest(BaseModel):
    """Sign-in and sign-up body. Presence is checked by the route, not the schema."""

    email: str | None = None
    password: str | None = None
