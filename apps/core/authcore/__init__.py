"""Authentication operations over an external identity provider."""

from authcore.adapters.identity import IdentityProvider, ProviderError, ProviderResponse
from authcore.schemas.auth import AuthOutcome, AuthResult, NormalizedError, SignOutOutcome
from authcore.services.auth import AuthService, create_auth_service

__all__ = [
    "AuthOutcome",
    "AuthResult",
    "AuthService",
    "IdentityProvider",
    "NormalizedError",
    "ProviderError",
    "ProviderResponse",
    "SignOutOutcome",
    "create_auth_service",
]
