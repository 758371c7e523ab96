"""Identity provider adapters."""

from .base import IdentityProvider, ProviderError, ProviderResponse
from .memory_provider import InMemoryIdentityProvider
from .supabase_provider import SupabaseIdentityProvider

__all__ = [
    "IdentityProvider",
    "ProviderError",
    "ProviderResponse",
    "InMemoryIdentityProvider",
    "SupabaseIdentityProvider",
]
