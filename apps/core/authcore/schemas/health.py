"""Health check schemas shared by both services."""

from datetime import UTC, datetime
from typing import Literal

from pydantic import BaseModel, Field


def utc_timestamp() -> str:
    """Current UTC time as ISO-8601 with millisecond precision and a ``Z`` suffix."""
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class HealthResponse(BaseModel):
    status: Literal["ok"] = "ok"
    service: str
    timestamp: str = Field(default_factory=utc_timestamp)
