"""Application exception types."""

from gateway.schemas.envelope import ErrorEnvelope


class ApiError(Exception):
    """Client-facing error that renders as the ``{status, error}`` envelope."""

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        self.payload = ErrorEnvelope(error=message)
        super().__init__(message)


__all__ = ["ApiError"]
