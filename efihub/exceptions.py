"""
EFIHUB exception hierarchy.

All exceptions inherit from EfihubError for easy catching.
"""

from typing import Any


class EfihubError(Exception):
    """Base exception for all efihub errors."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        if self.context:
            ctx = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({ctx})"
        return self.message


class AuthenticationError(EfihubError):
    """Token endpoint rejected the client credentials or could not be reached."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message, status_code=status_code)
        self.status_code = status_code


class MalformedTokenResponseError(AuthenticationError):
    """Token endpoint answered 2xx without a usable access token."""

    def __init__(self, message: str, *, observed_keys: list[str]) -> None:
        EfihubError.__init__(self, message, observed_keys=observed_keys)
        self.status_code = None
        self.observed_keys = observed_keys


class FileSpecError(EfihubError):
    """A file specification for a multipart upload could not be used."""


class FileNotReadableError(FileSpecError):
    """Upload path does not exist or cannot be opened for reading."""

    def __init__(self, message: str, *, path: str) -> None:
        super().__init__(message, path=path)
        self.path = path


class InvalidFileSpecificationError(FileSpecError):
    """File specification has an unrecognized shape."""

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(message, field=field)
        self.field = field


class APIError(EfihubError):
    """API request failed."""

    def __init__(self, message: str, *, code: int, endpoint: str | None = None) -> None:
        super().__init__(message, code=code, endpoint=endpoint)
        self.code = code
        self.endpoint = endpoint


class RemoteCallError(APIError):
    """Domain endpoint answered with a non-success status."""


class NetworkError(EfihubError):
    """Network-level error (connection failed, timeout)."""
