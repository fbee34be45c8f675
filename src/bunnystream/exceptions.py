"""Custom exceptions for the Bunny Stream SDK."""

from __future__ import annotations

from typing import Optional


class BunnyStreamError(Exception):
    """Base exception for all client errors."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)

    def with_context(self, prefix: str) -> "BunnyStreamError":
        """Return a copy of this error of the same class with ``prefix`` prepended."""
        err = type(self).__new__(type(self))
        BunnyStreamError.__init__(err, f"{prefix}{self}", status_code=self.status_code)
        err.__dict__.update(
            {k: v for k, v in self.__dict__.items() if k != "status_code"}
        )
        return err


class TransportError(BunnyStreamError):
    """The request never produced an HTTP response (connection, timeout, protocol)."""
    pass


class UnauthorizedError(BunnyStreamError):
    """Invalid or missing access key (401)."""
    pass


class NotFoundError(BunnyStreamError):
    """Library, video or caption track does not exist (404)."""
    pass


class UnexpectedStatusError(BunnyStreamError):
    """Any status other than 200, 401 or 404. Check status_code."""
    pass


class FileMissingError(BunnyStreamError):
    """A local upload or captions file does not exist."""

    def __init__(self, path: str, message: Optional[str] = None):
        self.path = path
        super().__init__(message or f"File does not exist: {path}")

    def with_context(self, prefix: str) -> "FileMissingError":
        return FileMissingError(self.path, f"{prefix}{self}")

    def __reduce__(self):
        return (type(self), (self.path, str(self)))


_ERROR_MAP = {
    401: (UnauthorizedError, "Unauthorized; check API key."),
    404: (NotFoundError, "Not found."),
}


def raise_for_status(status_code: int) -> None:
    """Raise the appropriate exception for a non-200 API response."""
    if status_code == 200:
        return

    exc_class, message = _ERROR_MAP.get(
        status_code,
        (
            UnexpectedStatusError,
            f"An unknown error occurred. Status code: {status_code}",
        ),
    )
    raise exc_class(message, status_code=status_code)
