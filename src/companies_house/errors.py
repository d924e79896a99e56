"""Error types raised by the Companies House client."""

from __future__ import annotations


class CompaniesHouseError(RuntimeError):
    """Base error for Companies House client operations."""


class InvalidRequestError(CompaniesHouseError, ValueError):
    """Raised when caller input is rejected before any network access."""


class HTTPTransportError(CompaniesHouseError):
    """Raised when the request fails before an HTTP status is observed."""


class HTTPResponseError(CompaniesHouseError):
    """Raised when the API answers with a status code of 400 or above."""

    def __init__(
        self,
        status_code: int,
        body: str | None = None,
        *,
        url: str = "",
        message: str = "Unexpected HTTP response",
    ) -> None:
        self.status_code = status_code
        self.body = body
        self.url = url
        super().__init__(f"{message} (HTTP {status_code})")


class ResponseDecodeError(CompaniesHouseError):
    """Raised when a successful response body does not parse as declared."""

    def __init__(self, message: str, *, status_code: int) -> None:
        self.status_code = status_code
        super().__init__(message)
