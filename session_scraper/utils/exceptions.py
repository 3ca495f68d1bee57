"""Custom exceptions for the session scraper."""

from typing import Optional


class ScraperException(Exception):
    """Base exception for scraper errors."""

    # ReloginError raised by the relogin that ran after this failed fetch
    relogin_error: Optional["ReloginError"] = None


class RequestBuildError(ScraperException):
    """Raised when a request cannot be constructed."""

    pass


class InvalidURLError(RequestBuildError):
    """Raised when host and path cannot be composed into an absolute URL."""

    pass


class TransportError(ScraperException):
    """Raised when the HTTP client fails to complete a request."""

    pass


class ReadError(ScraperException):
    """Raised when a response body cannot be fully read."""

    pass


class AuthenticationError(ScraperException):
    """Raised when the login response lacks the expected session cookie."""

    pass


class NoCredentialsError(ScraperException):
    """Raised when relogin is requested before any successful login."""

    pass


class ReloginError(ScraperException):
    """Raised or attached when an automatic relogin after a fetch fails."""

    def __init__(self, message: str = "", connections: int = 0, limit: int = 0, result=None):
        super().__init__(message)
        self.connections = connections
        self.limit = limit
        # FetchResult of the fetch that triggered the relogin, if it succeeded
        self.result = result
