"""Custom exceptions for the application."""


class CinescopeError(Exception):
    """Base exception for all application errors."""

    pass


class ConfigurationError(CinescopeError):
    """Configuration-related errors."""

    pass


class SearchServiceError(CinescopeError):
    """Movie search service errors.

    The message is meant to be shown to the user as-is.
    """

    pass


class WatchlistServiceError(CinescopeError):
    """Watchlist service errors."""

    def __init__(self, message: str, status_code: int = 0) -> None:
        super().__init__(message)
        self.status_code = status_code


class AuthenticationRequiredError(CinescopeError):
    """Raised when an action needs a signed-in session and there is none."""

    pass
