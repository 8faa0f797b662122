"""Utility functions and classes."""

from .exceptions import (
    AuthenticationRequiredError,
    CinescopeError,
    ConfigurationError,
    SearchServiceError,
    WatchlistServiceError,
)

__all__ = [
    "CinescopeError",
    "ConfigurationError",
    "SearchServiceError",
    "WatchlistServiceError",
    "AuthenticationRequiredError",
]
