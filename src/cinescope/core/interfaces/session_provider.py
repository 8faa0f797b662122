"""Session provider interface."""

from abc import ABC, abstractmethod
from typing import Optional


class ISessionProvider(ABC):
    """Interface for the user session.

    Callers ask on every action; the answer must not be cached.
    """

    @abstractmethod
    def is_authenticated(self) -> bool:
        """Check if a user is signed in."""
        pass

    @abstractmethod
    def get_token(self) -> Optional[str]:
        """Get the bearer token for authenticated requests, if any."""
        pass

    @abstractmethod
    def login(self, token: str) -> None:
        """Start a session with the given bearer token."""
        pass

    @abstractmethod
    def logout(self) -> None:
        """End the current session."""
        pass
