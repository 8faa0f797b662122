"""Bearer-token session provider."""

from typing import Optional

from ...config.models import Config
from ...infrastructure.logging import LoggerMixin
from ..interfaces import ISessionProvider


class TokenSessionProvider(ISessionProvider, LoggerMixin):
    """Session backed by a client-held bearer token.

    The token is opaque here: nothing is decoded from it, and any access
    decision is left to the API that receives it.
    """

    def __init__(self, config: Config) -> None:
        """Initialize session provider.

        Args:
            config: Application configuration. ``api.access_token`` seeds the session.
        """
        self._token: Optional[str] = config.api.access_token

    def is_authenticated(self) -> bool:
        return bool(self._token)

    def get_token(self) -> Optional[str]:
        return self._token

    def login(self, token: str) -> None:
        token = token.strip()
        if not token:
            raise ValueError("Token must not be empty")
        self._token = token
        self.logger.info("Session started")

    def logout(self) -> None:
        self._token = None
        self.logger.info("Session ended")
