"""Tests for the bearer-token session provider."""

import pytest

from cinescope.config import Config
from cinescope.config.models import ApiConfig
from cinescope.core.services import TokenSessionProvider


@pytest.mark.unit
def test_session_seeded_from_config():
    """Test that a configured token starts a session."""
    session = TokenSessionProvider(Config(api=ApiConfig(access_token="abc")))

    assert session.is_authenticated() is True
    assert session.get_token() == "abc"


@pytest.mark.unit
def test_no_token_means_anonymous(config):
    """Test that no token means no session."""
    session = TokenSessionProvider(config)

    assert session.is_authenticated() is False
    assert session.get_token() is None


@pytest.mark.unit
def test_login_and_logout(config):
    """Test starting and ending a session."""
    session = TokenSessionProvider(config)

    session.login("  token-123 ")
    assert session.get_token() == "token-123"
    assert session.is_authenticated() is True

    session.logout()
    assert session.is_authenticated() is False


@pytest.mark.unit
def test_login_rejects_empty_token(config):
    """Test that a blank token is refused."""
    session = TokenSessionProvider(config)

    with pytest.raises(ValueError):
        session.login("   ")
