"""Configuration management module."""

from .config_manager import ConfigManager
from .models import ApiConfig, AppConfig, Config, LoggingConfig, SearchConfig

__all__ = [
    "ConfigManager",
    "Config",
    "ApiConfig",
    "AppConfig",
    "LoggingConfig",
    "SearchConfig",
]
