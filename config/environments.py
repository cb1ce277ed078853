"""
File: config/environments.py

Description:
    Loads the Environment Variable Configuration for the Plugin Recovery Manager

Author: Emfour Solutions
Created: 2026-10-17
"""

# Standard library imports
import os

from services.logging_service import get_module_logger

# Local application imports
from .base import BaseConfig

logger = get_module_logger(__name__)


class DevelopmentConfig(BaseConfig):
    """Development environment configuration."""

    def __init__(self):
        super().__init__("development")

    @property
    def DEBUG(self) -> bool:
        """Enable debug mode in development."""
        return True

    @property
    def LOG_LEVEL(self) -> str:
        """Use DEBUG logging level in development."""
        return self.secret_manager.get_secret("LOG_LEVEL", "DEBUG")


class ProductionConfig(BaseConfig):
    """Production environment configuration."""

    def __init__(self):
        super().__init__("production")

    @property
    def SECRET_KEY(self) -> str:
        """Require secret key in production."""
        secret_key = self.secret_manager.get_secret("SECRET_KEY", required=True)
        if not secret_key or secret_key == "dev-secret-key-change-in-production":
            raise ValueError("SECRET_KEY must be set to a secure value in production")
        return secret_key


class TestingConfig(BaseConfig):
    """Testing environment configuration."""

    def __init__(self):
        super().__init__("testing")

    @property
    def TESTING(self) -> bool:
        return True

    @property
    def SECRET_KEY(self) -> str:
        return self.secret_manager.get_secret("SECRET_KEY", "test-secret-key-for-sessions")

    @property
    def LOG_TO_FILE(self) -> bool:
        """Keep test runs from writing log files."""
        return False


# Configuration factory
def get_config(environment: str = None) -> BaseConfig:
    """Get configuration instance for the specified environment."""
    if environment is None:
        environment = os.environ.get("FLASK_ENV", "development")

    config_map = {
        "development": DevelopmentConfig,
        "production": ProductionConfig,
        "testing": TestingConfig,
    }

    config_class = config_map.get(environment)
    if not config_class:
        logger.warning(f"Unknown environment '{environment}', using development config")
        config_class = DevelopmentConfig

    return config_class()
