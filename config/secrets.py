# =============================================================================
# config/secrets.py - Secret and Override Resolution
# =============================================================================

import os
import logging
from abc import ABC, abstractmethod
from typing import Optional, List
from pathlib import Path

logger = logging.getLogger(__name__)


class SecretProvider(ABC):
    """Abstract base class for secret providers."""

    @abstractmethod
    def get_secret(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Retrieve a secret by key."""
        pass

    @abstractmethod
    def is_available(self) -> bool:
        """Check if this secret provider is available."""
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Name of the secret provider."""
        pass

    @property
    def priority(self) -> int:
        """Priority of this provider (lower number = higher priority)."""
        return 100


class EnvironmentSecretProvider(SecretProvider):
    """Retrieve secrets from environment variables."""

    @property
    def name(self) -> str:
        return "Environment Variables"

    @property
    def priority(self) -> int:
        return 20

    def is_available(self) -> bool:
        return True

    def get_secret(self, key: str, default: Optional[str] = None) -> Optional[str]:
        value = os.environ.get(key, default)
        if value and value != default:
            logger.debug(f"Retrieved secret '{key}' from environment variables")
        return value


class DockerSecretProvider(SecretProvider):
    """Retrieve secrets from Docker Secrets (mounted files)."""

    SECRETS_PATH = Path("/run/secrets")

    @property
    def name(self) -> str:
        return "Docker Secrets"

    @property
    def priority(self) -> int:
        return 10

    def is_available(self) -> bool:
        return self.SECRETS_PATH.exists() and self.SECRETS_PATH.is_dir()

    def get_secret(self, key: str, default: Optional[str] = None) -> Optional[str]:
        # SECRET_KEY -> secret_key
        secret_file = self.SECRETS_PATH / key.lower()

        if secret_file.exists():
            try:
                value = secret_file.read_text().strip()
                if value:
                    logger.debug(f"Retrieved secret '{key}' from Docker Secrets")
                    return value
            except OSError as e:
                logger.warning(f"Failed to read Docker secret '{key}': {e}")

        return default


class SecretManager:
    """
    Manages multiple secret providers with priority-based fallback.

    Values are never cached: every lookup goes back to the providers so that
    a changed environment is picked up by the next configuration build.
    """

    def __init__(self, environment: str = "development"):
        self.environment = environment
        self.providers: List[SecretProvider] = []
        self._setup_providers()

    def _setup_providers(self):
        """Setup secret providers based on availability."""
        potential_providers = [DockerSecretProvider(), EnvironmentSecretProvider()]

        self.providers = [p for p in potential_providers if p.is_available()]
        self.providers.sort(key=lambda x: x.priority)

        for provider in self.providers:
            logger.debug(f"Secret provider available: {provider.name} (priority: {provider.priority})")

    def get_secret(
        self, key: str, default: Optional[str] = None, required: bool = False
    ) -> Optional[str]:
        """
        Retrieve a secret from available providers in priority order.

        Args:
            key: Secret key to retrieve
            default: Default value if secret not found
            required: Raise exception if secret not found and no default

        Returns:
            Secret value or default

        Raises:
            ValueError: If required secret is not found
        """
        for provider in self.providers:
            value = provider.get_secret(key, None)
            if value is not None:
                return value

        if required and default is None:
            available_providers = [p.name for p in self.providers]
            raise ValueError(
                f"Required secret '{key}' not found in any provider. "
                f"Available providers: {', '.join(available_providers)}"
            )

        return default


def get_secret_manager(environment: str = None) -> SecretManager:
    """Create a secret manager for the given environment."""
    env = environment or os.environ.get("FLASK_ENV", "development")
    return SecretManager(env)
