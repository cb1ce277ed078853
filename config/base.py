"""
File: config/base.py

Description:
    Loads the Base Configuration for the Plugin Recovery Manager and builds the
    immutable RecoverySettings object that is handed to every component.

Author: Emfour Solutions
Created: 2026-10-17
"""

# Standard library imports
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

# Third-party imports
import yaml

# Local application imports
from services.exceptions import ConfigurationError
from utils.security_helpers import validate_ip_address

from .secrets import get_secret_manager

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RecoverySettings:
    """Everything a request needs to know about the WordPress install it repairs."""

    wp_root: str
    plugins_dir: str
    wp_config_path: str
    allowed_ips: Tuple[str, ...]
    database_url: Optional[str] = None
    connect_timeout: int = 10


class ConfigLoader:
    """Loads configuration from YAML files with multi-source support."""

    def __init__(self, environment: str = "development"):
        self.environment = environment

        # Multi-source configuration directories
        self.external_config_dir = Path(
            os.environ.get("PLUGIN_RECOVERY_CONFIG_DIR", "/etc/plugin-recovery")
        )
        self.bundled_config_dir = Path(__file__).parent / "settings"

        logger.debug(
            f"Configuration sources: external={self.external_config_dir} "
            f"(exists: {self.external_config_dir.exists()}), bundled={self.bundled_config_dir}"
        )

    def load_config_file(self, filename: str) -> Dict[str, Any]:
        """
        Load a YAML configuration file with multi-source support.

        Priority order:
        1. External config directory
        2. Bundled config directory (defaults)
        """
        config: Dict[str, Any] = {}
        config_sources = []

        bundled_path = self.bundled_config_dir / filename
        if bundled_path.exists():
            try:
                with open(bundled_path, "r") as f:
                    config = yaml.safe_load(f) or {}
                config_sources.append(f"bundled:{bundled_path}")
            except (OSError, yaml.YAMLError) as e:
                logger.error(f"Failed to load bundled config {bundled_path}: {e}")

        external_path = self.external_config_dir / filename
        if external_path.exists():
            try:
                with open(external_path, "r") as f:
                    external_config = yaml.safe_load(f) or {}
                config = self._deep_merge_configs(config, external_config)
                config_sources.append(f"external:{external_path}")
            except (OSError, yaml.YAMLError) as e:
                logger.error(f"Failed to load external config {external_path}: {e}")

        if config_sources:
            logger.debug(f"Configuration '{filename}' loaded from: {', '.join(config_sources)}")
        else:
            logger.warning(f"Configuration file '{filename}' not found in any source")

        return config

    def _deep_merge_configs(
        self, base_config: Dict[str, Any], override_config: Dict[str, Any]
    ) -> Dict[str, Any]:
        """
        Deep merge two configuration dictionaries.

        Args:
            base_config: Base configuration (provides defaults)
            override_config: Override configuration (takes precedence)

        Returns:
            Merged configuration dictionary
        """
        result = base_config.copy()

        for key, value in override_config.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge_configs(result[key], value)
            else:
                result[key] = value

        return result

    @staticmethod
    def get_config_value(config: Dict[str, Any], *keys: str, default: Any = None) -> Any:
        """Get a nested configuration value."""
        value = config
        for key in keys:
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default
        return value

    def merge_environment_config(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """Merge environment-specific configuration over the defaults."""
        base_config = config.get("default", {}).copy()
        env_config = self.get_config_value(config, "environments", self.environment, default={})
        return self._deep_merge_configs(base_config, env_config or {})


class BaseConfig:
    """Base configuration class with common functionality."""

    def __init__(self, environment: str = None):
        self.environment = environment or os.environ.get("FLASK_ENV", "development")
        self.loader = ConfigLoader(self.environment)
        self.secret_manager = get_secret_manager(self.environment)

        app_config = self.loader.load_config_file("app.yaml")
        self.app_config = self.loader.merge_environment_config(app_config)

    def _get(self, *keys: str, default: Any = None) -> Any:
        return self.loader.get_config_value(self.app_config, *keys, default=default)

    @property
    def DEBUG(self) -> bool:
        return False

    @property
    def TESTING(self) -> bool:
        return False

    @property
    def SECRET_KEY(self) -> str:
        """Get secret key from secure sources."""
        return self.secret_manager.get_secret(
            "SECRET_KEY",
            default="dev-secret-key-change-in-production",
            required=self.environment == "production",
        )

    # WordPress location settings
    @property
    def WP_ROOT(self) -> str:
        return self.secret_manager.get_secret("WP_ROOT", self._get("wordpress", "root", default="./"))

    @property
    def PLUGINS_DIR(self) -> str:
        explicit = self.secret_manager.get_secret("WP_PLUGINS_DIR")
        if explicit:
            return explicit
        subdir = self._get("wordpress", "plugins_subdir", default="wp-content/plugins")
        return os.path.join(self.WP_ROOT, subdir)

    @property
    def WP_CONFIG_PATH(self) -> str:
        explicit = self.secret_manager.get_secret("WP_CONFIG_PATH")
        if explicit:
            return explicit
        filename = self._get("wordpress", "config_file", default="wp-config.php")
        return os.path.join(self.WP_ROOT, filename)

    # Access settings
    @property
    def ALLOWED_IPS(self) -> List[str]:
        """Allow-list from ALLOWED_IPS (comma separated) or app.yaml."""
        raw = self.secret_manager.get_secret("ALLOWED_IPS")
        if raw is not None:
            entries = raw.split(",")
        else:
            entries = self._get("access", "allowed_ips", default=["127.0.0.1"]) or []
        return [str(entry).strip() for entry in entries if str(entry).strip()]

    # Database settings
    @property
    def DATABASE_URL(self) -> Optional[str]:
        """Explicit SQLAlchemy URL that replaces the one built from wp-config.php."""
        return self.secret_manager.get_secret("DATABASE_URL", self._get("database", "url")) or None

    @property
    def DB_CONNECT_TIMEOUT(self) -> int:
        raw = self.secret_manager.get_secret(
            "DB_CONNECT_TIMEOUT", str(self._get("database", "connect_timeout", default=10))
        )
        try:
            return int(raw)
        except (TypeError, ValueError):
            raise ConfigurationError(f"DB_CONNECT_TIMEOUT must be an integer, got {raw!r}")

    @property
    def SQL_ECHO(self) -> bool:
        return bool(self._get("database", "echo", default=False))

    # Logging settings
    @property
    def LOG_LEVEL(self) -> str:
        return self.secret_manager.get_secret("LOG_LEVEL", self._get("logging", "level", default="INFO"))

    @property
    def LOG_DIR(self) -> str:
        return self.secret_manager.get_secret("LOG_DIR", self._get("logging", "dir", default="logs"))

    @property
    def LOG_TO_FILE(self) -> bool:
        return bool(self._get("logging", "to_file", default=True))

    def build_settings(self) -> RecoverySettings:
        """Build the immutable settings object passed to each component."""
        return RecoverySettings(
            wp_root=self.WP_ROOT,
            plugins_dir=self.PLUGINS_DIR,
            wp_config_path=self.WP_CONFIG_PATH,
            allowed_ips=tuple(self.ALLOWED_IPS),
            database_url=self.DATABASE_URL,
            connect_timeout=self.DB_CONNECT_TIMEOUT,
        )

    def validate_config(self) -> list:
        """Validate configuration and return list of issues."""
        issues = []

        allowed_ips = self.ALLOWED_IPS
        if not allowed_ips:
            issues.append("ALLOWED_IPS is empty; every request will be denied")
        for ip in allowed_ips:
            if not validate_ip_address(ip):
                issues.append(f"ALLOWED_IPS entry is not an IP address: {ip}")
        if "0.0.0.0" in allowed_ips:
            issues.append("ALLOWED_IPS must not contain 0.0.0.0, the unknown-client placeholder")

        if not os.path.isdir(self.PLUGINS_DIR):
            issues.append(f"Plugins directory not found: {self.PLUGINS_DIR}")

        if not os.path.isfile(self.WP_CONFIG_PATH):
            issues.append(f"WordPress config file not found: {self.WP_CONFIG_PATH}")

        try:
            if self.DB_CONNECT_TIMEOUT <= 0:
                issues.append("DB_CONNECT_TIMEOUT must be positive")
        except ConfigurationError as e:
            issues.append(str(e))

        return issues
