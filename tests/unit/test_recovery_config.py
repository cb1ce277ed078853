"""Unit tests for the configuration system."""

import os
from unittest.mock import patch

import pytest

from config.base import BaseConfig, ConfigLoader, RecoverySettings
from config.environments import (
    DevelopmentConfig,
    ProductionConfig,
    TestingConfig,
    get_config,
)
from config.secrets import SecretManager
from services.exceptions import ConfigurationError

CONFIG_ENV_VARS = [
    "WP_ROOT",
    "WP_PLUGINS_DIR",
    "WP_CONFIG_PATH",
    "ALLOWED_IPS",
    "DATABASE_URL",
    "DB_CONNECT_TIMEOUT",
    "LOG_LEVEL",
    "LOG_DIR",
    "SECRET_KEY",
]


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    for name in CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("PLUGIN_RECOVERY_CONFIG_DIR", str(tmp_path / "no-external-config"))
    return monkeypatch


class TestGetConfig:
    """Test the configuration factory."""

    @pytest.mark.parametrize(
        "name, config_class",
        [
            ("development", DevelopmentConfig),
            ("production", ProductionConfig),
            ("testing", TestingConfig),
        ],
    )
    def test_known_environments(self, clean_env, name, config_class):
        assert isinstance(get_config(name), config_class)

    def test_unknown_environment_falls_back_to_development(self, clean_env):
        assert isinstance(get_config("staging"), DevelopmentConfig)

    def test_environment_flags(self, clean_env):
        assert get_config("development").DEBUG is True
        assert get_config("testing").TESTING is True
        assert get_config("testing").LOG_TO_FILE is False
        assert get_config("production").DEBUG is False


class TestDefaults:
    """Test bundled defaults from app.yaml."""

    def test_paths_derive_from_wp_root(self, clean_env):
        config = get_config("testing")

        assert config.WP_ROOT == "./"
        assert config.PLUGINS_DIR == os.path.join("./", "wp-content/plugins")
        assert config.WP_CONFIG_PATH == os.path.join("./", "wp-config.php")

    def test_allow_list_default(self, clean_env):
        assert get_config("testing").ALLOWED_IPS == ["127.0.0.1"]

    def test_database_defaults(self, clean_env):
        config = get_config("testing")

        assert config.DATABASE_URL is None
        assert config.DB_CONNECT_TIMEOUT == 10
        assert config.SQL_ECHO is False

    def test_production_log_level(self, clean_env):
        clean_env.setenv("SECRET_KEY", "a-real-secret")
        assert get_config("production").LOG_LEVEL == "WARNING"


class TestEnvironmentOverrides:
    """Test environment variables taking precedence over YAML."""

    def test_wp_root_moves_both_paths(self, clean_env):
        clean_env.setenv("WP_ROOT", "/srv/www/site")
        config = get_config("testing")

        assert config.PLUGINS_DIR == "/srv/www/site/wp-content/plugins"
        assert config.WP_CONFIG_PATH == "/srv/www/site/wp-config.php"

    def test_explicit_paths_win(self, clean_env):
        clean_env.setenv("WP_ROOT", "/srv/www/site")
        clean_env.setenv("WP_PLUGINS_DIR", "/opt/plugins")
        clean_env.setenv("WP_CONFIG_PATH", "/etc/wp/wp-config.php")
        config = get_config("testing")

        assert config.PLUGINS_DIR == "/opt/plugins"
        assert config.WP_CONFIG_PATH == "/etc/wp/wp-config.php"

    def test_allowed_ips_are_split_and_stripped(self, clean_env):
        clean_env.setenv("ALLOWED_IPS", " 203.0.113.5 ,, 2001:db8::1 ")
        assert get_config("testing").ALLOWED_IPS == ["203.0.113.5", "2001:db8::1"]

    def test_empty_allowed_ips_means_nobody(self, clean_env):
        clean_env.setenv("ALLOWED_IPS", "")
        assert get_config("testing").ALLOWED_IPS == []

    def test_database_url_and_timeout(self, clean_env):
        clean_env.setenv("DATABASE_URL", "sqlite:///x.db")
        clean_env.setenv("DB_CONNECT_TIMEOUT", "3")
        config = get_config("testing")

        assert config.DATABASE_URL == "sqlite:///x.db"
        assert config.DB_CONNECT_TIMEOUT == 3


class TestExternalConfig:
    """Test the external configuration directory."""

    def test_external_file_is_merged(self, clean_env, tmp_path):
        external = tmp_path / "external"
        external.mkdir()
        (external / "app.yaml").write_text(
            "default:\n  access:\n    allowed_ips:\n      - 198.51.100.20\n"
        )
        clean_env.setenv("PLUGIN_RECOVERY_CONFIG_DIR", str(external))

        config = get_config("testing")

        assert config.ALLOWED_IPS == ["198.51.100.20"]
        # Untouched keys keep their bundled values
        assert config.DB_CONNECT_TIMEOUT == 10

    def test_deep_merge(self):
        loader = ConfigLoader("testing")
        merged = loader._deep_merge_configs(
            {"a": {"b": 1, "c": 2}, "d": 3}, {"a": {"c": 20}, "e": 5}
        )
        assert merged == {"a": {"b": 1, "c": 20}, "d": 3, "e": 5}

    def test_get_config_value_missing_key(self):
        assert ConfigLoader.get_config_value({"a": {}}, "a", "b", default="x") == "x"


class TestSecrets:
    """Test secret resolution."""

    def test_production_requires_secret_key(self, clean_env):
        with pytest.raises(ValueError):
            get_config("production").SECRET_KEY

    def test_production_rejects_dev_secret(self, clean_env):
        clean_env.setenv("SECRET_KEY", "dev-secret-key-change-in-production")
        with pytest.raises(ValueError):
            get_config("production").SECRET_KEY

    def test_testing_has_default_secret(self, clean_env):
        assert get_config("testing").SECRET_KEY == "test-secret-key-for-sessions"

    def test_required_secret_missing(self, clean_env):
        with pytest.raises(ValueError):
            SecretManager("testing").get_secret("PLUGIN_RECOVERY_NOT_SET", required=True)

    def test_secret_default(self, clean_env):
        assert SecretManager("testing").get_secret("PLUGIN_RECOVERY_NOT_SET", "fallback") == "fallback"


class TestValidation:
    """Test configuration validation."""

    def test_valid_configuration(self, clean_env, wp_root):
        clean_env.setenv("WP_ROOT", str(wp_root))
        assert get_config("testing").validate_config() == []

    def test_reports_problems(self, clean_env, tmp_path):
        clean_env.setenv("WP_ROOT", str(tmp_path / "missing"))
        clean_env.setenv("ALLOWED_IPS", "0.0.0.0,not-an-ip")
        clean_env.setenv("DB_CONNECT_TIMEOUT", "0")

        issues = get_config("testing").validate_config()

        assert any("not an IP address: not-an-ip" in issue for issue in issues)
        assert any("0.0.0.0" in issue for issue in issues)
        assert any("Plugins directory not found" in issue for issue in issues)
        assert any("config file not found" in issue for issue in issues)
        assert any("DB_CONNECT_TIMEOUT" in issue for issue in issues)

    def test_empty_allow_list_reported(self, clean_env, wp_root):
        clean_env.setenv("WP_ROOT", str(wp_root))
        clean_env.setenv("ALLOWED_IPS", "")

        issues = get_config("testing").validate_config()

        assert any("ALLOWED_IPS is empty" in issue for issue in issues)


class TestBuildSettings:
    """Test the immutable settings object."""

    def test_settings_snapshot(self, clean_env, wp_root):
        clean_env.setenv("WP_ROOT", str(wp_root))
        clean_env.setenv("ALLOWED_IPS", "127.0.0.1,192.0.2.1")

        settings = get_config("testing").build_settings()

        assert isinstance(settings, RecoverySettings)
        assert settings.wp_root == str(wp_root)
        assert settings.plugins_dir == os.path.join(str(wp_root), "wp-content/plugins")
        assert settings.allowed_ips == ("127.0.0.1", "192.0.2.1")
        assert settings.connect_timeout == 10

    def test_settings_are_frozen(self, clean_env):
        settings = get_config("testing").build_settings()
        with pytest.raises(AttributeError):
            settings.allowed_ips = ("0.0.0.0",)

    def test_base_config_environment(self, clean_env):
        assert BaseConfig("testing").environment == "testing"


class TestConnectTimeout:
    """Test handling of a non-integer connect timeout."""

    def test_property_raises_configuration_error(self, clean_env):
        clean_env.setenv("DB_CONNECT_TIMEOUT", "ten")

        with pytest.raises(ConfigurationError, match="must be an integer"):
            get_config("testing").DB_CONNECT_TIMEOUT

    def test_validation_reports_instead_of_raising(self, clean_env, wp_root):
        clean_env.setenv("WP_ROOT", str(wp_root))
        clean_env.setenv("DB_CONNECT_TIMEOUT", "ten")

        issues = get_config("testing").validate_config()

        assert issues == ["DB_CONNECT_TIMEOUT must be an integer, got 'ten'"]

    def test_build_settings_raises(self, clean_env):
        clean_env.setenv("DB_CONNECT_TIMEOUT", "ten")

        with pytest.raises(ConfigurationError):
            get_config("testing").build_settings()

    def test_app_factory_validates_before_building(self, recovery_env):
        from app import create_app

        recovery_env.setenv("DB_CONNECT_TIMEOUT", "ten")

        with patch("app.logger") as mock_logger, pytest.raises(ConfigurationError):
            create_app("testing")

        warnings = " ".join(str(call) for call in mock_logger.warning.call_args_list)
        assert "DB_CONNECT_TIMEOUT must be an integer" in warnings
