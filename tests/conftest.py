"""
ABOUTME: Pytest configuration and shared fixtures for the Plugin Recovery Manager tests
ABOUTME: Builds a throwaway WordPress root, a SQLite options table and a test app

File: tests/conftest.py

Description:
    Central pytest configuration file that provides shared fixtures for testing
    the recovery tool. Includes a temporary WordPress installation (wp-config.php
    and a plugins directory with a mix of plugin layouts), a SQLite database
    holding a wp_options table, and the Flask application and test client
    configured to use both.

Author: Emfour Solutions
Created: 2026-10-17
Last Modified: 2026-10-17
Version: 1.0.0
"""

import pytest

from tests.fixtures.wordpress_site import build_wordpress_root, create_options_table


@pytest.fixture
def wp_root(tmp_path):
    """A WordPress root with wp-config.php and a populated plugins directory"""
    return build_wordpress_root(tmp_path / "wordpress")


@pytest.fixture
def plugins_dir(wp_root):
    return wp_root / "wp-content" / "plugins"


@pytest.fixture
def database_url(tmp_path):
    """SQLite database with an empty active_plugins list"""
    url = f"sqlite:///{tmp_path / 'wordpress.db'}"
    create_options_table(url)
    return url


@pytest.fixture
def recovery_env(monkeypatch, wp_root, database_url, tmp_path):
    """Environment variables pointing the app at the test WordPress root"""
    monkeypatch.setenv("FLASK_ENV", "testing")
    monkeypatch.setenv("WP_ROOT", str(wp_root))
    monkeypatch.setenv("DATABASE_URL", database_url)
    monkeypatch.setenv("ALLOWED_IPS", "127.0.0.1, 192.0.2.10")
    monkeypatch.setenv("LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.delenv("WP_PLUGINS_DIR", raising=False)
    monkeypatch.delenv("WP_CONFIG_PATH", raising=False)
    monkeypatch.delenv("PLUGIN_RECOVERY_CONFIG_DIR", raising=False)
    return monkeypatch


@pytest.fixture
def app(recovery_env):
    """Create test Flask application using the actual app factory"""
    from app import create_app

    return create_app("testing")


@pytest.fixture
def client(app):
    """Create test client"""
    return app.test_client()


@pytest.fixture
def cli_runner(app):
    return app.test_cli_runner()
