"""Unit tests for database connection handling and error formatting."""

from unittest.mock import Mock

import pytest
from sqlalchemy import text
from sqlalchemy.exc import OperationalError

from config.base import RecoverySettings
from services.database_manager import (
    build_database_url,
    close_connection,
    open_connection,
    try_open_connection,
)
from services.exceptions import (
    DatabaseAuthenticationError,
    DatabaseConfigurationError,
    DatabaseConnectionError,
    DatabaseError,
    DatabaseNotFoundError,
)
from services.wp_config_reader import DbCredentials
from utils.database_error_formatter import (
    analyze_database_error,
    create_database_exception,
    format_error_response,
)


def make_settings(tmp_path, database_url=None):
    return RecoverySettings(
        wp_root=str(tmp_path),
        plugins_dir=str(tmp_path / "wp-content" / "plugins"),
        wp_config_path=str(tmp_path / "wp-config.php"),
        allowed_ips=("127.0.0.1",),
        database_url=database_url,
        connect_timeout=2,
    )


class TestBuildDatabaseUrl:
    """Test URL construction from wp-config.php credentials."""

    def test_basic_url(self):
        url = build_database_url(
            DbCredentials(db_name="blog", db_user="wp", db_password="p@ss:word", db_host="db")
        )

        assert url.drivername == "mysql+pymysql"
        assert url.host == "db"
        assert url.port is None
        assert url.database == "blog"
        assert url.username == "wp"
        assert url.password == "p@ss:word"
        assert url.query["charset"] == "utf8mb4"

    def test_host_with_port(self):
        url = build_database_url(DbCredentials(db_name="blog", db_host="127.0.0.1:3307"))

        assert url.host == "127.0.0.1"
        assert url.port == 3307

    def test_host_with_socket(self):
        url = build_database_url(
            DbCredentials(db_name="blog", db_host="localhost:/run/mysqld/mysqld.sock")
        )

        assert url.host == "localhost"
        assert url.query["unix_socket"] == "/run/mysqld/mysqld.sock"

    def test_empty_password_is_omitted(self):
        url = build_database_url(DbCredentials(db_name="wp_test", db_user="root", db_password=""))
        assert url.password is None


class TestOpenConnection:
    """Test connecting with a DATABASE_URL override."""

    def test_sqlite_override(self, tmp_path, database_url):
        connection = open_connection(DbCredentials(), make_settings(tmp_path, database_url))
        try:
            assert connection.execute(text("SELECT 1")).scalar() == 1
        finally:
            close_connection(connection)

    def test_unopenable_sqlite_file(self, tmp_path):
        url = f"sqlite:///{tmp_path / 'missing-dir' / 'x.db'}"

        with pytest.raises(DatabaseNotFoundError) as exc_info:
            open_connection(DbCredentials(), make_settings(tmp_path, url))

        assert exc_info.value.original_error is not None
        assert exc_info.value.troubleshooting_steps

    def test_malformed_url(self, tmp_path):
        with pytest.raises(DatabaseConfigurationError):
            open_connection(DbCredentials(), make_settings(tmp_path, "not a url"))

    def test_try_open_returns_error(self, tmp_path):
        url = f"sqlite:///{tmp_path / 'missing-dir' / 'x.db'}"

        connection, error = try_open_connection(DbCredentials(), make_settings(tmp_path, url))

        assert connection is None
        assert isinstance(error, DatabaseNotFoundError)

    def test_try_open_success(self, tmp_path, database_url):
        connection, error = try_open_connection(
            DbCredentials(), make_settings(tmp_path, database_url)
        )
        try:
            assert error is None
            assert connection is not None
        finally:
            close_connection(connection)


class TestCloseConnection:
    """Test connection cleanup."""

    def test_none_is_ignored(self):
        close_connection(None)

    def test_engine_disposed_even_if_close_fails(self):
        connection = Mock()
        connection.close.side_effect = OperationalError("close", {}, Exception("gone"))

        close_connection(connection)

        connection.engine.dispose.assert_called_once()


class TestDatabaseErrorFormatter:
    """Test conversion of driver errors."""

    @pytest.mark.parametrize(
        "message, expected",
        [
            ("(1045, \"Access denied for user 'root'@'localhost'\")", DatabaseAuthenticationError),
            ("(2003, \"Can't connect to MySQL server on 'db'\")", DatabaseConnectionError),
            ("(1049, \"Unknown database 'wp_test'\")", DatabaseNotFoundError),
            ("unable to open database file", DatabaseNotFoundError),
            ("Invalid URL given", DatabaseConfigurationError),
        ],
    )
    def test_exception_mapping(self, message, expected):
        assert isinstance(create_database_exception(Exception(message)), expected)

    def test_existing_database_error_is_returned(self):
        error = DatabaseConnectionError()
        assert create_database_exception(error) is error

    def test_unrecognized_error_uses_analysis(self):
        error = create_database_exception(Exception("something odd"))

        assert type(error) is DatabaseError
        assert str(error) == "An unexpected database error occurred."
        assert error.troubleshooting_steps

    def test_mysql_table_missing_analysis(self):
        message, steps = analyze_database_error(
            Exception("(1146, \"Table 'blog.wp_options' doesn't exist\") mysql")
        )

        assert message == "The WordPress options table was not found."
        assert any("table_prefix" in step for step in steps)

    def test_format_error_response(self):
        original = Exception("boom")
        response = format_error_response(DatabaseAuthenticationError(original_error=original))

        assert response["message"] == "Database authentication failed"
        assert response["type"] == "DatabaseAuthenticationError"
        assert response["technical_details"] == "boom"
        assert "Check DB_USER and DB_PASSWORD in wp-config.php" in response["troubleshooting_steps"]

    def test_format_without_original_error(self):
        assert format_error_response(DatabaseError("x"))["technical_details"] is None
