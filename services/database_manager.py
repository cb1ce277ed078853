"""
File: services/database_manager.py

Description:
    Opens the single per-request connection to the WordPress database. The
    connection URL is built from the credentials found in wp-config.php unless
    an explicit DATABASE_URL override is configured. No pooling is used: the
    engine and its one connection live only for the duration of a request or
    CLI command.

Key features:
    - MySQL/MariaDB URL construction via PyMySQL with utf8mb4
    - WordPress host:port and host:socket handling
    - Driver errors converted into the DatabaseError hierarchy
    - close_connection() that also disposes the throwaway engine

Author: Emfour Solutions
Created: 2026-10-17
"""

# Standard library imports
from typing import TYPE_CHECKING, Optional, Tuple, Union

# Third-party imports
from sqlalchemy import create_engine
from sqlalchemy.engine import URL, Connection
from sqlalchemy.exc import ArgumentError, SQLAlchemyError
from sqlalchemy.pool import NullPool

# Local application imports
from services.exceptions import DatabaseConfigurationError, DatabaseError
from services.logging_service import get_module_logger
from utils.database_error_formatter import create_database_exception, log_database_error

if TYPE_CHECKING:
    from config.base import RecoverySettings
    from services.wp_config_reader import DbCredentials

# Module-level logger
logger = get_module_logger(__name__)


def build_database_url(credentials: "DbCredentials") -> URL:
    """Build the PyMySQL URL for the credentials read from wp-config.php."""
    host, port, unix_socket = credentials.host_and_port()

    query = {"charset": "utf8mb4"}
    if unix_socket:
        query["unix_socket"] = unix_socket

    return URL.create(
        "mysql+pymysql",
        username=credentials.db_user or None,
        password=credentials.db_password or None,
        host=host,
        port=port,
        database=credentials.db_name or None,
        query=query,
    )


def open_connection(
    credentials: "DbCredentials", settings: "RecoverySettings"
) -> Connection:
    """
    Connect to the WordPress database.

    Raises:
        DatabaseError: a subclass describing why the connection failed
    """
    url: Union[str, URL] = settings.database_url or build_database_url(credentials)

    connect_args = {}
    if not settings.database_url or settings.database_url.startswith("mysql"):
        connect_args["connect_timeout"] = settings.connect_timeout

    try:
        engine = create_engine(url, poolclass=NullPool, connect_args=connect_args)
    except (ArgumentError, ValueError) as e:
        logger.error(f"Invalid database URL: {e}")
        raise DatabaseConfigurationError(original_error=e)

    try:
        connection = engine.connect()
    except SQLAlchemyError as e:
        log_database_error(e, "Database connection")
        engine.dispose()
        raise create_database_exception(e)

    logger.debug(f"Connected to database {engine.url.render_as_string(hide_password=True)}")
    return connection


def close_connection(connection: Optional[Connection]) -> None:
    """Close the connection and dispose its engine; None is ignored."""
    if connection is None:
        return

    engine = connection.engine
    try:
        connection.close()
    except SQLAlchemyError as e:
        logger.warning(f"Error closing database connection: {e}")
    finally:
        engine.dispose()


def try_open_connection(
    credentials: "DbCredentials", settings: "RecoverySettings"
) -> Tuple[Optional[Connection], Optional[DatabaseError]]:
    """Connect, returning (None, error) instead of raising so callers can degrade."""
    try:
        return open_connection(credentials, settings), None
    except DatabaseError as e:
        return None, e
