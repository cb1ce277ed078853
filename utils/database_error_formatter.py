"""
ABOUTME: Database error message formatter for user-friendly error handling
ABOUTME: Converts technical database errors to actionable operator guidance

File: utils/database_error_formatter.py

Description:
    Utility module for converting technical database errors into user-friendly
    error messages with actionable troubleshooting steps. The recovery page shows
    these when the WordPress database cannot be reached so the operator knows
    whether to look at wp-config.php, the server or the network.

Key features:
    - Error type detection from exception messages and types
    - Support for MySQL/MariaDB and SQLite specific error patterns
    - Logging integration for technical error details
    - Structured error format for the web page and the CLI

Author: Emfour Solutions
Created: 2026-10-17
Last Modified: 2026-10-17
Version: 1.0.0
"""

import logging
from typing import Dict, List, Tuple, Union

from services.exceptions import (
    DatabaseAuthenticationError,
    DatabaseConfigurationError,
    DatabaseConnectionError,
    DatabaseError,
    DatabaseNotFoundError,
)

logger = logging.getLogger(__name__)


def analyze_database_error(error: Exception) -> Tuple[str, List[str]]:
    """
    Analyze a database error and return user-friendly message with troubleshooting steps.

    Args:
        error: The original database exception

    Returns:
        Tuple of (user_friendly_message, troubleshooting_steps)
    """
    error_str = str(error).lower()

    if "mysql" in error_str or "pymysql" in str(type(error)).lower():
        return _analyze_mysql_error(error_str)

    elif "sqlite" in error_str:
        return _analyze_sqlite_error(error_str)

    return _analyze_generic_error(error_str)


def _analyze_mysql_error(error_str: str) -> Tuple[str, List[str]]:
    """Analyze MySQL-specific errors."""

    if "access denied" in error_str:
        return (
            "MySQL authentication failed. Access denied for the specified user.",
            [
                "Verify DB_USER and DB_PASSWORD in wp-config.php",
                "Ensure the user has permission to connect from the current host",
            ],
        )

    if "can't connect" in error_str or "connection refused" in error_str:
        return (
            "Cannot connect to the MySQL database server.",
            [
                "Verify MySQL server is running",
                "Check that DB_HOST and the port are correct",
                "Verify firewall settings allow MySQL connections",
            ],
        )

    if "unknown database" in error_str:
        return (
            "The specified MySQL database does not exist.",
            [
                "Verify DB_NAME in wp-config.php",
                "Check that the database has been created",
            ],
        )

    if "doesn't exist" in error_str:
        return (
            "The WordPress options table was not found.",
            [
                "Verify $table_prefix in wp-config.php matches the installed tables",
            ],
        )

    return (
        "MySQL database error occurred.",
        [
            "Check MySQL server logs for detailed information",
            "Verify the credentials in wp-config.php",
        ],
    )


def _analyze_sqlite_error(error_str: str) -> Tuple[str, List[str]]:
    """Analyze SQLite-specific errors."""

    if "no such table" in error_str:
        return (
            "The WordPress options table was not found.",
            ["Verify the table prefix matches the tables in the database file"],
        )

    if "unable to open" in error_str or "no such file" in error_str:
        return (
            "SQLite database file not found.",
            [
                "Verify the DATABASE_URL path is correct",
                "Check file permissions on the database file",
            ],
        )

    return (
        "SQLite database error occurred.",
        ["Check database file path and permissions"],
    )


def _analyze_generic_error(error_str: str) -> Tuple[str, List[str]]:
    """Analyze generic database errors."""

    if any(keyword in error_str for keyword in ["network", "timeout", "refused", "unreachable"]):
        return (
            "Network connection to database failed.",
            [
                "Check network connectivity to the database server",
                "Verify the database server address and port",
            ],
        )

    if any(keyword in error_str for keyword in ["permission", "denied", "unauthorized"]):
        return (
            "Database access permission denied.",
            [
                "Verify database user credentials",
                "Check user permissions and privileges",
            ],
        )

    return (
        "An unexpected database error occurred.",
        [
            "Check the application logs for more details",
            "Verify database server status",
        ],
    )


def create_database_exception(error: Exception) -> DatabaseError:
    """
    Create an appropriate DatabaseError subclass based on the original error.

    Args:
        error: The original database exception

    Returns:
        Appropriate DatabaseError subclass with user-friendly message
    """
    if isinstance(error, DatabaseError):
        return error

    error_str = str(error).lower()

    if any(keyword in error_str for keyword in ["access denied", "authentication", "login"]):
        return DatabaseAuthenticationError(original_error=error)

    elif any(
        keyword in error_str
        for keyword in ["connection refused", "can't connect", "network", "timeout"]
    ):
        return DatabaseConnectionError(original_error=error)

    elif any(
        keyword in error_str
        for keyword in ["unknown database", "no such file", "unable to open", "not found"]
    ):
        return DatabaseNotFoundError(original_error=error)

    elif any(keyword in error_str for keyword in ["invalid", "configuration", "url", "malformed"]):
        return DatabaseConfigurationError(original_error=error)

    message, steps = analyze_database_error(error)
    return DatabaseError(message, error, steps)


def format_error_response(error: DatabaseError) -> Dict[str, Union[str, List[str], None]]:
    """
    Format a database error into a structured response for web or CLI display.

    Args:
        error: DatabaseError instance

    Returns:
        Dictionary with error information and troubleshooting steps
    """
    return {
        "error": "Database Error",
        "message": str(error),
        "type": type(error).__name__,
        "troubleshooting_steps": getattr(error, "troubleshooting_steps", []),
        "technical_details": (
            str(error.original_error) if getattr(error, "original_error", None) else None
        ),
    }


def log_database_error(error: Exception, context: str = "Database operation") -> None:
    """
    Log database error with appropriate level and context.

    Args:
        error: The database exception
        context: Context description for the error
    """
    db_error = create_database_exception(error)

    logger.error(
        f"{context} failed: {str(db_error)}",
        extra={
            "error_type": type(error).__name__,
            "original_error": str(error),
            "troubleshooting_steps": db_error.troubleshooting_steps,
        },
    )
    logger.debug(f"{context} technical details: {error}")
