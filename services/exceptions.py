"""
File: services/exceptions.py

Description:
    Custom exception hierarchy providing structured error handling for the Plugin
    Recovery Manager. The database family carries troubleshooting steps so that
    the web page and the CLI can show the operator something actionable when the
    WordPress database cannot be reached.

Key features:
    - RecoveryError base class for all application errors
    - Database exceptions for connection, authentication, lookup and configuration failures
    - Default troubleshooting steps attached to every database exception

Author: Emfour Solutions
Created: 17-Oct-2026
Last Modified: {{LASTMOD}}
Version: {{VERSION}}
"""


class RecoveryError(Exception):
    """Base exception for Plugin Recovery Manager errors"""

    pass


class ConfigurationError(RecoveryError):
    """Raised when the recovery tool's own configuration is unusable"""

    pass


# Database Connection Exceptions
class DatabaseError(RecoveryError):
    """Base exception for database-related errors"""

    def __init__(
        self,
        message: str,
        original_error: Exception = None,
        troubleshooting_steps: list = None,
    ):
        super().__init__(message)
        self.original_error = original_error
        self.troubleshooting_steps = troubleshooting_steps or []


class DatabaseConnectionError(DatabaseError):
    """Raised when database connection fails"""

    def __init__(self, message: str = None, original_error: Exception = None):
        default_message = "Unable to connect to the database server"
        super().__init__(
            message or default_message,
            original_error,
            [
                "Verify the database server is running",
                "Check DB_HOST in wp-config.php points at the right server",
                "Ensure the database port or socket is accessible",
                "Verify firewall settings allow database connections",
            ],
        )


class DatabaseAuthenticationError(DatabaseError):
    """Raised when database authentication fails"""

    def __init__(self, message: str = None, original_error: Exception = None):
        default_message = "Database authentication failed"
        super().__init__(
            message or default_message,
            original_error,
            [
                "Check DB_USER and DB_PASSWORD in wp-config.php",
                "Verify the database user may connect from this host",
                "Check if the database user account is locked or expired",
            ],
        )


class DatabaseNotFoundError(DatabaseError):
    """Raised when specified database or host cannot be found"""

    def __init__(self, message: str = None, original_error: Exception = None):
        default_message = "Database or host not found"
        super().__init__(
            message or default_message,
            original_error,
            [
                "Verify DB_NAME in wp-config.php is correct",
                "Check that the database exists on the server",
                "Ensure the database host/IP address is correct",
                "Verify the table prefix matches the installed tables",
            ],
        )


class DatabaseConfigurationError(DatabaseError):
    """Raised when database configuration is invalid"""

    def __init__(self, message: str = None, original_error: Exception = None):
        default_message = "Database configuration is invalid"
        super().__init__(
            message or default_message,
            original_error,
            [
                "Check that wp-config.php exists in the WordPress root",
                "Review the WP_ROOT and WP_CONFIG_PATH settings of this tool",
                "Verify DATABASE_URL format if an override is set",
            ],
        )
