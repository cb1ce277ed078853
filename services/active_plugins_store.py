"""
File: services/active_plugins_store.py

Description:
    Reads and writes the WordPress "active_plugins" option. The option is one
    row of the <prefix>options key/value table whose value is a PHP serialized
    array of plugin keys. Reading never fails: anything that cannot be decoded
    is treated as an empty list. Writing re-encodes the list values-only and
    issues a single UPDATE; there is no transaction around the read and the
    write, so a concurrent change made after the read is overwritten.

Key features:
    - decode_active_plugins / encode_active_plugins for the serialized format
    - ActivePluginsStore bound to one connection and table prefix
    - Table name quoted by SQLAlchemy, option value passed as a bound parameter

Author: Emfour Solutions
Created: 2026-10-17
Last Modified: {{LASTMOD}}
Version: {{VERSION}}
"""

# Standard library imports
from typing import Iterable, List, Optional, Union

# Third-party imports
import phpserialize
from sqlalchemy import column, select, table, update
from sqlalchemy.engine import Connection
from sqlalchemy.exc import SQLAlchemyError

# Local application imports
from utils.database_error_formatter import log_database_error
from utils.security_helpers import is_safe_table_prefix

# Module-level logger
from services.logging_service import get_module_logger

logger = get_module_logger(__name__)

ACTIVE_PLUGINS_OPTION = "active_plugins"


def options_table(prefix: str):
    """Lightweight table construct for <prefix>options"""
    return table(f"{prefix}options", column("option_name"), column("option_value"))


def decode_active_plugins(raw: Optional[Union[str, bytes]]) -> List[str]:
    """
    Decode a serialized active_plugins value.

    Anything that is not a serialized array decodes to an empty list, and
    array elements that are not strings are dropped.
    """
    if not raw:
        return []

    data = raw.encode("utf-8") if isinstance(raw, str) else raw
    try:
        value = phpserialize.loads(data, decode_strings=True)
    except Exception as e:
        logger.warning(f"Stored active_plugins value could not be decoded, treating as empty: {e}")
        return []

    if not isinstance(value, dict):
        logger.warning(
            f"Stored active_plugins value is a {type(value).__name__}, not an array; treating as empty"
        )
        return []

    plugins = [item for item in value.values() if isinstance(item, str)]
    if len(plugins) != len(value):
        logger.warning(
            f"Ignoring {len(value) - len(plugins)} non-string entries in stored active_plugins value"
        )
    return plugins


def encode_active_plugins(plugins: Iterable[str]) -> str:
    """Serialize plugin keys as a list-style PHP array, discarding any keys."""
    return phpserialize.dumps(list(plugins)).decode("utf-8")


class ActivePluginsStore:
    """Access to the active_plugins row over a single open connection"""

    def __init__(self, connection: Connection, table_prefix: str):
        self.connection = connection
        self.table_prefix = table_prefix
        self.options = options_table(table_prefix)

        if not is_safe_table_prefix(table_prefix):
            logger.warning(f"Unusual table prefix '{table_prefix}'; WordPress may not use it")

    def get_active_plugins(self) -> List[str]:
        """Return the active plugin keys; empty on a missing row or any read error"""
        statement = select(self.options.c.option_value).where(
            self.options.c.option_name == ACTIVE_PLUGINS_OPTION
        )

        try:
            row = self.connection.execute(statement).first()
        except SQLAlchemyError as e:
            log_database_error(e, "Reading active plugins")
            self._rollback()
            return []

        if row is None:
            logger.warning(f"No {ACTIVE_PLUGINS_OPTION} row in {self.table_prefix}options")
            return []

        return decode_active_plugins(row[0])

    def update_active_plugins(self, plugins: Iterable[str]) -> bool:
        """
        Write the active plugin keys back.

        Returns:
            True if the UPDATE executed, False on any database error
        """
        value = encode_active_plugins(plugins)
        statement = (
            update(self.options)
            .where(self.options.c.option_name == ACTIVE_PLUGINS_OPTION)
            .values(option_value=value)
        )

        try:
            self.connection.execute(statement)
            self.connection.commit()
        except SQLAlchemyError as e:
            log_database_error(e, "Updating active plugins")
            self._rollback()
            return False

        logger.info(f"Stored active plugins: {value}")
        return True

    def _rollback(self):
        try:
            self.connection.rollback()
        except SQLAlchemyError as e:
            logger.warning(f"Failed to rollback database connection: {e}")
