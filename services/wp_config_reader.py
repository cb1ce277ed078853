"""
File: services/wp_config_reader.py

Description:
    Reads the database credentials of a WordPress installation from its
    wp-config.php file. Each value is extracted with its own regular expression
    so a reordered or partly broken file still yields whatever does match.
    Nothing extracted here is validated; a wrong database name simply makes the
    later connection attempt fail.

Key features:
    - DbCredentials dataclass with WordPress-style host:port / host:socket splitting
    - CredentialsParser interface so other parsing strategies can be substituted
    - PhpDefineCredentialsParser for single-quoted define() declarations
    - Missing values become empty strings except host ("localhost") and prefix ("wp_")

Author: Emfour Solutions
Created: 2026-10-17
Last Modified: {{LASTMOD}}
Version: {{VERSION}}
"""

# Standard library imports
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Optional, Pattern, Tuple

# Module-level logger
from services.logging_service import get_module_logger

logger = get_module_logger(__name__)

DEFAULT_DB_HOST = "localhost"
DEFAULT_TABLE_PREFIX = "wp_"


@dataclass
class DbCredentials:
    """Database connection values taken from wp-config.php"""

    db_name: str = ""
    db_user: str = ""
    db_password: str = ""
    db_host: str = DEFAULT_DB_HOST
    db_prefix: str = DEFAULT_TABLE_PREFIX

    def host_and_port(self) -> Tuple[str, Optional[int], Optional[str]]:
        """
        Split DB_HOST the way WordPress does.

        Returns:
            Tuple of (host, port, unix_socket); port and socket are None when absent
        """
        host = self.db_host or DEFAULT_DB_HOST

        # [::1]:3306
        ipv6_match = re.match(r"^\[(?P<host>[^\]]+)\](?::(?P<port>\d+))?$", host)
        if ipv6_match:
            port = ipv6_match.group("port")
            return ipv6_match.group("host"), int(port) if port else None, None

        if host.count(":") != 1:
            return host, None, None

        name, _, extra = host.partition(":")
        name = name or DEFAULT_DB_HOST
        if extra.isdigit():
            return name, int(extra), None
        if extra:
            return name, None, extra
        return name, None, None


class CredentialsParser(ABC):
    """Turns configuration file text into DbCredentials."""

    @abstractmethod
    def parse(self, text: str) -> DbCredentials:
        """Extract credentials from configuration text."""
        pass


class PhpDefineCredentialsParser(CredentialsParser):
    """Parser for the define('DB_NAME', '...') declarations of wp-config.php"""

    PATTERNS: Dict[str, Pattern] = {
        "db_name": re.compile(r"define\(\s*'DB_NAME',\s*'([^']+)'\s*\)"),
        "db_user": re.compile(r"define\(\s*'DB_USER',\s*'([^']+)'\s*\)"),
        "db_password": re.compile(r"define\(\s*'DB_PASSWORD',\s*'([^']*)'\s*\)"),
        "db_host": re.compile(r"define\(\s*'DB_HOST',\s*'([^']+)'\s*\)"),
        "db_prefix": re.compile(r"\$table_prefix\s*=\s*'([^']+)'"),
    }

    DEFAULTS = {
        "db_host": DEFAULT_DB_HOST,
        "db_prefix": DEFAULT_TABLE_PREFIX,
    }

    def _find(self, field: str, text: str) -> str:
        match = self.PATTERNS[field].search(text)
        value = match.group(1) if match else ""
        return value or self.DEFAULTS.get(field, "")

    def parse(self, text: str) -> DbCredentials:
        values = {field: self._find(field, text or "") for field in self.PATTERNS}

        missing = [field for field in ("db_name", "db_user") if not values[field]]
        if missing:
            logger.warning(f"wp-config.php is missing values for: {', '.join(missing)}")

        return DbCredentials(**values)


def read_config_text(path: str) -> str:
    """Read the configuration file, returning an empty string if it is absent or unreadable."""
    try:
        with open(path, "r", encoding="utf-8", errors="replace") as f:
            return f.read()
    except FileNotFoundError:
        logger.warning(f"WordPress config file not found: {path}")
    except OSError as e:
        logger.warning(f"Could not read WordPress config file {path}: {e}")
    return ""


def parse_wp_config_text(text: str, parser: Optional[CredentialsParser] = None) -> DbCredentials:
    """Extract credentials from wp-config.php text."""
    return (parser or PhpDefineCredentialsParser()).parse(text)


def read_wp_config(path: str, parser: Optional[CredentialsParser] = None) -> DbCredentials:
    """Read wp-config.php from disk and extract its credentials."""
    return parse_wp_config_text(read_config_text(path), parser)
