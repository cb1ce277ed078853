"""
ABOUTME: Security utility functions for input validation
ABOUTME: Provides IP address and SQL identifier checks

File: utils/security_helpers.py

Description:
    Security utility functions used to validate the values that the recovery
    tool takes from configuration or from wp-config.php before they reach the
    access guard or a SQL statement.

Key functions:
    - IP address validation for allow-list entries
    - Table prefix validation for the WordPress options table name

Author: Emfour Solutions
Created: 2026-10-17
Last Modified: 2026-10-17
Version: 1.0.0
"""

import ipaddress
import logging
import re

logger = logging.getLogger(__name__)

# WordPress only accepts letters, digits and underscores in $table_prefix
TABLE_PREFIX_PATTERN = re.compile(r"^[A-Za-z0-9_]+$")


def validate_ip_address(value: str) -> bool:
    """
    Check that a value is a literal IPv4 or IPv6 address.

    Networks in CIDR notation are rejected; the allow-list is matched literally.

    Args:
        value: Candidate address

    Returns:
        True if the value parses as a single address
    """
    if not value or not isinstance(value, str):
        return False

    try:
        ipaddress.ip_address(value.strip())
        return True
    except ValueError:
        return False


def is_safe_table_prefix(prefix: str) -> bool:
    """
    Check that a table prefix only uses characters WordPress itself allows.

    Args:
        prefix: Table prefix read from wp-config.php

    Returns:
        True if the prefix is non-empty and alphanumeric/underscore only
    """
    if not prefix or not isinstance(prefix, str):
        return False
    return bool(TABLE_PREFIX_PATTERN.match(prefix))
