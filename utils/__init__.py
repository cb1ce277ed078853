"""
Utils package for the Plugin Recovery Manager.

This package provides utility functions for the recovery tool, including
security helpers and database error formatting.
"""

# Import key utilities to make them available at package level
from .security_helpers import is_safe_table_prefix, validate_ip_address

__all__ = ["is_safe_table_prefix", "validate_ip_address"]
