"""
File: services/version.py

Version lookup for the Plugin Recovery Manager.

Resolves the version from the installed package metadata, then from the
APP_VERSION environment variable, and finally falls back to a development
marker.

Author: Emfour Solutions
Created: 2026-10-17
Last Modified: {{LASTMOD}}
Version: {{VERSION}}
"""

import logging
import os
from importlib import metadata
from typing import Optional

logger = logging.getLogger(__name__)

DISTRIBUTION_NAME = "plugin-recovery-manager"
FALLBACK_VERSION = "0.0.0-dev"

# Global cache for version information
_version_cache: Optional[str] = None


def _get_version_from_metadata() -> Optional[str]:
    try:
        return metadata.version(DISTRIBUTION_NAME)
    except metadata.PackageNotFoundError:
        return None


def _get_version_from_environment() -> Optional[str]:
    return os.environ.get("APP_VERSION") or None


def get_version() -> str:
    """Get the application version using the fallback chain."""
    global _version_cache
    if _version_cache is not None:
        return _version_cache

    for source_func in (_get_version_from_metadata, _get_version_from_environment):
        version = source_func()
        if version:
            logger.debug(f"Version loaded from {source_func.__name__}: {version}")
            _version_cache = version
            return version

    _version_cache = FALLBACK_VERSION
    return _version_cache


def is_development_build() -> bool:
    """Check whether this is a development build."""
    return get_version() == FALLBACK_VERSION or "dev" in get_version()
