"""
File: services/__init__.py

Description:
    Service layer package for the Plugin Recovery Manager. Each module covers
    one step of a recovery request: reading wp-config.php, connecting to the
    WordPress database, scanning the plugins directory, applying an action to
    the active plugin list and guarding access by client address.

Author: Emfour Solutions
Created: 17-Oct-2026
Last Modified: {{LASTMOD}}
Version: {{VERSION}}
"""

from .active_plugins_store import ActivePluginsStore
from .plugin_scanner import PluginHeader, scan_plugins
from .wp_config_reader import DbCredentials, read_wp_config

__all__ = [
    "ActivePluginsStore",
    "DbCredentials",
    "PluginHeader",
    "read_wp_config",
    "scan_plugins",
]
