"""
File: services/plugin_scanner.py

Description:
    Discovers WordPress plugins on disk without loading WordPress. Walks the
    entries of the plugins directory, picks the entry file of every plugin
    folder (or takes a standalone plugin file) and reads the header comment
    block of that file to obtain the plugin metadata.

Key features:
    - PluginHeader dataclass holding the eleven header fields plus validity
    - Header extraction from the first 8 KiB of a file, one regex per field
    - Entry file selection: <dir>/<dir>.php first, then a recursive search
      ordered so that index.php files are tried last and shallow paths first
    - Plugin keys relative to the plugins directory, always "/" separated

Author: Emfour Solutions
Created: 2026-10-17
Last Modified: {{LASTMOD}}
Version: {{VERSION}}
"""

# Standard library imports
import os
import re
from dataclasses import asdict, dataclass, fields
from typing import Dict, List, Tuple

# Module-level logger
from services.logging_service import get_module_logger

logger = get_module_logger(__name__)

# Headers are expected at the top of the file
HEADER_READ_BYTES = 8192

# Trailing comment or PHP close tags are not part of a header value
HEADER_CLEANUP_PATTERN = re.compile(r"\s*(?:\*/|\?>).*")


@dataclass
class PluginHeader:
    """Metadata declared in a plugin entry file's header comment"""

    name: str = ""
    plugin_uri: str = ""
    version: str = ""
    description: str = ""
    author: str = ""
    author_uri: str = ""
    text_domain: str = ""
    domain_path: str = ""
    network: str = ""
    requires_wp: str = ""
    requires_php: str = ""

    @property
    def is_valid(self) -> bool:
        """A plugin is considered valid if it declares a name"""
        return bool(self.name)

    def to_dict(self) -> Dict[str, object]:
        data = asdict(self)
        data["is_valid"] = self.is_valid
        return data


# Field -> label used in the header comment
HEADER_LABELS: Dict[str, str] = {
    "name": "Plugin Name",
    "plugin_uri": "Plugin URI",
    "version": "Version",
    "description": "Description",
    "author": "Author",
    "author_uri": "Author URI",
    "text_domain": "Text Domain",
    "domain_path": "Domain Path",
    "network": "Network",
    "requires_wp": "Requires at least",
    "requires_php": "Requires PHP",
}

HEADER_PATTERNS = {
    field: re.compile(r"^[ \t/*#@]*" + re.escape(label) + r":(.*)$", re.MULTILINE | re.IGNORECASE)
    for field, label in HEADER_LABELS.items()
}


def parse_plugin_headers(file_data: str) -> PluginHeader:
    """
    Extract header fields from the leading text of a plugin file.

    Args:
        file_data: Text of the file (only the beginning is needed)

    Returns:
        PluginHeader; fields that are not declared are empty strings
    """
    file_data = file_data.replace("\r", "\n")
    values = {}

    for field in fields(PluginHeader):
        match = HEADER_PATTERNS[field.name].search(file_data)
        if match:
            values[field.name] = HEADER_CLEANUP_PATTERN.sub("", match.group(1)).strip()
        else:
            values[field.name] = ""

    return PluginHeader(**values)


def get_plugin_headers(file_path: str) -> PluginHeader:
    """
    Read the header block of a plugin file.

    Missing or unreadable files yield an empty (invalid) header so the caller
    simply skips them.
    """
    try:
        with open(file_path, "rb") as f:
            raw = f.read(HEADER_READ_BYTES)
    except OSError as e:
        logger.debug(f"Could not read plugin file {file_path}: {e}")
        return PluginHeader()

    return parse_plugin_headers(raw.decode("utf-8", errors="replace"))


def candidate_sort_key(relative_path: str) -> Tuple[bool, int, str]:
    """Order candidate entry files: index.php last, then shallow before deep, then by name."""
    return (
        os.path.basename(relative_path) == "index.php",
        relative_path.count("/"),
        relative_path,
    )


def find_php_files(directory: str, base_dir: str) -> List[str]:
    """List .php files below a directory as "/" separated paths relative to base_dir."""
    found = []
    for root, dirs, files in os.walk(directory):
        dirs.sort()
        for filename in files:
            if filename.endswith(".php"):
                rel = os.path.relpath(os.path.join(root, filename), base_dir)
                found.append(rel.replace(os.sep, "/"))
    return found


def find_entry_file(plugins_dir: str, folder: str) -> Tuple[str, PluginHeader]:
    """
    Locate the entry file of a plugin folder.

    Returns:
        Tuple of (relative key, header); the key is empty if nothing qualifies
    """
    folder_path = os.path.join(plugins_dir, folder)
    main_file = os.path.join(folder_path, f"{folder}.php")

    if os.path.isfile(main_file):
        header = get_plugin_headers(main_file)
        return (f"{folder}/{folder}.php", header) if header.is_valid else ("", header)

    for candidate in sorted(find_php_files(folder_path, plugins_dir), key=candidate_sort_key):
        header = get_plugin_headers(os.path.join(plugins_dir, *candidate.split("/")))
        if header.is_valid:
            return candidate, header

    return "", PluginHeader()


def scan_plugins(plugins_dir: str) -> Dict[str, PluginHeader]:
    """
    Scan the plugins directory for valid plugins.

    Args:
        plugins_dir: Path to wp-content/plugins

    Returns:
        Mapping of plugin key to header, in directory listing order
    """
    plugins: Dict[str, PluginHeader] = {}

    if not os.path.isdir(plugins_dir):
        logger.warning(f"Plugins directory not found: {plugins_dir}")
        return plugins

    try:
        items = sorted(os.listdir(plugins_dir))
    except OSError as e:
        logger.error(f"Could not list plugins directory {plugins_dir}: {e}")
        return plugins

    for item in items:
        path = os.path.join(plugins_dir, item)

        if os.path.isdir(path):
            key, header = find_entry_file(plugins_dir, item)
            if key:
                plugins[key] = header
            else:
                logger.debug(f"No plugin entry file found in {item}/")

        elif item.endswith(".php"):
            header = get_plugin_headers(path)
            if header.is_valid:
                plugins[item] = header

    logger.info(f"Found {len(plugins)} plugins in {plugins_dir}")
    return plugins
