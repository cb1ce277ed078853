"""
File: services/logging_service.py

Description:
    Logging service that provides logging functions to the application.
    Configures console and file logging and displays the startup banner,
    including the reminder that this tool must be deleted after use.

Author: Emfour Solutions
Created: 2026-10-17
Last Modified: 2026-10-17
"""

import datetime

# Standard library imports
import logging
import os
from typing import Optional

# Local application imports
from services.version import get_version, is_development_build

logger = logging.getLogger(__name__)


def get_module_logger(module_name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger for a module.

    Args:
        module_name: Module name (__name__). If None, attempts auto-detection

    Returns:
        Logger instance
    """
    if module_name is None:
        # Auto-detect calling module for convenience
        import inspect

        frame = inspect.currentframe()
        if frame and frame.f_back:
            module_name = frame.f_back.f_globals.get("__name__", "unknown")
        else:
            module_name = "unknown"

    return logging.getLogger(module_name)


def setup_logging(app):
    """Set up application logging with version information."""

    log_level = getattr(logging, str(app.config.get("LOG_LEVEL", "INFO")).upper(), logging.INFO)

    try:
        version = get_version()
    except Exception:
        version = "unknown"

    detailed_formatter = logging.Formatter(
        f"%(asctime)s [%(levelname)s] PluginRecovery-{version} %(name)s: %(message)s"
    )

    handlers = []

    if app.config.get("LOG_TO_FILE", True):
        log_dir = app.config.get("LOG_DIR", "logs")
        if not os.path.exists(log_dir):
            os.makedirs(log_dir)

        file_handler = logging.FileHandler(os.path.join(log_dir, "plugin_recovery.log"))
        file_handler.setFormatter(detailed_formatter)
        file_handler.setLevel(log_level)
        handlers.append(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(detailed_formatter)
    console_handler.setLevel(log_level)
    handlers.append(console_handler)

    # Configure root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Remove existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    for handler in handlers:
        root_logger.addHandler(handler)

    # SQL echo only when explicitly requested
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if app.config.get("SQL_ECHO") else logging.WARNING
    )
    logging.getLogger("sqlalchemy.pool").setLevel(logging.WARNING)

    app.logger.info(f"Logging Service Started - Version: {version}")


def log_startup_banner(app):
    """Log a startup banner describing what this instance will touch."""
    settings = getattr(app, "recovery_settings", None)
    try:
        banner_lines = [
            "",
            "=" * 80,
            " Plugin Recovery Manager Starting",
            "=" * 80,
            f" Version: {get_version()}",
            f" Environment: {app.config.get('ENVIRONMENT', 'unknown')}",
            f" Debug Mode: {'ON' if app.debug else 'OFF'}",
            f" Development: {'YES' if is_development_build() else 'NO'}",
        ]

        if settings is not None:
            banner_lines.extend(
                [
                    "",
                    " Recovery Target:",
                    f"   WordPress Root: {settings.wp_root}",
                    f"   Plugins Directory: {settings.plugins_dir}",
                    f"   Config File: {settings.wp_config_path}",
                    f"   Allowed IPs: {', '.join(settings.allowed_ips) or 'NONE'}",
                    f"   Database URL Override: {'YES' if settings.database_url else 'NO'}",
                ]
            )

        banner_lines.extend(
            [
                "",
                " Delete this tool from the server once the site is recovered.",
                f" Started at: {datetime.datetime.now().strftime('%Y-%m-%d %H:%M:%S')}",
                "=" * 80,
                "",
            ]
        )

        for line in banner_lines:
            app.logger.info(line)

    except Exception as e:
        app.logger.error(f"Failed to log startup banner: {e}")
        app.logger.info(f"Plugin Recovery Manager starting - Version: {get_version()}")
