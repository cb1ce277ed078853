"""
WordPress Plugin Recovery Manager - Main Application Entry Point

Flask application factory for a standalone, single-use tool that lists,
activates and deactivates WordPress plugins by reading wp-config.php and
editing the active_plugins option directly. Meant for sites whose admin area
is broken by a faulty plugin; delete it from the server after use.

Features: Application factory pattern, IP allow-list guard, per-request
database connection, plugin header scanning, CLI commands.

Author: Emfour Solutions
Created: 17-Oct-2026
License: GNU General Public License v3.0 (GPLv3)
"""

# Standard library imports
import logging
import os

# Third-party imports
from dotenv import load_dotenv
from flask import Flask, render_template

# Local application imports
from config.environments import get_config
from services.cli.plugin_commands import register_plugin_commands
from services.logging_service import log_startup_banner, setup_logging
from services.version import get_version

load_dotenv()

# Set up logger
logger = logging.getLogger("main")


def create_app(config_name=None):
    """Create the recovery application for the given environment."""
    # No ProxyFix: the allow-list must see the real connection address
    app = Flask(__name__)

    flask_env = config_name or os.environ.get("FLASK_ENV", "development")
    config_instance = get_config(flask_env)

    configure_flask_app(app, config_instance)

    setup_logging(app)
    log_startup_banner(app)

    register_plugin_commands(app)

    from routes.main import bp as main_bp

    app.register_blueprint(main_bp)

    setup_template_helpers(app)
    setup_error_handlers(app)

    return app


def configure_flask_app(app, config_instance):
    """Configure Flask app with the configuration system."""

    # Core Flask settings
    app.config["SECRET_KEY"] = config_instance.SECRET_KEY
    app.config["DEBUG"] = config_instance.DEBUG
    app.config["TESTING"] = config_instance.TESTING
    app.config["ENVIRONMENT"] = config_instance.environment

    # Logging settings
    app.config["LOG_LEVEL"] = config_instance.LOG_LEVEL
    app.config["LOG_DIR"] = config_instance.LOG_DIR
    app.config["LOG_TO_FILE"] = config_instance.LOG_TO_FILE
    app.config["SQL_ECHO"] = config_instance.SQL_ECHO

    app.config["VERSION"] = get_version()

    issues = config_instance.validate_config()
    if issues:
        logger.warning(f"Configuration issues found: {issues}")

    # Immutable settings handed to every component; raises ConfigurationError
    # when a value cannot be used at all
    app.recovery_settings = config_instance.build_settings()
    app.config_instance = config_instance

    logger.info(f"Configured Flask app for environment: {config_instance.environment}")


def setup_template_helpers(app):
    """Add version information to the template context"""

    @app.context_processor
    def inject_version_info():
        return dict(version=app.config.get("VERSION", "unknown"))


def setup_error_handlers(app):
    """Set up error handlers"""

    @app.errorhandler(404)
    def not_found_error(error):
        return render_template("errors/404.html"), 404

    @app.errorhandler(500)
    def internal_error(error):
        return render_template("errors/500.html"), 500

    @app.errorhandler(Exception)
    def handle_exception(e):
        """Handle uncaught exceptions"""
        from werkzeug.exceptions import HTTPException

        if isinstance(e, HTTPException):
            return e

        logger.error(f"Unhandled exception: {e}", exc_info=True)

        if app.debug:
            raise e

        return render_template("errors/500.html"), 500


if __name__ == "__main__":
    app = create_app()
    app.run(host="0.0.0.0", port=int(os.environ.get("PORT", "8080")), debug=False)
