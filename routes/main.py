"""
File: routes/main.py

Description:
    The recovery page. A single route that lists every plugin found on disk
    together with its activation state, and applies an activate or deactivate
    action to the selected plugins when the form is submitted. Every request
    re-reads wp-config.php, reconnects to the database and rescans the plugins
    directory; nothing is kept between requests.

Key features:
    - IP allow-list enforced before anything else runs
    - Degraded read-only mode when the database cannot be reached
    - One action per submission, written back with a single UPDATE
    - Template rendering with Jinja autoescaping of all plugin metadata

Author: Emfour Solutions
Created: 2026-10-17
Last Modified: {{LASTMOD}}
Version: {{VERSION}}
"""

# Third-party imports
from flask import Blueprint, current_app, render_template, request

# Local application imports
from services.access_guard import require_allowed_ip
from services.active_plugins_store import ActivePluginsStore
from services.database_manager import close_connection, try_open_connection
from services.plugin_actions import apply_plugin_action, result_message
from services.plugin_scanner import scan_plugins
from services.wp_config_reader import read_wp_config
from utils.database_error_formatter import format_error_response

# Module-level logger
from services.logging_service import get_module_logger

logger = get_module_logger(__name__)

bp = Blueprint("main", __name__)


def get_submission():
    """Return (action, selected) for a complete form submission, or None"""
    if request.method != "POST":
        return None

    action = request.form.get("action")
    selected = [key for key in request.form.getlist("plugins[]") if key]

    if "submit" not in request.form or not action or not selected:
        return None
    return action, selected


@bp.route("/", methods=["GET", "POST"])
@require_allowed_ip
def index():
    """Plugin recovery page"""
    settings = current_app.recovery_settings

    credentials = read_wp_config(settings.wp_config_path)
    connection, db_error = try_open_connection(credentials, settings)
    message = ""

    try:
        store = ActivePluginsStore(connection, credentials.db_prefix) if connection else None
        active_plugins = store.get_active_plugins() if store else []
        all_plugins = scan_plugins(settings.plugins_dir)

        submission = get_submission()
        if store and submission:
            action, selected = submission
            active_plugins, updated = apply_plugin_action(active_plugins, selected, action)
            success = updated and store.update_active_plugins(active_plugins)
            message = result_message(action, len(selected), success)
            logger.info(f"{action} requested for {selected}: {message}")
        elif submission:
            logger.warning("Form submission ignored: no database connection")
    finally:
        close_connection(connection)

    return render_template(
        "index.html",
        plugins=all_plugins,
        active_plugins=set(active_plugins),
        message=message,
        db_error=format_error_response(db_error) if db_error else None,
    )
