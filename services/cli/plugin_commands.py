"""
File: services/cli/plugin_commands.py

Flask CLI commands for listing, activating and deactivating plugins from a
shell on the server, using the same configuration, scanner and store as the
recovery page. Shell access is the trust boundary here, so the IP allow-list
does not apply.

Usage:
    flask plugins list
    flask plugins activate akismet/akismet.php
    flask plugins deactivate broken-plugin/broken-plugin.php

Author: Emfour Solutions
Created: 17-Oct-2026
Last Modified: {{LASTMOD}}
"""

import json
import sys

import click
from flask import current_app
from flask.cli import with_appcontext

from services.active_plugins_store import ActivePluginsStore
from services.database_manager import close_connection, open_connection
from services.exceptions import DatabaseError
from services.plugin_actions import (
    ACTION_ACTIVATE,
    ACTION_DEACTIVATE,
    apply_plugin_action,
    result_message,
)
from services.plugin_scanner import scan_plugins
from services.wp_config_reader import read_wp_config
from utils.database_error_formatter import format_error_response


def _fail_database(error: DatabaseError):
    details = format_error_response(error)
    click.echo(click.style(f"Database unavailable: {details['message']}", fg="red"), err=True)
    for step in details["troubleshooting_steps"]:
        click.echo(f"  - {step}", err=True)
    sys.exit(1)


def _run_action(action: str, keys, force: bool):
    settings = current_app.recovery_settings
    credentials = read_wp_config(settings.wp_config_path)

    selected = list(keys)
    if action == ACTION_ACTIVATE and not force:
        known = scan_plugins(settings.plugins_dir)
        unknown = [key for key in selected if key not in known]
        if unknown:
            click.echo(
                click.style(f"Not found in plugins directory: {', '.join(unknown)}", fg="red"),
                err=True,
            )
            click.echo("Use --force to activate them anyway.", err=True)
            sys.exit(1)

    try:
        connection = open_connection(credentials, settings)
    except DatabaseError as e:
        _fail_database(e)

    try:
        store = ActivePluginsStore(connection, credentials.db_prefix)
        active, updated = apply_plugin_action(store.get_active_plugins(), selected, action)
        success = updated and store.update_active_plugins(active)
    finally:
        close_connection(connection)

    message = result_message(action, len(selected), success)
    click.echo(click.style(message, fg="green" if success else "yellow"))
    if updated and not success:
        sys.exit(1)


@click.group()
def plugins():
    """WordPress plugin recovery commands."""
    pass


@plugins.command("list")
@click.option("--json", "as_json", is_flag=True, help="Output in JSON format")
@with_appcontext
def list_plugins(as_json):
    """List plugins found on disk and their activation state."""
    settings = current_app.recovery_settings
    credentials = read_wp_config(settings.wp_config_path)
    found = scan_plugins(settings.plugins_dir)

    active = []
    db_message = None
    try:
        connection = open_connection(credentials, settings)
    except DatabaseError as e:
        connection = None
        db_message = str(e)

    try:
        if connection is not None:
            active = ActivePluginsStore(connection, credentials.db_prefix).get_active_plugins()
    finally:
        close_connection(connection)

    if as_json:
        data = {
            "plugins": [
                dict(header.to_dict(), file=key, active=key in active)
                for key, header in found.items()
            ],
            "database_error": db_message,
        }
        click.echo(json.dumps(data, indent=2))
        return

    if db_message:
        click.echo(click.style(f"Database unavailable: {db_message}", fg="yellow"), err=True)

    if not found:
        click.echo("No plugins found.")
        return

    for key, header in found.items():
        state = click.style("active", fg="green") if key in active else click.style("inactive", fg="red")
        click.echo(f"{key:<50} {state:<10} {header.name} {header.version}".rstrip())

    # Entries in the database with no file on disk
    missing = [key for key in active if key not in found]
    for key in missing:
        click.echo(f"{key:<50} {click.style('active, file missing', fg='yellow')}")


@plugins.command("activate")
@click.argument("keys", nargs=-1, required=True)
@click.option("--force", is_flag=True, help="Activate keys that the scan did not find")
@with_appcontext
def activate(keys, force):
    """Activate plugins by key (e.g. akismet/akismet.php)."""
    _run_action(ACTION_ACTIVATE, keys, force)


@plugins.command("deactivate")
@click.argument("keys", nargs=-1, required=True)
@with_appcontext
def deactivate(keys):
    """Deactivate plugins by key."""
    _run_action(ACTION_DEACTIVATE, keys, force=True)


def register_plugin_commands(app):
    """Register plugin commands with Flask app."""
    app.cli.add_command(plugins)
