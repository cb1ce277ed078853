"""
File: services/plugin_actions.py

Description:
    In-memory mutation of the active plugin list for the activate and
    deactivate actions, plus the operator-facing result message.

Author: Emfour Solutions
Created: 2026-10-17
Last Modified: {{LASTMOD}}
Version: {{VERSION}}
"""

# Standard library imports
from typing import Iterable, List, Tuple

ACTION_ACTIVATE = "activate"
ACTION_DEACTIVATE = "deactivate"
VALID_ACTIONS = (ACTION_ACTIVATE, ACTION_DEACTIVATE)

NO_CHANGE_MESSAGE = "No changes made or update failed."


def activate_plugins(active: Iterable[str], selected: Iterable[str]) -> Tuple[List[str], bool]:
    """
    Append each selected key that is not already active.

    Returns:
        Tuple of (new active list, whether anything was added)
    """
    result = list(active)
    updated = False

    for plugin in selected:
        if plugin not in result:
            result.append(plugin)
            updated = True

    return result, updated


def deactivate_plugins(active: Iterable[str], selected: Iterable[str]) -> Tuple[List[str], bool]:
    """
    Remove every selected key, keeping the order of the remaining ones.

    A deactivate submission is always written back, so the flag is always True.
    """
    removed = set(selected)
    return [plugin for plugin in active if plugin not in removed], True


def apply_plugin_action(
    active: Iterable[str], selected: Iterable[str], action: str
) -> Tuple[List[str], bool]:
    """Apply one action; unknown actions leave the list untouched."""
    if action == ACTION_ACTIVATE:
        return activate_plugins(active, selected)
    if action == ACTION_DEACTIVATE:
        return deactivate_plugins(active, selected)
    return list(active), False


def result_message(action: str, selected_count: int, success: bool) -> str:
    """Message shown after a submission, e.g. "Activated 2 plugin(s)." """
    if not success or action not in VALID_ACTIONS:
        return NO_CHANGE_MESSAGE
    return f"{action.capitalize()}d {selected_count} plugin(s)."
