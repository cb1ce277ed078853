"""
File: services/access_guard.py

Description:
    IP allow-list guard for the recovery page. The client address is taken
    from the WSGI REMOTE_ADDR only; forwarding headers are spoofable and are
    never consulted. Requests from any other address are answered with a short
    denial message before any file or database access happens.

Key features:
    - get_client_ip() with a fallback that never matches the allow-list
    - is_ip_allowed() literal allow-list membership, no CIDR matching
    - @require_allowed_ip decorator for Flask routes

Author: Emfour Solutions
Created: 2026-10-17
Last Modified: 2026-10-17
Version: 1.0.0
"""

# Standard library imports
from functools import wraps
from typing import Callable, Iterable

# Third-party imports
from flask import Response, current_app, request
from markupsafe import escape

# Module-level logger
from services.logging_service import get_module_logger

logger = get_module_logger(__name__)

# Used when the client address cannot be determined
UNKNOWN_CLIENT_IP = "0.0.0.0"


def get_client_ip(req=None) -> str:
    """Return the connection's source address, or 0.0.0.0 when unknown"""
    req = req if req is not None else request
    return req.remote_addr or UNKNOWN_CLIENT_IP


def is_ip_allowed(ip: str, allowed_ips: Iterable[str]) -> bool:
    """Literal allow-list check; the unknown-client placeholder is never allowed"""
    if not ip or ip == UNKNOWN_CLIENT_IP:
        return False
    return ip in set(allowed_ips)


def access_denied_response(ip: str) -> Response:
    return Response(f"Access denied. Your IP: {escape(ip)}", status=403, mimetype="text/html")


def require_allowed_ip(f: Callable) -> Callable:
    """
    Decorator that rejects requests from addresses outside the allow-list

    Args:
        f: Function to decorate

    Returns:
        Decorated function
    """

    @wraps(f)
    def decorated_function(*args, **kwargs):
        ip = get_client_ip()
        settings = current_app.recovery_settings

        if not is_ip_allowed(ip, settings.allowed_ips):
            logger.warning(f"Access denied to {request.endpoint} from {ip}")
            return access_denied_response(ip)

        return f(*args, **kwargs)

    return decorated_function
