"""
File: config/__init__.py

Description:
    Package initialisation for the configuration system

Author: Emfour Solutions
Created: 2026-10-17
Last Modified: {{LASTMOD}}
Version: {{VERSION}}
"""

# Local application imports
from .base import BaseConfig, RecoverySettings
from .environments import get_config

__all__ = ["BaseConfig", "RecoverySettings", "get_config"]
