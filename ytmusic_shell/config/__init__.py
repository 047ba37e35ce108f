"""
Configuration package for ytmusic-shell

Settings management (settings.py):
- Application configuration from YAML files and environment variables
- Settings validation and persistence
- Singleton access through get_settings()

Session authentication lives in ``config.auth`` and is imported from there
directly; it depends on the logging utilities, which themselves read the
settings exported here.

Usage:
    from ytmusic_shell.config import get_settings

    settings = get_settings()
"""

from .settings import get_settings, reload_settings, Settings

__all__ = [
    'get_settings',
    'reload_settings',
    'Settings',
]
