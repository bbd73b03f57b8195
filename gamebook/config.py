"""
Application configuration.

Loads settings from environment variables with sensible defaults.
"""

import os


def _get_int(key: str, default: int) -> int:
    """Get integer from environment variable."""
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_bool(key: str, default: bool) -> bool:
    """Get boolean from environment variable."""
    value = os.environ.get(key)
    if value is None:
        return default
    return value.lower() in ('true', '1', 'yes')


def _get_str(key: str, default: str) -> str:
    """Get string from environment variable."""
    return os.environ.get(key, default)


def _get_list(key: str, default: str) -> list:
    """Get comma-separated list from environment variable."""
    raw = _get_str(key, default)
    return [item.strip() for item in raw.split(',') if item.strip()]


# =============================================================================
# SERVER SETTINGS
# =============================================================================
PORT = _get_int('PORT', 8000)
HOST = _get_str('HOST', '0.0.0.0')
RELOAD = _get_bool('RELOAD', False)

# All game routes are mounted under this prefix
API_PREFIX = _get_str('API_PREFIX', '/api')

# Allowed browser origins for the UI
CORS_ORIGINS = _get_list('CORS_ORIGINS', '*')

# =============================================================================
# STORAGE SETTINGS
# =============================================================================
# Backend: sqlite (default) or supabase
DB_TYPE = _get_str('DB_TYPE', 'sqlite')

# Directory holding the SQLite document store
DATA_DIR = _get_str('DATA_DIR', 'data')

# =============================================================================
# LOGGING
# =============================================================================
LOG_LEVEL = _get_str('LOG_LEVEL', 'INFO')
