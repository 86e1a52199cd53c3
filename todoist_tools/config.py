"""Todoist MCP configuration loader.

Settings come from environment variables first, then from an optional JSON
file (``~/.todoist-mcp/config.json`` or the path in ``TODOIST_MCP_CONFIG``).
"""
import json
import os
from pathlib import Path
from typing import Optional

DEFAULT_API_BASE_URL = "https://api.todoist.com/rest/v2"
DEFAULT_TIMEOUT = 30.0
DEFAULT_LOG_LEVEL = "INFO"

_config_cache = None


class ConfigError(ValueError):
    """Raised when a required setting is missing."""
    pass


def get_config_path() -> Path:
    override = os.environ.get("TODOIST_MCP_CONFIG")
    if override:
        return Path(os.path.expanduser(override))
    return Path.home() / ".todoist-mcp" / "config.json"


def get_config() -> dict:
    """Load the config file with caching. A missing file is an empty config."""
    global _config_cache
    if _config_cache is None:
        config_path = get_config_path()
        if config_path.exists():
            with open(config_path) as f:
                _config_cache = json.load(f)
        else:
            _config_cache = {}
    return _config_cache


def clear_config_cache():
    """Invalidate the cached config, forcing a re-read on next access."""
    global _config_cache
    _config_cache = None


def _setting(env_var: str, key: str, default=None):
    value = os.environ.get(env_var)
    if value not in (None, ""):
        return value
    return get_config().get(key, default)


def get_api_token() -> str:
    """Return the Todoist API token, or an empty string when none is set."""
    return _setting("TODOIST_API_TOKEN", "api_token", "") or ""


def require_api_token() -> str:
    token = get_api_token()
    if not token:
        raise ConfigError("TODOIST_API_TOKEN environment variable is required")
    return token


def get_api_base_url() -> str:
    return str(_setting("TODOIST_API_BASE_URL", "api_base_url", DEFAULT_API_BASE_URL)).rstrip("/")


def get_request_timeout() -> float:
    return float(_setting("TODOIST_API_TIMEOUT", "timeout", DEFAULT_TIMEOUT))


def get_batch_concurrency() -> Optional[int]:
    """Max simultaneous per-item remote calls in one batch.

    Returns None (unbounded) when unset or not a positive integer.
    """
    value = _setting("TODOIST_MCP_BATCH_CONCURRENCY", "batch_concurrency")
    if value is None:
        return None
    try:
        limit = int(value)
    except (TypeError, ValueError):
        return None
    return limit if limit > 0 else None


def get_log_level() -> str:
    return str(_setting("TODOIST_MCP_LOG_LEVEL", "log_level", DEFAULT_LOG_LEVEL)).upper()
