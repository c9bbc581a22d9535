"""Runtime settings: module defaults with environment overrides.

Values are read at call time so tests and wrappers can adjust the
environment without reloading modules.
"""

from __future__ import annotations

import logging
import os

logger = logging.getLogger(__name__)

SERVER_NAME = "spectator-voice-memory"
CONNECTOR_DISPLAY_NAME = "Spectator Voice Memory"
LAUNCHER_COMMAND = "npx"
LAUNCHER_PACKAGE = "mcp-remote"
API_KEY_ENV_VAR = "SPECTATOR_API_KEY"
API_KEY_PLACEHOLDER = "YOUR_API_KEY"

_SERVER_URL_ENV = "SPECTATOR_MCP_SERVER_URL"
_API_URL_ENV = "SPECTATOR_MCP_API_URL"
_LOG_LEVEL_ENV = "SPECTATOR_MCP_LOG_LEVEL"
_HTTP_TIMEOUT_ENV = "SPECTATOR_MCP_HTTP_TIMEOUT"

_DEFAULT_SERVER_URL = "https://spectatorcontext.com/mcp-server/mcp"
_DEFAULT_API_URL = "https://api.spectatorcontext.com/mcp-server/mcp"
_DEFAULT_LOG_LEVEL = "WARNING"
_DEFAULT_HTTP_TIMEOUT = 10.0


def server_url() -> str:
    """Base of the MCP endpoint written into client configs (no trailing slash)."""
    return os.environ.get(_SERVER_URL_ENV, _DEFAULT_SERVER_URL).rstrip("/")


def api_url() -> str:
    """Base of the endpoint used for the optional remote key check."""
    return os.environ.get(_API_URL_ENV, _DEFAULT_API_URL).rstrip("/")


def log_level() -> str:
    level = os.environ.get(_LOG_LEVEL_ENV, _DEFAULT_LOG_LEVEL).strip().upper()
    if level not in logging.getLevelNamesMapping():
        logger.warning("Ignoring unknown %s=%r", _LOG_LEVEL_ENV, level)
        return _DEFAULT_LOG_LEVEL
    return level


def http_timeout() -> float:
    raw = os.environ.get(_HTTP_TIMEOUT_ENV, "")
    if not raw:
        return _DEFAULT_HTTP_TIMEOUT
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Ignoring non-numeric %s=%r", _HTTP_TIMEOUT_ENV, raw)
        return _DEFAULT_HTTP_TIMEOUT
    if value <= 0:
        logger.warning("Ignoring non-positive %s=%r", _HTTP_TIMEOUT_ENV, raw)
        return _DEFAULT_HTTP_TIMEOUT
    return value
