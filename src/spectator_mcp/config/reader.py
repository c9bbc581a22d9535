"""Read client config files with schema tolerance.

All config files follow: { "mcpServers": { "<name>": { ... } } }
The full document is returned so the writer can round-trip unknown keys.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from spectator_mcp.errors import ConfigReadError, MalformedConfigError

logger = logging.getLogger(__name__)

SERVERS_KEY = "mcpServers"


def read_config(config_path: Path | str) -> dict[str, object]:
    """Read a full client config file.

    A missing or blank file reads as an empty document. Content that is not
    a JSON object raises MalformedConfigError; the file is left untouched.
    """
    path = Path(config_path)
    if not path.exists():
        logger.debug("Config %s does not exist, starting from an empty document", path)
        return {}

    try:
        text = path.read_text(encoding="utf-8")
    except PermissionError as exc:
        raise ConfigReadError(f"Permission denied reading {path}: {exc}") from exc
    except OSError as exc:
        raise ConfigReadError(f"Failed to read {path}: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise MalformedConfigError(
            f"{path} is not valid UTF-8 JSON: {exc}. The file was not modified."
        ) from exc

    if not text.strip():
        return {}

    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise MalformedConfigError(
            f"Invalid JSON in {path}: {exc}. Fix the JSON syntax; the file was not modified."
        ) from exc

    if not isinstance(data, dict):
        raise MalformedConfigError(
            f"Expected a JSON object at the top of {path}, found {type(data).__name__}."
        )
    return data


def get_servers(document: dict[str, object], source: str = "") -> dict[str, object]:
    """Return the server registry mapping, or an empty dict when absent."""
    servers = document.get(SERVERS_KEY)
    if servers is None:
        return {}
    if not isinstance(servers, dict):
        where = f" in {source}" if source else ""
        raise MalformedConfigError(
            f'"{SERVERS_KEY}"{where} must be a JSON object, found {type(servers).__name__}.'
        )
    return servers


def has_entry(document: dict[str, object], name: str, source: str = "") -> bool:
    """Return True when the registry mapping contains ``name``."""
    return name in get_servers(document, source)
