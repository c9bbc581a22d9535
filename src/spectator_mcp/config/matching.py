"""Build and recognise the Spectator server entry in both wire forms.

URL form:     npx -y mcp-remote https://.../mcp-server/mcp/<KEY>
Header form:  npx -y mcp-remote https://.../mcp-server/mcp
                  --header "Authorization: Bearer ${SPECTATOR_API_KEY}"
              with the key in env.SPECTATOR_API_KEY

Older releases wrote either form, so both must be readable.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping

from spectator_mcp import settings
from spectator_mcp.models import AuthStyle, ServerEntry
from spectator_mcp.validation.api_key import extract_api_key_from_url

_HTTP_URL_PREFIXES = ("https://", "http://")
_HEADER_FLAG = "--header"
_BEARER = re.compile(r"^\s*Authorization\s*:\s*Bearer\s+(\S+)\s*$", re.IGNORECASE)
_ENV_REF = re.compile(r"^\$\{([A-Za-z_][A-Za-z0-9_]*)\}$")


def build_server_entry(api_key: str, style: AuthStyle = AuthStyle.URL) -> ServerEntry:
    """Return the launch entry that connects a client to the Spectator endpoint."""
    base = settings.server_url()
    if style is AuthStyle.HEADER:
        return ServerEntry(
            command=settings.LAUNCHER_COMMAND,
            args=[
                "-y",
                settings.LAUNCHER_PACKAGE,
                base,
                _HEADER_FLAG,
                f"Authorization: Bearer ${{{settings.API_KEY_ENV_VAR}}}",
            ],
            env={settings.API_KEY_ENV_VAR: api_key},
        )
    return ServerEntry(
        command=settings.LAUNCHER_COMMAND,
        args=["-y", settings.LAUNCHER_PACKAGE, f"{base}/{api_key}"],
    )


def extract_http_url(args: Iterable[object]) -> str | None:
    """Return the first HTTP URL found in args."""
    for arg in args:
        if str(arg).startswith(_HTTP_URL_PREFIXES):
            return str(arg)
    return None


def _header_value(args: list[object]) -> str | None:
    for index, arg in enumerate(args):
        text = str(arg)
        if text == _HEADER_FLAG and index + 1 < len(args):
            return str(args[index + 1])
        if text.startswith(f"{_HEADER_FLAG}="):
            return text.split("=", 1)[1]
    return None


def _args(entry: Mapping[str, object]) -> list[object]:
    args = entry.get("args")
    return list(args) if isinstance(args, list) else []


def entry_auth_style(entry: Mapping[str, object]) -> AuthStyle | None:
    """Classify an entry as URL or header form; None when it is neither."""
    args = _args(entry)
    header = _header_value(args)
    if header is not None and _BEARER.match(header):
        return AuthStyle.HEADER
    url = extract_http_url(args)
    if url is not None and extract_api_key_from_url(url):
        return AuthStyle.URL
    return None


def extract_api_key(entry: Mapping[str, object]) -> str | None:
    """Return the API key an entry authenticates with, if it can be recovered."""
    args = _args(entry)
    header = _header_value(args)
    if header is not None:
        match = _BEARER.match(header)
        if match:
            token = match.group(1)
            ref = _ENV_REF.match(token)
            if ref is None:
                return token
            env = entry.get("env")
            if isinstance(env, dict):
                value = env.get(ref.group(1))
                return str(value) if value else None
            return None

    url = extract_http_url(args)
    if url is not None:
        return extract_api_key_from_url(url)
    return None


def entry_is_well_formed(entry: object) -> bool:
    """Return True when an entry has a command string and an args list."""
    if not isinstance(entry, Mapping):
        return False
    return bool(entry.get("command")) and isinstance(entry.get("args"), list)


def is_spectator_entry(entry: object) -> bool:
    """Return True when an entry launches the Spectator endpoint in either form."""
    return entry_is_well_formed(entry) and entry_auth_style(entry) is not None


def mask_key(api_key: str) -> str:
    """Mask all but the edges of a key for display."""
    if len(api_key) <= 8:
        return "*" * len(api_key)
    return f"{api_key[:4]}...{api_key[-4:]}"
