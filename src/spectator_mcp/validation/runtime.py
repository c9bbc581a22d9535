"""Check that the launcher used by the written entry (npx) will work."""

from __future__ import annotations

import logging
import re
import shutil
import subprocess

from spectator_mcp.models import RuntimeCheck

logger = logging.getLogger(__name__)

# mcp-remote needs Node 18+ (TransformStream); npx 7+ understands -y.
MIN_NODE_MAJOR = 18
MIN_NPX_MAJOR = 7

_VERSION = re.compile(r"v?(\d+)\.(\d+)\.(\d+)")


def _run_version(command: str) -> str | None:
    executable = shutil.which(command)
    if executable is None:
        return None
    try:
        completed = subprocess.run(
            [executable, "--version"],
            capture_output=True,
            text=True,
            timeout=10,
            check=False,
        )
    except (OSError, subprocess.SubprocessError) as exc:
        logger.debug("`%s --version` failed: %s", command, exc)
        return None
    if completed.returncode != 0:
        return None
    return completed.stdout.strip() or None


def _major(version: str) -> int | None:
    match = _VERSION.search(version)
    return int(match.group(1)) if match else None


def check_runtime() -> RuntimeCheck:
    """Report whether Node.js and npx meet the launcher's minimum versions."""
    node_version = _run_version("node")
    if node_version is None:
        return RuntimeCheck(
            ok=False,
            error="Node.js was not found. Install Node.js 18 or newer from https://nodejs.org/",
        )

    node_major = _major(node_version)
    if node_major is None:
        return RuntimeCheck(
            ok=False, node_version=node_version, error="Unable to parse Node.js version"
        )
    if node_major < MIN_NODE_MAJOR:
        return RuntimeCheck(
            ok=False,
            node_version=node_version,
            error=(
                f"Node.js {node_version} is too old. Please update to Node.js "
                f"{MIN_NODE_MAJOR}.0.0 or higher (nvm install {MIN_NODE_MAJOR})."
            ),
        )

    npx_version = _run_version("npx")
    if npx_version is None:
        return RuntimeCheck(
            ok=False,
            node_version=node_version,
            error="npx was not found on PATH. Reinstall Node.js to get npm and npx.",
        )

    npx_major = _major(npx_version)
    if npx_major is not None and npx_major < MIN_NPX_MAJOR:
        return RuntimeCheck(
            ok=False,
            node_version=node_version,
            npx_version=npx_version,
            error=(
                f"npx version {npx_version} is too old. "
                f"Please update to npx {MIN_NPX_MAJOR}.0.0 or higher."
            ),
        )

    return RuntimeCheck(ok=True, node_version=node_version, npx_version=npx_version)
