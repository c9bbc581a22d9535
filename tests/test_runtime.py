"""Tests for validation/runtime.py: Node.js and npx version checks."""

from __future__ import annotations

import subprocess
from unittest.mock import MagicMock, patch

import pytest

from spectator_mcp.validation.runtime import check_runtime


def _versions(node: str | None, npx: str | None):
    """Patch which/run so node and npx report the given versions (None = missing)."""
    outputs = {"node": node, "npx": npx}

    def fake_which(command: str) -> str | None:
        return f"/usr/bin/{command}" if outputs.get(command) is not None else None

    def fake_run(cmd, **kwargs):
        name = cmd[0].rsplit("/", 1)[-1]
        return MagicMock(returncode=0, stdout=f"{outputs[name]}\n")

    return (
        patch("spectator_mcp.validation.runtime.shutil.which", side_effect=fake_which),
        patch("spectator_mcp.validation.runtime.subprocess.run", side_effect=fake_run),
    )


@pytest.fixture
def runtime(request):
    node, npx = request.param
    which_patch, run_patch = _versions(node, npx)
    with which_patch, run_patch:
        yield check_runtime()


@pytest.mark.parametrize("runtime", [("v20.11.1", "10.2.4")], indirect=True)
def test_supported_runtime(runtime):
    assert runtime.ok is True
    assert runtime.node_version == "v20.11.1"
    assert runtime.npx_version == "10.2.4"


@pytest.mark.parametrize("runtime", [(None, None)], indirect=True)
def test_node_missing(runtime):
    assert runtime.ok is False
    assert "Node.js was not found" in runtime.error


@pytest.mark.parametrize("runtime", [("v16.20.0", "8.19.4")], indirect=True)
def test_node_too_old(runtime):
    assert runtime.ok is False
    assert "too old" in runtime.error
    assert runtime.node_version == "v16.20.0"


@pytest.mark.parametrize("runtime", [("nightly", "10.0.0")], indirect=True)
def test_node_unparseable(runtime):
    assert runtime.error == "Unable to parse Node.js version"


@pytest.mark.parametrize("runtime", [("v18.0.0", None)], indirect=True)
def test_npx_missing(runtime):
    assert runtime.ok is False
    assert "npx was not found" in runtime.error


@pytest.mark.parametrize("runtime", [("v18.0.0", "6.14.0")], indirect=True)
def test_npx_too_old(runtime):
    assert runtime.ok is False
    assert runtime.npx_version == "6.14.0"


def test_version_command_failure_counts_as_missing():
    with (
        patch("spectator_mcp.validation.runtime.shutil.which", return_value="/usr/bin/node"),
        patch(
            "spectator_mcp.validation.runtime.subprocess.run",
            side_effect=subprocess.TimeoutExpired(cmd="node", timeout=10),
        ),
    ):
        result = check_runtime()
    assert result.ok is False
    assert "Node.js was not found" in result.error
