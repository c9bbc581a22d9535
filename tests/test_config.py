"""Tests for config/reader.py and config/writer.py."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from spectator_mcp.config.reader import get_servers, has_entry, read_config
from spectator_mcp.config.writer import (
    backup_config,
    remove_entry,
    upsert_entry,
    write_config,
)
from spectator_mcp.errors import ConfigReadError, ConfigWriteError, MalformedConfigError
from spectator_mcp.models import ServerEntry

ENTRY = ServerEntry(command="npx", args=["-y", "mcp-remote", "https://example.test/mcp/key"])


def list_backups(path: Path) -> list[Path]:
    """Backups of ``path``, oldest first."""
    prefix = f"{path.name}.backup."
    found = [p for p in path.parent.glob(f"{prefix}*") if p.name[len(prefix) :].isdigit()]
    return sorted(found, key=lambda p: int(p.name[len(prefix) :]))


@pytest.fixture
def cfg_dir(tmp_path: Path) -> Path:
    """An empty directory of its own; HOME and the project dir live beside it."""
    directory = tmp_path / "cfg"
    directory.mkdir()
    return directory


# ═══════════════════════════════════════════════════════════════
# Reader
# ═══════════════════════════════════════════════════════════════


class TestReadConfig:
    def test_missing_file_is_empty(self, cfg_dir: Path):
        assert read_config(cfg_dir / "nope.json") == {}

    def test_blank_file_is_empty(self, cfg_dir: Path):
        path = cfg_dir / "blank.json"
        path.write_text("  \n\t\n")
        assert read_config(path) == {}

    def test_reads_object(self, cfg_dir: Path):
        path = cfg_dir / "config.json"
        path.write_text(json.dumps({"mcpServers": {"a": {"command": "x"}}, "theme": "dark"}))
        assert read_config(path) == {"mcpServers": {"a": {"command": "x"}}, "theme": "dark"}

    def test_invalid_json_raises_and_leaves_file(self, cfg_dir: Path):
        path = cfg_dir / "config.json"
        path.write_text("{not json")
        with pytest.raises(MalformedConfigError, match="not modified"):
            read_config(path)
        assert path.read_text() == "{not json"

    def test_non_object_top_level(self, cfg_dir: Path):
        path = cfg_dir / "config.json"
        path.write_text("[1, 2, 3]")
        with pytest.raises(MalformedConfigError, match="list"):
            read_config(path)

    def test_malformed_is_a_read_error(self):
        assert issubclass(MalformedConfigError, ConfigReadError)

    def test_invalid_utf8_is_malformed(self, cfg_dir: Path):
        path = cfg_dir / "config.json"
        path.write_bytes(b'{"mcpServers": {"x": "\xff\xfe"}}')
        with pytest.raises(MalformedConfigError, match="not valid UTF-8"):
            read_config(path)
        assert path.read_bytes() == b'{"mcpServers": {"x": "\xff\xfe"}}'

    def test_permission_error_wrapped(self, cfg_dir: Path):
        path = cfg_dir / "config.json"
        path.write_text("{}")
        with (
            patch.object(Path, "read_text", side_effect=PermissionError("denied")),
            pytest.raises(ConfigReadError, match="Permission denied"),
        ):
            read_config(path)


class TestGetServers:
    def test_absent_key(self):
        assert get_servers({"theme": "dark"}) == {}

    def test_present(self):
        assert get_servers({"mcpServers": {"a": {}}}) == {"a": {}}

    def test_non_object_registry(self):
        with pytest.raises(MalformedConfigError, match="settings.json"):
            get_servers({"mcpServers": ["a"]}, source="settings.json")

    def test_has_entry(self):
        assert has_entry({"mcpServers": {"a": {}}}, "a") is True
        assert has_entry({"mcpServers": {"a": {}}}, "b") is False
        assert has_entry({}, "a") is False


# ═══════════════════════════════════════════════════════════════
# Writer
# ═══════════════════════════════════════════════════════════════


class TestWriteConfig:
    def test_creates_parent_dirs(self, cfg_dir: Path):
        path = cfg_dir / "deep" / "nested" / "config.json"
        write_config(path, {"mcpServers": {}})
        assert json.loads(path.read_text()) == {"mcpServers": {}}

    def test_two_space_indent_and_trailing_newline(self, cfg_dir: Path):
        path = cfg_dir / "config.json"
        write_config(path, {"a": {"b": 1}})
        text = path.read_text()
        assert text.endswith("\n")
        assert '\n  "a": {\n    "b": 1\n  }' in text

    def test_preserves_non_ascii(self, cfg_dir: Path):
        path = cfg_dir / "config.json"
        write_config(path, {"name": "café"})
        assert "café" in path.read_text(encoding="utf-8")

    def test_no_temp_files_left(self, cfg_dir: Path):
        path = cfg_dir / "config.json"
        write_config(path, {"a": 1})
        assert [p.name for p in cfg_dir.iterdir()] == ["config.json"]

    def test_failed_replace_keeps_original(self, cfg_dir: Path):
        path = cfg_dir / "config.json"
        path.write_text('{"old": true}')
        with (
            patch("spectator_mcp.config.writer.os.replace", side_effect=OSError("disk full")),
            pytest.raises(ConfigWriteError, match="disk full"),
        ):
            write_config(path, {"new": True})
        assert json.loads(path.read_text()) == {"old": True}
        assert [p.name for p in cfg_dir.iterdir()] == ["config.json"]


class TestBackups:
    def test_missing_file_no_backup(self, cfg_dir: Path):
        assert backup_config(cfg_dir / "config.json") is None
        assert list(cfg_dir.iterdir()) == []

    def test_backup_copies_content(self, cfg_dir: Path):
        path = cfg_dir / "config.json"
        path.write_text('{"a": 1}')
        backup = backup_config(path)
        assert backup is not None
        assert backup.name.startswith("config.json.backup.")
        assert backup.name.rsplit(".", 1)[-1].isdigit()
        assert backup.read_text() == '{"a": 1}'

    def test_same_millisecond_backups_are_distinct(self, cfg_dir: Path):
        path = cfg_dir / "config.json"
        path.write_text("{}")
        with patch(
            "spectator_mcp.config.writer.time.time_ns", return_value=1_700_000_000_000_000_000
        ):
            first = backup_config(path)
            second = backup_config(path)
        assert first != second
        assert list_backups(path) == [first, second]


# ═══════════════════════════════════════════════════════════════
# Registry merge
# ═══════════════════════════════════════════════════════════════


class TestUpsertEntry:
    def test_into_empty_document(self):
        result = upsert_entry({}, "spectator", ENTRY)
        assert result.document == {"mcpServers": {"spectator": ENTRY.to_dict()}}
        assert result.was_update is False
        assert result.had_other_servers is False

    def test_preserves_siblings_and_unknown_keys(self):
        document = {
            "theme": "dark",
            "mcpServers": {"other-tool": {"command": "node", "args": ["x.js"]}},
        }
        result = upsert_entry(document, "spectator", ENTRY)
        assert result.document["theme"] == "dark"
        assert result.document["mcpServers"]["other-tool"] == {"command": "node", "args": ["x.js"]}
        assert result.had_other_servers is True

    def test_overwrites_existing_entry(self):
        document = {"mcpServers": {"spectator": {"command": "old", "custom": True}}}
        result = upsert_entry(document, "spectator", ENTRY)
        assert result.document["mcpServers"]["spectator"] == ENTRY.to_dict()
        assert result.was_update is True
        assert result.had_other_servers is False

    def test_does_not_mutate_input(self):
        document = {"mcpServers": {"other": {"command": "x"}}}
        upsert_entry(document, "spectator", ENTRY)
        assert document == {"mcpServers": {"other": {"command": "x"}}}

    def test_accepts_plain_dict(self):
        result = upsert_entry({}, "s", {"command": "npx"})
        assert result.document == {"mcpServers": {"s": {"command": "npx"}}}

    def test_env_omitted_when_empty(self):
        result = upsert_entry({}, "s", ServerEntry(command="npx"))
        assert "env" not in result.document["mcpServers"]["s"]


class TestRemoveEntry:
    def test_absent_entry(self):
        document = {"mcpServers": {"other": {}}}
        result = remove_entry(document, "spectator")
        assert result.removed is False
        assert result.document == document

    def test_removes_only_named(self):
        document = {"theme": "dark", "mcpServers": {"spectator": {}, "other": {"a": 1}}}
        result = remove_entry(document, "spectator")
        assert result.removed is True
        assert result.document == {"theme": "dark", "mcpServers": {"other": {"a": 1}}}

    def test_round_trip_restores_document(self):
        original = {"theme": "dark", "mcpServers": {"other": {"command": "x"}}}
        added = upsert_entry(original, "spectator", ENTRY).document
        assert remove_entry(added, "spectator").document == original

    def test_round_trip_without_registry(self):
        original = {"theme": "dark"}
        added = upsert_entry(original, "spectator", ENTRY).document
        assert remove_entry(added, "spectator").document == original

    def test_does_not_mutate_input(self):
        document = {"mcpServers": {"spectator": {}}}
        remove_entry(document, "spectator")
        assert document == {"mcpServers": {"spectator": {}}}
