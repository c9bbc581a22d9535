"""Config file writes, backups, and registry merge operations.

Invariants:
  1. Only the named entry is ever added, replaced, or deleted; sibling
     entries and unknown top-level keys round-trip unchanged.
  2. Writes are atomic: write to a unique temp file, then os.replace().
  3. Removal rewrites the remaining content; files are never deleted.
  4. upsert_entry/remove_entry never mutate the document they are given.
"""

from __future__ import annotations

import contextlib
import copy
import json
import logging
import os
import shutil
import tempfile
import time
from pathlib import Path

from spectator_mcp.config.reader import SERVERS_KEY, get_servers
from spectator_mcp.errors import ConfigWriteError
from spectator_mcp.models import RemoveEntryResult, ServerEntry, UpsertResult

logger = logging.getLogger(__name__)

BACKUP_INFIX = ".backup."


def write_config(config_path: Path | str, document: dict[str, object]) -> None:
    """Write a full config document, creating parent directories as needed.

    The serialized document is written in one piece to a temp file in the
    same directory and renamed over the target.
    """
    path = Path(config_path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise ConfigWriteError(f"Failed to create directory {path.parent}: {exc}") from exc

    content = json.dumps(document, indent=2, ensure_ascii=False) + "\n"

    fd = None
    tmp_path: str | None = None
    try:
        fd, tmp_path = tempfile.mkstemp(
            dir=str(path.parent),
            suffix=".tmp",
            prefix=f".{path.stem}_",
        )
        os.write(fd, content.encode("utf-8"))
        os.close(fd)
        fd = None
        os.replace(tmp_path, str(path))
        tmp_path = None
    except PermissionError as exc:
        raise ConfigWriteError(f"Permission denied writing to {path}: {exc}") from exc
    except OSError as exc:
        raise ConfigWriteError(f"Failed to write {path}: {exc}") from exc
    finally:
        if fd is not None:
            os.close(fd)
        if tmp_path is not None:
            with contextlib.suppress(OSError):
                os.unlink(tmp_path)

    logger.info("Wrote %s", path)


def backup_config(config_path: Path | str) -> Path | None:
    """Copy an existing config to ``<path>.backup.<epoch-ms>``.

    Returns the backup path, or None when there is nothing to back up.
    """
    path = Path(config_path)
    if not path.exists():
        return None

    stamp = time.time_ns() // 1_000_000
    backup = path.with_name(f"{path.name}{BACKUP_INFIX}{stamp}")
    while backup.exists():
        stamp += 1
        backup = path.with_name(f"{path.name}{BACKUP_INFIX}{stamp}")

    try:
        shutil.copy2(path, backup)
    except OSError as exc:
        raise ConfigWriteError(f"Failed to back up {path} to {backup}: {exc}") from exc

    logger.info("Backed up %s to %s", path, backup)
    return backup


def upsert_entry(
    document: dict[str, object],
    name: str,
    entry: ServerEntry | dict[str, object],
) -> UpsertResult:
    """Insert or fully replace the ``name`` entry in the server registry.

    The entry is owned by this tool: an existing entry is overwritten, not
    merged, so hand edits to it are lost.
    """
    servers = get_servers(document)
    was_update = name in servers
    had_other_servers = any(key != name for key in servers)

    updated = copy.deepcopy(document)
    new_servers = dict(updated.get(SERVERS_KEY) or {})
    new_servers[name] = entry.to_dict() if isinstance(entry, ServerEntry) else dict(entry)
    updated[SERVERS_KEY] = new_servers

    logger.debug(
        "Upserted %r (update=%s, other servers=%s)", name, was_update, had_other_servers
    )
    return UpsertResult(
        document=updated,
        was_update=was_update,
        had_other_servers=had_other_servers,
    )


def remove_entry(document: dict[str, object], name: str) -> RemoveEntryResult:
    """Delete ``name`` from the server registry if present.

    An emptied registry mapping is dropped so a document that had no
    servers before configuration returns to its original shape.
    """
    servers = get_servers(document)
    if name not in servers:
        return RemoveEntryResult(document=copy.deepcopy(document), removed=False)

    updated = copy.deepcopy(document)
    remaining = {key: value for key, value in updated[SERVERS_KEY].items() if key != name}
    if remaining:
        updated[SERVERS_KEY] = remaining
    else:
        del updated[SERVERS_KEY]

    logger.debug("Removed %r from server registry", name)
    return RemoveEntryResult(document=updated, removed=True)
