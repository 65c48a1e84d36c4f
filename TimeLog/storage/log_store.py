"""
Append-only day log storage.

One JSON array of entries per calendar date, plus one timesheet object per
date. Every write replaces the whole file: the new content goes to a temp
file in the same directory which is then renamed over the target, so a
crash mid-write leaves the previous file intact.

Appends are serialised per path inside this process. Two processes appending
to the same day file can still race (last writer wins).
"""
from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from datetime import date
from pathlib import Path
from typing import Dict, List, Union

from pydantic import TypeAdapter, ValidationError

from TimeLog.errors import LogParseError, StorageError
from TimeLog.models import LogEntry, Timesheet

log = logging.getLogger(__name__)

PathLike = Union[str, Path]

_entries_adapter = TypeAdapter(List[LogEntry])

_path_locks: Dict[Path, threading.Lock] = {}
_path_locks_guard = threading.Lock()


def _lock_for(path: Path) -> threading.Lock:
    key = path.resolve()
    with _path_locks_guard:
        lock = _path_locks.get(key)
        if lock is None:
            lock = _path_locks[key] = threading.Lock()
        return lock


def day_log_path(workspace_root: PathLike, logs_path: PathLike, day: date) -> Path:
    """e.g. <workspace>/.project-logs/2026-02-28.logs.json"""
    return Path(workspace_root) / logs_path / f"{day.isoformat()}.logs.json"


def timesheet_path(workspace_root: PathLike, logs_path: PathLike, day: date) -> Path:
    return Path(workspace_root) / logs_path / f"{day.isoformat()}.timesheet.json"


def log_exists(path: PathLike) -> bool:
    return Path(path).exists()


def _atomic_write_text(path: Path, text: str) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(text)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise
    except OSError as e:
        log.error(f"Failed to write {path}: {e}")
        raise StorageError(f"Failed to write {path}: {e}", path) from e


def read_log(path: PathLike) -> List[LogEntry]:
    """
    Read every entry of a day file, in append order.

    A missing or blank file is an empty log. Content that exists but is not a
    JSON array of valid entries raises LogParseError; it is never repaired.
    """
    path = Path(path)
    if not path.exists():
        return []
    try:
        raw = path.read_text(encoding="utf-8").strip()
    except OSError as e:
        raise StorageError(f"Failed to read log file {path}: {e}", path) from e
    if not raw:
        return []

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise LogParseError(f"Failed to parse log file {path}: {e}", path) from e
    if not isinstance(data, list):
        raise LogParseError(f"Log file {path} does not hold a JSON array (got {type(data).__name__})", path)
    try:
        return _entries_adapter.validate_python(data)
    except ValidationError as e:
        raise LogParseError(f"Log file {path} holds invalid entries: {e}", path) from e


def write_log(path: PathLike, entries: List[LogEntry]) -> None:
    """Replace the day file with ``entries``, formatted for humans."""
    path = Path(path)
    payload = [entry.to_json_dict() for entry in entries]
    _atomic_write_text(path, json.dumps(payload, indent=2, ensure_ascii=False))
    log.debug(f"Wrote {len(entries)} entries to {path}")


def append_entry(path: PathLike, entry: LogEntry) -> List[LogEntry]:
    """Read the day file, add ``entry`` at the end and write it back.

    Timestamps never go backwards within a file: an entry older than the
    current last one raises StorageError. Returns the full list as written.
    """
    path = Path(path)
    with _lock_for(path):
        entries = read_log(path)
        if entries and entry.timestamp < entries[-1].timestamp:
            raise StorageError(
                f"Entry at {entry.timestamp.isoformat()} is older than the last entry in {path} "
                f"({entries[-1].timestamp.isoformat()}); day files are kept in append order.",
                path,
            )
        entries.append(entry)
        write_log(path, entries)
    log.info(f"Appended entry #{len(entries)} to {path}")
    return entries


def write_timesheet(path: PathLike, timesheet: Timesheet) -> None:
    """Overwrite the timesheet file for a day. No merge with a previous one."""
    path = Path(path)
    _atomic_write_text(path, timesheet.model_dump_json(indent=2))
    log.info(f"Saved timesheet for {timesheet.date} to {path}")


def read_timesheet(path: PathLike) -> Timesheet:
    path = Path(path)
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise StorageError(f"Failed to read timesheet {path}: {e}", path) from e
    try:
        return Timesheet.model_validate_json(raw)
    except ValidationError as e:
        raise LogParseError(f"Timesheet file {path} is invalid: {e}", path) from e
