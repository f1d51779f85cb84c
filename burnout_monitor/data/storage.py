"""
Flat-file storage — one UTF-8 text file per record kind.

Single responsibility: own the data directory and the three files. Line
formats live in codec.py; FileStorage only reads, writes, appends and backs
up whole files.
"""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path
from typing import Callable, List, Optional, TypeVar

from . import codec
from .models import BurnoutMonitorError, MoodLog, Task, User

logger = logging.getLogger(__name__)

# Default data dir lives next to the repo root
DEFAULT_DATA_DIR = Path(__file__).resolve().parent.parent.parent / "data"

USER_FILE = "user_profile.txt"
MOOD_FILE = "mood_logs.txt"
TASK_FILE = "tasks.txt"
BACKUP_SUFFIX = ".backup"

T = TypeVar("T")


class StorageIOError(BurnoutMonitorError, OSError):
    """A data file could not be created, read or written."""


class FileStorage:
    """Reads and writes the user, mood and task files in one directory."""

    def __init__(self, data_dir: Optional[Path] = None) -> None:
        self.data_dir = Path(data_dir) if data_dir else DEFAULT_DATA_DIR
        self.user_path = self.data_dir / USER_FILE
        self.mood_path = self.data_dir / MOOD_FILE
        self.task_path = self.data_dir / TASK_FILE

    # ── User ────────────────────────────────────────────────────────────────

    def save_user(self, user: User) -> None:
        self._write_lines(self.user_path, [codec.encode_user(user)])
        logger.info("User profile saved (%s).", user.student_id)

    def load_user(self) -> Optional[User]:
        """Return the stored profile, or None if missing or unreadable."""
        if not self.user_path.exists():
            return None
        lines = [ln for ln in self._read_lines(self.user_path) if ln.strip()]
        if not lines:
            return None
        try:
            return codec.decode_user(lines[0])
        except codec.MalformedRecordError as e:
            logger.warning("Error parsing user profile: %s", e)
            return None

    def user_profile_exists(self) -> bool:
        return self.user_path.exists()

    # ── Mood logs ───────────────────────────────────────────────────────────

    def save_mood_logs(self, logs: List[MoodLog]) -> None:
        self._write_lines(self.mood_path, [codec.encode_mood_log(log) for log in logs])
        logger.info("%d mood log(s) saved.", len(logs))

    def load_mood_logs(self) -> List[MoodLog]:
        logs = self._load_records(self.mood_path, codec.decode_mood_log, "mood log")
        logger.info("%d mood log(s) loaded.", len(logs))
        return logs

    def append_mood_log(self, log: MoodLog) -> None:
        self._append_line(self.mood_path, codec.encode_mood_log(log))

    # ── Tasks ───────────────────────────────────────────────────────────────

    def save_tasks(self, tasks: List[Task]) -> None:
        self._write_lines(self.task_path, [codec.encode_task(t) for t in tasks])
        logger.info("%d task(s) saved.", len(tasks))

    def load_tasks(self) -> List[Task]:
        tasks = self._load_records(self.task_path, codec.decode_task, "task")
        logger.info("%d task(s) loaded.", len(tasks))
        return tasks

    def append_task(self, task: Task) -> None:
        self._append_line(self.task_path, codec.encode_task(task))

    # ── Backup / admin ──────────────────────────────────────────────────────

    def create_backup(self) -> List[Path]:
        """Copy every existing data file to <name>.backup. Returns the copies."""
        copies: List[Path] = []
        for path in (self.user_path, self.mood_path, self.task_path):
            if not path.exists():
                continue
            target = path.with_name(path.name + BACKUP_SUFFIX)
            try:
                shutil.copyfile(path, target)
            except OSError as e:
                raise StorageIOError(f"Could not back up {path}: {e}") from e
            copies.append(target)
        logger.info("Backup created (%d file(s)).", len(copies))
        return copies

    def delete_all_data(self) -> None:
        """Remove all three data files. Backups are left alone."""
        for path in (self.user_path, self.mood_path, self.task_path):
            try:
                path.unlink(missing_ok=True)
            except OSError as e:
                raise StorageIOError(f"Could not delete {path}: {e}") from e
        logger.warning("All data has been deleted from %s.", self.data_dir)

    # ── internal ────────────────────────────────────────────────────────────

    def _ensure_dir(self) -> None:
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageIOError(f"Could not create data directory {self.data_dir}: {e}") from e

    def _load_records(self, path: Path, decode: Callable[[str], T], kind: str) -> List[T]:
        if not path.exists():
            return []
        records: List[T] = []
        for lineno, line in enumerate(self._read_lines(path), start=1):
            if not line.strip():
                continue
            try:
                records.append(decode(line))
            except codec.MalformedRecordError as e:
                logger.warning("Skipping invalid %s entry (%s:%d): %s",
                               kind, path.name, lineno, e)
        return records

    def _read_lines(self, path: Path) -> List[str]:
        # split on "\n" only, str.splitlines() also breaks on form feeds etc.
        try:
            with open(path, "r", encoding="utf-8", newline="") as f:
                return [ln[:-1] if ln.endswith("\r") else ln for ln in f.read().split("\n")]
        except (OSError, UnicodeDecodeError) as e:
            logger.error("Error reading %s: %s", path, e)
            raise StorageIOError(f"Could not read {path}: {e}") from e

    def _write_lines(self, path: Path, lines: List[str]) -> None:
        """
        Atomic rewrite:
        - write to temp file in same directory
        - flush + fsync
        - os.replace onto the target
        """
        self._ensure_dir()
        tmp = path.with_name(path.name + ".tmp")
        try:
            with open(tmp, "w", encoding="utf-8", newline="\n") as f:
                for line in lines:
                    f.write(line + "\n")
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp, path)
        except OSError as e:
            logger.error("Error writing %s: %s", path, e)
            try:
                tmp.unlink(missing_ok=True)
            except OSError:
                logger.debug("Could not remove temp file %s", tmp)
            raise StorageIOError(f"Could not write {path}: {e}") from e

    def _append_line(self, path: Path, line: str) -> None:
        self._ensure_dir()
        try:
            with open(path, "a", encoding="utf-8", newline="\n") as f:
                f.write(line + "\n")
        except OSError as e:
            logger.error("Error appending to %s: %s", path, e)
            raise StorageIOError(f"Could not append to {path}: {e}") from e


# ---------------------------------------------------------------------------
# Explanation
# ---------------------------------------------------------------------------
# What this file does:
#   Owns the on-disk layout: data/user_profile.txt, data/mood_logs.txt and
#   data/tasks.txt. Everything else talks to FileStorage, never to files.
#
# Write paths:
#   - append_*: the fast path for a brand-new record, one line added to the
#     end of the file, earlier lines untouched.
#   - save_*: full rewrite in collection order, done as temp file + fsync +
#     os.replace so the old file is either fully kept or fully replaced.
#
# Error handling:
#   - A bad line is skipped with a warning; the rest of the file still loads.
#   - Real I/O failures become StorageIOError and go back to the caller.
#
# Data flow:
#   StudentService → FileStorage.append_mood_log() → codec.encode_mood_log()
#   → one line on disk. Startup: load_* → codec.decode_* per line → lists.
