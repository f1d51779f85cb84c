"""
Student Service — one handle per session tying the core to storage.

Holds the profile, a MoodTracker, a WorkloadManager and the analyzer/report
built on top of them, and keeps the data files in step with every change.
Nothing here is global: tests can open as many independent sessions as they
like, each on its own data directory.
"""

from __future__ import annotations

import copy
import logging
from datetime import date, datetime
from pathlib import Path
from typing import Callable, Optional

from burnout_monitor.data.models import MoodLog, Task, User
from burnout_monitor.data.storage import FileStorage, StorageIOError
from burnout_monitor.services.burnout_analyzer import ANALYSIS_DAYS, BurnoutAnalyzer
from burnout_monitor.services.mood_tracker import MoodTracker
from burnout_monitor.services.report_generator import (UPCOMING_DAYS, UPCOMING_LIMIT,
                                                       ReportGenerator)
from burnout_monitor.services.workload_manager import WorkloadManager

logger = logging.getLogger(__name__)


class StudentService:
    """
    Session facade used by the presentation layer.

    Write methods return True when the change reached disk. On a storage
    failure the in-memory change is kept, the error is logged and stored in
    `last_error`, and False is returned so the caller can tell the user.
    """

    def __init__(
        self,
        storage: FileStorage,
        now: Callable[[], datetime] = datetime.now,
        today: Callable[[], date] = date.today,
        analysis_days: int = ANALYSIS_DAYS,
        upcoming_days: int = UPCOMING_DAYS,
        upcoming_limit: int = UPCOMING_LIMIT,
    ) -> None:
        self.storage = storage
        self.profile: Optional[User] = None
        self.mood_tracker = MoodTracker()
        self.workload_manager = WorkloadManager(today=today)
        self.analyzer = BurnoutAnalyzer(
            self.mood_tracker, self.workload_manager, now=now, analysis_days=analysis_days
        )
        self.reports = ReportGenerator(
            self.mood_tracker, self.analyzer, self.workload_manager,
            upcoming_days=upcoming_days, upcoming_limit=upcoming_limit,
        )
        self.last_error: Optional[StorageIOError] = None

    @classmethod
    def open(cls, data_dir: Path, **kwargs) -> "StudentService":
        """Create a session on `data_dir` and load whatever is stored there."""
        service = cls(FileStorage(data_dir), **kwargs)
        service.load()
        return service

    # ── Loading ─────────────────────────────────────────────────────────────

    def load(self) -> bool:
        """Load profile, mood logs and tasks. A failed file loads as empty."""
        ok = True
        self.last_error = None

        try:
            self.profile = self.storage.load_user()
        except StorageIOError as e:
            self._record_error("load user profile", e)
            self.profile = None
            ok = False

        try:
            self.mood_tracker.replace_all(self.storage.load_mood_logs())
        except StorageIOError as e:
            self._record_error("load mood logs", e)
            self.mood_tracker.replace_all([])
            ok = False

        try:
            self.workload_manager.replace_all(self.storage.load_tasks())
        except StorageIOError as e:
            self._record_error("load tasks", e)
            self.workload_manager.replace_all([])
            ok = False

        logger.info("Session loaded: profile=%s, %d mood log(s), %d task(s)",
                    "yes" if self.profile else "no",
                    self.mood_tracker.count(), self.workload_manager.total_count())
        return ok

    # ── Profile ─────────────────────────────────────────────────────────────

    def set_profile(self, user: User) -> bool:
        """Replace the (single) profile."""
        self.profile = copy.copy(user)
        return self._persist("save user profile", lambda: self.storage.save_user(user))

    def get_profile(self) -> Optional[User]:
        return copy.copy(self.profile) if self.profile else None

    # ── Mood ────────────────────────────────────────────────────────────────

    def log_mood(self, log: MoodLog) -> bool:
        self.mood_tracker.add(log)
        return self._persist("append mood log", lambda: self.storage.append_mood_log(log))

    # ── Tasks ───────────────────────────────────────────────────────────────

    def add_task(self, task: Task) -> bool:
        self.workload_manager.add(task)
        stored = self.workload_manager.by_id(task.entry_id)
        return self._persist("append task", lambda: self.storage.append_task(stored))

    def update_task(self, task: Task) -> bool:
        """False if the id is unknown or the rewrite failed."""
        if not self.workload_manager.update(task):
            return False
        return self.save_tasks()

    def update_task_status(self, task_id: str, status: str) -> bool:
        if not self.workload_manager.update_status(task_id, status):
            return False
        return self.save_tasks()

    def remove_task(self, task_id: str) -> bool:
        if not self.workload_manager.remove(task_id):
            return False
        return self.save_tasks()

    # ── Full saves / admin ──────────────────────────────────────────────────

    def save_tasks(self) -> bool:
        return self._persist(
            "save tasks", lambda: self.storage.save_tasks(self.workload_manager.all())
        )

    def save_all(self) -> bool:
        ok = True
        if self.profile is not None:
            ok = self._persist("save user profile",
                               lambda: self.storage.save_user(self.profile)) and ok
        ok = self._persist("save mood logs",
                           lambda: self.storage.save_mood_logs(self.mood_tracker.all())) and ok
        return self.save_tasks() and ok

    def backup(self) -> bool:
        return self._persist("create backup", self.storage.create_backup)

    def delete_all_data(self) -> bool:
        """Wipe the data files and clear the in-memory session."""
        self.profile = None
        self.mood_tracker.replace_all([])
        self.workload_manager.replace_all([])
        return self._persist("delete data", self.storage.delete_all_data)

    # ── Reports ─────────────────────────────────────────────────────────────

    def weekly_report(self) -> str:
        return self.reports.generate_weekly_report()

    # ── Helpers ─────────────────────────────────────────────────────────────

    def _persist(self, action: str, write: Callable[[], object]) -> bool:
        try:
            write()
        except StorageIOError as e:
            self._record_error(action, e)
            return False
        return True

    def _record_error(self, action: str, error: StorageIOError) -> None:
        logger.error("Could not %s: %s", action, error)
        self.last_error = error


# ---------------------------------------------------------------------------
# Explanation
# ---------------------------------------------------------------------------
# What this file does:
#   The one object a UI needs: it owns this session's profile, mood
#   collection and task collection, and writes every change to disk.
#
# Write strategy:
#   - New mood log / new task: append one line (fast path).
#   - Task update / status change / removal: full atomic rewrite of tasks.txt
#     in sorted order.
#   - Profile: the single-line user file is rewritten.
#
# Error handling:
#   Validation errors (bad mood level, empty task name) happen before a call
#   gets here and propagate to the caller. "Not found" comes back as False.
#   Storage errors are logged, kept in last_error and reported as False; the
#   in-memory session keeps working.
