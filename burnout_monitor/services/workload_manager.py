"""
Workload Manager — the in-memory collection of academic tasks.

Handles CRUD, priority ordering, the automatic Overdue transition and the
workload intensity score used by the burnout analyzer.
"""

from __future__ import annotations

import copy
import logging
from datetime import date, timedelta
from typing import Callable, Iterable, List, Optional

from burnout_monitor.data.models import Task, TaskPriority, TaskStatus, ValidationError

logger = logging.getLogger(__name__)

# Urgency bonus by days until due
OVERDUE_BONUS = 5
VERY_URGENT_DAYS, VERY_URGENT_BONUS = 2, 4
URGENT_DAYS, URGENT_BONUS = 5, 2

# Statuses the overdue rule never touches
_FROZEN_STATUSES = (TaskStatus.COMPLETED, TaskStatus.OVERDUE, TaskStatus.CHECKLIST)


def _sort_key(task: Task):
    """High -> Medium -> Low (unset last), then earliest due date, undated last."""
    return (-task.priority_weight, task.due_date is None, task.due_date or date.max)


class WorkloadManager:
    """
    Owns the Task list.

    Statuses are refreshed (past-due tasks become Overdue) on every read and
    write pass, against the date returned by `today`.
    """

    def __init__(self, tasks: Optional[Iterable[Task]] = None,
                 today: Callable[[], date] = date.today) -> None:
        self._today = today
        self._tasks: List[Task] = [copy.copy(t) for t in tasks or []]
        self._refresh_overdue()

    # ── CRUD ────────────────────────────────────────────────────────────────

    def add(self, task: Task) -> None:
        if self._find(task.entry_id) is not None:
            raise ValidationError(f"A task with id {task.entry_id} already exists")
        self._tasks.append(copy.copy(task))
        self._refresh_overdue()
        logger.debug("Task %s added: %s", task.entry_id, task.task_name)

    def by_id(self, task_id: str) -> Optional[Task]:
        self._refresh_overdue()
        task = self._find(task_id)
        return copy.copy(task) if task else None

    def update(self, updated: Task) -> bool:
        """Copy the editable fields onto the stored task. False if the id is unknown."""
        existing = self._find(updated.entry_id)
        if existing is None:
            return False
        existing.task_name = updated.task_name
        existing.description = updated.description
        existing.due_date = updated.due_date
        existing.priority = updated.priority
        existing.status = updated.status
        self._refresh_overdue()
        return True

    def update_status(self, task_id: str, status: str) -> bool:
        existing = self._find(task_id)
        if existing is None:
            return False
        existing.status = status
        self._refresh_overdue()
        return True

    def remove(self, task_id: str) -> bool:
        before = len(self._tasks)
        self._tasks = [t for t in self._tasks if t.entry_id != task_id]
        removed = len(self._tasks) != before
        if removed:
            self._refresh_overdue()
            logger.debug("Task %s removed", task_id)
        return removed

    def replace_all(self, tasks: Iterable[Task]) -> None:
        self._tasks = [copy.copy(t) for t in tasks]
        self._refresh_overdue()

    # ── Queries ─────────────────────────────────────────────────────────────

    def all(self) -> List[Task]:
        """All tasks, highest priority first, then by due date."""
        return self._sorted_copies(self._tasks)

    def by_priority(self, priority: str) -> List[Task]:
        wanted = priority.strip().lower()
        return self._sorted_copies(
            t for t in self._tasks if (t.priority or "").lower() == wanted
        )

    def by_status(self, status: str) -> List[Task]:
        wanted = status.strip().lower()
        return self._sorted_copies(t for t in self._tasks if t.status.lower() == wanted)

    def upcoming(self, days: int) -> List[Task]:
        """Open tasks due between today and today + days (inclusive)."""
        today = self._today()
        end = today + timedelta(days=days)
        return self._sorted_copies(
            t for t in self._tasks
            if not t.is_completed and t.due_date is not None
            and today <= t.due_date <= end
        )

    def overdue(self) -> List[Task]:
        return self._sorted_copies(
            t for t in self._tasks if t.status == TaskStatus.OVERDUE
        )

    # ── Metrics ─────────────────────────────────────────────────────────────

    def workload_intensity(self) -> int:
        """
        Integer load score over every non-Completed task:
        1 base + priority weight (High=3, Medium=2, Low=1, unset=1)
        + urgency (overdue +5, <=2 days +4, <=5 days +2).
        """
        today = self._today()
        score = 0
        for task in self._tasks:
            if task.is_completed:
                continue
            score += 1
            score += TaskPriority.WEIGHTS.get(task.priority, 1)
            if task.due_date is None:
                continue
            days_until_due = (task.due_date - today).days
            if days_until_due < 0:
                score += OVERDUE_BONUS
            elif days_until_due <= VERY_URGENT_DAYS:
                score += VERY_URGENT_BONUS
            elif days_until_due <= URGENT_DAYS:
                score += URGENT_BONUS
        return score

    def completion_rate(self) -> float:
        """Percentage of tasks completed, 0.0 when there are none."""
        if not self._tasks:
            return 0.0
        return self.completed_count() * 100.0 / len(self._tasks)

    def total_count(self) -> int:
        return len(self._tasks)

    def completed_count(self) -> int:
        return sum(1 for t in self._tasks if t.is_completed)

    def pending_count(self) -> int:
        return sum(1 for t in self._tasks if not t.is_completed)

    # ── Helpers ─────────────────────────────────────────────────────────────

    def _find(self, task_id: str) -> Optional[Task]:
        if task_id is None:
            return None
        for task in self._tasks:
            if task.entry_id == task_id:
                return task
        return None

    def _sorted_copies(self, tasks: Iterable[Task]) -> List[Task]:
        self._refresh_overdue()
        return [copy.copy(t) for t in sorted(tasks, key=_sort_key)]

    def _refresh_overdue(self) -> None:
        """Promote past-due open tasks to Overdue. Never reverts."""
        today = self._today()
        for task in self._tasks:
            if task.status in _FROZEN_STATUSES:
                continue
            if task.due_date is not None and task.due_date < today:
                task.status = TaskStatus.OVERDUE
                logger.info("Task %s (%s) is now overdue", task.entry_id, task.task_name)


# ---------------------------------------------------------------------------
# Explanation
# ---------------------------------------------------------------------------
# What this file does:
#   Keeps the task list and answers every "what's on my plate?" question:
#   sorted lists, upcoming and overdue tasks, completion rate, intensity.
#
# Key pieces:
#   - _sort_key: priority weight descending, then due date ascending,
#     tasks without a due date last in their tier.
#   - _refresh_overdue(): the Overdue transition. It runs on every read and
#     write, so a task's status can change between two calls made on
#     different days with no other edit.
#   - today is injected (defaults to date.today) so tests can pin the date.
#
# Data flow:
#   StudentService.add_task() → WorkloadManager.add() → FileStorage.append_task()
#   BurnoutAnalyzer → workload_intensity() / overdue()
