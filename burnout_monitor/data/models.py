"""
Data models for the Student Burnout Monitor.

Plain dataclasses for the three persisted record kinds. MoodLog and Task share
the same entry shape (entry_id, timestamp, notes) so the rest of the app can
treat them uniformly, but they do not share any state.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import ClassVar, Optional


class BurnoutMonitorError(Exception):
    """Base class for every error raised by the core."""


class ValidationError(BurnoutMonitorError, ValueError):
    """A record was constructed or mutated with an invalid value."""


MIN_LEVEL = 1
MAX_LEVEL = 10


class TaskPriority:
    """Canonical priority labels, as written to disk."""
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"

    ALL = (HIGH, MEDIUM, LOW)
    WEIGHTS = {HIGH: 3, MEDIUM: 2, LOW: 1}


class TaskStatus:
    """Canonical status labels, as written to disk."""
    PENDING = "Pending"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"
    OVERDUE = "Overdue"
    CHECKLIST = "Checklist"  # legacy label, exempt from the overdue rule

    ALL = (PENDING, IN_PROGRESS, COMPLETED, OVERDUE, CHECKLIST)


def generate_entry_id() -> str:
    return uuid.uuid4().hex[:8].upper()


def _canonical(value: Optional[str], choices: tuple, label: str,
               allow_none: bool = False) -> Optional[str]:
    """Match value case-insensitively against choices, return canonical form."""
    if value is None or (allow_none and not str(value).strip()):
        if allow_none:
            return None
        raise ValidationError(f"{label} is required")
    for choice in choices:
        if str(value).strip().lower() == choice.lower():
            return choice
    raise ValidationError(f"Unknown {label}: {value!r}")


def _check_level(name: str, value) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{name} must be an integer, got {value!r}")
    if value < MIN_LEVEL or value > MAX_LEVEL:
        raise ValidationError(
            f"{name} must be between {MIN_LEVEL} and {MAX_LEVEL}, got {value}"
        )


class _EntryIdGuard:
    """Refuses to reassign entry_id once it has been set."""

    def __setattr__(self, name, value) -> None:
        if name == "entry_id" and "entry_id" in self.__dict__:
            raise AttributeError("entry_id cannot be reassigned")
        super().__setattr__(name, value)


@dataclass
class MoodLog(_EntryIdGuard):
    """One self-reported mood/stress check-in."""
    mood_level: int = 5
    stress_level: int = 5
    notes: str = ""
    timestamp: datetime = field(default_factory=datetime.now)
    entry_id: str = field(default_factory=generate_entry_id)

    log_type: ClassVar[str] = "MOOD"

    def __setattr__(self, name, value) -> None:
        if name in ("mood_level", "stress_level"):
            _check_level(name, value)
        super().__setattr__(name, value)


@dataclass
class Task(_EntryIdGuard):
    """An academic task or workload item."""
    task_name: str = ""
    description: str = ""
    due_date: Optional[date] = None
    priority: Optional[str] = TaskPriority.MEDIUM
    status: str = TaskStatus.PENDING
    notes: str = ""
    timestamp: datetime = field(default_factory=datetime.now)
    entry_id: str = field(default_factory=generate_entry_id)

    log_type: ClassVar[str] = "TASK"

    def __setattr__(self, name, value) -> None:
        if name == "task_name":
            if not isinstance(value, str) or not value.strip():
                raise ValidationError("Task name cannot be empty")
        elif name == "priority":
            value = _canonical(value, TaskPriority.ALL, "priority", allow_none=True)
        elif name == "status":
            value = _canonical(value, TaskStatus.ALL, "status")
        elif name == "due_date":
            if isinstance(value, datetime):
                value = value.date()
            elif value is not None and not isinstance(value, date):
                raise ValidationError(f"due_date must be a date or None, got {value!r}")
        super().__setattr__(name, value)

    @property
    def priority_weight(self) -> int:
        """High=3, Medium=2, Low=1, unset=0."""
        return TaskPriority.WEIGHTS.get(self.priority, 0)

    @property
    def is_completed(self) -> bool:
        return self.status == TaskStatus.COMPLETED

    def is_overdue(self, today: Optional[date] = None) -> bool:
        today = today or date.today()
        return (not self.is_completed
                and self.due_date is not None
                and self.due_date < today)


@dataclass
class User:
    """The (single) student profile."""
    student_id: str = ""
    full_name: str = ""
    email: str = ""
    age: int = 18
    course: str = ""

    def __post_init__(self) -> None:
        if not self.student_id or not self.student_id.strip():
            raise ValidationError("Student ID cannot be empty")
        for name in ("student_id", "email"):
            value = getattr(self, name)
            if "|" in value or "\n" in value:
                raise ValidationError(f"{name} may not contain '|' or newlines")
        if isinstance(self.age, bool) or not isinstance(self.age, int) or self.age <= 0:
            raise ValidationError(f"age must be a positive integer, got {self.age!r}")


# ---------------------------------------------------------------------------
# Explanation
# ---------------------------------------------------------------------------
# What this file does:
#   Defines the shape of every persisted record: MoodLog, Task and User.
#   Validation lives here so that nothing invalid can ever reach a
#   collection or a file.
#
# Key classes:
#   - MoodLog: mood and stress on a 1-10 scale. Checked on construction
#     AND on later assignment (the dataclass __init__ goes through
#     __setattr__ too).
#   - Task: priority/status are normalised to canonical casing ("in progress"
#     becomes "In Progress") because that is what the task file stores.
#     The name and due date are re-checked on every assignment as well.
#   - User: the singleton profile.
#   - TaskPriority / TaskStatus: the canonical labels written to disk.
#
# Data flow:
#   Caller builds MoodLog/Task → MoodTracker/WorkloadManager keep them in
#   memory → codec turns them into one text line → FileStorage writes it.
