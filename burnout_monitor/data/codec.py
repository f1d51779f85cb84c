"""
Line codec — turns records into single `|`-delimited text lines and back.

One record per line, fields separated by `|`. Free-text fields are escaped so
they can never break the line structure:
    literal `|`      → `&#124;`
    literal newline  → `\\n` (backslash + n)
    literal CR       → `\\r` (backslash + r)
"""

from __future__ import annotations

from datetime import date, datetime
from typing import List, Optional

from .models import BurnoutMonitorError, MoodLog, Task, User, ValidationError

SEPARATOR = "|"
PIPE_ESCAPE = "&#124;"
NEWLINE_ESCAPE = "\\n"
CR_ESCAPE = "\\r"

USER_FIELDS = 5
MOOD_FIELDS = 6
TASK_FIELDS = 9


class MalformedRecordError(BurnoutMonitorError, ValueError):
    """A persisted line could not be decoded."""


def escape(text: Optional[str]) -> str:
    if not text:
        return ""
    return (text.replace(SEPARATOR, PIPE_ESCAPE).replace("\n", NEWLINE_ESCAPE)
            .replace("\r", CR_ESCAPE))


def unescape(text: str) -> str:
    return (text.replace(PIPE_ESCAPE, SEPARATOR).replace(NEWLINE_ESCAPE, "\n")
            .replace(CR_ESCAPE, "\r"))


def _strip_terminator(line: str) -> str:
    """Drop a single LF or CRLF line terminator, nothing else."""
    if line.endswith("\r\n"):
        return line[:-2]
    if line.endswith("\n"):
        return line[:-1]
    return line


def _split(line: str, expected: int, kind: str) -> List[str]:
    parts = _strip_terminator(line).split(SEPARATOR, expected - 1)
    if len(parts) != expected:
        raise MalformedRecordError(
            f"Invalid {kind} format: expected {expected} fields, got {len(parts)}"
        )
    return parts


def _check_tag(parts: List[str], tag: str, kind: str) -> None:
    if parts[1] != tag:
        raise MalformedRecordError(f"Invalid {kind} format: bad tag {parts[1]!r}")


def _parse_int(value: str, name: str) -> int:
    try:
        return int(value)
    except ValueError as e:
        raise MalformedRecordError(f"{name} is not an integer: {value!r}") from e


def _parse_timestamp(value: str) -> datetime:
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError as e:
        raise MalformedRecordError(f"Bad timestamp: {value!r}") from e
    if parsed.tzinfo is not None:
        raise MalformedRecordError(f"Timestamp must be local time, got {value!r}")
    return parsed


def _parse_date(value: str) -> Optional[date]:
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise MalformedRecordError(f"Bad due date: {value!r}") from e


# ── User ────────────────────────────────────────────────────────────────────

def encode_user(user: User) -> str:
    return SEPARATOR.join([
        user.student_id,
        escape(user.full_name),
        user.email,
        str(user.age),
        escape(user.course),
    ])


def decode_user(line: str) -> User:
    parts = _strip_terminator(line).split(SEPARATOR)
    if len(parts) != USER_FIELDS:
        raise MalformedRecordError(
            f"Invalid user data format: expected {USER_FIELDS} fields, got {len(parts)}"
        )
    try:
        return User(
            student_id=parts[0],
            full_name=unescape(parts[1]),
            email=parts[2],
            age=_parse_int(parts[3], "age"),
            course=unescape(parts[4]),
        )
    except ValidationError as e:
        raise MalformedRecordError(str(e)) from e


# ── MoodLog ─────────────────────────────────────────────────────────────────

def encode_mood_log(log: MoodLog) -> str:
    return SEPARATOR.join([
        log.entry_id,
        MoodLog.log_type,
        log.timestamp.isoformat(),
        str(log.mood_level),
        str(log.stress_level),
        escape(log.notes),
    ])


def decode_mood_log(line: str) -> MoodLog:
    parts = _split(line, MOOD_FIELDS, "mood log")
    _check_tag(parts, MoodLog.log_type, "mood log")
    try:
        return MoodLog(
            entry_id=parts[0],
            timestamp=_parse_timestamp(parts[2]),
            mood_level=_parse_int(parts[3], "mood level"),
            stress_level=_parse_int(parts[4], "stress level"),
            notes=unescape(parts[5]),
        )
    except ValidationError as e:
        raise MalformedRecordError(str(e)) from e


# ── Task ────────────────────────────────────────────────────────────────────

def encode_task(task: Task) -> str:
    return SEPARATOR.join([
        task.entry_id,
        Task.log_type,
        task.timestamp.isoformat(),
        escape(task.task_name),
        escape(task.description),
        task.due_date.isoformat() if task.due_date else "",
        task.priority or "",
        task.status,
        escape(task.notes),
    ])


def decode_task(line: str) -> Task:
    parts = _split(line, TASK_FIELDS, "task")
    _check_tag(parts, Task.log_type, "task")
    try:
        return Task(
            entry_id=parts[0],
            timestamp=_parse_timestamp(parts[2]),
            task_name=unescape(parts[3]),
            description=unescape(parts[4]),
            due_date=_parse_date(parts[5]),
            priority=parts[6] or None,
            status=parts[7],
            notes=unescape(parts[8]),
        )
    except ValidationError as e:
        raise MalformedRecordError(str(e)) from e


# ---------------------------------------------------------------------------
# Explanation
# ---------------------------------------------------------------------------
# What this file does:
#   The bit-exact text contract for the three data files. Pure functions,
#   no file access: FileStorage calls these per line.
#
# Line layouts:
#   user:  studentId|fullName|email|age|course
#   mood:  entryId|MOOD|isoTimestamp|mood|stress|notes
#   task:  entryId|TASK|isoTimestamp|name|description|dueDate|priority|status|notes
#
# Error handling:
#   Any decode problem (field count, tag, number, date, validation) becomes a
#   MalformedRecordError, so the caller only has one thing to catch when it
#   wants to skip a bad line and keep loading.
