"""
Mood Tracker — the in-memory collection of mood/stress check-ins.

Owns the MoodLog list exclusively. Every query hands back copies so callers
can never change the stored entries behind the tracker's back.
"""

from __future__ import annotations

import copy
import logging
from datetime import datetime
from typing import Iterable, List, Optional

import numpy as np

from burnout_monitor.data.models import MoodLog

logger = logging.getLogger(__name__)


class MoodTracker:
    """Collection of MoodLogs with range queries and aggregates."""

    def __init__(self, logs: Optional[Iterable[MoodLog]] = None) -> None:
        self._logs: List[MoodLog] = [copy.copy(log) for log in logs or []]

    # ── Collection ──────────────────────────────────────────────────────────

    def add(self, log: MoodLog) -> None:
        self._logs.append(copy.copy(log))
        logger.debug("Mood log %s added (mood=%d, stress=%d)",
                     log.entry_id, log.mood_level, log.stress_level)

    def all(self) -> List[MoodLog]:
        return [copy.copy(log) for log in self._logs]

    def replace_all(self, logs: Iterable[MoodLog]) -> None:
        self._logs = [copy.copy(log) for log in logs]

    def count(self) -> int:
        return len(self._logs)

    # ── Queries ─────────────────────────────────────────────────────────────

    def in_range(self, start: datetime, end: datetime) -> List[MoodLog]:
        """Logs with start <= timestamp <= end, oldest first."""
        return [copy.copy(log) for log in self._chronological()
                if start <= log.timestamp <= end]

    def recent(self, n: int) -> List[MoodLog]:
        """The n latest logs, oldest first."""
        if n <= 0:
            return []
        return [copy.copy(log) for log in self._chronological()[-n:]]

    def latest(self) -> Optional[MoodLog]:
        logs = self.recent(1)
        return logs[0] if logs else None

    # ── Aggregates ──────────────────────────────────────────────────────────

    def average_mood(self, start: Optional[datetime] = None,
                     end: Optional[datetime] = None) -> float:
        """Mean mood over [start, end] (whole collection if unbounded); 0.0 if empty."""
        return self._mean([log.mood_level for log in self._select(start, end)])

    def average_stress(self, start: Optional[datetime] = None,
                       end: Optional[datetime] = None) -> float:
        return self._mean([log.stress_level for log in self._select(start, end)])

    def highest_mood(self) -> int:
        return max((log.mood_level for log in self._logs), default=0)

    def lowest_mood(self) -> int:
        return min((log.mood_level for log in self._logs), default=0)

    def highest_stress(self) -> int:
        return max((log.stress_level for log in self._logs), default=0)

    def lowest_stress(self) -> int:
        return min((log.stress_level for log in self._logs), default=0)

    # ── Helpers ─────────────────────────────────────────────────────────────

    def _chronological(self) -> List[MoodLog]:
        return sorted(self._logs, key=lambda log: log.timestamp)

    def _select(self, start: Optional[datetime], end: Optional[datetime]) -> List[MoodLog]:
        return [log for log in self._logs
                if (start is None or log.timestamp >= start)
                and (end is None or log.timestamp <= end)]

    @staticmethod
    def _mean(values: List[int]) -> float:
        if not values:
            return 0.0
        return float(np.mean(values))
