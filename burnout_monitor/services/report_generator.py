"""
Report Generator — assembles the weekly text report.

The report always has the same sections in the same order; a section with
no data keeps its header and says so, so the structure is stable for any
input.
"""

from __future__ import annotations

import logging
import math
import os
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from burnout_monitor.data.models import MoodLog
from burnout_monitor.data.storage import StorageIOError
from burnout_monitor.services import recommendations
from burnout_monitor.services.burnout_analyzer import BurnoutAnalyzer, MAX_SCORE, RiskLevel
from burnout_monitor.services.mood_tracker import MoodTracker
from burnout_monitor.services.workload_manager import WorkloadManager

logger = logging.getLogger(__name__)

BAR_CELLS = 10
FILLED, EMPTY = "█", "░"
RULE = "═" * 63

NO_MOOD_ENTRIES = "No mood entries recorded during this period."
NO_STRESS_ENTRIES = "No stress entries recorded during this period."
NO_TASKS = "No tasks recorded."

UPCOMING_DAYS = 7
UPCOMING_LIMIT = 5

_RISK_BADGE = {RiskLevel.HIGH: "🔴", RiskLevel.MEDIUM: "🟡", RiskLevel.LOW: "🟢"}


def bar_chart(value: float) -> str:
    """10-cell bar with round(value) cells filled (half rounds up), clamped to 0..10."""
    filled = max(0, min(BAR_CELLS, int(math.floor(value + 0.5))))
    return "[" + FILLED * filled + EMPTY * (BAR_CELLS - filled) + "]"


def _section_header(title: str) -> List[str]:
    return [
        "┌" + "─" * 61 + "┐",
        "│" + title.center(61) + "│",
        "└" + "─" * 61 + "┘",
    ]


def mood_descriptor(mood: float) -> str:
    if mood >= 8:
        return "😄"
    if mood >= 6:
        return "😊"
    if mood >= 4:
        return "😐"
    if mood >= 2:
        return "😟"
    return "😢"


def stress_descriptor(stress: float) -> str:
    if stress >= 8:
        return "Very High"
    if stress >= 6:
        return "High"
    if stress >= 4:
        return "Moderate"
    if stress >= 2:
        return "Low"
    return "Minimal"


class ReportGenerator:
    """Builds the weekly report from the tracker, manager and analyzer."""

    def __init__(
        self,
        mood_tracker: MoodTracker,
        burnout_analyzer: BurnoutAnalyzer,
        workload_manager: Optional[WorkloadManager] = None,
        upcoming_days: int = UPCOMING_DAYS,
        upcoming_limit: int = UPCOMING_LIMIT,
    ) -> None:
        self.mood_tracker = mood_tracker
        self.burnout_analyzer = burnout_analyzer
        self.workload_manager = workload_manager
        self.upcoming_days = upcoming_days
        self.upcoming_limit = upcoming_limit

    # ── Whole report ────────────────────────────────────────────────────────

    def generate_weekly_report(self) -> str:
        start, end = self.burnout_analyzer.window()
        lines = [
            "╔══════════════════════════════════════════════════════════════╗",
            "║     STUDENT STRESS & MOOD MONITORING SYSTEM                  ║",
            "║           Weekly Summary Report                              ║",
            "╚══════════════════════════════════════════════════════════════╝",
            "",
            f"Report Generated: {end.strftime('%b %d, %Y %H:%M')}",
            f"Report Period: {start.strftime('%b %d, %Y')} to {end.strftime('%b %d, %Y')}",
            "",
        ]
        sections = [
            self.generate_mood_summary(start, end),
            self.generate_stress_summary(start, end),
            self.generate_task_summary(),
            self.generate_burnout_assessment(),
            self.generate_recommendations(),
        ]
        report = "\n".join(lines) + "\n" + "\n".join(sections)
        footer = [
            "",
            RULE,
            "Thank you for using Student Burnout Monitor!",
            RULE,
        ]
        return report + "\n".join(footer) + "\n"

    def save_report(self, path: Path) -> Path:
        """Write the weekly report to `path` (temp file + rename)."""
        path = Path(path)
        tmp = path.with_name(path.name + ".tmp")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp, "w", encoding="utf-8") as f:
                f.write(self.generate_weekly_report())
            os.replace(tmp, path)
        except OSError as e:
            logger.error("Error saving report to %s: %s", path, e)
            raise StorageIOError(f"Could not write report {path}: {e}") from e
        logger.info("Weekly report saved to %s", path)
        return path

    # ── Sections ────────────────────────────────────────────────────────────

    def generate_mood_summary(self, start: datetime, end: datetime) -> str:
        logs = self.mood_tracker.in_range(start, end)
        lines = _section_header("MOOD ANALYSIS")
        if not logs:
            lines.append("  " + NO_MOOD_ENTRIES)
            return _join(lines)

        avg = self.mood_tracker.average_mood(start, end)
        trend = "Declining" if self.burnout_analyzer.detect_mood_decline() else "✓ Stable/Improving"
        lines += [
            f"  Total Entries: {len(logs)}",
            f"  Average Mood: {avg:.1f}/10 {mood_descriptor(avg)}",
            f"  Highest Mood: {_max(logs, 'mood_level')}/10",
            f"  Lowest Mood: {_min(logs, 'mood_level')}/10",
            f"  Mood Trend: {trend}",
            f"  Mood Chart: {bar_chart(avg)}",
        ]
        return _join(lines)

    def generate_stress_summary(self, start: datetime, end: datetime) -> str:
        logs = self.mood_tracker.in_range(start, end)
        lines = _section_header("STRESS ANALYSIS")
        if not logs:
            lines.append("  " + NO_STRESS_ENTRIES)
            return _join(lines)

        avg = self.mood_tracker.average_stress(start, end)
        status = "Elevated" if self.burnout_analyzer.detect_high_stress() else "✓ Normal"
        lines += [
            f"  Total Entries: {len(logs)}",
            f"  Average Stress: {avg:.1f}/10 {stress_descriptor(avg)}",
            f"  Highest Stress: {_max(logs, 'stress_level')}/10",
            f"  Lowest Stress: {_min(logs, 'stress_level')}/10",
            f"  Stress Status: {status}",
            f"  Stress Chart: {bar_chart(avg)}",
        ]
        return _join(lines)

    def generate_task_summary(self) -> str:
        lines = _section_header("ACADEMIC WORKLOAD SUMMARY")
        wm = self.workload_manager
        if wm is None or wm.total_count() == 0:
            lines.append("  " + NO_TASKS)
            return _join(lines)

        overdue = len(wm.overdue())
        lines += [
            f"  Total Tasks: {wm.total_count()}",
            f"  Completed: {wm.completed_count()} ({wm.completion_rate():.1f}%)",
            f"  Pending: {wm.pending_count()}",
            f"  Overdue: {overdue} {'!' if overdue > 0 else '✓'}",
            f"  Workload Level: {self.burnout_analyzer.assess_workload()}",
        ]

        upcoming = wm.upcoming(self.upcoming_days)
        if upcoming:
            lines.append("")
            lines.append(f"  Upcoming Tasks (Next {self.upcoming_days} Days):")
            for task in upcoming[:self.upcoming_limit]:
                lines.append(
                    f"    • {task.task_name} - Due: {task.due_date.strftime('%b %d')} "
                    f"[{task.priority or 'None'}]"
                )
            if len(upcoming) > self.upcoming_limit:
                lines.append(f"    ... and {len(upcoming) - self.upcoming_limit} more")
        return _join(lines)

    def generate_burnout_assessment(self) -> str:
        risk = self.burnout_analyzer.analyze_burnout_risk()
        score = self.burnout_analyzer.calculate_burnout_score()
        lines = _section_header("BURNOUT RISK ASSESSMENT")
        lines += [
            f"  Overall Risk Level: {_RISK_BADGE.get(risk, '')} {risk}",
            f"  Burnout Score: {score}/{MAX_SCORE}",
            f"  Risk Chart: {bar_chart(score)}",
            "",
        ]
        warnings = [w for w in self.burnout_analyzer.generate_warnings()
                    if w and w != "RECOMMENDATIONS:"]
        if warnings:
            lines.append("  Warnings & Alerts:")
            lines += ["    " + w for w in warnings]
        return _join(lines)

    def generate_recommendations(self) -> str:
        advice = recommendations.advice_for(self.burnout_analyzer.analyze_burnout_risk())
        lines = _section_header("RECOMMENDATIONS")
        lines.append(f"  {advice.heading}")
        lines += ["    " + recommendations.BULLET + tip for tip in advice.report_tips]
        lines.append("")
        lines.append("  General Well-being Tips:")
        lines += ["    " + recommendations.BULLET + tip for tip in recommendations.GENERAL_TIPS]
        return _join(lines)


def _join(lines: List[str]) -> str:
    return "\n".join(lines) + "\n"


def _max(logs: List[MoodLog], attr: str) -> int:
    return max(getattr(log, attr) for log in logs)


def _min(logs: List[MoodLog], attr: str) -> int:
    return min(getattr(log, attr) for log in logs)
