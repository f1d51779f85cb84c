"""
Burnout Analyzer — turns recent mood, stress and workload into a risk score.

Everything here is a pure function of the trailing analysis window that ends
"now" (recomputed on every call), the mood tracker and, when one is wired in,
the workload manager.

Score (0-10):
  stress avg   >= 8 → +3, >= 7 → +2, >= 6 → +1
  mood avg     <= 3 → +3, <= 4 → +2, <= 5 → +1   (only if the window has data)
  intensity    >= 25 → +3, >= 15 → +2, >= 10 → +1 (only with a workload source)
  last 3 logs all stress >= 7 → +2, else last 2 → +1
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Callable, List, Optional, Tuple

import numpy as np

from burnout_monitor.services import recommendations
from burnout_monitor.services.mood_tracker import MoodTracker
from burnout_monitor.services.workload_manager import WorkloadManager

logger = logging.getLogger(__name__)

ANALYSIS_DAYS = 7
MAX_SCORE = 10

HIGH_STRESS_THRESHOLD = 7.0
LOW_MOOD_THRESHOLD = 4.0
HIGH_WORKLOAD_THRESHOLD = 15
VERY_HIGH_WORKLOAD_THRESHOLD = 25
MODERATE_WORKLOAD_THRESHOLD = 10
LOW_WORKLOAD_THRESHOLD = 5

MOOD_DECLINE_SAMPLE = 7
MOOD_DECLINE_MIN_LOGS = 4
MOOD_DECLINE_DROP = 2.0

HIGH_RISK_SCORE = 8
MEDIUM_RISK_SCORE = 5


class RiskLevel:
    HIGH = recommendations.HIGH
    MEDIUM = recommendations.MEDIUM
    LOW = recommendations.LOW


def risk_level_for(score: int) -> str:
    if score >= HIGH_RISK_SCORE:
        return RiskLevel.HIGH
    if score >= MEDIUM_RISK_SCORE:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


class BurnoutAnalyzer:
    """Combines MoodTracker and (optionally) WorkloadManager into a risk assessment."""

    def __init__(
        self,
        mood_tracker: MoodTracker,
        workload_manager: Optional[WorkloadManager] = None,
        now: Callable[[], datetime] = datetime.now,
        analysis_days: int = ANALYSIS_DAYS,
    ) -> None:
        self.mood_tracker = mood_tracker
        self.workload_manager = workload_manager
        self._now = now
        self.analysis_days = analysis_days

    # ── Window ──────────────────────────────────────────────────────────────

    def window(self) -> Tuple[datetime, datetime]:
        """(start, end) of the trailing analysis window, ending now."""
        end = self._now()
        return end - timedelta(days=self.analysis_days), end

    # ── Score ───────────────────────────────────────────────────────────────

    def calculate_burnout_score(self) -> int:
        start, end = self.window()
        score = 0

        # Factor 1: sustained stress (0-3)
        avg_stress = self.mood_tracker.average_stress(start, end)
        if avg_stress >= 8.0:
            score += 3
        elif avg_stress >= HIGH_STRESS_THRESHOLD:
            score += 2
        elif avg_stress >= 6.0:
            score += 1

        # Factor 2: low mood (0-3); 0.0 means "no data", not "very low"
        if self.mood_tracker.in_range(start, end):
            avg_mood = self.mood_tracker.average_mood(start, end)
            if avg_mood <= 3.0:
                score += 3
            elif avg_mood <= LOW_MOOD_THRESHOLD:
                score += 2
            elif avg_mood <= 5.0:
                score += 1

        # Factor 3: workload intensity (0-3)
        if self.workload_manager is not None:
            intensity = self.workload_manager.workload_intensity()
            if intensity >= VERY_HIGH_WORKLOAD_THRESHOLD:
                score += 3
            elif intensity >= HIGH_WORKLOAD_THRESHOLD:
                score += 2
            elif intensity >= MODERATE_WORKLOAD_THRESHOLD:
                score += 1

        # Factor 4: consecutive high-stress entries (0-2)
        if self.detect_consecutive_high_stress(3):
            score += 2
        elif self.detect_consecutive_high_stress(2):
            score += 1

        return min(score, MAX_SCORE)

    def analyze_burnout_risk(self) -> str:
        return risk_level_for(self.calculate_burnout_score())

    # ── Detectors ───────────────────────────────────────────────────────────

    def detect_high_stress(self) -> bool:
        start, end = self.window()
        return self.mood_tracker.average_stress(start, end) >= HIGH_STRESS_THRESHOLD

    def detect_mood_decline(self) -> bool:
        """First half of the last 7 logs averages >= 2 points above the second half."""
        logs = self.mood_tracker.recent(MOOD_DECLINE_SAMPLE)
        if len(logs) < MOOD_DECLINE_MIN_LOGS:
            return False
        mid = len(logs) // 2
        first = float(np.mean([log.mood_level for log in logs[:mid]]))
        second = float(np.mean([log.mood_level for log in logs[mid:]]))
        return (first - second) >= MOOD_DECLINE_DROP

    def detect_consecutive_high_stress(self, count: int) -> bool:
        """The `count` most recent logs all have stress >= 7."""
        if count <= 0:
            return False
        logs = self.mood_tracker.recent(count)
        if len(logs) < count:
            return False
        return all(log.stress_level >= HIGH_STRESS_THRESHOLD for log in logs)

    def assess_workload(self) -> str:
        if self.workload_manager is None:
            return "N/A"
        intensity = self.workload_manager.workload_intensity()
        if intensity >= VERY_HIGH_WORKLOAD_THRESHOLD:
            return "VERY HIGH"
        if intensity >= HIGH_WORKLOAD_THRESHOLD:
            return "HIGH"
        if intensity >= MODERATE_WORKLOAD_THRESHOLD:
            return "MODERATE"
        if intensity >= LOW_WORKLOAD_THRESHOLD:
            return "LOW"
        return "MINIMAL"

    # ── Narrative ───────────────────────────────────────────────────────────

    def generate_warnings(self) -> List[str]:
        """
        Ordered warnings: tier banner, specific triggers, then (only if
        anything triggered) a blank line and the recommendation bullets.
        """
        warnings: List[str] = []
        risk = self.analyze_burnout_risk()

        if risk == RiskLevel.HIGH:
            warnings.append("HIGH BURNOUT RISK DETECTED - Immediate action recommended")
        elif risk == RiskLevel.MEDIUM:
            warnings.append("MEDIUM BURNOUT RISK - Monitor closely and take preventive measures")

        if self.detect_high_stress():
            warnings.append("Sustained high stress levels detected over the past week")

        if self.detect_mood_decline():
            warnings.append("Declining mood trend identified - consider reaching out for support")

        workload = self.assess_workload()
        if workload in ("VERY HIGH", "HIGH"):
            warnings.append(
                f"Academic workload is {workload.lower()} - consider prioritizing and delegating tasks"
            )

        overdue = len(self.workload_manager.overdue()) if self.workload_manager else 0
        if overdue > 0:
            warnings.append(f"{overdue} overdue task(s) detected - address immediately")

        if warnings:
            warnings.append("")
            warnings.append("RECOMMENDATIONS:")
            warnings.extend(recommendations.warning_bullets(risk))

        logger.debug("Burnout warnings generated (risk=%s, %d lines)", risk, len(warnings))
        return warnings

    def detailed_analysis(self) -> str:
        start, end = self.window()
        avg_stress = self.mood_tracker.average_stress(start, end)
        avg_mood = self.mood_tracker.average_mood(start, end)
        wm = self.workload_manager

        lines = [
            "=== BURNOUT RISK ANALYSIS ===",
            "",
            f"Analysis Period: Past {self.analysis_days} days",
            f"Burnout Risk Level: {self.analyze_burnout_risk()}",
            f"Burnout Score: {self.calculate_burnout_score()}/{MAX_SCORE}",
            "",
            "--- Stress Analysis ---",
            f"Average Stress: {avg_stress:.1f}/10",
            f"Status: {'HIGH' if avg_stress >= HIGH_STRESS_THRESHOLD else '✓ Normal'}",
            "",
            "--- Mood Analysis ---",
            f"Average Mood: {avg_mood:.1f}/10",
            f"Trend: {'Declining' if self.detect_mood_decline() else '✓ Stable'}",
            "",
            "--- Workload Analysis ---",
            f"Workload Level: {self.assess_workload()}",
            f"Pending Tasks: {wm.pending_count() if wm else 0}",
            f"Overdue Tasks: {len(wm.overdue()) if wm else 0}",
            "",
        ]
        warnings = self.generate_warnings()
        if warnings:
            lines.append("--- Warnings & Recommendations ---")
            lines.extend(warnings)
        return "\n".join(lines) + "\n"


# ---------------------------------------------------------------------------
# Explanation
# ---------------------------------------------------------------------------
# What this file does:
#   Scores burnout risk from the past week. No state of its own: each call
#   re-reads the tracker/manager and recomputes the window from the clock.
#
# Key decisions:
#   - The mood factor is skipped on an empty window. average_mood() returns
#     0.0 for "no data", which would otherwise read as a very low mood.
#   - Consecutive high stress looks at the most recent entries overall, not
#     just inside the window.
#   - The clock is injected so tests can pin "now".
#
# Data flow:
#   ReportGenerator → analyze_burnout_risk() / generate_warnings()
#   → MoodTracker averages + WorkloadManager.workload_intensity()
