"""Tests for burnout scoring, warnings and the weekly report."""

import pytest
from datetime import datetime, timedelta
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from burnout_monitor.data.models import MoodLog, Task
from burnout_monitor.services import recommendations
from burnout_monitor.services.burnout_analyzer import BurnoutAnalyzer, RiskLevel, risk_level_for
from burnout_monitor.services.mood_tracker import MoodTracker
from burnout_monitor.services.report_generator import ReportGenerator, bar_chart
from burnout_monitor.services.student_service import StudentService
from burnout_monitor.services.workload_manager import WorkloadManager

NOW = datetime(2024, 3, 10, 12, 0)
TODAY = NOW.date()


def logs_from(pairs):
    """(mood, stress) pairs, oldest first, one per hour ending at NOW."""
    n = len(pairs)
    return [
        MoodLog(mood_level=m, stress_level=s, timestamp=NOW - timedelta(hours=n - 1 - i))
        for i, (m, s) in enumerate(pairs)
    ]


def manager(*rows):
    """rows: (priority, days until due or None, status)."""
    wm = WorkloadManager(today=lambda: TODAY)
    for i, (priority, due_in, status) in enumerate(rows):
        due = TODAY + timedelta(days=due_in) if due_in is not None else None
        wm.add(Task(task_name=f"task {i}", priority=priority, due_date=due, status=status))
    return wm


def analyzer(pairs=(), wm=None):
    return BurnoutAnalyzer(MoodTracker(logs_from(list(pairs))), wm, now=lambda: NOW)


class TestBurnoutScore:
    def test_empty_is_zero(self):
        a = analyzer()
        assert a.calculate_burnout_score() == 0
        assert a.analyze_burnout_risk() == RiskLevel.LOW
        assert a.generate_warnings() == []

    def test_empty_with_workload_source(self):
        a = analyzer(wm=manager())
        assert a.calculate_burnout_score() == 0

    @pytest.mark.parametrize("stress, expected", [(5, 0), (6, 1), (7, 2), (8, 3), (10, 3)])
    def test_stress_factor(self, stress, expected):
        assert analyzer([(6, stress)]).calculate_burnout_score() == expected

    @pytest.mark.parametrize("mood, expected", [(6, 0), (5, 1), (4, 2), (3, 3), (1, 3)])
    def test_mood_factor(self, mood, expected):
        assert analyzer([(mood, 1)]).calculate_burnout_score() == expected

    def test_old_logs_ignored(self):
        tracker = MoodTracker([MoodLog(mood_level=1, stress_level=2,
                                       timestamp=NOW - timedelta(days=8))])
        a = BurnoutAnalyzer(tracker, now=lambda: NOW)
        assert a.calculate_burnout_score() == 0

    @pytest.mark.parametrize("rows, expected", [
        ([("High", None, "Pending"), ("Low", 30, "Pending")], 0),
        ([("High", None, "Pending"), ("High", None, "Pending"), ("Low", None, "Pending")], 1),
        ([("High", 1, "Pending"), ("High", 4, "Pending")], 1),
    ])
    def test_workload_factor(self, rows, expected):
        assert analyzer(wm=manager(*rows)).calculate_burnout_score() == expected

    def test_workload_factor_thresholds(self):
        high = manager(("High", 1, "Pending"), ("Medium", 1, "Pending"))  # 8 + 7 = 15
        very_high = manager(("High", -1, "Pending"), ("High", -1, "Pending"),
                            ("High", 1, "Pending"))                          # 9 + 9 + 8 = 26
        assert high.workload_intensity() == 15
        assert very_high.workload_intensity() == 26
        assert analyzer(wm=high).calculate_burnout_score() == 2
        assert analyzer(wm=very_high).calculate_burnout_score() == 3

    def test_consecutive_high_stress(self):
        a = analyzer([(6, 8), (6, 9), (6, 8)])
        assert a.detect_consecutive_high_stress(3)
        # stress avg 8.33 -> +3, three in a row -> +2
        assert a.calculate_burnout_score() == 5
        assert a.analyze_burnout_risk() == RiskLevel.MEDIUM

    def test_two_consecutive_high_stress(self):
        a = analyzer([(6, 3), (6, 8), (6, 9)])
        assert not a.detect_consecutive_high_stress(3)
        assert a.detect_consecutive_high_stress(2)
        # stress avg 6.67 -> +1, two in a row -> +1
        assert a.calculate_burnout_score() == 2

    def test_consecutive_needs_enough_logs(self):
        a = analyzer([(6, 9)])
        assert not a.detect_consecutive_high_stress(2)
        assert not a.detect_consecutive_high_stress(0)

    def test_score_capped_at_ten(self):
        wm = manager(("High", -1, "Pending"), ("High", -1, "Pending"), ("High", 1, "Pending"))
        a = analyzer([(1, 9), (1, 9), (1, 9)], wm)
        assert a.calculate_burnout_score() == 10
        assert a.analyze_burnout_risk() == RiskLevel.HIGH

    @pytest.mark.parametrize("score, tier", [
        (0, RiskLevel.LOW), (4, RiskLevel.LOW), (5, RiskLevel.MEDIUM),
        (7, RiskLevel.MEDIUM), (8, RiskLevel.HIGH), (10, RiskLevel.HIGH),
    ])
    def test_tier_boundaries(self, score, tier):
        assert risk_level_for(score) == tier


class TestMoodDecline:
    def test_too_few_logs(self):
        assert not analyzer([(9, 1), (9, 1), (2, 1)]).detect_mood_decline()

    def test_declining(self):
        assert analyzer([(9, 1), (9, 1), (5, 1), (5, 1)]).detect_mood_decline()

    def test_exactly_two_points_counts(self):
        assert analyzer([(7, 1), (7, 1), (5, 1), (5, 1)]).detect_mood_decline()

    def test_improving_is_not_decline(self):
        assert not analyzer([(5, 1), (5, 1), (9, 1), (9, 1)]).detect_mood_decline()

    def test_uses_last_seven_only(self):
        # the early 10s fall outside the last seven entries
        pairs = [(10, 1)] * 3 + [(6, 1)] * 3 + [(6, 1)] * 4
        assert not analyzer(pairs).detect_mood_decline()

    def test_odd_count_splits_short_first_half(self):
        # first half [8, 8, 8], second half [6, 6, 6, 5]
        pairs = [(8, 1)] * 3 + [(6, 1)] * 3 + [(5, 1)]
        assert analyzer(pairs).detect_mood_decline()


class TestWarnings:
    def test_high_risk_order(self):
        wm = manager(("High", -1, "Pending"), ("Medium", 2, "Pending"))  # 9 + 7 = 16
        a = analyzer([(8, 9), (8, 9), (2, 9), (2, 9)], wm)
        assert a.calculate_burnout_score() == 8
        assert a.generate_warnings() == [
            "HIGH BURNOUT RISK DETECTED - Immediate action recommended",
            "Sustained high stress levels detected over the past week",
            "Declining mood trend identified - consider reaching out for support",
            "Academic workload is high - consider prioritizing and delegating tasks",
            "1 overdue task(s) detected - address immediately",
            "",
            "RECOMMENDATIONS:",
            "• Speak with academic counselor or mental health professional",
            "• Consider reducing course load if possible",
            "• Schedule regular breaks and self-care activities",
            "• Connect with friends and support network",
            "• Review and adjust your study schedule",
        ]

    def test_low_risk_with_workload_warning(self):
        wm = manager(*[("High", 1, "Pending")] * 4)  # 4 x 8 = 32
        a = analyzer(wm=wm)
        assert a.analyze_burnout_risk() == RiskLevel.LOW
        assert a.generate_warnings() == [
            "Academic workload is very high - consider prioritizing and delegating tasks",
            "",
            "RECOMMENDATIONS:",
            "• Connect with friends and support network",
            "• Review and adjust your study schedule",
        ]

    def test_medium_banner_first(self):
        warnings = analyzer([(6, 8), (6, 9), (6, 8)]).generate_warnings()
        assert warnings[0].startswith("MEDIUM BURNOUT RISK")
        assert warnings[1] == "Sustained high stress levels detected over the past week"
        assert "• Maintain regular sleep schedule" in warnings

    def test_assess_workload_levels(self):
        assert analyzer().assess_workload() == "N/A"
        assert analyzer(wm=manager()).assess_workload() == "MINIMAL"
        assert analyzer(wm=manager(("High", None, "Pending"),
                                   ("Low", None, "Pending"))).assess_workload() == "LOW"
        assert analyzer(wm=manager(("High", None, "Pending"), ("High", None, "Pending"),
                                   ("Low", None, "Pending"))).assess_workload() == "MODERATE"

    def test_detailed_analysis(self):
        text = analyzer([(6, 5)]).detailed_analysis()
        assert "Burnout Score: 0/10" in text
        assert "Workload Level: N/A" in text
        assert "Average Mood: 6.0/10" in text
        assert "--- Warnings & Recommendations ---" not in text

    def test_unknown_tier_gets_maintenance_advice(self):
        assert recommendations.advice_for("???").heading == "MAINTENANCE TIPS:"


class TestBarChart:
    @pytest.mark.parametrize("value, filled", [
        (0, 0), (0.4, 0), (0.5, 1), (6.4, 6), (6.5, 7), (10, 10), (12, 10), (-3, 0),
    ])
    def test_filled_cells(self, value, filled):
        bar = bar_chart(value)
        assert len(bar) == 12
        assert bar.count("█") == filled
        assert bar.count("░") == 10 - filled


class TestReport:
    @pytest.fixture
    def empty_report(self, tmp_path):
        service = StudentService.open(tmp_path, now=lambda: NOW, today=lambda: TODAY)
        return service.weekly_report()

    def test_empty_directory_report(self, empty_report):
        assert "No mood entries recorded during this period." in empty_report
        assert "No stress entries recorded during this period." in empty_report
        assert "No tasks recorded." in empty_report
        assert "Overall Risk Level: 🟢 LOW" in empty_report
        assert "Burnout Score: 0/10" in empty_report
        assert "MAINTENANCE TIPS:" in empty_report
        assert "Warnings & Alerts:" not in empty_report

    def test_section_order(self, empty_report):
        titles = ["MOOD ANALYSIS", "STRESS ANALYSIS", "ACADEMIC WORKLOAD SUMMARY",
                  "BURNOUT RISK ASSESSMENT", "RECOMMENDATIONS"]
        positions = [empty_report.index(t) for t in titles]
        assert positions == sorted(positions)
        assert empty_report.rstrip().endswith("═" * 63)
        assert "Thank you for using Student Burnout Monitor!" in empty_report

    def test_header_dates(self, empty_report):
        assert "Report Generated: Mar 10, 2024 12:00" in empty_report
        assert "Report Period: Mar 03, 2024 to Mar 10, 2024" in empty_report

    def test_mood_and_stress_sections(self):
        tracker = MoodTracker(logs_from([(4, 7), (8, 5)]))
        report = ReportGenerator(tracker, BurnoutAnalyzer(tracker, now=lambda: NOW))
        start, end = NOW - timedelta(days=7), NOW
        mood = report.generate_mood_summary(start, end)
        assert "Total Entries: 2" in mood
        assert "Average Mood: 6.0/10" in mood
        assert "Highest Mood: 8/10" in mood
        assert "Lowest Mood: 4/10" in mood
        assert "Mood Chart: [██████░░░░]" in mood
        stress = report.generate_stress_summary(start, end)
        assert "Average Stress: 6.0/10 High" in stress
        assert "Stress Status: ✓ Normal" in stress

    def test_task_section_caps_upcoming_list(self):
        wm = manager(*([("Medium", 3, "Pending")] * 7 + [("Low", 1, "Completed")]))
        tracker = MoodTracker()
        report = ReportGenerator(tracker, BurnoutAnalyzer(tracker, wm, now=lambda: NOW), wm)
        text = report.generate_task_summary()
        assert "Total Tasks: 8" in text
        assert "Completed: 1 (12.5%)" in text
        assert "Pending: 7" in text
        assert "Upcoming Tasks (Next 7 Days):" in text
        assert text.count("    • ") == 5
        assert "... and 2 more" in text

    def test_save_report(self, tmp_path):
        service = StudentService.open(tmp_path, now=lambda: NOW, today=lambda: TODAY)
        target = tmp_path / "reports" / "weekly.txt"
        assert service.reports.save_report(target) == target
        assert target.read_text(encoding="utf-8") == service.weekly_report()
