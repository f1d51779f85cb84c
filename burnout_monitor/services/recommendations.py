"""
Recommendation Library — built-in well-being guidance per risk tier.

Summaries of common student well-being advice, used by the burnout analyzer's
warnings and by the weekly report. All guidance is non-medical.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Tuple

HIGH = "HIGH"
MEDIUM = "MEDIUM"
LOW = "LOW"


@dataclass
class TierAdvice:
    tier: str
    heading: str
    short_tips: Tuple[str, ...]   # bullets appended to warnings
    report_tips: Tuple[str, ...]  # bullets in the report's recommendations section


TIER_ADVICE: Dict[str, TierAdvice] = {
    HIGH: TierAdvice(
        tier=HIGH,
        heading="URGENT ACTIONS NEEDED:",
        short_tips=(
            "Speak with academic counselor or mental health professional",
            "Consider reducing course load if possible",
            "Schedule regular breaks and self-care activities",
        ),
        report_tips=(
            "Schedule appointment with counselor/mental health professional",
            "Consider requesting extensions for assignments",
            "Discuss workload with your professor",
            "Practice daily stress-relief activities",
        ),
    ),
    MEDIUM: TierAdvice(
        tier=MEDIUM,
        heading="PREVENTIVE MEASURES:",
        short_tips=(
            "Practice stress management techniques (meditation, exercise)",
            "Improve time management and task prioritization",
            "Maintain regular sleep schedule",
        ),
        report_tips=(
            "Implement stress management techniques",
            "Review and optimize your schedule",
            "Ensure adequate sleep (7-9 hours)",
            "Connect with support network",
        ),
    ),
    LOW: TierAdvice(
        tier=LOW,
        heading="MAINTENANCE TIPS:",
        short_tips=(),
        report_tips=(
            "Continue current positive habits",
            "Maintain academic-life balance",
            "Stay proactive with task management",
            "Keep monitoring your well-being",
        ),
    ),
}

# Appended after the tier bullets in the warnings list
UNIVERSAL_TIPS: Tuple[str, ...] = (
    "Connect with friends and support network",
    "Review and adjust your study schedule",
)

# "General Well-being Tips" block of the report
GENERAL_TIPS: Tuple[str, ...] = (
    "Take regular breaks during study sessions",
    "Exercise 3-4 times per week",
    "Practice mindfulness or meditation",
    "Maintain social connections",
)

BULLET = "• "


def advice_for(tier: str) -> TierAdvice:
    """Advice for a tier; unknown tiers get the LOW (maintenance) advice."""
    return TIER_ADVICE.get(tier, TIER_ADVICE[LOW])


def warning_bullets(tier: str) -> List[str]:
    """Tier bullets followed by the universal bullets, already prefixed."""
    tips = list(advice_for(tier).short_tips) + list(UNIVERSAL_TIPS)
    return [BULLET + tip for tip in tips]
