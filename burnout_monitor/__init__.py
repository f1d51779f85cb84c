"""
Student Burnout Monitor
=======================
Tracks self-reported mood/stress check-ins and academic tasks, scores
burnout risk over the past week and renders a weekly text report.
"""

__version__ = "1.0.0"
