from .burnout_analyzer import BurnoutAnalyzer, RiskLevel
from .mood_tracker import MoodTracker
from .report_generator import ReportGenerator
from .student_service import StudentService
from .workload_manager import WorkloadManager

__all__ = [
    "BurnoutAnalyzer", "MoodTracker", "ReportGenerator", "RiskLevel",
    "StudentService", "WorkloadManager",
]
