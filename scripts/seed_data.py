"""
Seed Data Generator — creates realistic fake data for development and testing.

Run: python scripts/seed_data.py [days] [data_dir]
"""

import random
import sys
from datetime import date, datetime, timedelta
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from burnout_monitor.config import load_config, resolve_data_dir
from burnout_monitor.data.models import MoodLog, Task, TaskPriority, TaskStatus, User
from burnout_monitor.data.storage import FileStorage

NOTES = [
    "", "Long day of lectures", "Exam prep | group study", "Slept badly",
    "Good workout\nfelt better after", "Deadline stress", "Relaxed weekend",
]

COURSE_TASKS = {
    "Linear Algebra": ["Problem Set 4", "Midterm revision"],
    "Data Structures": ["Lab 6: heaps", "Project milestone 2"],
    "Academic Writing": ["Essay draft", "Peer review"],
    "Physics": ["Lab report", "Quiz 3 prep"],
}


def seed(days: int = 21, data_dir: Path = None) -> None:
    storage = FileStorage(data_dir or resolve_data_dir(load_config()))

    storage.save_user(User(
        student_id="S1024", full_name="Alex Rivera", email="alex.rivera@example.edu",
        age=20, course="BSc Computer Science",
    ))

    # ── Mood logs: stress creeping up towards the end ───────────────────
    now = datetime.now().replace(second=0, microsecond=0)
    logs = []
    for i in range(days):
        ts = now - timedelta(days=days - i, hours=random.randint(0, 4))
        drift = i / max(days - 1, 1)
        stress = min(10, max(1, round(3 + 5 * drift + random.uniform(-1.5, 1.5))))
        mood = min(10, max(1, round(8 - 4 * drift + random.uniform(-1.5, 1.5))))
        logs.append(MoodLog(mood_level=mood, stress_level=stress,
                            notes=random.choice(NOTES), timestamp=ts))
    storage.save_mood_logs(logs)

    # ── Tasks: a spread of due dates, a few already done ────────────────
    today = date.today()
    tasks = []
    for course, names in COURSE_TASKS.items():
        for name in names:
            due = today + timedelta(days=random.randint(-3, 14))
            status = random.choice(
                [TaskStatus.PENDING, TaskStatus.PENDING, TaskStatus.IN_PROGRESS, TaskStatus.COMPLETED]
            )
            tasks.append(Task(
                task_name=name, description=course, due_date=due,
                priority=random.choice(TaskPriority.ALL), status=status,
                timestamp=now - timedelta(days=random.randint(1, 10)),
            ))
    storage.save_tasks(tasks)

    print(f"Seeded {len(logs)} mood logs and {len(tasks)} tasks into {storage.data_dir}.")


if __name__ == "__main__":
    count = int(sys.argv[1]) if len(sys.argv) > 1 else 21
    target = Path(sys.argv[2]) if len(sys.argv) > 2 else None
    seed(count, target)


# ---------------------------------------------------------------------------
# Explanation
# ---------------------------------------------------------------------------
# What this script does:
#   Generates believable data so the report has something to show without
#   three weeks of real check-ins: a profile, daily mood logs with stress
#   drifting upward, and tasks spread around today (some overdue).
#
# Key points:
#   - Notes include `|` and newlines on purpose, exercising the escaping.
#   - Uses the same FileStorage as the real app, no hand-written lines.
