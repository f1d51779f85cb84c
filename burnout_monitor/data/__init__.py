from .codec import MalformedRecordError
from .models import (BurnoutMonitorError, MoodLog, Task, TaskPriority,
                     TaskStatus, User, ValidationError)
from .storage import FileStorage, StorageIOError

__all__ = [
    "BurnoutMonitorError", "FileStorage", "MalformedRecordError", "MoodLog",
    "StorageIOError", "Task", "TaskPriority", "TaskStatus", "User",
    "ValidationError",
]
