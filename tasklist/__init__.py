"""In-memory task list with JSON file save and load."""

from tasklist.errors import (
    DeserializeError,
    FileAlreadyExistsError,
    NotFoundError,
    SerializeError,
    StorageIOError,
    StoredFileNotFoundError,
    TaskListError,
    TaskNotFoundError,
)
from tasklist.manager import TaskManager
from tasklist.models import Priority, Task

__version__ = "0.1.0"

__all__ = [
    "DeserializeError",
    "FileAlreadyExistsError",
    "NotFoundError",
    "Priority",
    "SerializeError",
    "StorageIOError",
    "StoredFileNotFoundError",
    "Task",
    "TaskListError",
    "TaskManager",
    "TaskNotFoundError",
]
