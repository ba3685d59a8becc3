"""Exceptions raised by the task list manager and its storage layer.

Every exception derives from TaskListError, and its string form is a message
suitable for showing to the user as-is:
- NotFoundError: a task name or a file path does not exist
- FileAlreadyExistsError: a save target is already present
- StorageIOError: the underlying read or write failed
- SerializeError / DeserializeError: data could not be encoded or decoded
"""

from pathlib import Path
from typing import Optional, Union

PathLike = Union[str, Path]


class TaskListError(Exception):
    """Base class for all task list errors."""


class NotFoundError(TaskListError):
    """A task or file that was asked for does not exist."""


class TaskNotFoundError(NotFoundError):
    """No task carries the requested name.

    Attributes:
        name: The task name that was looked up
    """

    def __init__(self, name: str):
        self.name = name
        super().__init__(f'Task with name "{name}" doesn\'t exist')


class StoredFileNotFoundError(NotFoundError):
    """The file to load tasks from does not exist.

    Attributes:
        path: The missing file path
    """

    def __init__(self, path: PathLike):
        self.path = Path(path)
        super().__init__(f'File "{path}" doesn\'t exist')


class FileAlreadyExistsError(TaskListError):
    """The file to save tasks to is already present and will not be overwritten."""

    def __init__(self, path: PathLike):
        self.path = Path(path)
        super().__init__(f'File "{path}" already exists')


class StorageIOError(TaskListError):
    """Reading or writing the task file failed at the OS level."""

    def __init__(self, path: PathLike, action: str, reason: object):
        self.path = Path(path)
        self.action = action
        super().__init__(f'Error {action} file "{path}": {reason}')


class SerializeError(TaskListError):
    """The task list could not be encoded as JSON."""

    def __init__(self, reason: object, path: Optional[PathLike] = None):
        self.path = Path(path) if path is not None else None
        super().__init__(f"Error saving data: {reason}")


class DeserializeError(TaskListError):
    """The file content is not a valid task list."""

    def __init__(self, reason: object, path: Optional[PathLike] = None):
        self.path = Path(path) if path is not None else None
        location = f' "{path}"' if path is not None else ""
        super().__init__(f"Error reading file{location}: {reason}")
