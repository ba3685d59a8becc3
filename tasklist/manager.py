"""Task manager owning the in-memory task list.

This module provides the TaskManager class, the sole owner and mutator of an
ordered list of tasks. It handles adding, finding, editing and removing tasks
by name, and saving the whole list to or loading it from a JSON file.

Name-based operations address the first task with a matching name.
"""

import logging
from typing import Callable, List, Optional, Tuple

from tasklist.errors import PathLike, TaskNotFoundError
from tasklist.models import Task
from tasklist.storage import JsonStorage, Storage

logger = logging.getLogger(__name__)

StorageFactory = Callable[[PathLike], Storage]


class TaskManager:
    """Manager for an ordered, in-memory list of tasks.

    Operations that can fail raise a TaskListError subclass; on success they
    return a confirmation message for the user.

    Attributes:
        storage_factory: Callable building a Storage for a file path
    """

    def __init__(
        self,
        tasks: Optional[List[Task]] = None,
        storage_factory: StorageFactory = JsonStorage,
    ):
        """Initialize TaskManager.

        Args:
            tasks: Initial tasks. If None, the manager starts empty.
            storage_factory: Storage implementation to use for save and load
        """
        self._tasks: List[Task] = list(tasks) if tasks else []
        self.storage_factory = storage_factory

    def __len__(self) -> int:
        return len(self._tasks)

    @property
    def tasks(self) -> Tuple[Task, ...]:
        """Snapshot of the tasks in insertion order."""
        return tuple(self._tasks)

    def add(self, task: Task) -> Task:
        """Append a task to the end of the list.

        Args:
            task: Task to add

        Returns:
            The added Task
        """
        if self.find(task.name) is not None:
            logger.warning("Task name %r is already used; only the first one is reachable by name", task.name)
        self._tasks.append(task)
        logger.debug("Task added name=%r priority=%s total=%d", task.name, task.priority.label, len(self._tasks))
        return task

    def find(self, name: str) -> Optional[int]:
        """Find the position of the first task with the given name.

        Args:
            name: Exact, case-sensitive task name

        Returns:
            Index of the task if found, None otherwise
        """
        for index, task in enumerate(self._tasks):
            if task.name == name:
                return index
        return None

    def get(self, name: str) -> Optional[Task]:
        """Get the first task with the given name.

        Returns:
            Task object if found, None otherwise
        """
        index = self.find(name)
        return None if index is None else self._tasks[index]

    def remove(self, name: str) -> str:
        """Remove the first task with the given name.

        Returns:
            Confirmation message

        Raises:
            TaskNotFoundError: If no task has this name
        """
        index = self.find(name)
        if index is None:
            raise TaskNotFoundError(name)

        del self._tasks[index]
        logger.debug("Task removed name=%r total=%d", name, len(self._tasks))
        return f'Task "{name}" removed successfully'

    def edit(self, name: str, replacement: Task) -> str:
        """Update the first task with the given name.

        Name, description and priority are copied from the replacement;
        the original creation time is kept.

        Returns:
            Confirmation message

        Raises:
            TaskNotFoundError: If no task has this name
        """
        index = self.find(name)
        if index is None:
            raise TaskNotFoundError(name)

        task = self._tasks[index]
        task.name = replacement.name
        task.description = replacement.description
        task.priority = replacement.priority
        logger.debug("Task updated name=%r new_name=%r", name, task.name)
        return f'Task "{name}" updated successfully'

    def list(self) -> List[str]:
        """Render every task in insertion order."""
        return [task.render() for task in self._tasks]

    def save(self, path: PathLike) -> str:
        """Write all tasks to a new JSON file.

        Returns:
            Confirmation message

        Raises:
            FileAlreadyExistsError: If the file already exists
            SerializeError: If the tasks cannot be encoded
            StorageIOError: If the file cannot be written
        """
        self.storage_factory(path).save(list(self._tasks))
        logger.info("Stored %d task(s) to %s", len(self._tasks), path)
        return "Data stored successfully"

    def load(self, path: PathLike) -> str:
        """Replace all tasks with those read from a JSON file.

        The file is decoded in full before the current list is replaced, so
        a failed load leaves the manager unchanged.

        Returns:
            Confirmation message

        Raises:
            StoredFileNotFoundError: If the file does not exist
            DeserializeError: If the file is not a valid task list
            StorageIOError: If the file cannot be read
        """
        loaded = self.storage_factory(path).load()
        self._tasks = loaded
        logger.info("Read %d task(s) from %s", len(loaded), path)
        return "Data read successfully"
