"""Storage layer for tasklist.

This module provides the JSON codec for task files, an abstract storage
interface, and a file-based implementation. Task files are UTF-8 JSON arrays
of objects with the fields name, description, priority and add_time.

JsonStorage never overwrites an existing file and uses fcntl-based file
locking while reading or writing.
"""

import fcntl
import json
import logging
import re
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

from tasklist.errors import (
    DeserializeError,
    FileAlreadyExistsError,
    PathLike,
    SerializeError,
    StorageIOError,
    StoredFileNotFoundError,
)
from tasklist.models import Priority, Task

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("name", "description", "priority", "add_time")

_FRACTION_RE = re.compile(r"\.(\d+)")


def parse_timestamp(text: str) -> datetime:
    """Parse an RFC 3339 / ISO 8601 timestamp.

    Accepts a trailing "Z" and fractions of any length, as written by other
    producers; fractions beyond microseconds are truncated. A timestamp
    without an offset is taken as local time.

    Raises:
        ValueError: If the text is not a valid timestamp
    """
    normalized = text.strip()
    if normalized[-1:] in ("Z", "z"):
        normalized = normalized[:-1] + "+00:00"
    normalized = _FRACTION_RE.sub(lambda m: "." + (m.group(1) + "000000")[:6], normalized, count=1)

    created_at = datetime.fromisoformat(normalized)
    if created_at.tzinfo is None:
        created_at = created_at.astimezone()
    return created_at


def task_to_dict(task: Task) -> Dict[str, Any]:
    """Convert a task to its serializable form."""
    return {
        "name": task.name,
        "description": task.description,
        "priority": task.priority.label,
        "add_time": task.created_at.isoformat(),
    }


def task_from_dict(data: Any) -> Task:
    """Build a task from one decoded JSON object.

    Raises:
        ValueError: If a field is missing or has the wrong type or value
    """
    if not isinstance(data, dict):
        raise ValueError(f"expected an object, got {type(data).__name__}")

    missing = [key for key in REQUIRED_FIELDS if key not in data]
    if missing:
        raise ValueError(f"missing field(s): {', '.join(missing)}")

    for key in REQUIRED_FIELDS:
        if not isinstance(data[key], str):
            raise ValueError(f"field {key!r} must be a string")

    return Task(
        name=data["name"],
        description=data["description"],
        priority=Priority.from_label(data["priority"]),
        created_at=parse_timestamp(data["add_time"]),
    )


def encode_tasks(tasks: Iterable[Task], path: Optional[PathLike] = None) -> bytes:
    """Serialize tasks, in order, to a UTF-8 encoded JSON array.

    Raises:
        SerializeError: If a task cannot be represented as UTF-8 JSON
    """
    try:
        text = json.dumps([task_to_dict(task) for task in tasks], indent=2, ensure_ascii=False)
        return text.encode("utf-8")
    except (TypeError, ValueError, AttributeError) as exc:
        # UnicodeEncodeError (lone surrogates) is a ValueError
        raise SerializeError(exc, path) from exc


def decode_tasks(content: Union[str, bytes], path: Optional[PathLike] = None) -> List[Task]:
    """Deserialize a JSON array, as text or UTF-8 bytes, into a list of tasks.

    The whole document is validated before anything is returned.

    Raises:
        DeserializeError: If the content is not a well-formed task list
    """
    try:
        text = content.decode("utf-8") if isinstance(content, bytes) else content
        data = json.loads(text)
    except (UnicodeDecodeError, json.JSONDecodeError, RecursionError) as exc:
        raise DeserializeError(exc, path) from exc

    if not isinstance(data, list):
        raise DeserializeError(f"expected a JSON array, got {type(data).__name__}", path)

    tasks = []
    for index, item in enumerate(data):
        try:
            tasks.append(task_from_dict(item))
        except ValueError as exc:
            raise DeserializeError(f"task #{index}: {exc}", path) from exc
    return tasks


class Storage(ABC):
    """Abstract base class for task storage implementations."""

    @abstractmethod
    def exists(self) -> bool:
        """Return True if the storage already holds data."""
        pass

    @abstractmethod
    def save(self, tasks: List[Task]) -> None:
        """Save tasks to storage.

        Args:
            tasks: Ordered list of tasks to write
        """
        pass

    @abstractmethod
    def load(self) -> List[Task]:
        """Load tasks from storage.

        Returns:
            Ordered list of tasks
        """
        pass


class JsonStorage(Storage):
    """JSON file-based storage implementation with file locking.

    Attributes:
        file_path: Path to the JSON task file
    """

    def __init__(self, file_path: PathLike):
        """Initialize JsonStorage with a file path.

        Args:
            file_path: Path to the JSON file to read from or write to
        """
        self.file_path = Path(file_path)

    def exists(self) -> bool:
        return self.file_path.exists()

    def save(self, tasks: List[Task]) -> None:
        """Write tasks to a new JSON file.

        The file is created exclusively, so an existing file is never
        overwritten.

        Raises:
            FileAlreadyExistsError: If the file is already present
            SerializeError: If the tasks cannot be encoded
            StorageIOError: If the file cannot be created or written
        """
        if self.file_path.exists():
            raise FileAlreadyExistsError(self.file_path)

        # Encode first so a failure never leaves an empty file behind
        content = encode_tasks(tasks, self.file_path)

        try:
            with open(self.file_path, "xb") as f:
                fcntl.flock(f.fileno(), fcntl.LOCK_EX)
                try:
                    f.write(content)
                finally:
                    fcntl.flock(f.fileno(), fcntl.LOCK_UN)
        except FileExistsError as exc:
            raise FileAlreadyExistsError(self.file_path) from exc
        except OSError as exc:
            raise StorageIOError(self.file_path, "writing", exc) from exc

        logger.debug("Wrote %d task(s) to %s", len(tasks), self.file_path)

    def load(self) -> List[Task]:
        """Read tasks from the JSON file.

        Raises:
            StoredFileNotFoundError: If the file does not exist
            StorageIOError: If the file cannot be read
            DeserializeError: If the content is not valid UTF-8 or not a valid task list
        """
        if not self.file_path.exists():
            raise StoredFileNotFoundError(self.file_path)

        try:
            with open(self.file_path, "rb") as f:
                fcntl.flock(f.fileno(), fcntl.LOCK_SH)
                try:
                    content = f.read()
                finally:
                    fcntl.flock(f.fileno(), fcntl.LOCK_UN)
        except FileNotFoundError as exc:
            raise StoredFileNotFoundError(self.file_path) from exc
        except OSError as exc:
            raise StorageIOError(self.file_path, "reading", exc) from exc

        tasks = decode_tasks(content, self.file_path)

        logger.debug("Read %d task(s) from %s", len(tasks), self.file_path)
        return tasks
