"""Core models for tasklist.

This module defines the core data structures for task management:
- Priority: Enum for task priority levels
- Task: A dataclass representing a single to-do item
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

DATE_FORMAT = "%d-%m-%Y %H:%M:%S"


def local_now() -> datetime:
    """Return the current time as an aware datetime in the local time zone."""
    return datetime.now().astimezone()


class Priority(Enum):
    """Task priority levels.

    Member values are the canonical labels, which are also what gets
    written to task files.
    """

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"

    @property
    def label(self) -> str:
        """Display string for the priority ("Low", "Medium" or "High")."""
        return _LABELS[self]

    @classmethod
    def parse(cls, text: str) -> "Priority":
        """Parse user input into a priority.

        Matching is case-insensitive and ignores surrounding whitespace.
        Unrecognized text falls back to LOW.
        """
        return _PARSE_TABLE.get(text.strip().lower(), cls.LOW)

    @classmethod
    def from_label(cls, label: str) -> "Priority":
        """Strictly convert a stored label back into a priority.

        Raises:
            ValueError: If the label is not exactly one of the known labels
        """
        for priority, known in _LABELS.items():
            if known == label:
                return priority
        raise ValueError(f"Unknown priority {label!r}")


_LABELS = {
    Priority.LOW: "Low",
    Priority.MEDIUM: "Medium",
    Priority.HIGH: "High",
}

_PARSE_TABLE = {
    "low": Priority.LOW,
    "medium": Priority.MEDIUM,
    "high": Priority.HIGH,
}


@dataclass
class Task:
    """Task model representing a single to-do item.

    Attributes:
        name: Short name the task is looked up by
        description: Free-form description text
        priority: Priority level of the task
        created_at: Local, timezone-aware time the task was created; cannot be
            reassigned after construction
    """

    name: str
    description: str = ""
    priority: Priority = Priority.LOW
    created_at: datetime = field(default_factory=local_now)

    def __setattr__(self, key, value):
        # created_at is set once, at construction
        if key == "created_at" and "created_at" in self.__dict__:
            raise AttributeError("created_at cannot be changed once set")
        super().__setattr__(key, value)

    @classmethod
    def create(cls, name: str, description: str, priority: Priority) -> "Task":
        """Create a new task stamped with the current local time."""
        return cls(name=name, description=description, priority=priority, created_at=local_now())

    def render(self) -> str:
        """Return the human-readable, multi-line form of the task."""
        return (
            f"{self.name} | {self.priority.label} | {self.created_at.strftime(DATE_FORMAT)}\n"
            f"\"{self.description}\"\n"
        )
