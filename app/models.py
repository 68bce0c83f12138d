"""
Database models for the Task Manager application.

A ``User`` is the per-email aggregate that owns every task submitted for
that address. Its tasks live in a single ordered collection; each task
records which of the three lists (daily, completed, regular) it was
appended to when it was created. The ``dailyTasks``, ``completedTasks`` and
``regularTasks`` sequences exposed by the API are filters over that
collection.

The list a task belongs to is fixed at creation time. Changing the
``daily`` or ``completed`` flags later does not move the task.
"""

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Mapping

from sqlalchemy.ext.orderinglist import ordering_list
from sqlalchemy.orm import validates

from app import db


class TaskPriority(str, Enum):
    """Enumeration of possible task priorities."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class TaskList(str, Enum):
    """The three per-user task sequences."""

    DAILY = "daily"
    COMPLETED = "completed"
    REGULAR = "regular"

    @classmethod
    def for_task_data(cls, data: Mapping[str, Any]) -> "TaskList":
        """
        Pick the list a task payload routes to.

        ``completed`` wins over ``daily``, which wins over regular.

        Args:
            data: Submitted task fields.

        Returns:
            The selected list.
        """
        if data.get("completed"):
            return cls.COMPLETED
        if data.get("daily"):
            return cls.DAILY
        return cls.REGULAR

    @property
    def field_name(self) -> str:
        """Name of the sequence in the JSON representation of a user."""
        return f"{self.value}Tasks"


# Fields a client may set through ``taskData``
TASK_FIELDS = (
    "title",
    "description",
    "deadline",
    "priority",
    "daily",
    "completed",
    "category",
)

_TRUE_STRINGS = {"true", "1", "yes"}
_FALSE_STRINGS = {"false", "0", "no", ""}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_task_id() -> str:
    return uuid.uuid4().hex


def ensure_utc(value: datetime) -> datetime:
    """Normalize datetimes to timezone-aware UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_utc_iso(value: datetime | None) -> str | None:
    """
    Convert datetime to an ISO-8601 UTC string.

    SQLite commonly returns naive datetime values even when timezone-aware
    columns are declared. For API contracts, always normalize to UTC.
    """
    if value is None:
        return None
    return ensure_utc(value).isoformat()


def parse_datetime(value: Any) -> datetime | None:
    """
    Parse an optional deadline into a UTC datetime.

    Accepts a datetime, an ISO-8601 string, or a number of milliseconds
    since the Unix epoch.

    Raises:
        ValueError: If the value cannot be interpreted as a point in time.
    """
    if value is None or value == "":
        return None
    try:
        if isinstance(value, datetime):
            return ensure_utc(value)
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        if isinstance(value, str):
            return ensure_utc(datetime.fromisoformat(value.replace("Z", "+00:00")))
    except (ValueError, OverflowError, OSError) as exc:
        raise ValueError(f"Cast to date failed for value {value!r}") from exc
    raise ValueError(f"Cast to date failed for value {value!r}")


class User(db.Model):
    """
    Per-email aggregate holding all of that email's tasks.

    Attributes:
        id: Surrogate primary key.
        email: Unique address identifying the record.
        tasks: Every task owned by the user, in insertion order.
        created_at: Timestamp when the record was created.
        updated_at: Timestamp of the last change to the record or its tasks.
    """

    __tablename__ = "users"

    id: int = db.Column(db.Integer, primary_key=True)
    email: str = db.Column(db.String(255), nullable=False, unique=True, index=True)
    created_at: datetime = db.Column(
        db.DateTime(timezone=True),
        nullable=False,
        default=_utcnow
    )
    updated_at: datetime = db.Column(
        db.DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow
    )

    tasks = db.relationship(
        "Task",
        back_populates="user",
        order_by="Task.position",
        collection_class=ordering_list("position"),
        cascade="all, delete-orphan",
    )

    def tasks_in(self, task_list: TaskList) -> list["Task"]:
        """Return the tasks appended to ``task_list``, in order."""
        return [task for task in self.tasks if task.task_list == task_list.value]

    @property
    def daily_tasks(self) -> list["Task"]:
        """Tasks in the daily list."""
        return self.tasks_in(TaskList.DAILY)

    @property
    def completed_tasks(self) -> list["Task"]:
        """Tasks in the completed list."""
        return self.tasks_in(TaskList.COMPLETED)

    @property
    def regular_tasks(self) -> list["Task"]:
        """Tasks in the regular list."""
        return self.tasks_in(TaskList.REGULAR)

    def touch(self) -> None:
        """Mark the record as modified."""
        self.updated_at = _utcnow()

    def to_dict(self) -> dict[str, Any]:
        """
        Convert the user to a dictionary representation.

        Returns:
            Dictionary with the email, the three task sequences and
            timestamps.
        """
        data: dict[str, Any] = {"id": self.id, "email": self.email}
        for task_list in TaskList:
            data[task_list.field_name] = [task.to_dict() for task in self.tasks_in(task_list)]
        data["createdAt"] = to_utc_iso(self.created_at)
        data["updatedAt"] = to_utc_iso(self.updated_at)
        return data

    def __repr__(self) -> str:
        return f"<User {self.email}>"


class Task(db.Model):
    """
    Task model representing a to-do item.

    Attributes:
        id: Opaque identifier generated at creation.
        user_id: Owning user.
        task_list: Sequence the task was appended to (see ``TaskList``).
        position: Index inside the owner's task collection.
        title: Short title describing the task.
        description: Detailed description of the task.
        deadline: Optional point in time the task is due.
        priority: Task priority level (Low, Medium, High).
        daily: Whether the task was flagged as a daily task.
        completed: Whether the task was flagged as completed.
        category: Free-text label chosen by the client.
        created_at: Timestamp when the task was created.
        updated_at: Timestamp when the task was last modified.
    """

    __tablename__ = "tasks"

    id: str = db.Column(db.String(32), primary_key=True, default=_new_task_id)
    user_id: int = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    task_list: str = db.Column(db.String(20), nullable=False, default=TaskList.REGULAR.value)
    position: int = db.Column(db.Integer, nullable=False, default=0)
    title: str = db.Column(db.String(200), nullable=False)
    description: str | None = db.Column(db.Text, nullable=True)
    deadline: datetime | None = db.Column(db.DateTime(timezone=True), nullable=True)
    priority: str = db.Column(
        db.String(20),
        nullable=False,
        default=TaskPriority.MEDIUM.value
    )
    daily: bool = db.Column(db.Boolean, nullable=False, default=False)
    completed: bool = db.Column(db.Boolean, nullable=False, default=False)
    category: str | None = db.Column(db.String(100), nullable=True)
    created_at: datetime = db.Column(
        db.DateTime(timezone=True),
        nullable=False,
        default=_utcnow
    )
    updated_at: datetime = db.Column(
        db.DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow
    )

    user = db.relationship("User", back_populates="tasks")

    @classmethod
    def from_task_data(cls, task_data: Mapping[str, Any]) -> "Task":
        """
        Build a task from a client payload.

        The list is chosen from the payload flags; unknown keys are ignored.

        Raises:
            ValueError: If a field fails validation (e.g. missing title).
        """
        task = cls(
            id=_new_task_id(),
            task_list=TaskList.for_task_data(task_data).value,
            title=task_data.get("title"),
        )
        task.apply(task_data)
        return task

    def apply(self, task_data: Mapping[str, Any]) -> None:
        """Copy every provided client field onto the task."""
        for field in TASK_FIELDS:
            if field in task_data:
                setattr(self, field, task_data[field])

    @validates("title")
    def _validate_title(self, key: str, value: Any) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValueError("Task validation failed: title is required")
        return value

    @validates("priority")
    def _validate_priority(self, key: str, value: Any) -> str:
        if value is None:
            return TaskPriority.MEDIUM.value
        valid_priorities = [p.value for p in TaskPriority]
        if value not in valid_priorities:
            raise ValueError(
                f"Task validation failed: priority must be one of {valid_priorities}"
            )
        return value

    @validates("deadline")
    def _validate_deadline(self, key: str, value: Any) -> datetime | None:
        return parse_datetime(value)

    @validates("daily", "completed")
    def _validate_flag(self, key: str, value: Any) -> bool:
        if value is None:
            return False
        if isinstance(value, bool):
            return value
        if isinstance(value, int) and value in (0, 1):
            return bool(value)
        if isinstance(value, str) and value.strip().lower() in _TRUE_STRINGS | _FALSE_STRINGS:
            return value.strip().lower() in _TRUE_STRINGS
        raise ValueError(f"Task validation failed: {key} must be a boolean")

    def to_dict(self) -> dict[str, Any]:
        """
        Convert the task to a dictionary representation.

        Returns:
            Dictionary containing all client-visible task fields.
        """
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "deadline": to_utc_iso(self.deadline),
            "priority": self.priority,
            "daily": self.daily,
            "completed": self.completed,
            "category": self.category,
            "createdAt": to_utc_iso(self.created_at),
            "updatedAt": to_utc_iso(self.updated_at),
        }

    def __repr__(self) -> str:
        """Return string representation of the task."""
        return f"<Task {self.id}: {self.title}>"
