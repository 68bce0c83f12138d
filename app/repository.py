"""
Task repository.

All reads and writes of users and their task lists go through
``TaskRepository``. The repository is handed a SQLAlchemy session when it is
built, so callers decide which store handle it operates on.

Writes are read-modify-write on the whole user aggregate and take no locks;
two concurrent appends for the same email can race.
"""

import logging
from contextlib import contextmanager
from typing import Any, Iterator, Mapping

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.errors import NotFoundError, PersistenceError
from app.models import Task, TaskList, User

logger = logging.getLogger(__name__)

# Order in which lists are searched when fetching a task by id
LOOKUP_ORDER = (TaskList.DAILY, TaskList.COMPLETED, TaskList.REGULAR)

# Order in which lists are searched when deleting a task
DELETE_ORDER = (TaskList.DAILY, TaskList.REGULAR, TaskList.COMPLETED)


class TaskRepository:
    """
    Data access for per-user task lists.

    Args:
        session: SQLAlchemy session used for every operation.
    """

    def __init__(self, session: Session):
        self.session = session

    @contextmanager
    def _unit_of_work(self) -> Iterator[None]:
        """Commit on success; roll back and raise PersistenceError on failure."""
        try:
            yield
            self.session.commit()
        except (ValueError, SQLAlchemyError) as exc:
            self.session.rollback()
            logger.error("Persistence failure: %s", exc)
            raise PersistenceError(str(exc)) from exc

    def find_user_by_email(self, email: str | None) -> User | None:
        """Return the user with exactly this email, or None."""
        if not email:
            return None
        return self.session.scalars(select(User).where(User.email == email)).first()

    def _require_user(self, email: str | None) -> User:
        user = self.find_user_by_email(email)
        if user is None:
            raise NotFoundError("User not found")
        return user

    def create_or_append_task(
        self, email: str, task_data: Mapping[str, Any]
    ) -> tuple[User, Task, bool]:
        """
        Add a task for ``email``, creating the user on first use.

        The task goes to the completed list if ``completed`` is set, else to
        the daily list if ``daily`` is set, else to the regular list.

        Args:
            email: Owner address.
            task_data: Client task fields.

        Returns:
            Tuple of (user, new task, whether the user was created).

        Raises:
            PersistenceError: If the task fails validation or the store
                rejects the write.
        """
        with self._unit_of_work():
            user = self.find_user_by_email(email)
            created = user is None
            if created:
                user = User(email=email)
                self.session.add(user)

            task = Task.from_task_data(task_data)
            user.tasks.append(task)
            user.touch()

        logger.info(
            "Stored task %s in %s list for %s (new user: %s)",
            task.id, task.task_list, email, created
        )
        return user, task, created

    def find_task_by_id(self, task_id: str) -> tuple[User, Task] | None:
        """
        Find a task by id across every user.

        Lists are searched daily, then completed, then regular; the first
        hit wins.

        Returns:
            Tuple of (owning user, task), or None if no list holds the id.
        """
        for task_list in LOOKUP_ORDER:
            stmt = select(Task).where(
                Task.id == task_id,
                Task.task_list == task_list.value
            )
            task = self.session.scalars(stmt).first()
            if task is not None:
                return task.user, task
        return None

    def update_task(self, email: str | None, task_id: str, task_data: Mapping[str, Any]) -> Task:
        """
        Merge ``task_data`` onto an existing task.

        The task is looked up only in the list that ``task_data`` itself
        routes to, not in the list the task currently lives in. A payload
        whose flags point at another list therefore reports the task as
        missing.

        Raises:
            NotFoundError: If the user or the task cannot be found.
            PersistenceError: If the new values fail validation or the
                store rejects the write.
        """
        user = self._require_user(email)
        task_list = TaskList.for_task_data(task_data)
        task = next((t for t in user.tasks_in(task_list) if t.id == task_id), None)
        if task is None:
            raise NotFoundError("Task not found")

        with self._unit_of_work():
            task.apply(task_data)
            user.touch()

        logger.info("Updated task %s for %s", task_id, email)
        return task

    def delete_task(self, email: str | None, task_id: str) -> None:
        """
        Remove a task from the user's lists.

        Lists are searched daily, then regular, then completed; the first
        match is removed.

        Raises:
            NotFoundError: If the user or the task cannot be found.
            PersistenceError: If the store rejects the write.
        """
        user = self._require_user(email)
        for task_list in DELETE_ORDER:
            task = next((t for t in user.tasks_in(task_list) if t.id == task_id), None)
            if task is not None:
                break
        else:
            raise NotFoundError("Task not found")

        with self._unit_of_work():
            user.tasks.remove(task)
            user.touch()

        logger.info("Deleted task %s for %s", task_id, email)
