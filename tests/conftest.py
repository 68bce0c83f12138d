"""
Shared pytest fixtures for the Task Manager test suite.

This module contains fixtures that are shared across all test modules.
Fixtures follow the Arrange-Act-Assert (AAA) pattern and ensure
test isolation by providing fresh data for each test.

Key Concepts Demonstrated:
- Fixture scopes (function, session)
- Fixture dependencies
- Test data factories
- Database setup/teardown
- Test client creation
"""

import os
import pytest
from datetime import datetime, timedelta, timezone
from typing import Any
from faker import Faker

# Set testing environment before importing app
os.environ["FLASK_ENV"] = "testing"

from app import create_app, db
from app.models import Task, TaskPriority
from app.repository import TaskRepository


# Initialize Faker for generating test data
fake = Faker()


# -----------------------------------------------------------------------------
# Application Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture(scope="session")
def app():
    """
    Create application instance for the test session.

    The 'session' scope means the same app instance is reused
    for all tests.

    Yields:
        Flask application instance configured for testing.
    """
    application = create_app("testing")
    yield application


@pytest.fixture(scope="function")
def client(app):
    """
    Create a test client for making HTTP requests.

    Args:
        app: Flask application fixture.

    Yields:
        Flask test client for making HTTP requests.
    """
    with app.test_client() as test_client:
        yield test_client


@pytest.fixture(scope="function")
def db_session(app):
    """
    Create a fresh database for each test.

    Tables are created before the test and dropped afterwards, so no
    user or task survives from one test to the next.

    Args:
        app: Flask application fixture.

    Yields:
        Flask-SQLAlchemy extension object.
    """
    with app.app_context():
        db.create_all()
        yield db
        db.session.rollback()
        db.drop_all()


@pytest.fixture
def repository(db_session) -> TaskRepository:
    """Provide a repository bound to the test session."""
    return TaskRepository(db_session.session)


# -----------------------------------------------------------------------------
# Test Data Factory Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def user_email() -> str:
    """Provide a random, unused email address."""
    return fake.unique.email()


@pytest.fixture
def task_factory(repository, user_email):
    """
    Factory fixture for storing tasks through the repository.

    Example:
        def test_something(task_factory):
            task = task_factory(title="My Task", daily=True)
            assert task.task_list == "daily"
    """

    def _create_task(email: str | None = None, **task_data: Any) -> Task:
        """
        Store a task for ``email`` (defaults to ``user_email``).

        Args:
            email: Owner address.
            **task_data: Task fields; a random title is used if omitted.

        Returns:
            The stored Task instance.
        """
        task_data.setdefault("title", fake.sentence(nb_words=4))
        _, task, _ = repository.create_or_append_task(email or user_email, task_data)
        return task

    return _create_task


@pytest.fixture
def sample_task(task_factory) -> Task:
    """Create a single task in the regular list."""
    return task_factory(
        title="Sample Task",
        description="This is a sample task for testing",
        priority=TaskPriority.MEDIUM.value
    )


@pytest.fixture
def daily_task(task_factory) -> Task:
    """Create a single task in the daily list."""
    return task_factory(title="Standup", daily=True)


@pytest.fixture
def completed_task(task_factory) -> Task:
    """Create a single task in the completed list."""
    return task_factory(title="Ship release", completed=True)


# -----------------------------------------------------------------------------
# Test Data Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def valid_task_data() -> dict[str, Any]:
    """
    Provide valid task data for POST/PUT requests.

    Returns:
        Dictionary with valid task field values.
    """
    return {
        "title": "Test Task",
        "description": "This is a test task description",
        "priority": TaskPriority.HIGH.value,
        "deadline": (datetime.now(timezone.utc) + timedelta(days=7)).isoformat(),
        "category": "work",
    }


@pytest.fixture
def api_headers() -> dict[str, str]:
    """
    Provide common headers for API requests.

    Returns:
        Dictionary of HTTP headers.
    """
    return {
        "Content-Type": "application/json",
        "Accept": "application/json"
    }
