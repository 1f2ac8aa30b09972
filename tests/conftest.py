# tests/conftest.py

from __future__ import annotations

from datetime import datetime, timedelta

import pytest
import pytz

from taskboard.schemas.task import Task
from taskboard.services.task_board import TaskBoard

from .fakes import FakeTaskApi, RecordingNotifier

# Fixed clock for every test: 2026-10-19 12:00 UTC
NOW = datetime(2026, 10, 19, 12, 0, tzinfo=pytz.utc)


def iso_day(offset: int) -> str:
    """ISO date `offset` days away from NOW."""
    return (NOW + timedelta(days=offset)).date().isoformat()


@pytest.fixture()
def now() -> datetime:
    return NOW


@pytest.fixture()
def tasks() -> list[Task]:
    """
    Four tasks in deliberately unsorted order.

    Sorted order is: 4 (High, 10-20), 2 (High, 10-21), 3 (Medium), 1 (Low).
    """
    return [
        Task(id=1, title="Write report", description="Quarterly numbers", due_date="2026-10-25", priority="Low"),
        Task(id=2, title="Pay rent", due_date="2026-10-21", priority="High", completed=True),
        Task(id=3, title="Call plumber", due_date="2026-10-20", priority="Medium"),
        Task(id=4, title="Book flights", due_date="2026-10-20T09:00:00Z", priority="High"),
    ]


@pytest.fixture()
def fake_api(tasks: list[Task]) -> FakeTaskApi:
    return FakeTaskApi(tasks)


@pytest.fixture()
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture()
def board(fake_api: FakeTaskApi, notifier: RecordingNotifier) -> TaskBoard:
    """TaskBoard wired to the in-memory API and the fixed clock."""
    return TaskBoard(fake_api, notifier=notifier, clock=lambda: NOW)
