"""Pytest configuration and fixtures."""
import sys
from pathlib import Path
from unittest.mock import MagicMock

# Add src and project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest

from escala.models.assignment import Assignment
from escala.models.period import Period
from escala.models.person import Person
from escala.store.base import RosterStore
from escala.store.sqlite_store import SqliteRosterStore


@pytest.fixture
def sample_people():
    """A small roster."""
    return [
        Person(id="p-ana", name="Ana"),
        Person(id="p-bruno", name="Bruno"),
        Person(id="p-carla", name="Carla"),
    ]


@pytest.fixture
def sample_assignments():
    """Assignments in January 2026."""
    return [
        Assignment(date="2026-01-04", period=Period.MORNING, person1_id="p-ana", person2_id="p-bruno"),
        Assignment(date="2026-01-04", period=Period.EVENING, person1_id="p-carla"),
        Assignment(date="2026-01-07", period=Period.EVENING, person2_id="p-ana"),
    ]


@pytest.fixture
def sqlite_store(tmp_path):
    """An empty store with the schema created."""
    return SqliteRosterStore(tmp_path / "escala.db", create_schema=True)


@pytest.fixture
def mock_store(sample_people, sample_assignments):
    """A store double that serves the sample data and accepts every write."""
    store = MagicMock(spec=RosterStore)
    store.fetch_people.return_value = list(sample_people)
    store.fetch_assignments.return_value = list(sample_assignments)
    return store
