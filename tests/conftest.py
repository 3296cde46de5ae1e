"""
Pytest fixtures for Journal tests.
"""
import sys
import pytest
from pathlib import Path
from dotenv import load_dotenv

# Ensure src/ is on sys.path so tests can import journal_core.
ROOT = Path(__file__).resolve().parent.parent
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

# Load environment variables
load_dotenv()

from journal_core.config import Settings  # noqa: E402
from journal_core.persistence import PersistenceAdapter  # noqa: E402
from journal_core.storage import InMemoryStorage  # noqa: E402
from journal_core.store import JournalStore  # noqa: E402


class FailingStorage:
    """Storage whose reads and writes always raise."""

    def __init__(self, message: str = "disk full"):
        self.message = message
        self.write_attempts = 0

    async def get_item(self, key):
        raise OSError(self.message)

    async def set_item(self, key, value):
        self.write_attempts += 1
        raise OSError(self.message)

    async def remove_item(self, key):
        raise OSError(self.message)


@pytest.fixture
def settings(tmp_path):
    """Settings pointing storage at a temporary directory."""
    return Settings(data_path=str(tmp_path))


@pytest.fixture
def storage():
    return InMemoryStorage()


@pytest.fixture
def adapter(storage, settings):
    return PersistenceAdapter(storage, settings=settings)


@pytest.fixture
def store(adapter):
    """A store with default state over in-memory storage."""
    return JournalStore(adapter)


@pytest.fixture
def failing_store(settings):
    """A store whose every save fails."""
    return JournalStore(PersistenceAdapter(FailingStorage(), settings=settings))
