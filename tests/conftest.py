import pytest

from history import HistoryStore, MemoryStore
from models import ColumnDescriptor


@pytest.fixture
def history():
    return HistoryStore(MemoryStore())


@pytest.fixture
def users_structure():
    return [
        ColumnDescriptor("id", "bigint", True),
        ColumnDescriptor("name", "text", False),
    ]
