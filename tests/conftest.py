"""
Test fixtures for the Prompt Pocket test suite.

Provides:
- Temporary directory fixtures (isolated from the user's data directory)
- Mock data builders for creating groups and prompts
- Store fixtures preloaded with a sample tree
"""

import shutil
import tempfile
from pathlib import Path
from typing import Generator, List, Optional

import pytest

from pocket.constants import DATA_DIR_ENV_VAR, INITIALIZED_KEY, STORAGE_KEY
from pocket.managers.events import EventBus
from pocket.managers.storage_manager import MemoryStorage, StorageManager
from pocket.managers.store_manager import StoreManager
from pocket.models.base import Group, Prompt
from pocket.models.files import PromptTree


# =============================================================================
# Temporary Directory Fixtures
# =============================================================================


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test isolation."""
    temp_path = Path(tempfile.mkdtemp(prefix="pocket_test_"))
    yield temp_path
    # Cleanup
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def data_dir(temp_dir: Path) -> Path:
    """Path to a (not yet created) data directory."""
    return temp_dir / "data"


# =============================================================================
# Mock Data Builders
# =============================================================================


class MockDataBuilder:
    """Helper class for building groups and prompts for testing."""

    @staticmethod
    def create_prompt(
        id: str = "prompt-1",
        title: str = "Test Prompt",
        content: str = "Test content",
    ) -> Prompt:
        """Create a Prompt for testing."""
        return Prompt(id=id, title=title, content=content)

    @staticmethod
    def create_group(
        id: str = "group-1",
        name: str = "Test Group",
        color: Optional[str] = None,
        children: Optional[List[Group]] = None,
        prompts: Optional[List[Prompt]] = None,
    ) -> Group:
        """Create a Group for testing."""
        return Group(
            id=id,
            name=name,
            color=color,
            children=children or [],
            prompts=prompts or [],
        )


@pytest.fixture
def mock_data() -> MockDataBuilder:
    """Provide mock data builder for test item creation."""
    return MockDataBuilder()


# =============================================================================
# Tree Fixtures
# =============================================================================


@pytest.fixture
def sample_tree(mock_data: MockDataBuilder) -> PromptTree:
    """Create a sample tree with nesting for testing.

    Structure:
        Work (g1, blue)
        ├── p1 Greeting, p2 Sign-off, p3 Follow-up
        └── Sub (g2)
            ├── p4 Nested
            └── Deep (g3, red)
                └── p5 Deepest
        Personal (g4)
        └── p6 Recipe
    """
    deep = mock_data.create_group(
        id="g3",
        name="Deep",
        color="red",
        prompts=[mock_data.create_prompt("p5", "Deepest", "Bottom of the tree")],
    )
    sub = mock_data.create_group(
        id="g2",
        name="Sub",
        children=[deep],
        prompts=[mock_data.create_prompt("p4", "Nested", "Inside a subgroup")],
    )
    work = mock_data.create_group(
        id="g1",
        name="Work",
        color="blue",
        children=[sub],
        prompts=[
            mock_data.create_prompt("p1", "Greeting", "Hi"),
            mock_data.create_prompt("p2", "Sign-off", "Kind regards"),
            mock_data.create_prompt("p3", "Follow-up", "Just checking in on the greeting"),
        ],
    )
    personal = mock_data.create_group(
        id="g4",
        name="Personal",
        prompts=[mock_data.create_prompt("p6", "Recipe", "Cook pasta for 9 minutes")],
    )
    return PromptTree(groups=[work, personal])


def seeded_storage(tree: PromptTree) -> MemoryStorage:
    """MemoryStorage that already holds tree and has been initialized."""
    return MemoryStorage(
        {STORAGE_KEY: tree.model_dump(mode="json"), INITIALIZED_KEY: True}
    )


@pytest.fixture
def memory_storage() -> MemoryStorage:
    """Empty in-memory storage (first run)."""
    return MemoryStorage()


@pytest.fixture
def event_bus() -> EventBus:
    return EventBus()


@pytest.fixture
def store(sample_tree: PromptTree, event_bus: EventBus) -> StoreManager:
    """StoreManager over in-memory storage holding sample_tree."""
    return StoreManager(seeded_storage(sample_tree), event_bus)


@pytest.fixture
def empty_store(memory_storage: MemoryStorage) -> StoreManager:
    """StoreManager over storage that has never been used."""
    return StoreManager(memory_storage)


@pytest.fixture
def file_store(data_dir: Path) -> StoreManager:
    """StoreManager persisting JSON files in a temporary data directory."""
    return StoreManager(StorageManager(data_dir))


@pytest.fixture
def pocket_home(data_dir: Path, monkeypatch) -> Path:
    """Point the CLI at a temporary data directory."""
    monkeypatch.setenv(DATA_DIR_ENV_VAR, str(data_dir))
    return data_dir
