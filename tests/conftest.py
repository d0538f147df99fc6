import pytest

from beacon.core.config import Settings
from beacon.core.workspace import Workspace
from beacon.domains.pages.entities import DocumentCollection, Page
from beacon.domains.pages.services import DocumentStore
from beacon.infrastructure.files import LocalFileAccess
from beacon.infrastructure.storage import StorageResult


class MemoryStorage:
    """Хранилище в памяти для тестов"""

    def __init__(self, data=None, fail_load=False, fail_save=False, raise_on_save=False):
        self.data = data
        self.fail_load = fail_load
        self.fail_save = fail_save
        self.raise_on_save = raise_on_save
        self.saved = []

    async def save(self, payload):
        if self.raise_on_save:
            raise RuntimeError("disk exploded")
        if self.fail_save:
            return StorageResult(success=False, error="disk full")
        self.saved.append(payload)
        self.data = payload
        return StorageResult(success=True)

    async def load(self):
        if self.fail_load:
            return StorageResult(success=False, error="permission denied")
        return StorageResult(success=True, data=self.data)


@pytest.fixture
def memory_storage():
    return MemoryStorage()


@pytest.fixture
def config(tmp_path):
    return Settings(data_dir=tmp_path / "data", autosave_interval=0.05)


@pytest.fixture
def store():
    return DocumentStore()


@pytest.fixture
def notes_collection():
    pages = [
        Page(id="a", title="Groceries", icon="🛒", content="<div>Milk and eggs</div>"),
        Page(id="b", title="Notes", icon="📝", content="<div>Meeting with Bob</div>"),
        Page(id="c", title="Ideas", icon="💡", content="<p>Build a <b>boat</b></p>"),
    ]
    return DocumentCollection(pages=pages, current_page_id="b")


@pytest.fixture
def notes_store(notes_collection):
    return DocumentStore(collection=notes_collection)


@pytest.fixture
def workspace(config, memory_storage):
    return Workspace(config=config, storage=memory_storage, file_access=LocalFileAccess())
