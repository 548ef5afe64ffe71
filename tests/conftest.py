import os

# Select TestSettings before anything reads the config package
os.environ["MODE"] = "test"

import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

from main import app as fastapi_app
import db as project_db
import db_models  # noqa: F401  ensure models are imported
from db_base import Base
from core.collaborator import StorageCollaborator, UploadResult
from core.descendants import first_level_components
from core.entities import AttachmentInfo
from core.errors import DeletionError, UploadError
from storage import LocalStorageDriver, get_storage


class InMemoryCollaborator(StorageCollaborator):
    """Collaborator keeping records and files in dicts, recording every call.

    Names in ``failing_uploads`` make uploads fail; ids or paths in
    ``failing_deletes`` make deletions fail. ``raising`` maps a file name,
    id or path to an arbitrary exception raised instead.
    """

    def __init__(self):
        self.assets = {}
        self.components = {}
        self.files = {}
        self.calls = []
        self.failing_uploads = set()
        self.failing_deletes = set()
        self.raising = {}
        self._uploads = 0

    def calls_to(self, name):
        return [args for call, *args in self.calls if call == name]

    async def list_assets(self):
        return [a.model_copy(deep=True) for a in self.assets.values()]

    async def list_components(self):
        return [c.model_copy(deep=True) for c in self.components.values()]

    async def upsert_asset(self, asset):
        self.calls.append(("upsert_asset", asset.id))
        self.assets[asset.id] = asset.model_copy(deep=True)
        return asset.model_copy(deep=True)

    async def delete_asset(self, asset_id):
        self.calls.append(("delete_asset", asset_id))
        if asset_id in self.failing_deletes:
            raise DeletionError(asset_id, "storage offline")
        self.assets.pop(asset_id, None)
        for component_id in first_level_components(self.components.values(), asset_id):
            self.components.pop(component_id)

    async def upsert_component(self, component):
        self.calls.append(("upsert_component", component.id))
        self.components[component.id] = component.model_copy(deep=True)
        return component.model_copy(deep=True)

    async def delete_component(self, component_id):
        self.calls.append(("delete_component", component_id))
        if component_id in self.raising:
            raise self.raising[component_id]
        if component_id in self.failing_deletes:
            raise DeletionError(component_id, "storage offline")
        self.components.pop(component_id, None)

    async def upload_attachment(self, file_ref, slot, owner_id):
        self.calls.append(("upload_attachment", file_ref.name, slot.value, owner_id))
        if file_ref.name in self.raising:
            raise self.raising[file_ref.name]
        if file_ref.name in self.failing_uploads:
            raise UploadError(file_ref.name, slot.value, "network error")
        self._uploads += 1
        file_name = f"{self._uploads:04d}-{file_ref.name}"
        path = f"/{slot.folder}/{file_name}"
        self.files[path] = file_ref.content
        info = AttachmentInfo(
            original_name=file_ref.name,
            size=file_ref.size,
            file_name=file_name,
            mime_type=file_ref.mime_type,
            last_modified=file_ref.last_modified,
        )
        return UploadResult(path=path, file_info=info)

    async def delete_attachment_file(self, path):
        self.calls.append(("delete_attachment_file", path))
        if path in self.raising:
            raise self.raising[path]
        if path in self.failing_deletes:
            raise DeletionError(path, "permission denied")
        self.files.pop(path, None)


@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"


@pytest.fixture
def collaborator():
    return InMemoryCollaborator()


@pytest.fixture
async def db_engine():
    # One in-memory database per test, shared by every session through StaticPool
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def storage_dir(tmp_path):
    return tmp_path / "data"


@pytest.fixture
def storage(storage_dir):
    return LocalStorageDriver({"base_path": str(storage_dir)})


@pytest.fixture
async def async_client(db_engine, storage):
    AsyncSessionTest = async_sessionmaker(
        bind=db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

    # Override the get_session dependency to create a fresh session for each request
    async def override_get_session():
        async with AsyncSessionTest() as session:
            yield session

    fastapi_app.dependency_overrides[project_db.get_session] = override_get_session
    fastapi_app.dependency_overrides[get_storage] = lambda: storage

    async with AsyncClient(transport=ASGITransport(app=fastapi_app), base_url="http://testserver") as ac:
        yield ac

    # Clean up
    fastapi_app.dependency_overrides.clear()
