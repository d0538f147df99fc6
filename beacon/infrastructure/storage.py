import asyncio
import contextlib
import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Protocol, Union

from sqlalchemy.exc import SQLAlchemyError

from beacon.core.config import Settings
from beacon.core.db import Base, create_engine, create_session_factory
from beacon.db.repositories.snapshot_repository import SnapshotRepository

logger = logging.getLogger(__name__)


@dataclass
class StorageResult:
    success: bool
    data: Optional[str] = None
    error: Optional[str] = None


class StorageBackend(Protocol):
    """Хранилище сериализованной коллекции страниц"""

    async def save(self, payload: str) -> StorageResult:
        ...

    async def load(self) -> StorageResult:
        ...


class JsonFileStorage:
    """Хранилище в одном JSON-файле с атомарной записью"""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        # Записи выполняются по очереди: последняя запрошенная запись побеждает
        self._lock = asyncio.Lock()

    def _write(self, payload: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=f"{self.path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp_name, self.path)
        except Exception:
            with contextlib.suppress(FileNotFoundError):
                os.unlink(tmp_name)
            raise

    def _read(self) -> Optional[str]:
        if not self.path.exists():
            return None
        return self.path.read_text(encoding="utf-8")

    async def save(self, payload: str) -> StorageResult:
        try:
            async with self._lock:
                await asyncio.to_thread(self._write, payload)
            return StorageResult(success=True)
        except OSError as e:
            logger.error(f"Failed to write {self.path}: {e}")
            return StorageResult(success=False, error=str(e))

    async def load(self) -> StorageResult:
        try:
            async with self._lock:
                data = await asyncio.to_thread(self._read)
            return StorageResult(success=True, data=data)
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Failed to read {self.path}: {e}")
            return StorageResult(success=False, error=str(e))


class DatabaseStorage:
    """Хранилище снимка в таблице через SQLAlchemy"""

    SNAPSHOT_KEY = "app-data"

    def __init__(self, database_url: str, echo: bool = False):
        self.database_url = database_url
        self.engine = create_engine(database_url, echo=echo)
        self.session_factory = create_session_factory(self.engine)
        self._initialized = False
        # Создание схемы и запись снимка не должны пересекаться
        self._lock = asyncio.Lock()

    async def _ensure_schema(self) -> None:
        if self._initialized:
            return
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        self._initialized = True

    async def save(self, payload: str) -> StorageResult:
        try:
            async with self._lock:
                await self._ensure_schema()
                async with self.session_factory() as session:
                    await SnapshotRepository(session).save_payload(self.SNAPSHOT_KEY, payload)
            return StorageResult(success=True)
        except (SQLAlchemyError, OSError) as e:
            logger.error(f"Failed to save snapshot: {e}")
            return StorageResult(success=False, error=str(e))

    async def load(self) -> StorageResult:
        try:
            async with self._lock:
                await self._ensure_schema()
                async with self.session_factory() as session:
                    data = await SnapshotRepository(session).get_payload(self.SNAPSHOT_KEY)
            return StorageResult(success=True, data=data)
        except (SQLAlchemyError, OSError) as e:
            logger.error(f"Failed to load snapshot: {e}")
            return StorageResult(success=False, error=str(e))

    async def close(self) -> None:
        await self.engine.dispose()


def create_storage(config: Settings) -> StorageBackend:
    """Выбор хранилища по настройкам"""
    if config.storage_backend == "database":
        config.data_dir.mkdir(parents=True, exist_ok=True)
        return DatabaseStorage(config.resolved_database_url(), echo=config.sql_echo)
    return JsonFileStorage(config.data_path)
