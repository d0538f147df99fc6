from typing import Optional

from fastapi import Request

from beacon.core.config import Settings, settings as default_settings
from beacon.domains.exchange.services import ExchangeService
from beacon.domains.pages.editor import BufferedEditorSurface
from beacon.domains.pages.entities import DocumentCollection, Theme
from beacon.domains.pages.services import DocumentStore
from beacon.domains.persistence.services import PersistenceCoordinator
from beacon.infrastructure.files import FileAccess, LocalFileAccess
from beacon.infrastructure.storage import StorageBackend, create_storage


class Workspace:
    """Сервисы ядра одного процесса, собранные явно"""

    def __init__(
        self,
        config: Optional[Settings] = None,
        storage: Optional[StorageBackend] = None,
        file_access: Optional[FileAccess] = None
    ):
        self.config = config or default_settings
        default_theme = Theme(self.config.default_theme)

        self.editor = BufferedEditorSurface()
        self.store = DocumentStore(
            collection=DocumentCollection.create_default(theme=default_theme),
            editor=self.editor
        )
        self.storage = storage if storage is not None else create_storage(self.config)
        self.coordinator = PersistenceCoordinator(
            self.store,
            self.storage,
            autosave_interval=self.config.autosave_interval,
            default_theme=default_theme
        )
        self.exchange = ExchangeService(
            self.store,
            self.coordinator,
            file_access if file_access is not None else LocalFileAccess()
        )

    async def start(self, autosave: bool = True) -> None:
        """Загрузка состояния и запуск автосохранения"""
        await self.coordinator.load_on_startup()
        if autosave:
            self.coordinator.start_autosave()

    async def stop(self) -> None:
        """Остановка автосохранения и финальная запись"""
        await self.coordinator.shutdown()
        close = getattr(self.storage, "close", None)
        if close is not None:
            await close()


def get_workspace(request: Request) -> Workspace:
    """Зависимость FastAPI: workspace текущего приложения"""
    return request.app.state.workspace
