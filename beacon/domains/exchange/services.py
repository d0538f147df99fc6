import logging
from pathlib import Path
from typing import Callable, Union

from beacon.core.exceptions import StorageUnavailable
from beacon.domains.exchange.codec import export_as_html, export_as_json, parse_import
from beacon.domains.pages.services import DocumentStore
from beacon.domains.persistence.services import PersistenceCoordinator
from beacon.infrastructure.files import FileAccess, FileResult

logger = logging.getLogger(__name__)


class ExchangeService:
    """Сервис экспорта и импорта коллекции страниц"""

    def __init__(
        self,
        store: DocumentStore,
        coordinator: PersistenceCoordinator,
        file_access: FileAccess
    ):
        self.store = store
        self.coordinator = coordinator
        self.file_access = file_access

    def render(self, format_type: str) -> str:
        """Экспорт коллекции в строку заданного формата"""
        self.store.capture_active_page()

        if format_type == "json":
            return export_as_json(self.store.collection)
        elif format_type == "html":
            return export_as_html(self.store.collection)
        raise ValueError(f"Unsupported format: {format_type}")

    async def export_data(self, format_type: str, path: Union[str, Path]) -> FileResult:
        """Экспорт коллекции в файл"""
        content = self.render(format_type)
        result = await self.file_access.write_file(path, content)

        if result.success:
            logger.info(f"Exported {len(self.store.pages)} page(s) as {format_type} to {path}")
        else:
            logger.error(f"Export to {path} failed: {result.error}")
        return result

    async def import_data(self, path: Union[str, Path], confirm: Callable[[], bool]) -> bool:
        """Импорт с полной заменой коллекции после подтверждения пользователя"""
        result = await self.file_access.read_file(path)
        if not result.success or result.content is None:
            raise StorageUnavailable(f"Could not read {path}: {result.error}", path=str(path))

        collection = parse_import(result.content, Path(path).suffix)
        if collection is None:
            return False

        if not confirm():
            logger.info(f"Import of {path} cancelled by user")
            return False

        self.store.replace_collection(collection, select_first=True)
        await self.coordinator.save()

        logger.info(f"Imported {len(collection.pages)} page(s) from {path}")
        return True
