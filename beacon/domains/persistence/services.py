import asyncio
import json
import logging
from typing import Optional, Set

from beacon.domains.pages.entities import DocumentCollection, Theme
from beacon.domains.pages.migrator import normalize
from beacon.domains.pages.services import DocumentStore
from beacon.infrastructure.storage import StorageBackend, StorageResult

logger = logging.getLogger(__name__)


class PersistenceCoordinator:
    """Связывает хранилище документов с бэкендом: загрузка, сохранение, автосохранение"""

    def __init__(
        self,
        store: DocumentStore,
        storage: StorageBackend,
        autosave_interval: float = 15.0,
        default_theme: Theme = Theme.LIGHT
    ):
        self.store = store
        self.storage = storage
        self.autosave_interval = autosave_interval
        self.default_theme = default_theme

        self._autosave_task: Optional[asyncio.Task] = None
        self._pending_saves: Set[asyncio.Task] = set()

        store.on_change = self.request_save

    @property
    def autosave_running(self) -> bool:
        return self._autosave_task is not None and not self._autosave_task.done()

    async def load_on_startup(self) -> DocumentCollection:
        """Загрузка сохраненного состояния; при любой неудаче - коллекция по умолчанию"""
        result = await self.storage.load()
        collection = None

        if not result.success:
            logger.warning(f"Could not load saved data, starting with defaults: {result.error}")
        elif result.data is None:
            logger.info("No saved data found, starting with defaults")
        else:
            try:
                collection = normalize(json.loads(result.data))
            except json.JSONDecodeError as e:
                logger.warning(f"Saved data is not valid JSON, starting with defaults: {e}")
            else:
                if not collection.pages:
                    logger.warning("Saved data contains no pages, starting with defaults")
                    collection = None

        if collection is None:
            collection = DocumentCollection.create_default(theme=self.default_theme)

        self.store.replace_collection(collection)
        logger.info(f"Loaded {len(collection.pages)} page(s), current page {collection.current_page_id}")
        return collection

    async def save(self) -> StorageResult:
        """Запись текущего состояния; ошибки не выбрасываются, а возвращаются"""
        # Сериализуем до первого await, чтобы запись отражала состояние на момент вызова
        payload = self.store.collection.to_json()

        try:
            result = await self.storage.save(payload)
        except Exception as e:
            logger.exception("Storage backend raised during save")
            result = StorageResult(success=False, error=str(e))

        if result.success:
            logger.debug("Saved application data")
        else:
            logger.error(f"Failed to save application data: {result.error}")
        return result

    def _spawn_save(self) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(self.save())
        self._pending_saves.add(task)
        task.add_done_callback(self._pending_saves.discard)
        return task

    def request_save(self) -> None:
        """Запрос на сохранение после изменения (fire-and-forget)"""
        try:
            self._spawn_save()
        except RuntimeError:
            # Нет запущенного цикла событий - сохранит следующий цикл автосохранения
            logger.debug("No running event loop, save deferred")

    async def _autosave_loop(self, interval: float) -> None:
        while True:
            await asyncio.sleep(interval)
            self.store.capture_active_page()
            # Отмена таймера не должна прерывать уже начатую запись
            result = await asyncio.shield(self._spawn_save())
            if not result.success:
                logger.warning(f"Autosave failed, will retry next cycle: {result.error}")

    def start_autosave(self, interval: Optional[float] = None) -> None:
        """Запуск периодического автосохранения; повторный вызов перезапускает таймер"""
        self.stop_autosave()
        period = interval if interval is not None else self.autosave_interval
        self._autosave_task = asyncio.get_running_loop().create_task(self._autosave_loop(period))
        logger.info(f"Autosave started, every {period}s")

    def stop_autosave(self) -> None:
        if self._autosave_task is not None:
            self._autosave_task.cancel()
            self._autosave_task = None
            logger.info("Autosave stopped")

    async def shutdown(self) -> StorageResult:
        """Остановка таймера и финальное сохранение перед выходом"""
        task = self._autosave_task
        self.stop_autosave()
        if task is not None:
            await asyncio.gather(task, return_exceptions=True)

        if self._pending_saves:
            await asyncio.gather(*list(self._pending_saves), return_exceptions=True)

        self.store.capture_active_page()
        result = await self.save()
        logger.info("Final save on shutdown " + ("succeeded" if result.success else "failed"))
        return result
