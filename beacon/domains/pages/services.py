import logging
import re
import time
from typing import Callable, List, Optional, Union

from beacon.core.exceptions import CannotDeleteLastPage
from beacon.domains.pages.editor import FORMAT_COMMANDS, BufferedEditorSurface, EditorSurface
from beacon.domains.pages.entities import (
    DEFAULT_ICON, NEW_PAGE_CONTENT, NEW_PAGE_TITLE, UNTITLED_TITLE,
    DocumentCollection, DocumentStats, Page, Theme,
    bullet_block, heading_block, todo_block, utcnow
)

logger = logging.getLogger(__name__)

TAG_PATTERN = re.compile(r"<[^>]*>")


class DocumentStore:
    """Владелец коллекции страниц в памяти: CRUD, поиск, статистика"""

    def __init__(
        self,
        collection: Optional[DocumentCollection] = None,
        editor: Optional[EditorSurface] = None
    ):
        self.collection = collection or DocumentCollection.create_default()
        self.editor = editor if editor is not None else BufferedEditorSurface()
        # Вызывается после изменений, требующих сохранения (сама запись - у координатора)
        self.on_change: Optional[Callable[[], None]] = None
        self._last_issued_id = 0

        self.collection.ensure_current_page()
        self._show_active_page()

    @property
    def pages(self) -> List[Page]:
        return self.collection.pages

    @property
    def theme(self) -> Theme:
        return self.collection.theme

    @property
    def active_page(self) -> Optional[Page]:
        return self.collection.ensure_current_page()

    def _show_active_page(self) -> None:
        page = self.active_page
        if page is not None:
            self.editor.show(page)

    def _request_persistence(self) -> None:
        if self.on_change is not None:
            self.on_change()

    def _generate_page_id(self) -> str:
        """Идентификатор на основе времени в миллисекундах, строго возрастающий"""
        candidate = time.time_ns() // 1_000_000
        if candidate <= self._last_issued_id:
            candidate = self._last_issued_id + 1
        while self.collection.find_page(str(candidate)) is not None:
            candidate += 1
        self._last_issued_id = candidate
        return str(candidate)

    def capture_active_page(self) -> bool:
        """Перенос заголовка и содержимого из редактора в активную страницу"""
        page = self.active_page
        state = self.editor.read()
        if page is None or state is None:
            return False

        title = state.title.strip() or UNTITLED_TITLE
        changed = False
        if state.content != page.content:
            page.content = state.content
            changed = True
        if title != page.title:
            page.title = title
            changed = True

        if changed:
            page.updated_at = utcnow()
        return changed

    def create_page(self, title: str = "", icon: str = "") -> Page:
        """Создание новой страницы, которая становится активной"""
        self.capture_active_page()

        page = Page(
            id=self._generate_page_id(),
            title=title.strip() if title and title.strip() else NEW_PAGE_TITLE,
            icon=icon.strip() if icon and icon.strip() else DEFAULT_ICON,
            content=NEW_PAGE_CONTENT
        )
        self.collection.pages.append(page)
        self.collection.current_page_id = page.id
        self.editor.show(page)

        logger.info(f"Created page {page.id} ({page.title})")
        self._request_persistence()
        return page

    def select_page(self, index: int) -> bool:
        """Переключение на страницу по индексу; вне диапазона - ничего не делает"""
        if index < 0 or index >= len(self.collection.pages):
            logger.debug(f"Ignoring selection of page index {index}")
            return False

        self.capture_active_page()
        page = self.collection.pages[index]
        self.collection.current_page_id = page.id
        self.editor.show(page)
        return True

    def select_page_by_id(self, page_id: str) -> bool:
        return self.select_page(self.collection.index_of(page_id))

    def update_active_page_title(self, title: str) -> Optional[Page]:
        """Обновление заголовка активной страницы"""
        page = self.active_page
        if page is None:
            return None
        # Сначала забираем несохраненное содержимое, затем обновляем редактор новым заголовком
        self.capture_active_page()
        page.update_title(title)
        self.editor.show(page)
        return page

    def delete_active_page(self) -> Page:
        """Удаление активной страницы; последнюю страницу удалить нельзя"""
        if len(self.collection.pages) <= 1:
            raise CannotDeleteLastPage()

        self.collection.ensure_current_page()
        index = self.collection.index_of(self.collection.current_page_id)
        removed = self.collection.pages.pop(index)

        new_index = index if index < len(self.collection.pages) else index - 1
        self.collection.current_page_id = self.collection.pages[new_index].id
        self._show_active_page()

        logger.info(f"Deleted page {removed.id} ({removed.title})")
        self._request_persistence()
        return removed

    def duplicate_active_page(self) -> Optional[Page]:
        """Копия активной страницы, которая становится активной"""
        self.capture_active_page()
        source = self.active_page
        if source is None:
            return None

        page = source.duplicate(self._generate_page_id())
        self.collection.pages.append(page)
        self.collection.current_page_id = page.id
        self.editor.show(page)

        logger.info(f"Duplicated page {source.id} as {page.id}")
        self._request_persistence()
        return page

    def search_pages(self, query: str) -> List[Page]:
        """Поиск по заголовку и содержимому без учета регистра"""
        if not query or not query.strip():
            return list(self.collection.pages)

        term = query.lower()
        return [
            page for page in self.collection.pages
            if term in page.title.lower() or term in page.content.lower()
        ]

    def toggle_theme(self) -> Theme:
        self.collection.theme = self.collection.theme.toggled()
        self._request_persistence()
        return self.collection.theme

    def set_theme(self, theme: Union[Theme, str]) -> Theme:
        self.collection.theme = Theme(theme)
        return self.collection.theme

    def compute_stats(self) -> DocumentStats:
        """Количество страниц, слов и символов без учета разметки"""
        total_words = 0
        total_characters = 0

        for page in self.collection.pages:
            text = TAG_PATTERN.sub("", page.content).strip()
            total_characters += len(text)
            total_words += len([word for word in text.split() if word])

        return DocumentStats(
            page_count=len(self.collection.pages),
            total_words=total_words,
            total_characters=total_characters
        )

    def format_text(self, command: str) -> None:
        """Передача команды форматирования редактору"""
        if command not in FORMAT_COMMANDS:
            raise ValueError(f"Unsupported format command: {command}")
        self.editor.apply_format(command)
        self.capture_active_page()

    def insert_block(self, kind: str, level: Optional[int] = None) -> None:
        """Добавление блока в конец содержимого редактора"""
        if kind == "heading":
            if level not in (1, 2, 3):
                raise ValueError(f"Unsupported heading level: {level}")
            markup = heading_block(level)
        elif kind == "todo":
            markup = todo_block()
        elif kind == "bullet":
            markup = bullet_block()
        else:
            raise ValueError(f"Unsupported block kind: {kind}")

        self.editor.append_markup(markup)
        self.capture_active_page()

    def replace_collection(self, collection: DocumentCollection, select_first: bool = False) -> None:
        """Полная замена коллекции (загрузка или импорт)"""
        if not collection.pages:
            raise ValueError("Collection must contain at least one page")

        if select_first:
            collection.current_page_id = collection.pages[0].id
        collection.ensure_current_page()

        self.collection = collection
        self._show_active_page()

    def snapshot(self) -> dict:
        """Сериализация текущего состояния в момент вызова"""
        return self.collection.to_dict()
