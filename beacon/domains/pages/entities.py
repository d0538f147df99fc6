import json
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Optional, List, Dict, Any


SCHEMA_VERSION = "1.0.0"
DEFAULT_ICON = "📄"
UNTITLED_TITLE = "Untitled Page"
NEW_PAGE_TITLE = "New Page"
COPY_SUFFIX = " (Copy)"
WELCOME_PAGE_ID = "welcome"
WELCOME_TITLE = "Welcome to Beacon"

NEW_PAGE_CONTENT = (
    '<div class="block"><div class="block-handle">⋮⋮</div>'
    '<div class="block-content">Start writing...</div></div>'
)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Theme(Enum):
    """Тема оформления"""
    LIGHT = "light"
    DARK = "dark"

    def toggled(self) -> "Theme":
        return Theme.DARK if self is Theme.LIGHT else Theme.LIGHT


class Page:
    """Страница - единица документа"""

    def __init__(
        self,
        id: str,
        title: str = UNTITLED_TITLE,
        icon: str = DEFAULT_ICON,
        content: str = "",
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None
    ):
        self.id = id
        self.title = title or UNTITLED_TITLE
        self.icon = icon or DEFAULT_ICON
        self.content = content
        self.created_at = created_at or utcnow()
        self.updated_at = updated_at or self.created_at

    def update_title(self, new_title: str) -> None:
        """Обновление заголовка страницы"""
        self.title = new_title.strip() if new_title and new_title.strip() else UNTITLED_TITLE
        self.updated_at = utcnow()

    def update_content(self, new_content: str) -> None:
        """Обновление содержимого страницы"""
        self.content = new_content
        self.updated_at = utcnow()

    def duplicate(self, new_id: str) -> "Page":
        """Копия страницы с новым идентификатором и свежими датами"""
        return Page(
            id=new_id,
            title=f"{self.title}{COPY_SUFFIX}",
            icon=self.icon,
            content=self.content
        )

    def to_dict(self) -> Dict[str, Any]:
        """Сериализация страницы в словарь"""
        return {
            "id": self.id,
            "title": self.title,
            "icon": self.icon,
            "content": self.content,
            "createdAt": self.created_at.isoformat(),
            "updatedAt": self.updated_at.isoformat()
        }

    def __eq__(self, other) -> bool:
        if not isinstance(other, Page):
            return False
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return f"Page(id={self.id}, title={self.title})"


class DocumentCollection:
    """Коллекция страниц - корень агрегата"""

    def __init__(
        self,
        pages: Optional[List[Page]] = None,
        current_page_id: Optional[str] = None,
        theme: Theme = Theme.LIGHT,
        version: str = SCHEMA_VERSION
    ):
        self.pages = pages if pages is not None else []
        self.current_page_id = current_page_id
        self.theme = theme
        self.version = version

    def find_page(self, page_id: Optional[str]) -> Optional[Page]:
        for page in self.pages:
            if page.id == page_id:
                return page
        return None

    def index_of(self, page_id: Optional[str]) -> int:
        for index, page in enumerate(self.pages):
            if page.id == page_id:
                return index
        return -1

    def ensure_current_page(self) -> Optional[Page]:
        """Гарантирует, что current_page_id указывает на существующую страницу"""
        page = self.find_page(self.current_page_id)
        if page is None and self.pages:
            page = self.pages[0]
            self.current_page_id = page.id
        return page

    def to_dict(self) -> Dict[str, Any]:
        """Сериализация коллекции в формат хранения"""
        return {
            "pages": [page.to_dict() for page in self.pages],
            "currentPageId": self.current_page_id,
            "theme": self.theme.value,
            "version": self.version
        }

    def to_json(self) -> str:
        """Каноническая JSON-сериализация с отступами"""
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False)

    @classmethod
    def create_default(cls, theme: Theme = Theme.LIGHT) -> "DocumentCollection":
        """Коллекция по умолчанию с приветственной страницей"""
        welcome = Page(
            id=WELCOME_PAGE_ID,
            title=WELCOME_TITLE,
            icon=DEFAULT_ICON,
            content=welcome_content()
        )
        return cls(pages=[welcome], current_page_id=welcome.id, theme=theme)

    def __eq__(self, other) -> bool:
        if not isinstance(other, DocumentCollection):
            return False
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return f"DocumentCollection(pages={len(self.pages)}, current={self.current_page_id}, theme={self.theme.value})"


@dataclass
class EditorState:
    title: str
    content: str


@dataclass
class DocumentStats:
    page_count: int
    total_words: int
    total_characters: int


def _block(inner: str, css_class: str = "") -> str:
    classes = f"block-content {css_class}".strip()
    return (
        '<div class="block">'
        '<div class="block-handle">⋮⋮</div>'
        f'<div class="{classes}">{inner}</div>'
        '</div>'
    )


def _todo(text: str, checked: bool = False) -> str:
    checkbox = "todo-checkbox checked" if checked else "todo-checkbox"
    return _block(f'<div class="{checkbox}"></div><div>{text}</div>', "todo-item")


def welcome_content() -> str:
    """Содержимое приветственной страницы"""
    return "\n".join([
        _block("Welcome to your new productivity app!"),
        _block("Main features:", "heading-2"),
        _todo("Secure local storage"),
        _todo("Modern, intuitive interface"),
        _todo("Light and dark themes", checked=True),
        _block("Start by creating a new page or editing this one. Everything is saved automatically."),
    ])


def heading_block(level: int) -> str:
    return _block(f"Heading {level}", f"heading-{level}")


def todo_block() -> str:
    return _todo("New task")


def bullet_block() -> str:
    return _block("New list item", "bullet-item")
