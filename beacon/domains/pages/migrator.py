"""Нормализация сохраненных и импортированных данных к текущей схеме.

normalize() никогда не падает: отсутствующие или битые необязательные поля
заполняются значениями по умолчанию. Структурная валидация импорта
выполняется раньше, в кодеке.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Mapping, Optional

from beacon.domains.pages.entities import (
    DEFAULT_ICON, SCHEMA_VERSION, UNTITLED_TITLE,
    DocumentCollection, Page, Theme, utcnow
)

logger = logging.getLogger(__name__)


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Разбор даты из ISO-строки, epoch в миллисекундах или datetime"""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, bool):
        return None
    elif isinstance(value, (int, float)):
        try:
            parsed = datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def normalize_page(raw: Mapping[str, Any]) -> Page:
    """Восстановление страницы поле за полем"""
    now = utcnow()
    page_id = raw.get("id")
    title = _text(raw.get("title")).strip()
    icon = _text(raw.get("icon")).strip()

    return Page(
        id=str(page_id) if page_id is not None else "",
        title=title or UNTITLED_TITLE,
        icon=icon or DEFAULT_ICON,
        content=_text(raw.get("content")),
        created_at=parse_timestamp(raw.get("createdAt")) or now,
        updated_at=parse_timestamp(raw.get("updatedAt")) or now
    )


def normalize(raw: Any) -> DocumentCollection:
    """Приведение произвольной структуры к DocumentCollection текущей версии"""
    if isinstance(raw, DocumentCollection):
        raw = raw.to_dict()
    if not isinstance(raw, Mapping):
        logger.warning(f"Expected a mapping, got {type(raw).__name__}; using empty collection")
        raw = {}

    version = raw.get("version") or raw.get("schemaVersion") or SCHEMA_VERSION

    try:
        theme = Theme(raw.get("theme"))
    except (ValueError, TypeError):
        theme = Theme.LIGHT

    raw_pages = raw.get("pages")
    if not isinstance(raw_pages, list):
        raw_pages = []

    pages = [normalize_page(item) for item in raw_pages if isinstance(item, Mapping)]

    current_page_id = raw.get("currentPageId")
    if current_page_id is not None:
        current_page_id = str(current_page_id)

    return DocumentCollection(
        pages=pages,
        current_page_id=current_page_id,
        theme=theme,
        version=str(version)
    )
