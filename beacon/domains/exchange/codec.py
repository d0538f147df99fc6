import html
import json
import logging
from datetime import datetime
from typing import Optional

from pydantic import ValidationError

from beacon.core.config import settings
from beacon.core.exceptions import MalformedImport
from beacon.domains.exchange.schemas import ImportPayload
from beacon.domains.pages.entities import DocumentCollection, Page, utcnow
from beacon.domains.pages.migrator import normalize

logger = logging.getLogger(__name__)

IMPORTABLE_EXTENSIONS = ("json",)

EXPORT_STYLESHEET = """
body { font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif; margin: 0; padding: 20px; }
.page { margin-bottom: 40px; padding: 20px; border: 1px solid #eee; border-radius: 8px; }
.page h1 { margin-top: 0; }
.page footer { display: flex; gap: 16px; color: #888; }
.heading-1 { font-size: 32px; font-weight: 700; margin: 20px 0 10px 0; }
.heading-2 { font-size: 24px; font-weight: 600; margin: 16px 0 8px 0; }
.heading-3 { font-size: 20px; font-weight: 600; margin: 12px 0 6px 0; }
.block-handle { display: none; }
.todo-item { display: flex; align-items: flex-start; gap: 8px; }
.todo-checkbox { width: 16px; height: 16px; border: 2px solid #ccc; border-radius: 3px; }
.todo-checkbox.checked { background: #2383e2; border-color: #2383e2; }
.bullet-item::before { content: '•'; margin-right: 8px; }
"""


def export_as_json(collection: DocumentCollection) -> str:
    """Каноническая сериализация коллекции"""
    return collection.to_json()


def _render_page(page: Page, date_format: str) -> str:
    return f"""
  <section class="page" id="page-{html.escape(page.id)}">
    <h1>{html.escape(page.icon)} {html.escape(page.title)}</h1>
    <div class="page-content">
{page.content}
    </div>
    <footer>
      <small>Created: {page.created_at.strftime(date_format)}</small>
      <small>Updated: {page.updated_at.strftime(date_format)}</small>
    </footer>
  </section>"""


def export_as_html(
    collection: DocumentCollection,
    exported_at: Optional[datetime] = None,
    date_format: Optional[str] = None,
    datetime_format: Optional[str] = None
) -> str:
    """Статический HTML со всеми страницами; обратно не импортируется"""
    exported_at = exported_at or utcnow()
    date_format = date_format or settings.export_date_format
    datetime_format = datetime_format or settings.export_datetime_format
    sections = "".join(_render_page(page, date_format) for page in collection.pages)

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <title>Beacon Export</title>
  <style>{EXPORT_STYLESHEET}  </style>
</head>
<body>
  <h1>Beacon Export</h1>
  <p>Exported at: {exported_at.strftime(datetime_format)}</p>{sections}
</body>
</html>
"""


def normalize_extension(extension: str) -> str:
    return extension.strip().lstrip(".").lower()


def validate_payload(raw) -> ImportPayload:
    """Структурная проверка до миграции; любая ошибка отклоняет импорт целиком"""
    if not raw or not isinstance(raw, dict):
        raise MalformedImport("Import payload must be a non-empty JSON object")

    try:
        return ImportPayload.model_validate(raw)
    except ValidationError as e:
        errors = [
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in e.errors()
        ]
        raise MalformedImport("Import payload failed validation", errors=errors) from e


def parse_import(content: str, extension: str) -> Optional[DocumentCollection]:
    """Разбор импортируемого файла. Для неподдерживаемых расширений - None"""
    if normalize_extension(extension) not in IMPORTABLE_EXTENSIONS:
        logger.info(f"Ignoring import of .{normalize_extension(extension)} file")
        return None

    try:
        raw = json.loads(content)
    except json.JSONDecodeError as e:
        raise MalformedImport(f"Invalid JSON: {e}") from e

    validate_payload(raw)
    return normalize(raw)
