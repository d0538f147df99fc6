from beacon.domains.pages.entities import (
    Page, DocumentCollection, DocumentStats, EditorState, Theme, SCHEMA_VERSION
)
from beacon.domains.pages.editor import EditorSurface, BufferedEditorSurface
from beacon.domains.pages.migrator import normalize, parse_timestamp
from beacon.domains.pages.services import DocumentStore

__all__ = [
    "Page", "DocumentCollection", "DocumentStats", "EditorState", "Theme", "SCHEMA_VERSION",
    "EditorSurface", "BufferedEditorSurface",
    "normalize", "parse_timestamp",
    "DocumentStore"
]
