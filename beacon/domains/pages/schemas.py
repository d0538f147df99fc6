from pydantic import BaseModel, Field, ConfigDict
from typing import Optional, List, Literal
from datetime import datetime


class PageCreate(BaseModel):
    """Схема для создания страницы"""
    title: str = Field(default="", max_length=255)
    icon: str = Field(default="", max_length=16)


class PageTitleUpdate(BaseModel):
    """Схема для обновления заголовка"""
    title: str = Field(default="", max_length=255)


class EditorUpdate(BaseModel):
    """Текущее состояние редактора, переданное из UI"""
    title: Optional[str] = Field(None, max_length=255)
    content: Optional[str] = Field(None, max_length=10000000)


class FormatRequest(BaseModel):
    command: Literal["bold", "italic", "underline"]


class BlockInsertRequest(BaseModel):
    kind: Literal["heading", "todo", "bullet"]
    level: Optional[int] = Field(None, ge=1, le=3)


class PageResponse(BaseModel):
    """Схема для ответа с данными страницы"""
    id: str
    title: str
    icon: str
    content: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PageListResponse(BaseModel):
    """Схема для списка страниц"""
    pages: List[PageResponse]
    current_page_id: Optional[str]
    total: int
    query: Optional[str] = None


class ActivePageResponse(BaseModel):
    page: PageResponse
    index: int
    pending_commands: List[str] = []


class StatsResponse(BaseModel):
    """Схема для статистики по всем страницам"""
    page_count: int
    total_words: int
    total_characters: int

    model_config = ConfigDict(from_attributes=True)


class ThemeUpdate(BaseModel):
    theme: Literal["light", "dark"]


class ThemeResponse(BaseModel):
    theme: str


class SaveResponse(BaseModel):
    success: bool
    error: Optional[str] = None
