from typing import List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr, field_validator


class ImportedPage(BaseModel):
    """Страница из импортируемого файла - проверяется только наличие полей"""
    id: Union[StrictStr, StrictInt]
    title: Optional[StrictStr] = None
    content: StrictStr

    model_config = ConfigDict(extra="allow")

    @field_validator("id")
    @classmethod
    def validate_id(cls, v):
        if (isinstance(v, str) and not v.strip()) or not v:
            raise ValueError("Page id cannot be empty")
        return v


class ImportPayload(BaseModel):
    """Корневая структура импортируемого JSON"""
    pages: List[ImportedPage] = Field(..., min_length=1)

    model_config = ConfigDict(extra="allow")

    @field_validator("pages")
    @classmethod
    def validate_unique_ids(cls, v):
        seen = set()
        for page in v:
            key = str(page.id)
            if key in seen:
                raise ValueError(f"Duplicate page id: {key}")
            seen.add(key)
        return v


class ExportRequest(BaseModel):
    """Запрос на экспорт коллекции"""
    format: Literal["json", "html"]
    path: str = Field(..., min_length=1)


class ExportResponse(BaseModel):
    format: str
    path: str
    success: bool
    error: Optional[str] = None


class ImportRequest(BaseModel):
    """Запрос на импорт из файла"""
    path: str = Field(..., min_length=1)
    confirmed: bool = False


class ImportResponse(BaseModel):
    path: str
    imported: bool
    page_count: int
    current_page_id: Optional[str] = None
