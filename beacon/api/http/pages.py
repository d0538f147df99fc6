from fastapi import APIRouter, Depends, HTTPException, status, Query
from typing import List, Optional

from beacon.core.exceptions import CannotDeleteLastPage
from beacon.core.workspace import Workspace, get_workspace
from beacon.domains.pages.schemas import (
    PageCreate, PageTitleUpdate, EditorUpdate, FormatRequest, BlockInsertRequest,
    PageResponse, PageListResponse, ActivePageResponse, StatsResponse
)

router = APIRouter(prefix="/pages", tags=["pages"])


def _active_response(workspace: Workspace, pending_commands: Optional[List[str]] = None) -> ActivePageResponse:
    page = workspace.store.active_page
    if pending_commands is None:
        pending_commands = list(workspace.editor.pending_commands)
    return ActivePageResponse(
        page=PageResponse.model_validate(page),
        index=workspace.store.collection.index_of(page.id),
        pending_commands=pending_commands
    )


@router.get("/", response_model=PageListResponse)
async def list_pages(
    q: Optional[str] = Query(None, max_length=100),
    workspace: Workspace = Depends(get_workspace)
):
    """Список страниц с необязательным поиском"""
    pages = workspace.store.search_pages(q or "")

    return PageListResponse(
        pages=[PageResponse.model_validate(page) for page in pages],
        current_page_id=workspace.store.collection.current_page_id,
        total=len(pages),
        query=q
    )


@router.post("/", response_model=PageResponse, status_code=status.HTTP_201_CREATED)
async def create_page(
    page_data: PageCreate,
    workspace: Workspace = Depends(get_workspace)
):
    """Создание новой страницы"""
    page = workspace.store.create_page(page_data.title, page_data.icon)
    return PageResponse.model_validate(page)


@router.get("/stats", response_model=StatsResponse)
async def get_stats(workspace: Workspace = Depends(get_workspace)):
    """Статистика по всем страницам"""
    return StatsResponse.model_validate(workspace.store.compute_stats())


@router.get("/active", response_model=ActivePageResponse)
async def get_active_page(workspace: Workspace = Depends(get_workspace)):
    """Активная страница"""
    return _active_response(workspace)


@router.post("/select/{index}", response_model=ActivePageResponse)
async def select_page(
    index: int,
    workspace: Workspace = Depends(get_workspace)
):
    """Переключение на страницу по индексу"""
    if not workspace.store.select_page(index):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Page not found"
        )
    return _active_response(workspace)


@router.put("/active/title", response_model=PageResponse)
async def update_title(
    update_data: PageTitleUpdate,
    workspace: Workspace = Depends(get_workspace)
):
    """Обновление заголовка активной страницы"""
    page = workspace.store.update_active_page_title(update_data.title)
    return PageResponse.model_validate(page)


@router.put("/active/editor", response_model=ActivePageResponse)
async def push_editor_state(
    update_data: EditorUpdate,
    workspace: Workspace = Depends(get_workspace)
):
    """Передача текущего состояния редактора без записи в страницу"""
    workspace.editor.push(title=update_data.title, content=update_data.content)
    return _active_response(workspace)


@router.post("/active/capture", response_model=ActivePageResponse)
async def capture_active_page(workspace: Workspace = Depends(get_workspace)):
    """Перенос состояния редактора в активную страницу"""
    workspace.store.capture_active_page()
    return _active_response(workspace)


@router.delete("/active", status_code=status.HTTP_204_NO_CONTENT)
async def delete_active_page(workspace: Workspace = Depends(get_workspace)):
    """Удаление активной страницы"""
    try:
        workspace.store.delete_active_page()
    except CannotDeleteLastPage as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e)
        )


@router.post("/active/duplicate", response_model=PageResponse, status_code=status.HTTP_201_CREATED)
async def duplicate_active_page(workspace: Workspace = Depends(get_workspace)):
    """Дублирование активной страницы"""
    page = workspace.store.duplicate_active_page()
    return PageResponse.model_validate(page)


@router.post("/active/format", response_model=ActivePageResponse)
async def format_text(
    format_request: FormatRequest,
    workspace: Workspace = Depends(get_workspace)
):
    """Команда форматирования для редактора"""
    workspace.store.format_text(format_request.command)
    # Команды передаются UI один раз, в ответе на этот запрос
    return _active_response(workspace, workspace.editor.drain_commands())


@router.post("/active/blocks", response_model=ActivePageResponse)
async def insert_block(
    block_request: BlockInsertRequest,
    workspace: Workspace = Depends(get_workspace)
):
    """Добавление блока в активную страницу"""
    try:
        workspace.store.insert_block(block_request.kind, block_request.level)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    return _active_response(workspace)
