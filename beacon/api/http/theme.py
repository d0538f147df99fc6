from fastapi import APIRouter, Depends

from beacon.core.workspace import Workspace, get_workspace
from beacon.domains.pages.schemas import ThemeUpdate, ThemeResponse

router = APIRouter(prefix="/theme", tags=["theme"])


@router.get("/", response_model=ThemeResponse)
async def get_theme(workspace: Workspace = Depends(get_workspace)):
    """Текущая тема"""
    return ThemeResponse(theme=workspace.store.theme.value)


@router.post("/toggle", response_model=ThemeResponse)
async def toggle_theme(workspace: Workspace = Depends(get_workspace)):
    """Переключение светлой и темной темы"""
    theme = workspace.store.toggle_theme()
    return ThemeResponse(theme=theme.value)


@router.put("/", response_model=ThemeResponse)
async def set_theme(
    theme_data: ThemeUpdate,
    workspace: Workspace = Depends(get_workspace)
):
    """Установка темы"""
    theme = workspace.store.set_theme(theme_data.theme)
    return ThemeResponse(theme=theme.value)
