from fastapi import APIRouter, Depends

from beacon.core.workspace import Workspace, get_workspace
from beacon.domains.pages.schemas import SaveResponse

router = APIRouter(prefix="/storage", tags=["storage"])


@router.post("/save", response_model=SaveResponse)
async def save(workspace: Workspace = Depends(get_workspace)):
    """Ручное сохранение (Ctrl+S): захват редактора и запись"""
    workspace.store.capture_active_page()
    result = await workspace.coordinator.save()
    return SaveResponse(success=result.success, error=result.error)
