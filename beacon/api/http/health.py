from fastapi import APIRouter, Depends

from beacon.core.workspace import Workspace, get_workspace

router = APIRouter(tags=["health"])


@router.get("/health")
async def health(workspace: Workspace = Depends(get_workspace)):
    """Проверка состояния приложения"""
    return {
        "status": "ok",
        "pages": len(workspace.store.pages),
        "autosave": workspace.coordinator.autosave_running,
        "storage": workspace.config.storage_backend
    }
