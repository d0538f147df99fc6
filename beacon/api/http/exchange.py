from fastapi import APIRouter, Depends, HTTPException, status

from beacon.core.exceptions import MalformedImport, StorageUnavailable
from beacon.core.workspace import Workspace, get_workspace
from beacon.domains.exchange.schemas import (
    ExportRequest, ExportResponse, ImportRequest, ImportResponse
)

router = APIRouter(prefix="/exchange", tags=["exchange"])


@router.post("/export", response_model=ExportResponse)
async def export_data(
    export_request: ExportRequest,
    workspace: Workspace = Depends(get_workspace)
):
    """Экспорт всех страниц в JSON или HTML"""
    result = await workspace.exchange.export_data(export_request.format, export_request.path)

    if not result.success:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Export failed: {result.error}"
        )

    return ExportResponse(
        format=export_request.format,
        path=export_request.path,
        success=result.success,
        error=result.error
    )


@router.post("/import", response_model=ImportResponse)
async def import_data(
    import_request: ImportRequest,
    workspace: Workspace = Depends(get_workspace)
):
    """Импорт JSON с полной заменой текущих данных"""
    try:
        imported = await workspace.exchange.import_data(
            import_request.path,
            confirm=lambda: import_request.confirmed
        )
    except MalformedImport as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"message": str(e), "errors": e.errors}
        )
    except StorageUnavailable as e:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=str(e)
        )

    return ImportResponse(
        path=import_request.path,
        imported=imported,
        page_count=len(workspace.store.pages),
        current_page_id=workspace.store.collection.current_page_id
    )
