from __future__ import annotations

from fastapi import APIRouter, Depends

from app.models.error import ErrorDetail
from app.routers.deps import get_reader, require_project_id
from app.services.blockchain_service import ContractReader

router = APIRouter()


@router.get("/projects/{project_id}/contributors", responses={400: {"model": ErrorDetail}})
async def list_contributors(
    project_id: str = Depends(require_project_id),
    reader: ContractReader = Depends(get_reader),
) -> dict:
    """Contributors with their aggregated stats, in contract order."""
    contributors = await reader.get_contributors(project_id)
    return {"success": True, "data": [c.model_dump(mode="json") for c in contributors]}
