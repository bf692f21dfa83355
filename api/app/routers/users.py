from __future__ import annotations

from fastapi import APIRouter, Depends

from app.models.error import ErrorDetail
from app.routers.deps import get_reader, require_address
from app.services.blockchain_service import ContractReader

router = APIRouter()


@router.get("/users/{address}/projects", responses={400: {"model": ErrorDetail}})
async def list_user_projects(
    address: str = Depends(require_address),
    reader: ContractReader = Depends(get_reader),
) -> dict:
    projects = await reader.get_user_projects(address)
    return {"success": True, "data": [p.model_dump(mode="json") for p in projects]}
