from __future__ import annotations

from fastapi import APIRouter, Depends

from app.models.error import ErrorDetail
from app.routers.deps import PageParams, get_reader, page_params, require_commit_hash, require_project_id
from app.services.blockchain_service import ContractReader

router = APIRouter()


@router.get("/projects/{project_id}/commits", responses={400: {"model": ErrorDetail}})
async def list_commits(
    project_id: str = Depends(require_project_id),
    pages: PageParams = Depends(page_params),
    reader: ContractReader = Depends(get_reader),
) -> dict:
    """Commits in on-chain order. ``total`` is read fresh even when the page is cached.

    Out-of-range ``page`` or ``limit`` is rejected with 422, not clamped.
    """
    total = await reader.get_commit_count(project_id)
    commits = await reader.get_commits(project_id, pages.offset, pages.limit)
    return {
        "success": True,
        "data": [c.model_dump(mode="json") for c in commits],
        "pagination": pages.describe(total).model_dump(mode="json"),
    }


@router.get("/projects/{project_id}/commits/{commit_hash}/recorded", responses={400: {"model": ErrorDetail}})
async def commit_recorded(
    project_id: str = Depends(require_project_id),
    commit_hash: str = Depends(require_commit_hash),
    reader: ContractReader = Depends(get_reader),
) -> dict:
    recorded = await reader.is_commit_recorded(project_id, commit_hash)
    return {"success": True, "data": {"commit_hash": commit_hash, "recorded": recorded}}
