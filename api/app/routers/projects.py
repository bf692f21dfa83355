"""Project read routes: listing, detail and analytics."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from app.models.error import ErrorDetail
from app.routers.deps import PageParams, get_analytics, get_reader, page_params, require_project_id
from app.services.analytics_service import AnalyticsAggregator
from app.services.blockchain_service import ContractReader

router = APIRouter()


@router.get("/projects")
async def list_projects(
    pages: PageParams = Depends(page_params),
    reader: ContractReader = Depends(get_reader),
) -> dict:
    """Paged project list. Out-of-range ``page`` or ``limit`` is rejected with 422, not clamped."""
    total = await reader.get_total_projects()
    projects = await reader.get_all_projects(pages.offset, pages.limit)
    return {
        "success": True,
        "data": [p.model_dump(mode="json") for p in projects],
        "pagination": pages.describe(total).model_dump(mode="json"),
    }


@router.get("/projects/{project_id}", responses={400: {"model": ErrorDetail}, 404: {"model": ErrorDetail}})
async def get_project(
    project_id: str = Depends(require_project_id),
    reader: ContractReader = Depends(get_reader),
) -> dict:
    project = await reader.get_project(project_id)
    return {"success": True, "data": project.model_dump(mode="json")}


@router.get(
    "/projects/{project_id}/analytics",
    responses={400: {"model": ErrorDetail}, 404: {"model": ErrorDetail}},
)
async def get_project_analytics(
    project_id: str = Depends(require_project_id),
    analytics: AnalyticsAggregator = Depends(get_analytics),
) -> dict:
    summary = await analytics.get_project_analytics(project_id)
    return {"success": True, "data": summary.model_dump(mode="json")}
