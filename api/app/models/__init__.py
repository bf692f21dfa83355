"""Pydantic models."""

from app.models.analytics import ActivityEntry, AnalyticsSummary, AnalyticsTotals, ContributionShare
from app.models.commit import Commit
from app.models.contributor import ContributorStats
from app.models.error import ErrorDetail
from app.models.pagination import Pagination
from app.models.project import Project

__all__ = [
    "ActivityEntry",
    "AnalyticsSummary",
    "AnalyticsTotals",
    "Commit",
    "ContributionShare",
    "ContributorStats",
    "ErrorDetail",
    "Pagination",
    "Project",
]
