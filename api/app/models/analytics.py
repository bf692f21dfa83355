"""Analytics response models for GET /api/projects/{project_id}/analytics."""

from pydantic import BaseModel, Field


class AnalyticsTotals(BaseModel):
    total_commits: int
    total_contributors: int
    total_additions: int
    total_deletions: int
    total_files_changed: int
    net_lines_changed: int = Field(description="Additions minus deletions; may be negative")


class ContributionShare(BaseModel):
    address: str
    commits: int
    additions: int
    deletions: int
    percentage: float = Field(ge=0.0, description="Share of project commits, two decimals")


class ActivityEntry(BaseModel):
    address: str
    last_active: int
    first_active: int


class AnalyticsSummary(BaseModel):
    project_id: str
    summary: AnalyticsTotals
    contribution_breakdown: list[ContributionShare] = Field(default_factory=list)
    activity_timeline: list[ActivityEntry] = Field(default_factory=list)
