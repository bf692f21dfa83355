"""Project models: read-only projections of on-chain registry state."""

from pydantic import BaseModel, Field


class Project(BaseModel):
    """Full project data for GET /api/projects/{project_id}."""

    project_id: str = Field(description="0x-prefixed bytes32 identifier assigned by the contract")
    name: str
    description: str
    owner: str
    created_at: int = Field(description="Unix seconds; 0 means the project does not exist")
    is_active: bool
    contributor_count: int = 0
    commit_count: int = 0
