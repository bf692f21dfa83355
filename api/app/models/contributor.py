from __future__ import annotations

from pydantic import BaseModel


class ContributorStats(BaseModel):
    address: str
    total_commits: int = 0
    total_additions: int = 0
    total_deletions: int = 0
    total_files_changed: int = 0
    first_contribution: int = 0
    last_contribution: int = 0
