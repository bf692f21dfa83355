"""Commit model: one recorded git commit under a project."""

from pydantic import BaseModel, Field


class Commit(BaseModel):
    commit_hash: str
    author: str
    author_name: str
    author_email: str
    timestamp: int = Field(description="Block timestamp of the recording transaction")
    git_timestamp: int = Field(description="Author-claimed git timestamp")
    message: str
    files_changed: int = 0
    additions: int = 0
    deletions: int = 0
    repo_name: str = ""
    branch: str = ""
