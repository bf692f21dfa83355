"""Normalize raw contract return values into models.

The contract client may hand back either named fields (a mapping keyed by the
ABI component name) or positional tuples. Every accessor here prefers the name
and falls back to the index.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from eth_utils import to_checksum_address

from app.models.commit import Commit
from app.models.contributor import ContributorStats
from app.models.project import Project
from app.services.contract_abi import COMMIT_FIELDS, CONTRIBUTOR_STATS_FIELDS, PROJECT_FIELDS


def field_value(raw: Any, name: str, index: int) -> Any:
    if isinstance(raw, Mapping):
        value = raw.get(name)
        if value is not None:
            return value
        return raw.get(index)
    if isinstance(raw, Sequence) and not isinstance(raw, (str, bytes)):
        return raw[index] if index < len(raw) else None
    return getattr(raw, name, None)


def _int(raw: Any, fields: tuple[str, ...], name: str) -> int:
    value = field_value(raw, name, fields.index(name))
    return int(value) if value is not None else 0


def _str(raw: Any, fields: tuple[str, ...], name: str) -> str:
    value = field_value(raw, name, fields.index(name))
    return "" if value is None else str(value)


def _hex(value: Any) -> str:
    if isinstance(value, (bytes, bytearray)):
        return f"0x{bytes(value).hex()}"
    return "" if value is None else str(value)


def _address(value: Any) -> str:
    if value is None or value == "":
        return ""
    return to_checksum_address(value)


def raw_created_at(raw: Any) -> int:
    return _int(raw, PROJECT_FIELDS, "createdAt")


def format_project(project_id: str, raw: Any) -> Project:
    is_active = field_value(raw, "isActive", PROJECT_FIELDS.index("isActive"))
    return Project(
        project_id=project_id,
        name=_str(raw, PROJECT_FIELDS, "name"),
        description=_str(raw, PROJECT_FIELDS, "description"),
        owner=_address(field_value(raw, "owner", PROJECT_FIELDS.index("owner"))),
        created_at=raw_created_at(raw),
        is_active=bool(is_active),
        contributor_count=_int(raw, PROJECT_FIELDS, "contributorCount"),
        commit_count=_int(raw, PROJECT_FIELDS, "commitCount"),
    )


def format_commit(raw: Any) -> Commit:
    return Commit(
        commit_hash=_hex(field_value(raw, "commitHash", COMMIT_FIELDS.index("commitHash"))),
        author=_address(field_value(raw, "author", COMMIT_FIELDS.index("author"))),
        author_name=_str(raw, COMMIT_FIELDS, "authorName"),
        author_email=_str(raw, COMMIT_FIELDS, "authorEmail"),
        timestamp=_int(raw, COMMIT_FIELDS, "timestamp"),
        git_timestamp=_int(raw, COMMIT_FIELDS, "gitTimestamp"),
        message=_str(raw, COMMIT_FIELDS, "message"),
        files_changed=_int(raw, COMMIT_FIELDS, "filesChanged"),
        additions=_int(raw, COMMIT_FIELDS, "additions"),
        deletions=_int(raw, COMMIT_FIELDS, "deletions"),
        repo_name=_str(raw, COMMIT_FIELDS, "repoName"),
        branch=_str(raw, COMMIT_FIELDS, "branch"),
    )


def format_contributor_stats(address: str, raw: Any) -> ContributorStats:
    return ContributorStats(
        address=_address(address),
        total_commits=_int(raw, CONTRIBUTOR_STATS_FIELDS, "totalCommits"),
        total_additions=_int(raw, CONTRIBUTOR_STATS_FIELDS, "totalAdditions"),
        total_deletions=_int(raw, CONTRIBUTOR_STATS_FIELDS, "totalDeletions"),
        total_files_changed=_int(raw, CONTRIBUTOR_STATS_FIELDS, "totalFilesChanged"),
        first_contribution=_int(raw, CONTRIBUTOR_STATS_FIELDS, "firstContribution"),
        last_contribution=_int(raw, CONTRIBUTOR_STATS_FIELDS, "lastContribution"),
    )
