"""Cached read access to the GroupProof registry contract.

Every public coroutine maps one API query onto one or more contract view
calls. Results are formatted into models and memoized in the injected
TTLCache. Multi-record reads fan out with ``asyncio.gather`` so results keep
the order of the identifiers the contract returned.

Errors from the contract client propagate unchanged; nothing here retries.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Protocol

from eth_utils import to_checksum_address

from app.models.commit import Commit
from app.models.contributor import ContributorStats
from app.models.project import Project
from app.services.cache import TTLCache
from app.services.contract_format import (
    format_commit,
    format_contributor_stats,
    format_project,
    raw_created_at,
)

log = logging.getLogger(__name__)

PROJECT_NOT_FOUND_MESSAGE = "Project not found"


class ProjectNotFoundError(RuntimeError):
    status_code = 404

    def __init__(self, project_id: str, message: str = PROJECT_NOT_FOUND_MESSAGE):
        super().__init__(message)
        self.project_id = project_id
        self.message = message


class ContractClient(Protocol):
    async def get_total_projects(self) -> int:
        ...

    async def get_all_projects(self, offset: int, limit: int) -> list[str]:
        ...

    async def get_project(self, project_id: str) -> Any:
        ...

    async def get_commits(self, project_id: str, offset: int, limit: int) -> list[Any]:
        ...

    async def get_commit_count(self, project_id: str) -> int:
        ...

    async def get_contributors(self, project_id: str) -> list[str]:
        ...

    async def get_contributor_stats(self, project_id: str, address: str) -> Any:
        ...

    async def get_user_projects(self, address: str) -> list[str]:
        ...

    async def is_commit_recorded(self, project_id: str, commit_hash: str) -> bool:
        ...


class ContractReader:
    def __init__(self, client: ContractClient, cache: TTLCache):
        self._client = client
        self._cache = cache

    def _cached(self, key: str) -> Any | None:
        value = self._cache.get(key)
        if value is None:
            log.debug("cache_miss key=%s", key)
        return value

    async def get_total_projects(self) -> int:
        key = "totalProjects"
        cached = self._cached(key)
        if cached is not None:
            return cached
        total = int(await self._client.get_total_projects())
        self._cache.set(key, total)
        return total

    async def get_all_projects(self, offset: int, limit: int) -> list[Project]:
        key = f"projects:{offset}:{limit}"
        cached = self._cached(key)
        if cached is not None:
            return cached
        ids = await self._client.get_all_projects(offset, limit)
        projects = await self._fetch_projects(ids)
        self._cache.set(key, projects)
        return projects

    async def get_project(self, project_id: str) -> Project:
        """Fetch one project.

        The contract has no existence flag: a zero ``createdAt`` is read as
        "never created" and raises ProjectNotFoundError. Misses are not cached.
        """
        key = f"project:{project_id}"
        cached = self._cached(key)
        if cached is not None:
            return cached
        raw = await self._client.get_project(project_id)
        if raw_created_at(raw) == 0:
            raise ProjectNotFoundError(project_id)
        project = format_project(project_id, raw)
        self._cache.set(key, project)
        return project

    async def get_commits(self, project_id: str, offset: int, limit: int) -> list[Commit]:
        key = f"commits:{project_id}:{offset}:{limit}"
        cached = self._cached(key)
        if cached is not None:
            return cached
        raw_commits = await self._client.get_commits(project_id, offset, limit)
        commits = [format_commit(raw) for raw in raw_commits]
        self._cache.set(key, commits)
        return commits

    async def get_commit_count(self, project_id: str) -> int:
        # Always fresh: pagination totals must reflect the chain at request time.
        return int(await self._client.get_commit_count(project_id))

    async def get_contributors(self, project_id: str) -> list[ContributorStats]:
        key = f"contributors:{project_id}"
        cached = self._cached(key)
        if cached is not None:
            return cached
        addresses = await self._client.get_contributors(project_id)
        contributors = list(
            await asyncio.gather(*(self.get_contributor_stats(project_id, address) for address in addresses))
        )
        self._cache.set(key, contributors)
        return contributors

    async def get_contributor_stats(self, project_id: str, address: str) -> ContributorStats:
        raw = await self._client.get_contributor_stats(project_id, address)
        return format_contributor_stats(address, raw)

    async def get_user_projects(self, address: str) -> list[Project]:
        address = to_checksum_address(address)
        key = f"userProjects:{address}"
        cached = self._cached(key)
        if cached is not None:
            return cached
        ids = await self._client.get_user_projects(address)
        projects = await self._fetch_projects(ids)
        self._cache.set(key, projects)
        return projects

    async def is_commit_recorded(self, project_id: str, commit_hash: str) -> bool:
        return bool(await self._client.is_commit_recorded(project_id, commit_hash))

    async def _fetch_projects(self, ids: list[str]) -> list[Project]:
        async def _one(project_id: str) -> Project:
            return format_project(project_id, await self._client.get_project(project_id))

        return list(await asyncio.gather(*(_one(project_id) for project_id in ids)))
