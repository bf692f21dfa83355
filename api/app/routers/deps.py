"""Shared request dependencies: service lookup, identifier checks and pagination."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass

from eth_utils import is_address
from fastapi import HTTPException, Query, Request

from app.models.pagination import Pagination
from app.services.analytics_service import AnalyticsAggregator
from app.services.blockchain_service import ContractReader

_BYTES32_RE = re.compile(r"^0x[0-9a-fA-F]{64}$")

MAX_PAGE_SIZE = 100
DEFAULT_PAGE_SIZE = 20


def get_reader(request: Request) -> ContractReader:
    return request.app.state.contract_reader


def get_analytics(request: Request) -> AnalyticsAggregator:
    return request.app.state.analytics


def is_bytes32(value: str) -> bool:
    return bool(_BYTES32_RE.fullmatch(value))


def require_project_id(project_id: str) -> str:
    if not is_bytes32(project_id):
        raise HTTPException(status_code=400, detail="Invalid project ID format (expected bytes32)")
    return project_id


def require_commit_hash(commit_hash: str) -> str:
    if not is_bytes32(commit_hash):
        raise HTTPException(status_code=400, detail="Invalid commit hash format (expected bytes32)")
    return commit_hash


def require_address(address: str) -> str:
    if not is_address(address):
        raise HTTPException(status_code=400, detail="Invalid Ethereum address")
    return address


@dataclass(frozen=True)
class PageParams:
    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def describe(self, total: int) -> Pagination:
        return Pagination(
            page=self.page,
            limit=self.limit,
            total=total,
            total_pages=math.ceil(total / self.limit),
        )


def page_params(
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
) -> PageParams:
    return PageParams(page=page, limit=limit)
