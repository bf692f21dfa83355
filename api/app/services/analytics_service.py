from __future__ import annotations

import asyncio
from decimal import ROUND_HALF_UP, Decimal

from app.models.analytics import ActivityEntry, AnalyticsSummary, AnalyticsTotals, ContributionShare
from app.models.contributor import ContributorStats
from app.services.blockchain_service import ContractReader
from app.services.cache import TTLCache


def commit_percentage(commits: int, total_commits: int) -> float:
    """Share of ``total_commits`` as a percentage with two decimals (half away from zero)."""
    if total_commits <= 0:
        return 0
    scaled = (Decimal(commits) * Decimal(10000) / Decimal(total_commits)).quantize(
        Decimal("1"), rounding=ROUND_HALF_UP
    )
    return float(scaled / Decimal(100))


def activity_timeline(contributors: list[ContributorStats]) -> list[ActivityEntry]:
    # lastContribution == 0 means "never contributed"; a genuine epoch-zero timestamp is indistinguishable.
    active = [c for c in contributors if c.last_contribution != 0]
    active.sort(key=lambda c: c.last_contribution, reverse=True)
    return [
        ActivityEntry(address=c.address, last_active=c.last_contribution, first_active=c.first_contribution)
        for c in active
    ]


class AnalyticsAggregator:
    """Derived per-project analytics built from ContractReader results.

    Cached under ``analytics:<project_id>`` independently of the reader's own
    entries, so the two can go stale at different times.
    """

    def __init__(self, reader: ContractReader, cache: TTLCache):
        self._reader = reader
        self._cache = cache

    async def get_project_analytics(self, project_id: str) -> AnalyticsSummary:
        key = f"analytics:{project_id}"
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        project, contributors = await asyncio.gather(
            self._reader.get_project(project_id),
            self._reader.get_contributors(project_id),
        )

        total_commits = project.commit_count
        total_additions = sum(c.total_additions for c in contributors)
        total_deletions = sum(c.total_deletions for c in contributors)
        total_files_changed = sum(c.total_files_changed for c in contributors)

        breakdown = [
            ContributionShare(
                address=c.address,
                commits=c.total_commits,
                additions=c.total_additions,
                deletions=c.total_deletions,
                percentage=commit_percentage(c.total_commits, total_commits),
            )
            for c in contributors
        ]

        result = AnalyticsSummary(
            project_id=project_id,
            summary=AnalyticsTotals(
                total_commits=total_commits,
                total_contributors=len(contributors),
                total_additions=total_additions,
                total_deletions=total_deletions,
                total_files_changed=total_files_changed,
                net_lines_changed=total_additions - total_deletions,
            ),
            contribution_breakdown=breakdown,
            activity_timeline=activity_timeline(contributors),
        )
        self._cache.set(key, result)
        return result
