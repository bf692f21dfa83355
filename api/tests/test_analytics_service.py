from __future__ import annotations

import pytest

from app.models.contributor import ContributorStats
from app.services.analytics_service import AnalyticsAggregator, activity_timeline, commit_percentage
from app.services.blockchain_service import ContractReader, ProjectNotFoundError
from app.services.cache import TTLCache
from fakes import make_address, make_id

PROJECT = make_id("1")


@pytest.fixture
def cache(clock) -> TTLCache:
    return TTLCache(ttl_seconds=60, clock=clock)


@pytest.fixture
def aggregator(fake_contract, cache) -> AnalyticsAggregator:
    return AnalyticsAggregator(ContractReader(fake_contract, cache), cache)


def test_commit_percentage_two_decimals():
    assert commit_percentage(6, 10) == 60.0
    assert commit_percentage(1, 3) == 33.33
    assert commit_percentage(2, 3) == 66.67


def test_commit_percentage_rounds_half_away_from_zero():
    # 1/32 * 10000 = 312.5 rounds up to 313, not down to the even 312.
    assert commit_percentage(1, 32) == 3.13
    assert commit_percentage(1, 16) == 6.25


def test_commit_percentage_zero_total():
    assert commit_percentage(0, 0) == 0
    assert commit_percentage(5, 0) == 0


def test_activity_timeline_excludes_zero_and_sorts_descending():
    rows = [
        ContributorStats(address="a", first_contribution=1, last_contribution=50),
        ContributorStats(address="never", last_contribution=0),
        ContributorStats(address="b", first_contribution=2, last_contribution=300),
        ContributorStats(address="c", first_contribution=3, last_contribution=100),
    ]
    timeline = activity_timeline(rows)
    assert [entry.address for entry in timeline] == ["b", "c", "a"]
    assert timeline[0].first_active == 2
    assert timeline[0].last_active == 300


@pytest.mark.asyncio
async def test_project_analytics_summary(aggregator, fake_contract):
    alice, bob, carol = make_address("a"), make_address("b"), make_address("c")
    fake_contract.add_project(PROJECT, commit_count=10, contributor_count=3)
    fake_contract.add_contributor(PROJECT, alice, commits=6, additions=80, deletions=100, files_changed=7, first=10, last=500)
    fake_contract.add_contributor(PROJECT, bob, commits=4, additions=20, deletions=40, files_changed=3, first=20, last=900)
    fake_contract.add_contributor(PROJECT, carol)

    result = await aggregator.get_project_analytics(PROJECT)

    assert result.project_id == PROJECT
    assert result.summary.total_commits == 10
    assert result.summary.total_contributors == 3
    assert result.summary.total_additions == 100
    assert result.summary.total_deletions == 140
    assert result.summary.total_files_changed == 10
    assert result.summary.net_lines_changed == -40

    percentages = [share.percentage for share in result.contribution_breakdown]
    assert percentages == [60.0, 40.0, 0]
    assert sum(percentages) == 100.0

    assert [entry.address for entry in result.activity_timeline] == [bob, alice]


@pytest.mark.asyncio
async def test_project_analytics_zero_commits(aggregator, fake_contract):
    fake_contract.add_project(PROJECT, commit_count=0)
    fake_contract.add_contributor(PROJECT, make_address("a"))
    fake_contract.add_contributor(PROJECT, make_address("b"))

    result = await aggregator.get_project_analytics(PROJECT)

    assert [share.percentage for share in result.contribution_breakdown] == [0, 0]
    assert result.activity_timeline == []


@pytest.mark.asyncio
async def test_project_analytics_cached_independently(aggregator, fake_contract, cache, clock):
    fake_contract.add_project(PROJECT, commit_count=1)
    fake_contract.add_contributor(PROJECT, make_address("a"), commits=1, last=5)

    first = await aggregator.get_project_analytics(PROJECT)
    cache.invalidate(f"project:{PROJECT}")
    cache.invalidate(f"contributors:{PROJECT}")
    fake_contract.add_contributor(PROJECT, make_address("b"), commits=1, last=6)

    second = await aggregator.get_project_analytics(PROJECT)
    assert second == first
    assert fake_contract.calls["get_project"] == 1

    clock.advance(60)
    third = await aggregator.get_project_analytics(PROJECT)
    assert third.summary.total_contributors == 2


@pytest.mark.asyncio
async def test_project_analytics_missing_project(aggregator):
    with pytest.raises(ProjectNotFoundError):
        await aggregator.get_project_analytics(make_id("9"))


@pytest.mark.asyncio
async def test_project_and_contributors_are_fetched_concurrently(aggregator, fake_contract):
    alice = make_address("a")
    fake_contract.add_project(PROJECT, commit_count=1)
    fake_contract.add_contributor(PROJECT, alice, commits=1, last=5)
    fake_contract.project_delays[PROJECT] = 0.05

    result = await aggregator.get_project_analytics(PROJECT)

    assert fake_contract.events == [f"get_contributors:{PROJECT}", f"get_project:{PROJECT}"]
    assert [share.address for share in result.contribution_breakdown] == [alice]
