"""Tests for the in-memory cache and snapshot keys."""

from diet_balance.domain.goals import DEFAULT_GOALS, GoalSet
from diet_balance.services.cache import InMemoryCache, snapshot_key


def test_in_memory_cache_returns_fresh_values() -> None:
    cache = InMemoryCache()
    cache.set("report", {"score": 80}, ttl_seconds=60)

    assert cache.get("report") == {"score": 80}
    assert cache.get("missing") is None


def test_in_memory_cache_expires_entries() -> None:
    cache = InMemoryCache()
    cache.set("report", {"score": 80}, ttl_seconds=0)

    assert cache.get("report") is None


def test_snapshot_key_tracks_every_snapshot() -> None:
    changed_goals = GoalSet(
        calorie_goal=1800, protein_goal=50, carbs_goal=300, fat_goal=65, fiber_goal=25
    )

    base = snapshot_key("analysis", [1, 2], DEFAULT_GOALS)

    assert snapshot_key("analysis", [1, 2], DEFAULT_GOALS) == base
    assert snapshot_key("analysis", [1, 2, 3], DEFAULT_GOALS) != base
    assert snapshot_key("analysis", [1, 2], changed_goals) != base
    assert base.startswith("analysis:")


def test_in_memory_cache_purges_expired_entries_on_write() -> None:
    now = [100.0]
    cache = InMemoryCache(clock=lambda: now[0])
    cache.set("old", 1, ttl_seconds=10)
    cache.set("fresh", 2, ttl_seconds=60)

    now[0] = 120.0
    cache.set("new", 3, ttl_seconds=60)

    assert len(cache) == 2
    assert cache.get("old") is None
    assert cache.get("fresh") == 2
