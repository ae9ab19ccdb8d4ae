"""Repository interfaces and loading helpers for logged entries."""

from collections.abc import Iterable
from datetime import UTC, datetime, timedelta
from typing import Protocol
from uuid import UUID
from zoneinfo import ZoneInfo

from diet_balance.domain.entries import DietaryEntry
from diet_balance.domain.foods import FoodItem

MAX_WINDOW_DAYS = 90


class EntryRepository(Protocol):
    """Read interface for a user's dietary entries."""

    def list_entries(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[DietaryEntry]:
        """Return entries consumed in ``[start, end)``."""


class FoodRepository(Protocol):
    """Read interface for the food catalog."""

    def get_foods(self, food_ids: Iterable[UUID]) -> dict[UUID, FoodItem]:
        """Return the catalog foods that exist among ``food_ids``."""


def clamp_days(days: int) -> int:
    """Clamp a requested window length to 1..90 days."""
    return max(1, min(days, MAX_WINDOW_DAYS))


def day_window(tz: ZoneInfo, days: int) -> tuple[datetime, datetime]:
    """Return local midnight ``days - 1`` days ago and the next midnight."""
    now = datetime.now(tz=tz)
    end = now.replace(hour=0, minute=0, second=0, microsecond=0) + timedelta(days=1)
    start = end - timedelta(days=days)
    return start, end


def load_entries_with_foods(
    entry_repository: EntryRepository,
    food_repository: FoodRepository,
    user_id: UUID,
    start: datetime,
    end: datetime,
) -> tuple[list[DietaryEntry], dict[UUID, FoodItem]]:
    """Fetch a user's entries in a window and the foods they reference."""
    entries = entry_repository.list_entries(
        user_id, start.astimezone(UTC), end.astimezone(UTC)
    )
    foods = food_repository.get_foods({entry.food_item_id for entry in entries})
    return entries, foods
