"""Intake aggregation over logged dietary entries."""

import logging
import math
from collections import defaultdict
from collections.abc import Iterable, Mapping
from dataclasses import replace
from datetime import UTC, date, datetime
from uuid import UUID
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from diet_balance.domain.entries import DietaryEntry, MealType
from diet_balance.domain.errors import InvalidInputError
from diet_balance.domain.foods import DEFAULT_SERVING_SIZE_G, FoodItem, NutrientProfile
from diet_balance.domain.reports import AggregationWarning, NutrientTotals, WarningKind

GROUP_BY_DAY = "day"
GROUP_BY_MEAL_TYPE = "meal_type"
GROUP_BY_DAY_AND_MEAL_TYPE = "day+meal_type"
_GROUPINGS = {GROUP_BY_DAY, GROUP_BY_MEAL_TYPE, GROUP_BY_DAY_AND_MEAL_TYPE}

_MEAL_ORDER = {meal_type: index for index, meal_type in enumerate(MealType)}
_MACRO_FIELDS = ("calories_kcal", "protein_g", "carbs_g", "fat_g", "fiber_g")

_logger = logging.getLogger(__name__)

GroupKey = date | MealType | tuple[date, MealType]


def aggregate(
    entries: Iterable[DietaryEntry],
    foods_by_id: Mapping[UUID, FoodItem],
    group_by: str | None = None,
    timezone: str = "UTC",
) -> NutrientTotals | dict[GroupKey, NutrientTotals]:
    """Sum the nutrients of entries, optionally partitioned.

    ``group_by`` accepts ``"day"``, ``"meal_type"`` or ``"day+meal_type"``.
    Days are calendar days in ``timezone``; naive timestamps are read as UTC.
    Entries whose food is missing from ``foods_by_id`` are skipped and
    reported as warnings on the result.
    """
    resolved_entries = list(entries)
    for entry in resolved_entries:
        validate_portion(entry)
    if group_by is None:
        return _fold(resolved_entries, foods_by_id)
    if group_by not in _GROUPINGS:
        raise InvalidInputError(f"Unsupported group_by value: {group_by!r}")

    tz = resolve_timezone(timezone)
    partitions: dict[GroupKey, list[DietaryEntry]] = defaultdict(list)
    for entry in resolved_entries:
        partitions[_group_key(entry, group_by, tz)].append(entry)
    return {
        key: _fold(partitions[key], foods_by_id)
        for key in sorted(partitions, key=_sort_key)
    }


def average_daily(totals: NutrientTotals, days: int) -> NutrientTotals:
    """Return totals divided by a number of days."""
    if days <= 0:
        raise InvalidInputError(f"days must be positive, got {days}")
    return replace(
        totals,
        calories_kcal=totals.calories_kcal / days,
        protein_g=totals.protein_g / days,
        carbs_g=totals.carbs_g / days,
        fat_g=totals.fat_g / days,
        fiber_g=totals.fiber_g / days,
        micronutrients={
            name: amount / days for name, amount in totals.micronutrients.items()
        },
    )


def validate_portion(entry: DietaryEntry) -> None:
    """Ensure an entry carries exactly one positive portion value."""
    has_grams = entry.portion_g is not None
    has_servings = entry.portion_servings is not None
    if has_grams == has_servings:
        raise InvalidInputError(
            f"Entry {entry.id} must set exactly one of portion_g or portion_servings"
        )
    value = entry.portion_g if has_grams else entry.portion_servings
    if not math.isfinite(value) or value <= 0:
        raise InvalidInputError(f"Entry {entry.id} has a non-positive portion: {value}")


def serving_size_of(profile: NutrientProfile) -> float:
    """Return the serving size in grams, falling back to 100 g."""
    size = profile.serving_size_g
    if size is None or size <= 0:
        return DEFAULT_SERVING_SIZE_G
    return float(size)


def portion_in_grams(entry: DietaryEntry, profile: NutrientProfile) -> float:
    """Normalize an entry's portion to grams."""
    validate_portion(entry)
    if entry.portion_g is not None:
        return float(entry.portion_g)
    return float(entry.portion_servings) * serving_size_of(profile)


def resolve_timezone(timezone: str) -> ZoneInfo:
    """Return a ZoneInfo for an IANA name."""
    try:
        return ZoneInfo(timezone)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise InvalidInputError(f"Unknown timezone: {timezone!r}") from exc


def local_day(moment: datetime, tz: ZoneInfo) -> date:
    """Return the calendar day of a timestamp in a timezone."""
    return as_utc(moment).astimezone(tz).date()


def _fold(
    entries: list[DietaryEntry], foods_by_id: Mapping[UUID, FoodItem]
) -> NutrientTotals:
    macro_parts: dict[str, list[float]] = {name: [] for name in _MACRO_FIELDS}
    micro_parts: dict[str, list[float]] = defaultdict(list)
    micro_units: dict[str, set[str]] = defaultdict(set)
    warnings: list[AggregationWarning] = []
    consumed_at: list[datetime] = []

    for entry in entries:
        food = foods_by_id.get(entry.food_item_id)
        if food is None:
            warnings.append(
                AggregationWarning(
                    kind=WarningKind.UNKNOWN_FOOD,
                    message=(
                        f"Entry {entry.id} references unknown food "
                        f"{entry.food_item_id}; skipped"
                    ),
                    entry_id=entry.id,
                )
            )
            continue

        profile = food.nutrient_profile
        if profile.serving_size_g is not None and profile.serving_size_g <= 0:
            warnings.append(
                AggregationWarning(
                    kind=WarningKind.INVALID_SERVING_SIZE,
                    message=(
                        f"Food {food.id} has serving size {profile.serving_size_g}; "
                        f"using {DEFAULT_SERVING_SIZE_G:g} g"
                    ),
                    entry_id=entry.id,
                )
            )

        factor = portion_in_grams(entry, profile) / serving_size_of(profile)
        for name in _MACRO_FIELDS:
            amount = getattr(profile, name)
            _require_non_negative(food, name, amount)
            macro_parts[name].append(amount * factor)
        for name, micronutrient in profile.micronutrients.items():
            _require_non_negative(food, name, micronutrient.amount)
            micro_parts[name].append(micronutrient.amount * factor)
            micro_units[name].add(micronutrient.unit)
        consumed_at.append(as_utc(entry.consumed_at))

    micronutrients: dict[str, float] = {}
    units: dict[str, str] = {}
    for name in sorted(micro_parts):
        if len(micro_units[name]) > 1:
            warnings.append(
                AggregationWarning(
                    kind=WarningKind.UNIT_MISMATCH,
                    message=(
                        f"Micronutrient {name} is reported in several units "
                        f"({', '.join(sorted(micro_units[name]))}); dropped"
                    ),
                )
            )
            continue
        micronutrients[name] = math.fsum(micro_parts[name])
        units[name] = next(iter(micro_units[name]))

    warnings.sort(key=lambda item: (item.kind.value, str(item.entry_id), item.message))
    for warning in warnings:
        _logger.warning("Aggregation warning (%s): %s", warning.kind.value, warning.message)

    return NutrientTotals(
        calories_kcal=math.fsum(macro_parts["calories_kcal"]),
        protein_g=math.fsum(macro_parts["protein_g"]),
        carbs_g=math.fsum(macro_parts["carbs_g"]),
        fat_g=math.fsum(macro_parts["fat_g"]),
        fiber_g=math.fsum(macro_parts["fiber_g"]),
        micronutrients=micronutrients,
        micronutrient_units=units,
        entry_count=len(consumed_at),
        first_consumed_at=min(consumed_at) if consumed_at else None,
        last_consumed_at=max(consumed_at) if consumed_at else None,
        warnings=warnings,
    )


def _require_non_negative(food: FoodItem, name: str, amount: float) -> None:
    if amount < 0:
        raise InvalidInputError(f"Food {food.id} has a negative {name} amount: {amount}")


def _group_key(entry: DietaryEntry, group_by: str, tz: ZoneInfo) -> GroupKey:
    if group_by == GROUP_BY_DAY:
        return local_day(entry.consumed_at, tz)
    if group_by == GROUP_BY_MEAL_TYPE:
        return entry.meal_type
    return (local_day(entry.consumed_at, tz), entry.meal_type)


def _sort_key(key: GroupKey) -> tuple[object, ...]:
    if isinstance(key, tuple):
        return (key[0], _MEAL_ORDER[key[1]])
    if isinstance(key, MealType):
        return (_MEAL_ORDER[key],)
    return (key,)


def as_utc(moment: datetime) -> datetime:
    """Return a timestamp as timezone-aware, reading naive values as UTC."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment
