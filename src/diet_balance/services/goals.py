"""Goal resolution and persistence service."""

import logging
from dataclasses import dataclass, fields, replace
from typing import Protocol
from uuid import UUID

from diet_balance.domain.errors import InvalidInputError
from diet_balance.domain.goals import (
    DEFAULT_GOALS,
    GOAL_FIELDS,
    GOAL_PRESETS,
    BiometricProfile,
    GoalPreset,
    GoalSet,
    GoalSuggestion,
)
from diet_balance.services.evaluation import (
    reference_micronutrient_goals,
    suggest_goals,
    validate_goals,
)

_logger = logging.getLogger(__name__)


class GoalRepository(Protocol):
    """Persistence interface for explicit goal sets."""

    def get_goals(self, user_id: UUID) -> GoalSet | None:
        """Return the user's saved goals, if any."""

    def save_goals(self, user_id: UUID, goals: GoalSet) -> GoalSet:
        """Create or replace the user's goals and return them."""


class ProfileRepository(Protocol):
    """Read interface for user profile data."""

    def get_biometrics(self, user_id: UUID) -> BiometricProfile | None:
        """Return the user's biometric profile, if any."""

    def get_timezone(self, user_id: UUID) -> str | None:
        """Return the user's IANA timezone, if set."""


@dataclass
class GoalService:
    """Service that resolves the goals a user is measured against."""

    goal_repository: GoalRepository
    profile_repository: ProfileRepository
    default_timezone: str = "UTC"

    def get_goals(self, user_id: UUID) -> GoalSet:
        """Return saved goals, else BMI-derived goals, else the defaults."""
        biometrics = self.profile_repository.get_biometrics(user_id)
        goals = self._resolve_base_goals(user_id, biometrics)
        if not goals.micronutrient_goals:
            goals = replace(
                goals, micronutrient_goals=reference_micronutrient_goals(biometrics)
            )
        return goals

    def save_goals(self, user_id: UUID, updates: dict[str, float]) -> GoalSet:
        """Apply a partial goal update and persist the result."""
        unknown = set(updates) - set(GOAL_FIELDS)
        if unknown:
            raise InvalidInputError(f"Unknown goal fields: {', '.join(sorted(unknown))}")
        current = self._resolve_base_goals(
            user_id, self.profile_repository.get_biometrics(user_id)
        )
        changes = {name: value for name, value in updates.items() if value is not None}
        goals = replace(current, **changes)
        validate_goals(goals)
        saved = self.goal_repository.save_goals(user_id, goals)
        _logger.info("Saved goals for user %s: %s", user_id, sorted(changes))
        return saved

    def _resolve_base_goals(
        self, user_id: UUID, biometrics: BiometricProfile | None
    ) -> GoalSet:
        stored = self.goal_repository.get_goals(user_id)
        if stored is not None:
            return stored
        suggestion = suggest_goals(biometrics) if biometrics is not None else None
        return suggestion.goals if suggestion else DEFAULT_GOALS

    def suggest_goals(self, user_id: UUID) -> GoalSuggestion | None:
        """Return the BMI-based suggestion for a user, if derivable."""
        biometrics = self.profile_repository.get_biometrics(user_id)
        if biometrics is None:
            return None
        return suggest_goals(biometrics)

    def presets(self) -> list[GoalPreset]:
        """Return the built-in goal presets."""
        return list(GOAL_PRESETS)

    def get_timezone(self, user_id: UUID) -> str:
        """Return the user's timezone or the configured default."""
        return self.profile_repository.get_timezone(user_id) or self.default_timezone


def goal_values(goals: GoalSet) -> dict[str, float]:
    """Return the macro goal fields of a goal set as a mapping."""
    return {
        item.name: getattr(goals, item.name)
        for item in fields(goals)
        if item.name in GOAL_FIELDS
    }
