"""Supabase repository for nutrition goals."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from diet_balance.domain.foods import Micronutrient
from diet_balance.domain.goals import GoalSet
from diet_balance.services.goals import GoalRepository, goal_values


@dataclass
class SupabaseGoalRepository(GoalRepository):
    """Supabase implementation for per-user goal sets."""

    client: Client

    def get_goals(self, user_id: UUID) -> GoalSet | None:
        """Return the stored goals for a user."""
        response = (
            self.client.table("nutrition_goals")
            .select("*")
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_goals(response.data[0])

    def save_goals(self, user_id: UUID, goals: GoalSet) -> GoalSet:
        """Insert or update the user's goals."""
        payload: dict[str, object] = {
            **goal_values(goals),
            "micronutrient_goals": {
                name: {"amount": target.amount, "unit": target.unit}
                for name, target in goals.micronutrient_goals.items()
            },
            "updated_at": datetime.now(tz=UTC).isoformat(),
        }
        if self.get_goals(user_id) is None:
            response = (
                self.client.table("nutrition_goals")
                .insert({"user_id": str(user_id), **payload})
                .execute()
            )
        else:
            response = (
                self.client.table("nutrition_goals")
                .update(payload)
                .eq("user_id", str(user_id))
                .execute()
            )
        if not response.data:
            raise RuntimeError("Failed to save nutrition goals")
        return _parse_goals(response.data[0])


def _parse_goals(row: dict[str, object]) -> GoalSet:
    micronutrient_goals = row.get("micronutrient_goals") or {}
    return GoalSet(
        calorie_goal=float(row["calorie_goal"]),
        protein_goal=float(row["protein_goal"]),
        carbs_goal=float(row["carbs_goal"]),
        fat_goal=float(row["fat_goal"]),
        fiber_goal=float(row["fiber_goal"]),
        micronutrient_goals={
            str(name): Micronutrient(
                amount=float(value.get("amount", 0.0)), unit=str(value.get("unit", ""))
            )
            for name, value in micronutrient_goals.items()
            if isinstance(value, dict)
        },
    )
