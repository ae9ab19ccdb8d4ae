"""Supabase repository for user profiles."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from diet_balance.domain.goals import BiometricProfile
from diet_balance.services.goals import ProfileRepository


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for biometrics and timezone lookups."""

    client: Client

    def get_biometrics(self, user_id: UUID) -> BiometricProfile | None:
        """Return weight, height and age for a user, if a profile exists."""
        row = self._get_profile(user_id, "weight_kg, height_cm, age")
        if row is None:
            return None
        weight = row.get("weight_kg")
        height = row.get("height_cm")
        age = row.get("age")
        return BiometricProfile(
            weight_kg=float(weight) if weight is not None else None,
            height_cm=float(height) if height is not None else None,
            age_years=int(age) if age is not None else None,
        )

    def get_timezone(self, user_id: UUID) -> str | None:
        """Return the stored timezone for a user."""
        row = self._get_profile(user_id, "timezone")
        if row is None:
            return None
        return row.get("timezone")

    def _get_profile(self, user_id: UUID, columns: str) -> dict[str, object] | None:
        response = (
            self.client.table("user_profiles")
            .select(columns)
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return response.data[0]
