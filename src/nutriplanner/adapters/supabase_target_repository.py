"""Supabase repository for the daily nutrient target."""

from dataclasses import dataclass

from supabase import Client

from nutriplanner.domain.nutrients import NutrientVector
from nutriplanner.services.stats import TargetRepository

# The target is global, so it lives in a single keyed row.
_ROW_ID = "global"


@dataclass
class SupabaseTargetRepository(TargetRepository):
    """Supabase implementation storing the target as flat nutrient columns."""

    client: Client

    def get_target(self) -> NutrientVector | None:
        response = (
            self.client.table("nutrient_targets")
            .select("*")
            .eq("id", _ROW_ID)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return NutrientVector.from_mapping(response.data[0])

    def save_target(self, target: NutrientVector) -> NutrientVector:
        """Upsert the target row."""
        response = (
            self.client.table("nutrient_targets")
            .upsert({"id": _ROW_ID, **target.as_dict()}, on_conflict="id")
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to save nutrient target")
        return NutrientVector.from_mapping(response.data[0])
