"""Supabase repository for user unit conversions."""

from dataclasses import dataclass

from supabase import Client

from nutriplanner.domain.catalog import UserUnitConversion
from nutriplanner.services.conversions import ConversionRepository


@dataclass
class SupabaseConversionRepository(ConversionRepository):
    """Supabase implementation for per-ingredient unit conversions."""

    client: Client

    def list_conversions(
        self, ingredient_id: str | None = None
    ) -> list[UserUnitConversion]:
        """Return conversions, optionally filtered by ingredient."""
        query = self.client.table("unit_conversions").select("*")
        if ingredient_id is not None:
            query = query.eq("ingredient_id", ingredient_id)
        response = query.execute()
        return [_parse_conversion(row) for row in response.data or []]

    def get_conversion(self, conversion_id: str) -> UserUnitConversion | None:
        """Return a conversion by id."""
        response = (
            self.client.table("unit_conversions")
            .select("*")
            .eq("id", conversion_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_conversion(response.data[0])

    def save_conversion(self, conversion: UserUnitConversion) -> UserUnitConversion:
        """Upsert a conversion."""
        response = (
            self.client.table("unit_conversions")
            .upsert(
                {
                    "id": conversion.id,
                    "ingredient_id": conversion.ingredient_id,
                    "unit_a": conversion.unit_a,
                    "quantity_a": conversion.quantity_a,
                    "unit_b": conversion.unit_b,
                    "quantity_b": conversion.quantity_b,
                },
                on_conflict="id",
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to save unit conversion")
        return _parse_conversion(response.data[0])

    def delete_conversion(self, conversion_id: str) -> None:
        """Delete a conversion by id."""
        self.client.table("unit_conversions").delete().eq(
            "id", conversion_id
        ).execute()


def _parse_conversion(row: dict[str, object]) -> UserUnitConversion:
    return UserUnitConversion(
        id=str(row["id"]),
        ingredient_id=str(row.get("ingredient_id", "")),
        unit_a=str(row.get("unit_a", "")),
        quantity_a=float(row.get("quantity_a", 0.0)),
        unit_b=str(row.get("unit_b", "")),
        quantity_b=float(row.get("quantity_b", 0.0)),
    )
