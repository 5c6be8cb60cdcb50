"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

from nutriplanner.domain.nutrients import NutrientVector

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    api_token: str
    default_category: str = "Outros"
    target_energy_kcal: float = 2000.0
    target_protein_g: float = 75.0
    target_carbohydrate_g: float = 250.0
    target_fat_g: float = 65.0
    target_cholesterol_mg: float = 300.0
    target_fiber_g: float = 25.0
    debug: bool = False
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    def daily_target(self) -> NutrientVector:
        """Return the configured daily nutrient target."""
        return NutrientVector(
            energy_kcal=self.target_energy_kcal,
            protein_g=self.target_protein_g,
            carbohydrate_g=self.target_carbohydrate_g,
            fat_g=self.target_fat_g,
            cholesterol_mg=self.target_cholesterol_mg,
            fiber_g=self.target_fiber_g,
        )
