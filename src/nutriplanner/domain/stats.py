"""Domain models for statistics."""

from dataclasses import dataclass
from datetime import date

from nutriplanner.domain.nutrients import NutrientVector


@dataclass(frozen=True)
class DailyTotals:
    """Planned nutrient totals for a day."""

    day: date
    nutrients: NutrientVector
