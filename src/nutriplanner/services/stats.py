"""Statistics over planned daily nutrients."""

import logging
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Protocol

from nutriplanner.domain.nutrients import (
    NUTRIENT_FIELDS,
    NutrientVector,
    divide,
    sum_nutrients,
)
from nutriplanner.domain.stats import DailyTotals
from nutriplanner.services.planner import PlannerService

_logger = logging.getLogger(__name__)


class TargetRepository(Protocol):
    """Persistence interface for the user-edited daily nutrient target."""

    def get_target(self) -> NutrientVector | None:
        """Return the stored target, if one was ever saved."""

    def save_target(self, target: NutrientVector) -> NutrientVector:
        """Create or replace the stored target and return it."""


@dataclass
class PeriodSummary:
    """Daily totals for a period with averages and progress towards a target."""

    daily: list[DailyTotals]
    average: NutrientVector
    target: NutrientVector
    progress: dict[str, float]


@dataclass
class StatsService:
    """Service for daily and period nutrient summaries."""

    planner_service: PlannerService
    target: NutrientVector
    target_repository: TargetRepository | None = None
    debug: bool = False

    def get_target(self) -> NutrientVector:
        """Return the stored target, falling back to the configured one."""
        if self.target_repository is None:
            return self.target
        return self.target_repository.get_target() or self.target

    def set_target(self, target: NutrientVector) -> NutrientVector:
        """Replace the daily target used for progress."""
        if self.target_repository is None:
            self.target = target
            return target
        saved = self.target_repository.save_target(target)
        if self.debug:
            _logger.info("Daily target updated: energy_kcal=%s", saved.energy_kcal)
        return saved

    def get_day(self, day: date) -> DailyTotals:
        """Return the planned totals for one day."""
        plan = self.planner_service.get_daily_plan(day)
        return DailyTotals(day=day, nutrients=plan.total_nutrients)

    def get_period(self, start: date, end: date) -> PeriodSummary:
        """Return per-day totals and averages for ``[start, end]``."""
        plans = {
            plan.day: plan for plan in self.planner_service.list_plans(start, end)
        }
        daily = []
        for offset in range((end - start).days + 1):
            day = start + timedelta(days=offset)
            plan = plans.get(day)
            nutrients = plan.total_nutrients if plan else NutrientVector()
            daily.append(DailyTotals(day=day, nutrients=nutrients))

        average = divide(
            sum_nutrients(entry.nutrients for entry in daily), max(len(daily), 1)
        )
        target = self.get_target()
        return PeriodSummary(
            daily=daily,
            average=average,
            target=target,
            progress=_progress(average, target),
        )


def _progress(actual: NutrientVector, target: NutrientVector) -> dict[str, float]:
    progress: dict[str, float] = {}
    for name in NUTRIENT_FIELDS:
        goal = getattr(target, name)
        progress[name] = getattr(actual, name) / goal if goal > 0 else 0.0
    return progress
