"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from nutriplanner.adapters.supabase_catalog_repository import SupabaseCatalogRepository
from nutriplanner.adapters.supabase_conversion_repository import (
    SupabaseConversionRepository,
)
from nutriplanner.adapters.supabase_plan_repository import SupabasePlanRepository
from nutriplanner.adapters.supabase_target_repository import SupabaseTargetRepository
from nutriplanner.config import Settings
from nutriplanner.services.catalog import CatalogRepository, CatalogService
from nutriplanner.services.conversions import ConversionRepository, ConversionService
from nutriplanner.services.planner import PlannerService, PlanRepository
from nutriplanner.services.shopping import ShoppingListService
from nutriplanner.services.stats import StatsService, TargetRepository


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    catalog_service: CatalogService
    conversion_service: ConversionService
    planner_service: PlannerService
    shopping_list_service: ShoppingListService
    stats_service: StatsService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    catalog_repository = SupabaseCatalogRepository(supabase_client)
    plan_repository = SupabasePlanRepository(supabase_client)
    conversion_repository = SupabaseConversionRepository(supabase_client)
    return wire_services(
        resolved_settings,
        catalog_repository,
        plan_repository,
        conversion_repository,
        target_repository=SupabaseTargetRepository(supabase_client),
    )


def wire_services(
    settings: Settings,
    catalog_repository: CatalogRepository,
    plan_repository: PlanRepository,
    conversion_repository: ConversionRepository,
    target_repository: TargetRepository | None = None,
) -> AppContainer:
    """Build services on top of the given repositories."""
    catalog_service = CatalogService(
        catalog_repository,
        default_category=settings.default_category,
        debug=settings.debug,
    )
    planner_service = PlannerService(
        repository=plan_repository,
        catalog_service=catalog_service,
        debug=settings.debug,
    )
    shopping_list_service = ShoppingListService(
        plan_repository=plan_repository,
        catalog_service=catalog_service,
        conversion_repository=conversion_repository,
        default_category=settings.default_category,
        debug=settings.debug,
    )
    return AppContainer(
        settings=settings,
        catalog_service=catalog_service,
        conversion_service=ConversionService(conversion_repository),
        planner_service=planner_service,
        shopping_list_service=shopping_list_service,
        stats_service=StatsService(
            planner_service,
            settings.daily_target(),
            target_repository=target_repository,
            debug=settings.debug,
        ),
    )
