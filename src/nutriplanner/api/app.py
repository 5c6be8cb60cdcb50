"""FastAPI application factory."""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from nutriplanner.api.catalog import router as catalog_router
from nutriplanner.api.plans import router as plans_router
from nutriplanner.api.shopping import router as shopping_router
from nutriplanner.app_logging import configure_logging
from nutriplanner.containers import AppContainer


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(
        logging.DEBUG if container.settings.debug else logging.INFO
    )
    logger = logging.getLogger(__name__)

    app = FastAPI(title="NutriPlanner")
    app.state.container = container

    app.include_router(catalog_router)
    app.include_router(plans_router)
    app.include_router(shopping_router)

    @app.exception_handler(RuntimeError)
    async def storage_error(request: Request, exc: RuntimeError) -> JSONResponse:
        logger.exception("Storage failure on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=502, content={"detail": str(exc)})

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
