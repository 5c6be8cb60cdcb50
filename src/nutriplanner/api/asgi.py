"""ASGI entrypoint for the NutriPlanner API."""

from nutriplanner.api.app import create_app
from nutriplanner.containers import build_container

app = create_app(build_container())
