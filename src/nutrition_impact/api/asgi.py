"""ASGI entrypoint for the nutrition impact API."""

from nutrition_impact.api.app import create_app
from nutrition_impact.containers import build_container

app = create_app(build_container())
