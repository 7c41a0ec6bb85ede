"""ASGI entrypoint for the health history API."""

from health_history.api.app import create_app
from health_history.containers import build_container

app = create_app(build_container())
