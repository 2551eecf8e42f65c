"""ASGI entrypoint for the Globetrotter API."""

from globetrotter.api.app import create_app
from globetrotter.containers import build_container

app = create_app(build_container())
