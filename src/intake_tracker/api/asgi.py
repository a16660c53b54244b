"""ASGI entrypoint serving the intake tracker API."""

from intake_tracker.api.app import create_app
from intake_tracker.config import Settings
from intake_tracker.containers import build_container

settings = Settings()
app = create_app(build_container(settings))
