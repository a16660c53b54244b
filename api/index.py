"""Serverless entrypoint exposing the ASGI app from the src tree."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from intake_tracker.api.asgi import app  # noqa: E402

__all__ = ["app"]
