"""HTTP surface for TuneTalk (FastAPI)."""

from .app import create_app

__all__ = ["create_app"]
