"""HTTP app wiring: the FastAPI app factory and its dependencies."""

from .app import create_app

__all__ = ["create_app"]
