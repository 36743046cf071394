"""Web interface for treino."""

from .app import create_app

__all__ = ["create_app"]
