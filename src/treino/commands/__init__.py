"""CLI commands for treino."""

from .init import init
from .posts import posts
from .serve import serve
from .tags import tags
from .templates import templates

__all__ = [
    "init",
    "posts",
    "serve",
    "tags",
    "templates",
]
