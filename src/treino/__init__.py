"""treino: workout templates and workout posts backend."""

__version__ = "0.1.0"
