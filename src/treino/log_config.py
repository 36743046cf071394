"""Logging setup for the CLI and the web server."""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Install a single stream handler on the root logger.

    Safe to call more than once; later calls only adjust the level.
    """
    root = logging.getLogger()
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    if not any(getattr(h, "_treino", False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._treino = True
        root.addHandler(handler)

    root.setLevel(numeric_level)
    # aiosqlite logs every statement at DEBUG
    logging.getLogger("aiosqlite").setLevel(max(numeric_level, logging.INFO))
