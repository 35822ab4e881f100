from __future__ import annotations

import logging

from .config import env_str

ROOT_LOGGER = "model_config_store"


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the ``model_config_store`` namespace.

    The first call attaches one stderr handler to the package logger, leaving
    the root logger to the host application. Level comes from MCS_LOG_LEVEL
    (env or .env), default INFO.
    """
    if name != ROOT_LOGGER and not name.startswith(ROOT_LOGGER + "."):
        name = f"{ROOT_LOGGER}.{name}"
    package = logging.getLogger(ROOT_LOGGER)
    if not package.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(levelname)s | %(name)s | %(message)s"))
        package.addHandler(handler)
        level = env_str("MCS_LOG_LEVEL", "INFO").upper()
        package.setLevel(getattr(logging, level, logging.INFO))
    return logging.getLogger(name)
