"""Central logging configuration for the application.

Applies a root stdout handler so all module loggers emit without per-module
setup. The level follows the deployment environment: DEBUG for local and dev,
INFO for prod. Keeps uvicorn loggers visible and avoids duplicate handlers on
reloads.
"""
from __future__ import annotations
import copy
import logging
from logging.config import dictConfig

_LEVEL_BY_ENV = {
    "local": "DEBUG",
    "dev": "DEBUG",
    "prod": "INFO",
}

_DICT_CONFIG = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "default": {
            "format": "%(asctime)s %(levelname)s:%(name)s:%(message)s",
        }
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "level": "DEBUG",
            "formatter": "default",
            "stream": "ext://sys.stdout",
        }
    },
    "root": {"level": "INFO", "handlers": ["console"]},
    "loggers": {
        "uvicorn": {"level": "INFO", "handlers": ["console"], "propagate": False},
        "uvicorn.error": {"level": "INFO", "handlers": ["console"], "propagate": False},
        "uvicorn.access": {"level": "INFO", "handlers": ["console"], "propagate": False},
    },
}


def level_for_env(env: str) -> str:
    return _LEVEL_BY_ENV.get(env, "INFO")


def build_logging_config(env: str) -> dict:
    config = copy.deepcopy(_DICT_CONFIG)
    config["root"]["level"] = level_for_env(env)
    return config


def configure_logging(env: str = "local") -> None:
    """Configure application-wide logging once.

    If the root logger already has handlers, return to prevent duplicate output
    (important under reloaders/watchers and pytest's log capture).
    """
    root = logging.getLogger()
    if root.handlers:
        return
    dictConfig(build_logging_config(env))
