import logging
import os
from logging.config import dictConfig
from typing import Optional

LOGGER_NAME = "cinesage"
LOG_FORMAT = "%(levelprefix)s | %(asctime)s | %(name)s | %(message)s"
# httpx logs every request at INFO
QUIET_LOGGERS = ("httpx", "httpcore")


def resolve_log_level(env: Optional[dict] = None) -> str:
    env = os.environ if env is None else env
    if env.get("LOG_LEVEL"):
        return env["LOG_LEVEL"].upper()
    return "DEBUG" if env.get("DEBUG") else "INFO"


def create_log_config(log_level: str) -> dict:
    """
    dictConfig for the `cinesage` logger tree.

    Module loggers (`cinesage.upstream.omdb`, ...) propagate to the package
    logger, so they share its handler and level.
    """
    loggers = {LOGGER_NAME: {"handlers": ["console"], "level": log_level, "propagate": False}}
    for name in QUIET_LOGGERS:
        loggers[name] = {"handlers": ["console"], "level": "WARNING", "propagate": False}
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "uvicorn": {
                "()": "uvicorn.logging.DefaultFormatter",
                "fmt": LOG_FORMAT,
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": {
            "console": {
                "formatter": "uvicorn",
                "class": "logging.StreamHandler",
                "stream": "ext://sys.stderr",
            },
        },
        "loggers": loggers,
    }


def get_logger(name: str) -> logging.Logger:
    if name == LOGGER_NAME or name.startswith(f"{LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


dictConfig(create_log_config(resolve_log_level()))
logger = logging.getLogger(LOGGER_NAME)
