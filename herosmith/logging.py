import logging

from herosmith.config import get_log_level

ROOT = "herosmith"
FORMAT = "%(levelname)s:%(name)s:%(message)s"


def get_logger(name: str) -> logging.Logger:
    """Return a module logger. ``HEROSMITH_LOG_LEVEL`` (or ``log_level`` in
    config.json) sets the level for every ``herosmith.*`` logger."""
    logging.basicConfig(format=FORMAT)
    logging.getLogger(ROOT).setLevel(get_log_level())
    return logging.getLogger(name)
