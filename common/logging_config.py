"""
Logging Configuration for the Projection Engine.

All packages obtain their loggers through `get_logger` so that log output
shares one format. The forward/inverse hot paths never log; setup,
registration and validation do.
"""

import logging
import sys


def get_logger(name: str, level: int = logging.INFO) -> logging.Logger:
    """Get a logger configured for the projection engine.

    Parameters
    ----------
    name : str
        Logger name (typically __name__).
    level : int
        Logging level.

    Returns
    -------
    logging.Logger
        Configured logger instance.
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        formatter = logging.Formatter(
            '%(asctime)s | %(name)s | %(levelname)s | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.setLevel(level)
    return logger


def set_log_level(level: int) -> None:
    """Change the level of every logger handed out by `get_logger`.

    Parameters
    ----------
    level : int
        New logging level (e.g. ``logging.DEBUG``).
    """
    for name in list(logging.Logger.manager.loggerDict):
        if name.split(".")[0] in ("common", "projections", "validation", "wkt"):
            logging.getLogger(name).setLevel(level)
