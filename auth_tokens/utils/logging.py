"""Logging utilities.

All package loggers live under the ``auth_tokens.`` namespace and share one
stream handler format. Library code only emits DEBUG diagnostics; token
values and seed bytes are never logged.
"""

import logging
from typing import Dict, Optional


ROOT_LOGGER_NAME = "auth_tokens"
LOG_FORMAT = "%(levelname)s:%(name)s:%(message)s"

_LOGGERS: Dict[str, logging.Logger] = {}


def _qualified_name(name: str) -> str:
    if name == ROOT_LOGGER_NAME or name.startswith(f"{ROOT_LOGGER_NAME}."):
        return name
    return f"{ROOT_LOGGER_NAME}.{name}"


def get_logger(name: str) -> logging.Logger:
    """Get a configured logger for the given module.

    Parameters
    ----------
    name : str
        Module name (typically ``__name__``). Names outside the package
        namespace are nested under ``auth_tokens.``.

    Returns
    -------
    logging.Logger
        Logger with a single stream handler.

    Examples
    --------
    >>> logger = get_logger(__name__)
    >>> logger.debug("Seeded RNG")
    """
    qualified = _qualified_name(name)
    if qualified not in _LOGGERS:
        logger = logging.getLogger(qualified)
        if not logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter(LOG_FORMAT))
            logger.addHandler(handler)
            logger.propagate = False
        _LOGGERS[qualified] = logger
    return _LOGGERS[qualified]


def set_log_level(level: str, logger: Optional[logging.Logger] = None) -> None:
    """Set the logging level for package loggers.

    Parameters
    ----------
    level : str
        Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL). Unknown
        names fall back to INFO.
    logger : logging.Logger, optional
        Single logger to adjust. All package loggers if omitted.
    """
    numeric_level = getattr(logging, str(level).upper(), logging.INFO)

    if logger is not None:
        logger.setLevel(numeric_level)
        return

    for known in _LOGGERS.values():
        known.setLevel(numeric_level)
