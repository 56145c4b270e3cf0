import logging
from typing import Dict

from .config import config
from .config_logger import log_all_config


_LOGGER_CACHE: Dict[str, logging.Logger] = {}

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def get_logger(name: str) -> logging.Logger:
    """Return a configured logger.

    Respects AJAXSUBMIT_DEBUG to set DEBUG/INFO level.
    Ensures we don't duplicate handlers across multiple imports.
    """
    lg = _LOGGER_CACHE.get(name)
    if lg:
        return lg
    lg = logging.getLogger(name)
    if not lg.handlers:
        level = logging.DEBUG if config.enable_debug else logging.INFO
        lg.setLevel(level)
        handler = logging.StreamHandler()
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        lg.addHandler(handler)
        lg.propagate = False
    _LOGGER_CACHE[name] = lg
    return lg


def enable_diagnostics(level: str = None):
    """
    Enable diagnostics logging for the whole package.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR); defaults to AJAXSUBMIT_LOG_LEVEL
    """
    level = (level or config.log_level).upper()
    logging.basicConfig(level=getattr(logging, level), format=LOG_FORMAT)
    logging.getLogger("ajaxsubmit_core").setLevel(getattr(logging, level))
    logger = get_logger(__name__)
    logger.info(f"Diagnostics enabled at {level} level")
    log_all_config(logger)
