"""
Configuration Logger - env variable mapping and logging

Single source of truth for which environment variables feed
:class:`ajaxsubmit_core.config.Config` and their current values.
"""

import logging
from typing import Dict, Any, Optional

from .config import Config, config as default_config


def get_all_config_variables(cfg: Optional[Config] = None) -> Dict[str, Any]:
    """
    Get all configuration variables with their env names and current values.

    Returns:
        Dict mapping env variable names to their current values
    """
    cfg = cfg or default_config
    return {
        "AJAXSUBMIT_REQUEST_TIMEOUT": cfg.request_timeout if cfg.request_timeout is not None else "default",
        "AJAXSUBMIT_DEBUG": cfg.enable_debug,
        "AJAXSUBMIT_LOG_LEVEL": cfg.log_level,
        "AJAXSUBMIT_VERIFY_SSL": cfg.verify_ssl,
        "AJAXSUBMIT_USER_AGENT": cfg.user_agent or "None",
    }


def log_all_config(logger: logging.Logger, cfg: Optional[Config] = None) -> None:
    """
    Log all configuration variables, alphabetically for consistency.

    Args:
        logger: Target logger
        cfg: Config to describe (module-level ``config`` by default)
    """
    config_vars = get_all_config_variables(cfg)
    for key in sorted(config_vars):
        logger.info(f"{key}={config_vars[key]}")
