#!/usr/bin/env python3
from dataclasses import dataclass
import os
from typing import Optional
from dotenv import load_dotenv

load_dotenv()


def _optional_float(value: Optional[str]) -> Optional[float]:
    if value is None or not value.strip():
        return None
    return float(value)


@dataclass
class Config:
    """Process-wide settings for the transport and logging"""
    request_timeout: Optional[float] = _optional_float(os.getenv("AJAXSUBMIT_REQUEST_TIMEOUT"))
    enable_debug: bool = os.getenv("AJAXSUBMIT_DEBUG", "false").lower() in ["true", "1", "yes"]
    log_level: str = os.getenv("AJAXSUBMIT_LOG_LEVEL", "INFO").upper()
    verify_ssl: bool = os.getenv("AJAXSUBMIT_VERIFY_SSL", "true").lower() in ["true", "1", "yes"]
    user_agent: Optional[str] = os.getenv("AJAXSUBMIT_USER_AGENT") or None

    def __post_init__(self):
        if self.request_timeout is not None and self.request_timeout <= 0:
            raise ValueError("AJAXSUBMIT_REQUEST_TIMEOUT must be positive")
        if self.enable_debug:
            self.log_level = "DEBUG"

config = Config()
