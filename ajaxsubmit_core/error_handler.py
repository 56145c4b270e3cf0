"""
Transport error classification.

Converts low-level exceptions raised while talking to the server into the
``(status, detail)`` pair handed to the ``error`` hook.
"""

import asyncio
import json
import logging
from typing import Tuple

import aiohttp

from .exceptions import TransportError

logger = logging.getLogger(__name__)

STATUS_ERROR = "error"
STATUS_TIMEOUT = "timeout"
STATUS_PARSER_ERROR = "parsererror"


def classify_error(error: BaseException) -> Tuple[str, str]:
    """
    Categorize a transport-side exception.

    Returns:
        ``(status, detail)`` where status is "timeout", "parsererror" or "error"
    """
    if isinstance(error, TransportError):
        return error.status, error.detail
    if isinstance(error, (asyncio.TimeoutError, aiohttp.ServerTimeoutError)):
        return STATUS_TIMEOUT, str(error) or "timeout"
    if isinstance(error, (json.JSONDecodeError, UnicodeDecodeError, aiohttp.ContentTypeError)):
        return STATUS_PARSER_ERROR, str(error)
    if isinstance(error, aiohttp.ClientResponseError):
        return STATUS_ERROR, error.message or ""
    if isinstance(error, aiohttp.ClientError):
        return STATUS_ERROR, str(error)
    logger.debug(f"Unclassified transport exception {type(error).__name__}: {error}")
    return STATUS_ERROR, str(error)


def to_transport_error(error: BaseException) -> TransportError:
    """Wrap any exception into a :class:`TransportError`."""
    if isinstance(error, TransportError):
        return error
    status, detail = classify_error(error)
    http_status = getattr(error, "status", 0) if isinstance(error, aiohttp.ClientResponseError) else 0
    return TransportError(status, detail, http_status=http_status)
