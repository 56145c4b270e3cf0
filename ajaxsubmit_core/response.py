"""Decoded server payload for one submission exchange."""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .error_handler import STATUS_PARSER_ERROR
from .exceptions import TransportError

logger = logging.getLogger(__name__)


@dataclass
class SubmissionResponse:
    """
    ``success`` is the only authority on whether the operation succeeded.
    ``data`` keeps the whole decoded object so hooks can read extra keys.
    """
    success: bool
    message: Optional[str] = None
    invalid: List[str] = field(default_factory=list)
    data: Dict[str, Any] = field(default_factory=dict)

    def __getitem__(self, key: str) -> Any:
        return self.data[key]

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)

    @classmethod
    def from_payload(cls, payload: Any) -> "SubmissionResponse":
        """
        Build a response from decoded JSON.

        Raises:
            TransportError: payload is not a JSON object
        """
        if not isinstance(payload, dict):
            raise TransportError(
                STATUS_PARSER_ERROR,
                f"expected a JSON object, got {type(payload).__name__}",
            )
        return cls(
            success=_is_truthy(payload.get("success")),
            message=_coerce_message(payload.get("message")),
            invalid=_coerce_invalid(payload.get("invalid")),
            data=payload,
        )


def _is_truthy(value: Any) -> bool:
    """Truthiness as a browser script sees decoded JSON: empty containers count as true."""
    if value is None or isinstance(value, str):
        return bool(value)
    if isinstance(value, (int, float)):
        # NaN is falsy
        return bool(value) and value == value
    return True


def _coerce_message(value: Any) -> Optional[str]:
    if not _is_truthy(value) or isinstance(value, (dict, list)):
        return None
    return value if isinstance(value, str) else str(value)


def _coerce_invalid(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value] if value else []
    if not isinstance(value, list):
        logger.debug(f"Ignoring 'invalid' of type {type(value).__name__}")
        return []
    return [name for name in value if isinstance(name, str)]
