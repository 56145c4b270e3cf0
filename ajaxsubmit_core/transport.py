"""
Network exchange for form submissions.

Usage:
    from ajaxsubmit_core.transport import AiohttpTransport

    async with AiohttpTransport() as transport:
        data = await transport.send("POST", "https://example.com/save", [("email", "a@b.c")])
"""

import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence, Tuple

import aiohttp

from .config import Config, config as default_config
from .error_handler import STATUS_ERROR, STATUS_PARSER_ERROR, to_transport_error
from .exceptions import TransportError

logger = logging.getLogger(__name__)

ACCEPT_JSON = "application/json, text/javascript, */*; q=0.01"

# Methods whose fields travel in the query string
QUERY_METHODS = ("GET", "HEAD")


class Transport(ABC):
    """
    Performs one request and returns the decoded JSON payload.

    Implementations raise :class:`TransportError` for every failure
    (connection, non-success status, undecodable body).
    """

    @abstractmethod
    async def send(self, method: str, url: str, fields: Sequence[Tuple[str, str]]) -> Any:
        pass

    async def close(self):
        pass

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()


class AiohttpTransport(Transport):
    """aiohttp-backed transport; owns its session unless one is passed in."""

    def __init__(
        self,
        session: Optional[aiohttp.ClientSession] = None,
        headers: Optional[Dict[str, str]] = None,
        cfg: Optional[Config] = None,
    ):
        self.cfg = cfg or default_config
        self._session = session
        self._owns_session = session is None
        self.headers = {
            "Accept": ACCEPT_JSON,
            "X-Requested-With": "XMLHttpRequest",
        }
        if self.cfg.user_agent:
            self.headers["User-Agent"] = self.cfg.user_agent
        self.headers.update(headers or {})
        self.request_count = 0

    def _get_session(self) -> aiohttp.ClientSession:
        """Lazy init the client session."""
        if self._session is None or self._session.closed:
            timeout = aiohttp.ClientTimeout(total=self.cfg.request_timeout) \
                if self.cfg.request_timeout is not None else None
            kwargs = {"timeout": timeout} if timeout else {}
            connector = aiohttp.TCPConnector(ssl=None if self.cfg.verify_ssl else False)
            self._session = aiohttp.ClientSession(connector=connector, **kwargs)
            self._owns_session = True
        return self._session

    async def send(self, method: str, url: str, fields: Sequence[Tuple[str, str]]) -> Any:
        method = (method or "GET").upper()
        pairs: List[Tuple[str, str]] = list(fields)
        kwargs: Dict[str, Any] = {"headers": self.headers}
        if method in QUERY_METHODS:
            kwargs["params"] = pairs
        else:
            kwargs["data"] = pairs

        self.request_count += 1
        logger.debug(f"{method} {url} ({len(pairs)} fields)")
        try:
            async with self._get_session().request(method, url, **kwargs) as resp:
                if not (200 <= resp.status < 300 or resp.status == 304):
                    logger.warning(f"{method} {url} returned {resp.status} {resp.reason}")
                    raise TransportError(STATUS_ERROR, resp.reason or "", http_status=resp.status)
                body = await resp.text()
        except TransportError:
            raise
        except Exception as e:
            err = to_transport_error(e)
            logger.warning(f"{method} {url} failed: {err.status} {err.detail}")
            raise err from e

        return self.decode(body)

    @staticmethod
    def decode(body: str) -> Any:
        """Decode a JSON body; an empty or malformed body is a parse failure."""
        try:
            return json.loads(body)
        except ValueError as e:
            raise TransportError(STATUS_PARSER_ERROR, str(e)) from e

    async def close(self):
        if self._session is not None and self._owns_session and not self._session.closed:
            await self._session.close()
        self._session = None
