"""HTTP transport used by the Riot API client."""

import asyncio
import json
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Protocol

import httpx
import structlog

from .errors import TransportError

logger = structlog.get_logger(__name__)


@dataclass
class TransportResponse:
    """Status, headers and raw body of one HTTP exchange."""

    status_code: int
    headers: Dict[str, str] = field(default_factory=dict)
    content: bytes = b""
    reason_phrase: str = ""

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def json(self) -> Any:
        """Decode the body as JSON."""
        return json.loads(self.content)


class Transport(Protocol):
    """Single suspending GET primitive."""

    async def fetch(self, url: str, headers: Mapping[str, str]) -> TransportResponse:
        """Issue a GET request and return the response without raising on status."""
        ...

    async def close(self) -> None:
        """Release any pooled connections."""
        ...


class HttpxTransport:
    """Transport backed by a lazily created httpx.AsyncClient."""

    def __init__(self, timeout: float = 30.0, user_agent: str = "riot-gateway/1.0"):
        """
        Initialize transport.

        Args:
            timeout: Total request timeout in seconds
            user_agent: User-Agent header sent with every request
        """
        self.timeout = timeout
        self.user_agent = user_agent
        self.session: Optional[httpx.AsyncClient] = None
        self._session_lock = asyncio.Lock()

    async def start_session(self) -> httpx.AsyncClient:
        """Start the httpx session."""
        if self.session is None or self.session.is_closed:
            async with self._session_lock:
                if self.session is None or self.session.is_closed:
                    timeout = httpx.Timeout(
                        self.timeout, connect=min(5.0, self.timeout)
                    )
                    limits = httpx.Limits(
                        max_keepalive_connections=20, max_connections=20
                    )
                    self.session = httpx.AsyncClient(
                        headers={
                            "Accept": "application/json",
                            "User-Agent": self.user_agent,
                        },
                        timeout=timeout,
                        limits=limits,
                    )
                    logger.info("HTTP transport session started")
        return self.session

    async def fetch(self, url: str, headers: Mapping[str, str]) -> TransportResponse:
        """
        Issue a GET request.

        Raises:
            TransportError: If no HTTP response was received
        """
        session = await self.start_session()
        try:
            response = await session.get(url, headers=dict(headers))
        except httpx.RequestError as e:
            raise TransportError(f"Request failed: {e}") from e

        return TransportResponse(
            status_code=response.status_code,
            headers=dict(response.headers),
            content=response.content,
            reason_phrase=response.reason_phrase,
        )

    async def close(self) -> None:
        """Close the httpx session."""
        if self.session and not self.session.is_closed:
            await self.session.aclose()
            logger.info("HTTP transport session closed")
