"""
factomd JSON-RPC Client

Talks to a factomd node's v2 API over HTTP using JSON-RPC 2.0.

API Endpoint:
- POST {url}  (e.g. https://api.factomd.net/v2)
  - method: "current-minute" - leader height, directory block height,
    minute and block timing of the node

Every request runs under a hard deadline; whatever goes wrong (connection,
deadline, HTTP status, malformed body) surfaces as a FactomdError.
"""

import asyncio
from typing import Any, Optional

import httpx
from pydantic import ValidationError

from factom_monitor.config.logging import get_logger
from factom_monitor.domain.monitoring import Observation

from .exceptions import (
    FactomdConnectionError,
    FactomdHTTPError,
    FactomdResponseError,
    FactomdRPCError,
    FactomdTimeoutError,
)
from .schemas import CurrentMinuteResponse, JsonRpcResponse

logger = get_logger(__name__)


class FactomdClient:
    """
    Async client for a single factomd node.

    Usage:
        client = FactomdClient("http://localhost:8088/v2")

        observation = await client.current_minute(timeout=2.0)

        await client.aclose()
    """

    CURRENT_MINUTE = "current-minute"

    def __init__(
        self,
        url: str,
        timeout: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = url
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None
        self._request_id = 0

    async def __aenter__(self) -> "FactomdClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                transport=self._transport,
                headers={
                    "Content-Type": "application/json",
                    "Accept": "application/json",
                },
            )
        return self._client

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
        self._client = None

    async def request(
        self,
        method: str,
        params: Any = None,
        *,
        timeout: Optional[float] = None,
    ) -> Any:
        """Make one JSON-RPC call and return its ``result``.

        Args:
            method: JSON-RPC method name.
            params: Optional params object.
            timeout: Deadline for the whole call (defaults to self.timeout).

        Raises:
            FactomdError: On any failure.
        """
        deadline = timeout if timeout is not None else self.timeout
        client = await self._get_client()

        self._request_id += 1
        payload: dict[str, Any] = {
            "jsonrpc": "2.0",
            "id": self._request_id,
            "method": method,
        }
        if params is not None:
            payload["params"] = params

        try:
            response = await asyncio.wait_for(
                client.post(self.url, json=payload, timeout=deadline),
                timeout=deadline,
            )
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            raise FactomdTimeoutError(self.url, deadline) from e
        except httpx.HTTPError as e:
            raise FactomdConnectionError(f"Request failed: {e}", url=self.url) from e

        return self._decode(response)

    def _decode(self, response: httpx.Response) -> Any:
        """Unwrap a JSON-RPC envelope, raising on error objects."""
        try:
            envelope = JsonRpcResponse.model_validate(response.json())
        except ValueError as e:
            # json.JSONDecodeError and pydantic ValidationError are both ValueErrors
            if response.is_error:
                raise FactomdHTTPError(self.url, response.status_code) from e
            raise FactomdResponseError(
                "Malformed JSON-RPC response", url=self.url
            ) from e

        if envelope.error is not None:
            raise FactomdRPCError(
                envelope.error.code, envelope.error.message, envelope.error.data
            )
        if response.is_error:
            raise FactomdHTTPError(self.url, response.status_code)
        return envelope.result

    async def current_minute(self, *, timeout: Optional[float] = None) -> Observation:
        """Fetch the node's current position.

        Args:
            timeout: Deadline for the request.

        Returns:
            Decoded Observation.

        Raises:
            FactomdError: On any failure.
        """
        result = await self.request(self.CURRENT_MINUTE, timeout=timeout)
        try:
            response = CurrentMinuteResponse.model_validate(result)
        except ValidationError as e:
            raise FactomdResponseError(
                f"Invalid {self.CURRENT_MINUTE} result: {e.error_count()} error(s)",
                url=self.url,
            ) from e

        observation = response.to_observation()
        logger.debug(
            "factomd.current_minute",
            height=observation.height,
            committed_height=observation.committed_height,
            minute=observation.minute,
        )
        return observation
