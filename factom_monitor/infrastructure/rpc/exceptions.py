"""factomd client exceptions.

The client translates every transport-level failure into one of these, so
callers handle a single family. The poller does not tell them apart.
"""

from typing import Any

from factom_monitor.domain.shared import DomainException


class FactomdError(DomainException):
    """Base exception for failed factomd requests."""

    pass


class FactomdConnectionError(FactomdError):
    """Node unreachable (DNS, refused connection, reset)."""

    pass


class FactomdTimeoutError(FactomdError):
    """Request did not complete before its deadline."""

    def __init__(self, url: str, timeout: float) -> None:
        super().__init__(f"Request timed out after {timeout:.2f}s", url=url)
        self.timeout = timeout


class FactomdHTTPError(FactomdError):
    """Node answered with a non-2xx status and no JSON-RPC error body."""

    def __init__(self, url: str, status_code: int) -> None:
        super().__init__(f"HTTP {status_code}", url=url)
        self.status_code = status_code


class FactomdRPCError(FactomdError):
    """Node answered with a JSON-RPC error object."""

    def __init__(self, code: int, message: str, data: Any = None) -> None:
        super().__init__(f"JSON-RPC error {code}: {message}")
        self.code = code
        self.rpc_message = message
        self.data = data


class FactomdResponseError(FactomdError):
    """Response body could not be decoded or failed validation."""

    pass
