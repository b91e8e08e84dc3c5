"""factomd JSON-RPC client."""

from .client import FactomdClient
from .exceptions import (
    FactomdConnectionError,
    FactomdError,
    FactomdHTTPError,
    FactomdResponseError,
    FactomdRPCError,
    FactomdTimeoutError,
)
from .schemas import CurrentMinuteResponse, JsonRpcError, JsonRpcResponse

__all__ = [
    "FactomdClient",
    "FactomdError",
    "FactomdConnectionError",
    "FactomdTimeoutError",
    "FactomdHTTPError",
    "FactomdRPCError",
    "FactomdResponseError",
    "CurrentMinuteResponse",
    "JsonRpcError",
    "JsonRpcResponse",
]
