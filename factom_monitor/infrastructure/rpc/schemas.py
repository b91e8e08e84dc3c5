"""Pydantic schemas for factomd JSON-RPC requests/responses.

See factomd wsapi: current-minute returns the directory block height, the
leader height, the minute and the node's timing fields.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from factom_monitor.domain.monitoring import Observation


# ============================================================================
# ENVELOPE
# ============================================================================


class JsonRpcError(BaseModel):
    """JSON-RPC 2.0 error object."""

    code: int
    message: str
    data: Any = None


class JsonRpcResponse(BaseModel):
    """JSON-RPC 2.0 response envelope.

    Example:
        {"jsonrpc": "2.0", "id": 0, "result": {...}}
    """

    jsonrpc: str = "2.0"
    id: int | str | None = None
    result: Any = None
    error: JsonRpcError | None = None


# ============================================================================
# CURRENT-MINUTE
# ============================================================================


class CurrentMinuteResponse(BaseModel):
    """Result of the ``current-minute`` method.

    Example:
        {
            "directoryblockheight": 206421,
            "leaderheight": 206422,
            "minute": 4,
            "currentblockstarttime": 1567000000000000000,
            "currentminutestarttime": 1567000240000000000,
            "currenttime": 1567000251000000000,
            "directoryblockinseconds": 600
        }
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    directory_block_height: int = Field(..., alias="directoryblockheight")
    leader_height: int = Field(..., alias="leaderheight")
    minute: int = Field(..., ge=0, le=10)
    current_block_start_time: int = Field(default=0, alias="currentblockstarttime")
    current_minute_start_time: int = Field(default=0, alias="currentminutestarttime")
    current_time: int = Field(default=0, alias="currenttime")
    directory_block_in_seconds: int = Field(..., alias="directoryblockinseconds", ge=0)

    def to_observation(self) -> Observation:
        """Convert response schema → domain Observation."""
        return Observation(
            committed_height=self.directory_block_height,
            height=self.leader_height,
            minute=self.minute,
            block_seconds=self.directory_block_in_seconds,
            block_start_time=self.current_block_start_time,
            minute_start_time=self.current_minute_start_time,
            server_time=self.current_time,
        )
