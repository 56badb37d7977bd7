"""transfer_resolve — resolve a transfer into a wallet call without sending it."""

from __future__ import annotations

import asyncio
from typing import Any

from core.transfers.errors import TransferCancelled, TransferError
from tools.base import BaseTool, PermissionLevel, ToolResult
from tools.transfers.schema import TRANSFER_PROPERTIES


class TransferResolveTool(BaseTool):
    """Resolve recipient and token decimals, returning the ERC-20 transfer call."""

    def __init__(self) -> None:
        self._transfer_manager: Any = None

    @property
    def name(self) -> str:
        return "transfer_resolve"

    @property
    def description(self) -> str:
        return (
            "Resolve a token transfer: look up the .stark name and token decimals, and "
            "return the exact amount in minor units plus the transfer call. Sends nothing."
        )

    @property
    def input_schema(self) -> dict[str, Any]:
        return {
            "type": "object",
            "properties": TRANSFER_PROPERTIES,
            "required": ["amount"],
        }

    @property
    def permission_level(self) -> PermissionLevel:
        return PermissionLevel.SAFE

    async def execute(self, params: dict[str, Any]) -> ToolResult:
        if not self._transfer_manager:
            return ToolResult(success=False, error="Transfer system not initialized")

        try:
            resolved = await self._transfer_manager.prepare(params)
        except TransferCancelled as e:
            # The agent cancelled this call; let the task end cancelled
            raise asyncio.CancelledError() from e
        except TransferError as e:
            return ToolResult(success=False, error=str(e))
        return ToolResult(success=True, data={**resolved.to_dict(), "call": resolved.to_call()})
