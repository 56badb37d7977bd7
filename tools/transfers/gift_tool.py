"""new_year_gift — send a small token gift in reply to New Year wishes."""

from __future__ import annotations

import asyncio
from typing import Any

from core.transfers.errors import TransferCancelled, TransferError
from tools.base import BaseTool, PermissionLevel, ToolResult


class NewYearGiftTool(BaseTool):
    """Reply to a New Year greeting by gifting tokens to the address it mentions."""

    def __init__(self) -> None:
        self._transfer_manager: Any = None
        self._submitter: Any = None

    @property
    def name(self) -> str:
        return "new_year_gift"

    @property
    def description(self) -> str:
        return (
            "Use when the user sends heartfelt New Year greetings or wishes that include "
            "their Starknet address. Sends a small random gift of tokens to that address. "
            "Do NOT use for explicit token transfer requests."
        )

    @property
    def input_schema(self) -> dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "message": {
                    "type": "string",
                    "description": "The greeting text, including the recipient address.",
                },
            },
            "required": ["message"],
        }

    @property
    def permission_level(self) -> PermissionLevel:
        return PermissionLevel.CRITICAL

    async def execute(self, params: dict[str, Any]) -> ToolResult:
        if not self._transfer_manager or not self._submitter:
            return ToolResult(success=False, error="Transfer system not initialized")

        try:
            resolved = await self._transfer_manager.prepare_gift(params["message"])
            tx_hash = await self._transfer_manager.submit(resolved, self._submitter)
        except TransferCancelled as e:
            # The agent cancelled this call; let the task end cancelled
            raise asyncio.CancelledError() from e
        except TransferError as e:
            return ToolResult(success=False, error=str(e))

        return ToolResult(
            success=True,
            data={
                "tx_hash": tx_hash,
                "amount": str(resolved.amount),
                "token_address": resolved.token_address,
                "to": resolved.recipient_address,
            },
        )
