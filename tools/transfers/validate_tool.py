"""transfer_validate — check a transfer request without touching the network."""

from __future__ import annotations

from typing import Any

from core.transfers.errors import ValidationError
from tools.base import BaseTool, PermissionLevel, ToolResult
from tools.transfers.schema import TRANSFER_PROPERTIES


class TransferValidateTool(BaseTool):
    """Validate token, recipient and amount of a transfer request."""

    def __init__(self) -> None:
        self._transfer_manager: Any = None

    @property
    def name(self) -> str:
        return "transfer_validate"

    @property
    def description(self) -> str:
        return (
            "Check a token transfer request: token address or known symbol, exactly one of "
            "recipient address (0x + 64 hex chars) or .stark name, and a positive amount."
        )

    @property
    def input_schema(self) -> dict[str, Any]:
        return {
            "type": "object",
            "properties": TRANSFER_PROPERTIES,
            "required": ["token", "amount"],
        }

    @property
    def permission_level(self) -> PermissionLevel:
        return PermissionLevel.SAFE

    async def execute(self, params: dict[str, Any]) -> ToolResult:
        if not self._transfer_manager:
            return ToolResult(success=False, error="Transfer system not initialized")

        try:
            intent = self._transfer_manager.resolver.build_intent(params)
        except ValidationError as e:
            return ToolResult(
                success=True,
                data={"valid": False, "field": e.field, "reason": e.message},
            )
        return ToolResult(
            success=True,
            data={
                "valid": True,
                "token_address": intent.token_address,
                "recipient": intent.recipient,
                "amount": str(intent.amount),
            },
        )
