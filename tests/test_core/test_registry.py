"""Tool registry tests — transfer tools are built and wired."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from core.config import Config
from core.registry import ToolRegistry, create_transfer_tools
from core.transfers.manager import TransferManager
from tools.transfers.gift_tool import NewYearGiftTool

ALICE = "0x069a419C6ebab0a6aA74CA8e0bCFD9b3b17c985901Dc00e9BaD25cbD05e75343"


@pytest.fixture
def manager(test_config: Config) -> TransferManager:
    return TransferManager(
        test_config,
        decimals_provider=AsyncMock(return_value=18),
        name_resolver=AsyncMock(return_value=ALICE),
    )


class TestCreateTransferTools:
    def test_tools_share_the_manager(self, manager: TransferManager) -> None:
        tools = create_transfer_tools(manager)
        assert [t.name for t in tools] == ["transfer_validate", "transfer_resolve", "new_year_gift"]
        assert all(t._transfer_manager is manager for t in tools)

    def test_submitter_injected_into_gift_tool(self, manager: TransferManager) -> None:
        submitter = MagicMock()
        gift = create_transfer_tools(manager, submitter)[-1]
        assert isinstance(gift, NewYearGiftTool)
        assert gift._submitter is submitter


class TestToolRegistry:
    def test_load_and_lookup(self, manager: TransferManager) -> None:
        registry = ToolRegistry()
        registry.load_transfer_tools(manager)
        assert registry.get("transfer_resolve") is not None
        assert registry.get("crypto_transfer") is None
        assert len(registry.all_tools()) == 3
        assert {s["permission"] for s in registry.list_tool_summaries()} == {"safe", "critical"}
        assert all(schema["type"] == "function" for schema in registry.list_tools())

    @pytest.mark.asyncio
    async def test_registered_resolve_tool_runs(self, manager: TransferManager) -> None:
        registry = ToolRegistry()
        registry.load_transfer_tools(manager)
        result = await registry.get("transfer_resolve").execute(
            {"token": "STRK", "recipient_name": "alice.stark", "amount": "2.5"}
        )
        assert result.success
        assert result.data["recipient_address"] == ALICE
        assert result.data["amount_minor_units"] == "2500000000000000000"

    @pytest.mark.asyncio
    async def test_registered_gift_tool_sends(self, manager: TransferManager) -> None:
        submitter = MagicMock()
        submitter.submit = AsyncMock(return_value="0xfeed")
        registry = ToolRegistry()
        registry.load_transfer_tools(manager, submitter)

        result = await registry.get("new_year_gift").execute({"message": f"Happy New Year {ALICE}"})

        assert result.success
        assert result.data["tx_hash"] == "0xfeed"
        submitter.submit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_gift_without_submitter(self, manager: TransferManager) -> None:
        registry = ToolRegistry()
        registry.load_transfer_tools(manager)
        result = await registry.get("new_year_gift").execute({"message": f"Hi {ALICE}"})
        assert not result.success
        assert "not initialized" in result.error.lower()
