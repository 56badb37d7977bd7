"""Tool registry: builds, wires, and looks up the transfer tools.

Provides tool lookup by name and generates LLM-compatible schemas for the
agent runtime that hosts StarGift.
"""

from __future__ import annotations

import logging
from typing import Any

from core.transfers.manager import TransferManager, TransferSubmitter
from tools.base import BaseTool

logger = logging.getLogger(__name__)


class ToolRegistry:
    """Central registry for the agent-facing tools."""

    def __init__(self) -> None:
        self._tools: dict[str, BaseTool] = {}

    def register(self, tool: BaseTool) -> None:
        """Register a tool instance."""
        self._tools[tool.name] = tool

    def get(self, name: str) -> BaseTool | None:
        """Look up a tool by name."""
        return self._tools.get(name)

    def list_tools(self) -> list[dict[str, Any]]:
        """Return tool schemas in OpenAI function-calling format for LLM."""
        return [tool.to_llm_schema() for tool in self._tools.values()]

    def list_tool_summaries(self) -> list[dict[str, str]]:
        """Return human-readable tool summaries."""
        return [
            {
                "name": t.name,
                "description": t.description,
                "permission": t.permission_level.value,
            }
            for t in self._tools.values()
        ]

    def all_tools(self) -> list[BaseTool]:
        return list(self._tools.values())

    def load_transfer_tools(
        self,
        manager: TransferManager,
        submitter: TransferSubmitter | None = None,
    ) -> None:
        """Instantiate the transfer tools and inject their collaborators.

        Without a submitter ``new_year_gift`` stays registered but reports
        that the transfer system is not initialized.
        """
        for tool in create_transfer_tools(manager, submitter):
            self.register(tool)
        logger.info(f"Registered {len(self._tools)} tools")


def create_transfer_tools(
    manager: TransferManager,
    submitter: TransferSubmitter | None = None,
) -> list[BaseTool]:
    """Build the three transfer tools wired to *manager* (and *submitter*)."""
    from tools.transfers.gift_tool import NewYearGiftTool
    from tools.transfers.resolve_tool import TransferResolveTool
    from tools.transfers.validate_tool import TransferValidateTool

    validate_tool = TransferValidateTool()
    validate_tool._transfer_manager = manager

    resolve_tool = TransferResolveTool()
    resolve_tool._transfer_manager = manager

    gift_tool = NewYearGiftTool()
    gift_tool._transfer_manager = manager
    gift_tool._submitter = submitter

    return [validate_tool, resolve_tool, gift_tool]
