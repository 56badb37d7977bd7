"""Tool base class and interface definition.

Every StarGift tool exposed to the agent runtime inherits from BaseTool and
implements the required interface.
"""

from __future__ import annotations

import abc
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class PermissionLevel(StrEnum):
    SAFE = "safe"
    MODERATE = "moderate"
    CRITICAL = "critical"


@dataclass
class ToolResult:
    """Standardized result from tool execution."""

    success: bool
    data: dict[str, Any] = field(default_factory=dict)
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"success": self.success}
        result.update(self.data)
        if self.error:
            result["error"] = self.error
        return result


class BaseTool(abc.ABC):
    """Abstract base class for all StarGift tools."""

    @property
    @abc.abstractmethod
    def name(self) -> str:
        """Unique snake_case identifier."""
        ...

    @property
    @abc.abstractmethod
    def description(self) -> str:
        """Natural language description for LLM tool selection."""
        ...

    @property
    @abc.abstractmethod
    def input_schema(self) -> dict[str, Any]:
        """JSON Schema for input parameters."""
        ...

    @property
    @abc.abstractmethod
    def permission_level(self) -> PermissionLevel:
        """Permission tier for this tool."""
        ...

    @abc.abstractmethod
    async def execute(self, params: dict[str, Any]) -> ToolResult:
        """Execute the tool with validated parameters."""
        ...

    def validate_input(self, params: dict[str, Any]) -> list[str]:
        """Validate input against schema. Returns list of errors (empty = valid)."""
        errors: list[str] = []
        schema = self.input_schema
        properties = schema.get("properties", {})

        for req_field in schema.get("required", []):
            if req_field not in params:
                errors.append(f"Missing required field: {req_field}")

        for param_name, value in params.items():
            expected = properties.get(param_name, {}).get("type")
            if expected and value is not None and not _check_type(value, expected):
                errors.append(
                    f"Field '{param_name}' expected type '{expected}', "
                    f"got '{type(value).__name__}'"
                )

        return errors

    def to_llm_schema(self) -> dict[str, Any]:
        """Return OpenAI function-calling compatible schema for LLM."""
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.input_schema,
            },
        }


_TYPE_MAP: dict[str, type | tuple[type, ...]] = {
    "string": str,
    "integer": int,
    "number": (int, float),
    "boolean": bool,
    "array": list,
    "object": dict,
}


def _check_type(value: Any, expected: str | list[str]) -> bool:
    """Check a value against a JSON Schema type or list of types.

    Booleans are not numbers here, unlike Python's ``isinstance``.
    """
    names = [expected] if isinstance(expected, str) else expected
    for name in names:
        expected_types = _TYPE_MAP.get(name)
        if expected_types is None:
            return True
        if isinstance(value, bool) and name != "boolean":
            continue
        if isinstance(value, expected_types):
            return True
    return False
