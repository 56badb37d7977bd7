"""JSON Schema fragments shared by the transfer tools."""

from __future__ import annotations

from typing import Any

TRANSFER_PROPERTIES: dict[str, Any] = {
    "token": {
        "type": "string",
        "description": "Token contract address (0x + 64 hex chars) or a known symbol like STRK.",
    },
    "recipient_address": {
        "type": "string",
        "description": "Recipient Starknet address (0x + 64 hex chars).",
    },
    "recipient_name": {
        "type": "string",
        "description": "Recipient starknet.id name, e.g. alice.stark.",
    },
    "amount": {
        "type": ["string", "number"],
        "description": "Amount in display units, e.g. '2.5'.",
    },
}
