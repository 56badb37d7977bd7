"""Token lookups — symbol resolution and ERC-20 decimals over Starknet JSON-RPC."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import httpx

from core.transfers.errors import ResolutionError

logger = logging.getLogger(__name__)

# starknet_keccak("decimals")
DECIMALS_SELECTOR = "0x4c4fb1ab068f6039d5780c68dd0fa2f8742cceb3426d19667778ca7f3518a9"


def resolve_token(token: str, known_tokens: Mapping[str, str]) -> str:
    """Map a known symbol (any case) to its address; other values pass through.

    Unknown symbols are returned unchanged so the intent's shape check
    reports them.
    """
    for symbol, address in known_tokens.items():
        if symbol.lower() == token.strip().lower():
            return address
    return token


class TokenDecimalsLookup:
    """Decimals provider: configured table first, then the token contract.

    Table keys are compared by numeric value, so ``0x049d…`` and ``0x49d…``
    name the same contract.
    """

    def __init__(
        self,
        rpc_url: str,
        known_decimals: Mapping[str, int] | None = None,
        timeout: float = 10.0,
    ) -> None:
        self._rpc_url = rpc_url
        self._timeout = timeout
        self._known: dict[int, int] = {
            int(address, 16): decimals for address, decimals in (known_decimals or {}).items()
        }

    async def __call__(self, token_address: str) -> int:
        known = self._known.get(int(token_address, 16))
        if known is not None:
            return known

        result = await self._rpc_call(
            "starknet_call",
            {
                "request": {
                    "contract_address": token_address,
                    "entry_point_selector": DECIMALS_SELECTOR,
                    "calldata": [],
                },
                "block_id": "latest",
            },
        )
        if not isinstance(result, list) or not result:
            raise ResolutionError(f"Token {token_address} returned no decimals")
        decimals = int(result[0], 16)
        logger.debug(f"Fetched decimals for {token_address}: {decimals}")
        return decimals

    async def _rpc_call(self, method: str, params: dict[str, Any]) -> Any:
        """Make a JSON-RPC call to the configured Starknet node."""
        payload = {"jsonrpc": "2.0", "id": 1, "method": method, "params": params}
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                resp = await client.post(self._rpc_url, json=payload)
                resp.raise_for_status()
                data = resp.json()
        except httpx.HTTPError as e:
            raise ResolutionError(f"Starknet RPC unavailable: {e}") from e

        error = data.get("error")
        if error:
            msg = error.get("message", str(error)) if isinstance(error, dict) else str(error)
            raise ResolutionError(f"RPC error: {msg}")
        return data.get("result")
