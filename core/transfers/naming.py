"""starknet.id name resolution over the public HTTP API."""

from __future__ import annotations

import logging

import httpx

from core.transfers.addresses import canonical_address
from core.transfers.errors import ResolutionError

logger = logging.getLogger(__name__)

STARKNET_ID_API_URL = "https://api.starknet.id"


class StarknetIdResolver:
    """Name resolver: ``alice.stark`` -> the address the domain points to."""

    def __init__(self, api_url: str = STARKNET_ID_API_URL, timeout: float = 10.0) -> None:
        self._api_url = api_url.rstrip("/")
        self._timeout = timeout

    async def __call__(self, name: str) -> str:
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                resp = await client.get(f"{self._api_url}/domain_to_addr", params={"domain": name})
        except httpx.HTTPError as e:
            raise ResolutionError(f"starknet.id unavailable: {e}") from e

        if 400 <= resp.status_code < 500:
            raise ResolutionError(f"'{name}' is not a registered starknet.id domain")
        if resp.status_code != 200:
            raise ResolutionError(f"starknet.id returned HTTP {resp.status_code} for '{name}'")

        addr = resp.json().get("addr")
        if not addr:
            raise ResolutionError(f"'{name}' does not point to an address")
        try:
            address = canonical_address(addr)
        except ValueError as e:
            raise ResolutionError(f"starknet.id returned a malformed address for '{name}'") from e

        logger.info(f"Resolved {name} -> {address}")
        return address
