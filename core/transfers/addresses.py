"""Starknet address and starknet.id name shape checks."""

from __future__ import annotations

import re
from typing import Any

# felt-sized identifiers are written as 0x + 64 hex digits (32 bytes)
ADDRESS_LENGTH = 66

_HEX_ADDRESS_RE = re.compile(r"0x[0-9a-fA-F]{64}")

# starknet.id grammar: lowercase labels, optional subdomains, .stark root.
# Labels cannot contain ".", so each one matches in exactly one way.
_STARK_DOMAIN_RE = re.compile(r"(?:[a-z0-9-]{1,97}\.)*[a-z0-9-]{1,48}\.stark")


def is_hex_address(value: Any) -> bool:
    """True for a string of exactly ``0x`` + 64 hex digits (either case)."""
    return isinstance(value, str) and _HEX_ADDRESS_RE.fullmatch(value) is not None


def is_stark_domain(value: Any) -> bool:
    """True if *value* is a well-formed ``.stark`` name, e.g. ``alice.stark``."""
    return isinstance(value, str) and _STARK_DOMAIN_RE.fullmatch(value) is not None


def find_hex_address(text: str) -> str | None:
    """Return the first ``0x`` + 64 hex digit run found in *text*, if any."""
    match = _HEX_ADDRESS_RE.search(text)
    return match.group(0) if match else None


def canonical_address(value: str) -> str:
    """Zero-pad a hex felt to the 66-character ``0x`` form, lowercased."""
    number = int(value, 16)
    if not 0 <= number < 2**256:
        raise ValueError(f"Address does not fit in 32 bytes: {value}")
    return f"0x{number:064x}"
