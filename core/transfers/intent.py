"""TransferIntent — a validated, immutable transfer request.

Agent runtimes hand over loosely typed content (LLM output, tool params):
the amount may be a string or a number and recipient fields are optional.
``TransferIntent.from_content`` is the single way to turn such content into
an intent; anything it returns has passed every shape check.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any

from core.transfers.addresses import is_hex_address, is_stark_domain
from core.transfers.errors import ValidationError

DomainValidator = Callable[[str], bool]

# Field names used by agent-runtime content objects
_CONTENT_ALIASES: dict[str, str] = {
    "tokenAddress": "token_address",
    "token": "token_address",
    "recipient": "recipient_address",
    "to": "recipient_address",
    "starkName": "recipient_name",
}


def normalize_content(content: Mapping[str, Any]) -> dict[str, Any]:
    """Map runtime field names onto ours; snake_case keys win on conflict."""
    normalized: dict[str, Any] = {}
    for key, value in content.items():
        target = _CONTENT_ALIASES.get(key)
        if target is None:
            normalized[key] = value
        elif target not in content:
            normalized.setdefault(target, value)
    return normalized


def parse_amount(value: Any) -> Decimal:
    """Parse a string or number into an exact, finite, positive Decimal.

    Floats go through ``str`` so ``0.1`` becomes ``Decimal("0.1")`` rather
    than its binary expansion.
    """
    if isinstance(value, bool):
        raise ValidationError("amount", "must be a string or a number")
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, int):
        amount = Decimal(value)
    elif isinstance(value, float):
        if not math.isfinite(value):
            raise ValidationError("amount", f"must be finite, got {value!r}")
        amount = Decimal(str(value))
    elif isinstance(value, str):
        try:
            amount = Decimal(value.strip())
        except InvalidOperation:
            raise ValidationError("amount", f"not a decimal number: {value!r}") from None
    else:
        raise ValidationError("amount", "must be a string or a number")

    _check_positive(amount)
    return amount


def check_transfer_content(
    content: Mapping[str, Any],
    is_valid_domain: DomainValidator = is_stark_domain,
) -> None:
    """Run the checks in order, raising ValidationError on the first failure.

    1. ``token_address`` is ``0x`` + 64 hex digits.
    2. Exactly one of ``recipient_address`` / ``recipient_name`` is set and
       well formed.
    3. ``amount`` parses to a finite decimal > 0.
    """
    _check_token(content.get("token_address"))
    _check_recipient(
        content.get("recipient_address"),
        content.get("recipient_name"),
        is_valid_domain,
    )
    parse_amount(content.get("amount"))


@dataclass(frozen=True)
class TransferIntent:
    """A transfer request that passed validation. Build with ``from_content``."""

    token_address: str
    amount: Decimal
    recipient_address: str | None = None
    recipient_name: str | None = None
    domain_validator: DomainValidator = field(default=is_stark_domain, repr=False, compare=False)

    def __post_init__(self) -> None:
        _check_token(self.token_address)
        _check_recipient(self.recipient_address, self.recipient_name, self.domain_validator)
        if not isinstance(self.amount, Decimal):
            raise ValidationError("amount", "must be a Decimal; use TransferIntent.from_content")
        _check_positive(self.amount)

    @classmethod
    def from_content(
        cls,
        content: Mapping[str, Any],
        is_valid_domain: DomainValidator = is_stark_domain,
    ) -> TransferIntent:
        """Validate raw content and build an intent from it."""
        fields = normalize_content(content)
        check_transfer_content(fields, is_valid_domain)
        return cls(
            token_address=fields["token_address"],
            amount=parse_amount(fields["amount"]),
            recipient_address=fields.get("recipient_address") or None,
            recipient_name=fields.get("recipient_name") or None,
            domain_validator=is_valid_domain,
        )

    @property
    def recipient(self) -> str:
        """The recipient as given, address or name."""
        return self.recipient_address or self.recipient_name or ""


# ---------------------------------------------------------------------------
# Field checks
# ---------------------------------------------------------------------------


def _check_token(token_address: Any) -> None:
    if not isinstance(token_address, str):
        raise ValidationError("token_address", "is required")
    if not is_hex_address(token_address):
        raise ValidationError(
            "token_address", f"must be 0x followed by 64 hex digits, got {token_address!r}"
        )


def _check_recipient(address: Any, name: Any, is_valid_domain: DomainValidator) -> None:
    if address and name:
        raise ValidationError("recipient", "set recipient_address or recipient_name, not both")
    if not address and not name:
        raise ValidationError("recipient", "recipient_address or recipient_name is required")

    if address:
        if not is_hex_address(address):
            raise ValidationError(
                "recipient_address", f"must be 0x followed by 64 hex digits, got {address!r}"
            )
    elif not isinstance(name, str) or not is_valid_domain(name):
        raise ValidationError("recipient_name", f"not a valid domain name: {name!r}")


def _check_positive(amount: Decimal) -> None:
    if not amount.is_finite():
        raise ValidationError("amount", f"must be finite, got {amount}")
    if amount <= 0:
        raise ValidationError("amount", f"must be greater than 0, got {amount}")
