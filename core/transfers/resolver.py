"""TransferIntentResolver — validate a transfer request and resolve it for submission.

Resolution needs two answers from the outside world: the recipient's
address (when a starknet.id name was given) and the token's decimals. Both
come from injected providers, which may be plain callables or coroutine
functions. They are independent, so they run concurrently and are joined
before the amount is scaled.

The resolver never retries and imposes no timeout. Callers own both:
wrap ``resolve`` in ``asyncio.wait_for`` or cancel the task, and the
pending lookups are abandoned with ``TransferCancelled``.
"""

from __future__ import annotations

import asyncio
import dataclasses
import inspect
import logging
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from core.transfers.addresses import is_hex_address, is_stark_domain
from core.transfers.errors import (
    ResolutionError,
    TransferCancelled,
    TransferError,
    ValidationError,
)
from core.transfers.intent import (
    DomainValidator,
    TransferIntent,
    check_transfer_content,
    normalize_content,
)
from core.transfers.tokens import resolve_token
from core.transfers.units import U256_MAX, check_decimals, split_u256, to_minor_units

logger = logging.getLogger(__name__)

DecimalsProvider = Callable[[str], "int | Awaitable[int]"]
NameResolver = Callable[[str], "str | Awaitable[str]"]


@dataclass(frozen=True)
class ResolvedTransfer:
    """A transfer ready for the wallet: canonical recipient and integer amount."""

    recipient_address: str
    amount_minor_units: int
    token_address: str
    decimals: int
    amount: Decimal
    recipient_name: str | None = None

    def to_call(self) -> dict[str, Any]:
        """ERC-20 ``transfer(recipient, amount: u256)`` call for the wallet."""
        low, high = split_u256(self.amount_minor_units)
        return {
            "contract_address": self.token_address,
            "entrypoint": "transfer",
            "calldata": [self.recipient_address, hex(low), hex(high)],
        }

    def to_dict(self) -> dict[str, Any]:
        data = dataclasses.asdict(self)
        data["amount"] = str(self.amount)
        data["amount_minor_units"] = str(self.amount_minor_units)
        return data


class TransferIntentResolver:
    """Validates transfer requests and resolves them against two lookups.

    Args:
        known_tokens: Symbol -> token address, used by ``build_intent`` so
            requests may name a token as ``STRK`` instead of its address.
        is_valid_domain: Domain-name grammar check, owned by the naming
            service. Defaults to the starknet.id grammar.
        amount_cap: Largest allowed minor-unit amount. Defaults to the u256
            maximum an ERC-20 ``transfer`` can carry; None lifts it.
    """

    def __init__(
        self,
        known_tokens: Mapping[str, str] | None = None,
        is_valid_domain: DomainValidator = is_stark_domain,
        amount_cap: int | None = U256_MAX,
    ) -> None:
        self._known_tokens = dict(known_tokens or {})
        self._is_valid_domain = is_valid_domain
        self._amount_cap = amount_cap

    @property
    def known_tokens(self) -> dict[str, str]:
        return dict(self._known_tokens)

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def check(self, content: Mapping[str, Any] | TransferIntent) -> None:
        """Raise ValidationError naming the first field that fails."""
        if isinstance(content, TransferIntent):
            content = {
                "token_address": content.token_address,
                "recipient_address": content.recipient_address,
                "recipient_name": content.recipient_name,
                "amount": content.amount,
            }
        check_transfer_content(normalize_content(content), self._is_valid_domain)

    def validate(self, content: Mapping[str, Any] | TransferIntent) -> bool:
        """True if *content* would produce a valid intent."""
        try:
            self.check(content)
        except ValidationError as e:
            logger.debug(f"Transfer content rejected: {e}")
            return False
        return True

    def build_intent(self, content: Mapping[str, Any]) -> TransferIntent:
        """Build an intent, first mapping a known token symbol to its address."""
        fields = normalize_content(content)
        token = fields.get("token_address")
        if isinstance(token, str):
            fields["token_address"] = resolve_token(token, self._known_tokens)
        return TransferIntent.from_content(fields, self._is_valid_domain)

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    async def resolve(
        self,
        intent: TransferIntent,
        decimals_provider: DecimalsProvider,
        name_resolver: NameResolver | None = None,
    ) -> ResolvedTransfer:
        """Resolve the recipient and scale the amount. Each provider runs at most once."""
        if intent.recipient_name is not None and not self._is_valid_domain(intent.recipient_name):
            raise ValidationError(
                "recipient_name", f"not a valid domain name: {intent.recipient_name!r}"
            )

        logger.info(
            f"Resolving transfer of {intent.amount} {intent.token_address} to {intent.recipient}"
        )
        tasks = [
            asyncio.ensure_future(self._lookup_recipient(intent, name_resolver)),
            asyncio.ensure_future(self._lookup_decimals(intent.token_address, decimals_provider)),
        ]
        try:
            recipient_address, decimals = await asyncio.gather(*tasks)
        except asyncio.CancelledError as e:
            logger.info(f"Resolution cancelled for {intent.recipient}")
            raise TransferCancelled(
                f"Resolution of transfer to {intent.recipient} was cancelled"
            ) from e
        finally:
            for task in tasks:
                if not task.done():
                    task.cancel()

        minor_units = to_minor_units(intent.amount, decimals, cap=self._amount_cap)
        resolved = ResolvedTransfer(
            recipient_address=recipient_address,
            amount_minor_units=minor_units,
            token_address=intent.token_address,
            decimals=decimals,
            amount=intent.amount,
            recipient_name=intent.recipient_name,
        )
        logger.info(
            f"Resolved {intent.amount} -> {minor_units} minor units (decimals={decimals}) "
            f"to {recipient_address}"
        )
        return resolved

    async def _lookup_recipient(
        self, intent: TransferIntent, name_resolver: NameResolver | None
    ) -> str:
        if intent.recipient_address:
            return intent.recipient_address

        name = intent.recipient_name or ""
        if name_resolver is None:
            raise ResolutionError(f"No name resolver configured to look up '{name}'")
        try:
            address = await _call(name_resolver, name)
        except TransferError:
            raise
        except Exception as e:
            raise ResolutionError(f"Name lookup failed for '{name}': {e}") from e

        if not address:
            raise ResolutionError(f"'{name}' is not registered")
        if not is_hex_address(address):
            raise ResolutionError(f"Name resolver returned a malformed address for '{name}'")
        return address

    async def _lookup_decimals(self, token_address: str, decimals_provider: DecimalsProvider) -> int:
        try:
            decimals = await _call(decimals_provider, token_address)
        except TransferError:
            raise
        except Exception as e:
            raise ResolutionError(f"Decimals lookup failed for {token_address}: {e}") from e
        return check_decimals(decimals)


async def _call(provider: Callable[[str], Any], arg: str) -> Any:
    """Call a sync or async provider and return its answer."""
    result = provider(arg)
    if inspect.isawaitable(result):
        result = await result
    return result
