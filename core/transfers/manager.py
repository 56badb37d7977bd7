"""TransferManager — wires config, lookups and the resolver for agent tools.

The manager owns no wallet. Submission goes through an injected
collaborator exposing ``async submit(call) -> tx_hash``; signing,
broadcasting, retries and duplicate-gift bookkeeping all live there.
"""

from __future__ import annotations

import logging
import random
from typing import Any, Protocol

from core.config import Config
from core.transfers.errors import SubmissionError, TransferError, ValidationError
from core.transfers.gifts import draw_gift_amount, find_recipient_address
from core.transfers.intent import normalize_content
from core.transfers.naming import StarknetIdResolver
from core.transfers.resolver import (
    DecimalsProvider,
    NameResolver,
    ResolvedTransfer,
    TransferIntentResolver,
)
from core.transfers.tokens import TokenDecimalsLookup

logger = logging.getLogger(__name__)


class TransferSubmitter(Protocol):
    async def submit(self, call: dict[str, Any]) -> str: ...


class TransferManager:
    """Prepares transfers and New Year gifts from loosely typed agent content."""

    def __init__(
        self,
        config: Config,
        decimals_provider: DecimalsProvider | None = None,
        name_resolver: NameResolver | None = None,
    ) -> None:
        self._config = config
        self._resolver = TransferIntentResolver(
            known_tokens=config.transfers.token_addresses(),
            amount_cap=config.transfers.amount_cap,
        )
        self._decimals_provider = decimals_provider or TokenDecimalsLookup(
            rpc_url=config.starknet.rpc_url,
            known_decimals=config.transfers.token_decimals(),
            timeout=config.starknet.timeout,
        )
        self._name_resolver = name_resolver or StarknetIdResolver(
            api_url=config.starknet.naming_api_url,
            timeout=config.starknet.timeout,
        )

    @property
    def resolver(self) -> TransferIntentResolver:
        return self._resolver

    @property
    def config(self) -> Config:
        return self._config

    async def prepare(self, content: dict[str, Any]) -> ResolvedTransfer:
        """Validate *content* and resolve it into a transfer ready to submit."""
        fields = normalize_content(content)
        fields.setdefault("token_address", self._config.transfers.default_token)
        intent = self._resolver.build_intent(fields)
        return await self._resolver.resolve(intent, self._decimals_provider, self._name_resolver)

    def gift_content(self, message: str, rng: random.Random | None = None) -> dict[str, Any]:
        """Build transfer content for a greeting: recipient from text, random amount."""
        recipient = find_recipient_address(message)
        if recipient is None:
            raise ValidationError("recipient", "no Starknet address found in the message")

        gift = self._config.gift
        try:
            amount = draw_gift_amount(gift.min_amount, gift.max_amount, gift.places, rng)
        except (ValueError, ArithmeticError) as e:
            raise TransferError(f"Invalid gift policy: {e}") from e
        return {
            "token_address": gift.token,
            "recipient_address": recipient,
            "amount": amount,
        }

    async def prepare_gift(self, message: str, rng: random.Random | None = None) -> ResolvedTransfer:
        if not self._config.gift.enabled:
            raise TransferError("New Year gifts are disabled")
        content = self.gift_content(message, rng)
        logger.info(f"Preparing gift of {content['amount']} {content['token_address']}")
        return await self.prepare(content)

    async def submit(self, resolved: ResolvedTransfer, submitter: TransferSubmitter) -> str:
        """Hand the transfer call to the wallet collaborator. Returns the tx hash."""
        call = resolved.to_call()
        try:
            tx_hash = await submitter.submit(call)
        except Exception as e:
            raise SubmissionError(f"Transfer failed: {e}") from e
        if not tx_hash:
            raise SubmissionError("Wallet returned no transaction hash")
        logger.info(f"Transfer submitted: {tx_hash}")
        return str(tx_hash)
