"""Configuration system for StarGift.

Loads config.yaml, validates required fields, and provides typed access.
Supports environment variable overrides for the Starknet RPC endpoint.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from core.transfers.gifts import gift_tick_range
from core.transfers.units import U256_MAX

# Starknet mainnet ERC-20 contracts the gift action knows by symbol
_DEFAULT_TOKENS: dict[str, tuple[str, int]] = {
    "ETH": ("0x049d36570d4e46f48e99674bd3fcc84644ddd6b96f7c741b1562b82f9e004dc7", 18),
    "STRK": ("0x04718f5a0fc34cc1af16a1cdee98ffb20c31f5cd61d6ab07201858f4287c938d", 18),
    "BTC": ("0x03fe2b97c1fd336e750087d68b9b867997fd64a2661ff3ca5a7c771641e8e7ac", 8),
    "LORDS": ("0x0124aeb495b947201f5fac96fd1138e326ad86195b98df6dec9009158a533b49", 18),
}


class ConfigError(Exception):
    """Raised when config.yaml has a value of the wrong shape."""


@dataclass
class TokenConfig:
    """A known ERC-20 token. ``decimals`` None means ask the contract."""

    address: str
    decimals: int | None = None


def _default_tokens() -> dict[str, TokenConfig]:
    return {sym: TokenConfig(address=a, decimals=d) for sym, (a, d) in _DEFAULT_TOKENS.items()}


@dataclass
class TransfersConfig:
    """Transfer resolution settings."""

    default_token: str = "STRK"
    known_tokens: dict[str, TokenConfig] = field(default_factory=_default_tokens)
    amount_cap: int | None = U256_MAX  # None = unbounded

    def token_addresses(self) -> dict[str, str]:
        return {symbol: token.address for symbol, token in self.known_tokens.items()}

    def token_decimals(self) -> dict[str, int]:
        return {
            token.address: token.decimals
            for token in self.known_tokens.values()
            if token.decimals is not None
        }


@dataclass
class GiftConfig:
    """New Year gift policy."""

    enabled: bool = True
    token: str = "STRK"
    min_amount: float = 1.0
    max_amount: float = 5.0
    places: int = 3


@dataclass
class StarknetConfig:
    """Starknet network endpoints."""

    rpc_url: str = "https://starknet-mainnet.public.blastapi.io/rpc/v0_7"
    naming_api_url: str = "https://api.starknet.id"
    timeout: float = 10.0


@dataclass
class Config:
    """Top-level StarGift configuration."""

    agent_name: str = "StarGift"
    transfers: TransfersConfig = field(default_factory=TransfersConfig)
    gift: GiftConfig = field(default_factory=GiftConfig)
    starknet: StarknetConfig = field(default_factory=StarknetConfig)
    project_root: Path = field(default_factory=Path.cwd)


def _parse_tokens(data: dict[str, Any]) -> dict[str, TokenConfig]:
    """Parse the known_tokens section: ``SYMBOL: address`` or ``SYMBOL: {address, decimals}``."""
    tokens: dict[str, TokenConfig] = {}
    for symbol, tdata in data.items():
        if isinstance(tdata, str):
            tokens[str(symbol)] = TokenConfig(address=tdata)
        elif isinstance(tdata, dict) and isinstance(tdata.get("address"), str):
            decimals = tdata.get("decimals")
            if decimals is not None and not isinstance(decimals, int):
                raise ConfigError(f"known_tokens.{symbol}.decimals must be an integer")
            tokens[str(symbol)] = TokenConfig(address=tdata["address"], decimals=decimals)
        else:
            raise ConfigError(f"known_tokens.{symbol} needs an address")
    return tokens


def _parse_amount_cap(raw: dict[str, Any]) -> int | None:
    """Missing -> u256 max; ``null`` -> no cap; ``u256`` or an integer otherwise."""
    if "amount_cap" not in raw:
        return U256_MAX
    cap = raw["amount_cap"]
    if cap is None:
        return None
    if cap == "u256":
        return U256_MAX
    if isinstance(cap, bool) or not isinstance(cap, int) or cap < 0:
        raise ConfigError(f"transfers.amount_cap must be a non-negative integer, got {cap!r}")
    return cap


def _check_gift_policy(gift: GiftConfig) -> None:
    """Reject a gift policy that could never draw a positive amount."""
    for key in ("min_amount", "max_amount"):
        value = getattr(gift, key)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ConfigError(f"gift.{key} must be a number, got {value!r}")
    if gift.min_amount > gift.max_amount:
        raise ConfigError("gift.min_amount must not exceed gift.max_amount")
    try:
        gift_tick_range(gift.min_amount, gift.max_amount, gift.places)
    except (ValueError, ArithmeticError) as e:
        raise ConfigError(f"Invalid gift policy: {e}") from e


def _apply_env_overrides(config: Config) -> None:
    """Apply environment variable overrides for network endpoints."""
    rpc_url = os.environ.get("STARKNET_RPC_URL")
    if rpc_url:
        config.starknet.rpc_url = rpc_url


def load_config(config_path: Path | str | None = None) -> Config:
    """Load and validate configuration from YAML file.

    Args:
        config_path: Path to config.yaml. If None, checks STARGIFT_CONFIG
                     env var, then falls back to ./config.yaml.

    Returns:
        Populated Config dataclass.
    """
    if config_path is None:
        env_path = os.environ.get("STARGIFT_CONFIG")
        if env_path:
            config_path = Path(env_path)
        else:
            config_path = Path.cwd() / "config.yaml"
    else:
        config_path = Path(config_path)

    if not config_path.exists():
        config = Config(project_root=config_path.parent)
        _apply_env_overrides(config)
        return config

    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}

    agent = raw.get("agent", {})

    transfers_raw = raw.get("transfers", {})
    tokens_raw = transfers_raw.get("known_tokens")
    transfers_config = TransfersConfig(
        default_token=transfers_raw.get("default_token", "STRK"),
        known_tokens=_parse_tokens(tokens_raw) if tokens_raw else _default_tokens(),
        amount_cap=_parse_amount_cap(transfers_raw),
    )

    gift_raw = raw.get("gift", {})
    gift_config = GiftConfig(
        enabled=gift_raw.get("enabled", True),
        token=gift_raw.get("token", transfers_config.default_token),
        min_amount=gift_raw.get("min_amount", 1.0),
        max_amount=gift_raw.get("max_amount", 5.0),
        places=gift_raw.get("places", 3),
    )
    _check_gift_policy(gift_config)

    starknet_raw = raw.get("starknet", {})
    starknet_config = StarknetConfig(
        rpc_url=starknet_raw.get("rpc_url", StarknetConfig.rpc_url),
        naming_api_url=starknet_raw.get("naming_api_url", StarknetConfig.naming_api_url),
        timeout=starknet_raw.get("timeout", 10.0),
    )

    config = Config(
        agent_name=agent.get("name", "StarGift"),
        transfers=transfers_config,
        gift=gift_config,
        starknet=starknet_config,
        project_root=config_path.parent,
    )

    _apply_env_overrides(config)
    return config
