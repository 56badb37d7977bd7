"""Shared test fixtures for StarGift tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from core.config import Config, GiftConfig, StarknetConfig, TransfersConfig

STRK = "0x04718f5a0fc34cc1af16a1cdee98ffb20c31f5cd61d6ab07201858f4287c938d"
ALICE = "0x069a419C6ebab0a6aA74CA8e0bCFD9b3b17c985901Dc00e9BaD25cbD05e75343"


@pytest.fixture
def test_config(tmp_path: Path) -> Config:
    """Minimal config for testing — no real endpoints."""
    return Config(
        agent_name="TestAgent",
        transfers=TransfersConfig(default_token="STRK"),
        gift=GiftConfig(token="STRK", min_amount=1.0, max_amount=5.0, places=3),
        starknet=StarknetConfig(
            rpc_url="http://127.0.0.1:1/rpc",
            naming_api_url="http://127.0.0.1:1",
            timeout=1.0,
        ),
        project_root=tmp_path,
    )


@pytest.fixture
def valid_content() -> dict:
    return {"token_address": STRK, "recipient_address": ALICE, "amount": "2.5"}
