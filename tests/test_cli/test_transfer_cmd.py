"""CLI tests for stargift validate / resolve / wish / tools."""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from click.testing import CliRunner

from cli.main import cli
from core.transfers.errors import ResolutionError, TransferCancelled
from core.transfers.resolver import ResolvedTransfer, TransferIntentResolver

STRK = "0x04718f5a0fc34cc1af16a1cdee98ffb20c31f5cd61d6ab07201858f4287c938d"
ALICE = "0x069a419C6ebab0a6aA74CA8e0bCFD9b3b17c985901Dc00e9BaD25cbD05e75343"


@pytest.fixture
def config_path(tmp_path: Path) -> str:
    # Missing file -> built-in defaults
    return str(tmp_path / "config.yaml")


@pytest.fixture
def manager() -> MagicMock:
    mgr = MagicMock()
    mgr.resolver = TransferIntentResolver(known_tokens={"STRK": STRK})
    mgr.prepare = AsyncMock(
        return_value=ResolvedTransfer(
            recipient_address=ALICE,
            amount_minor_units=2_500_000,
            token_address=STRK,
            decimals=6,
            amount=Decimal("2.5"),
        )
    )
    mgr.prepare_gift = AsyncMock(return_value=mgr.prepare.return_value)
    return mgr


class TestValidate:
    def test_valid(self, config_path: str) -> None:
        result = CliRunner().invoke(
            cli,
            ["validate", "--token", "STRK", "--to", "alice.stark", "--amount", "2.5", "--config", config_path],
        )
        assert result.exit_code == 0, result.output
        assert "Valid." in result.output

    def test_invalid_name(self, config_path: str) -> None:
        result = CliRunner().invoke(
            cli,
            ["validate", "--token", "STRK", "--to", "alice.eth", "--amount", "1", "--config", config_path],
        )
        assert result.exit_code == 1
        assert "Invalid recipient_name" in result.output

    def test_invalid_amount(self, config_path: str) -> None:
        result = CliRunner().invoke(
            cli,
            ["validate", "--token", "STRK", "--to", ALICE, "--amount", "-3", "--config", config_path],
        )
        assert result.exit_code == 1
        assert "Invalid amount" in result.output


class TestResolve:
    def test_prints_resolved_transfer(self, config_path: str, manager: MagicMock) -> None:
        with (
            patch("cli.transfer_cmd.TransferManager", return_value=manager),
            patch("cli.transfer_cmd.setup_logging"),
        ):
            result = CliRunner().invoke(
                cli, ["resolve", "--to", ALICE, "--amount", "2.5", "--config", config_path]
            )

        assert result.exit_code == 0, result.output
        assert "2500000" in result.output
        content = manager.prepare.call_args.args[0]
        assert content == {"token_address": "STRK", "recipient_address": ALICE, "amount": "2.5"}

    def test_name_goes_to_recipient_name(self, config_path: str, manager: MagicMock) -> None:
        with (
            patch("cli.transfer_cmd.TransferManager", return_value=manager),
            patch("cli.transfer_cmd.setup_logging"),
        ):
            CliRunner().invoke(
                cli, ["resolve", "--to", "alice.stark", "--amount", "1", "--config", config_path]
            )

        assert manager.prepare.call_args.args[0]["recipient_name"] == "alice.stark"

    def test_resolution_failure(self, config_path: str, manager: MagicMock) -> None:
        manager.prepare.side_effect = ResolutionError("starknet.id unavailable")
        with (
            patch("cli.transfer_cmd.TransferManager", return_value=manager),
            patch("cli.transfer_cmd.setup_logging"),
        ):
            result = CliRunner().invoke(
                cli, ["resolve", "--to", "alice.stark", "--amount", "1", "--config", config_path]
            )

        assert result.exit_code == 1
        assert "ResolutionError" in result.output

    def test_deadline(self, config_path: str, manager: MagicMock) -> None:
        manager.prepare.side_effect = TransferCancelled("Resolution was cancelled")
        with (
            patch("cli.transfer_cmd.TransferManager", return_value=manager),
            patch("cli.transfer_cmd.setup_logging"),
        ):
            result = CliRunner().invoke(
                cli,
                ["resolve", "--to", "alice.stark", "--amount", "1", "--timeout", "0.5", "--config", config_path],
            )

        assert result.exit_code == 1
        assert "Timed out" in result.output


class TestWish:
    def test_dry_run(self, config_path: str, manager: MagicMock) -> None:
        with (
            patch("cli.transfer_cmd.TransferManager", return_value=manager),
            patch("cli.transfer_cmd.setup_logging"),
        ):
            result = CliRunner().invoke(cli, ["wish", f"Happy New Year {ALICE}", "--config", config_path])

        assert result.exit_code == 0, result.output
        assert "dry run" in result.output
        manager.prepare_gift.assert_awaited_once_with(f"Happy New Year {ALICE}")


class TestTools:
    def test_lists_transfer_tools(self, config_path: str) -> None:
        result = CliRunner().invoke(cli, ["tools", "--config", config_path])
        assert result.exit_code == 0, result.output
        for name in ("transfer_validate", "transfer_resolve", "new_year_gift"):
            assert name in result.output

    def test_json_schemas(self, config_path: str) -> None:
        result = CliRunner().invoke(cli, ["tools", "--json", "--config", config_path])
        assert result.exit_code == 0, result.output
        assert '"new_year_gift"' in result.output
