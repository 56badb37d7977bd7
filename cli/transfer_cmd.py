"""stargift validate / resolve / wish / tools — inspect transfers from the terminal.

Commands:
    validate — Check a transfer request, no network access
    resolve  — Look up recipient and decimals, print the transfer call
    wish     — Dry-run the New Year gift for a greeting message
    tools    — List the agent tools and their schemas

Nothing here signs or submits a transaction.
"""

from __future__ import annotations

import asyncio
import json
from typing import Any

import click
from rich.console import Console
from rich.table import Table

from core.config import load_config
from core.log_setup import setup_logging
from core.registry import ToolRegistry
from core.transfers.addresses import is_hex_address
from core.transfers.errors import TransferCancelled, TransferError, ValidationError
from core.transfers.manager import TransferManager
from core.transfers.resolver import ResolvedTransfer

console = Console()

_config_option = click.option(
    "--config",
    "config_path",
    type=click.Path(),
    default=None,
    help="Path to config.yaml",
)
_debug_option = click.option("--debug", is_flag=True, default=False, help="Enable debug logging")


def _content(token: str, to: str, amount: str) -> dict[str, Any]:
    key = "recipient_address" if is_hex_address(to) else "recipient_name"
    return {"token_address": token, key: to, "amount": amount}


def _print_resolved(resolved: ResolvedTransfer, title: str) -> None:
    table = Table(title=title, show_header=False)
    table.add_column("Field", style="bold")
    table.add_column("Value")
    table.add_row("Token", resolved.token_address)
    table.add_row("Recipient", resolved.recipient_address)
    if resolved.recipient_name:
        table.add_row("Name", resolved.recipient_name)
    table.add_row("Amount", str(resolved.amount))
    table.add_row("Decimals", str(resolved.decimals))
    table.add_row("Minor units", str(resolved.amount_minor_units))
    call = resolved.to_call()
    table.add_row("Call", f"{call['entrypoint']}({', '.join(call['calldata'])})")
    console.print(table)


async def _run_with_deadline(coro: Any, timeout: float | None) -> Any:
    if timeout is None:
        return await coro
    return await asyncio.wait_for(coro, timeout)


@click.command()
@click.option("--token", required=True, help="Token address or known symbol (e.g. STRK)")
@click.option("--to", "to", required=True, help="Recipient address or .stark name")
@click.option("--amount", required=True, help="Amount in display units, e.g. 2.5")
@_config_option
def validate_cmd(token: str, to: str, amount: str, config_path: str | None) -> None:
    """Check a transfer request without any network access."""
    cfg = load_config(config_path)
    manager = TransferManager(cfg)
    try:
        intent = manager.resolver.build_intent(_content(token, to, amount))
    except ValidationError as e:
        console.print(f"[red]Invalid {e.field}:[/red] {e.message}")
        raise SystemExit(1) from None

    console.print(
        f"[green]Valid.[/green] {intent.amount} of {intent.token_address} to {intent.recipient}"
    )


@click.command()
@click.option("--token", default=None, help="Token address or known symbol (default from config)")
@click.option("--to", "to", required=True, help="Recipient address or .stark name")
@click.option("--amount", required=True, help="Amount in display units, e.g. 2.5")
@click.option("--timeout", type=float, default=None, help="Give up after this many seconds")
@_config_option
@_debug_option
def resolve_cmd(
    token: str | None,
    to: str,
    amount: str,
    timeout: float | None,
    config_path: str | None,
    debug: bool,
) -> None:
    """Resolve a transfer and print the ERC-20 call. Sends nothing."""
    setup_logging(debug=debug)
    cfg = load_config(config_path)
    manager = TransferManager(cfg)
    content = _content(token or cfg.transfers.default_token, to, amount)

    try:
        resolved = asyncio.run(_run_with_deadline(manager.prepare(content), timeout))
    except (TransferCancelled, TimeoutError):
        console.print(f"[red]Timed out after {timeout}s.[/red]")
        raise SystemExit(1) from None
    except TransferError as e:
        console.print(f"[red]{type(e).__name__}:[/red] {e}")
        raise SystemExit(1) from None

    _print_resolved(resolved, "Resolved transfer")


@click.command()
@click.argument("message")
@click.option("--timeout", type=float, default=None, help="Give up after this many seconds")
@_config_option
@_debug_option
def wish_cmd(message: str, timeout: float | None, config_path: str | None, debug: bool) -> None:
    """Dry-run the New Year gift for MESSAGE."""
    setup_logging(debug=debug)
    cfg = load_config(config_path)
    manager = TransferManager(cfg)

    try:
        resolved = asyncio.run(_run_with_deadline(manager.prepare_gift(message), timeout))
    except (TransferCancelled, TimeoutError):
        console.print(f"[red]Timed out after {timeout}s.[/red]")
        raise SystemExit(1) from None
    except TransferError as e:
        console.print(f"[red]{type(e).__name__}:[/red] {e}")
        raise SystemExit(1) from None

    _print_resolved(resolved, "New Year gift (dry run)")


@click.command()
@click.option("--json", "as_json", is_flag=True, default=False, help="Print LLM tool schemas")
@_config_option
def tools_cmd(as_json: bool, config_path: str | None) -> None:
    """List the agent tools backed by the transfer system."""
    cfg = load_config(config_path)
    registry = ToolRegistry()
    registry.load_transfer_tools(TransferManager(cfg))

    if as_json:
        console.print_json(json.dumps(registry.list_tools()))
        return

    table = Table(title="Transfer tools")
    table.add_column("Name", style="bold", no_wrap=True)
    table.add_column("Permission", no_wrap=True)
    table.add_column("Description")
    for summary in registry.list_tool_summaries():
        table.add_row(summary["name"], summary["permission"], summary["description"])
    console.print(table)
