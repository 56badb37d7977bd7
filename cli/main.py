"""CLI entry point for StarGift.

Registered as `stargift` console script in pyproject.toml.
"""

from __future__ import annotations

import click

from cli.transfer_cmd import resolve_cmd, tools_cmd, validate_cmd, wish_cmd


@click.group()
@click.version_option(version="0.1.0", prog_name="StarGift")
def cli() -> None:
    """StarGift — New Year token gifts on Starknet."""


cli.add_command(validate_cmd, "validate")
cli.add_command(resolve_cmd, "resolve")
cli.add_command(wish_cmd, "wish")
cli.add_command(tools_cmd, "tools")


if __name__ == "__main__":
    cli()
