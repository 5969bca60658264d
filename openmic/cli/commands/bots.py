"""Bot commands."""

import sys
from typing import Optional

import click

from openmic.cli.client import get_client
from openmic.cli.output import format_output, print_error
from openmic.exceptions import OpenMicError


@click.group()
def bots():
    """Look up voice agents.

    \b
    Examples:
      openmic bots list --name Sales
      openmic bots get bot_abc123
    """
    pass


@bots.command("list")
@click.option("--name", help="Filter bots by name")
@click.option("--created-after", help="Only bots created after this date (ISO format)")
@click.option("--created-before", help="Only bots created before this date (ISO format)")
@click.option("--limit", "-l", type=int, default=20, help="Maximum results")
@click.pass_context
def list_bots(
    ctx: click.Context,
    name: Optional[str],
    created_after: Optional[str],
    created_before: Optional[str],
    limit: int,
):
    """List bots."""
    client = get_client(ctx)
    try:
        result = client.bots.list(
            limit=limit,
            name=name,
            created_after=created_after,
            created_before=created_before,
        )
        format_output(result, ctx.obj["output"], columns=["uid", "name", "created_at"], title="Bots")
    except OpenMicError as e:
        print_error(f"Failed to list bots: {e}")
        sys.exit(1)


@bots.command("get")
@click.argument("uid")
@click.pass_context
def get_bot(ctx: click.Context, uid: str):
    """Show a bot."""
    client = get_client(ctx)
    try:
        format_output(client.bots.get(uid), ctx.obj["output"])
    except OpenMicError as e:
        print_error(f"Failed to get bot: {e}")
        sys.exit(1)
