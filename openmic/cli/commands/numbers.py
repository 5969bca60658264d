"""Phone number management commands."""

import sys
from typing import Optional

import click

from openmic.cli.client import get_client
from openmic.cli.output import confirm, format_output, print_error, print_success
from openmic.exceptions import OpenMicError

NUMBER_COLUMNS = ["phone_number", "nickname", "area_code", "inbound_agent_id", "outbound_agent_id"]


@click.group()
def numbers():
    """Manage phone numbers.

    \b
    Examples:
      openmic numbers list
      openmic numbers create --area-code 415 --nickname Support
      openmic numbers update +14155551234 --inbound-agent-id bot_123
    """
    pass


@numbers.command("list")
@click.option("--area-code", type=int, help="Filter by area code")
@click.option("--inbound-agent-id", help="Filter by inbound agent")
@click.option("--outbound-agent-id", help="Filter by outbound agent")
@click.option("--limit", "-l", type=int, default=50, help="Maximum results")
@click.option("--all", "return_all", is_flag=True, help="Return every number")
@click.pass_context
def list_numbers(
    ctx: click.Context,
    area_code: Optional[int],
    inbound_agent_id: Optional[str],
    outbound_agent_id: Optional[str],
    limit: int,
    return_all: bool,
):
    """List your phone numbers."""
    client = get_client(ctx)
    try:
        result = client.phone_numbers.list(
            return_all=return_all,
            limit=limit,
            area_code=area_code,
            inbound_agent_id=inbound_agent_id,
            outbound_agent_id=outbound_agent_id,
        )
        format_output(result, ctx.obj["output"], columns=NUMBER_COLUMNS, title="Phone Numbers")
    except OpenMicError as e:
        print_error(f"Failed to list phone numbers: {e}")
        sys.exit(1)


@numbers.command("get")
@click.argument("phone_number")
@click.pass_context
def get_number(ctx: click.Context, phone_number: str):
    """Get details for a specific phone number."""
    client = get_client(ctx)
    try:
        format_output(client.phone_numbers.get(phone_number), ctx.obj["output"])
    except OpenMicError as e:
        print_error(f"Failed to get phone number: {e}")
        sys.exit(1)


@numbers.command("create")
@click.option("--area-code", required=True, type=int, help="Area code of the number (3 digits)")
@click.option("--inbound-agent-id", help="Agent to handle inbound calls")
@click.option("--outbound-agent-id", help="Agent to handle outbound calls")
@click.option("--nickname", help="Nickname for the number")
@click.pass_context
def create_number(
    ctx: click.Context,
    area_code: int,
    inbound_agent_id: Optional[str],
    outbound_agent_id: Optional[str],
    nickname: Optional[str],
):
    """Obtain a new phone number."""
    client = get_client(ctx)
    try:
        result = client.phone_numbers.create(
            area_code=area_code,
            inbound_agent_id=inbound_agent_id,
            outbound_agent_id=outbound_agent_id,
            nickname=nickname,
        )
    except OpenMicError as e:
        print_error(f"Failed to create phone number: {e}")
        sys.exit(1)

    if ctx.obj["output"] == "table":
        print_success(f"Phone number created: {result.get('phone_number', 'N/A')}")
    else:
        format_output(result, ctx.obj["output"])


@numbers.command("update")
@click.argument("phone_number")
@click.option("--inbound-agent-id", help="New agent for inbound calls")
@click.option("--outbound-agent-id", help="New agent for outbound calls")
@click.option("--nickname", help="New nickname")
@click.pass_context
def update_number(
    ctx: click.Context,
    phone_number: str,
    inbound_agent_id: Optional[str],
    outbound_agent_id: Optional[str],
    nickname: Optional[str],
):
    """Change a number's agents or nickname."""
    client = get_client(ctx)
    try:
        result = client.phone_numbers.update(
            phone_number,
            inbound_agent_id=inbound_agent_id,
            outbound_agent_id=outbound_agent_id,
            nickname=nickname,
        )
        format_output(result, ctx.obj["output"])
    except OpenMicError as e:
        print_error(f"Failed to update phone number: {e}")
        sys.exit(1)


@numbers.command("delete")
@click.argument("phone_number")
@click.option("--force", "-f", is_flag=True, help="Skip confirmation")
@click.pass_context
def delete_number(ctx: click.Context, phone_number: str, force: bool):
    """Release a phone number."""
    client = get_client(ctx)
    if not force and not confirm(f"Release phone number {phone_number}? This cannot be undone."):
        print_error("Cancelled")
        return

    try:
        client.phone_numbers.delete(phone_number)
        print_success(f"Phone number {phone_number} released")
    except OpenMicError as e:
        print_error(f"Failed to release phone number: {e}")
        sys.exit(1)
