"""Call commands."""

import sys
from typing import Optional

import click

from openmic.cli.client import get_client
from openmic.cli.output import format_output, print_error, print_success
from openmic.exceptions import OpenMicError
from openmic.models import CallStatus, CallType

CALL_COLUMNS = ["call_id", "call_status", "from_number", "to_number", "agent_id", "duration_ms"]


@click.group()
def calls():
    """Place calls and browse call records.

    \b
    Examples:
      openmic calls list --status ended
      openmic calls get call_abc123
      openmic calls create --from +14155550100 --to +14155550123
    """
    pass


@calls.command("list")
@click.option("--status", "call_status", type=click.Choice(CallStatus.values()), help="Filter by status")
@click.option("--type", "call_type", type=click.Choice([t.value for t in CallType]), help="Filter by call type")
@click.option("--bot-id", help="Filter by bot")
@click.option("--customer-id", help="Filter by customer ID")
@click.option("--from", "from_number", help="Filter by originating number")
@click.option("--to", "to_number", help="Filter by destination number")
@click.option("--from-date", help="Calls from this date (ISO format)")
@click.option("--to-date", help="Calls up to this date (ISO format)")
@click.option("--limit", "-l", type=int, default=20, help="Maximum results")
@click.pass_context
def list_calls(
    ctx: click.Context,
    call_status: Optional[str],
    call_type: Optional[str],
    bot_id: Optional[str],
    customer_id: Optional[str],
    from_number: Optional[str],
    to_number: Optional[str],
    from_date: Optional[str],
    to_date: Optional[str],
    limit: int,
):
    """List calls."""
    client = get_client(ctx)
    try:
        result = client.calls.list(
            limit=limit,
            customer_id=customer_id,
            from_number=from_number,
            to_number=to_number,
            bot_id=bot_id,
            from_date=from_date,
            to_date=to_date,
            call_status=call_status,
            call_type=call_type,
        )
        format_output(result, ctx.obj["output"], columns=CALL_COLUMNS, title="Calls")
    except OpenMicError as e:
        print_error(f"Failed to list calls: {e}")
        sys.exit(1)


@calls.command("get")
@click.argument("uid")
@click.pass_context
def get_call(ctx: click.Context, uid: str):
    """Get details for a specific call."""
    client = get_client(ctx)
    try:
        format_output(client.calls.get(uid), ctx.obj["output"])
    except OpenMicError as e:
        print_error(f"Failed to get call: {e}")
        sys.exit(1)


@calls.command("create")
@click.option("--from", "-f", "from_number", required=True, help="Number to call from (E.164)")
@click.option("--to", "-t", "to_number", required=True, help="Number to call (E.164)")
@click.option("--agent-id", "-a", "override_agent_id", help="Agent UID overriding the number's agent")
@click.option("--customer-id", help="Customer ID for usage tracking")
@click.option("--variables", "dynamic_variables", help="Dynamic variables as a JSON object")
@click.option("--callback-url", help="Post-call webhook URL")
@click.pass_context
def create_call(
    ctx: click.Context,
    from_number: str,
    to_number: str,
    override_agent_id: Optional[str],
    customer_id: Optional[str],
    dynamic_variables: Optional[str],
    callback_url: Optional[str],
):
    """Place an outbound phone call."""
    client = get_client(ctx)
    try:
        result = client.calls.create_phone_call(
            from_number=from_number,
            to_number=to_number,
            override_agent_id=override_agent_id,
            customer_id=customer_id,
            dynamic_variables=dynamic_variables,
            callback_url=callback_url,
        )
    except OpenMicError as e:
        print_error(f"Failed to create call: {e}")
        sys.exit(1)

    if ctx.obj["output"] == "table":
        print_success(f"Call placed: {result.get('call_id', 'N/A')}")
    else:
        format_output(result, ctx.obj["output"])
