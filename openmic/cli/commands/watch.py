"""Watch for new calls, emitting each one once."""

import json
import sys
import time
from pathlib import Path
from typing import Optional

import click

from openmic.cli.client import get_client
from openmic.cli.config import get_state_path
from openmic.cli.output import console, format_output, print_error, print_info, print_warning
from openmic.config import Limits
from openmic.exceptions import ConfigurationError, TransportError
from openmic.models import CallStatus
from openmic.polling import CallWatcher, PollConfig, PollStatus
from openmic.state import SQLiteWatermarkStore

EVENT_COLUMNS = ["id", "callStatus", "startedAt", "endedAt", "from", "to", "duration", "botId"]


def watermark_key(config: PollConfig) -> str:
    """One watermark per status/bot combination."""
    return f"{config.status_filter}:{config.bot_id or '*'}"


@click.command()
@click.option("--status", "status_filter", type=click.Choice(CallStatus.values()),
              default=CallStatus.ENDED.value, show_default=True, help="Call status to watch for")
@click.option("--bot-id", help="Only calls handled by this bot")
@click.option("--limit", "-l", type=int, default=Limits.DEFAULT_POLL_LIMIT, show_default=True,
              help="Calls fetched per poll (1-1000)")
@click.option("--interval", "-i", type=float, default=60.0, show_default=True,
              help="Seconds between polls")
@click.option("--state-file", type=click.Path(dir_okay=False, path_type=Path),
              help="SQLite file keeping the watermark (default ~/.openmic/watermarks.db)")
@click.option("--once", is_flag=True, help="Poll a single time and exit")
@click.option("--reset", is_flag=True, help="Forget the stored watermark before polling")
@click.pass_context
def watch(
    ctx: click.Context,
    status_filter: str,
    bot_id: Optional[str],
    limit: int,
    interval: float,
    state_file: Optional[Path],
    once: bool,
    reset: bool,
):
    """Poll for new calls and print each one exactly once.

    \b
    Examples:
      openmic watch --once
      openmic -o json watch --status ended --interval 30
    """
    try:
        config = PollConfig(status_filter=status_filter, limit=limit, bot_id=bot_id)
    except ConfigurationError as e:
        print_error(str(e))
        sys.exit(1)

    client = get_client(ctx)
    store = SQLiteWatermarkStore(state_file or get_state_path(), key=watermark_key(config))
    if reset:
        store.reset()
        print_info("Watermark cleared")

    watcher = CallWatcher(client.request, store, config)
    output = ctx.obj["output"]

    try:
        while True:
            try:
                result = watcher.poll()
            except TransportError as e:
                print_error(f"Failed to fetch calls: {e}")
                if once:
                    sys.exit(1)
            else:
                if result.status == PollStatus.SHAPE_INVALID:
                    print_warning(f"{result.diagnostic['error']}: {result.diagnostic['message']}")
                elif result.status == PollStatus.EMITTED:
                    if output == "json":
                        for event in result.events:
                            console.print_json(json.dumps(event, default=str))
                    else:
                        format_output(result.events, output, columns=EVENT_COLUMNS, title="New Calls")
                elif once:
                    print_info("No new calls")

            if once:
                break
            time.sleep(interval)
    except KeyboardInterrupt:
        print_info("Stopped watching")
    finally:
        client.close()
