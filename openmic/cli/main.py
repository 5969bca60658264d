"""OpenMic CLI - Main entry point."""

import sys
from typing import Optional

import click
from rich.console import Console

from openmic import __version__
from openmic.cli.client import get_client
from openmic.cli.commands import bots, calls, numbers, watch
from openmic.cli.config import Config, delete_config, load_config, save_config
from openmic.cli.output import format_output
from openmic.client import OpenMic
from openmic.config import API_KEY_ENV, BASE_URL_ENV, DEFAULT_CONFIG
from openmic.exceptions import OpenMicError

console = Console()


@click.group()
@click.version_option(version=__version__, prog_name="openmic")
@click.option("--api-key", envvar=API_KEY_ENV, help="API key for authentication")
@click.option("--base-url", envvar=BASE_URL_ENV, help="API base URL")
@click.option("--output", "-o", type=click.Choice(["table", "json", "yaml"]),
              help="Output format")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, api_key: Optional[str], base_url: Optional[str], output: Optional[str], debug: bool):
    """OpenMic CLI - Manage voice agents, calls and phone numbers.

    \b
    Examples:
      openmic bots list
      openmic calls create --from +14155550100 --to +14155550123
      openmic watch --status ended
    """
    ctx.ensure_object(dict)

    # Flags and env vars win over the config file
    config = load_config()
    ctx.obj["api_key"] = api_key or config.api_key
    ctx.obj["base_url"] = base_url or config.base_url
    ctx.obj["output"] = output or config.default_output
    ctx.obj["debug"] = debug
    ctx.obj["config"] = config


@cli.command("login")
@click.option("--api-key", "-k", required=True, prompt=True, hide_input=True,
              help="Your OpenMic API key")
@click.option("--base-url", "-u", default=DEFAULT_CONFIG.base_url, help="API base URL")
def login(api_key: str, base_url: str):
    """Verify an API key and store it.

    The key is saved in ~/.openmic/config.json, readable only by you.
    """
    try:
        with OpenMic(api_key=api_key, base_url=base_url) as client:
            account = client.whoami()
    except OpenMicError as e:
        console.print(f"[red]✗[/red] Login failed: {e}")
        sys.exit(1)

    path = save_config(Config(api_key=api_key, base_url=base_url))
    console.print(f"[green]✓[/green] Logged in as [bold]{account.get('email') or account.get('name') or 'Unknown'}[/bold]")
    console.print(f"  Config saved to: {path}")


@cli.command("logout")
def logout():
    """Log out and remove stored credentials."""
    if delete_config():
        console.print("[green]✓[/green] Logged out successfully")
    else:
        console.print("Not logged in")


@cli.command("whoami")
@click.pass_context
def whoami(ctx: click.Context):
    """Show the account behind the API key."""
    client = get_client(ctx)
    try:
        account = client.whoami()
    except OpenMicError as e:
        console.print(f"[red]✗[/red] Error: {e}")
        sys.exit(1)

    format_output(account, ctx.obj["output"], title="Current Account")


# Register command groups
cli.add_command(bots)
cli.add_command(calls)
cli.add_command(numbers)
cli.add_command(watch)


def main():
    """Main entry point for the CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
