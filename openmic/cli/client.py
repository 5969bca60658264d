"""Client construction for CLI commands."""

import sys

import click

from openmic.client import OpenMic
from openmic.cli.output import print_error


def get_client(ctx: click.Context) -> OpenMic:
    """Build an OpenMic client from the global options, or exit if not logged in."""
    api_key = ctx.obj.get("api_key")
    if not api_key:
        print_error("Not logged in. Run 'openmic login' first.")
        sys.exit(1)
    return OpenMic(api_key=api_key, base_url=ctx.obj.get("base_url"), debug=ctx.obj.get("debug", False))
