"""CLI command modules."""

from openmic.cli.commands.bots import bots
from openmic.cli.commands.calls import calls
from openmic.cli.commands.numbers import numbers
from openmic.cli.commands.watch import watch

__all__ = [
    "bots",
    "calls",
    "numbers",
    "watch",
]
