"""OpenMic CLI - manage bots, calls and phone numbers from the terminal."""

from openmic import __version__

__all__ = ["__version__"]
