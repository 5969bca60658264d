"""
OpenMic Python SDK - Bots Resource

This module provides methods for looking up voice agents ("bots").
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from openmic.config import Endpoints, Limits
from openmic.models import Bot, OptionItem
from openmic.resources.base import BaseResource
from openmic.utils import drop_empty


class BotsResource(BaseResource):
    """
    Resource for voice agents.

    Example:
        >>> client = OpenMic(api_key="...")
        >>> bot = client.bots.get("bot_abc123")
        >>> page = client.bots.list(name="Sales")
    """

    def get(self, uid: str) -> Dict[str, Any]:
        """
        Get a bot by its UID.

        Raises:
            NotFoundError: If the bot doesn't exist
        """
        path = Endpoints.BOT.format(uid=uid)
        return self._get(path)

    def list(
        self,
        limit: Optional[int] = Limits.DEFAULT_LIST_LIMIT,
        name: Optional[str] = None,
        created_after: Optional[str] = None,
        created_before: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        List bots.

        Args:
            limit: Max number of results to return
            name: Filter bots by name
            created_after: Only bots created after this date (ISO format)
            created_before: Only bots created before this date (ISO format)

        Returns:
            The raw listing, bots under the ``bots`` key
        """
        params = drop_empty({
            "limit": limit or None,
            "name": name,
            "created_after": created_after,
            "created_before": created_before,
        })
        return self._get(Endpoints.BOTS, params=params)

    def options(self) -> List[OptionItem]:
        """Dropdown entries for picking a bot, one per bot on the first page."""
        response = self._get(Endpoints.BOTS, params={"limit": Limits.OPTIONS_LIMIT})
        bots = response.get("bots") if isinstance(response, dict) else None
        if not isinstance(bots, list):
            return []
        return [Bot.from_dict(bot).to_option() for bot in bots if isinstance(bot, dict)]
