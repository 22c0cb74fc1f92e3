"""Client commands that mutate the registry."""

import logging

from .broadcast import Broadcaster
from .registry import Registry

logger = logging.getLogger(__name__)

TOGGLE_SITE_EVENT = "toggleSite"


class CommandHandler:
    """Applies pause/resume commands sent by dashboard clients."""

    def __init__(self, registry: Registry, broadcaster: Broadcaster) -> None:
        self._registry = registry
        self._broadcaster = broadcaster

    async def toggle_site(self, url: object) -> bool:
        """Flip the active flag of a registered URL and broadcast the result.

        Unknown URLs and non-string payloads are ignored without notifying
        the sender.

        Returns:
            True if a registered URL was toggled, False otherwise.
        """
        if not isinstance(url, str):
            logger.debug("Ignoring toggle with non-string payload: %r", url)
            return False

        active = self._registry.toggle_active(url)
        if active is None:
            logger.debug("Ignoring toggle for unregistered URL %s", url)
            return False

        logger.info("%s monitoring %s", url, "resumed" if active else "paused")
        await self._broadcaster.broadcast_all(self._registry.snapshot())
        return True
