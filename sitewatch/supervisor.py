"""Top-level owner of the monitoring state and its background work."""

import logging

import httpx
import socketio

from .broadcast import Broadcaster
from .commands import CommandHandler
from .config import Config
from .monitor import Monitor
from .registry import Registry

logger = logging.getLogger(__name__)


class Supervisor:
    """Owns the registry and wires the prober, broadcaster and commands to it.

    One instance exists per process. It is created at startup, handed to
    the server for its realtime event handlers, and stopped on shutdown.
    """

    def __init__(
        self,
        config: Config,
        sio: socketio.AsyncServer,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.config = config
        self.registry = Registry(config.urls)
        self.broadcaster = Broadcaster(sio)
        self.commands = CommandHandler(self.registry, self.broadcaster)
        self.monitor = Monitor(
            self.registry,
            interval=config.monitor.interval,
            on_sweep=self.broadcaster.broadcast_all,
            client=client,
        )

    async def start(self) -> None:
        await self.monitor.start()

    async def stop(self) -> None:
        await self.monitor.stop()

    async def on_connect(self, sid: str) -> None:
        """Register a new subscriber and bring it up to date."""
        self.broadcaster.add(sid)
        logger.info("Client connected: %s (%d connected)", sid, len(self.broadcaster))
        await self.broadcaster.send_to(sid, self.registry.snapshot())

    async def on_disconnect(self, sid: str) -> None:
        self.broadcaster.discard(sid)
        logger.info("Client disconnected: %s (%d connected)", sid, len(self.broadcaster))

    async def on_toggle(self, sid: str, url: object) -> None:
        logger.debug("Toggle request from %s: %r", sid, url)
        await self.commands.toggle_site(url)
