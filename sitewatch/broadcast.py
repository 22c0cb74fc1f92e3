"""Snapshot delivery to connected dashboard clients."""

import logging

import socketio

from .models import Snapshot, snapshot_to_dict

logger = logging.getLogger(__name__)

STATUS_UPDATE_EVENT = "statusUpdate"


class Broadcaster:
    """Publish-subscribe channel for registry snapshots.

    Subscribers are Socket.IO session ids. Delivery is fire-and-forget: a
    failure to reach one subscriber is logged and the rest still receive
    the snapshot. Ordering per subscriber follows the underlying connection.
    """

    def __init__(self, sio: socketio.AsyncServer) -> None:
        self._sio = sio
        self._subscribers: set[str] = set()

    def __len__(self) -> int:
        return len(self._subscribers)

    @property
    def subscribers(self) -> frozenset[str]:
        """Copy of the current subscriber ids."""
        return frozenset(self._subscribers)

    def add(self, sid: str) -> None:
        self._subscribers.add(sid)

    def discard(self, sid: str) -> None:
        self._subscribers.discard(sid)

    async def send_to(self, sid: str, snapshot: Snapshot) -> None:
        """Deliver a snapshot to a single subscriber."""
        await self._emit(sid, snapshot_to_dict(snapshot))

    async def broadcast_all(self, snapshot: Snapshot) -> None:
        """Deliver a snapshot to every current subscriber."""
        payload = snapshot_to_dict(snapshot)
        # Subscribers may connect or leave while emits are awaited
        recipients = self.subscribers
        for sid in recipients:
            await self._emit(sid, payload)
        logger.debug("Broadcast snapshot of %d URLs to %d clients", len(payload), len(recipients))

    async def _emit(self, sid: str, payload: dict) -> None:
        try:
            await self._sio.emit(STATUS_UPDATE_EVENT, payload, to=sid)
        except Exception as e:
            logger.warning("Failed to deliver status update to %s: %s", sid, e)
