"""Data models for endpoint state and probe results."""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any


class EndpointStatus(str, Enum):
    """Last observed availability of an endpoint."""

    UNKNOWN = "unknown"
    ONLINE = "online"
    OFFLINE = "offline"


@dataclass(frozen=True)
class EndpointRecord:
    """State of a single monitored endpoint.

    Attributes:
        url: Endpoint URL, unique within the registry.
        status: Last observed status, ``unknown`` until the first probe.
        active: Whether the endpoint is probed. Paused endpoints keep their
            last status.
    """

    url: str
    status: EndpointStatus = EndpointStatus.UNKNOWN
    active: bool = True

    def to_dict(self) -> dict[str, Any]:
        """Return the wire form sent to subscribers."""
        return {"status": self.status.value, "active": self.active}


# Read-only view of the registry at a point in time
Snapshot = Mapping[str, EndpointRecord]


def snapshot_to_dict(snapshot: Snapshot) -> dict[str, dict[str, Any]]:
    """Convert a snapshot to a JSON-serializable mapping in registry order."""
    return {url: record.to_dict() for url, record in snapshot.items()}


@dataclass(frozen=True)
class ProbeResult:
    """Result of a single liveness check.

    Attributes:
        url: URL that was probed.
        status_code: HTTP status code, or None if the request failed.
        is_up: Whether the response status indicates success.
        response_time_ms: Time taken by the request in milliseconds.
        error_message: Error description if the probe failed, None otherwise.
        checked_at: Timestamp when the probe was performed.
    """

    url: str
    status_code: int | None
    is_up: bool
    response_time_ms: int
    error_message: str | None
    checked_at: datetime

    @property
    def status(self) -> EndpointStatus:
        return EndpointStatus.ONLINE if self.is_up else EndpointStatus.OFFLINE
