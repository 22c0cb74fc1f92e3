"""In-memory registry of monitored endpoints."""

import dataclasses
from collections.abc import Iterable
from types import MappingProxyType

from .models import EndpointRecord, EndpointStatus, Snapshot


class Registry:
    """Fixed set of endpoints with their status and active flag.

    Membership is set once at construction and never changes. Records are
    immutable; mutations replace the stored record so snapshots handed out
    earlier are unaffected.
    """

    def __init__(self, urls: Iterable[str]) -> None:
        self._records: dict[str, EndpointRecord] = {}
        for url in urls:
            self._records.setdefault(url, EndpointRecord(url=url))

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, url: object) -> bool:
        return url in self._records

    @property
    def urls(self) -> tuple[str, ...]:
        """Registered URLs in registry order."""
        return tuple(self._records)

    def get(self, url: str) -> EndpointRecord | None:
        return self._records.get(url)

    def set_status(self, url: str, status: EndpointStatus) -> None:
        """Overwrite the status of an endpoint. Unknown URLs are ignored."""
        record = self._records.get(url)
        if record is None:
            return
        self._records[url] = dataclasses.replace(record, status=status)

    def toggle_active(self, url: str) -> bool | None:
        """Flip the active flag of an endpoint.

        Returns:
            The new active value, or None if the URL is not registered.
        """
        record = self._records.get(url)
        if record is None:
            return None
        self._records[url] = dataclasses.replace(record, active=not record.active)
        return not record.active

    def snapshot(self) -> Snapshot:
        """Return a read-only copy of the full registry."""
        return MappingProxyType(dict(self._records))
