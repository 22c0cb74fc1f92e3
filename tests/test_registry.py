"""Tests for the registry module."""

import pytest

from sitewatch.models import EndpointRecord, EndpointStatus
from sitewatch.registry import Registry

URL_A = "https://atlas.example.com/"
URL_B = "https://hermes.example.com/"
URL_C = "https://iris.example.com/"


@pytest.fixture
def registry() -> Registry:
    """Create a registry with three endpoints."""
    return Registry([URL_A, URL_B, URL_C])


class TestRegistryInit:
    """Tests for registry construction."""

    def test_all_endpoints_start_unknown_and_active(self, registry: Registry) -> None:
        """Every endpoint starts active with unknown status."""
        for url in registry.urls:
            assert registry.get(url) == EndpointRecord(url=url, status=EndpointStatus.UNKNOWN, active=True)

    def test_preserves_insertion_order(self) -> None:
        """Iteration order follows the order URLs were given."""
        registry = Registry([URL_C, URL_A, URL_B])
        assert registry.urls == (URL_C, URL_A, URL_B)
        assert list(registry.snapshot()) == [URL_C, URL_A, URL_B]

    def test_len_and_contains(self, registry: Registry) -> None:
        """len() and `in` reflect membership."""
        assert len(registry) == 3
        assert URL_A in registry
        assert "https://not-registered.example/" not in registry


class TestGet:
    """Tests for Registry.get."""

    def test_returns_none_for_unknown_url(self, registry: Registry) -> None:
        """Absent URL yields None."""
        assert registry.get("https://not-registered.example/") is None


class TestSetStatus:
    """Tests for Registry.set_status."""

    def test_overwrites_status(self, registry: Registry) -> None:
        """Status is replaced, not accumulated."""
        registry.set_status(URL_A, EndpointStatus.ONLINE)
        registry.set_status(URL_A, EndpointStatus.OFFLINE)
        assert registry.get(URL_A).status is EndpointStatus.OFFLINE

    def test_does_not_touch_active_flag(self, registry: Registry) -> None:
        """Setting status leaves the active flag alone."""
        registry.toggle_active(URL_A)
        registry.set_status(URL_A, EndpointStatus.ONLINE)
        assert registry.get(URL_A).active is False

    def test_unknown_url_is_ignored(self, registry: Registry) -> None:
        """Unknown URLs are never inserted."""
        registry.set_status("https://not-registered.example/", EndpointStatus.ONLINE)
        assert len(registry) == 3
        assert "https://not-registered.example/" not in registry


class TestToggleActive:
    """Tests for Registry.toggle_active."""

    def test_returns_new_value(self, registry: Registry) -> None:
        """Toggle returns the flag's new value."""
        assert registry.toggle_active(URL_B) is False
        assert registry.get(URL_B).active is False

    def test_two_toggles_restore_original_value(self, registry: Registry) -> None:
        """Toggling twice is a round trip."""
        registry.toggle_active(URL_B)
        assert registry.toggle_active(URL_B) is True
        assert registry.get(URL_B).active is True

    def test_keeps_status(self, registry: Registry) -> None:
        """Pausing freezes the last status."""
        registry.set_status(URL_A, EndpointStatus.ONLINE)
        registry.toggle_active(URL_A)
        assert registry.get(URL_A).status is EndpointStatus.ONLINE

    def test_unknown_url_returns_none(self, registry: Registry) -> None:
        """Unknown URLs are a no-op."""
        before = dict(registry.snapshot())
        assert registry.toggle_active("https://not-registered.example/") is None
        assert dict(registry.snapshot()) == before


class TestSnapshot:
    """Tests for Registry.snapshot."""

    def test_snapshot_is_read_only(self, registry: Registry) -> None:
        """Snapshots cannot be mutated."""
        snapshot = registry.snapshot()
        with pytest.raises(TypeError):
            snapshot[URL_A] = EndpointRecord(url=URL_A)  # type: ignore[index]

    def test_snapshot_is_not_affected_by_later_changes(self, registry: Registry) -> None:
        """A snapshot is a point-in-time copy."""
        snapshot = registry.snapshot()
        registry.set_status(URL_A, EndpointStatus.ONLINE)
        registry.toggle_active(URL_A)

        assert snapshot[URL_A].status is EndpointStatus.UNKNOWN
        assert snapshot[URL_A].active is True
        assert registry.get(URL_A).status is EndpointStatus.ONLINE
