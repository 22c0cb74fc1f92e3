"""Endpoint sweep loop with asynchronous liveness probes."""

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from datetime import UTC, datetime

import httpx

from .models import EndpointStatus, ProbeResult, Snapshot
from .registry import Registry

logger = logging.getLogger(__name__)

SweepCallback = Callable[[Snapshot], Awaitable[None]]


def _is_success_status(status_code: int) -> bool:
    """Check if a status code indicates success (2xx and 3xx)."""
    return 200 <= status_code < 400


def _describe_error(error: Exception) -> str:
    # httpx timeouts often carry an empty message
    return str(error) or type(error).__name__


async def probe_url(client: httpx.AsyncClient, url: str) -> ProbeResult:
    """Perform a single GET liveness check on a URL.

    The response body is never read. Any failure is reported as a result
    with ``is_up`` False rather than raised, so one bad endpoint cannot
    interrupt a sweep.

    Args:
        client: HTTP client used for the request.
        url: URL to probe.

    Returns:
        ProbeResult with status code, timing and any error details.
    """
    start = time.monotonic()
    checked_at = datetime.now(UTC)

    try:
        async with client.stream("GET", url) as response:
            elapsed_ms = int((time.monotonic() - start) * 1000)
            is_up = _is_success_status(response.status_code)
            return ProbeResult(
                url=url,
                status_code=response.status_code,
                is_up=is_up,
                response_time_ms=elapsed_ms,
                error_message=None if is_up else f"HTTP {response.status_code}: {response.reason_phrase}",
                checked_at=checked_at,
            )

    except httpx.HTTPError as e:
        elapsed_ms = int((time.monotonic() - start) * 1000)
        message = _describe_error(e)
        logger.warning("Probe failed for %s: %s", url, message)
        return ProbeResult(
            url=url,
            status_code=None,
            is_up=False,
            response_time_ms=elapsed_ms,
            error_message=message,
            checked_at=checked_at,
        )

    except Exception as e:
        elapsed_ms = int((time.monotonic() - start) * 1000)
        message = f"Unexpected error: {_describe_error(e)}"
        logger.warning("Probe failed for %s: %s", url, message)
        return ProbeResult(
            url=url,
            status_code=None,
            is_up=False,
            response_time_ms=elapsed_ms,
            error_message=message,
            checked_at=checked_at,
        )


class Monitor:
    """Asyncio monitor that sweeps every active endpoint at a fixed interval.

    A sweep probes active endpoints one at a time in registry order, writes
    each status back to the registry and then publishes a single snapshot
    through ``on_sweep``. The first sweep runs as soon as the monitor
    starts. Ticks fire at a fixed rate and are never skipped, so a sweep
    slower than the interval overlaps the next one.

    Example:
        monitor = Monitor(registry, interval=10, on_sweep=broadcaster.broadcast_all)
        await monitor.start()
        # ... later ...
        await monitor.stop()
    """

    def __init__(
        self,
        registry: Registry,
        interval: float,
        on_sweep: SweepCallback | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the monitor.

        Args:
            registry: Registry of endpoints to probe.
            interval: Seconds between sweep starts.
            on_sweep: Optional coroutine invoked with a snapshot after each sweep.
            client: HTTP client to use. When omitted the monitor creates one
                and closes it on stop().
        """
        self._registry = registry
        self._interval = interval
        self._on_sweep = on_sweep
        self._client = client
        self._owns_client = client is None
        self._timer: asyncio.Task | None = None
        self._sweeps: set[asyncio.Task] = set()
        self._sweep_count = 0

    @property
    def sweep_count(self) -> int:
        """Number of sweeps completed since the monitor was created."""
        return self._sweep_count

    def is_running(self) -> bool:
        """Check if the sweep timer is currently running."""
        return self._timer is not None and not self._timer.done()

    async def start(self) -> None:
        """Run the first sweep immediately and schedule the following ones."""
        if self.is_running():
            logger.warning("Monitor already running")
            return

        self._timer = asyncio.create_task(self._run_loop(), name="monitor-loop")
        logger.info(
            "Monitor started with %d URLs at %ss interval",
            len(self._registry),
            self._interval,
        )

    async def stop(self) -> None:
        """Cancel the sweep timer and any sweep still in flight."""
        timer = self._timer
        pending = list(self._sweeps)
        if timer is not None:
            logger.info("Stopping monitor...")
            pending.append(timer)

        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
        self._timer = None

        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

        if timer is not None:
            logger.info("Monitor stopped")

    async def sweep(self) -> list[ProbeResult]:
        """Probe every active endpoint once and publish one snapshot.

        Returns:
            Results for the endpoints whose status was updated.
        """
        client = self._get_client()
        results: list[ProbeResult] = []
        paused = 0

        for url in self._registry.urls:
            record = self._registry.get(url)
            if record is None or not record.active:
                paused += 1
                continue

            result = await probe_url(client, url)

            # Paused while the request was in flight: status stays frozen
            record = self._registry.get(url)
            if record is None or not record.active:
                logger.debug("%s was paused during its probe, keeping last status", url)
                paused += 1
                continue

            self._registry.set_status(url, result.status)
            results.append(result)
            logger.debug(
                "%s: %s (%s, %dms)",
                url,
                result.status.value.upper(),
                result.status_code if result.status_code is not None else result.error_message,
                result.response_time_ms,
            )

        self._sweep_count += 1
        online = sum(1 for r in results if r.status is EndpointStatus.ONLINE)
        logger.info(
            "Sweep #%d complete: %d online, %d offline, %d paused",
            self.sweep_count,
            online,
            len(results) - online,
            paused,
        )

        await self._publish()
        return results

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(follow_redirects=True)
            self._owns_client = True
        return self._client

    async def _publish(self) -> None:
        """Hand the post-sweep snapshot to the callback."""
        if self._on_sweep is None:
            return
        try:
            await self._on_sweep(self._registry.snapshot())
        except Exception as e:
            logger.error("Sweep callback failed: %s", e)

    async def _run_loop(self) -> None:
        """Fixed-rate timer - spawns one sweep per tick."""
        logger.debug("Monitor loop started")
        loop = asyncio.get_running_loop()
        next_tick = loop.time()

        try:
            while True:
                self._spawn_sweep()
                next_tick += self._interval
                await asyncio.sleep(max(0.0, next_tick - loop.time()))
        finally:
            logger.debug("Monitor loop exited")

    def _spawn_sweep(self) -> None:
        task = asyncio.create_task(self._run_sweep())
        self._sweeps.add(task)
        task.add_done_callback(self._sweeps.discard)

    async def _run_sweep(self) -> None:
        try:
            await self.sweep()
        except Exception:
            logger.exception("Sweep failed")
