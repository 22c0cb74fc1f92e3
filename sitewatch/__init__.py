"""SiteWatch - Live availability dashboard for a fixed set of web services."""

import argparse
import asyncio
import logging
import signal
import sys

__version__ = "1.1.0"

# Set while the run command is serving
_shutdown_event: asyncio.Event | None = None
_shutdown_loop: asyncio.AbstractEventLoop | None = None

logger = logging.getLogger(__name__)


def _setup_logging(verbose: bool = False) -> None:
    """Configure logging for the application."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)


def _handle_shutdown(signum: int, frame: object) -> None:
    """Signal handler for graceful shutdown.

    uvicorn captures SIGINT/SIGTERM while serving and re-raises them once
    the server has stopped. Signals arriving outside that window land here
    and set the shutdown event, which stops the server if it has not
    started yet.
    """
    sig_name = signal.Signals(signum).name
    logger.info("Received %s, shutting down", sig_name)
    if _shutdown_event is not None and _shutdown_loop is not None:
        _shutdown_loop.call_soon_threadsafe(_shutdown_event.set)


async def _serve_until_shutdown(config) -> None:
    """Serve with a shutdown event the signal handler can reach."""
    global _shutdown_event, _shutdown_loop

    from .api import serve

    _shutdown_event = asyncio.Event()
    _shutdown_loop = asyncio.get_running_loop()
    try:
        await serve(config, shutdown=_shutdown_event)
    finally:
        _shutdown_event = None
        _shutdown_loop = None


def _cmd_run(args: argparse.Namespace) -> None:
    """Execute the run command - start the monitor and dashboard server."""
    _setup_logging(args.verbose)

    logger.info("SiteWatch %s starting...", __version__)

    # Import here to allow logging setup first
    from .config import load_config, ConfigError
    from .api import ApiError

    # 1. Load configuration
    try:
        config = load_config(args.config)
        logger.info("Configuration loaded from %s", args.config)
        logger.info("Monitoring %d URLs at %ds interval", len(config.urls), config.monitor.interval)
    except ConfigError as e:
        logger.error("Configuration error: %s", e)
        sys.exit(1)

    # 2. Setup shutdown handler
    signal.signal(signal.SIGTERM, _handle_shutdown)
    signal.signal(signal.SIGINT, _handle_shutdown)

    # 3. Serve until a shutdown signal arrives
    try:
        asyncio.run(_serve_until_shutdown(config))
    except ApiError as e:
        logger.error("Failed to start server: %s", e)
        sys.exit(1)
    except KeyboardInterrupt:
        # Backup handler if signal doesn't work
        logger.info("Keyboard interrupt received")

    logger.info("Shutdown complete")


async def _run_single_sweep(urls: list[str]) -> list:
    from .monitor import Monitor
    from .registry import Registry

    monitor = Monitor(Registry(urls), interval=1)
    try:
        return await monitor.sweep()
    finally:
        await monitor.stop()


def _cmd_check(args: argparse.Namespace) -> None:
    """Execute the check command - probe every URL once and print the result."""
    _setup_logging(args.verbose)
    if not args.verbose:
        logging.getLogger("sitewatch").setLevel(logging.ERROR)

    from .config import load_config, ConfigError

    # 1. Load configuration
    try:
        config = load_config(args.config)
    except ConfigError as e:
        print(f"Error: {e}")
        sys.exit(1)

    # 2. Run one sweep
    print(f"Checking {len(config.urls)} URL(s)...\n")
    results = asyncio.run(_run_single_sweep(config.urls))

    # 3. Display results
    online_count = sum(1 for r in results if r.is_up)
    total_count = len(results)

    for result in results:
        status = "✓ ONLINE " if result.is_up else "✗ OFFLINE"
        detail = result.status_code if result.status_code is not None else result.error_message
        print(f"{status}: {result.url} ({detail}, {result.response_time_ms}ms)")

    print(f"\nResult: {online_count}/{total_count} URLs online")

    if online_count < total_count:
        sys.exit(1)


def main() -> None:
    """Main entry point for the sitewatch package."""
    parser = argparse.ArgumentParser(
        description="SiteWatch - Live availability dashboard for web services"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"sitewatch {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command")

    # Run subcommand (default behavior)
    run_parser = subparsers.add_parser(
        "run",
        help="Start the monitor and dashboard server (default)",
    )
    run_parser.add_argument(
        "-c", "--config",
        default="config.yaml",
        help="Path to configuration file (default: config.yaml)",
    )
    run_parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose (debug) logging",
    )
    run_parser.set_defaults(func=_cmd_run)

    # Check subcommand
    check_parser = subparsers.add_parser(
        "check",
        help="Probe every configured URL once and print the results",
    )
    check_parser.add_argument(
        "-c", "--config",
        default="config.yaml",
        help="Path to configuration file (default: config.yaml)",
    )
    check_parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Show probe diagnostics",
    )
    check_parser.set_defaults(func=_cmd_check)

    args = parser.parse_args()

    # Default to 'run' if no command specified
    if args.command is None:
        args.config = "config.yaml"
        args.verbose = False
        args.func = _cmd_run

    args.func(args)
