"""HTTP and realtime server for the status dashboard."""

import asyncio
import errno
import logging
import socket
from typing import Any

import socketio
import uvicorn
from fastapi import FastAPI
from fastapi.responses import HTMLResponse

from .commands import TOGGLE_SITE_EVENT
from .config import Config, ServerConfig
from .models import EndpointStatus, Snapshot, snapshot_to_dict
from .supervisor import Supervisor
from ._dashboard import HTML_DASHBOARD

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Raised when the server fails to start."""
    pass


def create_socketio_server() -> socketio.AsyncServer:
    """Create the Socket.IO server carrying the realtime channel."""
    return socketio.AsyncServer(
        async_mode="asgi",
        cors_allowed_origins="*",
        logger=False,
        engineio_logger=False,
    )


def _build_status_response(snapshot: Snapshot) -> dict[str, Any]:
    """Build the full status response with summary."""
    records = list(snapshot.values())

    def count(status: EndpointStatus) -> int:
        return sum(1 for r in records if r.status is status)

    return {
        "urls": snapshot_to_dict(snapshot),
        "summary": {
            "total": len(records),
            "online": count(EndpointStatus.ONLINE),
            "offline": count(EndpointStatus.OFFLINE),
            "unknown": count(EndpointStatus.UNKNOWN),
            "paused": sum(1 for r in records if not r.active),
        },
    }


def create_http_app(supervisor: Supervisor) -> FastAPI:
    """Create the FastAPI app serving the dashboard and JSON endpoints."""
    app = FastAPI(
        title="SiteWatch",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    @app.get("/", response_class=HTMLResponse)
    async def dashboard() -> HTMLResponse:
        return HTMLResponse(HTML_DASHBOARD, headers={"Cache-Control": "max-age=3600"})

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/status")
    async def status() -> dict[str, Any]:
        return _build_status_response(supervisor.registry.snapshot())

    return app


def register_event_handlers(sio: socketio.AsyncServer, supervisor: Supervisor) -> None:
    """Bind the realtime events to the supervisor."""

    @sio.event
    async def connect(sid, environ):
        await supervisor.on_connect(sid)

    @sio.event
    async def disconnect(sid, reason=None):
        await supervisor.on_disconnect(sid)

    @sio.on(TOGGLE_SITE_EVENT)
    async def toggle_site(sid, url):
        await supervisor.on_toggle(sid, url)


def create_app(supervisor: Supervisor, sio: socketio.AsyncServer) -> socketio.ASGIApp:
    """Create the ASGI app: Socket.IO in front, FastAPI for everything else."""
    register_event_handlers(sio, supervisor)
    return socketio.ASGIApp(sio, other_asgi_app=create_http_app(supervisor))


class ApiServer:
    """Uvicorn server for the dashboard, JSON status and realtime channel.

    The listen socket is bound up front by bind() so that an unusable port
    is reported as an ApiError before any background work starts.
    """

    def __init__(self, config: ServerConfig, app: Any) -> None:
        """Initialize the server.

        Args:
            config: Server configuration.
            app: ASGI application to serve.
        """
        self.config = config
        self._app = app
        self._socket: socket.socket | None = None
        self._server: uvicorn.Server | None = None
        self._stop_requested = False

    def bind(self) -> None:
        """Bind the listen socket.

        Raises:
            ApiError: If the address cannot be bound.
        """
        if self._socket is not None:
            return

        host, port = self.config.host, self.config.port
        family = socket.AF_INET6 if ":" in host else socket.AF_INET
        sock = socket.socket(family, socket.SOCK_STREAM)
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)

        try:
            sock.bind((host, port))
        except OSError as e:
            sock.close()
            # Provide specific guidance based on error type
            if e.errno == errno.EADDRINUSE:
                raise ApiError(
                    f"Port {port} is already in use. "
                    f"Another process may be using this port, or sitewatch is already running."
                )
            elif e.errno == errno.EACCES:
                raise ApiError(
                    f"Permission denied for port {port}. "
                    f"Ports below 1024 require root privileges. "
                    f"Use a port >= 1024 or run with elevated permissions."
                )
            else:
                raise ApiError(f"Failed to start server on {host}:{port}: {e}")

        sock.set_inheritable(True)
        self._socket = sock

    async def serve(self) -> None:
        """Serve until stop() is called or a shutdown signal is received.

        Raises:
            ApiError: If the socket was not bound yet and binding fails.
        """
        self.bind()

        if self._stop_requested:
            logger.info("Shutdown requested before the server started")
            self._socket.close()
            self._socket = None
            self._stop_requested = False
            return

        config = uvicorn.Config(
            self._app,
            host=self.config.host,
            port=self.config.port,
            log_config=None,
            access_log=False,
            lifespan="off",
        )
        self._server = uvicorn.Server(config)
        logger.info("Dashboard available on http://%s:%d", self.config.host, self.config.port)

        try:
            await self._server.serve(sockets=[self._socket])
        finally:
            self._socket.close()
            self._socket = None
            self._server = None
            self._stop_requested = False
            logger.info("Server stopped")

    def stop(self) -> None:
        """Ask the server to shut down gracefully.

        May be called before serve(), in which case serve() returns
        without accepting connections.
        """
        self._stop_requested = True
        if self._server is not None:
            self._server.should_exit = True

    @property
    def is_running(self) -> bool:
        """Check if the server is running."""
        return self._server is not None and self._server.started


async def _stop_when_set(shutdown: asyncio.Event, server: ApiServer) -> None:
    await shutdown.wait()
    server.stop()


async def serve(config: Config, shutdown: asyncio.Event | None = None) -> None:
    """Run the monitor and the server until shutdown.

    Args:
        config: Application configuration.
        shutdown: Optional event that stops the server once set. It covers
            shutdown requests arriving while the monitor is starting,
            before the server handles signals itself.

    Raises:
        ApiError: If the listen address cannot be bound.
    """
    sio = create_socketio_server()
    supervisor = Supervisor(config, sio)
    server = ApiServer(config.server, create_app(supervisor, sio))

    # Fail fast on the port before any probe goes out
    server.bind()

    await supervisor.start()

    watcher = None
    if shutdown is not None:
        watcher = asyncio.create_task(_stop_when_set(shutdown, server), name="shutdown-watcher")
    try:
        # Give the watcher a turn so an already-set event skips serving
        await asyncio.sleep(0)
        await server.serve()
    finally:
        if watcher is not None:
            watcher.cancel()
        await supervisor.stop()
