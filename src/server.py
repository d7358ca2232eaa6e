"""Serve the current target over HTTP."""

import logging
import os
import signal
import threading
from types import FrameType
from typing import Any

from werkzeug.serving import BaseWSGIServer, make_server

import web
from src.errors import NoCurrentTargetError, ServerBindError
from src.registry import AliasRegistry

logger = logging.getLogger("ss")

SHUTDOWN_SIGNALS = (signal.SIGINT, signal.SIGTERM)


class GracefulShutdown:
    """Stop a server on the first signal, force the process to exit on the second."""

    def __init__(self, server: BaseWSGIServer) -> None:
        self.server = server
        self.requested = False
        self.previous_handlers: dict[int, Any] = {}

    def handle(self, signum: int, frame: FrameType | None) -> None:
        """Signal handler.

        shutdown() blocks until serve_forever() returns, and signal handlers
        run on the thread serving, so it is called from a separate thread.
        """
        if self.requested:
            logger.warning("Received %s during shutdown, forcing exit", signal.Signals(signum).name)
            os._exit(1)

        self.requested = True
        logger.info("Received %s, shutting down", signal.Signals(signum).name)
        print("\nShutting down, waiting for in-flight requests (interrupt again to force)")
        threading.Thread(target=self.server.shutdown, daemon=True).start()

    def install(self) -> None:
        for signum in SHUTDOWN_SIGNALS:
            self.previous_handlers[signum] = signal.getsignal(signum)
            signal.signal(signum, self.handle)

    def uninstall(self) -> None:
        for signum, handler in self.previous_handlers.items():
            signal.signal(signum, handler if handler is not None else signal.SIG_DFL)
        self.previous_handlers = {}


def bind(root: str, host: str, port: int) -> BaseWSGIServer:
    """Bind a threaded server for the static files under root.

    Raises:
        ServerBindError: if the address cannot be bound
    """
    app = web.create_app(root)
    try:
        server = make_server(host, port, app, threaded=True)
    # werkzeug prints the reason and calls sys.exit() when binding fails
    except (OSError, SystemExit) as e:
        logger.error("Failed to bind %s:%s: %s", host, port, e)
        raise ServerBindError(f"Failed to serve on {host}:{port}", path=root) from e

    # Track request threads so server_close() waits for them to finish
    server.daemon_threads = False
    server.block_on_close = True
    return server


def serve(registry: AliasRegistry, host: str, port: int) -> None:
    """Serve the registry's current target until a shutdown signal arrives.

    Args:
        registry (AliasRegistry): the registry to read the current target from
        host (str): the interface to bind
        port (int): the port to bind
    """
    root = registry.current()
    if root is None:
        raise NoCurrentTargetError('No current target is set, run "ss use <alias>" first')

    server = bind(root, host, port)
    shutdown = GracefulShutdown(server)
    shutdown.install()

    logger.info("Serving %s on %s:%s", root, host, port)
    print(f"Serving {root}")
    print(f"Listening on http://{host}:{port}/ (Ctrl+C to stop)", flush=True)

    try:
        server.serve_forever()
    finally:
        server.server_close()
        shutdown.uninstall()
        logger.info("Server stopped")
