"""Main HTTP server entry point and connection lifecycle orchestration."""

from __future__ import annotations

import argparse
import json
import logging
import selectors
import socket
import time

from config import (
    HOST,
    LISTEN_BACKLOG,
    LOG_FORMAT,
    LOG_LEVEL,
    PORT,
    RECV_BUFFER_SIZE,
    SELECT_TIMEOUT_SECS,
)
from connection_handler import ConnectionHandler
from handlers.site_handlers import register_site_routes
from metrics import MetricsRegistry
from router import Router

logger = logging.getLogger(__name__)


class HTTPServer:
    """Single-threaded selector loop serving one request per connection."""

    def __init__(
        self,
        host: str = HOST,
        port: int = PORT,
        router: Router | None = None,
        *,
        log_format: str = LOG_FORMAT,
    ) -> None:
        self.host = host
        self.port = port
        self.router = router or self._build_default_router()
        self.log_format = log_format

        self._connections: dict[int, ConnectionHandler] = {}
        self._next_connection_id = 0
        self._stop_requested = False
        self.metrics = MetricsRegistry()

    def _build_default_router(self) -> Router:
        return register_site_routes(Router())

    def start(self, port: int | None = None) -> None:
        """Bind, listen and serve connections until stop() is called."""
        if port is not None:
            self.port = port

        with (
            socket.socket(socket.AF_INET, socket.SOCK_STREAM) as server_socket,
            selectors.DefaultSelector() as selector,
        ):
            server_socket.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            server_socket.bind((self.host, self.port))
            server_socket.listen(LISTEN_BACKLOG)
            server_socket.setblocking(False)
            selector.register(server_socket, selectors.EVENT_READ, data=None)
            self.port = server_socket.getsockname()[1]
            logger.info("Server listening on port %s", self.port)

            try:
                while not self._stop_requested:
                    try:
                        events = selector.select(timeout=SELECT_TIMEOUT_SECS)
                    except OSError:
                        if self._stop_requested:
                            break
                        raise

                    for key, mask in events:
                        if key.data is None:
                            self._accept_clients(server_socket, selector)
                            continue

                        connection: ConnectionHandler = key.data
                        if mask & selectors.EVENT_READ:
                            self._handle_read(connection, selector)
                        if mask & selectors.EVENT_WRITE:
                            self._handle_write(connection, selector)
            finally:
                for connection in list(self._connections.values()):
                    self._close_connection(connection, selector)
                self._connections.clear()

    def stop(self) -> None:
        """Ask the loop to exit; honoured even if start() has not bound yet."""
        if self._stop_requested:
            return
        self._stop_requested = True
        logger.info("Server stopping: %s", json.dumps(self.metrics.snapshot(), sort_keys=True))

    def _accept_clients(
        self,
        server_socket: socket.socket,
        selector: selectors.BaseSelector,
    ) -> None:
        while True:
            try:
                client_socket, address = server_socket.accept()
            except BlockingIOError:
                return
            except OSError as exc:
                logger.warning("Accept failed: %s", exc)
                self.metrics.record_socket_error(exc.__class__.__name__)
                return

            client_socket.setblocking(False)
            self._next_connection_id += 1
            connection = ConnectionHandler(
                client_socket,
                self.router,
                address=address,
                connection_id=self._next_connection_id,
            )
            self._connections[connection.connection_id] = connection
            selector.register(client_socket, selectors.EVENT_READ, data=connection)
            self.metrics.connection_opened()

    def _handle_read(
        self,
        connection: ConnectionHandler,
        selector: selectors.BaseSelector,
    ) -> None:
        try:
            data = connection.sock.recv(RECV_BUFFER_SIZE)
        except BlockingIOError:
            return
        except OSError as exc:
            self._on_socket_error(connection, selector, exc)
            return

        if not data or connection.responded:
            # Peer closed without sending a request, or sent more after the reply.
            if not connection.has_pending_write:
                self._close_connection(connection, selector)
            return

        try:
            connection.handle(data)
        except OSError as exc:
            self._on_socket_error(connection, selector, exc)
            return
        self._after_io(connection, selector)

    def _handle_write(
        self,
        connection: ConnectionHandler,
        selector: selectors.BaseSelector,
    ) -> None:
        try:
            connection.flush()
        except OSError as exc:
            self._on_socket_error(connection, selector, exc)
            return
        self._after_io(connection, selector)

    def _after_io(
        self,
        connection: ConnectionHandler,
        selector: selectors.BaseSelector,
    ) -> None:
        if connection.closed:
            self._close_connection(connection, selector)
            return
        if connection.has_pending_write:
            selector.modify(connection.sock, selectors.EVENT_WRITE, data=connection)

    def _on_socket_error(
        self,
        connection: ConnectionHandler,
        selector: selectors.BaseSelector,
        exc: OSError,
    ) -> None:
        logger.warning(
            "Socket error on connection %s from %s: %s",
            connection.connection_id,
            connection.address[0],
            exc,
        )
        self.metrics.record_socket_error(exc.__class__.__name__)
        self._close_connection(connection, selector)

    def _close_connection(
        self,
        connection: ConnectionHandler,
        selector: selectors.BaseSelector,
    ) -> None:
        if self._connections.pop(connection.connection_id, None) is None:
            return

        try:
            selector.unregister(connection.sock)
        except (KeyError, ValueError):
            pass
        connection.close()
        self.metrics.connection_closed()

        if connection.completed:
            self._record_and_log(connection)
        elif connection.responded:
            self.metrics.record_aborted_response()
            logger.warning(
                "Response aborted on connection %s: status=%s bytes_out=%s",
                connection.connection_id,
                connection.status_code,
                connection.bytes_out,
            )

    def _record_and_log(self, connection: ConnectionHandler) -> None:
        duration_ms = (time.perf_counter() - connection.started_at) * 1000
        self.metrics.record_response(
            status_code=connection.status_code,
            duration_ms=duration_ms,
            bytes_sent=connection.bytes_out,
        )
        event = {
            "client": connection.address[0],
            "method": connection.method,
            "path": connection.path,
            "status": connection.status_code,
            "connection_id": connection.connection_id,
            "bytes_in": connection.bytes_in,
            "bytes_out": connection.bytes_out,
            "latency_ms": round(duration_ms, 3),
        }
        if self.log_format == "json":
            logger.info(json.dumps(event, sort_keys=True))
            return

        logger.info(
            (
                "client=%s method=%s path=%s status=%s connection_id=%s "
                "bytes_in=%s bytes_out=%s duration_ms=%.2f"
            ),
            event["client"],
            event["method"],
            event["path"],
            event["status"],
            event["connection_id"],
            event["bytes_in"],
            event["bytes_out"],
            duration_ms,
        )


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run custom HTTP server")
    parser.add_argument("--host", default=HOST)
    parser.add_argument("--port", type=int, default=PORT)
    parser.add_argument("--log-format", choices=["plain", "json"], default=LOG_FORMAT)
    parser.add_argument("--log-level", default=LOG_LEVEL)
    return parser.parse_args()


def main() -> None:
    args = _parse_args()
    logging.basicConfig(level=args.log_level.upper())
    server = HTTPServer(host=args.host, log_format=args.log_format)
    try:
        server.start(args.port)
    except KeyboardInterrupt:
        server.stop()


if __name__ == "__main__":
    main()
