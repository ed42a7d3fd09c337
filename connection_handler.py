"""Per-connection request/response pipeline."""

from __future__ import annotations

import logging
import socket
import time

from request import HTTPRequest, MalformedRequestError
from response import HTTPResponse, serialize_response
from router import Router

logger = logging.getLogger(__name__)


def internal_error_response() -> HTTPResponse:
    return HTTPResponse(
        status_code=500,
        headers={"Content-Type": "text/plain"},
        body="500 Internal Server Error",
    )


class ConnectionHandler:
    """Serves exactly one request on one accepted socket, then closes it.

    The socket is expected to be non-blocking. Whatever ``send`` cannot take
    immediately stays pending until ``flush`` is called again.
    """

    def __init__(
        self,
        sock: socket.socket,
        router: Router,
        *,
        address: tuple[str, int] = ("-", 0),
        connection_id: int = 0,
    ) -> None:
        self.sock = sock
        self.router = router
        self.address = address
        self.connection_id = connection_id

        self.method = "-"
        self.path = "-"
        self.status_code: int | None = None
        self.bytes_in = 0
        self.bytes_out = 0
        self.started_at = time.perf_counter()
        self.closed = False
        self.completed = False
        self._pending = memoryview(b"")

    @property
    def responded(self) -> bool:
        return self.status_code is not None

    @property
    def has_pending_write(self) -> bool:
        return bool(self._pending)

    def handle(self, raw: bytes) -> None:
        """Parse, dispatch and answer one request, closing once it is written."""
        if self.responded or self.closed:
            return

        self.started_at = time.perf_counter()
        self.bytes_in = len(raw)
        response, payload = self._respond(raw)
        self.status_code = response.status_code
        self._pending = memoryview(payload)
        self.flush()

    def flush(self) -> bool:
        """Write pending bytes; returns True once the response is fully sent.

        Raises OSError on transport failures. The caller owns isolating them.
        """
        if self.closed:
            return True
        while self._pending:
            try:
                sent = self.sock.send(self._pending)
            except BlockingIOError:
                return False
            self.bytes_out += sent
            self._pending = self._pending[sent:]
        if self.responded:
            self.completed = True
            self.close()
        return True

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        self._pending = memoryview(b"")
        try:
            self.sock.close()
        except OSError:
            logger.debug("Error closing connection %s", self.connection_id)

    def _respond(self, raw: bytes) -> tuple[HTTPResponse, bytes]:
        try:
            request = HTTPRequest.from_bytes(raw)
            self.method = request.method
            self.path = request.path
            handler = self.router.get_handler(request.method, request.path)
            response = handler(request)
            return response, serialize_response(response)
        except MalformedRequestError as exc:
            logger.warning("Malformed request from %s: %s", self.address[0], exc)
        except Exception:
            logger.exception("Unhandled error in route handler for %s %s", self.method, self.path)

        response = internal_error_response()
        return response, serialize_response(response)
