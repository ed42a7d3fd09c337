"""Routing table for method/path handlers."""

from collections.abc import Callable

from request import KNOWN_METHODS, HTTPRequest
from response import HTTPResponse

Handler = Callable[[HTTPRequest], HTTPResponse]


def not_found_handler(request: HTTPRequest) -> HTTPResponse:
    _ = request
    return HTTPResponse(
        status_code=404,
        headers={"Content-Type": "text/plain"},
        body="404 Not Found",
    )


class Router:
    """Exact-match (method, path) table with a 404 fallback.

    Routes are registered during setup only; lookups never mutate the table.
    """

    def __init__(self) -> None:
        self._routes: dict[str, dict[str, Handler]] = {}

    def add_route(self, method: str, path: str, handler: Handler) -> None:
        if method not in KNOWN_METHODS:
            raise ValueError(f"Unsupported method: {method!r}")
        self._routes.setdefault(path, {})[method] = handler

    def get_handler(self, method: str, path: str) -> Handler:
        return self._routes.get(path, {}).get(method, not_found_handler)
