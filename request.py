"""HTTP request model and parser."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

KNOWN_METHODS = ("GET", "POST", "PUT", "DELETE")
LINE_SEPARATOR = b"\r\n"
HEADER_SEPARATOR = ": "


class MalformedRequestError(ValueError):
    """Raised when the request line carries a method outside KNOWN_METHODS."""


@dataclass(frozen=True, slots=True)
class HTTPRequest:
    method: str
    path: str
    headers: Mapping[str, str] = field(default_factory=dict)
    body: bytes = b""

    def __post_init__(self) -> None:
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")

    @classmethod
    def from_bytes(cls, raw: bytes) -> "HTTPRequest":
        """Parse raw HTTP request bytes into a structured request object.

        Only the bytes of a single read are considered: the body is whatever
        follows the first blank line, with no Content-Length enforcement.
        """
        request_line, *rest = raw.split(LINE_SEPARATOR)

        method, _sep, remainder = request_line.decode("utf-8", errors="replace").partition(" ")
        if method not in KNOWN_METHODS:
            raise MalformedRequestError(f"Invalid HTTP method: {method!r}")
        # The version token is discarded.
        path = remainder.split(" ", 1)[0]

        headers: dict[str, str] = {}
        if b"" not in rest:
            # Without a blank line nothing is read as a header.
            return cls(method=method, path=path, headers=headers, body=LINE_SEPARATOR.join(rest))

        body_start = rest.index(b"")
        for line in rest[:body_start]:
            name, _sep, value = line.decode("utf-8", errors="replace").partition(HEADER_SEPARATOR)
            headers[name.lower()] = value

        body = LINE_SEPARATOR.join(rest[body_start + 1 :])
        return cls(method=method, path=path, headers=headers, body=body)


def parse_request(raw: bytes) -> HTTPRequest:
    return HTTPRequest.from_bytes(raw)
