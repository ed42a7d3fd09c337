"""HTTP response model, staged builder and serializer."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

STATUS_TEXTS: dict[int, str] = {
    200: "OK",
    404: "Not Found",
    500: "Internal Server Error",
}
UNKNOWN_STATUS_TEXT = "Unknown Status"


def status_text(status_code: int) -> str:
    return STATUS_TEXTS.get(status_code, UNKNOWN_STATUS_TEXT)


@dataclass(frozen=True, slots=True)
class HTTPResponse:
    status_code: int = 200
    headers: Mapping[str, str] = field(default_factory=dict)
    body: bytes | str = b""

    def __post_init__(self) -> None:
        if self.status_code < 0:
            raise ValueError("status_code cannot be negative")
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))
        if isinstance(self.body, str):
            object.__setattr__(self, "body", self.body.encode("utf-8"))

    def to_bytes(self) -> bytes:
        """Serialize the response into HTTP/1.1 wire format bytes."""
        return serialize_response(self)


class ResponseBuilder:
    """Assembles a response one part at a time before freezing it."""

    def __init__(self) -> None:
        self._status_code = 200
        self._headers: dict[str, str] = {}
        self._body: bytes | str = b""

    def status(self, status_code: int) -> "ResponseBuilder":
        self._status_code = status_code
        return self

    def headers(self, headers: Mapping[str, str]) -> "ResponseBuilder":
        self._headers.update(headers)
        return self

    def body(self, body: bytes | str) -> "ResponseBuilder":
        self._body = body
        return self

    def build(self) -> HTTPResponse:
        return HTTPResponse(
            status_code=self._status_code,
            headers=self._headers,
            body=self._body,
        )


def serialize_response(response: HTTPResponse) -> bytes:
    body = response.body
    # Any caller-supplied length is replaced by the real one, appended last.
    headers = {
        name: value
        for name, value in response.headers.items()
        if name.lower() != "content-length"
    }
    headers["Content-Length"] = str(len(body))

    header_lines = [f"HTTP/1.1 {response.status_code} {status_text(response.status_code)}"]
    header_lines.extend(f"{name}: {value}" for name, value in headers.items())
    head = "\r\n".join(header_lines).encode("iso-8859-1") + b"\r\n\r\n"
    return head + body
