"""HTTP/1.1 request parsing and response serialisation."""

from __future__ import annotations

import socket
from dataclasses import dataclass, field

MAX_HEADERS = 50
MAX_HEADER_SIZE = 256
MAX_URI_SIZE = 1024
MAX_METHOD_SIZE = 16
MAX_VERSION_SIZE = 16


class BadRequest(ValueError):
    """Raised when a raw request cannot be parsed."""


@dataclass
class HttpRequest:
    """A parsed HTTP request."""

    method: str = ""
    uri: str = ""
    version: str = ""
    headers: list[tuple[str, str]] = field(default_factory=list)
    body: bytes = b""


def _clip(text: str, size: int) -> str:
    """Keep at most ``size - 1`` characters, as a fixed field of ``size`` would."""
    return text[: size - 1]


def find_header_end(raw: str) -> int | None:
    """Return the index of the blank line ending the headers, or None."""
    index = raw.find("\r\n\r\n")
    if index < 0:
        index = raw.find("\n\n")
    return index if index >= 0 else None


def find_request_line_end(raw: str) -> int | None:
    """Return the index of the newline ending the request line, or None."""
    index = raw.find("\n")
    return index if index >= 0 else None


def copy_line(raw: str, start: int, end: int) -> str:
    """Return ``raw[start:end]`` without a trailing carriage return."""
    line = raw[start:end]
    return line[:-1] if line.endswith("\r") else line


def parse_header(line: str, request: HttpRequest) -> None:
    """Parse a ``Key: value`` line and append it to the request's headers."""
    if len(request.headers) >= MAX_HEADERS:
        raise BadRequest("too many headers")
    key, sep, value = line.partition(":")
    if not sep:
        raise BadRequest(f"malformed header line: {line!r}")
    value = value.lstrip(" \t")
    request.headers.append(
        (_clip(key, MAX_HEADER_SIZE), _clip(value, MAX_HEADER_SIZE))
    )


def parse_request(raw: str | bytes) -> HttpRequest:
    """Parse the request line and headers of a raw HTTP request."""
    if isinstance(raw, (bytes, bytearray)):
        raw = bytes(raw).decode("latin-1")

    header_end = find_header_end(raw)
    if header_end is None:
        raise BadRequest("incomplete header section")

    line_end = find_request_line_end(raw)
    if line_end is None:
        raise BadRequest("missing request line")

    tokens = [token for token in copy_line(raw, 0, line_end).split(" ") if token]
    if len(tokens) < 3:
        raise BadRequest("malformed request line")

    request = HttpRequest(
        method=_clip(tokens[0], MAX_METHOD_SIZE),
        uri=_clip(tokens[1], MAX_URI_SIZE),
        version=_clip(tokens[2], MAX_VERSION_SIZE),
    )

    current = line_end + 1
    while current < header_end and len(request.headers) < MAX_HEADERS:
        end = raw.find("\n", current)
        if end < 0 or end - current <= 1:
            break
        parse_header(copy_line(raw, current, end), request)
        current = end + 1

    return request


def status_text(code: int) -> str:
    """Return the reason phrase used in the status line for ``code``."""
    if code == 404:
        return "Not Found"
    if code == 500:
        return "Internal Server Error"
    return "OK"


@dataclass
class HttpResponse:
    """An HTTP response ready to be serialised."""

    status_code: int = 200
    headers: list[tuple[str, str]] = field(default_factory=list)
    body: bytes = b""

    def set_text(
        self, status_code: int, body: str | bytes, content_type: str = "text/plain"
    ) -> None:
        """Replace status, body and headers with a single-typed body."""
        self.status_code = status_code
        self.body = body.encode("utf-8") if isinstance(body, str) else bytes(body)
        self.headers = [("Content-Type", content_type)]

    def status_line(self) -> str:
        """Return the status line, including its CRLF."""
        return f"HTTP/1.1 {self.status_code} {status_text(self.status_code)}\r\n"

    def header_block(self) -> str:
        """Return the header lines, Content-Length and the closing blank line."""
        lines = [f"{key}: {value}\r\n" for key, value in self.headers]
        if self.body:
            lines.append(f"Content-Length: {len(self.body)}\r\n")
        lines.append("\r\n")
        return "".join(lines)

    def to_bytes(self) -> bytes:
        """Return the whole response as it goes on the wire."""
        head = self.status_line() + self.header_block()
        return head.encode("latin-1") + self.body


def send_response(sock: socket.socket, response: HttpResponse) -> None:
    """Write the serialised response to a connected socket."""
    sock.sendall(response.to_bytes())