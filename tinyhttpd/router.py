"""Exact-path routing of requests to handler functions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from .http import HttpRequest, HttpResponse

MAX_ROUTES = 50

Handler = Callable[[HttpRequest], HttpResponse]


@dataclass(frozen=True)
class _Route:
    path: str
    handler: Handler


def handle_home_page(request: HttpRequest) -> HttpResponse:
    """Return the HTML welcome page."""
    response = HttpResponse()
    response.set_text(
        200,
        "<html><body><h1>Welcome to our HTTP Server!</h1></body></html>",
        "text/html",
    )
    return response


def handle_hello_page(request: HttpRequest) -> HttpResponse:
    """Return a plain-text greeting."""
    response = HttpResponse()
    response.set_text(200, "Hello, World!", "text/plain")
    return response


def handle_not_found(request: HttpRequest) -> HttpResponse:
    """Return the 404 page used when no route matches."""
    response = HttpResponse()
    response.set_text(404, "Page not found", "text/plain")
    return response


class Router:
    """A table of exact URI paths and the handlers that serve them."""

    def __init__(self, max_routes: int = MAX_ROUTES) -> None:
        self._max_routes = max_routes
        self._routes: list[_Route] = []

    def register(self, path: str, handler: Handler) -> bool:
        """Add a route; return False and ignore it once the table is full."""
        if len(self._routes) >= self._max_routes:
            return False
        self._routes.append(_Route(path, handler))
        return True

    def handle(self, request: HttpRequest) -> HttpResponse:
        """Run the first handler whose path equals the URI, else the 404 page."""
        for route in self._routes:
            if route.path == request.uri:
                return route.handler(request)
        return handle_not_found(request)

    def __len__(self) -> int:
        return len(self._routes)