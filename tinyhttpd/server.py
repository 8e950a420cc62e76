"""The HTTP server: request handling, route setup and the accept loop."""

from __future__ import annotations

import argparse
import functools
import logging
import socket
import sys
import time

from .http import BadRequest, HttpRequest, HttpResponse, parse_request, send_response
from .router import Router, handle_hello_page, handle_home_page
from .static import DOCUMENT_ROOT, serve_static_file_handler

PORT = 8080
BUFFER_SIZE = 4096
BACKLOG = 5

STATIC_ROUTES = (
    "/index.html",
    "/css/style.css",
    "/js/script.js",
    "/images/logo.png",
)

log = logging.getLogger(__name__)


def handle_method_not_allowed() -> HttpResponse:
    """Return the response for a method other than GET."""
    response = HttpResponse()
    response.set_text(405, "Method not allowed")
    return response


def handle_bad_request() -> HttpResponse:
    """Return the response for a request that could not be parsed."""
    response = HttpResponse()
    response.set_text(400, "Bad request")
    return response


def handle_good_request(request: HttpRequest, router: Router) -> HttpResponse:
    """Route GET requests; refuse every other method."""
    log.info("Method: %s", request.method)
    log.info("URI: %s", request.uri)
    log.info("Version: %s", request.version)
    log.info("Headers: %d", len(request.headers))
    if request.method == "GET":
        return router.handle(request)
    return handle_method_not_allowed()


def handle_api_time_request(request: HttpRequest) -> HttpResponse:
    """Return the current local time as a small JSON document."""
    now = time.ctime(time.time())
    response = HttpResponse()
    response.set_text(200, f'{{"current_time": "{now}"}}', "application/json")
    return response


def handle_request(raw: str | bytes, router: Router) -> HttpResponse:
    """Parse a raw request and build the response for it."""
    try:
        request = parse_request(raw)
    except BadRequest:
        return handle_bad_request()
    return handle_good_request(request, router)


def setup_routes(document_root: str = DOCUMENT_ROOT) -> Router:
    """Return a router holding the built-in pages and the static files."""
    router = Router()
    router.register("/", handle_home_page)
    router.register("/hello", handle_hello_page)
    router.register("/api/time", handle_api_time_request)
    static = functools.partial(serve_static_file_handler, document_root=document_root)
    for path in STATIC_ROUTES:
        router.register(path, static)
    return router


def serve(host: str, port: int, router: Router) -> None:
    """Accept connections forever, answering one request on each."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as server:
        server.bind((host, port))
        server.listen(BACKLOG)
        log.info("Server listening on port %d", port)
        while True:
            log.info("Waiting for connection...")
            try:
                conn, address = server.accept()
            except OSError as exc:
                log.error("Accept failed: %s", exc)
                continue
            with conn:
                log.info("Client connected from %s", address[0])
                try:
                    data = conn.recv(BUFFER_SIZE - 1)
                    if data:
                        log.info("Raw request:\n%s", data.decode("latin-1"))
                        send_response(conn, handle_request(data, router))
                except OSError as exc:
                    log.error("Connection error: %s", exc)
            log.info("Client disconnected")


def main(argv: list[str] | None = None) -> int:
    """Run the server from the command line."""
    parser = argparse.ArgumentParser(description="Serve a few pages and static files.")
    parser.add_argument("--host", default="0.0.0.0", help="address to listen on")
    parser.add_argument("--port", type=int, default=PORT, help="port to listen on")
    parser.add_argument("--root", default=DOCUMENT_ROOT, help="document root for static files")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(message)s", stream=sys.stdout)
    log.info("Starting server on port %d...", args.port)
    router = setup_routes(args.root)
    try:
        serve(args.host, args.port, router)
    except KeyboardInterrupt:
        return 0
    except OSError as exc:
        log.error("Server failed: %s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())