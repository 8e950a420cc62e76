"""A small HTTP/1.1 server with exact-path routing and static file serving."""

__version__ = "0.1.0"
__all__ = ["http", "router", "server", "static"]