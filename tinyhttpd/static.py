"""Serving files from a document root."""

from __future__ import annotations

import errno
import os
import stat

from .http import MAX_URI_SIZE, HttpRequest, HttpResponse

DOCUMENT_ROOT = "./static"
DEFAULT_MIME_TYPE = "application/octet-stream"

MIME_TYPES = {
    ".html": "text/html",
    ".htm": "text/html",
    ".css": "text/css",
    ".js": "application/javascript",
    ".json": "application/json",
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".gif": "image/gif",
    ".svg": "image/svg+xml",
    ".txt": "text/plain",
    ".pdf": "application/pdf",
}


def get_mime_type(filename: str) -> str:
    """Return the MIME type for the text after the last dot in ``filename``."""
    index = filename.rfind(".")
    if index < 0:
        return DEFAULT_MIME_TYPE
    return MIME_TYPES.get(filename[index:].lower(), DEFAULT_MIME_TYPE)


def is_safe_path(path: str) -> bool:
    """Reject paths that could escape the document root."""
    return ".." not in path and "//" not in path


def get_default_file_path(uri: str) -> str:
    """Map the root URI to the index page."""
    return "/index.html" if uri == "/" else uri


def construct_full_path(base_dir: str, file_path: str) -> str:
    """Join the base directory and the file path by plain concatenation."""
    return f"{base_dir}{file_path}"


def build_file_path(uri: str, document_root: str = DOCUMENT_ROOT) -> str | None:
    """Return the file path for ``uri``, or None if the URI is unsafe."""
    if not is_safe_path(uri):
        return None
    return construct_full_path(document_root, get_default_file_path(uri))


def validate_file(file_path: str) -> os.stat_result:
    """Return the file's stat; raise OSError unless it is a regular file."""
    info = os.stat(file_path)
    if not stat.S_ISREG(info.st_mode):
        raise OSError(errno.EINVAL, "not a regular file", file_path)
    return info


def read_file_content(file_path: str, file_size: int) -> bytes:
    """Read exactly ``file_size`` bytes from the file or raise OSError."""
    with open(file_path, "rb") as handle:
        content = handle.read(file_size)
    if len(content) != file_size:
        raise OSError(
            errno.EIO,
            f"read {len(content)} of {file_size} bytes",
            file_path,
        )
    return content


def set_static_file_headers(response: HttpResponse, file_path: str) -> None:
    """Append the Content-Type and Cache-Control headers for a static file."""
    response.headers.append(("Content-Type", get_mime_type(file_path)))
    response.headers.append(("Cache-Control", "public, max-age=3600"))


def serve_static_file_handler(
    request: HttpRequest, document_root: str = DOCUMENT_ROOT
) -> HttpResponse:
    """Build a response holding the file that the request's URI names."""
    response = HttpResponse()

    file_path = build_file_path(request.uri, document_root)
    if file_path is None:
        response.set_text(404, "File not found")
        return response

    try:
        info = validate_file(file_path)
    except OSError:
        response.set_text(404, "File not found")
        return response

    try:
        response.body = read_file_content(file_path, info.st_size)
    except OSError:
        response.set_text(500, "Internal server error")
        return response

    response.status_code = 200
    set_static_file_headers(response, file_path)
    return response


def serve_static_file(uri: str, document_root: str = DOCUMENT_ROOT) -> HttpResponse:
    """Serve ``uri`` without a full request; a 200 status means success."""
    request = HttpRequest(uri=uri[: MAX_URI_SIZE - 1])
    return serve_static_file_handler(request, document_root)