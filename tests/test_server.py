import json
import time
from unittest import mock

import pytest

from tinyhttpd.http import HttpRequest
from tinyhttpd.server import (
    handle_api_time_request,
    handle_bad_request,
    handle_good_request,
    handle_method_not_allowed,
    handle_request,
    setup_routes,
)


@pytest.fixture
def docroot(tmp_path):
    (tmp_path / "index.html").write_bytes(b"<p>index</p>")
    (tmp_path / "css").mkdir()
    (tmp_path / "css" / "style.css").write_bytes(b"body{}")
    (tmp_path / "other.txt").write_bytes(b"other")
    return str(tmp_path)


def test_method_not_allowed():
    response = handle_method_not_allowed()
    assert response.status_code == 405
    assert response.body == b"Method not allowed"
    assert response.headers == [("Content-Type", "text/plain")]


def test_bad_request():
    response = handle_bad_request()
    assert response.status_code == 400
    assert response.body == b"Bad request"
    assert response.headers == [("Content-Type", "text/plain")]


def test_api_time_is_json():
    with mock.patch("time.time", return_value=0.0):
        response = handle_api_time_request(HttpRequest(uri="/api/time"))
        expected = time.ctime(0.0)
    assert response.status_code == 200
    assert response.headers == [("Content-Type", "application/json")]
    assert json.loads(response.body) == {"current_time": expected}


def test_setup_routes_count(docroot):
    assert len(setup_routes(docroot)) == 7


def test_hello_over_request(docroot):
    router = setup_routes(docroot)
    response = handle_request(b"GET /hello HTTP/1.1\r\nHost: localhost\r\n\r\n", router)
    assert response.status_code == 200
    assert response.body == b"Hello, World!"


def test_root_is_home_page(docroot):
    router = setup_routes(docroot)
    response = handle_request("GET / HTTP/1.1\r\n\r\n", router)
    assert b"Welcome to our HTTP Server!" in response.body
    assert response.headers == [("Content-Type", "text/html")]


def test_static_file_is_served(docroot):
    router = setup_routes(docroot)
    response = handle_request("GET /index.html HTTP/1.1\r\n\r\n", router)
    assert response.status_code == 200
    assert response.body == b"<p>index</p>"
    assert ("Content-Type", "text/html") in response.headers
    assert ("Cache-Control", "public, max-age=3600") in response.headers


def test_static_css_is_served(docroot):
    router = setup_routes(docroot)
    response = handle_request("GET /css/style.css HTTP/1.1\r\n\r\n", router)
    assert response.body == b"body{}"
    assert ("Content-Type", "text/css") in response.headers


def test_registered_static_route_missing_file(docroot):
    router = setup_routes(docroot)
    response = handle_request("GET /js/script.js HTTP/1.1\r\n\r\n", router)
    assert response.status_code == 404
    assert response.body == b"File not found"


def test_unregistered_file_is_not_served(docroot):
    router = setup_routes(docroot)
    response = handle_request("GET /other.txt HTTP/1.1\r\n\r\n", router)
    assert response.status_code == 404
    assert response.body == b"Page not found"


@pytest.mark.parametrize("method", ["POST", "PUT", "DELETE", "get"])
def test_non_get_is_refused(docroot, method):
    router = setup_routes(docroot)
    response = handle_request(f"{method} /hello HTTP/1.1\r\n\r\n", router)
    assert response.status_code == 405


@pytest.mark.parametrize(
    "raw",
    [
        "GET /hello HTTP/1.1\r\n",
        "GET /hello\r\n\r\n",
        "GET /hello HTTP/1.1\r\nno colon here\r\n\r\n",
        "",
    ],
)
def test_unparsable_is_bad_request(docroot, raw):
    router = setup_routes(docroot)
    response = handle_request(raw, router)
    assert response.status_code == 400
    assert response.body == b"Bad request"


def test_good_request_dispatches_get(docroot):
    router = setup_routes(docroot)
    request = HttpRequest(method="GET", uri="/hello", version="HTTP/1.1")
    assert handle_good_request(request, router).body == b"Hello, World!"


def test_wire_form_of_bad_request(docroot):
    router = setup_routes(docroot)
    wire = handle_request("nonsense", router).to_bytes()
    assert wire.startswith(b"HTTP/1.1 400 ")
    assert wire.endswith(b"\r\n\r\nBad request")
    assert b"Content-Length: 11\r\n" in wire