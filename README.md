# tinyhttpd

A small HTTP/1.1 server. It accepts one connection at a time. On each
connection it reads one request, matches the request path exactly against a
table of routes, writes back one response and closes the connection.

## Install

    pip install .

## Run

    tinyhttpd

Options:

- `--host`: the address to listen on (default `0.0.0.0`)
- `--port`: the port to listen on (default `8080`)
- `--root`: the document root for static files (default `./static`)

The server logs each request to standard output. Stop it with Ctrl-C.

These routes are registered by `tinyhttpd.server.setup_routes`:

| Path               | Response                                   |
|--------------------|--------------------------------------------|
| `/`                | A welcome HTML page                        |
| `/hello`           | `Hello, World!` as plain text              |
| `/api/time`        | `{"current_time": "..."}` as JSON          |
| `/index.html`      | The file from the document root            |
| `/css/style.css`   | The file from the document root            |
| `/js/script.js`    | The file from the document root            |
| `/images/logo.png` | The file from the document root            |

A request for any other path gets `404 Page not found`. A method other than
`GET` gets `405 Method not allowed`. A request that cannot be parsed gets
`400 Bad request`.

Static files are sent with a `Content-Type` taken from their extension (see
`tinyhttpd.static.MIME_TYPES`; anything else is
`application/octet-stream`) and with `Cache-Control: public, max-age=3600`.
A path that contains `..` or `//` is refused with `404 File not found`, as
is a path that is missing or not a regular file. A file that cannot be read
in full gets `500 Internal server error`.

## Use as a library

```python
from tinyhttpd.http import parse_request
from tinyhttpd.router import Router, handle_hello_page
from tinyhttpd.server import handle_request, setup_routes

router = Router()
router.register("/hello", handle_hello_page)

response = router.handle(parse_request("GET /hello HTTP/1.1\r\n\r\n"))
print(response.to_bytes())

# The full default route table, with static files from ./public:
response = handle_request("GET / HTTP/1.1\r\nHost: localhost\r\n\r\n",
                          setup_routes("./public"))
print(response.status_code, response.body)
```

- `tinyhttpd.http`: `parse_request` turns raw text or bytes into an
  `HttpRequest` (method, URI, version and a list of header pairs) and raises
  `BadRequest` when the input is malformed. `HttpResponse` holds a status
  code, header pairs and a byte body; `set_text(status_code, body,
  content_type)` fills in a simple response and `to_bytes()` gives the
  response as it goes on the wire, with `Content-Length` added when there is
  a body. `send_response(sock, response)` writes it to a socket.
- `tinyhttpd.router`: `Router.register(path, handler)` adds a route (at most
  50; it returns `False` once the table is full) and `Router.handle(request)`
  runs the first handler whose path equals the URI. A handler takes an
  `HttpRequest` and returns an `HttpResponse`.
- `tinyhttpd.static`: `serve_static_file(uri, document_root)` and
  `serve_static_file_handler(request, document_root)` build the response for
  a file under the document root.
- `tinyhttpd.server`: `handle_request(raw, router)`, `setup_routes(root)`,
  `serve(host, port, router)` and `main(argv)`.

## What it does not do

- It reads at most 4095 bytes of each request and does not read or use a
  request body.
- It answers one request per connection and serves connections one after
  another; there is no keep-alive, threading or TLS.
- Routes match the whole path exactly; query strings are not split off, so
  `/hello?x=1` is a 404.
- The status line carries a reason phrase only for 404 and 500; every other
  code is sent with `OK`.

## Tests

    pip install .[test]
    pytest