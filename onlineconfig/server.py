"""The configuration back end: an HTTP server over a project."""

from __future__ import annotations

import json
import logging
import re
import sys
from collections.abc import Sequence
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

from onlineconfig.entities import Project
from onlineconfig.resources import (
    EntityResource,
    ProjectResource,
    PropertyResource,
    Router,
    SubEntitiesResource,
)
from onlineconfig.serialization import serializer_factory

_log = logging.getLogger(__name__)
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _atoi(text: str) -> int:
    number = _LEADING_INT.match(text)
    return int(number.group(1)) if number else 0


def build_router(project: Project) -> Router:
    """A router with the project, entity, sub-entities and property resources."""
    router = Router()
    router.publish(ProjectResource(project))
    router.publish(EntityResource(project))
    router.publish(SubEntitiesResource(project))
    router.publish(PropertyResource(project))
    return router


def make_server(project: Project, port: int) -> ThreadingHTTPServer:
    """An HTTP server on all interfaces answering through :func:`build_router`."""
    router = build_router(project)

    class _Handler(BaseHTTPRequestHandler):
        protocol_version = "HTTP/1.1"

        def _serve(self) -> None:
            length = _atoi(self.headers.get("Content-Length", "0"))
            body = self.rfile.read(length) if length > 0 else b""
            response = router.dispatch(
                self.command, self.path, dict(self.headers.items()), body
            )
            payload = response.body.encode("utf-8")
            self.send_response(response.status)
            self.send_header("Connection", "close")
            self.send_header("Content-Length", str(len(payload)))
            for key, value in response.headers.items():
                self.send_header(key, value)
            self.end_headers()
            self.wfile.write(payload)
            self.close_connection = True

        do_GET = _serve
        do_POST = _serve
        do_PUT = _serve
        do_DELETE = _serve

        def log_message(self, format: str, *args: object) -> None:
            _log.debug(format, *args)

    return ThreadingHTTPServer(("", port), _Handler)


def main(argv: Sequence[str] | None = None) -> int:
    """Serve a new project on the port given as the first argument."""
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        return -1
    port = _atoi(args[0])

    project = Project()
    serializer = serializer_factory().get_serializer(project.type)
    print("Project:")
    print(
        json.dumps(
            serializer.to_json(project, True),
            indent=4,
            sort_keys=True,
            ensure_ascii=False,
        )
    )

    with make_server(project, port) as server:
        try:
            server.serve_forever()
        except KeyboardInterrupt:
            pass
    return 0