"""
Simple HTTP Server System

A minimal HTTP server demonstrating cyclus: a config data component,
a health registry and a server that depends on both.

Run with ``python examples/http_serve/app.py`` and press Ctrl+C to stop.
"""

import asyncio
import json
import logging
from http.server import HTTPServer, BaseHTTPRequestHandler
from threading import Thread
from typing import Optional

import pydantic

from cyclus import SystemMap, SystemSettings, get_component, inject, using, wire

logger = logging.getLogger("cyclus.examples.http_serve")


class ServerConfig(pydantic.BaseModel):
    """HTTP Server configuration."""
    host: str = "127.0.0.1"
    port: int = 8080


class Health:
    """Tracks whether the system is serving."""

    def __init__(self):
        self.healthy = False

    def start(self):
        self.healthy = True

    def stop(self):
        self.healthy = False


@inject
def render_health(health: Health = get_component("health")) -> bytes:
    return json.dumps({"status": "healthy" if health.healthy else "stopping"}).encode()


class RequestHandler(BaseHTTPRequestHandler):
    """Simple HTTP request handler."""

    def do_GET(self):
        if self.path == "/health":
            self.send_response(200)
            self.send_header("Content-Type", "application/json")
            self.end_headers()
            self.wfile.write(render_health())
        else:
            self.send_response(404)
            self.send_header("Content-Type", "text/plain")
            self.end_headers()
            self.wfile.write(b"Not Found")

    def log_message(self, format, *args):
        """Suppress default logging."""
        pass


class HttpServer:
    """Runs an HTTPServer in a thread between start and stop."""

    config: ServerConfig

    def __init__(self):
        self._server: Optional[HTTPServer] = None
        self._thread: Optional[Thread] = None

    async def start(self, deps) -> None:
        config = deps.config
        logger.info("Starting HTTP server on %s:%s", config.host, config.port)

        self._server = HTTPServer((config.host, config.port), RequestHandler)
        self._thread = Thread(target=self._server.serve_forever, daemon=True)
        self._thread.start()

        logger.info("HTTP server running at http://%s:%s", config.host, config.port)

    async def stop(self) -> None:
        logger.info("Shutting down HTTP server...")

        if self._server:
            self._server.shutdown()
            self._server.server_close()
            self._server = None

        if self._thread:
            self._thread.join(timeout=2)
            self._thread = None

        logger.info("HTTP server stopped")


async def main() -> None:
    settings = SystemSettings(name="http_serve", log_level="INFO")
    settings.configure()

    system = SystemMap({
        "config": ServerConfig(),
        "health": Health(),
        "server": using(HttpServer(), ["config", "health"]),
    }, settings=settings)
    wire(system, modules=[__name__])

    async with system:
        try:
            await asyncio.Event().wait()
        except asyncio.CancelledError:
            pass


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass
