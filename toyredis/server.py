"""TCP server speaking a line-based GET/SET protocol."""

from __future__ import annotations

import argparse
import itertools
import logging
import socket
import socketserver
import threading
import time
from typing import Sequence

from toyredis.commands import dispatch
from toyredis.storage import KVStore

logger = logging.getLogger(__name__)

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 6379
READ_TIMEOUT = 120.0
_ENCODING = "utf-8"
_ERRORS = "surrogateescape"


def handle_connection(
    store: KVStore, connection: socket.socket, connection_counter: int
) -> None:
    """Serve request lines from ``connection`` until it closes or times out."""
    deadline = time.monotonic() + READ_TIMEOUT
    with connection, connection.makefile("rb") as reader:
        while True:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                logger.error("[conn %d] read deadline exceeded", connection_counter)
                return
            connection.settimeout(remaining)
            try:
                raw = reader.readline()
            except OSError as exc:
                logger.error("[conn %d] error reading from client: %s", connection_counter, exc)
                return
            if not raw.endswith(b"\n"):
                logger.info("[conn %d] client disconnected", connection_counter)
                return
            message = raw.decode(_ENCODING, _ERRORS)
            response = dispatch(store, message, connection_counter)
            try:
                connection.sendall((response + "\n").encode(_ENCODING, _ERRORS))
            except OSError as exc:
                logger.error("[conn %d] error writing to client: %s", connection_counter, exc)
                return


class _TCPServer(socketserver.ThreadingTCPServer):
    allow_reuse_address = True
    daemon_threads = True

    def __init__(self, address: tuple[str, int], store: KVStore) -> None:
        self.store = store
        self._counter = itertools.count()
        super().__init__(address, _Handler)

    def next_counter(self) -> int:
        return next(self._counter)


class _Handler(socketserver.BaseRequestHandler):
    server: _TCPServer

    def handle(self) -> None:
        handle_connection(self.server.store, self.request, self.server.next_counter())


class Server:
    """Listens on ``host:port`` and serves each client on its own thread."""

    def __init__(self, host: str = DEFAULT_HOST, port: int | str = DEFAULT_PORT) -> None:
        self.host = host
        self.port = int(port)
        self.store = KVStore()
        self.ready = threading.Event()
        self._tcp: _TCPServer | None = None

    @property
    def address(self) -> tuple[str, int]:
        """The bound address; available once ``ready`` is set."""
        if self._tcp is None:
            raise RuntimeError("server is not running")
        host, port = self._tcp.server_address[:2]
        return host, port

    def run(self) -> None:
        """Bind and serve until :meth:`shutdown` is called."""
        logger.info("Starting server on %s:%d", self.host, self.port)
        with _TCPServer((self.host, self.port), self.store) as tcp:
            self._tcp = tcp
            self.ready.set()
            try:
                tcp.serve_forever()
            finally:
                self.ready.clear()

    def shutdown(self) -> None:
        """Stop a running :meth:`run` loop from another thread."""
        if self._tcp is not None:
            self._tcp.shutdown()


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Run the key/value server.")
    parser.add_argument("--host", default=DEFAULT_HOST)
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.ERROR)
    server = Server(args.host, args.port)
    try:
        server.run()
    except KeyboardInterrupt:
        pass
    return 0


if __name__ == "__main__":
    raise SystemExit(main())