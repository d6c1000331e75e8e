"""Sustained load generator for the key/value server."""

from __future__ import annotations

import argparse
import logging
import math
import random
import socket
import threading
import time
from dataclasses import dataclass
from typing import Sequence

logger = logging.getLogger(__name__)

HOST = "localhost"
PORT = 6379
TEST_DURATION = 60.0
MAX_CONNECTIONS = 1300
GET_PERCENT = 80


class ConnectionHandler:
    """Issues GET/SET requests over one open connection."""

    def __init__(self, connection: socket.socket) -> None:
        self.connection = connection
        self.reader = connection.makefile("rb")

    def _read_line(self) -> str:
        line = self.reader.readline()
        if not line.endswith(b"\n"):
            raise ConnectionError("connection closed by server")
        return line.decode("utf-8", "replace")

    def perform_get(self, connection_number: int) -> int:
        """Read the shared counter; an empty reply counts as zero."""
        self.connection.sendall(b"GET count\n")
        text = self._read_line().strip()
        value = int(text) if text else 0
        logger.info("[conn %d] current counter value: %d", connection_number, value)
        return value

    def perform_set(self, connection_number: int) -> str:
        """Set the shared counter to ``connection_number``; return the reply."""
        self.connection.sendall(f"SET count {connection_number}\n".encode())
        reply = self._read_line().strip()
        logger.info("[conn %d] write successful, new count: %s", connection_number, reply)
        return reply


@dataclass(frozen=True)
class LoadTestResult:
    total_ops: int
    connections: int
    errors: int
    duration: float

    @property
    def error_rate(self) -> float:
        """Errors as a percentage of completed operations."""
        if self.total_ops == 0:
            return math.inf if self.errors else math.nan
        return self.errors / self.total_ops * 100

    @property
    def ops_per_second(self) -> float:
        return self.total_ops / self.duration

    def report(self) -> str:
        return "\n".join(
            [
                "==== Sustained load test result ====",
                f"Total Operations performed: {self.total_ops}",
                f"Total connections: {self.connections}",
                f"Total errors: {self.errors}",
                f"Error rate: {self.error_rate:.2f}%",
                f"Ops per second: {self.ops_per_second:.2f}",
            ]
        )


def sustained_load_test(
    host: str = HOST,
    port: int = PORT,
    duration: float = TEST_DURATION,
    max_connections: int = MAX_CONNECTIONS,
) -> LoadTestResult:
    """Run a mix of 80% GET and 20% SET from many connections for ``duration`` seconds."""
    lock = threading.Lock()
    counts = {"ops": 0, "errors": 0}
    start = time.monotonic()

    def bump(name: str) -> None:
        with lock:
            counts[name] += 1

    def worker(connection_number: int) -> None:
        try:
            connection = socket.create_connection((host, port), timeout=duration)
        except OSError as exc:
            logger.error("[conn %d] error connecting to server: %s", connection_number, exc)
            bump("errors")
            return
        with connection:
            handler = ConnectionHandler(connection)
            while time.monotonic() - start < duration:
                try:
                    if random.randrange(100) < GET_PERCENT:
                        handler.perform_get(connection_number)
                    else:
                        handler.perform_set(connection_number)
                except (OSError, ValueError) as exc:
                    logger.error("[conn %d] operation failed: %s", connection_number, exc)
                    bump("errors")
                    return
                bump("ops")
                time.sleep(random.randrange(100) / 1000)

    threads = [
        threading.Thread(target=worker, args=(n,), daemon=True)
        for n in range(max_connections)
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    return LoadTestResult(
        total_ops=counts["ops"],
        connections=max_connections,
        errors=counts["errors"],
        duration=duration,
    )


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Sustained load test for the server.")
    parser.add_argument("--host", default=HOST)
    parser.add_argument("--port", type=int, default=PORT)
    parser.add_argument("--duration", type=float, default=TEST_DURATION)
    parser.add_argument("--connections", type=int, default=MAX_CONNECTIONS)
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.ERROR)
    result = sustained_load_test(args.host, args.port, args.duration, args.connections)
    print(result.report())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())