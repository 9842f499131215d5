"""Registry of outgoing replication streams."""

from __future__ import annotations

import contextlib
import threading
from typing import Protocol

from .messages import SetRequest


class SetStream(Protocol):
    def send(self, message: SetRequest) -> None: ...


class ConnectionManager:
    """Holds streams by id and fans messages out to all of them."""

    def __init__(self) -> None:
        self._connections: dict[str, SetStream] = {}
        self._lock = threading.RLock()

    def add(self, conn_id: str, stream: SetStream) -> None:
        with self._lock:
            self._connections[conn_id] = stream

    def remove(self, conn_id: str) -> None:
        with self._lock:
            self._connections.pop(conn_id, None)

    def get(self, conn_id: str) -> SetStream | None:
        with self._lock:
            return self._connections.get(conn_id)

    def broadcast(self, message: SetRequest) -> None:
        """Send to every stream; a failing stream does not stop the others."""
        with self._lock:
            streams = list(self._connections.values())
        for stream in streams:
            with contextlib.suppress(Exception):
                stream.send(message)