"""Connection records and a bounded pool of reusable connections."""

from __future__ import annotations

import socket
import threading
from collections import deque
from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class ConnectionInfo:
    """Internal and external endpoints of a node."""

    address: str
    port: int
    external_address: str = ""
    external_port: int = 0


@dataclass
class Connection:
    """An open connection, optionally wrapped in TLS."""

    socket: socket.socket
    ssl: Any = None
    last_used_timestamp: int = 0


class ConnectionPool:
    """A fixed-size pool of connections to one node.

    Connections taken with :meth:`get_connection` count as borrowed until
    they are handed back with ``returning_borrowed_connection=True``; handing
    back ``None`` drops a broken connection and frees its slot.
    """

    def __init__(self, total_connections: int, connection_info: ConnectionInfo) -> None:
        self.total_connections = total_connections
        self.connection_info = connection_info
        self._borrowed = 0
        self._connections: deque[Connection] = deque()
        self._lock = threading.Lock()

    def add_connection(
        self,
        connection: Optional[Connection],
        returning_borrowed_connection: bool = False,
    ) -> None:
        with self._lock:
            if returning_borrowed_connection and self._borrowed > 0:
                self._borrowed -= 1
            if connection is not None:
                self._connections.append(connection)

    def get_connection(self) -> Optional[Connection]:
        """Borrow the oldest idle connection, or return None if none is idle."""
        with self._lock:
            if not self._connections:
                return None
            self._borrowed += 1
            return self._connections.popleft()

    def missing_count(self) -> int:
        """Number of connections still needed to fill the pool."""
        with self._lock:
            return max(0, self.total_connections - len(self._connections) - self._borrowed)

    def no_connections_left(self) -> bool:
        with self._lock:
            return not self._connections and self._borrowed == 0