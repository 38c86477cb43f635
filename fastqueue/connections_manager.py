"""Connections between cluster nodes: pools, request exchange and liveness."""

from __future__ import annotations

import logging
import socket
import ssl
import struct
import threading
import time
from typing import Any, NamedTuple, Optional

from fastqueue.connection_pool import Connection, ConnectionInfo, ConnectionPool
from fastqueue.enums import ErrorCode
from fastqueue.heartbeats import HeartbeatTracker, SocketLocks
from fastqueue.settings import Settings
from fastqueue.socket_handler import SocketHandler
from fastqueue.wire import build_error_response, build_ping_request, parse_error_response

logger = logging.getLogger(__name__)

_UINT = struct.Struct("<I")
_ENUM = struct.Struct("<i")

PING_REQUEST_NAME = "ConnectionPing"
POOL_SIZE = 3


def _now_ms() -> int:
    return int(time.monotonic() * 1000)


class RequestResult(NamedTuple):
    """Outcome of an internal request.

    ``data`` is the response body (without the size prefix) or None;
    ``size`` is its length, or -1 on failure; ``connection_broken`` tells
    whether the connection used must be dropped.
    """

    data: Optional[bytes]
    size: int
    connection_broken: bool


_FAILED = RequestResult(None, -1, False)
_BROKEN = RequestResult(None, -1, True)


class ConnectionsManager:
    """Keeps pools of connections to controller and data nodes alive."""

    def __init__(
        self,
        socket_handler: SocketHandler,
        settings: Settings,
        should_terminate: threading.Event,
        ssl_context: Optional[ssl.SSLContext] = None,
    ) -> None:
        self.socket_handler = socket_handler
        self.settings = settings
        self.should_terminate = should_terminate
        self.ssl_context = ssl_context if settings.internal_ssl_enabled else None
        self.failed_to_create_ssl_context = settings.internal_ssl_enabled and ssl_context is None
        self.connect_retry_wait_ms = 3000

        self._controller_pools: dict[int, ConnectionPool] = {}
        self._data_pools: dict[int, ConnectionPool] = {}
        self._controllers_lock = threading.RLock()
        self._data_lock = threading.RLock()

        self._heartbeats = HeartbeatTracker()
        self._socket_locks = SocketLocks()
        self._ping_request = build_ping_request()

    # -- raw exchange -------------------------------------------------

    def receive_socket_buffer(self, sock: Any, size: int) -> Optional[bytes]:
        """Read exactly ``size`` bytes; on failure close the socket and return None."""
        chunks = bytearray()
        try:
            while len(chunks) < size:
                chunk = self.socket_handler.receive_socket_buffer(sock, size - len(chunks))
                if not chunk:
                    break
                chunks += chunk
        except OSError:
            pass
        if len(chunks) < size or size <= 0 and not chunks and size != 0:
            logger.error("Could not receive socket's data")
            self.close_socket_connection(sock)
            return None
        self.update_socket_heartbeat(sock)
        return bytes(chunks)

    def respond_to_socket(self, sock: Any, data: bytes) -> bool:
        """Send all of ``data``; on failure close the socket and return False."""
        try:
            sock.sendall(data)
        except OSError as exc:
            logger.error("Could not respond back to the socket. %s", exc)
            self.close_socket_connection(sock)
            return False
        self.update_socket_heartbeat(sock)
        return True

    def respond_to_socket_with_error(self, sock: Any, error_code: ErrorCode, error_message: str) -> bool:
        return self.respond_to_socket(sock, build_error_response(error_code, error_message))

    def send_request(self, sock: Any, data: bytes, request_type_name: str) -> RequestResult:
        """Send an internal request and read its response."""
        logger.info("Sending internal request of type %s", request_type_name)

        if not self.respond_to_socket(sock, data):
            return _BROKEN

        header = self.receive_socket_buffer(sock, _UINT.size)
        if header is None:
            return _BROKEN
        (total,) = _UINT.unpack(header)
        body_size = total - _UINT.size
        if body_size <= 0:
            return _BROKEN

        body = self.receive_socket_buffer(sock, body_size)
        if body is None:
            return _BROKEN

        if request_type_name != PING_REQUEST_NAME:
            (code,) = _ENUM.unpack_from(body, 0) if len(body) >= _ENUM.size else (-1,)
            if code != ErrorCode.NONE:
                try:
                    error = parse_error_response(body)
                    logger.error("Internal request failed. %s", error.error_message)
                except ValueError as exc:
                    logger.error("Internal request failed. %s", exc)
                return _FAILED

        return RequestResult(body, body_size, False)

    def send_request_to_pool(
        self, pool: ConnectionPool, retries: int, data: bytes, request_type_name: str
    ) -> RequestResult:
        """Send a request over a pooled connection, retrying on broken ones."""
        while retries > 0:
            connection = pool.get_connection()
            if connection is None:
                logger.error("No open connections found in pool")
                return _FAILED

            result = self.send_request(connection.socket, data, request_type_name)
            connection.last_used_timestamp = _now_ms()
            pool.add_connection(None if result.connection_broken else connection, True)

            if not result.connection_broken:
                return result
            retries -= 1
        return _FAILED

    # -- pools --------------------------------------------------------

    def initialize_controller_nodes_connections(self) -> None:
        if self.failed_to_create_ssl_context:
            self.should_terminate.set()
            return

        failed = succeeded = 0
        for node_id, info in self.settings.controller_nodes:
            if self.settings.is_controller_node and node_id == self.settings.node_id:
                succeeded += 1
                continue
            if self.initialize_controller_node_connection_pool(node_id, info):
                succeeded += 1
            else:
                failed += 1

        if failed and succeeded:
            logger.info("Partial connections with controller quorum nodes established")
        elif not failed:
            logger.info("All connections with controller quorum nodes established")
        else:
            logger.info("No connection could be established with any controller quorum node")

    def initialize_data_node_connection_pool(self, node_id: int, info: ConnectionInfo) -> bool:
        return self._setup_connection_pool(node_id, info, self._data_lock, self._data_pools)

    def initialize_controller_node_connection_pool(self, node_id: int, info: ConnectionInfo) -> bool:
        return self._setup_connection_pool(node_id, info, self._controllers_lock, self._controller_pools)

    def _setup_connection_pool(
        self, node_id: int, info: ConnectionInfo, lock: threading.RLock, pools: dict[int, ConnectionPool]
    ) -> bool:
        pool = ConnectionPool(POOL_SIZE, info)
        connected = self._create_node_connection_pool(node_id, pool)
        with lock:
            pools[node_id] = pool
        return connected

    def _create_node_connection_pool(self, node_id: int, pool: ConnectionPool) -> bool:
        for attempt in range(3):
            if self.add_connection_to_pool(pool):
                logger.info("Initialized connection pool successfully to node %d", node_id)
                return True
            if attempt < 2:
                time.sleep(self.connect_retry_wait_ms / 1000)
        logger.error(
            "Could not initialize connection pool to node %d on address %s and port %d",
            node_id,
            pool.connection_info.address,
            pool.connection_info.port,
        )
        return False

    def add_connection_to_pool(self, pool: ConnectionPool) -> bool:
        """Open one more connection for ``pool`` if it is not full."""
        if pool.missing_count() == 0:
            return True
        try:
            sock = self.socket_handler.get_connect_socket(pool.connection_info)
        except OSError:
            return False

        wrapped = None
        if self.settings.internal_ssl_enabled:
            if self.ssl_context is None:
                self.socket_handler.close_socket(sock)
                return False
            try:
                wrapped = self.ssl_context.wrap_socket(sock, server_hostname=pool.connection_info.address)
            except (OSError, ssl.SSLError):
                self.socket_handler.close_socket(sock)
                return False
            sock = wrapped

        pool.add_connection(Connection(socket=sock, ssl=wrapped, last_used_timestamp=_now_ms()))
        return True

    def close_connection_pool(self, pool: ConnectionPool) -> None:
        """Close every connection of ``pool``, waiting for borrowed ones."""
        while not pool.no_connections_left():
            connection = pool.get_connection()
            if connection is None:
                time.sleep(0.01)
                continue
            self.socket_handler.close_socket(connection.socket)
            pool.add_connection(None, True)

    def terminate_connections(self) -> None:
        logger.info("Terminating connections...")
        for lock, pools in ((self._controllers_lock, self._controller_pools), (self._data_lock, self._data_pools)):
            with lock:
                for pool in pools.values():
                    connection = pool.get_connection()
                    while connection is not None:
                        if not self.socket_handler.close_socket(connection.socket):
                            logger.error("Error occured while trying to close connection")
                        connection = pool.get_connection()
                pools.clear()
        logger.info("Connections terminated")

    def remove_data_node_connections(self, node_id: int) -> None:
        with self._data_lock:
            pool = self._data_pools.pop(node_id, None)
            if pool is not None:
                self.close_connection_pool(pool)

    def remove_controller_node_connections(self, node_id: int) -> None:
        with self._controllers_lock:
            pool = self._controller_pools.pop(node_id, None)
            if pool is not None:
                self.close_connection_pool(pool)

    def get_controller_node_connection(self, node_id: int) -> Optional[ConnectionPool]:
        with self._controllers_lock:
            return self._controller_pools.get(node_id)

    def get_node_connection_pool(self, node_id: int) -> Optional[ConnectionPool]:
        with self._controllers_lock:
            if node_id in self._controller_pools:
                return self._controller_pools[node_id]
        with self._data_lock:
            return self._data_pools.get(node_id)

    # -- background workers -------------------------------------------

    def keep_pool_connections_to_maximum(self) -> None:
        while not self.should_terminate.is_set():
            try:
                self._add_connections_to_pools(self._controllers_lock, self._controller_pools)
                self._add_connections_to_pools(self._data_lock, self._data_pools)
            except Exception as exc:  # keep the worker alive
                logger.error("Error occured while trying to keep pool connections to maximum. Reason: %s", exc)
            self.should_terminate.wait(5)

    def ping_pool_connections(self) -> None:
        while not self.should_terminate.is_set():
            try:
                self._ping_connection_pools(self._controllers_lock, self._controller_pools)
                self._ping_connection_pools(self._data_lock, self._data_pools)
            except Exception as exc:  # keep the worker alive
                logger.error("Error occured while trying to ping pool connections. Reason: %s", exc)
            self.should_terminate.wait(15)

    def check_connections_heartbeats(self) -> None:
        while not self.should_terminate.is_set():
            try:
                self._expire_idle_connections()
            except Exception as exc:  # keep the worker alive
                logger.error("Error occured while checking for dead connections. Reason: %s", exc)
            self.should_terminate.wait(self.settings.idle_connection_check_ms / 1000)

    def _expire_idle_connections(self) -> list[Any]:
        expired = self._heartbeats.expire_idle(self.settings.idle_connection_timeout_ms)
        for sock in expired:
            self.socket_handler.close_socket(sock)
            logger.info("Socket %s expired", sock)
        return expired

    def _add_connections_to_pools(self, lock: threading.RLock, pools: dict[int, ConnectionPool]) -> None:
        with lock:
            for node_id, pool in pools.items():
                if pool.missing_count() == 0:
                    continue
                retries, added = 3, 0
                while retries > 0:
                    if self.add_connection_to_pool(pool):
                        added += 1
                    else:
                        retries -= 1
                    if pool.missing_count() == 0:
                        break
                if retries == 0 and added == 0:
                    logger.error("Failed to increase connection pool connections to node %d", node_id)
                elif added:
                    logger.info("%d connections added to node %d connection pool", added, node_id)

    def _ping_connection_pools(self, lock: threading.RLock, pools: dict[int, ConnectionPool]) -> None:
        half_timeout = self.settings.idle_connection_timeout_ms // 2
        with lock:
            for pool in pools.values():
                for _ in range(pool.total_connections):
                    connection = pool.get_connection()
                    if connection is None:
                        break
                    if _now_ms() - connection.last_used_timestamp <= half_timeout:
                        pool.add_connection(connection, True)
                        continue

                    result = self.send_request(connection.socket, self._ping_request, PING_REQUEST_NAME)
                    success = bool(not result.connection_broken and result.size > 0 and result.data[0])
                    if success:
                        connection.last_used_timestamp = _now_ms()
                        logger.info("Pinged connection pool socket %s", connection.socket)
                    pool.add_connection(connection if success else None, True)

    # -- accepted sockets ---------------------------------------------

    def add_socket_lock(self, sock: Any) -> bool:
        return self._socket_locks.add(sock)

    def remove_socket_lock(self, sock: Any) -> None:
        self._socket_locks.remove(sock)

    def initialize_connection_heartbeat(self, sock: Any) -> None:
        self._heartbeats.initialize(sock)

    def update_socket_heartbeat(self, sock: Any) -> None:
        self._heartbeats.update(sock)

    def socket_expired(self, sock: Any) -> bool:
        return self._heartbeats.expired(sock)

    def remove_socket_connection_heartbeat(self, sock: Any) -> None:
        self._heartbeats.remove(sock)

    def close_socket_connection(self, sock: Any) -> None:
        self.socket_handler.close_socket(sock)