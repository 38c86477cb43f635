"""Plain TCP socket operations used by the listeners and connection pools."""

from __future__ import annotations

import errno
import logging
import socket
import sys

from fastqueue.connection_pool import ConnectionInfo
from fastqueue.settings import Settings

logger = logging.getLogger(__name__)

_WSAECONNRESET = 10054


class SocketHandler:
    """Creates, connects and closes TCP sockets for a node."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    def get_listen_socket(self, internal_communication: bool) -> socket.socket:
        """Open a socket listening on the internal or external endpoint.

        Raises OSError if the address is invalid or cannot be bound.
        """
        settings = self.settings
        if internal_communication:
            ip, port = settings.internal_ip, settings.internal_port
            bind_all = settings.internal_bind_all_interfaces
        else:
            ip, port = settings.external_ip, settings.external_port
            bind_all = settings.external_bind_all_interfaces

        if bind_all:
            ip = "0.0.0.0"

        try:
            socket.inet_pton(socket.AF_INET, ip)
        except OSError:
            logger.error("inet_pton failed with error")
            raise

        listen_socket = self._new_socket()
        try:
            listen_socket.bind((ip, port))
        except OSError:
            logger.error("bind failed with error")
            self.close_socket(listen_socket)
            raise
        try:
            listen_socket.listen(socket.SOMAXCONN)
        except OSError:
            logger.error("listen failed with error")
            self.close_socket(listen_socket)
            raise

        kind = "internal" if internal_communication else "external"
        logger.info("Listening for %s communication on %s:%d", kind, ip, port)
        return listen_socket

    def get_connect_socket(self, info: ConnectionInfo) -> socket.socket:
        """Connect to the internal endpoint described by ``info``.

        Raises OSError if the address is invalid or the connection fails.
        """
        try:
            socket.inet_pton(socket.AF_INET, info.address)
        except OSError:
            logger.error("inet_pton failed with error")
            raise

        connect_socket = self._new_socket()
        try:
            connect_socket.connect((info.address, info.port))
        except OSError:
            logger.error("Failed to connect to socket")
            self.close_socket(connect_socket)
            raise
        return connect_socket

    def accept_connection(self, listen_socket: socket.socket) -> socket.socket:
        conn, _ = listen_socket.accept()
        return conn

    def close_socket(self, sock: socket.socket) -> bool:
        try:
            sock.close()
        except OSError:
            return False
        return True

    def respond_to_socket(self, sock: socket.socket, data: bytes) -> int:
        """Send ``data`` and return the number of bytes sent."""
        return sock.send(data)

    def receive_socket_buffer(self, sock: socket.socket, size: int) -> bytes:
        """Receive up to ``size`` bytes; empty bytes mean the peer closed."""
        return sock.recv(size)

    def is_connection_broken(self, response_code: int) -> bool:
        if response_code == errno.ECONNRESET:
            return True
        if sys.platform == "win32":
            return response_code == _WSAECONNRESET
        return response_code == errno.EPIPE

    def _new_socket(self) -> socket.socket:
        try:
            return socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        except OSError:
            logger.error("socket failed with error")
            raise