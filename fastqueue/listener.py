"""Accepts connections on one endpoint and hands readable sockets to workers."""

from __future__ import annotations

import logging
import selectors
import socket
import ssl
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Optional

from fastqueue.connections_manager import ConnectionsManager
from fastqueue.settings import Settings
from fastqueue.socket_handler import SocketHandler

logger = logging.getLogger(__name__)

RequestHandler = Callable[[Any, bool], None]


class SocketListener:
    """Polls a listening socket and its clients until told to terminate.

    ``request_handler(sock, internal_communication)`` is run on a worker
    thread whenever a client socket has data; a socket is served by at most
    one worker at a time.
    """

    def __init__(
        self,
        connections_manager: ConnectionsManager,
        socket_handler: SocketHandler,
        settings: Settings,
        request_handler: RequestHandler,
        should_terminate: threading.Event,
        max_workers: Optional[int] = None,
    ) -> None:
        self.cm = connections_manager
        self.socket_handler = socket_handler
        self.settings = settings
        self.request_handler = request_handler
        self.should_terminate = should_terminate
        self.max_workers = max_workers or max(1, settings.request_parallelism)
        self.total_connections = 0

    def run(self, internal_communication: bool) -> None:
        ssl_enabled = (
            self.settings.internal_ssl_enabled if internal_communication else self.settings.external_ssl_enabled
        )
        context: Optional[ssl.SSLContext] = None
        if ssl_enabled:
            logger.info("Enabling SSL...")
            context = self._create_ssl_context(internal_communication)
            if context is None:
                logger.error("Unable to create SSL context")
                self.should_terminate.set()
                return
            logger.info("SSL enabled")

        try:
            listen_socket = self.socket_handler.get_listen_socket(internal_communication)
        except OSError:
            self.should_terminate.set()
            return

        kind = "internal" if internal_communication else "external"
        logger.info("Server started and listening for %s connections", kind)

        selector = selectors.DefaultSelector()
        selector.register(listen_socket, selectors.EVENT_READ)
        clients: list[Any] = []
        timeout = max(self.settings.request_polling_interval_ms, 1) / 1000

        with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
            try:
                while not self.should_terminate.is_set():
                    for sock in [c for c in clients if c.fileno() == -1]:
                        self._drop_client(selector, clients, sock)

                    for key, _ in selector.select(timeout):
                        sock = key.fileobj
                        if sock is listen_socket:
                            self._accept(selector, clients, listen_socket, context)
                        elif self._peer_closed(sock):
                            self._drop_client(selector, clients, sock)
                        else:
                            self._dispatch(pool, sock, internal_communication)
                    self.should_terminate.wait(0.15)
            except Exception as exc:
                self.should_terminate.set()
                logger.error(
                    "Something went wrong while listening to socket connections. Reason: %s. Stopping server...",
                    exc,
                )
            finally:
                for sock in clients:
                    if not self.cm.socket_expired(sock):
                        self.socket_handler.close_socket(sock)
                    self.cm.remove_socket_connection_heartbeat(sock)
                self.socket_handler.close_socket(listen_socket)
                selector.close()

    def _accept(self, selector: selectors.BaseSelector, clients: list[Any], listen_socket: socket.socket,
                context: Optional[ssl.SSLContext]) -> None:
        try:
            conn = self.socket_handler.accept_connection(listen_socket)
        except OSError:
            logger.error("Failed to accept new connection")
            return

        self.total_connections += 1
        if self.total_connections > self.settings.maximum_connections:
            self.total_connections -= 1
            self.socket_handler.close_socket(conn)
            logger.error("Could not accept any more connections.")
            return

        if context is not None:
            try:
                conn = context.wrap_socket(conn, server_side=True)
            except (OSError, ssl.SSLError):
                self.total_connections -= 1
                self.socket_handler.close_socket(conn)
                return

        selector.register(conn, selectors.EVENT_READ)
        clients.append(conn)
        self.cm.initialize_connection_heartbeat(conn)
        self.cm.remove_socket_lock(conn)
        logger.info("New connection accepted")

    def _peer_closed(self, sock: Any) -> bool:
        if self.cm.socket_expired(sock) or sock.fileno() == -1:
            return True
        if sock in self._busy_sockets():
            return False
        try:
            return sock.recv(1, socket.MSG_PEEK) == b""
        except (BlockingIOError, ssl.SSLWantReadError):
            return False
        except (OSError, ValueError):
            return True

    def _busy_sockets(self) -> set:
        return set()

    def _dispatch(self, pool: ThreadPoolExecutor, sock: Any, internal_communication: bool) -> None:
        self.cm.update_socket_heartbeat(sock)
        if not self.cm.add_socket_lock(sock):
            return

        def serve() -> None:
            try:
                self.request_handler(sock, internal_communication)
            except Exception as exc:
                logger.error("%s", exc)
            finally:
                self.cm.remove_socket_lock(sock)

        pool.submit(serve)

    def _drop_client(self, selector: selectors.BaseSelector, clients: list[Any], sock: Any) -> None:
        expired = self.cm.socket_expired(sock)
        self.cm.remove_socket_lock(sock)
        try:
            selector.unregister(sock)
        except (KeyError, ValueError):
            pass
        if not expired and not self.socket_handler.close_socket(sock):
            logger.error("Socket closure failed with error")
        self.cm.remove_socket_connection_heartbeat(sock)
        if sock in clients:
            clients.remove(sock)
            self.total_connections -= 1
        logger.error("Connection from socket removed")

    def _create_ssl_context(self, internal_communication: bool) -> Optional[ssl.SSLContext]:
        s = self.settings
        if internal_communication:
            cert, key, ca = s.internal_ssl_cert_path, s.internal_ssl_cert_key_path, s.internal_ssl_cert_ca_path
            cert_pass, mutual = s.internal_ssl_cert_pass, s.internal_mutual_tls_enabled
        else:
            cert, key, ca = s.external_ssl_cert_path, s.external_ssl_cert_key_path, s.external_ssl_cert_ca_path
            cert_pass, mutual = s.external_ssl_cert_pass, s.external_mutual_tls_enabled
        try:
            context = ssl.SSLContext(ssl.PROTOCOL_TLS_SERVER)
            context.load_cert_chain(cert, key or None, cert_pass or None)
            if ca:
                context.load_verify_locations(ca)
            if mutual:
                context.verify_mode = ssl.CERT_REQUIRED
            return context
        except (OSError, ssl.SSLError):
            return None