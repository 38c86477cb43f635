import socket
import struct
import threading

import pytest

from fastqueue.connection_pool import Connection, ConnectionInfo, ConnectionPool
from fastqueue.connections_manager import ConnectionsManager
from fastqueue.enums import ErrorCode
from fastqueue.settings import Settings
from fastqueue.socket_handler import SocketHandler
from fastqueue.wire import build_error_response, build_ping_request


def make_manager(**overrides):
    settings = Settings(**overrides)
    manager = ConnectionsManager(SocketHandler(settings), settings, threading.Event())
    manager.connect_retry_wait_ms = 0
    return manager


@pytest.fixture
def pair():
    a, b = socket.socketpair()
    yield a, b
    a.close()
    b.close()


def test_respond_with_error_sends_wire_frame(pair):
    a, b = pair
    manager = make_manager()
    assert manager.respond_to_socket_with_error(a, ErrorCode.UNAUTHORIZED, "no")
    expected = build_error_response(ErrorCode.UNAUTHORIZED, "no")
    assert b.recv(1024) == expected


def test_send_request_returns_body(pair):
    a, b = pair
    body = struct.pack("<i", ErrorCode.NONE) + b"xyz"
    b.sendall(struct.pack("<I", len(body) + 4) + body)
    result = make_manager().send_request(a, b"req", "Test")
    assert result.data == body
    assert result.size == len(body)
    assert result.connection_broken is False
    assert b.recv(10) == b"req"


def test_send_request_error_reply(pair):
    a, b = pair
    b.sendall(build_error_response(ErrorCode.QUEUE_DOES_NOT_EXIST, "missing"))
    result = make_manager().send_request(a, b"req", "Test")
    assert (result.data, result.size, result.connection_broken) == (None, -1, False)


def test_send_request_broken_peer(pair):
    a, b = pair
    b.close()
    result = make_manager().send_request(a, b"req", "Test")
    assert result.connection_broken is True


def test_send_request_to_empty_pool():
    pool = ConnectionPool(3, ConnectionInfo("127.0.0.1", 1))
    result = make_manager().send_request_to_pool(pool, 2, b"x", "Test")
    assert result.size == -1 and result.data is None


def test_socket_locks():
    manager = make_manager()
    assert manager.add_socket_lock(7) is True
    assert manager.add_socket_lock(7) is False
    manager.remove_socket_lock(7)
    assert manager.add_socket_lock(7) is True


def test_heartbeat_expiry(pair):
    a, _ = pair
    manager = make_manager(idle_connection_timeout_ms=-1)
    manager.initialize_connection_heartbeat(a)
    assert manager.socket_expired(a) is False
    assert manager._expire_idle_connections() == [a]
    assert manager.socket_expired(a) is True
    assert a.fileno() == -1
    manager.remove_socket_connection_heartbeat(a)
    assert manager.socket_expired(a) is False


def test_pool_init_and_lookup():
    server = socket.socket()
    server.bind(("127.0.0.1", 0))
    server.listen(8)
    port = server.getsockname()[1]
    try:
        manager = make_manager()
        assert manager.initialize_data_node_connection_pool(4, ConnectionInfo("127.0.0.1", port))
        pool = manager.get_node_connection_pool(4)
        assert pool.missing_count() == 2
        assert manager.get_controller_node_connection(4) is None
        manager.remove_data_node_connections(4)
        assert manager.get_node_connection_pool(4) is None
    finally:
        server.close()


def test_pool_init_fails_on_closed_port():
    probe = socket.socket()
    probe.bind(("127.0.0.1", 0))
    port = probe.getsockname()[1]
    probe.close()
    manager = make_manager()
    assert manager.initialize_controller_node_connection_pool(2, ConnectionInfo("127.0.0.1", port)) is False
    assert manager.get_controller_node_connection(2).missing_count() == 3


def test_ping_refreshes_idle_connection(pair):
    a, b = pair
    manager = make_manager(idle_connection_timeout_ms=0)
    pool = ConnectionPool(1, ConnectionInfo("127.0.0.1", 1))
    pool.add_connection(Connection(socket=a, last_used_timestamp=0))
    b.sendall(struct.pack("<I", 5) + b"\x01")
    manager._ping_connection_pools(threading.RLock(), {1: pool})
    assert b.recv(64) == build_ping_request()
    conn = pool.get_connection()
    assert conn.socket is a and conn.last_used_timestamp > 0


def test_close_connection_pool(pair):
    a, _ = pair
    pool = ConnectionPool(1, ConnectionInfo("127.0.0.1", 1))
    pool.add_connection(Connection(socket=a))
    make_manager().close_connection_pool(pool)
    assert pool.no_connections_left()
    assert a.fileno() == -1


def test_missing_ssl_context_terminates():
    manager = make_manager(internal_ssl_enabled=True)
    manager.initialize_controller_nodes_connections()
    assert manager.should_terminate.is_set()