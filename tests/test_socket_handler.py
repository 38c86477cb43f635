import errno
import socket

import pytest

from fastqueue.connection_pool import ConnectionInfo
from fastqueue.settings import Settings
from fastqueue.socket_handler import SocketHandler


def make_handler(**overrides):
    values = dict(
        internal_ip="127.0.0.1",
        internal_port=0,
        external_ip="127.0.0.1",
        external_port=0,
    )
    values.update(overrides)
    return SocketHandler(Settings(**values))


@pytest.fixture
def closer():
    opened = []
    yield opened.append
    for sock in opened:
        sock.close()


def test_listen_connect_accept_round_trip(closer):
    handler = make_handler()
    listener = handler.get_listen_socket(True)
    closer(listener)
    port = listener.getsockname()[1]

    client = handler.get_connect_socket(ConnectionInfo("127.0.0.1", port))
    closer(client)
    server_side = handler.accept_connection(listener)
    closer(server_side)

    assert handler.respond_to_socket(client, b"hello") == 5
    assert handler.receive_socket_buffer(server_side, 5) == b"hello"

    handler.respond_to_socket(server_side, b"back")
    assert handler.receive_socket_buffer(client, 16) == b"back"


def test_receive_after_peer_close_returns_empty(closer):
    handler = make_handler()
    listener = handler.get_listen_socket(False)
    closer(listener)
    port = listener.getsockname()[1]
    client = handler.get_connect_socket(ConnectionInfo("127.0.0.1", port))
    closer(client)
    server_side = handler.accept_connection(listener)
    closer(server_side)

    assert handler.close_socket(client) is True
    assert handler.receive_socket_buffer(server_side, 8) == b""


def test_listen_uses_configured_ip(closer):
    handler = make_handler()
    listener = handler.get_listen_socket(False)
    closer(listener)
    assert listener.getsockname()[0] == "127.0.0.1"


def test_bind_all_interfaces(closer):
    handler = make_handler(internal_bind_all_interfaces=True)
    listener = handler.get_listen_socket(True)
    closer(listener)
    assert listener.getsockname()[0] == "0.0.0.0"


def test_listen_with_invalid_ip_raises():
    handler = make_handler(external_ip="not-an-ip")
    with pytest.raises(OSError):
        handler.get_listen_socket(False)


def test_connect_with_invalid_address_raises():
    handler = make_handler()
    with pytest.raises(OSError):
        handler.get_connect_socket(ConnectionInfo("999.1.1.1", 80))


def test_connect_to_closed_port_raises():
    probe = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    probe.bind(("127.0.0.1", 0))
    port = probe.getsockname()[1]
    probe.close()
    handler = make_handler()
    with pytest.raises(OSError):
        handler.get_connect_socket(ConnectionInfo("127.0.0.1", port))


def test_close_socket_closes():
    handler = make_handler()
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    assert handler.close_socket(sock) is True
    assert sock.fileno() == -1


@pytest.mark.parametrize(
    "code,expected",
    [(errno.ECONNRESET, True), (0, False), (1, False)],
)
def test_is_connection_broken(code, expected):
    assert make_handler().is_connection_broken(code) is expected