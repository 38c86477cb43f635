import socket

import pytest

from fastqueue.connection_pool import Connection, ConnectionInfo, ConnectionPool


@pytest.fixture
def sockets():
    created = []

    def make():
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        created.append(sock)
        return sock

    yield make
    for sock in created:
        sock.close()


def make_pool(total=3):
    return ConnectionPool(total, ConnectionInfo("127.0.0.1", 9000, "127.0.0.1", 9001))


def test_new_pool_is_missing_every_connection():
    pool = make_pool(3)
    assert pool.missing_count() == 3
    assert pool.no_connections_left() is True
    assert pool.get_connection() is None


def test_connection_info_is_kept():
    pool = make_pool()
    assert pool.connection_info.address == "127.0.0.1"
    assert pool.connection_info.port == 9000
    assert pool.total_connections == 3


def test_adding_connections_reduces_missing_count(sockets):
    pool = make_pool(3)
    pool.add_connection(Connection(sockets()))
    pool.add_connection(Connection(sockets()))
    assert pool.missing_count() == 1
    assert pool.no_connections_left() is False


def test_borrowed_connection_still_counts(sockets):
    pool = make_pool(2)
    pool.add_connection(Connection(sockets()))
    conn = pool.get_connection()
    assert isinstance(conn, Connection)
    assert pool.missing_count() == 1
    assert pool.no_connections_left() is False
    pool.add_connection(conn, True)
    assert pool.missing_count() == 1
    assert pool.get_connection() is conn


def test_returning_none_frees_slot(sockets):
    pool = make_pool(2)
    pool.add_connection(Connection(sockets()))
    pool.get_connection()
    pool.add_connection(None, True)
    assert pool.missing_count() == 2
    assert pool.no_connections_left() is True


def test_connections_are_handed_out_in_order(sockets):
    pool = make_pool(3)
    first = Connection(sockets(), last_used_timestamp=1)
    second = Connection(sockets(), last_used_timestamp=2)
    pool.add_connection(first)
    pool.add_connection(second)
    assert pool.get_connection() is first
    assert pool.get_connection() is second
    assert pool.get_connection() is None


def test_connection_defaults(sockets):
    conn = Connection(sockets())
    assert conn.ssl is None
    assert conn.last_used_timestamp == 0