# fastqueue

The networking layer of a partitioned message queue broker. It covers connection pools between nodes, TCP socket handling, liveness tracking of client sockets, and a listener that hands readable sockets to a request handler. It depends only on the standard library.

## Modules

- `fastqueue.settings` holds `Settings`, a dataclass with the node's configuration. This covers node id, ports and addresses, TLS paths and flags, connection limits and timeouts, and the controller quorum as `(node_id, ConnectionInfo)` pairs.
- `fastqueue.connection_pool` defines three types:
  - `ConnectionInfo`: a node's internal and external endpoints.
  - `Connection`: an open socket, its optional TLS wrapper, and when it was last used.
  - `ConnectionPool`: a fixed-size pool. `get_connection()` borrows the oldest idle connection, or returns `None` if none is idle. `add_connection(conn, returning_borrowed_connection)` returns a connection; returning `None` drops a broken one. `missing_count()` and `no_connections_left()` report the pool's state.
- `fastqueue.socket_handler.SocketHandler` works from `Settings`:
  - `get_listen_socket(internal_communication)` opens a listening socket. It binds `0.0.0.0` when "bind all interfaces" is set.
  - `get_connect_socket(info)` opens a connecting socket.
  - It also accepts, closes, sends and receives.
  - `is_connection_broken(code)` recognises connection-reset and broken-pipe error codes.
  - Failures raise `OSError`.
- `fastqueue.wire` builds and reads the little-endian, length-prefixed frames that nodes exchange:
  - `build_ping_request()` builds a ping frame.
  - `build_error_response(error_code, message)` builds an error reply.
  - `parse_error_response(body)` returns an `ErrorResponse`. It raises `ValueError` on a malformed body.
- `fastqueue.heartbeats` provides two classes:
  - `HeartbeatTracker` records when each socket was last active. `expire_idle(timeout_ms)` marks idle sockets expired and returns them. After that, `update()` no longer refreshes those sockets.
  - `SocketLocks` makes sure a socket is served by one worker at a time.
- `fastqueue.connections_manager.ConnectionsManager` keeps pools of connections to controller and data nodes:
  - Each pool holds 3 connections. Opening a connection is tried up to 3 times.
  - `send_request(sock, data, name)` sends a request and reads the size-prefixed reply. It returns a `RequestResult(data, size, connection_broken)`.
  - `send_request_to_pool(pool, retries, data, name)` does the same over a pooled connection. It retries while connections turn out broken.
  - `keep_pool_connections_to_maximum()`, `ping_pool_connections()` and `check_connections_heartbeats()` are worker loops. They refill pools, ping idle pooled connections, and close idle client sockets. They run until the `threading.Event` passed as `should_terminate` is set.
- `fastqueue.listener.SocketListener.run(internal_communication)` does the following:
  - It listens on the internal or external endpoint, optionally with TLS.
  - It accepts connections up to `Settings.maximum_connections` and drops clients whose peer closed.
  - For each readable socket it calls `request_handler(sock, internal_communication)` on a thread pool.
  - It returns once `should_terminate` is set.

Utilities:

- `fastqueue.lru_cache.LRUCache`: a thread-safe least-recently-used cache. Missing keys return the configured empty value. `put` returns the evicted value. `find_matching_keys(prefix, comp)` returns the keys for which `comp(prefix, key)` is true.
- `fastqueue.indexed_heap.IndexedHeap`: a heap whose entries can be inserted, updated, looked up and removed by key. The comparator decides the ordering.

Supporting definitions:

- `fastqueue.enums` holds the protocol and state enumerations.
- `fastqueue.constants` and `fastqueue.command_layout` give the byte sizes and offsets of stored records and cluster commands.
- `fastqueue.errors.CorruptionException` signals damaged stored data.

## What it does not do

This package gives no server to start and no command line. It does not parse or execute client or internal requests; the listener only calls the handler you supply. It holds no message storage, queue, partition or index management, and no cluster consensus. The record layouts in `constants` and `command_layout` are sizes and offsets only; nothing here reads or writes such records.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Example

```python
from fastqueue.lru_cache import LRUCache
from fastqueue.indexed_heap import IndexedHeap

cache = LRUCache(2, None)
cache.put("a", 1)
cache.put("b", 2)
cache.get("a")        # "a" becomes most recently used
cache.put("c", 3)     # evicts "b" and returns 2

heap = IndexedHeap(lambda x, y: x < y, -1, -1)
heap.insert(10, 5)
heap.insert(20, 3)
heap.extract_top_element()   # (3, 20)
```