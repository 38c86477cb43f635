"""Bookkeeping of connection activity and of sockets busy with a request."""

from __future__ import annotations

import threading
import time
from typing import Hashable


def _now_ms() -> int:
    return int(time.monotonic() * 1000)


class HeartbeatTracker:
    """Tracks when each accepted socket was last active.

    A socket idle for longer than the timeout is marked expired; an expired
    socket is no longer refreshed by :meth:`update`.
    """

    def __init__(self) -> None:
        self._heartbeats: dict[Hashable, tuple[bool, int]] = {}
        self._lock = threading.Lock()

    def __contains__(self, sock: object) -> bool:
        with self._lock:
            return sock in self._heartbeats

    def initialize(self, sock: Hashable) -> None:
        with self._lock:
            self._heartbeats[sock] = (False, _now_ms())

    def update(self, sock: Hashable) -> None:
        with self._lock:
            entry = self._heartbeats.get(sock)
            if entry is None or entry[0]:
                return
            self._heartbeats[sock] = (False, _now_ms())

    def expired(self, sock: Hashable) -> bool:
        with self._lock:
            entry = self._heartbeats.get(sock)
            return entry is not None and entry[0]

    def remove(self, sock: Hashable) -> None:
        with self._lock:
            self._heartbeats.pop(sock, None)

    def expire_idle(self, timeout_ms: int) -> list[Hashable]:
        """Mark sockets idle for more than ``timeout_ms`` as expired and return them."""
        now = _now_ms()
        with self._lock:
            newly_expired = [
                sock
                for sock, (is_expired, last_seen) in self._heartbeats.items()
                if not is_expired and now - last_seen > timeout_ms
            ]
            for sock in newly_expired:
                self._heartbeats[sock] = (True, 0)
            return newly_expired


class SocketLocks:
    """Set of sockets currently being served, so each is handled once at a time."""

    def __init__(self) -> None:
        self._locked: set[Hashable] = set()
        self._lock = threading.Lock()

    def __contains__(self, sock: object) -> bool:
        with self._lock:
            return sock in self._locked

    def add(self, sock: Hashable) -> bool:
        """Lock ``sock``; return False if it was locked already."""
        with self._lock:
            if sock in self._locked:
                return False
            self._locked.add(sock)
            return True

    def remove(self, sock: Hashable) -> None:
        with self._lock:
            self._locked.discard(sock)