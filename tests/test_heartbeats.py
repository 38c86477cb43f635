import time

from fastqueue.heartbeats import HeartbeatTracker, SocketLocks


def test_unknown_socket_is_not_expired():
    tracker = HeartbeatTracker()
    assert tracker.expired(7) is False
    assert (7 in tracker) is False


def test_initialize_registers_fresh_socket():
    tracker = HeartbeatTracker()
    tracker.initialize(3)
    assert 3 in tracker
    assert tracker.expired(3) is False


def test_expire_idle_with_large_timeout_expires_nothing():
    tracker = HeartbeatTracker()
    tracker.initialize(1)
    tracker.initialize(2)
    assert tracker.expire_idle(60_000) == []
    assert tracker.expired(1) is False


def test_expire_idle_marks_idle_sockets():
    tracker = HeartbeatTracker()
    tracker.initialize(1)
    tracker.initialize(2)
    time.sleep(0.02)
    expired = tracker.expire_idle(0)
    assert sorted(expired) == [1, 2]
    assert tracker.expired(1) is True
    assert tracker.expired(2) is True


def test_already_expired_socket_not_reported_again():
    tracker = HeartbeatTracker()
    tracker.initialize(5)
    time.sleep(0.02)
    assert tracker.expire_idle(0) == [5]
    time.sleep(0.02)
    assert tracker.expire_idle(0) == []


def test_update_does_not_revive_expired_socket():
    tracker = HeartbeatTracker()
    tracker.initialize(9)
    time.sleep(0.02)
    tracker.expire_idle(0)
    tracker.update(9)
    assert tracker.expired(9) is True


def test_update_unknown_socket_does_not_register():
    tracker = HeartbeatTracker()
    tracker.update(4)
    assert (4 in tracker) is False


def test_remove_forgets_socket():
    tracker = HeartbeatTracker()
    tracker.initialize(8)
    time.sleep(0.02)
    tracker.expire_idle(0)
    tracker.remove(8)
    assert tracker.expired(8) is False
    assert (8 in tracker) is False


def test_socket_lock_is_exclusive():
    locks = SocketLocks()
    assert locks.add(10) is True
    assert locks.add(10) is False
    assert 10 in locks


def test_socket_lock_release_allows_relock():
    locks = SocketLocks()
    locks.add(11)
    locks.remove(11)
    assert (11 in locks) is False
    assert locks.add(11) is True


def test_removing_unlocked_socket_is_harmless():
    locks = SocketLocks()
    locks.remove(12)
    assert locks.add(12) is True