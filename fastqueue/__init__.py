"""Networking core of a partitioned message queue broker: pools, sockets, heartbeats and a listener."""

__version__ = "1.0.0"