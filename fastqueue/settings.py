"""Node configuration shared by the server components."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class Settings:
    """Configuration values of one node.

    ``controller_nodes`` holds ``(node_id, connection_info)`` pairs describing
    the controller quorum.
    """

    # General properties
    node_id: int = 0

    max_message_size: int = 0
    segment_size: int = 0
    index_message_gap_size: int = 0
    max_cached_memory: int = 0
    flush_to_disk_after_ms: int = 0

    request_parallelism: int = 0
    request_polling_interval_ms: int = 0
    maximum_connections: int = 0
    idle_connection_check_ms: int = 0
    idle_connection_timeout_ms: int = 0
    request_timeout_ms: int = 0

    retention_ms: int = 0
    retention_worker_wait_ms: int = 0

    dead_data_node_check_ms: int = 0
    data_node_expire_ms: int = 0
    heartbeat_to_leader_ms: int = 0

    cluster_update_receive_ms: int = 0

    dead_consumer_check_ms: int = 0
    dead_consumer_expire_ms: int = 0

    fetch_from_leader_ms: int = 0
    lag_time_ms: int = 0
    lag_followers_check_ms: int = 0

    log_path: str = ""
    trace_log_path: str = ""

    # Node type properties
    is_controller_node: bool = False
    controller_nodes: list[tuple[int, Any]] = field(default_factory=list)

    # Internal communication properties
    internal_ip: str = ""
    internal_port: int = 0

    internal_ssl_enabled: bool = False
    internal_ssl_cert_path: str = ""
    internal_ssl_cert_key_path: str = ""
    internal_ssl_cert_ca_path: str = ""
    internal_ssl_cert_pass: str = ""
    internal_mutual_tls_enabled: bool = False
    internal_bind_all_interfaces: bool = False

    # External communication properties
    external_ip: str = ""
    external_port: int = 0

    external_ssl_enabled: bool = False
    external_ssl_cert_path: str = ""
    external_ssl_cert_key_path: str = ""
    external_ssl_cert_ca_path: str = ""
    external_ssl_cert_pass: str = ""
    external_mutual_tls_enabled: bool = False
    external_user_authentication_enabled: bool = False
    external_bind_all_interfaces: bool = False