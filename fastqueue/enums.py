"""Enumerations used on the wire, on disk and in cluster state."""

from enum import IntEnum


class RequestType(IntEnum):
    NONE = 0
    CREATE_QUEUE = 1
    DELETE_QUEUE = 2
    PRODUCE = 3
    CONSUME = 4
    ACK = 5
    GET_CONTROLLERS_CONNECTION_INFO = 6
    GET_CONTROLLER_LEADER_ID = 7
    GET_QUEUE_PARTITIONS_INFO = 8
    REGISTER_CONSUMER = 9
    GET_CONSUMER_ASSIGNED_PARTITIONS = 10

    # Internal
    DATA_NODE_HEARTBEAT = 11
    GET_CLUSTER_METADATA_UPDATES = 12
    EXPIRE_CONSUMERS = 13
    ADD_LAGGING_FOLLOWER = 14
    REMOVE_LAGGING_FOLLOWER = 15
    FETCH_MESSAGES = 16

    # Raft
    REQUEST_VOTE = 17
    APPEND_ENTRIES = 18


class ErrorCode(IntEnum):
    NONE = 0
    INTERNAL_SERVER_ERROR = 1
    INCORRECT_REQUEST_BODY = 2
    INCORRECT_PARTITION_NUMBER = 3
    QUEUE_DOES_NOT_EXIST = 4
    PARTITION_DOES_NOT_EXIST = 5
    INCORRECT_ACTION = 6
    INCORRECT_LEADER = 7
    INCORRECT_MESSAGE_COUNT = 8
    TOO_MANY_BYTES_RECEIVED = 9
    UNAUTHORIZED = 10
    TOO_FEW_AVAILABLE_NODES = 11
    UNASSIGNED_LEADERSHIP = 12
    CONSUMER_NOT_FOUND = 13
    INCORRECT_CONSUMER_GROUP_ID = 14
    QUEUE_ALREADY_EXISTS = 15
    CONSUMER_UNREGISTERED = 16


class RequestValueKey(IntEnum):
    # External communication
    USERNAME = 1
    PASSWORD = 2
    REQUEST_TYPE = 3
    QUEUE_NAME = 4  # follows the queue name length
    PARTITIONS = 5
    REPLICATION_FACTOR = 6
    PARTITION = 7
    MESSAGES = 8
    CONSUMER_GROUP_ID = 9
    CONSUME_FROM = 10
    CONSUMER_ID = 11
    MESSAGE_OFFSET = 12
    READ_SINGLE_OFFSET_ONLY = 13

    # Internal communication
    NODE_ID = 14
    NODE_ADDRESS = 15
    NODE_PORT = 16
    NODE_EXTERNAL_ADDRESS = 17
    NODE_EXTERNAL_PORT = 18
    COMMAND_ID = 19
    REGISTER_NODE = 20
    EXPIRED_CONSUMERS = 21

    # Raft
    LEADER_ID = 22
    CANDIDATE_ID = 23
    TERM = 24
    LAST_LOG_INDEX = 25
    LAST_LOG_TERM = 26
    PREV_LOG_INDEX = 27
    PREV_LOG_TERM = 28
    LEADER_COMMIT = 29
    COMMANDS = 30
    INDEX_MATCHED = 31
    IS_FIRST_REQUEST = 32


class ResponseValueKey(IntEnum):
    ERROR_MESSAGE = 0

    OK = 1
    LEADER_ID = 2
    CONTROLLER_CONNECTION_INFO = 3
    TOTAL_PARTITIONS = 4
    PARTITION_NODE_CONNECTION_INFO = 5
    CONSUMER_ID = 6
    ASSIGNED_PARTITIONS = 7
    MESSAGES = 8
    QUEUE_CREATED = 9
    QUEUE_DELETED = 10

    # Internal only
    TERM = 11
    SUCCESS = 12
    VOTE_GRANTED = 13
    LOG_MATCHED = 14
    LAST_MESSAGE_OFFSET = 15
    COMMITED_OFFSET = 16
    PREV_MESSAGE_OFFSET = 17
    PREV_MESSAGE_LEADER_EPOCH = 18
    CONSUMERS_ACKS = 19


class LogTraceType(IntEnum):
    DEBUG = 0
    INFO = 1
    WARN = 2
    ERR = 3


class Status(IntEnum):
    UNKNOWN = 0
    PENDING_CREATION = 1
    ACTIVE = 2
    PENDING_DELETION = 3


class CompressionAlgorithm(IntEnum):
    LZ4 = 0


class NodeState(IntEnum):
    FOLLOWER = 0
    CANDIDATE = 1
    LEADER = 2


class MessageType(IntEnum):
    MESSAGE = 0
    MARKER = 1


class CommandType(IntEnum):
    NONE = 0
    CREATE_QUEUE = 1
    DELETE_QUEUE = 2
    ALTER_PARTITION_ASSIGNMENT = 3
    ALTER_PARTITION_LEADER_ASSIGNMENT = 4
    REGISTER_DATA_NODE = 5
    UNREGISTER_DATA_NODE = 6
    REGISTER_CONSUMER_GROUP = 7
    UNREGISTER_CONSUMER_GROUP = 8
    ADD_LAGGING_FOLLOWER = 9
    REMOVE_LAGGING_FOLLOWER = 10


class CommitMarkerStatus(IntEnum):
    COMMITED = 0
    ABORTED = 1


class PageType(IntEnum):
    """Kind of B-tree index page."""

    NON_LEAF = 0
    LEAF = 1


class TriePageType(IntEnum):
    ROOT = 0
    EXTENSION = 1


class CleanupPolicyType(IntEnum):
    DELETE_SEGMENTS = 0
    COMPACT_SEGMENTS = 1