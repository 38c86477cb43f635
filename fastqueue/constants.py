"""Server-wide limits, timings and on-disk record layouts."""

import os
import sys

_UINT = 4
_INT = 4
_ULL = 8
_LL = 8
_BOOL = 1
_CHAR = 1

PATH_CHAR = os.sep

VERSION = "1.0.0"
VERSION_INT_FORMAT = 0b00000000_00000001_00000000_00000000

FILE_EXTENSION = ".txt"

MAXIMUM_OPEN_FILE_DESCRIPTORS = 750

MAXIMUM_CACHED_MESSAGES = 5000
MAXIMUM_CACHED_INDEX_PAGES = 1000

LAZY_KEY_EXPIRATION_COUNTER = 5
CACHE_KEY_TTL_MILLI = 60000

CLUSTER_METADATA_QUEUE_NAME = "__cluster_metadata"

HEARTBEAT_SIGNAL_MIN_BOUND = 1000
HEARTBEAT_SIGNAL_MAX_BOUND = 3000
LEADER_TIMEOUT = 500
CHECK_FOR_UNAPPLIED_COMMANDS = 1000
CHECK_FOR_COMPACTION = 5000

MAX_QUEUE_NAME_CHARS = 100
MAX_MESSAGE_KEY_CHARS = 140
MAX_CONSUMER_GROUP_ID_CHARS = 75

CONSUMER_OFFSETS_REWRITE_BYTES_DIFF = 4096 * 4  # 16KB

MAX_QUEUE_PARTITIONS = 1000

MAX_PARTITION_OFFSETS_SIZE = 4096 * 100000  # 100MB

MAX_ADDRESS_CHARS = 39

INDEX_PAGE_SIZE = 4096  # 4KB

READ_MESSAGES_BATCH_SIZE = 4096 * 4  # 16KB

MESSAGES_LOC_MAP_PAGE_SIZE = 4096  # 4KB
# The first slot of a page holds the starting segment id of the segments it maps.
MAPPED_SEGMENTS_PER_PAGE = MESSAGES_LOC_MAP_PAGE_SIZE // _ULL - 1

MAX_SEGMENT_SIZE = 1073741824 * 2  # 2 GB
MAX_COMPACTED_SEGMENT_SIZE = sys.maxsize if sys.maxsize == 2**63 - 1 else 2**63 - 1

# Common metadata header shared by every record.
TOTAL_METADATA_BYTES = _UINT
TOTAL_METADATA_BYTES_OFFSET = 0
VERSION_SIZE = _UINT
VERSION_SIZE_OFFSET = TOTAL_METADATA_BYTES + TOTAL_METADATA_BYTES_OFFSET
CHECKSUM_SIZE = _ULL
CHECKSUM_OFFSET = VERSION_SIZE + VERSION_SIZE_OFFSET
COMMON_METADATA_TOTAL_BYTES = TOTAL_METADATA_BYTES + VERSION_SIZE + CHECKSUM_SIZE

# Index page header.
INDEX_PAGE_OFFSET_SIZE = _LL
INDEX_PAGE_OFFSET_OFFSET = COMMON_METADATA_TOTAL_BYTES
INDEX_PAGE_TYPE_SIZE = _UINT
INDEX_PAGE_TYPE_OFFSET = INDEX_PAGE_OFFSET_SIZE + INDEX_PAGE_OFFSET_OFFSET
INDEX_PAGE_MIN_KEY_SIZE = _ULL
INDEX_PAGE_MIN_KEY_OFFSET = INDEX_PAGE_TYPE_SIZE + INDEX_PAGE_TYPE_OFFSET
INDEX_PAGE_MAX_KEY_SIZE = _ULL
INDEX_PAGE_MAX_KEY_OFFSET = INDEX_PAGE_MIN_KEY_SIZE + INDEX_PAGE_MIN_KEY_OFFSET
INDEX_PAGE_NUM_OF_ROWS_SIZE = _UINT
INDEX_PAGE_NUM_OF_ROWS_OFFSET = INDEX_PAGE_MAX_KEY_SIZE + INDEX_PAGE_MAX_KEY_OFFSET
INDEX_PAGE_PARENT_PAGE_SIZE = _LL
INDEX_PAGE_PARENT_PAGE_OFFSET = INDEX_PAGE_NUM_OF_ROWS_SIZE + INDEX_PAGE_NUM_OF_ROWS_OFFSET
INDEX_PAGE_PREV_PAGE_SIZE = _LL
INDEX_PAGE_PREV_PAGE_OFFSET = INDEX_PAGE_PARENT_PAGE_SIZE + INDEX_PAGE_PARENT_PAGE_OFFSET
INDEX_PAGE_NEXT_PAGE_SIZE = _LL
INDEX_PAGE_NEXT_PAGE_OFFSET = INDEX_PAGE_PREV_PAGE_SIZE + INDEX_PAGE_PREV_PAGE_OFFSET
INDEX_PAGE_METADATA_SIZE = (
    COMMON_METADATA_TOTAL_BYTES
    + INDEX_PAGE_OFFSET_SIZE
    + INDEX_PAGE_TYPE_SIZE
    + INDEX_PAGE_MIN_KEY_SIZE
    + INDEX_PAGE_MAX_KEY_SIZE
    + INDEX_PAGE_NUM_OF_ROWS_SIZE
    + INDEX_PAGE_PARENT_PAGE_SIZE
    + INDEX_PAGE_PREV_PAGE_SIZE
    + INDEX_PAGE_NEXT_PAGE_SIZE
)

# Index key/value row.
INDEX_KEY_SIZE = _ULL
INDEX_KEY_OFFSET = 0
INDEX_VALUE_POSITION_SIZE = _LL
INDEX_VALUE_POSITION_OFFSET = INDEX_KEY_SIZE + INDEX_KEY_OFFSET
INDEX_KEY_VALUE_METADATA_SIZE = INDEX_KEY_SIZE + INDEX_VALUE_POSITION_SIZE

INDEX_PAGE_TOTAL_ROWS = (INDEX_PAGE_SIZE - INDEX_PAGE_METADATA_SIZE) // INDEX_KEY_VALUE_METADATA_SIZE

# Marker record.
MARKER_TYPE_SIZE = _UINT
MARKER_TYPE_OFFSET = COMMON_METADATA_TOTAL_BYTES

# Message record; the id is a message offset or a cluster metadata version.
MESSAGE_ID_SIZE = _ULL
MESSAGE_ID_OFFSET = COMMON_METADATA_TOTAL_BYTES
MESSAGE_TIMESTAMP_SIZE = _ULL
MESSAGE_TIMESTAMP_OFFSET = MESSAGE_ID_SIZE + MESSAGE_ID_OFFSET
MESSAGE_IS_ACTIVE_SIZE = _BOOL
MESSAGE_IS_ACTIVE_OFFSET = MESSAGE_TIMESTAMP_SIZE + MESSAGE_TIMESTAMP_OFFSET
MESSAGE_LEADER_ID_SIZE = _ULL
MESSAGE_LEADER_ID_OFFSET = MESSAGE_IS_ACTIVE_SIZE + MESSAGE_IS_ACTIVE_OFFSET
MESSAGE_KEY_SIZE = _UINT
MESSAGE_KEY_OFFSET = MESSAGE_LEADER_ID_SIZE + MESSAGE_LEADER_ID_OFFSET
MESSAGE_PAYLOAD_SIZE = _UINT
MESSAGE_PAYLOAD_OFFSET = MESSAGE_KEY_SIZE + MESSAGE_KEY_OFFSET
MESSAGE_TOTAL_BYTES = (
    COMMON_METADATA_TOTAL_BYTES
    + MESSAGE_ID_SIZE
    + MESSAGE_TIMESTAMP_SIZE
    + MESSAGE_IS_ACTIVE_SIZE
    + MESSAGE_LEADER_ID_SIZE
    + MESSAGE_KEY_SIZE
    + MESSAGE_PAYLOAD_SIZE
)

# Queue metadata record.
QUEUE_NAME_SIZE = MAX_QUEUE_NAME_CHARS * _CHAR
QUEUE_NAME_OFFSET = COMMON_METADATA_TOTAL_BYTES
QUEUE_NAME_LENGTH_SIZE = _UINT
QUEUE_NAME_LENGTH_OFFSET = QUEUE_NAME_SIZE + QUEUE_NAME_OFFSET
QUEUE_PARTITIONS_SIZE = _UINT
QUEUE_PARTITIONS_OFFSET = QUEUE_NAME_LENGTH_SIZE + QUEUE_NAME_LENGTH_OFFSET
QUEUE_REPLICATION_FACTOR_SIZE = _UINT
QUEUE_REPLICATION_FACTOR_OFFSET = QUEUE_PARTITIONS_SIZE + QUEUE_PARTITIONS_OFFSET
QUEUE_LAST_COMMIT_INDEX_SIZE = _ULL
QUEUE_LAST_COMMIT_INDEX_OFFSET = QUEUE_REPLICATION_FACTOR_SIZE + QUEUE_REPLICATION_FACTOR_OFFSET
QUEUE_LAST_APPLIED_INDEX_SIZE = _ULL
QUEUE_LAST_APPLIED_INDEX_OFFSET = QUEUE_LAST_COMMIT_INDEX_SIZE + QUEUE_LAST_COMMIT_INDEX_OFFSET
QUEUE_CLEANUP_POLICY_SIZE = _UINT
QUEUE_CLEANUP_POLICY_OFFSET = QUEUE_LAST_APPLIED_INDEX_SIZE + QUEUE_LAST_APPLIED_INDEX_OFFSET
QUEUE_METADATA_TOTAL_BYTES = (
    COMMON_METADATA_TOTAL_BYTES
    + QUEUE_NAME_SIZE
    + QUEUE_NAME_LENGTH_SIZE
    + QUEUE_PARTITIONS_SIZE
    + QUEUE_REPLICATION_FACTOR_SIZE
    + QUEUE_LAST_COMMIT_INDEX_SIZE
    + QUEUE_LAST_APPLIED_INDEX_SIZE
    + QUEUE_CLEANUP_POLICY_SIZE
)

# Segment metadata record.
SEGMENT_ID_SIZE = _ULL
SEGMENT_ID_OFFSET = COMMON_METADATA_TOTAL_BYTES
SEGMENT_LAST_MESSAGE_TMSTMP_SIZE = _ULL
SEGMENT_LAST_MESSAGE_TMSTMP_OFFSET = SEGMENT_ID_SIZE + SEGMENT_ID_OFFSET
SEGMENT_LAST_MESSAGE_OFF_SIZE = _ULL
SEGMENT_LAST_MESSAGE_OFF_OFFSET = SEGMENT_LAST_MESSAGE_TMSTMP_SIZE + SEGMENT_LAST_MESSAGE_TMSTMP_OFFSET
SEGMENT_IS_READ_ONLY_SIZE = _BOOL
SEGMENT_IS_READ_ONLY_OFFSET = SEGMENT_LAST_MESSAGE_OFF_SIZE + SEGMENT_LAST_MESSAGE_OFF_OFFSET
SEGMENT_IS_COMPACTED_SIZE = _BOOL
SEGMENT_IS_COMPACTED_OFFSET = SEGMENT_IS_READ_ONLY_SIZE + SEGMENT_IS_READ_ONLY_OFFSET
SEGMENT_METADATA_TOTAL_BYTES = (
    COMMON_METADATA_TOTAL_BYTES
    + SEGMENT_ID_SIZE
    + SEGMENT_LAST_MESSAGE_TMSTMP_SIZE
    + SEGMENT_LAST_MESSAGE_OFF_SIZE
    + SEGMENT_IS_READ_ONLY_SIZE
    + SEGMENT_IS_COMPACTED_SIZE
)

# Consumer offset acknowledgement record.
CONSUMER_GROUP_ID_LENGTH_SIZE = _UINT
CONSUMER_GROUP_ID_LENGTH_OFFSET = 0
CONSUMER_GROUP_ID_SIZE = _CHAR * MAX_CONSUMER_GROUP_ID_CHARS
CONSUMER_GROUP_ID_OFFSET = CONSUMER_GROUP_ID_LENGTH_SIZE + CONSUMER_GROUP_ID_LENGTH_OFFSET
CONSUMER_ID_SIZE = _ULL
CONSUMER_ID_OFFSET = CONSUMER_GROUP_ID_SIZE + CONSUMER_GROUP_ID_OFFSET
CONSUMER_MESSAGE_ACK_SIZE = _ULL
CONSUMER_MESSAGE_ACK_OFFSET = CONSUMER_ID_SIZE + CONSUMER_ID_OFFSET
CONSUMER_ACK_TOTAL_BYTES = (
    CONSUMER_GROUP_ID_LENGTH_SIZE
    + CONSUMER_GROUP_ID_SIZE
    + CONSUMER_ID_SIZE
    + CONSUMER_MESSAGE_ACK_SIZE
)