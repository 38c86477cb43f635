"""Byte layouts of the cluster metadata commands stored in the metadata queue."""

from fastqueue.constants import (
    MAX_ADDRESS_CHARS,
    MAX_CONSUMER_GROUP_ID_CHARS,
    MAX_QUEUE_NAME_CHARS,
    MESSAGE_TOTAL_BYTES,
)

_UINT = 4
_INT = 4
_ULL = 8
_BOOL = 1
_CHAR = 1

# Header shared by every command, placed after the message header.
COMMAND_TYPE_SIZE = _UINT
COMMAND_TYPE_OFFSET = MESSAGE_TOTAL_BYTES
COMMAND_TERM_SIZE = _ULL
COMMAND_TERM_OFFSET = COMMAND_TYPE_SIZE + COMMAND_TYPE_OFFSET
COMMAND_TOTAL_BYTES = MESSAGE_TOTAL_BYTES + COMMAND_TYPE_SIZE + COMMAND_TERM_SIZE

# Create queue.
CQ_COMMAND_QUEUE_NAME_LENGTH_SIZE = _UINT
CQ_COMMAND_QUEUE_NAME_LENGTH_OFFSET = COMMAND_TOTAL_BYTES
CQ_COMMAND_QUEUE_NAME_SIZE = _CHAR * MAX_QUEUE_NAME_CHARS
CQ_COMMAND_QUEUE_NAME_OFFSET = CQ_COMMAND_QUEUE_NAME_LENGTH_SIZE + CQ_COMMAND_QUEUE_NAME_LENGTH_OFFSET
CQ_COMMAND_PARTITION_SIZE = _UINT
CQ_COMMAND_PARTITION_OFFSET = CQ_COMMAND_QUEUE_NAME_SIZE + CQ_COMMAND_QUEUE_NAME_OFFSET
CQ_COMMAND_REPLICATION_SIZE = _UINT
CQ_COMMAND_REPLICATION_OFFSET = CQ_COMMAND_PARTITION_SIZE + CQ_COMMAND_PARTITION_OFFSET
CQ_COMMAND_TOTAL_BYTES = (
    COMMAND_TOTAL_BYTES
    + CQ_COMMAND_QUEUE_NAME_LENGTH_SIZE
    + CQ_COMMAND_QUEUE_NAME_SIZE
    + CQ_COMMAND_PARTITION_SIZE
    + CQ_COMMAND_REPLICATION_SIZE
)

# Partition assignment.
PA_COMMAND_QUEUE_NAME_LENGTH_SIZE = _UINT
PA_COMMAND_QUEUE_NAME_LENGTH_OFFSET = COMMAND_TOTAL_BYTES
PA_COMMAND_QUEUE_NAME_SIZE = _CHAR * MAX_QUEUE_NAME_CHARS
PA_COMMAND_QUEUE_NAME_OFFSET = PA_COMMAND_QUEUE_NAME_LENGTH_SIZE + PA_COMMAND_QUEUE_NAME_LENGTH_OFFSET
PA_COMMAND_PARTITION_SIZE = _UINT
PA_COMMAND_PARTITION_OFFSET = PA_COMMAND_QUEUE_NAME_SIZE + PA_COMMAND_QUEUE_NAME_OFFSET
PA_COMMAND_TO_NODE_SIZE = _UINT
PA_COMMAND_TO_NODE_OFFSET = PA_COMMAND_PARTITION_SIZE + PA_COMMAND_PARTITION_OFFSET
PA_COMMAND_FROM_NODE_SIZE = _UINT
PA_COMMAND_FROM_NODE_OFFSET = PA_COMMAND_TO_NODE_SIZE + PA_COMMAND_TO_NODE_OFFSET
PA_COMMAND_TOTAL_BYTES = (
    COMMAND_TOTAL_BYTES
    + PA_COMMAND_QUEUE_NAME_LENGTH_SIZE
    + PA_COMMAND_QUEUE_NAME_SIZE
    + PA_COMMAND_PARTITION_SIZE
    + PA_COMMAND_TO_NODE_SIZE
    + PA_COMMAND_FROM_NODE_SIZE
)

# Partition leader assignment.
PLA_COMMAND_QUEUE_NAME_LENGTH_SIZE = _UINT
PLA_COMMAND_QUEUE_NAME_LENGTH_OFFSET = COMMAND_TOTAL_BYTES
PLA_COMMAND_QUEUE_NAME_SIZE = _CHAR * MAX_QUEUE_NAME_CHARS
PLA_COMMAND_QUEUE_NAME_OFFSET = PLA_COMMAND_QUEUE_NAME_LENGTH_SIZE + PLA_COMMAND_QUEUE_NAME_LENGTH_OFFSET
PLA_COMMAND_PARTITION_SIZE = _UINT
PLA_COMMAND_PARTITION_OFFSET = PLA_COMMAND_QUEUE_NAME_SIZE + PLA_COMMAND_QUEUE_NAME_OFFSET
PLA_COMMAND_LEADER_ID_SIZE = _ULL
PLA_COMMAND_LEADER_ID_OFFSET = PLA_COMMAND_PARTITION_SIZE + PLA_COMMAND_PARTITION_OFFSET
PLA_COMMAND_NEW_LEADER_SIZE = _UINT
PLA_COMMAND_NEW_LEADER_OFFSET = PLA_COMMAND_LEADER_ID_SIZE + PLA_COMMAND_LEADER_ID_OFFSET
PLA_COMMAND_PREV_LEADER_SIZE = _UINT
PLA_COMMAND_PREV_LEADER_OFFSET = PLA_COMMAND_NEW_LEADER_SIZE + PLA_COMMAND_NEW_LEADER_OFFSET
PLA_COMMAND_TOTAL_BYTES = (
    COMMAND_TOTAL_BYTES
    + PLA_COMMAND_QUEUE_NAME_LENGTH_SIZE
    + PLA_COMMAND_QUEUE_NAME_SIZE
    + PLA_COMMAND_PARTITION_SIZE
    + PLA_COMMAND_LEADER_ID_SIZE
    + PLA_COMMAND_NEW_LEADER_SIZE
    + PLA_COMMAND_PREV_LEADER_SIZE
)

# Delete queue.
DQ_COMMAND_QUEUE_NAME_LENGTH_SIZE = _UINT
DQ_COMMAND_QUEUE_NAME_LENGTH_OFFSET = COMMAND_TOTAL_BYTES
DQ_COMMAND_QUEUE_NAME_SIZE = _CHAR * MAX_QUEUE_NAME_CHARS
DQ_COMMAND_QUEUE_NAME_OFFSET = DQ_COMMAND_QUEUE_NAME_LENGTH_SIZE + DQ_COMMAND_QUEUE_NAME_LENGTH_OFFSET
DQ_COMMAND_TOTAL_BYTES = COMMAND_TOTAL_BYTES + DQ_COMMAND_QUEUE_NAME_LENGTH_SIZE + DQ_COMMAND_QUEUE_NAME_SIZE

# Register data node.
RDN_COMMAND_NODE_ID_SIZE = _UINT
RDN_COMMAND_NODE_ID_OFFSET = COMMAND_TOTAL_BYTES
RDN_COMMAND_ADDRESS_LENGTH_SIZE = _UINT
RDN_COMMAND_ADDRESS_LENGTH_OFFSET = RDN_COMMAND_NODE_ID_SIZE + RDN_COMMAND_NODE_ID_OFFSET
RDN_COMMAND_ADDRESS_SIZE = _CHAR * MAX_ADDRESS_CHARS
RDN_COMMAND_ADDRESS_OFFSET = RDN_COMMAND_ADDRESS_LENGTH_SIZE + RDN_COMMAND_ADDRESS_LENGTH_OFFSET
RDN_COMMAND_PORT_SIZE = _UINT
RDN_COMMAND_PORT_OFFSET = RDN_COMMAND_ADDRESS_SIZE + RDN_COMMAND_ADDRESS_OFFSET
RDN_COMMAND_EXT_ADDRESS_LENGTH_SIZE = _UINT
RDN_COMMAND_EXT_ADDRESS_LENGTH_OFFSET = RDN_COMMAND_PORT_SIZE + RDN_COMMAND_PORT_OFFSET
RDN_COMMAND_EXT_ADDRESS_SIZE = _CHAR * MAX_ADDRESS_CHARS
RDN_COMMAND_EXT_ADDRESS_OFFSET = RDN_COMMAND_EXT_ADDRESS_LENGTH_SIZE + RDN_COMMAND_EXT_ADDRESS_LENGTH_OFFSET
RDN_COMMAND_EXT_PORT_SIZE = _UINT
RDN_COMMAND_EXT_PORT_OFFSET = RDN_COMMAND_EXT_ADDRESS_SIZE + RDN_COMMAND_EXT_ADDRESS_OFFSET
RDN_COMMAND_TOTAL_BYTES = (
    COMMAND_TOTAL_BYTES
    + RDN_COMMAND_NODE_ID_SIZE
    + RDN_COMMAND_ADDRESS_LENGTH_SIZE
    + RDN_COMMAND_ADDRESS_SIZE
    + RDN_COMMAND_PORT_SIZE
    + RDN_COMMAND_EXT_ADDRESS_LENGTH_SIZE
    + RDN_COMMAND_EXT_ADDRESS_SIZE
    + RDN_COMMAND_EXT_PORT_SIZE
)

# Unregister data node.
UDN_COMMAND_NODE_ID_SIZE = _UINT
UDN_COMMAND_NODE_ID_OFFSET = COMMAND_TOTAL_BYTES
UDN_COMMAND_TOTAL_BYTES = COMMAND_TOTAL_BYTES + UDN_COMMAND_NODE_ID_SIZE

# Register consumer group.
RCG_COMMAND_QUEUE_NAME_LENGTH_SIZE = _UINT
RCG_COMMAND_QUEUE_NAME_LENGTH_OFFSET = COMMAND_TOTAL_BYTES
RCG_COMMAND_QUEUE_NAME_SIZE = _CHAR * MAX_QUEUE_NAME_CHARS
RCG_COMMAND_QUEUE_NAME_OFFSET = RCG_COMMAND_QUEUE_NAME_LENGTH_SIZE + RCG_COMMAND_QUEUE_NAME_LENGTH_OFFSET
RCG_COMMAND_PARTITION_ID_SIZE = _INT
RCG_COMMAND_PARTITION_ID_OFFSET = RCG_COMMAND_QUEUE_NAME_SIZE + RCG_COMMAND_QUEUE_NAME_OFFSET
RCG_COMMAND_GROUP_ID_LENGTH_SIZE = _UINT
RCG_COMMAND_GROUP_ID_LENGTH_OFFSET = RCG_COMMAND_PARTITION_ID_SIZE + RCG_COMMAND_PARTITION_ID_OFFSET
RCG_COMMAND_GROUP_ID_SIZE = _CHAR * MAX_CONSUMER_GROUP_ID_CHARS
RCG_COMMAND_GROUP_ID_OFFSET = RCG_COMMAND_GROUP_ID_LENGTH_SIZE + RCG_COMMAND_GROUP_ID_LENGTH_OFFSET
RCG_COMMAND_CONSUMER_ID_SIZE = _ULL
RCG_COMMAND_CONSUMER_ID_OFFSET = RCG_COMMAND_GROUP_ID_SIZE + RCG_COMMAND_GROUP_ID_OFFSET
RCG_COMMAND_STOLE_FROM_CONSUMER_SIZE = _ULL
RCG_COMMAND_STOLE_FROM_CONSUMER_OFFSET = RCG_COMMAND_CONSUMER_ID_SIZE + RCG_COMMAND_CONSUMER_ID_OFFSET
RCG_COMMAND_CONSUME_FROM_BEGINNING_SIZE = _BOOL
RCG_COMMAND_CONSUME_FROM_BEGINNING_OFFSET = (
    RCG_COMMAND_STOLE_FROM_CONSUMER_SIZE + RCG_COMMAND_STOLE_FROM_CONSUMER_OFFSET
)
RCG_COMMAND_TOTAL_BYTES = (
    COMMAND_TOTAL_BYTES
    + RCG_COMMAND_QUEUE_NAME_LENGTH_SIZE
    + RCG_COMMAND_QUEUE_NAME_SIZE
    + RCG_COMMAND_PARTITION_ID_SIZE
    + RCG_COMMAND_GROUP_ID_LENGTH_SIZE
    + RCG_COMMAND_GROUP_ID_SIZE
    + RCG_COMMAND_CONSUMER_ID_SIZE
    + RCG_COMMAND_STOLE_FROM_CONSUMER_SIZE
    + RCG_COMMAND_CONSUME_FROM_BEGINNING_SIZE
)

# Unregister consumer group.
UCG_COMMAND_QUEUE_NAME_LENGTH_SIZE = _UINT
UCG_COMMAND_QUEUE_NAME_LENGTH_OFFSET = COMMAND_TOTAL_BYTES
UCG_COMMAND_QUEUE_NAME_SIZE = _CHAR * MAX_QUEUE_NAME_CHARS
UCG_COMMAND_QUEUE_NAME_OFFSET = UCG_COMMAND_QUEUE_NAME_LENGTH_SIZE + UCG_COMMAND_QUEUE_NAME_LENGTH_OFFSET
UCG_COMMAND_PARTITION_ID_SIZE = _INT
UCG_COMMAND_PARTITION_ID_OFFSET = UCG_COMMAND_QUEUE_NAME_SIZE + UCG_COMMAND_QUEUE_NAME_OFFSET
UCG_COMMAND_GROUP_ID_LENGTH_SIZE = _UINT
UCG_COMMAND_GROUP_ID_LENGTH_OFFSET = UCG_COMMAND_PARTITION_ID_SIZE + UCG_COMMAND_PARTITION_ID_OFFSET
UCG_COMMAND_GROUP_ID_SIZE = _CHAR * MAX_CONSUMER_GROUP_ID_CHARS
UCG_COMMAND_GROUP_ID_OFFSET = UCG_COMMAND_GROUP_ID_LENGTH_SIZE + UCG_COMMAND_GROUP_ID_LENGTH_OFFSET
UCG_COMMAND_CONSUMER_ID_SIZE = _ULL
UCG_COMMAND_CONSUMER_ID_OFFSET = UCG_COMMAND_GROUP_ID_SIZE + UCG_COMMAND_GROUP_ID_OFFSET
UCG_COMMAND_TOTAL_BYTES = (
    COMMAND_TOTAL_BYTES
    + UCG_COMMAND_QUEUE_NAME_LENGTH_SIZE
    + UCG_COMMAND_QUEUE_NAME_SIZE
    + UCG_COMMAND_PARTITION_ID_SIZE
    + UCG_COMMAND_GROUP_ID_LENGTH_SIZE
    + UCG_COMMAND_GROUP_ID_SIZE
    + UCG_COMMAND_CONSUMER_ID_SIZE
)

# Add lagging follower.
ALF_COMMAND_QUEUE_NAME_LENGTH_SIZE = _UINT
ALF_COMMAND_QUEUE_NAME_LENGTH_OFFSET = COMMAND_TOTAL_BYTES
ALF_COMMAND_QUEUE_NAME_SIZE = _CHAR * MAX_QUEUE_NAME_CHARS
ALF_COMMAND_QUEUE_NAME_OFFSET = ALF_COMMAND_QUEUE_NAME_LENGTH_SIZE + ALF_COMMAND_QUEUE_NAME_LENGTH_OFFSET
ALF_COMMAND_PARTITION_ID_SIZE = _INT
ALF_COMMAND_PARTITION_ID_OFFSET = ALF_COMMAND_QUEUE_NAME_SIZE + ALF_COMMAND_QUEUE_NAME_OFFSET
ALF_COMMAND_NODE_ID_SIZE = _INT
ALF_COMMAND_NODE_ID_OFFSET = ALF_COMMAND_PARTITION_ID_SIZE + ALF_COMMAND_PARTITION_ID_OFFSET
ALF_COMMAND_TOTAL_BYTES = (
    COMMAND_TOTAL_BYTES
    + ALF_COMMAND_QUEUE_NAME_LENGTH_SIZE
    + ALF_COMMAND_QUEUE_NAME_SIZE
    + ALF_COMMAND_PARTITION_ID_SIZE
    + ALF_COMMAND_NODE_ID_SIZE
)

# Remove lagging follower.
RLF_COMMAND_QUEUE_NAME_LENGTH_SIZE = _UINT
RLF_COMMAND_QUEUE_NAME_LENGTH_OFFSET = COMMAND_TOTAL_BYTES
RLF_COMMAND_QUEUE_NAME_SIZE = _CHAR * MAX_QUEUE_NAME_CHARS
RLF_COMMAND_QUEUE_NAME_OFFSET = RLF_COMMAND_QUEUE_NAME_LENGTH_SIZE + RLF_COMMAND_QUEUE_NAME_LENGTH_OFFSET
RLF_COMMAND_PARTITION_ID_SIZE = _INT
RLF_COMMAND_PARTITION_ID_OFFSET = RLF_COMMAND_QUEUE_NAME_SIZE + RLF_COMMAND_QUEUE_NAME_OFFSET
RLF_COMMAND_NODE_ID_SIZE = _INT
RLF_COMMAND_NODE_ID_OFFSET = RLF_COMMAND_PARTITION_ID_SIZE + RLF_COMMAND_PARTITION_ID_OFFSET
RLF_COMMAND_TOTAL_BYTES = (
    COMMAND_TOTAL_BYTES
    + RLF_COMMAND_QUEUE_NAME_LENGTH_SIZE
    + RLF_COMMAND_QUEUE_NAME_SIZE
    + RLF_COMMAND_PARTITION_ID_SIZE
    + RLF_COMMAND_NODE_ID_SIZE
)