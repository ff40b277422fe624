# coding=utf-8
import re

# Binlog magic number, first 4 bytes of every binlog file
BINLOG_FILE_HEADER                      = b'\xfebin'

# Fixed event header size since binlog v4
EVENT_HEADER_SIZE                       = 19

UNKNOWN_EVENT                           = 0x00
START_EVENT_V3                          = 0x01
QUERY_EVENT                             = 0x02
STOP_EVENT                              = 0x03
ROTATE_EVENT                            = 0x04
INTVAR_EVENT                            = 0x05
LOAD_EVENT                              = 0x06
SLAVE_EVENT                             = 0x07
CREATE_FILE_EVENT                       = 0x08
APPEND_BLOCK_EVENT                      = 0x09
EXEC_LOAD_EVENT                         = 0x0a
DELETE_FILE_EVENT                       = 0x0b
NEW_LOAD_EVENT                          = 0x0c
RAND_EVENT                              = 0x0d
USER_VAR_EVENT                          = 0x0e
FORMAT_DESCRIPTION_EVENT                = 0x0f
XID_EVENT                               = 0x10
BEGIN_LOAD_QUERY_EVENT                  = 0x11
EXECUTE_LOAD_QUERY_EVENT                = 0x12
TABLE_MAP_EVENT                         = 0x13
WRITE_ROWS_EVENT_V0                     = 0x14
UPDATE_ROWS_EVENT_V0                    = 0x15
DELETE_ROWS_EVENT_V0                    = 0x16
WRITE_ROWS_EVENT_V1                     = 0x17
UPDATE_ROWS_EVENT_V1                    = 0x18
DELETE_ROWS_EVENT_V1                    = 0x19
INCIDENT_EVENT                          = 0x1a
HEARTBEAT_EVENT                         = 0x1b
IGNORABLE_EVENT                         = 0x1c
ROWS_QUERY_EVENT                        = 0x1d
WRITE_ROWS_EVENT_V2                     = 0x1e
UPDATE_ROWS_EVENT_V2                    = 0x1f
DELETE_ROWS_EVENT_V2                    = 0x20
GTID_LOG_EVENT                          = 0x21
ANONYMOUS_GTID_LOG_EVENT                = 0x22
PREVIOUS_GTIDS_LOG_EVENT                = 0x23
TRANSACTION_CONTEXT_EVENT               = 0x24
VIEW_CHANGE_EVENT                       = 0x25
XA_PREPARE_LOG_EVENT                    = 0x26
PARTIAL_UPDATE_ROWS_EVENT               = 0x27

# MariaDB
MARIADB_ANNOTATE_ROWS_EVENT             = 0xa0
MARIADB_BINLOG_CHECKPOINT_EVENT         = 0xa1
MARIADB_GTID_EVENT                      = 0xa2
MARIADB_GTID_LIST_EVENT                 = 0xa3

ROWS_EVENTS = (
    WRITE_ROWS_EVENT_V0, UPDATE_ROWS_EVENT_V0, DELETE_ROWS_EVENT_V0,
    WRITE_ROWS_EVENT_V1, UPDATE_ROWS_EVENT_V1, DELETE_ROWS_EVENT_V1,
    WRITE_ROWS_EVENT_V2, UPDATE_ROWS_EVENT_V2, DELETE_ROWS_EVENT_V2,
)


def event_type_name(val=None):
    """
    Without an argument return the code -> name map,
    otherwise the name of a single event type code
    """
    names = {}
    for key, value in globals().items():
        if re.search(r'_EVENT(_V\d)?$', key) and isinstance(value, int):
            names[value] = key
    if val is None:
        return names
    return names.get(val, 'UNKNOWN_EVENT_%d' % val)
