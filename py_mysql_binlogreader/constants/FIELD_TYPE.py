# coding=utf-8
"""
Column type codes found in table map events.

The wire codes shared with the client protocol come from PyMySQL,
the binlog-only ones are added here.
"""
from pymysql.constants.FIELD_TYPE import *  # noqa: F401,F403
from pymysql.constants import FIELD_TYPE as _FIELD_TYPE

# Types that only exist in replication events
TIMESTAMP2 = 17
DATETIME2 = 18
TIME2 = 19
TYPED_ARRAY = 20

# Types with a 1 byte entry in the table map metadata block
META_1_BYTE = (
    _FIELD_TYPE.FLOAT, _FIELD_TYPE.DOUBLE,
    _FIELD_TYPE.BLOB, _FIELD_TYPE.TINY_BLOB, _FIELD_TYPE.MEDIUM_BLOB, _FIELD_TYPE.LONG_BLOB,
    _FIELD_TYPE.GEOMETRY, _FIELD_TYPE.JSON,
    TIME2, DATETIME2, TIMESTAMP2,
)

# Types with a 2 byte entry in the table map metadata block
META_2_BYTES = (
    _FIELD_TYPE.VARCHAR, _FIELD_TYPE.VAR_STRING, _FIELD_TYPE.BIT,
    _FIELD_TYPE.NEWDECIMAL, _FIELD_TYPE.STRING, _FIELD_TYPE.ENUM, _FIELD_TYPE.SET,
)

# Types covered by the SIGNEDNESS optional metadata bitmap, in this order of appearance
NUMERIC_TYPES = (
    _FIELD_TYPE.TINY, _FIELD_TYPE.SHORT, _FIELD_TYPE.INT24, _FIELD_TYPE.LONG,
    _FIELD_TYPE.LONGLONG, _FIELD_TYPE.NEWDECIMAL, _FIELD_TYPE.FLOAT, _FIELD_TYPE.DOUBLE,
)

BLOB_TYPES = (
    _FIELD_TYPE.BLOB, _FIELD_TYPE.TINY_BLOB, _FIELD_TYPE.MEDIUM_BLOB, _FIELD_TYPE.LONG_BLOB,
    _FIELD_TYPE.GEOMETRY, _FIELD_TYPE.JSON,
)

# Optional metadata field types of a table map event (MySQL 8.0 binlog_row_metadata)
SIGNEDNESS = 1
DEFAULT_CHARSET = 2
COLUMN_CHARSET = 3
COLUMN_NAME = 4
SET_STR_VALUE = 5
ENUM_STR_VALUE = 6
GEOMETRY_TYPE = 7
SIMPLE_PRIMARY_KEY = 8
PRIMARY_KEY_WITH_PREFIX = 9
ENUM_AND_SET_DEFAULT_CHARSET = 10
ENUM_AND_SET_COLUMN_CHARSET = 11
COLUMN_VISIBILITY = 12
