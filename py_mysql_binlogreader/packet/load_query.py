# coding=utf-8
from py_mysql_binlogreader.packet.binlog_event import BinlogEvent
from py_mysql_binlogreader.protocol.proto import Proto


class BeginLoadQueryEvent(BinlogEvent):
    '''
    4              file id
    string[EOF]    block data
    '''
    __slots__ = ('file_id', 'block_data')

    @staticmethod
    def loadFromPacket(packet, header=None, context=None):
        obj = BeginLoadQueryEvent(header)
        proto = Proto(packet)

        obj.file_id = proto.get_fixed_int(4)
        obj.block_data = proto.get_eop_bytes()

        return obj


class ExecuteLoadQueryEvent(BinlogEvent):
    '''
    4              slave proxy id
    4              execution time
    1              schema length
    2              error code
    2              status vars length
    4              file id
    4              start position
    4              end position
    1              duplicate handling flags
    string[$len]   status vars
    string[$len]   schema
    1              [00]
    string[EOF]    query
    '''
    __slots__ = ('slave_proxy_id', 'execution_time', 'error_code', 'status_vars', 'file_id',
                 'start_pos', 'end_pos', 'dup_handling_flags', 'schema', 'query')

    LOAD_DUP_ERROR = 0
    LOAD_DUP_IGNORE = 1
    LOAD_DUP_REPLACE = 2

    @staticmethod
    def loadFromPacket(packet, header=None, context=None):
        obj = ExecuteLoadQueryEvent(header)
        proto = Proto(packet)
        encoding = BinlogEvent.text_encoding(context)

        obj.slave_proxy_id = proto.get_fixed_int(4)
        obj.execution_time = proto.get_fixed_int(4)
        schema_length = proto.get_fixed_int(1)
        obj.error_code = proto.get_fixed_int(2)
        status_vars_length = proto.get_fixed_int(2)
        obj.file_id = proto.get_fixed_int(4)
        obj.start_pos = proto.get_fixed_int(4)
        obj.end_pos = proto.get_fixed_int(4)
        obj.dup_handling_flags = proto.get_fixed_int(1)

        obj.status_vars = proto.read(status_vars_length)
        obj.schema = proto.get_fixed_str(schema_length, encoding)
        proto.get_filler(1)
        obj.query = proto.get_eop_str(encoding)

        return obj

    def __repr__(self):
        return '<ExecuteLoadQueryEvent file_id=%d query=%r>' % (self.file_id, self.query)
