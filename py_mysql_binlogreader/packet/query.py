# coding=utf-8
from py_mysql_binlogreader.packet.binlog_event import BinlogEvent
from py_mysql_binlogreader.protocol.proto import Proto


class QueryEvent(BinlogEvent):
    '''
    4              slave proxy id
    4              execution time
    1              schema length
    2              error code
    2              status vars length
    string[$len]   status vars
    string[$len]   schema
    1              [00]
    string[EOF]    query
    '''
    __slots__ = ('slave_proxy_id', 'execution_time', 'error_code', 'status_vars', 'schema', 'query')

    @staticmethod
    def loadFromPacket(packet, header=None, context=None):
        obj = QueryEvent(header)
        proto = Proto(packet)
        encoding = BinlogEvent.text_encoding(context)

        obj.slave_proxy_id = proto.get_fixed_int(4)
        obj.execution_time = proto.get_fixed_int(4)
        schema_length = proto.get_fixed_int(1)
        obj.error_code = proto.get_fixed_int(2)
        status_vars_length = proto.get_fixed_int(2)

        obj.status_vars = proto.read(status_vars_length)
        obj.schema = proto.get_fixed_str(schema_length, encoding)
        proto.get_filler(1)
        obj.query = proto.get_eop_str(encoding)

        return obj

    def __repr__(self):
        return '<QueryEvent schema=%r query=%r>' % (self.schema, self.query)


class RowsQueryEvent(BinlogEvent):
    '''
    1              length (ignored, the query runs to the end of the event)
    string[EOF]    query
    '''
    __slots__ = ('query',)

    @staticmethod
    def loadFromPacket(packet, header=None, context=None):
        obj = RowsQueryEvent(header)
        proto = Proto(packet)

        proto.get_filler(1)
        obj.query = proto.get_eop_str(BinlogEvent.text_encoding(context))

        return obj

    def __repr__(self):
        return '<RowsQueryEvent query=%r>' % self.query
