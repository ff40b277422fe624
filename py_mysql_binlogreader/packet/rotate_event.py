# coding=utf-8
from py_mysql_binlogreader.packet.binlog_event import BinlogEvent
from py_mysql_binlogreader.protocol.proto import Proto


class RotateEvent(BinlogEvent):
    '''
    8              position of the first event in the next file
    string[EOF]    name of the next binlog file
    '''
    __slots__ = ('position', 'next_binlog')

    @staticmethod
    def loadFromPacket(packet, header=None, context=None):
        obj = RotateEvent(header)
        proto = Proto(packet)

        obj.position = proto.get_fixed_int(8)
        obj.next_binlog = proto.get_eop_str()

        return obj

    def __repr__(self):
        return '<RotateEvent next_binlog=%r position=%d>' % (self.next_binlog, self.position)
