# coding=utf-8
from py_mysql_binlogreader.packet.binlog_event import BinlogEvent
from py_mysql_binlogreader.protocol.proto import Proto


class XidEvent(BinlogEvent):
    """A COMMIT event

    Attributes:
        xid: Transaction ID for 2PC
    """
    __slots__ = ('xid',)

    @staticmethod
    def loadFromPacket(packet, header=None, context=None):
        obj = XidEvent(header)
        obj.xid = Proto(packet).get_fixed_int(8)
        return obj

    def __repr__(self):
        return '<XidEvent xid=%d>' % self.xid
