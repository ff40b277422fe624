# coding=utf-8
from py_mysql_binlogreader.packet.binlog_event import BinlogEvent


class MariadbAnnotateRowsEvent(BinlogEvent):
    """
    SQL statement behind the following rows events, kept verbatim
    """
    __slots__ = ('query',)

    @staticmethod
    def loadFromPacket(packet, header=None, context=None):
        obj = MariadbAnnotateRowsEvent(header)
        obj.query = bytes(packet)
        return obj


class MariadbBinlogCheckpointEvent(BinlogEvent):
    __slots__ = ('info',)

    @staticmethod
    def loadFromPacket(packet, header=None, context=None):
        obj = MariadbBinlogCheckpointEvent(header)
        obj.info = bytes(packet)
        return obj
