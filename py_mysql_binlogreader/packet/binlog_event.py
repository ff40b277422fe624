# coding=utf-8
from py_mysql_binlogreader.constants.EVENT_TYPE import event_type_name
from py_mysql_binlogreader.protocol.proto import Proto


class BinlogEvent(object):
    """
    Basic class for all decoded binlog events to inherit from
    """
    __slots__ = ('header',)

    def __init__(self, header=None):
        self.header = header

    @property
    def event_type(self):
        return self.header.event_type if self.header is not None else None

    @property
    def event_name(self):
        return event_type_name(self.event_type) if self.header is not None else self.__class__.__name__

    @staticmethod
    def text_encoding(context):
        return context.encoding if context is not None else 'utf-8'

    @staticmethod
    def loadFromPacket(packet, header=None, context=None):
        """
        Decode an event body, header and checksum trailer already stripped
        """
        raise NotImplementedError('loadFromPacket')

    def __repr__(self):
        if self.header is None:
            return '<%s>' % self.__class__.__name__
        return '<%s log_pos=%d>' % (self.__class__.__name__, self.header.log_pos)


class GenericEvent(BinlogEvent):
    """
    Passthrough for event types without a decoder, the body is kept as is.

    In permissive parsing mode it also carries events whose body failed to decode.
    """
    __slots__ = ('data', 'error')

    def __init__(self, header=None, data=b'', error=None):
        super(GenericEvent, self).__init__(header)
        self.data = data
        self.error = error

    @staticmethod
    def loadFromPacket(packet, header=None, context=None):
        return GenericEvent(header, bytes(packet))


class StopEvent(BinlogEvent):
    """
    Written when the server shuts down, the body is empty
    """
    __slots__ = ()

    @staticmethod
    def loadFromPacket(packet, header=None, context=None):
        return StopEvent(header)


class IntvarEvent(BinlogEvent):
    '''
    1              type (LAST_INSERT_ID or INSERT_ID)
    8              value
    '''
    __slots__ = ('type', 'value')

    INVALID_INT = 0
    LAST_INSERT_ID = 1
    INSERT_ID = 2

    @staticmethod
    def loadFromPacket(packet, header=None, context=None):
        obj = IntvarEvent(header)
        proto = Proto(packet)

        obj.type = proto.get_fixed_int(1)
        obj.value = proto.get_fixed_int(8)

        return obj
