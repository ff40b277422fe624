# coding=utf-8
import struct

from py_mysql_binlogreader.constants.EVENT_TYPE import EVENT_HEADER_SIZE, event_type_name
from py_mysql_binlogreader.protocol.err import MalformedHeader


class EventHeader(object):
    '''
    4              timestamp
    1              event type
    4              server-id
    4              event-size
    4              log pos
    2              flags
    '''
    __slots__ = ('timestamp', 'event_type', 'server_id', 'event_size', 'log_pos', 'flags')

    def __init__(self, timestamp=0, event_type=0, server_id=0, event_size=EVENT_HEADER_SIZE, log_pos=0, flags=0):
        self.timestamp = timestamp
        self.event_type = event_type
        self.server_id = server_id
        self.event_size = event_size
        self.log_pos = log_pos
        self.flags = flags

    @property
    def body_size(self):
        return self.event_size - EVENT_HEADER_SIZE

    @staticmethod
    def loadFromPacket(packet):
        if len(packet) < EVENT_HEADER_SIZE:
            raise MalformedHeader('header size too short %d, must %d' % (len(packet), EVENT_HEADER_SIZE))

        obj = EventHeader()
        (obj.timestamp, obj.event_type, obj.server_id,
         obj.event_size, obj.log_pos, obj.flags) = struct.unpack('<IBIIIH', bytes(packet[:EVENT_HEADER_SIZE]))

        if obj.event_size < EVENT_HEADER_SIZE:
            raise MalformedHeader('invalid event size %d, must >= %d' % (obj.event_size, EVENT_HEADER_SIZE))

        return obj

    def __repr__(self):
        return '<EventHeader %s timestamp=%d server_id=%d event_size=%d log_pos=%d flags=%d>' % (
            event_type_name(self.event_type), self.timestamp, self.server_id,
            self.event_size, self.log_pos, self.flags)
