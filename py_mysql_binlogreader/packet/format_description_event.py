# coding=utf-8
import re

from py_mysql_binlogreader.constants.CHECKSUM import BINLOG_CHECKSUM_ALG_DESC_LEN, BINLOG_CHECKSUM_ALG_UNDEF, \
    CHECKSUM_VERSION_PRODUCT_MARIADB
from py_mysql_binlogreader.constants.EVENT_TYPE import EVENT_HEADER_SIZE
from py_mysql_binlogreader.packet.binlog_event import BinlogEvent
from py_mysql_binlogreader.protocol.err import TruncatedBody, UnsupportedHeaderLength
from py_mysql_binlogreader.protocol.proto import Proto

SERVER_VERSION_LENGTH = 50


def split_server_version(server_version):
    """
    Split a server version string into (major, minor, patch)

    >>> split_server_version('5.7.25-log')
    (5, 7, 25)
    >>> split_server_version('10.3.9-MariaDB')
    (10, 3, 9)
    >>> split_server_version('8.0')
    (0, 0, 0)
    >>> split_server_version('x.1.rc')
    (0, 1, 0)
    """
    seps = server_version.split('.')
    if len(seps) < 3:
        return 0, 0, 0

    def _to_int(value):
        try:
            return int(value)
        except ValueError:
            return 0

    patch = re.match(r'\d*', seps[2]).group()
    return _to_int(seps[0]), _to_int(seps[1]), _to_int(patch)


def calc_version_product(server_version):
    """
    >>> calc_version_product('5.3.0')
    328448
    """
    major, minor, patch = split_server_version(server_version)
    return (major * 256 + minor) * 256 + patch


class FormatDescriptionEvent(BinlogEvent):
    '''
    https://dev.mysql.com/doc/internals/en/format-description-event.html
    2                binlog-version
    string[50]       mysql-server version
    4                create timestamp
    1                event header length
    string[p]        event type header lengths
    1                checksum algorithm   (servers >= 5.3.0 only)
    4                checksum
    '''
    __slots__ = ('binlog_version', 'server_version', 'create_timestamp', 'header_length',
                 'event_type_header_lengths', 'checksum_algorithm')

    def __init__(self, header=None):
        super(FormatDescriptionEvent, self).__init__(header)
        self.binlog_version = 4
        self.server_version = ''
        self.create_timestamp = 0
        self.header_length = EVENT_HEADER_SIZE
        self.event_type_header_lengths = b''
        self.checksum_algorithm = BINLOG_CHECKSUM_ALG_UNDEF

    @property
    def version_product(self):
        return calc_version_product(self.server_version)

    def header_length_of(self, event_type):
        """
        Post header length of an event type, None when the table has no entry for it
        """
        if 0 < event_type <= len(self.event_type_header_lengths):
            return self.event_type_header_lengths[event_type - 1]
        return None

    @staticmethod
    def loadFromPacket(packet, header=None, context=None):
        obj = FormatDescriptionEvent(header)
        proto = Proto(packet)

        obj.binlog_version = proto.get_fixed_int(2)
        obj.server_version = proto.read(SERVER_VERSION_LENGTH).split(b'\x00', 1)[0].decode('ascii', 'replace')
        obj.create_timestamp = proto.get_fixed_int(4)
        obj.header_length = proto.get_fixed_int(1)

        if obj.header_length != EVENT_HEADER_SIZE:
            raise UnsupportedHeaderLength('invalid event header length %d, must %d' % (
                obj.header_length, EVENT_HEADER_SIZE))

        if obj.version_product >= CHECKSUM_VERSION_PRODUCT_MARIADB:
            # the last 5 bytes are 1 byte checksum algorithm and 4 byte checksum
            if proto.remaining() < BINLOG_CHECKSUM_ALG_DESC_LEN:
                raise TruncatedBody('format description event has no checksum algorithm trailer')
            end = len(packet) - BINLOG_CHECKSUM_ALG_DESC_LEN
            obj.event_type_header_lengths = bytes(packet[proto.offset:end])
            obj.checksum_algorithm = packet[end]
        else:
            obj.event_type_header_lengths = proto.get_eop_bytes()
            obj.checksum_algorithm = BINLOG_CHECKSUM_ALG_UNDEF

        return obj

    def __repr__(self):
        return '<FormatDescriptionEvent binlog_version=%d server_version=%r checksum_algorithm=%d>' % (
            self.binlog_version, self.server_version, self.checksum_algorithm)
