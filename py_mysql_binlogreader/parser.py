# coding=utf-8
import logging

from pymysql.charset import charset_by_name

from py_mysql_binlogreader.constants.CHECKSUM import BINLOG_CHECKSUM_LEN
from py_mysql_binlogreader.constants.EVENT_TYPE import EVENT_HEADER_SIZE, FORMAT_DESCRIPTION_EVENT
from py_mysql_binlogreader.packet.binlog_event import GenericEvent
from py_mysql_binlogreader.packet.event_header import EventHeader
from py_mysql_binlogreader.packet.format_description_event import FormatDescriptionEvent
from py_mysql_binlogreader.packet.load_query import ExecuteLoadQueryEvent
from py_mysql_binlogreader.packet.query import QueryEvent
from py_mysql_binlogreader.protocol.err import FATAL_ERRORS, BinlogError, TruncatedBody
from py_mysql_binlogreader.protocol.packet import dump
from py_mysql_binlogreader.registry import EventRegistry

logger = logging.getLogger('py_mysql_binlogreader')


def charset_to_encoding(charset):
    """
    Python codec of a MySQL character set name

    >>> charset_to_encoding('utf8mb4')
    'utf8'
    """
    found = charset_by_name(charset)
    if found is None:
        raise ValueError('unknown MySQL charset %r' % charset)
    return found.encoding


def read_full(stream, size):
    """
    Read exactly size bytes unless the stream ends first
    """
    chunks = []
    remaining = size
    while remaining > 0:
        chunk = stream.read(remaining)
        if not chunk:
            break
        chunks.append(chunk)
        remaining -= len(chunk)
    return b''.join(chunks)


class BinlogContext(object):
    """
    Decoding state carried from one event to the next: the current format
    description, the lookup table derived from it and the table map cache
    """
    __slots__ = ('format_description', 'registry', 'tables', 'charset', 'encoding')

    def __init__(self, charset='utf8mb4'):
        self.format_description = None
        self.registry = EventRegistry()
        self.tables = {}
        self.charset = charset
        self.encoding = charset_to_encoding(charset)

    def set_format_description(self, format_description):
        self.format_description = format_description
        self.registry = EventRegistry(format_description)


class BinlogParser(object):
    """
    Sequential decoder of binlog events.

    The stream must be positioned on an event boundary, past the magic bytes.
    filter_sql, when set, is called with the text of every query event.
    """

    def __init__(self, charset='utf8mb4', strict=True, filter_sql=None):
        self.context = BinlogContext(charset)
        self.strict = strict
        self.filter_sql = filter_sql

    @property
    def format_description(self):
        return self.context.format_description

    @property
    def tables(self):
        return self.context.tables

    def reset(self):
        self.context = BinlogContext(self.context.charset)

    def parse(self, stream):
        while True:
            event = self.read_event(stream)
            if event is None:
                return
            yield event

    def read_event(self, stream):
        """
        Read and decode the next event, None at the end of the stream
        """
        head = read_full(stream, EVENT_HEADER_SIZE)
        if not head:
            return None

        header = EventHeader.loadFromPacket(head)

        body = read_full(stream, header.body_size)
        if len(body) != header.body_size:
            raise TruncatedBody('get event body err, need %d - %d, but got %d' % (
                header.event_size, EVENT_HEADER_SIZE, len(body)))

        return self.decode_event(header, body)

    def decode_event(self, header, body):
        context = self.context

        if header.event_type != FORMAT_DESCRIPTION_EVENT and context.registry.strips_checksum:
            if len(body) < BINLOG_CHECKSUM_LEN:
                raise TruncatedBody('event at %d is too short for a checksum: %d bytes' % (
                    header.log_pos, len(body)))
            body = body[:-BINLOG_CHECKSUM_LEN]

        decoder = context.registry.resolve(header)
        logger.debug('%r -> %r', header, decoder)
        dump(body, 'Event Body')

        try:
            event = decoder.decode(body, header, context)
        except FATAL_ERRORS:
            raise
        except BinlogError as e:
            if self.strict:
                raise
            logger.warning('skip undecodable event %r: %s', header, e)
            return GenericEvent(header, bytes(body), e)

        if isinstance(event, FormatDescriptionEvent):
            context.set_format_description(event)
        elif isinstance(event, (QueryEvent, ExecuteLoadQueryEvent)) and self.filter_sql is not None:
            self.filter_sql(event.query)

        return event
