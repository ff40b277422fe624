# coding=utf-8
import logging

from py_mysql_binlogreader.constants import EVENT_TYPE
from py_mysql_binlogreader.constants.CHECKSUM import BINLOG_CHECKSUM_ALG_CRC32
from py_mysql_binlogreader.packet.binlog_event import GenericEvent, IntvarEvent, StopEvent
from py_mysql_binlogreader.packet.format_description_event import FormatDescriptionEvent
from py_mysql_binlogreader.packet.gtid_event import AnonymousGtidEvent, GtidEvent, MariadbGtidEvent, \
    MariadbGtidListEvent, PreviousGtidsEvent
from py_mysql_binlogreader.packet.load_query import BeginLoadQueryEvent, ExecuteLoadQueryEvent
from py_mysql_binlogreader.packet.mariadb import MariadbAnnotateRowsEvent, MariadbBinlogCheckpointEvent
from py_mysql_binlogreader.packet.query import QueryEvent, RowsQueryEvent
from py_mysql_binlogreader.packet.rotate_event import RotateEvent
from py_mysql_binlogreader.packet.rows_event import DeleteRowsEvent, UpdateRowsEvent, WriteRowsEvent
from py_mysql_binlogreader.packet.table_map_event import TableMapEvent
from py_mysql_binlogreader.packet.xid_event import XidEvent

logger = logging.getLogger('py_mysql_binlogreader')

# event type -> (event class, rows event version, second bitmap present)
ROWS_EVENT_MAP = {
    EVENT_TYPE.WRITE_ROWS_EVENT_V0: (WriteRowsEvent, 0, False),
    EVENT_TYPE.UPDATE_ROWS_EVENT_V0: (UpdateRowsEvent, 0, False),
    EVENT_TYPE.DELETE_ROWS_EVENT_V0: (DeleteRowsEvent, 0, False),
    EVENT_TYPE.WRITE_ROWS_EVENT_V1: (WriteRowsEvent, 1, False),
    EVENT_TYPE.UPDATE_ROWS_EVENT_V1: (UpdateRowsEvent, 1, True),
    EVENT_TYPE.DELETE_ROWS_EVENT_V1: (DeleteRowsEvent, 1, False),
    EVENT_TYPE.WRITE_ROWS_EVENT_V2: (WriteRowsEvent, 2, False),
    EVENT_TYPE.UPDATE_ROWS_EVENT_V2: (UpdateRowsEvent, 2, True),
    EVENT_TYPE.DELETE_ROWS_EVENT_V2: (DeleteRowsEvent, 2, False),
}

SCALAR_EVENT_MAP = {
    EVENT_TYPE.QUERY_EVENT: QueryEvent,
    EVENT_TYPE.STOP_EVENT: StopEvent,
    EVENT_TYPE.ROTATE_EVENT: RotateEvent,
    EVENT_TYPE.INTVAR_EVENT: IntvarEvent,
    EVENT_TYPE.XID_EVENT: XidEvent,
    EVENT_TYPE.BEGIN_LOAD_QUERY_EVENT: BeginLoadQueryEvent,
    EVENT_TYPE.EXECUTE_LOAD_QUERY_EVENT: ExecuteLoadQueryEvent,
    EVENT_TYPE.ROWS_QUERY_EVENT: RowsQueryEvent,
    EVENT_TYPE.GTID_LOG_EVENT: GtidEvent,
    EVENT_TYPE.ANONYMOUS_GTID_LOG_EVENT: AnonymousGtidEvent,
    EVENT_TYPE.PREVIOUS_GTIDS_LOG_EVENT: PreviousGtidsEvent,
    EVENT_TYPE.MARIADB_ANNOTATE_ROWS_EVENT: MariadbAnnotateRowsEvent,
    EVENT_TYPE.MARIADB_BINLOG_CHECKPOINT_EVENT: MariadbBinlogCheckpointEvent,
    EVENT_TYPE.MARIADB_GTID_EVENT: MariadbGtidEvent,
    EVENT_TYPE.MARIADB_GTID_LIST_EVENT: MariadbGtidListEvent,
}


def table_id_size(format_description, event_type):
    """
    Wire width of the table id of a table map or rows event.

    A post header length of 6 means the old 4 byte table id,
    anything else (8 since 5.1.4) a 6 byte one.
    """
    if format_description is None:
        return 6
    if format_description.header_length_of(event_type) == 6:
        return 4
    return 6


class EventDecoder(object):
    """
    An event class plus the decoding parameters it needs
    """
    __slots__ = ('event_class', 'params')

    def __init__(self, event_class, **params):
        self.event_class = event_class
        self.params = params

    def decode(self, packet, header, context):
        return self.event_class.loadFromPacket(packet, header, context, **self.params)

    def __repr__(self):
        params = ' '.join('%s=%s' % item for item in sorted(self.params.items()))
        return '<EventDecoder %s %s>' % (self.event_class.__name__, params)


class EventRegistry(object):
    """
    Lookup table event type -> EventDecoder, built once per format description event
    """
    __slots__ = ('format_description', 'strips_checksum', '_decoders', '_generic')

    def __init__(self, format_description=None):
        self.format_description = format_description
        self.strips_checksum = format_description is not None and \
            format_description.checksum_algorithm == BINLOG_CHECKSUM_ALG_CRC32
        self._generic = EventDecoder(GenericEvent)
        self._decoders = self._build()

    def _build(self):
        decoders = {
            EVENT_TYPE.FORMAT_DESCRIPTION_EVENT: EventDecoder(FormatDescriptionEvent),
            EVENT_TYPE.TABLE_MAP_EVENT: EventDecoder(
                TableMapEvent,
                table_id_size=table_id_size(self.format_description, EVENT_TYPE.TABLE_MAP_EVENT)),
        }
        for event_type, event_class in SCALAR_EVENT_MAP.items():
            decoders[event_type] = EventDecoder(event_class)
        for event_type, (event_class, version, needs_after_bitmap) in ROWS_EVENT_MAP.items():
            decoders[event_type] = EventDecoder(
                event_class,
                table_id_size=table_id_size(self.format_description, event_type),
                version=version,
                needs_after_bitmap=needs_after_bitmap)

        logger.debug('event registry built for %r, checksum stripped: %s',
                     self.format_description, self.strips_checksum)
        return decoders

    def resolve(self, header):
        """
        Decoder of an event, unknown types fall back to GenericEvent
        """
        return self._decoders.get(header.event_type, self._generic)

    def is_known(self, event_type):
        return event_type in self._decoders
