# coding=utf-8
from py_mysql_binlogreader.packet.binlog_event import BinlogEvent
from py_mysql_binlogreader.packet.row_values import read_value
from py_mysql_binlogreader.protocol.err import ColumnCountMismatch, TruncatedBody, TruncatedRow, UnknownTable
from py_mysql_binlogreader.protocol.proto import Proto

STMT_END_F = 0x01
NO_FOREIGN_KEY_CHECKS_F = 0x02
RELAXED_UNIQUE_CHECKS_F = 0x04
COMPLETE_ROWS_F = 0x08


def bitmap_bits(bitmap, count):
    """
    Indexes of the set bits of a column bitmap

    >>> bitmap_bits(b'\\x05', 3)
    [0, 2]
    """
    return [i for i in range(count) if bitmap[i // 8] & (1 << (i % 8))]


class RowsEvent(BinlogEvent):
    '''
    4/6            table id
    2              flags
    -- version 2 only
    2              extra data length, including these 2 bytes
    string[$len-2] extra data
    --
    lenenc_int     column count
    n              columns present bitmap 1, length (column_count + 7) / 8
    n              columns present bitmap 2, UPDATE_ROWS_EVENT v1/v2 only
    rows           until the end of the event:
      n            null bitmap, length (bits set in the bitmap + 7) / 8
      values       one per present non null column
    '''
    __slots__ = ('version', 'table_id', 'table', 'flags', 'extra_data', 'column_count',
                 'columns_present_bitmap1', 'columns_present_bitmap2', 'rows')

    def __init__(self, header=None):
        super(RowsEvent, self).__init__(header)
        self.version = 2
        self.table = None
        self.extra_data = b''
        self.columns_present_bitmap2 = None
        self.rows = []

    @property
    def schema_name(self):
        return self.table.schema if self.table is not None else None

    @property
    def table_name(self):
        return self.table.table if self.table is not None else None

    @classmethod
    def loadFromPacket(cls, packet, header=None, context=None, table_id_size=6, version=2,
                       needs_after_bitmap=False):
        obj = cls(header)
        obj.version = version
        proto = Proto(packet)
        tables = context.tables if context is not None else {}
        encoding = BinlogEvent.text_encoding(context)

        obj.table_id = proto.get_fixed_int(table_id_size)
        if obj.table_id not in tables:
            raise UnknownTable(obj.table_id)
        obj.table = tables[obj.table_id]

        obj.flags = proto.get_fixed_int(2)

        if version == 2:
            extra_data_length = proto.get_fixed_int(2)
            obj.extra_data = proto.read(max(extra_data_length - 2, 0))

        obj.column_count = proto.get_lenenc_int() or 0
        if obj.column_count != obj.table.column_count:
            raise ColumnCountMismatch(obj.table_id, obj.table.column_count, obj.column_count)

        bitmap_size = (obj.column_count + 7) // 8
        obj.columns_present_bitmap1 = proto.read(bitmap_size)
        if needs_after_bitmap:
            obj.columns_present_bitmap2 = proto.read(bitmap_size)

        obj.rows = []
        while proto.has_remaining_data():
            start = proto.offset
            obj.rows.append(obj._read_row_entry(proto, encoding))
            if proto.offset == start:
                # no present columns, the image consumed nothing
                raise TruncatedRow('table id %d: empty row image with %d bytes left at offset %d' % (
                    obj.table_id, proto.remaining(), start))

        return obj

    def _read_row_entry(self, proto, encoding):
        return self._read_row(proto, self.columns_present_bitmap1, encoding)

    def _read_row(self, proto, bitmap, encoding):
        start = proto.offset
        try:
            return self._read_row_image(proto, bitmap, encoding)
        except TruncatedRow:
            raise
        except TruncatedBody as e:
            raise TruncatedRow('table id %d: row image at offset %d: %s' % (self.table_id, start, e))

    def _read_row_image(self, proto, bitmap, encoding):
        table = self.table
        present = bitmap_bits(bitmap, self.column_count)
        null_bitmap = proto.read((len(present) + 7) // 8)

        values = []
        for null_index, column in enumerate(present):
            if null_bitmap[null_index // 8] & (1 << (null_index % 8)):
                values.append(None)
                continue
            values.append(read_value(proto, table.column_types[column], table.column_meta[column],
                                     table.is_unsigned(column), encoding))
        return tuple(values)

    @property
    def columns(self):
        """
        Indexes of the columns present in each row
        """
        return bitmap_bits(self.columns_present_bitmap1, self.column_count)

    def __repr__(self):
        return '<%s table_id=%d %s.%s rows=%d>' % (
            self.__class__.__name__, self.table_id, self.schema_name, self.table_name, len(self.rows))


class WriteRowsEvent(RowsEvent):
    """
    Inserted rows, each row is a tuple of the present column values
    """
    __slots__ = ()


class DeleteRowsEvent(RowsEvent):
    """
    Deleted rows, each row is a tuple of the present column values
    """
    __slots__ = ()


class UpdateRowsEvent(RowsEvent):
    """
    Updated rows, each row is a (before, after) pair of value tuples.

    The after image uses the second bitmap when the event carries one.
    """
    __slots__ = ()

    def _read_row_entry(self, proto, encoding):
        before = self._read_row(proto, self.columns_present_bitmap1, encoding)
        after_bitmap = self.columns_present_bitmap2
        if after_bitmap is None:
            after_bitmap = self.columns_present_bitmap1
        after = self._read_row(proto, after_bitmap, encoding)
        return before, after

    @property
    def after_columns(self):
        bitmap = self.columns_present_bitmap2
        if bitmap is None:
            bitmap = self.columns_present_bitmap1
        return bitmap_bits(bitmap, self.column_count)
