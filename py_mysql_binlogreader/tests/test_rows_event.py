import struct
import unittest

from py_mysql_binlogreader.constants import FIELD_TYPE
from py_mysql_binlogreader.packet.rows_event import DeleteRowsEvent, UpdateRowsEvent, WriteRowsEvent
from py_mysql_binlogreader.packet.table_map_event import TableMapEvent
from py_mysql_binlogreader.parser import BinlogContext
from py_mysql_binlogreader.protocol.err import ColumnCountMismatch, TruncatedRow, UnknownTable, \
    UnsupportedColumnType
from py_mysql_binlogreader.tests.binlog_builder import int_value, row_image, rows_body, table_map_body, \
    varchar_value

__all__ = ["TestRowsEvent", "TestColumnValues"]


def table_context(columns, table_id=1, optional_metadata=b''):
    context = BinlogContext('utf8mb4')
    TableMapEvent.loadFromPacket(table_map_body(table_id, 'test', 't1', columns,
                                                optional_metadata=optional_metadata), context=context)
    return context


class TestRowsEvent(unittest.TestCase):

    COLUMNS = [(FIELD_TYPE.LONG, 0), (FIELD_TYPE.VARCHAR, 60)]

    def test_write_rows(self):
        context = table_context(self.COLUMNS)
        body = rows_body(1, 2, [
            row_image([int_value(4, 42), varchar_value('ok')]),
            row_image([int_value(4, -7), None]),
        ])
        event = WriteRowsEvent.loadFromPacket(body, context=context)

        self.assertEqual(event.table_id, 1)
        self.assertEqual(event.schema_name, 'test')
        self.assertEqual(event.table_name, 't1')
        self.assertEqual(event.flags, 1)
        self.assertEqual(event.column_count, 2)
        self.assertEqual(event.columns, [0, 1])
        self.assertIsNone(event.columns_present_bitmap2)
        self.assertEqual(event.rows, [(42, 'ok'), (-7, None)])

    def test_extra_data(self):
        context = table_context(self.COLUMNS)
        body = rows_body(1, 2, [row_image([int_value(4, 1), varchar_value('a')])], extra_data=b'\x00\x01\x02')
        event = DeleteRowsEvent.loadFromPacket(body, context=context)
        self.assertEqual(event.extra_data, b'\x00\x01\x02')
        self.assertEqual(event.rows, [(1, 'a')])

    def test_v1_has_no_extra_data(self):
        context = table_context(self.COLUMNS)
        body = rows_body(1, 2, [row_image([int_value(4, 1), varchar_value('a')])], version=1)
        event = WriteRowsEvent.loadFromPacket(body, context=context, version=1)
        self.assertEqual(event.version, 1)
        self.assertEqual(event.rows, [(1, 'a')])

    def test_partial_columns(self):
        context = table_context(self.COLUMNS)
        body = rows_body(1, 2, [row_image([varchar_value('only')])], present=[1])
        event = DeleteRowsEvent.loadFromPacket(body, context=context)
        self.assertEqual(event.columns, [1])
        self.assertEqual(event.rows, [('only',)])

    def test_update_rows(self):
        context = table_context(self.COLUMNS)
        body = rows_body(1, 2, [
            row_image([int_value(4, 1), varchar_value('old')]),
            row_image([varchar_value('new')]),
        ], present=[0, 1], present_after=[1])
        event = UpdateRowsEvent.loadFromPacket(body, context=context, needs_after_bitmap=True)

        self.assertEqual(event.columns, [0, 1])
        self.assertEqual(event.after_columns, [1])
        self.assertEqual(len(event.columns_present_bitmap2), 1)
        self.assertEqual(event.rows, [((1, 'old'), ('new',))])

    def test_update_rows_v0_single_bitmap(self):
        context = table_context(self.COLUMNS)
        body = rows_body(1, 2, [
            row_image([int_value(4, 1), varchar_value('old')]),
            row_image([int_value(4, 1), varchar_value('new')]),
        ], version=0)
        event = UpdateRowsEvent.loadFromPacket(body, context=context, version=0)
        self.assertIsNone(event.columns_present_bitmap2)
        self.assertEqual(event.after_columns, [0, 1])
        self.assertEqual(event.rows, [((1, 'old'), (1, 'new'))])

    def test_table_id_width(self):
        context = BinlogContext()
        TableMapEvent.loadFromPacket(table_map_body(0x01020304, 'test', 't1', self.COLUMNS, table_id_size=4),
                                     context=context, table_id_size=4)
        body = rows_body(0x01020304, 2, [row_image([int_value(4, 5), varchar_value('x')])], table_id_size=4)
        event = WriteRowsEvent.loadFromPacket(body, context=context, table_id_size=4)
        self.assertEqual(event.rows, [(5, 'x')])

    def test_unknown_table(self):
        body = rows_body(9, 2, [row_image([int_value(4, 42), varchar_value('ok')])])
        with self.assertRaises(UnknownTable) as cm:
            WriteRowsEvent.loadFromPacket(body, context=BinlogContext())
        self.assertEqual(cm.exception.table_id, 9)

        context = table_context(self.COLUMNS, table_id=9)
        self.assertEqual(WriteRowsEvent.loadFromPacket(body, context=context).rows, [(42, 'ok')])

    def test_column_count_mismatch(self):
        context = table_context(self.COLUMNS)
        body = rows_body(1, 3, [])
        with self.assertRaises(ColumnCountMismatch) as cm:
            WriteRowsEvent.loadFromPacket(body, context=context)
        self.assertEqual((cm.exception.expected, cm.exception.actual), (2, 3))

    def test_truncated_row(self):
        context = table_context(self.COLUMNS)
        body = rows_body(1, 2, [row_image([int_value(4, 42), varchar_value('truncated')])])
        with self.assertRaises(TruncatedRow):
            WriteRowsEvent.loadFromPacket(body[:-3], context=context)

    def test_no_present_columns_with_data_left(self):
        context = table_context([(FIELD_TYPE.TINY, 0)])
        with self.assertRaises(TruncatedRow):
            WriteRowsEvent.loadFromPacket(rows_body(1, 1, [b'\x07'], present=[]), context=context)
        with self.assertRaises(TruncatedRow):
            UpdateRowsEvent.loadFromPacket(rows_body(1, 1, [b'\x07'], present=[], present_after=[]),
                                           context=context, needs_after_bitmap=True)

    def test_no_present_columns_without_rows(self):
        context = table_context([(FIELD_TYPE.TINY, 0)])
        event = DeleteRowsEvent.loadFromPacket(rows_body(1, 1, [], present=[]), context=context)
        self.assertEqual(event.rows, [])

    def test_no_rows(self):
        context = table_context(self.COLUMNS)
        event = WriteRowsEvent.loadFromPacket(rows_body(1, 2, []), context=context)
        self.assertEqual(event.rows, [])

    def test_null_bitmap_counts_present_columns(self):
        # 9 columns but only 2 present: a 1 byte null bitmap
        columns = [(FIELD_TYPE.TINY, 0)] * 9
        context = table_context(columns)
        body = rows_body(1, 9, [row_image([None, int_value(1, 3)])], present=[0, 8])
        event = WriteRowsEvent.loadFromPacket(body, context=context)
        self.assertEqual(event.rows, [(None, 3)])


class TestColumnValues(unittest.TestCase):

    def decode(self, column_type, meta, value, optional_metadata=b''):
        context = table_context([(column_type, meta)], optional_metadata=optional_metadata)
        event = WriteRowsEvent.loadFromPacket(rows_body(1, 1, [row_image([value])]), context=context)
        return event.rows[0][0]

    def test_integers(self):
        self.assertEqual(self.decode(FIELD_TYPE.TINY, 0, b'\xff'), -1)
        self.assertEqual(self.decode(FIELD_TYPE.SHORT, 0, int_value(2, -300)), -300)
        self.assertEqual(self.decode(FIELD_TYPE.INT24, 0, int_value(3, -70000)), -70000)
        self.assertEqual(self.decode(FIELD_TYPE.LONGLONG, 0, int_value(8, 2 ** 40)), 2 ** 40)
        self.assertEqual(self.decode(FIELD_TYPE.YEAR, 0, b'\x7c'), 2024)

    def test_unsigned(self):
        signedness = bytes([FIELD_TYPE.SIGNEDNESS, 1, 0x80])
        self.assertEqual(self.decode(FIELD_TYPE.TINY, 0, b'\xff', signedness), 255)
        self.assertEqual(self.decode(FIELD_TYPE.LONG, 0, b'\xff\xff\xff\xff', signedness), 0xFFFFFFFF)

    def test_floats(self):
        self.assertEqual(self.decode(FIELD_TYPE.FLOAT, 4, struct.pack('<f', 1.5)), 1.5)
        self.assertEqual(self.decode(FIELD_TYPE.DOUBLE, 8, struct.pack('<d', -2.25)), -2.25)

    def test_new_decimal(self):
        meta = (10 << 8) | 2
        self.assertEqual(self.decode(FIELD_TYPE.NEWDECIMAL, meta, b'\x80\x12\xd6\x87\x59'), '1234567.89')
        self.assertEqual(self.decode(FIELD_TYPE.NEWDECIMAL, meta, b'\x7f\xed\x29\x78\xa6'), '-1234567.89')

    def test_strings(self):
        self.assertEqual(self.decode(FIELD_TYPE.VARCHAR, 1200, varchar_value('long', 2)), 'long')
        self.assertEqual(self.decode(FIELD_TYPE.VARCHAR, 60, varchar_value('中文')), '中文')
        self.assertEqual(self.decode(FIELD_TYPE.STRING, (FIELD_TYPE.STRING << 8) | 40, varchar_value('abc')),
                         'abc')
        # not valid in the connection charset
        self.assertEqual(self.decode(FIELD_TYPE.VARCHAR, 60, b'\x02\xff\xfe'), b'\xff\xfe')

    def test_enum_and_set(self):
        self.assertEqual(self.decode(FIELD_TYPE.STRING, (FIELD_TYPE.ENUM << 8) | 1, b'\x02'), 2)
        self.assertEqual(self.decode(FIELD_TYPE.STRING, (FIELD_TYPE.SET << 8) | 2, b'\x05\x00'), 5)

    def test_blob(self):
        self.assertEqual(self.decode(FIELD_TYPE.BLOB, 2, int_value(2, 3) + b'\x00\x01\x02'), b'\x00\x01\x02')
        self.assertEqual(self.decode(FIELD_TYPE.JSON, 4, int_value(4, 2) + b'{}'), b'{}')

    def test_bit(self):
        self.assertIs(self.decode(FIELD_TYPE.BIT, 1, b'\x01'), True)
        self.assertEqual(self.decode(FIELD_TYPE.BIT, (1 << 8) | 4, b'\x0a\xbc'), 0xabc)

    def test_date(self):
        self.assertEqual(self.decode(FIELD_TYPE.DATE, 0, int_value(3, (2024 << 9) | (4 << 5) | 16)), '2024-04-16')

    def test_datetime2(self):
        ymd = ((2024 * 13 + 4) << 5) | 16
        hms = (16 << 12) | (26 << 6) | 49
        value = ((ymd << 17) | hms) + 0x8000000000
        self.assertEqual(self.decode(FIELD_TYPE.DATETIME2, 0, value.to_bytes(5, 'big')), '2024-04-16 16:26:49')
        self.assertEqual(self.decode(FIELD_TYPE.DATETIME2, 3, value.to_bytes(5, 'big') + (1230).to_bytes(2, 'big')),
                         '2024-04-16 16:26:49.123')

    def test_datetime(self):
        self.assertEqual(self.decode(FIELD_TYPE.DATETIME, 0, int_value(8, 20240416162649)), '2024-04-16 16:26:49')

    def test_time2(self):
        hms = (12 << 12) | (34 << 6) | 56
        self.assertEqual(self.decode(FIELD_TYPE.TIME2, 0, (hms + 0x800000).to_bytes(3, 'big')), '12:34:56')
        self.assertEqual(
            self.decode(FIELD_TYPE.TIME2, 3, (hms + 0x800000).to_bytes(3, 'big') + (7890).to_bytes(2, 'big')),
            '12:34:56.789')

    def test_time(self):
        self.assertEqual(self.decode(FIELD_TYPE.TIME, 0, int_value(3, 123456)), '12:34:56')

    def test_timestamp(self):
        self.assertEqual(self.decode(FIELD_TYPE.TIMESTAMP, 0, int_value(4, 1713256009)), 1713256009)
        self.assertEqual(self.decode(FIELD_TYPE.TIMESTAMP2, 0, (1713256009).to_bytes(4, 'big')), 1713256009)
        self.assertAlmostEqual(self.decode(FIELD_TYPE.TIMESTAMP2, 2, (1713256009).to_bytes(4, 'big') + b'\x0c'),
                               1713256009.12)

    def test_old_decimal_unsupported(self):
        with self.assertRaises(UnsupportedColumnType):
            self.decode(FIELD_TYPE.DECIMAL, 0, b'\x00')
