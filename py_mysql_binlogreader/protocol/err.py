#!/usr/bin/env python
# coding=utf-8


class BinlogError(Exception):
    '''Base class for every binlog decoding error'''


class BadMagic(BinlogError):
    '''The stream does not start with the binlog magic bytes'''


class MalformedHeader(BinlogError):
    '''Short event header or an event size smaller than the header'''


class UnsupportedHeaderLength(BinlogError):
    '''The format description event declares a header length other than 19'''


class TruncatedBody(BinlogError):
    '''The event body is shorter than its declared or fixed size'''


class TruncatedRow(TruncatedBody):
    '''A row image reads past the end of the rows event body'''


class UnknownTable(BinlogError):
    '''A rows event references a table id without a preceding table map event'''

    def __init__(self, table_id):
        super(UnknownTable, self).__init__('no table map event for table id %d' % table_id)
        self.table_id = table_id


class ColumnCountMismatch(BinlogError):
    '''The column count of a rows event differs from its table map'''

    def __init__(self, table_id, expected, actual):
        super(ColumnCountMismatch, self).__init__(
            'table id %d: table map has %d columns, rows event has %d' % (table_id, expected, actual))
        self.table_id = table_id
        self.expected = expected
        self.actual = actual


class UnsupportedColumnType(BinlogError):
    '''A row image holds a column type that cannot be decoded'''


# Errors that break event framing or the decoding parameters, never downgraded in permissive mode
FATAL_ERRORS = (BadMagic, MalformedHeader, UnsupportedHeaderLength)
