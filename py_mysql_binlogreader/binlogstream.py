# -*- coding: utf-8 -*-
import logging

from py_mysql_binlogreader.constants.EVENT_TYPE import BINLOG_FILE_HEADER, FORMAT_DESCRIPTION_EVENT
from py_mysql_binlogreader.parser import BinlogParser
from py_mysql_binlogreader.protocol.err import BadMagic

logger = logging.getLogger('py_mysql_binlogreader')


class BinLogStreamReader(object):
    """Read events from a binlog file

    source is a file name or a binary file object, offset the position of
    the first event to return; it is raised to 4 to skip the magic bytes.
    """

    def __init__(self, source, offset=4, parser=None, filter_sql=None, charset='utf8mb4', strict=True):
        self._parser = parser or BinlogParser(charset=charset, strict=strict, filter_sql=filter_sql)
        if filter_sql is not None:
            self._parser.filter_sql = filter_sql
        self._offset = max(offset, len(BINLOG_FILE_HEADER))
        self._owns_file = isinstance(source, (str, bytes)) or hasattr(source, '__fspath__')
        self._file = open(source, 'rb') if self._owns_file else source
        self._name = source if self._owns_file else getattr(source, 'name', repr(source))
        self._started = False

    @property
    def parser(self):
        return self._parser

    def _check_magic(self):
        magic = self._file.read(len(BINLOG_FILE_HEADER))
        if magic != BINLOG_FILE_HEADER:
            raise BadMagic('%s is not a valid binlog file, head 4 bytes must be %r, got %r' % (
                self._name, BINLOG_FILE_HEADER, magic))

    def _start(self):
        self._check_magic()
        if self._offset > len(BINLOG_FILE_HEADER):
            # decoding parameters come from the format description event at the start of the file
            event = self._parser.read_event(self._file)
            if event is None or event.event_type != FORMAT_DESCRIPTION_EVENT:
                logger.warning('%s has no format description event at position 4', self._name)
            logger.info('Seek %s to %d', self._name, self._offset)
            self._file.seek(self._offset)
        self._started = True

    def fetchone(self):
        if not self._started:
            self._start()
        return self._parser.read_event(self._file)

    def close(self):
        if self._owns_file:
            self._file.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def __iter__(self):
        return iter(self.fetchone, None)
