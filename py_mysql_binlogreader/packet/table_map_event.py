# coding=utf-8
from py_mysql_binlogreader.constants import FIELD_TYPE
from py_mysql_binlogreader.packet.binlog_event import BinlogEvent
from py_mysql_binlogreader.protocol.proto import Proto


def read_column_meta(proto, column_type):
    """
    Read the metadata of one column, its width depends on the column type
    """
    if column_type in FIELD_TYPE.META_1_BYTE:
        return proto.get_fixed_int(1)
    elif column_type in (FIELD_TYPE.VARCHAR, FIELD_TYPE.VAR_STRING, FIELD_TYPE.BIT):
        # little endian, for BIT: low byte bits, high byte bytes
        return proto.get_fixed_int(2)
    elif column_type in FIELD_TYPE.META_2_BYTES:
        # NEWDECIMAL: precision, decimals   STRING/ENUM/SET: real type, length
        return proto.get_fixed_int_be(2)
    return 0


class TableMapEvent(BinlogEvent):
    '''
    4/6            table id
    2              flags
    1              schema name length
    string[$len]   schema name
    1              [00]
    1              table name length
    string[$len]   table name
    1              [00]
    lenenc_int     column count
    string[$len]   column type def, one byte per column
    lenenc_str     column meta def
    n              null bitmap, length (column_count + 7) / 8
    string[EOF]    optional metadata, type / lenenc length / value triplets
    '''
    __slots__ = ('table_id', 'flags', 'schema', 'table', 'column_count', 'column_types',
                 'column_meta', 'null_bitmap', 'unsigned_columns', 'column_names', 'optional_metadata')

    def __init__(self, header=None):
        super(TableMapEvent, self).__init__(header)
        self.column_types = []
        self.column_meta = []
        self.null_bitmap = b''
        self.unsigned_columns = []
        self.column_names = []
        self.optional_metadata = []

    def is_nullable(self, index):
        return bool(self.null_bitmap[index // 8] & (1 << (index % 8)))

    def is_unsigned(self, index):
        return index < len(self.unsigned_columns) and self.unsigned_columns[index]

    @staticmethod
    def loadFromPacket(packet, header=None, context=None, table_id_size=6):
        obj = TableMapEvent(header)
        proto = Proto(packet)
        encoding = BinlogEvent.text_encoding(context)

        obj.table_id = proto.get_fixed_int(table_id_size)
        obj.flags = proto.get_fixed_int(2)

        obj.schema = proto.get_fixed_str(proto.get_fixed_int(1), encoding)
        proto.get_filler(1)
        obj.table = proto.get_fixed_str(proto.get_fixed_int(1), encoding)
        proto.get_filler(1)

        obj.column_count = proto.get_lenenc_int() or 0
        obj.column_types = list(proto.read(obj.column_count))

        meta = Proto(proto.get_lenenc_bytes())
        obj.column_meta = [read_column_meta(meta, column_type) for column_type in obj.column_types]

        obj.null_bitmap = proto.read((obj.column_count + 7) // 8)

        if proto.has_remaining_data():
            obj._read_optional_metadata(proto, encoding)

        if context is not None:
            context.tables[obj.table_id] = obj

        return obj

    def _read_optional_metadata(self, proto, encoding):
        while proto.has_remaining_data():
            field_type = proto.get_fixed_int(1)
            value = proto.get_lenenc_bytes()
            self.optional_metadata.append((field_type, value))

            if field_type == FIELD_TYPE.SIGNEDNESS:
                self.unsigned_columns = self._read_signedness(value)
            elif field_type == FIELD_TYPE.COLUMN_NAME:
                names = Proto(value)
                self.column_names = []
                while names.has_remaining_data():
                    self.column_names.append(names.get_lenenc_bytes().decode(encoding, 'replace'))

    def _read_signedness(self, value):
        # one bit per numeric column, most significant bit first
        unsigned = []
        numeric_index = 0
        for column_type in self.column_types:
            if column_type not in FIELD_TYPE.NUMERIC_TYPES:
                unsigned.append(False)
                continue
            byte = value[numeric_index // 8] if numeric_index // 8 < len(value) else 0
            unsigned.append(bool(byte & (0x80 >> (numeric_index % 8))))
            numeric_index += 1
        return unsigned

    def __repr__(self):
        return '<TableMapEvent table_id=%d %s.%s columns=%d>' % (
            self.table_id, self.schema, self.table, self.column_count)
