# coding=utf-8
"""
Decoding of single column values inside a row image.

The width and the interpretation of a value depend on the column type and
the column metadata of the table map event. Values come out as None, int,
float, bool, bytes or str; TIMESTAMP columns stay epoch seconds, the
other temporal types and DECIMAL are rendered as text.
"""
import struct

from py_mysql_binlogreader.constants import FIELD_TYPE
from py_mysql_binlogreader.protocol.err import UnsupportedColumnType

DIG_PER_DEC = 9
COMPRESSED_BYTES = (0, 1, 1, 2, 2, 3, 3, 4, 4, 4)

DATETIMEF_INT_OFS = 0x8000000000
TIMEF_INT_OFS = 0x800000
TIMEF_OFS = 0x800000000000


def _read_int(proto, size, unsigned):
    if unsigned:
        return proto.get_fixed_int(size)
    return proto.get_signed_int(size)


def _decode_text(data, encoding):
    try:
        return data.decode(encoding)
    except UnicodeDecodeError:
        return data


def _read_fraction(proto, fsp):
    """
    Fractional seconds part of TIME2/DATETIME2/TIMESTAMP2, in microseconds
    """
    size = (fsp + 1) // 2
    if size == 0:
        return 0
    return proto.get_fixed_int_be(size) * 100 ** (3 - size)


def _format_fraction(usec, fsp):
    if not fsp:
        return ''
    return '.' + ('%06d' % usec)[:fsp]


def read_new_decimal(proto, meta):
    """
    DECIMAL columns, stored as big endian groups of 9 digits, the sign is
    the inverted high bit of the first byte and negative values are stored
    as ones' complement
    """
    precision = meta >> 8
    decimals = meta & 0xFF
    integral = precision - decimals
    uncomp_integral = integral // DIG_PER_DEC
    uncomp_fractional = decimals // DIG_PER_DEC
    comp_integral = integral - uncomp_integral * DIG_PER_DEC
    comp_fractional = decimals - uncomp_fractional * DIG_PER_DEC

    size = uncomp_integral * 4 + COMPRESSED_BYTES[comp_integral] + \
        uncomp_fractional * 4 + COMPRESSED_BYTES[comp_fractional]
    buf = bytearray(proto.read(size))
    if not buf:
        return '0'

    positive = bool(buf[0] & 0x80)
    buf[0] ^= 0x80
    if not positive:
        buf = bytearray(b ^ 0xFF for b in buf)

    offset = 0

    def _group(width):
        nonlocal offset
        value = int.from_bytes(buf[offset:offset + width], 'big')
        offset += width
        return value

    integral_part = 0
    if comp_integral:
        integral_part = _group(COMPRESSED_BYTES[comp_integral])
    for _ in range(uncomp_integral):
        integral_part = integral_part * 10 ** DIG_PER_DEC + _group(4)

    fractional = ''
    for _ in range(uncomp_fractional):
        fractional += '%09d' % _group(4)
    if comp_fractional:
        fractional += '%0*d' % (comp_fractional, _group(COMPRESSED_BYTES[comp_fractional]))

    text = '%d' % integral_part
    if decimals:
        text += '.' + fractional
    return text if positive else '-' + text


def read_date(proto):
    value = proto.get_fixed_int(3)
    return '%04d-%02d-%02d' % (value >> 9, (value >> 5) & 0x0F, value & 0x1F)


def read_time(proto):
    value = proto.get_signed_int(3)
    sign = '-' if value < 0 else ''
    value = abs(value)
    return '%s%02d:%02d:%02d' % (sign, value // 10000, (value % 10000) // 100, value % 100)


def read_time2(proto, fsp):
    """
    TIME(fsp), 3 bytes big endian integer part with offset, then fsp bytes
    """
    if fsp in (1, 2):
        intpart = proto.get_fixed_int_be(3) - TIMEF_INT_OFS
        frac = proto.get_fixed_int(1)
        if frac > 0x7F:
            frac -= 0x100
        if intpart < 0 and frac:
            intpart += 1
            frac -= 0x100
        packed = (intpart << 24) + frac * 10000
    elif fsp in (3, 4):
        intpart = proto.get_fixed_int_be(3) - TIMEF_INT_OFS
        frac = proto.get_fixed_int_be(2)
        if frac > 0x7FFF:
            frac -= 0x10000
        if intpart < 0 and frac:
            intpart += 1
            frac -= 0x10000
        packed = (intpart << 24) + frac * 100
    elif fsp in (5, 6):
        packed = proto.get_fixed_int_be(6) - TIMEF_OFS
    else:
        packed = (proto.get_fixed_int_be(3) - TIMEF_INT_OFS) << 24

    sign = '-' if packed < 0 else ''
    packed = abs(packed)
    hms = packed >> 24
    usec = packed % (1 << 24)
    hour = (hms >> 12) % (1 << 10)
    minute = (hms >> 6) % (1 << 6)
    second = hms % (1 << 6)
    return '%s%02d:%02d:%02d%s' % (sign, hour, minute, second, _format_fraction(usec, fsp))


def read_datetime(proto):
    value = proto.get_fixed_int(8)
    date, time = divmod(value, 1000000)
    return '%04d-%02d-%02d %02d:%02d:%02d' % (
        date // 10000, (date % 10000) // 100, date % 100,
        time // 10000, (time % 10000) // 100, time % 100)


def read_datetime2(proto, fsp):
    """
    DATETIME(fsp), 5 bytes big endian:
      1 bit sign, 17 bits year*13+month, 5 bits day,
      5 bits hour, 6 bits minute, 6 bits second
    """
    intpart = proto.get_fixed_int_be(5) - DATETIMEF_INT_OFS
    usec = _read_fraction(proto, fsp)

    ymd = intpart >> 17
    ym = ymd >> 5
    hms = intpart % (1 << 17)
    return '%04d-%02d-%02d %02d:%02d:%02d%s' % (
        ym // 13, ym % 13, ymd % (1 << 5),
        hms >> 12, (hms >> 6) % (1 << 6), hms % (1 << 6),
        _format_fraction(usec, fsp))


def read_timestamp2(proto, fsp):
    seconds = proto.get_fixed_int_be(4)
    usec = _read_fraction(proto, fsp)
    if not fsp:
        return seconds
    return seconds + usec / 1000000.0


def read_bit(proto, meta):
    nbits = (meta >> 8) * 8 + (meta & 0xFF)
    value = proto.get_fixed_int_be((nbits + 7) // 8)
    if nbits == 1:
        return bool(value)
    return value


def read_string(proto, meta, encoding):
    """
    CHAR/BINARY/ENUM/SET share the STRING wire type, the real type and the
    max length are packed into the metadata
    """
    real_type = meta >> 8
    length = meta & 0xFF
    if (real_type & 0x30) != 0x30:
        # length above 255, two extra high bits stored inverted in the real type
        length |= ((real_type & 0x30) ^ 0x30) << 4
        real_type |= 0x30

    if real_type == FIELD_TYPE.ENUM or real_type == FIELD_TYPE.SET:
        return proto.get_fixed_int(length)

    size = proto.get_fixed_int(1 if length < 256 else 2)
    return _decode_text(proto.read(size), encoding)


def read_value(proto, column_type, meta, unsigned=False, encoding='utf-8'):
    """
    Read one non null column value
    """
    if column_type == FIELD_TYPE.TINY:
        return _read_int(proto, 1, unsigned)
    elif column_type == FIELD_TYPE.SHORT:
        return _read_int(proto, 2, unsigned)
    elif column_type == FIELD_TYPE.INT24:
        return _read_int(proto, 3, unsigned)
    elif column_type == FIELD_TYPE.LONG:
        return _read_int(proto, 4, unsigned)
    elif column_type == FIELD_TYPE.LONGLONG:
        return _read_int(proto, 8, unsigned)
    elif column_type == FIELD_TYPE.FLOAT:
        return struct.unpack('<f', proto.read(4))[0]
    elif column_type == FIELD_TYPE.DOUBLE:
        return struct.unpack('<d', proto.read(8))[0]
    elif column_type == FIELD_TYPE.YEAR:
        year = proto.get_fixed_int(1)
        return 1900 + year if year else 0
    elif column_type == FIELD_TYPE.NEWDECIMAL:
        return read_new_decimal(proto, meta)
    elif column_type in (FIELD_TYPE.DATE, FIELD_TYPE.NEWDATE):
        return read_date(proto)
    elif column_type == FIELD_TYPE.TIME:
        return read_time(proto)
    elif column_type == FIELD_TYPE.TIME2:
        return read_time2(proto, meta)
    elif column_type == FIELD_TYPE.DATETIME:
        return read_datetime(proto)
    elif column_type == FIELD_TYPE.DATETIME2:
        return read_datetime2(proto, meta)
    elif column_type == FIELD_TYPE.TIMESTAMP:
        return proto.get_fixed_int(4)
    elif column_type == FIELD_TYPE.TIMESTAMP2:
        return read_timestamp2(proto, meta)
    elif column_type in (FIELD_TYPE.VARCHAR, FIELD_TYPE.VAR_STRING):
        size = proto.get_fixed_int(1 if meta < 256 else 2)
        return _decode_text(proto.read(size), encoding)
    elif column_type == FIELD_TYPE.STRING:
        return read_string(proto, meta, encoding)
    elif column_type in (FIELD_TYPE.ENUM, FIELD_TYPE.SET):
        return proto.get_fixed_int(meta & 0xFF)
    elif column_type in FIELD_TYPE.BLOB_TYPES:
        return proto.read(proto.get_fixed_int(meta))
    elif column_type == FIELD_TYPE.BIT:
        return read_bit(proto, meta)
    elif column_type == FIELD_TYPE.NULL:
        return None

    raise UnsupportedColumnType('column type %d (meta %d) can not be decoded' % (column_type, meta))

