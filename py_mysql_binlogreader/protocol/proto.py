# coding=utf-8
from py_mysql_binlogreader.protocol.err import BinlogError, TruncatedBody


class Proto(object):
    """
    Little endian read cursor over an event body.

    Every read past the end of the body raises TruncatedBody,
    the build_* helpers produce the same encodings and are used to
    synthesize binlog fixtures.
    """
    __slots__ = ('packet', 'offset')

    def __init__(self, packet, offset=0):
        self.packet = packet
        self.offset = offset

    def has_remaining_data(self):
        return len(self.packet) - self.offset > 0

    def remaining(self):
        return len(self.packet) - self.offset

    @staticmethod
    def build_fixed_int(size, value):
        """
        Build a little endian fixed int, negative values are two's complement

        >>> Proto.build_fixed_int(1, 0)
        bytearray(b'\\x00')

        >>> Proto.build_fixed_int(2, 0xFFFF)
        bytearray(b'\\xff\\xff')

        >>> Proto.build_fixed_int(3, 1)
        bytearray(b'\\x01\\x00\\x00')

        >>> Proto.build_fixed_int(6, 0x0102)
        bytearray(b'\\x02\\x01\\x00\\x00\\x00\\x00')

        >>> Proto.build_fixed_int(4, -1)
        bytearray(b'\\xff\\xff\\xff\\xff')
        """
        value &= (1 << (size * 8)) - 1
        return bytearray(value.to_bytes(size, 'little'))

    @staticmethod
    def build_lenenc_int(value):
        """
        Build a packed (length encoded) int

        >>> Proto.build_lenenc_int(0)
        bytearray(b'\\x00')

        >>> Proto.build_lenenc_int(251)
        bytearray(b'\\xfc\\xfb\\x00')

        >>> Proto.build_lenenc_int((2**16))
        bytearray(b'\\xfd\\x00\\x00\\x01')

        >>> Proto.build_lenenc_int((2**24))
        bytearray(b'\\xfe\\x00\\x00\\x00\\x01\\x00\\x00\\x00\\x00')
        """
        if value < 251:
            return Proto.build_fixed_int(1, value)
        elif value < 2**16:
            return Proto.build_byte(0xFC) + Proto.build_fixed_int(2, value)
        elif value < 2**24:
            return Proto.build_byte(0xFD) + Proto.build_fixed_int(3, value)
        return Proto.build_byte(0xFE) + Proto.build_fixed_int(8, value)

    @staticmethod
    def build_fixed_str(size, value):
        """
        Build a fixed length string

        >>> Proto.build_fixed_str(2, 'ab')
        bytearray(b'ab')

        Zero pad if size > sizeOf(value):
        >>> Proto.build_fixed_str(3, b'ab')
        bytearray(b'ab\\x00')
        """
        if isinstance(value, str):
            value = value.encode('utf-8')
        packet = bytearray(size)
        packet[:len(value)] = value[:size]
        return packet

    @staticmethod
    def build_filler(size, fill=0x00):
        """
        Build a set of filler

        >>> Proto.build_filler(2)
        bytearray(b'\\x00\\x00')

        >>> Proto.build_filler(1, 0x1c)
        bytearray(b'\\x1c')
        """
        return bytearray([fill] * size)

    @staticmethod
    def build_byte(value):
        """
        Build a extendable byte

        >>> Proto.build_byte(0xFF)
        bytearray(b'\\xff')
        """
        packet = bytearray(1)
        packet[0] = value
        return packet

    def read(self, size):
        """
        Extract raw bytes from the current position

        >>> packet = Proto(b'abc')
        >>> packet.read(2)
        b'ab'
        >>> packet.read(2)  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ...
        TruncatedBody: need 2 bytes at offset 2, 1 left
        """
        if size < 0 or self.offset + size > len(self.packet):
            raise TruncatedBody('need %d bytes at offset %d, %d left' % (size, self.offset, self.remaining()))
        value = bytes(self.packet[self.offset:self.offset + size])
        self.offset += size
        return value

    def get_fixed_int(self, size):
        """
        Extract an unsigned little endian int

        >>> packet = Proto(Proto.build_fixed_int(6, 42))
        >>> packet.get_fixed_int(6)
        42
        """
        return int.from_bytes(self.read(size), 'little')

    def get_signed_int(self, size):
        """
        Extract a signed little endian int

        >>> Proto(Proto.build_fixed_int(3, -2)).get_signed_int(3)
        -2
        """
        return int.from_bytes(self.read(size), 'little', signed=True)

    def get_fixed_int_be(self, size):
        """
        Extract an unsigned big endian int

        >>> Proto(b'\\x01\\x00').get_fixed_int_be(2)
        256
        """
        return int.from_bytes(self.read(size), 'big')

    def get_filler(self, size):
        """
        Skip over packet filler

        >>> packet = Proto(bytearray(5))
        >>> packet.get_filler(2)
        >>> packet.offset
        2
        """
        self.read(size)

    def get_lenenc_int(self):
        """
        Extract a packed int, 251 stands for NULL

        >>> Proto(Proto.build_lenenc_int(255)).get_lenenc_int()
        255

        >>> Proto(Proto.build_lenenc_int(70000)).get_lenenc_int()
        70000

        >>> Proto(b'\\xfb').get_lenenc_int() is None
        True
        """
        first = self.get_fixed_int(1)
        if first < 251:
            return first
        elif first == 251:
            return None
        elif first == 252:
            return self.get_fixed_int(2)
        elif first == 253:
            return self.get_fixed_int(3)
        elif first == 254:
            return self.get_fixed_int(8)
        raise BinlogError('invalid packed integer prefix 0x%02x at offset %d' % (first, self.offset - 1))

    def get_fixed_str(self, size, encoding='utf-8'):
        """
        Extract a fixed length string from the current packet position

        >>> target = "The brown dog did stuff"
        >>> pckt = Proto.build_fixed_str(len(target), target)
        >>> Proto(pckt).get_fixed_str(len(pckt))
        'The brown dog did stuff'
        """
        return self.read(size).decode(encoding, 'replace')

    def get_eop_bytes(self):
        """
        Extract everything up to the end of the packet

        >>> packet = Proto(b'\\x01ab', 1)
        >>> packet.get_eop_bytes()
        b'ab'
        >>> packet.has_remaining_data()
        False
        """
        return self.read(self.remaining())

    def get_eop_str(self, encoding='utf-8'):
        """
        Extract a eop string from the current packet position

        >>> target = "The brown dog did stuff"
        >>> Proto(Proto.build_fixed_str(len(target), target)).get_eop_str()
        'The brown dog did stuff'
        """
        return self.get_eop_bytes().decode(encoding, 'replace')

    def get_lenenc_bytes(self):
        """
        Extract a length encoded byte string

        >>> Proto(b'\\x03abcd').get_lenenc_bytes()
        b'abc'
        """
        return self.read(self.get_lenenc_int() or 0)


if __name__ == "__main__":
    import doctest
    doctest.testmod()
