# coding=utf-8

import logging

logger = logging.getLogger('py_mysql_binlogreader')


def hex_ba(string):
    """
    Build a bytearray from a spaced hex string, as printed by hexdump

    >>> hex_ba('fe 62 69 6e')
    bytearray(b'\\xfebin')
    """
    ba = bytearray()
    fields = string.strip().split()
    for field in fields:
        ba.append(int(field, 16))
    return ba


def _printable(chunk):
    return ''.join(chr(c) if 32 <= c < 127 else '.' for c in chunk)


def hexdump(packet, width=16):
    """
    Render a packet as offset / hex / ascii lines, one line per width bytes

    >>> print(hexdump(b'\\xfebin\\x00'), end='')
    00000000  FE 62 69 6E 00                                    .bin.
    """
    lines = []
    half = width // 2
    for offset in range(0, len(packet), width):
        chunk = bytes(packet[offset:offset + width])
        hex_part = ' '.join('%02X' % c for c in chunk[:half])
        ascii_part = _printable(chunk[:half])
        if len(chunk) > half:
            hex_part += '  ' + ' '.join('%02X' % c for c in chunk[half:])
            ascii_part += ' ' + _printable(chunk[half:])
        lines.append('%08X  %-*s  %s' % (offset, width * 3, hex_part, ascii_part))
    return ''.join(line + '\n' for line in lines)


def dump(packet, title='Event Dump'):
    """
    Dumps a packet to the logger
    """
    if not logger.isEnabledFor(logging.DEBUG):
        return

    logger.debug('%s\n%s', title, hexdump(packet))
