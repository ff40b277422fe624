import binascii

from py_mysql_binlogreader.packet.binlog_event import BinlogEvent
from py_mysql_binlogreader.protocol.proto import Proto


def format_sid(sid):
    nibbles = binascii.hexlify(sid).decode('ascii')
    return '%s-%s-%s-%s-%s' % (nibbles[:8], nibbles[8:12], nibbles[12:16], nibbles[16:20], nibbles[20:])


class GtidEvent(BinlogEvent):
    '''
    1              commit flag
    16             sid (server uuid)
    8              gno
    ...            logical clock and commit timestamps, not decoded
    '''
    __slots__ = ('commit_flag', 'sid', 'gno')

    @staticmethod
    def loadFromPacket(packet, header=None, context=None):
        obj = GtidEvent(header)
        proto = Proto(packet)

        obj.commit_flag = proto.get_fixed_int(1) == 1
        obj.sid = proto.read(16)
        obj.gno = proto.get_fixed_int(8)

        return obj

    @property
    def gtid(self):
        """GTID = source_id:transaction_id
        Eg: 3E11FA47-71CA-11E1-9E33-C80AA9429562:23"""
        return '%s:%d' % (format_sid(self.sid), self.gno)

    def __repr__(self):
        return '<%s "%s">' % (self.__class__.__name__, self.gtid)


class AnonymousGtidEvent(GtidEvent):
    __slots__ = ()

    @staticmethod
    def loadFromPacket(packet, header=None, context=None):
        gtid = GtidEvent.loadFromPacket(packet, header, context)
        obj = AnonymousGtidEvent(header)
        obj.commit_flag, obj.sid, obj.gno = gtid.commit_flag, gtid.sid, gtid.gno
        return obj


class PreviousGtidsEvent(BinlogEvent):
    '''
    8              number of sids
      16           sid
      8            number of intervals
        8          interval start
        8          interval end (exclusive)
    '''
    __slots__ = ('gtid_sets',)

    @staticmethod
    def loadFromPacket(packet, header=None, context=None):
        obj = PreviousGtidsEvent(header)
        proto = Proto(packet)

        obj.gtid_sets = []
        n_sids = proto.get_fixed_int(8)
        for _ in range(n_sids):
            sid = format_sid(proto.read(16))
            intervals = []
            for _ in range(proto.get_fixed_int(8)):
                start = proto.get_fixed_int(8)
                end = proto.get_fixed_int(8)
                intervals.append((start, end - 1))
            obj.gtid_sets.append((sid, intervals))

        return obj

    @property
    def gtid_set(self):
        parts = []
        for sid, intervals in self.gtid_sets:
            ranges = ['%d' % start if start == stop else '%d-%d' % (start, stop) for start, stop in intervals]
            parts.append(':'.join([sid] + ranges))
        return ','.join(parts)

    def __repr__(self):
        return '<PreviousGtidsEvent "%s">' % self.gtid_set


class MariadbGtid(object):
    __slots__ = ('domain_id', 'server_id', 'sequence_number')

    def __init__(self, domain_id=0, server_id=0, sequence_number=0):
        self.domain_id = domain_id
        self.server_id = server_id
        self.sequence_number = sequence_number

    def __eq__(self, other):
        return isinstance(other, MariadbGtid) and \
            (self.domain_id, self.server_id, self.sequence_number) == \
            (other.domain_id, other.server_id, other.sequence_number)

    def __hash__(self):
        return hash((self.domain_id, self.server_id, self.sequence_number))

    def __str__(self):
        return '%d-%d-%d' % (self.domain_id, self.server_id, self.sequence_number)

    def __repr__(self):
        return '<MariadbGtid %s>' % self


class MariadbGtidEvent(BinlogEvent):
    '''
    8              sequence number
    4              domain id
    1              flags
    [8]            commit id, not kept
    '''
    __slots__ = ('gtid',)

    @staticmethod
    def loadFromPacket(packet, header=None, context=None):
        obj = MariadbGtidEvent(header)
        proto = Proto(packet)

        sequence_number = proto.get_fixed_int(8)
        domain_id = proto.get_fixed_int(4)
        server_id = header.server_id if header is not None else 0
        obj.gtid = MariadbGtid(domain_id, server_id, sequence_number)

        return obj

    def __repr__(self):
        return '<MariadbGtidEvent "%s">' % self.gtid


class MariadbGtidListEvent(BinlogEvent):
    '''
    4              number of gtids (low 28 bits) and flags (high 4 bits)
      4            domain id
      4            server id
      8            sequence number
    '''
    __slots__ = ('gtids',)

    @staticmethod
    def loadFromPacket(packet, header=None, context=None):
        obj = MariadbGtidListEvent(header)
        proto = Proto(packet)

        count = proto.get_fixed_int(4) & ((1 << 28) - 1)
        obj.gtids = []
        for _ in range(count):
            domain_id = proto.get_fixed_int(4)
            server_id = proto.get_fixed_int(4)
            sequence_number = proto.get_fixed_int(8)
            obj.gtids.append(MariadbGtid(domain_id, server_id, sequence_number))

        return obj

    def __repr__(self):
        return '<MariadbGtidListEvent "%s">' % ','.join(str(gtid) for gtid in self.gtids)
