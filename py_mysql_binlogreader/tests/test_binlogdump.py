import contextlib
import io
import logging
import os
import shutil
import tempfile
import unittest

from py_mysql_binlogreader import binlogdump
from py_mysql_binlogreader.constants import EVENT_TYPE
from py_mysql_binlogreader.tests.binlog_builder import BinlogBuilder, query_body, xid_body

__all__ = ["TestBinlogDump"]

CONF = """
[Parser]
file = %(file)s
offset = 4
charset = utf8mb4
strict = yes

[Logging]
level = 20
log_name = binlogdump
log_dir = %(log_dir)s
"""


class TestBinlogDump(unittest.TestCase):

    def setUp(self):
        self.tmp_dir = tempfile.mkdtemp()
        self.root_handlers = list(logging.getLogger().handlers)
        self.root_level = logging.getLogger().level

        builder = BinlogBuilder(checksum=True).format_description()
        builder.add(EVENT_TYPE.QUERY_EVENT, query_body('test', 'BEGIN'))
        builder.add(EVENT_TYPE.XID_EVENT, xid_body(3))
        self.binlog = os.path.join(self.tmp_dir, 'mysql-bin.000001')
        with open(self.binlog, 'wb') as f:
            f.write(builder.getvalue())

        self.conf_file = os.path.join(self.tmp_dir, 'binlogdump.conf')
        with open(self.conf_file, 'w') as f:
            f.write(CONF % {'file': self.binlog, 'log_dir': os.path.join(self.tmp_dir, 'log')})

    def tearDown(self):
        root = logging.getLogger()
        for handler in list(root.handlers):
            if handler not in self.root_handlers:
                root.removeHandler(handler)
                handler.close()
        root.setLevel(self.root_level)
        shutil.rmtree(self.tmp_dir)

    def run_main(self, argv):
        out = io.StringIO()
        with contextlib.redirect_stdout(out):
            code = binlogdump.main(argv)
        return code, out.getvalue()

    def test_load_config_defaults(self):
        config = binlogdump.load_config(os.path.join(self.tmp_dir, 'missing.conf'))
        self.assertEqual(config['Parser'].getint('offset'), 4)
        self.assertTrue(config['Parser'].getboolean('strict'))
        self.assertNotIn('file', config['Parser'])

    def test_dump(self):
        code, out = self.run_main([self.conf_file])
        self.assertEqual(code, 0)
        self.assertIn('FORMAT_DESCRIPTION_EVENT', out)
        self.assertIn('QUERY_EVENT', out)
        self.assertIn('<XidEvent xid=3>', out)
        self.assertTrue(os.path.isfile(os.path.join(self.tmp_dir, 'log', 'binlogdump.log')))

    def test_bad_file(self):
        bad = os.path.join(self.tmp_dir, 'not-a-binlog')
        with open(bad, 'wb') as f:
            f.write(b'garbage')
        code, _ = self.run_main([self.conf_file, bad])
        self.assertEqual(code, 1)

    def test_missing_file(self):
        code, _ = self.run_main([self.conf_file, os.path.join(self.tmp_dir, 'mysql-bin.999999')])
        self.assertEqual(code, 1)
