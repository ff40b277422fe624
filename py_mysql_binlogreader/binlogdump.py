import configparser
import logging
import os
import sys

from py_mysql_binlogreader.binlogstream import BinLogStreamReader
from py_mysql_binlogreader.lib.log import init_logger
from py_mysql_binlogreader.protocol.err import BinlogError

DEFAULTS = {
    "Parser": {"offset": "4", "charset": "utf8mb4", "strict": "yes"},
    "Logging": {"level": str(logging.INFO), "log_name": "binlogdump", "log_dir": ""},
}


def load_config(conf_file):
    config = configparser.ConfigParser()
    config.read_dict(DEFAULTS)
    config.read(conf_file)
    return config


def describe(event):
    header = event.header
    return "%s\t%d\t%d\t%d\t%r" % (event.event_name, header.timestamp, header.server_id, header.log_pos, event)


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    conf_file = len(argv) > 0 and argv[0] or os.path.dirname(__file__) + "/example.conf"
    config = load_config(conf_file)

    logger = init_logger(config["Logging"]["log_name"], config["Logging"].getint("level"),
                         log_dir=config["Logging"]["log_dir"] or None)

    parser_conf = config["Parser"]
    if len(argv) > 1:
        parser_conf["file"] = argv[1]
    if "file" not in parser_conf:
        logger.error("No binlog file configured in [Parser] of %s" % conf_file)
        return 1

    logger.info("Start reading %s at %s" % (parser_conf["file"], parser_conf["offset"]))

    count = 0
    try:
        with BinLogStreamReader(parser_conf["file"],
                                offset=parser_conf.getint("offset"),
                                charset=parser_conf["charset"],
                                strict=parser_conf.getboolean("strict"),
                                filter_sql=lambda sql: logger.debug("SQL: %s" % sql)) as reader:
            for event in reader:
                print(describe(event))
                count += 1
    except (BinlogError, OSError) as e:
        logger.error("Stop reading %s after %d events: %s" % (parser_conf["file"], count, e))
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted after %d events" % count)
        return 130

    logger.info("Read %d events from %s" % (count, parser_conf["file"]))
    return 0


if __name__ == "__main__":
    sys.exit(main())
