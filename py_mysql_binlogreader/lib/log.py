# coding=utf-8
import logging
import os
import sys
from logging.handlers import RotatingFileHandler

LOG_FORMAT = '%(asctime)s %(levelname)s [%(process)d] %(filename)s %(message)s '


def init_logger(log_name=None, level=logging.INFO, logger=None, log_dir=None, stream=None):
    """
    Log to <log_dir>/<log_name>.log and to stream (stderr by default).

    log_dir defaults to the log/ directory next to the running script's
    directory. Event output owns stdout, so the console handler does not
    write there unless asked to.
    """
    if logger is None:
        logger = logging.getLogger()
    script_dir, script_name = os.path.split(os.path.abspath(sys.argv[0]))
    name = log_name or os.path.splitext(script_name)[0]
    if not log_dir:
        log_dir = os.path.join(os.path.dirname(script_dir), 'log')

    if not os.path.isdir(log_dir):
        os.makedirs(log_dir)

    fmt = logging.Formatter(LOG_FORMAT)

    # 10M per file
    file_handler = RotatingFileHandler(os.path.join(log_dir, name + '.log'), mode='a', maxBytes=10240000,
                                       backupCount=100, encoding="utf8")
    file_handler.setFormatter(fmt)
    logger.addHandler(file_handler)

    console_handler = logging.StreamHandler(stream or sys.stderr)
    console_handler.setFormatter(fmt)
    logger.addHandler(console_handler)
    logger.setLevel(level)

    return logger
