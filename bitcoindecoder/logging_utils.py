import sys
import logging

from bitcoindecoder import env


def logging_basic_config(filename=None, level=None):
    format = "%(asctime)s - %(name)s [%(levelname)s] - %(message)s"
    level = level or env.LOG_LEVEL
    filename = filename or env.LOG_FILE
    if filename is not None:
        logging.basicConfig(level=level, format=format, filename=filename)
    else:
        # stdout carries the decoded report
        logging.basicConfig(level=level, format=format, stream=sys.stderr)
