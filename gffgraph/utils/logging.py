"""
Logging utilities for gffgraph.
"""

import sys
import logging

DETAILED_FORMAT = '%(asctime)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s'
VERBOSE_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'
PLAIN_FORMAT = '%(message)s'


def setup_logging(debug=False, log_file=None, verbose=False, stream=None):
    """
    Configure the root logger.

    Parse warnings go to stderr by default so they do not mix with tree output
    written to stdout. A log file, if given, always gets the detailed format.
    """
    if debug:
        log_level = logging.DEBUG
        log_format = DETAILED_FORMAT
    elif verbose:
        log_level = logging.INFO
        log_format = VERBOSE_FORMAT
    else:
        log_level = logging.WARNING
        log_format = PLAIN_FORMAT

    logger = logging.getLogger()
    logger.setLevel(log_level)

    # Clear any existing handlers
    logger.handlers = []

    console_handler = logging.StreamHandler(stream or sys.stderr)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(logging.Formatter(log_format))
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(log_level)
        file_handler.setFormatter(logging.Formatter(DETAILED_FORMAT))
        logger.addHandler(file_handler)

    return logger
