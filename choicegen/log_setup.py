import os
import sys
import logging

from .lazy_handler import LazyRotatingFileHandler

LOG_FORMAT = '%(asctime)s %(name)s %(levelname)s: %(message)s'


def setup_logger(prefix, name=None, level=logging.WARNING, to_file=False):
    '''
    Attach a stderr handler (and optionally a per-process rotating file) to
    the named logger. Returns the logger.
    '''
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # calling again reconfigures rather than stacking handlers
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT)

    if to_file:
        log_file = f"log_{os.getpid()}.log"
        handler = LazyRotatingFileHandler(tmpdir_prefix=prefix + '.', basename=log_file,
                                          maxBytes=10 * (1024 ** 2), backupCount=3)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setFormatter(formatter)
    logger.addHandler(stderr_handler)
    # records stop here, so a configured root logger does not print them twice
    logger.propagate = False

    return logger
