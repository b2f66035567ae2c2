"""
Logging for the labsim command line.

Sessions report environment/model changes and accepted or rejected readings
under the 'labsim' logger; the estimators themselves never log.
"""
import logging
import sys

LOG_FORMAT = '%(asctime)s %(levelname)-7s %(name)s: %(message)s'
DATE_FORMAT = '%H:%M:%S'


def level_for_verbosity(verbosity):
    """Map the number of -v flags to a level: WARNING, INFO, then DEBUG."""
    if verbosity <= 0:
        return logging.WARNING
    if verbosity == 1:
        return logging.INFO
    return logging.DEBUG


def setup_logging(level=logging.WARNING, log_file=None, stream=None):
    """
    Route 'labsim' records to `stream` (stderr by default) and optionally a file.

    Calling it again replaces the handlers installed by the previous call.
    """
    logger = logging.getLogger('labsim')
    logger.setLevel(level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handlers = [logging.StreamHandler(stream if stream is not None else sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger
