'''
General Logging utilities. Please use this logging facility throughout plcconn packages.
All plcconn modules log to one package logger named after constants.NAME, whose level
follows constants.VERBOSITY unless the program runs in debug mode.
@author: Thomas Wanderer
'''

# Imports
import logging
from typing import Optional

# plcconn Imports
from plcconn.defaults import constants


# Levels
DEBUG = logging.DEBUG
INFO = logging.INFO
WARNING = logging.WARNING
ERROR = logging.ERROR
CRITICAL = logging.CRITICAL

# Logger class (For type hints)
Logger = logging.Logger

# Colored level names
COLORS = {
    INFO: '\033[1;32m{}\033[1;0m    ',
    WARNING: '\033[1;33m{}\033[1;0m ',
    ERROR: '\033[1;31m{}\033[1;0m   ',
    CRITICAL: '\033[1;41m{}\033[1;0m'
    }
for level, color in COLORS.items():
    if not logging.getLevelName(level).startswith('\033'):
        logging.addLevelName(level, color.format(logging.getLevelName(level)))

# Formats
FORMAT_DEFAULT = '%(asctime)s %(levelname)-8s %(message)s'
FORMAT_DATE = '%d.%m.%Y %H:%M:%S'
FORMAT_DEBUG = '%(asctime)s %(levelname)-8s %(message)s [%(module)s.%(funcName)s():#%(lineno)s]'


def getLevelName(level: int) -> str:
    '''
    Return the log-level name without color codes
    '''
    name = logging.getLevelName(level)
    return name.split('\033[1;0m')[0].split('m')[-1] if name.startswith('\033') else name


def getVerbosityLevel(verbosity: int) -> int:
    '''
    Translates a verbosity between 1 (quiet) and 5 (chatty) into a log level
    '''
    verbosity = min(max(int(verbosity), 1), 5)
    return (6 - verbosity) * 10


def getFormatter(level: int, fmt: Optional[str]=None, datefmt: Optional[str]=None) -> logging.Formatter:
    # Debug output also names the code location of each record
    return logging.Formatter(fmt or (FORMAT_DEBUG if level == DEBUG else FORMAT_DEFAULT), datefmt or FORMAT_DATE)


def setFormat(name: Optional[str]=None, fmt: Optional[str]=None, datefmt: Optional[str]=None) -> None:
    '''
    Set a new logger format on all logger handlers
    '''
    logger = getLogger(name)
    formatter = getFormatter(logger.level, fmt, datefmt)
    for handler in logger.handlers:
        handler.setFormatter(formatter)
    logger.debug(f'Updated logger "{logger.name}" format')


def getLogger(name: Optional[str]=None, level: Optional[int]=None, handler: Optional[logging.Handler]=None) -> Logger:
    '''
    Returns the plcconn logger (or the named one) and sets it up on first use.
    A new logger gets a stream handler (or the provided one) and starts with the
    provided level or the one derived from constants.VERBOSITY. A level passed for
    an existing logger replaces its current level.
    In debug mode every logger logs at DEBUG level, whatever level is provided.
    '''
    if constants.MODE == 'debug':
        level = DEBUG
    elif level:
        level = int(level)

    logger = logging.getLogger(str(name or constants.NAME))
    if not logger.handlers:
        logger.setLevel(level or getVerbosityLevel(constants.VERBOSITY))
        handler = handler or logging.StreamHandler()
        handler.setFormatter(getFormatter(logger.level))
        logger.addHandler(handler)
        logger.debug(f'Setup logger "{logger.name}" with log level "{getLevelName(logger.level)}"')
    elif level and logger.level != level:
        logger.setLevel(level)
        for h in logger.handlers:
            h.setFormatter(getFormatter(level))
        logger.debug(f'Changed log level of logger "{logger.name}" to "{getLevelName(level)}"')
    return logger
