import logging
import sys

stdout_handler = logging.StreamHandler(sys.stdout)
handlers = [stdout_handler]

logging.basicConfig(handlers=handlers)

_levels = {
    'debug': logging.DEBUG,
    'info': logging.INFO,
    'warning': logging.WARNING,
    'error': logging.ERROR,
    'critical': logging.CRITICAL
}


def makeLogger(name, level):
    '''
    Returns the named logger set to the given level name.
    Unknown level names leave the logger at NOTSET.
    '''
    logger = logging.getLogger(name)
    logger.setLevel(_levels.get(level, logging.NOTSET))
    return logger


def resetLevels(levels, prefix='MLA.'):
    '''
    Applies the level names in levels to loggers which already exist. A logger
    named prefix + '...' + '.' + key takes the level levels[key].
    '''
    for name in list(logging.root.manager.loggerDict.keys()):
        key = name.split('.')[-1]
        if name.startswith(prefix) and key in levels:
            makeLogger(name, levels[key])
