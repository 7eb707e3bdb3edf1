'''
Utility classes and functions for logging.
'''

import logging
import sys

FORMAT = '%(asctime)s\t[%(name)s] %(levelname)s:\t%(message)s'

class LevelFilter(logging.Filter):
    '''
    Python logging filter to replicate `logging.Logger.setLevel()` functionality
    at the `logging.Handler` level.

    This is relevant because setting levels for loggers prevents
    filtered messages from reaching any handlers. Thus, all handlers
    are bound by the same level filters. Doing the filtering at the
    handler level allows each handler to have a separate level filtering
    scheme.
    '''

    def __init__(self, *args, **kwargs):
        super(LevelFilter, self).__init__(*args, **kwargs)
        self._rules = []

    def filter(self, record):
        '''
        Implement Python `logging.Filter` interface.
        '''
        for (namespace, level) in self._rules:
            if record.name.startswith(namespace):
                return record.levelno >= level

        return False

    def add(self, namespace, level):
        '''
        Add a new module namespace level filter.
        '''
        self.remove(namespace)
        self._rules.append((namespace, level))
        # keep the rules in reverse sorted order so the most specific
        # namespace is checked first
        self._rules.sort(reverse=True)

    def remove(self, namespace):
        '''
        Remove a module namespace level filter.
        '''
        self._rules = [x for x in self._rules if x[0] != namespace]

def setup_logging(verbosity=0, stream=None):
    '''
    Send log records to `stream` (standard error by default).

    Records from `mds` pass at `WARNING`, `INFO`, or `DEBUG` for a
    `verbosity` of 0, 1, or 2 and more. Records from everything else,
    Tornado included, pass at `WARNING`.

    Returns the installed handler.
    '''

    level = [logging.WARNING, logging.INFO, logging.DEBUG][min(verbosity, 2)]

    level_filter = LevelFilter()
    level_filter.add('', logging.WARNING)
    level_filter.add('mds', level)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(FORMAT))
    handler.addFilter(level_filter)

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    root.addHandler(handler)

    return handler
