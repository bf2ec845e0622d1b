"""Conventions shared by the plugins

Status codes are fixed by the monitoring server:

    >>> OK, WARN, CRITICAL, UNKNOWN
    (0, 1, 2, 3)

A plugin prints one line, with performance data only when there is some:

    >>> print(status_line('FILE_AGE', OK, 'all good', 'age=3;5;9;0;'))
    FILE_AGE OK - all good | age=3;5;9;0;
    >>> print(status_line('FILE_AGE', WARN, 'hm'))
    FILE_AGE WARN - hm

Stages stop a check by raising an exception carrying the status to
report:

    >>> try:
    ...     raise UnknownError('could not find file nope')
    ... except CheckExit as e:
    ...     print(e.status, e)
    3 could not find file nope
    >>> Skipped('nothing to do').status
    0

Handlers are loaded from ``module:name`` strings:

    >>> load_handler('zc.nagiosplugins.stub:OutputMailer', {})
    <zc.nagiosplugins.stub.OutputMailer object at ...>
"""
import argparse
import logging
import sys

OK = 0
WARN = 1
CRITICAL = 2
UNKNOWN = 3

status_names = {
    OK: 'OK',
    WARN: 'WARN',
    CRITICAL: 'CRITICAL',
    UNKNOWN: 'UNKNOWN',
    }

class CheckExit(Exception):
    "End a check early, reporting the exception text with ``status``"

    status = UNKNOWN

class UnknownError(CheckExit):
    status = UNKNOWN

class CriticalError(CheckExit):
    status = CRITICAL

class Skipped(CheckExit):
    status = OK

def status_line(name, status, message, perfdata=''):
    line = '%s %s - %s' % (name, status_names[status], message)
    if perfdata:
        line += ' | ' + perfdata
    return line

def report(name, status, message, perfdata=''):
    print(status_line(name, status, message, perfdata))
    return status

class ArgumentParser(argparse.ArgumentParser):
    """Argument parser that exits UNKNOWN

    Usage errors are also reported as a plugin status line so the
    monitoring server shows something useful.
    """

    def __init__(self, check_name, **kw):
        super().__init__(**kw)
        self.check_name = check_name
        self.add_argument(
            '--verbose', '-v', action='store_true',
            help='write a diagnostic trace to standard error')
        self.add_argument(
            '--logging', default='WARNING',
            help='log level, or a ZConfig <logger> definition')

    def error(self, message):
        self.print_usage(sys.stderr)
        print(status_line(self.check_name, UNKNOWN, message))
        self.exit()

    def exit(self, status=0, message=None):
        if message:
            self._print_message(message, sys.stderr)
        sys.exit(UNKNOWN)

def configure_logging(config='WARNING', verbose=False):
    if verbose:
        config = 'DEBUG'
    if '<logger>' in config:
        import ZConfig
        try:
            ZConfig.configureLoggers(config)
        except ZConfig.ConfigurationError as v:
            raise UnknownError("invalid logging configuration: %s" % v)
    else:
        if not isinstance(logging.getLevelName(config.upper()), int):
            raise UnknownError("unknown log level %s" % config)
        logging.basicConfig(
            level=config.upper(),
            stream=sys.stderr,
            format='%(levelname)s %(name)s %(message)s',
            )

def load_handler(dotted_name, config):
    mod, name = dotted_name.split(':')
    mod = __import__(mod, {}, {}, [name])
    return getattr(mod, name)(config)
