"""Check the age of one or more files

See fileage.rst.
"""
import glob
import logging
import math
import os
import sys
import time

import zc.nagiosplugins.nagiosperf
import zc.nagiosplugins.plugin
import zc.nagiosplugins.threshold
from zc.nagiosplugins.plugin import (
    OK, WARN, CRITICAL, UNKNOWN, CheckExit, CriticalError, Skipped,
    UnknownError)
from zc.nagiosplugins.threshold import OLDER, YOUNGER

logger = logging.getLogger(__name__)

NAME = 'FILE_AGE'

missing_policies = dict(unknown=UNKNOWN, critical=CRITICAL)

messages = {
    (OLDER, CRITICAL): (
        "%(path)s is %(age)s %(unit)s old, which is older than the critical"
        " threshold of %(crit)s %(unit)s. The data in this file may be"
        " stale."),
    (OLDER, WARN): (
        "%(path)s is %(age)s %(unit)s old, which is older than the warn"
        " threshold of %(warn)s %(unit)s. The data in this file may be"
        " stale."),
    (YOUNGER, CRITICAL): (
        "%(path)s is only %(age)s %(unit)s old, which is younger than the"
        " critical threshold of %(crit)s %(unit)s. This file may have been"
        " tampered with."),
    (YOUNGER, WARN): (
        "%(path)s is only %(age)s %(unit)s old, which is younger than the"
        " warn threshold of %(warn)s %(unit)s. This file may have been"
        " tampered with."),
    }

ok_message = (
    "%(path)s is %(age)s %(unit)s old (warn=%(warn)s crit=%(crit)s)")

def round_half_up(value):
    return int(math.floor(value + 0.5))

class FileRecord:
    """The age of one file, and how it compares to the thresholds

    >>> record = FileRecord('app.log', 1000.0, 1000.0 + 36 * 3600 + 1)
    >>> (record.age_seconds, record.age_minutes, record.age_hours,
    ...  record.age_days)
    (129601, 2160, 36, 2)
    >>> record.classification is None
    True

    >>> import zc.nagiosplugins.threshold
    >>> record.evaluate(zc.nagiosplugins.threshold.Thresholds('24h', '48h'))
    1
    >>> record.selected_age, record.unit
    (36, 'hours')
    >>> print(record.message)
    app.log is 36 hours old, which is older than the warn threshold of
    24 hours. The data in this file may be stale.

    Clocks disagree sometimes. Files from the future have no age:

    >>> FileRecord('app.log', 1000.0, 900.0).age_seconds
    0
    """

    unit = selected_age = warn_threshold = crit_threshold = None
    classification = message = None

    def __init__(self, path, mtime, now):
        self.path = path
        seconds = now - mtime
        if seconds < 0:
            logger.warning(
                "%s was modified %d seconds in the future,"
                " treating its age as 0", path, -seconds)
            seconds = 0
        self.age_seconds = seconds = round_half_up(seconds)
        self.age_minutes = round_half_up(seconds / 60)
        self.age_hours = round_half_up(seconds / 3600)
        self.age_days = round_half_up(seconds / 86400)

    def age(self, unit):
        return getattr(self, 'age_' + unit)

    def evaluate(self, thresholds):
        self.unit = thresholds.unit
        self.selected_age = self.age(thresholds.unit)
        self.warn_threshold = thresholds.warn
        self.crit_threshold = thresholds.crit
        self.classification = thresholds.classify(self.selected_age)
        self.message = messages.get(
            (thresholds.mode, self.classification), ok_message) % dict(
                path=self.path, age=self.selected_age, unit=self.unit,
                warn=self.warn_threshold, crit=self.crit_threshold)
        logger.debug("%s: %s", zc.nagiosplugins.plugin.status_names[
            self.classification], self.message)
        return self.classification

    def perfdata(self):
        return zc.nagiosplugins.nagiosperf.format_perfdata(
            'file_age_' + self.unit, self.selected_age,
            self.warn_threshold, self.crit_threshold, 0)

class RunResult:
    """Combine evaluated files into one status

    Without any evaluated files there's nothing to go on:

    >>> result = RunResult([])
    >>> result.status, result.message, result.perfdata
    (3, 'no file age could be evaluated (0 files)', '')
    """

    def __init__(self, records, mode=OLDER):
        self.records = records
        self.mode = mode
        self.count_ok = self.count_warn = self.count_critical = 0
        for record in records:
            if record.classification == CRITICAL:
                self.count_critical += 1
            elif record.classification == WARN:
                self.count_warn += 1
            elif record.classification == OK:
                self.count_ok += 1

        if self.count_critical:
            self.status = CRITICAL
        elif self.count_warn:
            self.status = WARN
        elif self.count_ok:
            self.status = OK
        else:
            self.status = UNKNOWN
        logger.debug("%s ok, %s warn, %s critical", self.count_ok,
                     self.count_warn, self.count_critical)

    @property
    def message(self):
        if self.status == UNKNOWN:
            return "no file age could be evaluated (%d files)" % len(
                self.records)
        if len(self.records) == 1:
            return self.records[0].message

        names = ', '.join(record.path for record in self.records
                          if record.classification == self.status)
        if self.status == OK:
            return "all %d files are within thresholds: %s" % (
                len(self.records), names)

        record = self.records[0]
        if self.status == CRITICAL:
            level, threshold = 'critical', record.crit_threshold
        else:
            level, threshold = 'warn', record.warn_threshold
        return "%d of %d files are %s than the %s threshold of %s %s: %s" % (
            len([r for r in self.records
                 if r.classification == self.status]),
            len(self.records), self.mode, level, threshold, record.unit,
            names)

    @property
    def perfdata(self):
        if len(self.records) == 1 and self.status != UNKNOWN:
            return self.records[0].perfdata()
        return ''

def resolve(pattern):
    paths = sorted(glob.glob(pattern))
    logger.debug("%s matched %d files: %s", pattern, len(paths), paths)
    return paths

def gate(pattern, paths, ignore=False, missing=UNKNOWN):
    if not paths:
        if missing == CRITICAL:
            raise CriticalError("could not find file %s" % pattern)
        if ignore:
            raise Skipped(
                "skipping file age check, specified filename %s"
                " does not exist" % pattern)
        raise UnknownError("could not find file %s" % pattern)

    for path in paths:
        if not (os.access(path, os.R_OK) or os.access(path, os.X_OK)):
            raise UnknownError(
                "%s is not readable or executable by the current user"
                % path)
    return paths

def sample(paths, now=None):
    if now is None:
        now = time.time()
    records = []
    for path in paths:
        try:
            mtime = os.stat(path).st_mtime
        except OSError as v:
            raise UnknownError(
                "could not get the modification time of %s: %s"
                % (path, v.strerror))
        logger.debug("%s last modified %s", path, time.ctime(mtime))
        records.append(FileRecord(path, mtime, now))
    return records

def evaluate(records, thresholds):
    for record in records:
        record.evaluate(thresholds)
    return RunResult(records, thresholds.mode)

def check(pattern, warn='86400', crit='172800', mode=OLDER, ignore=False,
          missing=UNKNOWN, now=None):
    """Check the files matching a pattern, returning a RunResult
    """
    thresholds = zc.nagiosplugins.threshold.Thresholds(warn, crit, mode)
    paths = gate(pattern, resolve(pattern), ignore, missing)
    return evaluate(sample(paths, now), thresholds)

def main(args=None):
    if args is None:
        args = sys.argv[1:]

    parser = zc.nagiosplugins.plugin.ArgumentParser(
        NAME, prog='check_file_age',
        description='Alert when files are too old or too young.')
    parser.add_argument(
        '--file', '-f', required=True,
        help='file to check, may be a wildcard pattern')
    parser.add_argument(
        '--warn', '-w', default='86400',
        help='warn threshold, with an optional s/m/h/d unit (default seconds)'
             ' (default: %(default)s)')
    parser.add_argument(
        '--crit', '-c', default='172800',
        help='critical threshold, with an optional s/m/h/d unit'
             ' (default: %(default)s)')
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        '--older', dest='mode', action='store_const', const=OLDER,
        help='alert when files are older than the thresholds (default)')
    mode.add_argument(
        '--younger', dest='mode', action='store_const', const=YOUNGER,
        help='alert when files are younger than the thresholds')
    parser.set_defaults(mode=OLDER)
    parser.add_argument(
        '--ignore', action='store_true',
        help='report OK when no file matches')
    parser.add_argument(
        '--missing', choices=sorted(missing_policies), default='unknown',
        help='status when no file matches, critical ignores --ignore'
             ' (default: %(default)s)')

    args = parser.parse_args(args)

    try:
        zc.nagiosplugins.plugin.configure_logging(args.logging, args.verbose)
        result = check(args.file, args.warn, args.crit, args.mode,
                       args.ignore, missing_policies[args.missing])
    except CheckExit as v:
        logger.debug("check stopped: %s", v)
        return zc.nagiosplugins.plugin.report(NAME, v.status, str(v))

    return zc.nagiosplugins.plugin.report(
        NAME, result.status, result.message, result.perfdata)

if __name__ == '__main__':
    sys.exit(main())
